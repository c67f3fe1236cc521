from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendease.attendease.database.bootstrap import apply_seed_sql
from src.attendease.attendease.database.connection import DBConfig
from src.attendease.attendease.logging_config import setup_logging

logger = logging.getLogger("attendease.scripts.seed_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), log_dir=None)
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    logger.info("OK: Seeded demo timetables -> %s", DBConfig.from_settings(db_config).describe())


if __name__ == "__main__":
    main()
