from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.attendease.attendease.database.bootstrap import apply_schema, list_tables
from src.attendease.attendease.database.connection import DBConfig
from src.attendease.attendease.logging_config import setup_logging

logger = logging.getLogger("attendease.scripts.init_db")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), log_dir=None)
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    logger.info("OK: Applied schema.sql -> %s (tables=%d)", DBConfig.from_settings(db_config).describe(), len(tables))


if __name__ == "__main__":
    main()
