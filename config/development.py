import os

from config import env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendease"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# Timetable policy
MAX_PERIOD_MINUTES = int(os.getenv("MAX_PERIOD_MINUTES", "180"))
# same_day | other_days | all_days
INSTRUCTOR_SCOPE = os.getenv("INSTRUCTOR_SCOPE", "same_day")
ROOM_SCOPE = os.getenv("ROOM_SCOPE", "same_day")
CROSS_CLASS_CHECKS = env_flag("CROSS_CLASS_CHECKS", "1")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Optional: also seed demo timetables on startup
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
