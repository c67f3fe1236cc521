import os

from config import env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "attendease"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendease"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

MAX_PERIOD_MINUTES = int(os.getenv("MAX_PERIOD_MINUTES", "180"))
INSTRUCTOR_SCOPE = os.getenv("INSTRUCTOR_SCOPE", "same_day")
ROOM_SCOPE = os.getenv("ROOM_SCOPE", "same_day")
CROSS_CLASS_CHECKS = env_flag("CROSS_CLASS_CHECKS", "1")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
