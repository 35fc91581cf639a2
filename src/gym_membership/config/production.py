import os

from . import env_flag

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "gym_tracker"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "3000"))

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
REQUIRE_ACTIVE_SUBSCRIPTION = env_flag("REQUIRE_ACTIVE_SUBSCRIPTION", "0")
