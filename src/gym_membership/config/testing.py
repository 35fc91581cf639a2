import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "password"),
    "database": os.getenv("DB_NAME", "gym_tracker_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
PORT = 3000

AUTO_INIT_DB = False
REQUIRE_ACTIVE_SUBSCRIPTION = False
