import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ram_points_test"),
}
DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")

EMAIL_DOMAIN = "virginia.edu"
STRICT_COUNTERS = False
LOG_LEVEL = "DEBUG"

DEBUG = False
TESTING = True

AUTO_INIT_DB = True
