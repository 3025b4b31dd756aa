import os

from .config import Config

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = Config.db_config()
DATABASE_URL = Config.DATABASE_URL

EMAIL_DOMAIN = Config.EMAIL_DOMAIN
STRICT_COUNTERS = Config.STRICT_COUNTERS
LOG_LEVEL = Config.LOG_LEVEL

DEBUG = True

# Create missing tables on startup (create_all is idempotent).
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
