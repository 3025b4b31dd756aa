import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = Config.db_config()
DATABASE_URL = Config.DATABASE_URL

EMAIL_DOMAIN = Config.EMAIL_DOMAIN
STRICT_COUNTERS = Config.STRICT_COUNTERS
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
