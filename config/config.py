import os


def _flag(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "ram-points-dev"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "ram_points")

    # Full SQLAlchemy URL; when set it wins over the MySQL settings above.
    DATABASE_URL = os.environ.get("DATABASE_URL") or None

    EMAIL_DOMAIN = os.environ.get("EMAIL_DOMAIN", "virginia.edu")
    STRICT_COUNTERS = _flag("STRICT_COUNTERS", "0")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
