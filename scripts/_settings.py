from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.ram_points.ram_points.common.logging import configure_logging
from src.ram_points.ram_points.container import Container, build_container


def load_container() -> tuple[object, Container]:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        database_url=getattr(settings, "DATABASE_URL", None),
        email_domain=getattr(settings, "EMAIL_DOMAIN", "virginia.edu"),
        strict_counters=bool(getattr(settings, "STRICT_COUNTERS", False)),
    )
    return settings, container
