# Environment-backed configuration for the sqlcraft service.
# Values are read once at import; tests override them with monkeypatch.

from __future__ import annotations
import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from .database import Dialect, dialect_from_driver

load_dotenv()

# ---- Config ----------------------------------------------------------------

DEFAULT_DRIVER_CLASS_NAME = "com.mysql.cj.jdbc.Driver"

ENTITIES_FILE = Path(os.getenv("ENTITIES_FILE", "config/entities.yaml"))
CORS_ALLOW_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "").split(",") if o.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def driver_class_name() -> str:
    return os.getenv("DATASOURCE_DRIVER_CLASS_NAME", DEFAULT_DRIVER_CLASS_NAME)


@lru_cache(maxsize=1)
def active_dialect() -> Dialect:
    """
    Resolve the process-wide dialect from DATASOURCE_DRIVER_CLASS_NAME.
    Resolved on first use and fixed for the life of the process.
    """
    return dialect_from_driver(driver_class_name())


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
