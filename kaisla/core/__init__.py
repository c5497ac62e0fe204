"""Core app configuration, database, logging and errors."""

from kaisla.core.config import get_settings, settings
from kaisla.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
