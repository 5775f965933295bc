"""Core app configuration and database."""

from artshop.core.config import get_settings, settings
from artshop.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
