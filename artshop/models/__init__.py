"""SQLAlchemy ORM models."""

from artshop.models.base import Base
from artshop.models.user import User

__all__ = ["Base", "User"]
