"""Database helpers: engine/session plus the ORM models."""

from .session import Base, get_engine, get_session
from .models import Group, Video

__all__ = ["Base", "get_engine", "get_session", "Group", "Video"]
