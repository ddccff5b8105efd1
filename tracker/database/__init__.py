# tracker/database/__init__.py
from .base import Base
from .session import Database

__all__ = ["Base", "Database"]
