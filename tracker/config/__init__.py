# tracker/config/__init__.py
from __future__ import annotations

from .settings import Settings

# Load once at import time (fail-fast on malformed env)
settings = Settings.load()

__all__ = ["Settings", "settings"]
