"""Configuration module for Pantry."""

from .options import Options
from .settings import settings

__all__ = ["Options", "settings"]
