"""Core configuration and shared primitives."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
