"""Data models and schemas."""

from app.models.hero import Hero

__all__ = ["Hero"]
