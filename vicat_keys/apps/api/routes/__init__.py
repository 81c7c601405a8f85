"""Router namespace exports for FastAPI include hooks."""

from . import admin, auth, health, public, user

__all__ = ["admin", "auth", "health", "public", "user"]
