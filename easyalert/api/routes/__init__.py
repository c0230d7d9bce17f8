"""API routes."""

from easyalert.api.routes import alerts, auth, home, users

__all__ = ["alerts", "auth", "home", "users"]
