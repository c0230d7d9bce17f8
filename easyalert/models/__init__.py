"""Database models."""

from easyalert.models.user import User
from easyalert.models.alert import Alert, AlertStatus

__all__ = [
    "User",
    "Alert",
    "AlertStatus",
]
