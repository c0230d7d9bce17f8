"""User and alert persistence."""

from easyalert.repositories.base import (
    AlertLookup,
    AlertRepository,
    UserLookup,
    UserRepository,
)
from easyalert.repositories.alerts import SqlAlertRepository
from easyalert.repositories.users import SqlUserRepository

__all__ = [
    "AlertLookup",
    "AlertRepository",
    "UserLookup",
    "UserRepository",
    "SqlAlertRepository",
    "SqlUserRepository",
]
