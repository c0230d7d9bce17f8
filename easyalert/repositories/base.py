"""Storage-independent repository contracts for users and alerts."""

import enum
from abc import ABC, abstractmethod
from typing import Any

from easyalert.models.alert import Alert
from easyalert.models.user import User


class UserLookup(enum.Enum):
    """The fields a single user can be looked up by."""
    ID = "id"
    EMAIL = "email"
    TOKEN = "token"


class AlertLookup(enum.Enum):
    """The fields alerts can be filtered by."""
    ID = "id"
    USER_ID = "user_id"


class UserRepository(ABC):
    """CRUD operations for users."""

    @abstractmethod
    async def find_user(self, lookup: UserLookup, value: Any) -> User:
        """
        Fetch the one user whose ``lookup`` field equals ``value``.

        Raises:
            RecordNotFound: no user matches.
        """
        pass

    @abstractmethod
    async def find_users(self) -> list[User]:
        """Fetch all users, ordered by id."""
        pass

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """
        Persist a new user and return it with id and timestamps filled.

        Raises:
            ConflictError: the email is already taken.
        """
        pass

    @abstractmethod
    async def update_user(self, user: User) -> User:
        """
        Write email, password digest, token and admin flag of ``user``.

        Returns the user with ``updated_at`` refreshed.

        Raises:
            RecordNotFound: no user has ``user.id``.
            ConflictError: the new email belongs to another user.
        """
        pass

    @abstractmethod
    async def delete_user(self, user: User) -> None:
        """Delete the user and, by cascade, its alerts. Missing users are ignored."""
        pass


class AlertRepository(ABC):
    """CRUD operations for alerts."""

    @abstractmethod
    async def find_alert(self, lookup: AlertLookup, value: Any) -> Alert:
        """
        Fetch the first alert whose ``lookup`` field equals ``value``.

        Raises:
            RecordNotFound: no alert matches.
        """
        pass

    @abstractmethod
    async def find_alerts(
        self, lookup: AlertLookup | None = None, value: Any = None
    ) -> list[Alert]:
        """Fetch alerts in insertion order, all of them when ``lookup`` is None."""
        pass

    @abstractmethod
    async def create_alert(self, alert: Alert) -> Alert:
        """Persist a new alert and return it with id and timestamps filled."""
        pass

    @abstractmethod
    async def update_alert(self, alert: Alert) -> Alert:
        """
        Write subject, status and sent_at of ``alert``.

        Raises:
            RecordNotFound: no alert has ``alert.id``.
        """
        pass

    @abstractmethod
    async def delete_alert(self, alert: Alert) -> None:
        """Delete the alert. Missing alerts are ignored."""
        pass
