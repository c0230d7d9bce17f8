"""SQLAlchemy implementation of the user repository."""

import logging
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from easyalert.db.database import utcnow
from easyalert.errors import ConflictError, PersistenceError, RecordNotFound
from easyalert.models.user import EMAIL_CONSTRAINT, User
from easyalert.repositories.base import UserLookup, UserRepository

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email is already taken."

_LOOKUP_COLUMNS = {
    UserLookup.ID: User.id,
    UserLookup.EMAIL: User.email,
    UserLookup.TOKEN: User.token,
}


def is_unique_violation(error: IntegrityError, constraint: str, column: str) -> bool:
    """Tell whether ``error`` was raised by the given unique constraint.

    PostgreSQL drivers report the constraint name (asyncpg keeps it on the
    exception wrapped by SQLAlchemy's adapter); SQLite only names the column
    in its message, e.g. ``UNIQUE constraint failed: users.email``.
    """
    orig = error.orig
    name = getattr(orig, "constraint_name", None)
    if name is None:
        name = getattr(getattr(orig, "__cause__", None), "constraint_name", None)
    if name:
        return name == constraint

    message = str(orig)
    return constraint in message or column in message


class SqlUserRepository(UserRepository):
    """Users stored in a relational database."""

    def __init__(self, session_factory: async_sessionmaker):
        self._sessions = session_factory

    async def find_user(self, lookup: UserLookup, value: Any) -> User:
        column = _LOOKUP_COLUMNS[lookup]
        async with self._sessions() as session:
            try:
                result = await session.execute(select(User).where(column == value))
                user = result.scalar_one_or_none()
            except SQLAlchemyError as e:
                logger.exception("Could not look up user by %s", lookup.value)
                raise PersistenceError() from e

        if user is None:
            raise RecordNotFound()
        return user

    async def find_users(self) -> list[User]:
        async with self._sessions() as session:
            try:
                result = await session.execute(select(User).order_by(User.id))
            except SQLAlchemyError as e:
                logger.exception("Could not list users")
                raise PersistenceError() from e
            return list(result.scalars().all())

    async def create_user(self, user: User) -> User:
        now = utcnow()
        user.admin = bool(user.admin)
        user.created_at = now
        user.updated_at = now

        async with self._sessions() as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                if is_unique_violation(e, EMAIL_CONSTRAINT, "users.email"):
                    raise ConflictError(EMAIL_TAKEN) from e
                logger.exception("Could not create user")
                raise PersistenceError() from e
            except SQLAlchemyError as e:
                logger.exception("Could not create user")
                raise PersistenceError() from e

        return user

    async def update_user(self, user: User) -> User:
        now = utcnow()
        stmt = (
            update(User)
            .where(User.id == user.id)
            .values(
                email=user.email,
                password_digest=user.password_digest,
                token=user.token,
                admin=bool(user.admin),
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )

        async with self._sessions() as session:
            try:
                result = await session.execute(stmt)
                await session.commit()
            except IntegrityError as e:
                if is_unique_violation(e, EMAIL_CONSTRAINT, "users.email"):
                    raise ConflictError(EMAIL_TAKEN) from e
                logger.exception("Could not update user %s", user.id)
                raise PersistenceError() from e
            except SQLAlchemyError as e:
                logger.exception("Could not update user %s", user.id)
                raise PersistenceError() from e

        if result.rowcount == 0:
            raise RecordNotFound()

        user.updated_at = now
        return user

    async def delete_user(self, user: User) -> None:
        async with self._sessions() as session:
            try:
                await session.execute(delete(User).where(User.id == user.id))
                await session.commit()
            except SQLAlchemyError as e:
                logger.exception("Could not delete user %s", user.id)
                raise PersistenceError() from e
