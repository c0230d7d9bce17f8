"""SQLAlchemy implementation of the alert repository."""

import logging
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from easyalert.db.database import utcnow
from easyalert.errors import PersistenceError, RecordNotFound
from easyalert.models.alert import Alert, AlertStatus
from easyalert.repositories.base import AlertLookup, AlertRepository

logger = logging.getLogger(__name__)

_LOOKUP_COLUMNS = {
    AlertLookup.ID: Alert.id,
    AlertLookup.USER_ID: Alert.user_id,
}


class SqlAlertRepository(AlertRepository):
    """Alerts stored in a relational database."""

    def __init__(self, session_factory: async_sessionmaker):
        self._sessions = session_factory

    async def find_alert(self, lookup: AlertLookup, value: Any) -> Alert:
        query = (
            select(Alert)
            .where(_LOOKUP_COLUMNS[lookup] == value)
            .order_by(Alert.id)
            .limit(1)
        )
        async with self._sessions() as session:
            try:
                result = await session.execute(query)
                alert = result.scalar_one_or_none()
            except SQLAlchemyError as e:
                logger.exception("Could not look up alert by %s", lookup.value)
                raise PersistenceError() from e

        if alert is None:
            raise RecordNotFound()
        return alert

    async def find_alerts(
        self, lookup: AlertLookup | None = None, value: Any = None
    ) -> list[Alert]:
        query = select(Alert)
        if lookup is not None:
            query = query.where(_LOOKUP_COLUMNS[lookup] == value)
        query = query.order_by(Alert.id)

        async with self._sessions() as session:
            try:
                result = await session.execute(query)
            except SQLAlchemyError as e:
                logger.exception("Could not list alerts")
                raise PersistenceError() from e
            return list(result.scalars().all())

    async def create_alert(self, alert: Alert) -> Alert:
        now = utcnow()
        if alert.status is None:
            alert.status = AlertStatus.PENDING
        alert.created_at = now
        alert.updated_at = now

        async with self._sessions() as session:
            session.add(alert)
            try:
                await session.commit()
            except SQLAlchemyError as e:
                logger.exception("Could not create alert for user %s", alert.user_id)
                raise PersistenceError() from e

        return alert

    async def update_alert(self, alert: Alert) -> Alert:
        now = utcnow()
        stmt = (
            update(Alert)
            .where(Alert.id == alert.id)
            .values(
                subject=alert.subject,
                status=alert.status,
                sent_at=alert.sent_at,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )

        async with self._sessions() as session:
            try:
                result = await session.execute(stmt)
                await session.commit()
            except SQLAlchemyError as e:
                logger.exception("Could not update alert %s", alert.id)
                raise PersistenceError() from e

        if result.rowcount == 0:
            raise RecordNotFound()

        alert.updated_at = now
        return alert

    async def delete_alert(self, alert: Alert) -> None:
        async with self._sessions() as session:
            try:
                await session.execute(delete(Alert).where(Alert.id == alert.id))
                await session.commit()
            except SQLAlchemyError as e:
                logger.exception("Could not delete alert %s", alert.id)
                raise PersistenceError() from e
