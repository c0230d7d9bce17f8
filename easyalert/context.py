"""Everything a request handler needs, assembled once at start-up."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from easyalert.config import Settings
from easyalert.db.database import create_engine, create_session_factory, init_db
from easyalert.repositories import (
    AlertRepository,
    SqlAlertRepository,
    SqlUserRepository,
    UserRepository,
)


@dataclass
class AppContext:
    settings: Settings
    users: UserRepository
    alerts: AlertRepository
    engine: AsyncEngine | None = None

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


async def build_context(settings: Settings) -> AppContext:
    """Connect to the configured database and wire the SQL repositories."""
    engine = create_engine(settings.database_url, echo=settings.debug)
    if settings.create_tables:
        await init_db(engine)

    sessions = create_session_factory(engine)
    return AppContext(
        settings=settings,
        users=SqlUserRepository(sessions),
        alerts=SqlAlertRepository(sessions),
        engine=engine,
    )
