"""easyalert - FastAPI Application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from easyalert.api.errors import register_exception_handlers
from easyalert.api.responses import PrettyJSONResponse
from easyalert.api.routes import alerts, auth, home, users
from easyalert.config import Settings, get_settings
from easyalert.context import AppContext, build_context

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def create_app(context: AppContext | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the application.

    With a ``context`` the given repositories are used as they are; without
    one, the lifespan connects to ``settings.database_url`` on start-up and
    disposes of the engine on shutdown.
    """
    if settings is None:
        settings = context.settings if context is not None else get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if getattr(app.state, "context", None) is None:
            owned = await build_context(settings)
            app.state.context = owned
        logger.info("%s started", settings.app_name)
        try:
            yield
        finally:
            if owned is not None:
                await owned.close()
                app.state.context = None
            logger.info("%s stopped", settings.app_name)

    app = FastAPI(
        lifespan=lifespan,
        title=settings.app_name,
        description="Alerting made easy",
        version="1.0.0",
        default_response_class=PrettyJSONResponse,
    )
    app.state.context = context

    register_exception_handlers(app)

    # Include routers
    prefix = settings.api_prefix
    app.include_router(home.router, prefix=prefix, tags=["Home"])
    app.include_router(users.router, prefix=f"{prefix}/users", tags=["Users"])
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Authentication"])
    app.include_router(alerts.router, prefix=f"{prefix}/alerts", tags=["Alerts"])

    return app
