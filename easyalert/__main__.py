"""Run the API server: ``python -m easyalert``."""

import uvicorn

from easyalert.config import get_settings
from easyalert.main import configure_logging


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    # On SIGINT/SIGTERM uvicorn stops accepting connections and gives
    # in-flight requests the grace period before cancelling them.
    uvicorn.run(
        "easyalert.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )


if __name__ == "__main__":
    main()
