"""
ProductHub Backend — Process Entrypoint
=========================================

What:  `python -m app` (or the `producthub` console script) starts the API.
How:   Checks configuration first and exits with status 1 when MONGO_URI is
       missing, then hands the app to uvicorn on HOST:PORT (default 0.0.0.0:5000).
"""

import logging
import sys

import uvicorn

from app.config import settings
from app.exceptions import ConfigurationError

logger = logging.getLogger("producthub")


def main() -> int:
    try:
        settings.validate_required()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR, format="%(levelname)s %(name)s: %(message)s")
        logger.error("%s", e.message)
        return 1

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
