"""
Logging setup for the API process.

``setup_logging`` is called once by ``create_app`` with the settings the
app is built with.  It installs console (and optional file) handlers on
the root logger, sets the level of this package's loggers from
``LOG_LEVEL`` and keeps uvicorn's per‑request access lines out of the
output unless ``DEBUG`` is on.
"""

import logging

from .config import Settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "upoint_purchase_api"


def setup_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # Root handlers are installed once per process; a second app, or a
    # test runner that captures logs, keeps the existing ones.
    if not logging.getLogger().handlers:
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if settings.log_file:
            handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, handlers=handlers)

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO if settings.debug else logging.WARNING)
