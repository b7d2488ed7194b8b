"""
Logging configuration for the Blog API.

``build_logging_config`` turns ``Settings`` into a ``logging.config``
dictionary: one console handler on the root logger, an optional file
handler when ``LOG_FILE`` is set, and the uvicorn loggers routed through
the same handlers.  Uvicorn's own access log is turned down to WARNING
because the request middleware in ``main`` already logs one line per
request with its duration.

``configure_logging`` applies that dictionary once per process.
"""

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict

from .config import Settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def _level_name(level: str) -> str:
    name = level.upper()
    return name if isinstance(logging.getLevelName(name), int) else "INFO"


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """Return the ``dictConfig`` schema for ``settings``.

    Unknown level names fall back to ``INFO``.
    """
    level = _level_name(settings.log_level)
    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    }
    if settings.log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "default",
            "filename": str(Path(settings.log_file).resolve()),
            "encoding": "utf-8",
        }
    handler_names = list(handlers)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": handlers,
        "root": {"level": level, "handlers": handler_names},
        "loggers": {
            # Propagate to root instead of uvicorn's default handlers.
            "uvicorn": {"level": level, "handlers": [], "propagate": True},
            "uvicorn.error": {"level": level, "handlers": [], "propagate": True},
            "uvicorn.access": {"level": "WARNING", "handlers": [], "propagate": True},
        },
    }


def configure_logging(settings: Settings) -> None:
    """Apply ``build_logging_config(settings)`` unless already done.

    ``create_app`` may run several times in one process (tests build an
    app per test); only the first call installs handlers.
    """
    global _configured
    if _configured:
        return
    logging.config.dictConfig(build_logging_config(settings))
    _configured = True
