"""Central logging configuration for the frame set tools."""

from __future__ import annotations

import logging
import logging.config
import os
from typing import Optional


_CONFIGURED = False

# Loggers under this name report grouping and scanning progress.
PACKAGE_LOGGER = "framesets"


def configure_logging(default_level: Optional[str] = None) -> None:
    """Send log records to stderr so they never mix with dump/scan output on stdout.

    The ``framesets`` loggers follow ``FRAMESETS_LOG_LEVEL`` (falling back to
    ``LOG_LEVEL``); everything else, pydicom included, only reports problems.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = (
        default_level or os.getenv("FRAMESETS_LOG_LEVEL") or os.getenv("LOG_LEVEL", "WARNING")
    ).upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(levelname)-7s %(name)s: %(message)s",
                },
                "timestamped": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "timestamped" if level_name == "DEBUG" else "console",
                    "stream": "ext://sys.stderr",
                }
            },
            "root": {
                "level": "WARNING",
                "handlers": ["stderr"],
            },
            "loggers": {
                PACKAGE_LOGGER: {
                    "level": level_name,
                },
                "pydicom": {
                    "level": "ERROR",
                    "handlers": ["stderr"],
                    "propagate": False,
                },
            },
        }
    )

    _CONFIGURED = True


def set_log_level(level_name: str) -> None:
    """Change the ``framesets`` log level after configuration, e.g. for ``--verbose``."""

    logging.getLogger(PACKAGE_LOGGER).setLevel(level_name.upper())
