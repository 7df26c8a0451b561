"""Logging helpers for retrocam.

Importing the package never touches logging configuration.  The package
handler is installed by :func:`retrocam.core.backend.initialise`, and hosts
that configure the root logger themselves may skip it entirely.
"""

from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "retrocam"

_LOGGER: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Return the package-level logger, installing its handler on first use.

    When the root logger already has handlers the package logger only gets
    its level, so records are not printed twice.
    """

    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger(PACKAGE_LOGGER)
        if not _LOGGER.handlers and not logging.getLogger().handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            handler.setFormatter(formatter)
            _LOGGER.addHandler(handler)
        _LOGGER.setLevel(logging.INFO)
    return _LOGGER
