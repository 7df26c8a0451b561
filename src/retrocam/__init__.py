"""Background blur and retro film filters for captured photographs."""

from __future__ import annotations

from .errors import (
    ConfigError,
    InvalidDimensions,
    InvalidFilterId,
    InvalidParameter,
    RetroCamError,
)

__all__ = [
    "ConfigError",
    "InvalidDimensions",
    "InvalidFilterId",
    "InvalidParameter",
    "RetroCamError",
]

__version__ = "0.1.0"
