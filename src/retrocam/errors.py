"""Custom exceptions raised by the retrocam core."""

from __future__ import annotations

from typing import Sequence


class RetroCamError(Exception):
    """Base class for all retrocam errors."""


class InvalidDimensions(RetroCamError, ValueError):
    """An image or mask buffer has a shape the core cannot work with."""


class InvalidFilterId(RetroCamError, ValueError):
    """A filter identifier lies outside the catalog."""

    def __init__(self, filter_id: object, valid: Sequence[int]) -> None:
        ids = sorted(valid)
        if not ids:
            expected = "the catalog is empty"
        elif ids == list(range(ids[0], ids[-1] + 1)):
            expected = f"expected {ids[0]}..{ids[-1]}"
        else:
            expected = "expected one of " + ", ".join(str(item) for item in ids)
        super().__init__(f"Unknown filter id {filter_id!r}; {expected}")
        self.filter_id = filter_id
        self.valid = tuple(ids)


class InvalidParameter(RetroCamError, ValueError):
    """A numeric parameter is outside its documented range."""


class ConfigError(RetroCamError):
    """Settings could not be loaded or contain unknown keys."""
