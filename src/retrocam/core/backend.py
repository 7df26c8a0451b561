"""One-time preparation of the numeric backends.

Hosts call :func:`initialise` once at start-up, before the first photo is
processed.  It configures OpenCV's worker pool and compiles the Numba kernels
on a one-pixel image so the first real filter does not pay the JIT cost.
Every operation still works when the call is skipped; it is only slower the
first time.
"""

from __future__ import annotations

import logging
import threading

import cv2
import numba
import numpy as np

from ..utils.logging import get_logger
from .filters.artifacts import add_light_leak, add_vignette
from .filters.color_matrix import ColorMatrix, apply_color_matrix_inplace

_LOGGER = logging.getLogger(__name__)

_LOCK = threading.Lock()
_INITIALISED = False


def initialise(*, num_threads: int | None = None) -> None:
    """Prepare logging, OpenCV and Numba for use.  Repeated calls are no-ops."""

    global _INITIALISED
    with _LOCK:
        if _INITIALISED:
            return

        get_logger()

        if num_threads is not None:
            cv2.setNumThreads(int(num_threads))

        probe = np.full((1, 1, 4), 128, dtype=np.uint8)
        apply_color_matrix_inplace(probe, ColorMatrix.saturation(0.5))
        add_vignette(probe)
        add_light_leak(probe, corner=0)

        _LOGGER.info(
            "Initialised backends (OpenCV %s, %d thread(s); Numba %s)",
            cv2.__version__,
            cv2.getNumThreads(),
            numba.__version__,
        )
        _INITIALISED = True


def is_initialised() -> bool:
    return _INITIALISED


__all__ = ["initialise", "is_initialised"]
