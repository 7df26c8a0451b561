"""Conversion between :class:`QImage` and the RGBA arrays used by the core.

Qt hosts hand the core ``QImage`` instances straight from the camera preview
or the gallery.  The helpers below copy the pixels into a tightly packed
``(height, width, 4)`` array and back, so no core operation ever keeps a view
on memory owned by Qt.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from .pixels import ensure_image, mask_to_image

try:  # pragma: no cover - availability depends on runtime environment
    from PySide6.QtGui import QImage
    _QT_AVAILABLE = True
except ImportError:  # pragma: no cover - allows non-Qt environments to import the module
    QImage = Any  # type: ignore
    _QT_AVAILABLE = False


def _require_qt() -> None:
    if not _QT_AVAILABLE:
        raise RuntimeError("Qt bindings are required to convert QImage buffers")


def _resolve_pixel_buffer(image: QImage) -> tuple[memoryview, object]:
    """Return a 1-D :class:`memoryview` over *image*'s pixels.

    PySide exposes ``QImage.bits()`` as a ready-to-use ``memoryview`` while
    PyQt-style wrappers hand out a ``sip.voidptr`` that needs ``setsize``
    before Python can view it.  The tuple's second element keeps the wrapper
    alive for as long as the view is in use.
    """

    bytes_per_line = image.bytesPerLine()
    height = image.height()
    buffer = image.bits()
    expected_size = bytes_per_line * height

    guard: object = buffer

    if isinstance(buffer, memoryview):
        view = buffer
    else:
        try:
            view = memoryview(buffer)
        except TypeError:
            if hasattr(buffer, "setsize"):
                buffer.setsize(expected_size)
                view = memoryview(buffer)
            else:
                raise RuntimeError("Unsupported QImage.bits() buffer wrapper") from None

    # Normalise to unsigned bytes so per-channel offsets are binding independent.
    try:
        view = view.cast("B")
    except TypeError:
        view = view.cast("B", (view.nbytes,))

    if len(view) < expected_size:
        raise BufferError("QImage pixel buffer is smaller than expected")
    if len(view) > expected_size:
        view = view[:expected_size]

    return view, guard


def array_from_qimage(image: QImage) -> np.ndarray:
    """Return an RGBA copy of *image* suitable for the core operations."""

    _require_qt()
    if image.isNull():
        raise ValueError("Cannot convert a null QImage")

    converted = image.convertToFormat(QImage.Format.Format_RGBA8888)
    width = converted.width()
    height = converted.height()
    bytes_per_line = converted.bytesPerLine()

    view, _guard = _resolve_pixel_buffer(converted)
    surface = np.frombuffer(view, dtype=np.uint8, count=bytes_per_line * height)
    surface = surface.reshape((height, bytes_per_line))
    # Rows may be padded; slicing drops the padding before the copy.
    return surface[:, : width * 4].reshape((height, width, 4)).copy()


def qimage_from_array(pixels: np.ndarray) -> QImage:
    """Return a ``Format_RGBA8888`` :class:`QImage` that owns a copy of *pixels*."""

    _require_qt()
    pixels = ensure_image(pixels)
    height, width = pixels.shape[:2]
    payload = pixels.tobytes()
    wrapped = QImage(payload, width, height, width * 4, QImage.Format.Format_RGBA8888)
    # ``copy`` detaches the image from ``payload``, which is freed on return.
    return wrapped.copy()


def qimage_from_mask(mask: np.ndarray) -> QImage:
    """Return an opaque greyscale :class:`QImage` showing *mask* for overlays."""

    return qimage_from_array(mask_to_image(mask))


__all__ = ["array_from_qimage", "qimage_from_array", "qimage_from_mask"]
