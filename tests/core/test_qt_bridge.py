from __future__ import annotations

import numpy as np
import pytest

QtGui = pytest.importorskip("PySide6.QtGui")

from retrocam.core.qt_bridge import (  # noqa: E402
    array_from_qimage,
    qimage_from_array,
    qimage_from_mask,
)


def test_qimage_round_trip_preserves_pixels(noisy_image) -> None:
    image = qimage_from_array(noisy_image)

    assert image.width() == noisy_image.shape[1]
    assert image.height() == noisy_image.shape[0]
    np.testing.assert_array_equal(array_from_qimage(image), noisy_image)


def test_other_formats_are_converted_to_rgba() -> None:
    # RGB888 rows of three pixels are padded to a 4-byte boundary.
    source = QtGui.QImage(3, 2, QtGui.QImage.Format.Format_RGB888)
    source.fill(QtGui.QColor(10, 20, 30))

    pixels = array_from_qimage(source)

    assert pixels.shape == (2, 3, 4)
    assert (pixels[..., :3] == (10, 20, 30)).all()
    assert (pixels[..., 3] == 255).all()


def test_null_image_is_rejected() -> None:
    with pytest.raises(ValueError):
        array_from_qimage(QtGui.QImage())


def test_mask_preview_is_opaque_grey() -> None:
    mask = np.zeros((5, 6), dtype=np.uint8)
    mask[1:4, 2:5] = 255

    preview = qimage_from_mask(mask)

    assert (preview.width(), preview.height()) == (6, 5)
    pixels = array_from_qimage(preview)
    np.testing.assert_array_equal(pixels[..., 0], mask)
    np.testing.assert_array_equal(pixels[..., 1], mask)
    assert (pixels[..., 3] == 255).all()
    assert preview.pixelColor(3, 2).red() == 255
