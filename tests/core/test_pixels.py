from __future__ import annotations

import numpy as np
import pytest

from retrocam.core.pixels import (
    ensure_image,
    ensure_mask,
    ensure_same_size,
    invert_mask,
    mask_to_image,
    new_mask,
    resample_mask,
)
from retrocam.errors import InvalidDimensions


def test_invert_mask_swaps_regions() -> None:
    mask = np.array([[0, 255], [100, 30]], dtype=np.uint8)

    np.testing.assert_array_equal(invert_mask(mask), [[255, 0], [155, 225]])


def test_rgba_mask_collapses_to_first_channel() -> None:
    rgba = np.zeros((3, 4, 4), dtype=np.uint8)
    rgba[..., 0] = 200
    rgba[..., 3] = 255

    mask = ensure_mask(rgba)

    assert mask.shape == (3, 4)
    assert (mask == 200).all()
    assert mask.flags.c_contiguous


def test_mask_to_image_round_trips_through_ensure_mask() -> None:
    mask = np.arange(12, dtype=np.uint8).reshape(3, 4)

    image = mask_to_image(mask)

    assert image.shape == (3, 4, 4)
    assert (image[..., 3] == 255).all()
    np.testing.assert_array_equal(ensure_mask(image), mask)


def test_resample_mask_is_bilinear() -> None:
    mask = np.zeros((2, 2), dtype=np.uint8)
    mask[:, 1] = 255

    resized = resample_mask(mask, 8, 4)

    assert resized.shape == (4, 8)
    assert resized[0, 0] == 0
    assert resized[0, 7] == 255
    assert 0 < resized[0, 4] < 255


def test_validation_errors() -> None:
    with pytest.raises(InvalidDimensions):
        ensure_image([[0, 0, 0, 0]])
    with pytest.raises(InvalidDimensions):
        ensure_image(np.zeros((0, 5, 4), dtype=np.uint8))
    with pytest.raises(InvalidDimensions):
        ensure_mask(np.zeros((2, 2, 2), dtype=np.uint8))
    with pytest.raises(InvalidDimensions):
        new_mask(3, 0)
    with pytest.raises(InvalidDimensions):
        ensure_same_size(np.zeros((2, 3, 4), dtype=np.uint8), np.zeros((3, 2), dtype=np.uint8))
