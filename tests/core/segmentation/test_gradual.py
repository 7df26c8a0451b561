from __future__ import annotations

import numpy as np

from retrocam.core.segmentation import GradualMaskGenerator, gradualize


def test_strength_grows_with_distance_from_subject() -> None:
    mask = np.zeros((60, 80), dtype=np.uint8)
    mask[25:35, 30:40] = 255

    strength = gradualize(mask)

    ys, xs = np.mgrid[0:60, 0:80]
    fg_y, fg_x = np.nonzero(mask)
    # Exact Euclidean distance to the nearest subject pixel.
    distance = np.min(
        np.hypot(ys[..., None] - fg_y, xs[..., None] - fg_x), axis=-1
    ).ravel()
    values = strength.ravel().astype(np.int32)
    ordered = values[np.argsort(distance, kind="stable")]

    # Allow one level of rounding between equidistant pixels.
    assert (np.maximum.accumulate(ordered) - ordered <= 1).all()


def test_map_is_normalised_to_byte_range() -> None:
    mask = np.zeros((40, 40), dtype=np.uint8)
    mask[0:5, 0:5] = 255

    strength = GradualMaskGenerator().gradualize(mask)

    assert strength.dtype == np.uint8
    assert (strength[0:5, 0:5] == 0).all()
    assert int(strength.max()) == 255
    assert strength[39, 39] == 255


def test_soft_masks_are_thresholded_at_half() -> None:
    mask = np.full((10, 10), 127, dtype=np.uint8)
    mask[4:6, 4:6] = 128

    strength = gradualize(mask)

    assert (strength[4:6, 4:6] == 0).all()
    assert strength[0, 0] == 255


def test_degenerate_masks() -> None:
    assert (gradualize(np.zeros((8, 8), dtype=np.uint8)) == 255).all()
    assert (gradualize(np.full((8, 8), 255, dtype=np.uint8)) == 0).all()
