from __future__ import annotations

import numpy as np
import pytest

from retrocam.core.filters.artifacts import (
    add_grain,
    add_light_leak,
    add_scan_noise,
    add_scratches,
    add_vignette,
)
from retrocam.errors import InvalidParameter


def test_grain_stays_within_amplitude_envelope(rng, make_image) -> None:
    image = make_image(120, 80, (128, 128, 128, 200))

    add_grain(image, 10, rng=rng)

    delta = image[:, :, :3].astype(np.int16) - 128
    half_amplitude = 10 / 100 * 255 / 2
    assert np.abs(delta).max() <= np.ceil(half_amplitude)
    assert abs(float(delta.mean())) < 1.0
    # Noise is drawn independently for every colour channel.
    assert (image[:, :, 0] != image[:, :, 1]).any()
    assert (image[:, :, 3] == 255).all()


def test_grain_strength_follows_intensity(make_image) -> None:
    weak = make_image(100, 100, (128, 128, 128, 255))
    strong = weak.copy()

    add_grain(weak, 2, rng=7)
    add_grain(strong, 20, rng=7)

    assert weak.astype(np.float32).std() < strong.astype(np.float32).std()


def test_grain_is_reproducible_with_a_seed(make_image) -> None:
    first = make_image(30, 30, (90, 120, 150, 255))
    second = first.copy()

    add_grain(first, 15, rng=42)
    add_grain(second, 15, rng=42)

    np.testing.assert_array_equal(first, second)


@pytest.mark.parametrize("intensity", [0, 21])
def test_grain_rejects_out_of_range_intensity(intensity, make_image) -> None:
    with pytest.raises(InvalidParameter):
        add_grain(make_image(4, 4), intensity)


def test_vignette_darkens_towards_the_edges(make_image) -> None:
    image = make_image(101, 81, (200, 200, 200, 255))

    add_vignette(image)

    row = image[40, 50:, 0].astype(np.int16)
    assert image[40, 50, 0] >= 190
    assert (np.diff(row) <= 0).all()
    assert image[0, 0, 0] == 0
    assert image[80, 100, 0] == 0


def test_light_leak_warms_the_chosen_corner(make_image) -> None:
    image = make_image(60, 40, (0, 0, 0, 255))

    add_light_leak(image, corner=0)

    np.testing.assert_array_equal(image[0, 0, :3], [100, 50, 30])
    assert not image[39, 59, :3].any()
    lit = image[:, :, 0] > 0
    assert (image[lit, 0] >= image[lit, 1]).all()
    assert (image[lit, 1] >= image[lit, 2]).all()


def test_light_leak_picks_one_corner_at_random(rng, make_image) -> None:
    image = make_image(50, 50, (0, 0, 0, 255))

    add_light_leak(image, rng=rng)

    corners = [image[0, 0, 0], image[0, 49, 0], image[49, 0, 0], image[49, 49, 0]]
    assert sum(1 for value in corners if value > 0) == 1


def test_light_leak_rejects_unknown_corner(make_image) -> None:
    with pytest.raises(InvalidParameter):
        add_light_leak(make_image(4, 4), corner=4)


def test_scan_noise_only_brightens_a_few_rows(rng, make_image) -> None:
    base = make_image(64, 200, (40, 40, 40, 255))
    image = base.copy()

    add_scan_noise(image, rng=rng)

    delta = image[:, :, :3].astype(np.int16) - base[:, :, :3]
    assert delta.min() >= 0
    # Overlapping bands can add noise twice.
    assert delta.max() <= 2 * 49
    touched_rows = np.nonzero(delta.any(axis=(1, 2)))[0]
    assert 1 <= len(touched_rows) <= 10 * 3


def test_scratches_are_white_vertical_lines(rng, make_image) -> None:
    base = make_image(200, 50, (20, 30, 40, 255))
    image = base.copy()

    add_scratches(image, rng=rng)

    changed = (image != base).any(axis=2)
    assert (image[changed] == 255).all()
    columns = np.nonzero(changed.any(axis=0))[0]
    assert 1 <= len(columns) <= 5 * 2
    # Roughly half of each scratched column turns white.
    ratio = changed[:, columns].mean()
    assert 0.3 < ratio < 0.7
