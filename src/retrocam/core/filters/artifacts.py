"""Procedural film artifacts: grain, vignette, light leak, scan noise, scratches.

Every effect mutates an RGBA buffer in place and writes opaque pixels.  The
caller owns the buffer for the duration of the call.  Random effects take an
``rng`` argument that accepts anything :func:`numpy.random.default_rng`
understands: ``None`` for fresh OS entropy, an integer seed, or an existing
:class:`numpy.random.Generator` to share a stream across several effects.
"""

from __future__ import annotations

import math
from typing import Union

import numpy as np
from numba import jit

from ...errors import InvalidParameter
from ..pixels import clamp_to_uint8, ensure_image

RandomSource = Union[None, int, np.random.Generator]

GRAIN_MIN = 1
GRAIN_MAX = 20

VIGNETTE_RADIUS = 0.7
LIGHT_LEAK_REACH = 0.5
LIGHT_LEAK_THRESHOLD = 0.1
LIGHT_LEAK_GAIN = (100.0, 50.0, 30.0)

SCAN_NOISE_BANDS = 10
SCAN_NOISE_MAX_ROWS = 3
SCAN_NOISE_AMPLITUDE = 50

SCRATCH_COUNT = 5
SCRATCH_MAX_WIDTH = 2
SCRATCH_PROBABILITY = 0.5


def resolve_rng(rng: RandomSource) -> np.random.Generator:
    """Return a :class:`numpy.random.Generator` for *rng*."""

    return np.random.default_rng(rng)


def add_grain(image: np.ndarray, intensity: int, *, rng: RandomSource = None) -> None:
    """Add uniform noise of ``intensity / 100 * 255`` peak-to-peak to R, G and B."""

    image = ensure_image(image)
    if isinstance(intensity, bool) or not GRAIN_MIN <= intensity <= GRAIN_MAX:
        raise InvalidParameter(
            f"grain intensity must be within {GRAIN_MIN}..{GRAIN_MAX}, got {intensity!r}"
        )
    generator = resolve_rng(rng)
    height, width = image.shape[:2]

    amplitude = np.float32(intensity / 100.0 * 255.0)
    noise = (generator.random((height, width, 3), dtype=np.float32) - np.float32(0.5)) * amplitude
    image[:, :, :3] = clamp_to_uint8(image[:, :, :3].astype(np.float32) + noise)
    image[:, :, 3] = 255


def add_vignette(image: np.ndarray) -> None:
    """Darken pixels linearly with their distance from the centre.

    The falloff reaches black at ``0.7 * min(width, height) / 2``.
    """

    image = ensure_image(image)
    height, width = image.shape[:2]
    centre_x = width / 2.0
    centre_y = height / 2.0
    radius = min(centre_x, centre_y) * VIGNETTE_RADIUS
    _vignette_kernel(image, centre_x, centre_y, radius)


def add_light_leak(
    image: np.ndarray, *, rng: RandomSource = None, corner: int | None = None
) -> None:
    """Wash a warm glow in from one corner of the frame.

    *corner* selects the origin (0 top-left, 1 top-right, 2 bottom-left,
    3 bottom-right); by default it is drawn uniformly from *rng*.
    """

    image = ensure_image(image)
    if corner is None:
        corner = int(resolve_rng(rng).integers(4))
    elif corner not in (0, 1, 2, 3):
        raise InvalidParameter(f"corner must be 0..3, got {corner!r}")

    height, width = image.shape[:2]
    corner_x = float(width if corner in (1, 3) else 0)
    corner_y = float(height if corner in (2, 3) else 0)
    reach = math.hypot(width, height) * LIGHT_LEAK_REACH
    gain_r, gain_g, gain_b = LIGHT_LEAK_GAIN
    _light_leak_kernel(
        image, corner_x, corner_y, reach, LIGHT_LEAK_THRESHOLD, gain_r, gain_g, gain_b
    )


def add_scan_noise(
    image: np.ndarray, *, rng: RandomSource = None, bands: int = SCAN_NOISE_BANDS
) -> None:
    """Brighten random thin horizontal bands like a worn video tape."""

    image = ensure_image(image)
    if bands < 0:
        raise InvalidParameter(f"bands must not be negative, got {bands}")
    generator = resolve_rng(rng)
    height, width = image.shape[:2]

    for _ in range(bands):
        top = int(generator.integers(height))
        rows = 1 + int(generator.integers(SCAN_NOISE_MAX_ROWS))
        bottom = min(top + rows, height)
        band = image[top:bottom]
        noise = generator.integers(
            0, SCAN_NOISE_AMPLITUDE, size=(bottom - top, width, 3), dtype=np.int16
        )
        band[:, :, :3] = np.minimum(band[:, :, :3].astype(np.int16) + noise, 255).astype(np.uint8)
        band[:, :, 3] = 255


def add_scratches(
    image: np.ndarray, *, rng: RandomSource = None, count: int = SCRATCH_COUNT
) -> None:
    """Draw broken vertical white scratches across the frame."""

    image = ensure_image(image)
    if count < 0:
        raise InvalidParameter(f"count must not be negative, got {count}")
    generator = resolve_rng(rng)
    height, width = image.shape[:2]

    for _ in range(count):
        left = int(generator.integers(width))
        right = min(left + 1 + int(generator.integers(SCRATCH_MAX_WIDTH)), width)
        hits = generator.random((height, right - left)) < SCRATCH_PROBABILITY
        column = image[:, left:right]
        column[hits] = 255


@jit(nopython=True, cache=True)
def _vignette_kernel(image: np.ndarray, centre_x: float, centre_y: float, radius: float) -> None:
    """JIT-compiled radial darkening."""

    height = image.shape[0]
    width = image.shape[1]
    for y in range(height):
        dy = y - centre_y
        for x in range(width):
            dx = x - centre_x
            distance = math.sqrt(dx * dx + dy * dy)
            factor = 1.0 - distance / radius
            if factor < 0.0:
                factor = 0.0
            for channel in range(3):
                image[y, x, channel] = int(image[y, x, channel] * factor)
            image[y, x, 3] = 255


@jit(nopython=True, cache=True)
def _light_leak_kernel(
    image: np.ndarray,
    corner_x: float,
    corner_y: float,
    reach: float,
    threshold: float,
    gain_r: float,
    gain_g: float,
    gain_b: float,
) -> None:
    """JIT-compiled additive glow from a single corner."""

    height = image.shape[0]
    width = image.shape[1]
    for y in range(height):
        dy = y - corner_y
        for x in range(width):
            dx = x - corner_x
            factor = 1.0 - math.sqrt(dx * dx + dy * dy) / reach
            if factor <= threshold:
                continue
            r = int(image[y, x, 0]) + int(factor * gain_r)
            g = int(image[y, x, 1]) + int(factor * gain_g)
            b = int(image[y, x, 2]) + int(factor * gain_b)
            image[y, x, 0] = min(r, 255)
            image[y, x, 1] = min(g, 255)
            image[y, x, 2] = min(b, 255)
            image[y, x, 3] = 255


__all__ = [
    "RandomSource",
    "add_grain",
    "add_light_leak",
    "add_scan_noise",
    "add_scratches",
    "add_vignette",
    "resolve_rng",
]
