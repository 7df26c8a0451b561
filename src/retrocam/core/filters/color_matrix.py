"""Affine colour matrices and the JIT kernel that applies them.

A :class:`ColorMatrix` holds a 4x5 transform in row-major order, the same
layout camera and graphics toolkits use for colour filters::

    R' = a*R + b*G + c*B + d*A + e
    G' = f*R + g*G + h*B + i*A + j
    B' = k*R + l*G + m*B + n*A + o
    A' = p*R + q*G + r*B + s*A + t

Offsets are expressed on the 0-255 scale.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numba import jit

from ...errors import InvalidDimensions, InvalidParameter
from ..pixels import ensure_image

# Luma weights used by the platform ``setSaturation`` helper the presets were tuned with.
_LUMA_R = 0.213
_LUMA_G = 0.715
_LUMA_B = 0.072


def _homogeneous(coeffs: np.ndarray) -> np.ndarray:
    """Return *coeffs* extended to a 5x5 matrix with a trailing ``[0, 0, 0, 0, 1]`` row."""

    square = np.zeros((5, 5), dtype=np.float64)
    square[:4, :] = coeffs
    square[4, 4] = 1.0
    return square


@dataclass(frozen=True, eq=False)
class ColorMatrix:
    """Immutable 4x5 affine colour transform."""

    coeffs: np.ndarray

    def __post_init__(self) -> None:
        array = np.array(self.coeffs, dtype=np.float64)
        if array.size != 20:
            raise InvalidParameter(f"a colour matrix needs 20 coefficients, got {array.size}")
        array = array.reshape(4, 5)
        array.setflags(write=False)
        object.__setattr__(self, "coeffs", array)

    @classmethod
    def identity(cls) -> "ColorMatrix":
        return cls(np.eye(4, 5))

    @classmethod
    def from_rows(cls, values: Sequence[float]) -> "ColorMatrix":
        """Build a matrix from 20 row-major coefficients."""

        return cls(np.asarray(values, dtype=np.float64))

    @classmethod
    def saturation(cls, amount: float) -> "ColorMatrix":
        """Return a matrix scaling saturation by *amount* (1 keeps the colours)."""

        amount = float(amount)
        if amount < 0.0:
            raise InvalidParameter(f"saturation must not be negative, got {amount}")
        inv = 1.0 - amount
        r = _LUMA_R * inv
        g = _LUMA_G * inv
        b = _LUMA_B * inv
        return cls.from_rows(
            (
                r + amount, g, b, 0.0, 0.0,
                r, g + amount, b, 0.0, 0.0,
                r, g, b + amount, 0.0, 0.0,
                0.0, 0.0, 0.0, 1.0, 0.0,
            )
        )

    @classmethod
    def scale_offset(
        cls,
        scale: tuple[float, float, float],
        offset: tuple[float, float, float] = (0.0, 0.0, 0.0),
    ) -> "ColorMatrix":
        """Return a diagonal tone matrix with per-channel *scale* and *offset*."""

        coeffs = np.eye(4, 5)
        for channel in range(3):
            coeffs[channel, channel] = float(scale[channel])
            coeffs[channel, 4] = float(offset[channel])
        return cls(coeffs)

    def post_concat(self, other: "ColorMatrix") -> "ColorMatrix":
        """Return the matrix applying ``self`` first and *other* second."""

        product = _homogeneous(other.coeffs) @ _homogeneous(self.coeffs)
        return ColorMatrix(product[:4, :])

    def __matmul__(self, other: "ColorMatrix") -> "ColorMatrix":
        # ``B @ A`` reads like function composition: A runs first.
        return other.post_concat(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorMatrix):
            return NotImplemented
        return bool(np.array_equal(self.coeffs, other.coeffs))

    def __hash__(self) -> int:
        return hash(self.coeffs.tobytes())

    def is_identity(self) -> bool:
        return bool(np.allclose(self.coeffs, np.eye(4, 5)))


def apply_color_matrix_inplace(image: np.ndarray, matrix: ColorMatrix) -> None:
    """Transform every pixel of *image* in place.

    The caller must own *image* exclusively for the duration of the call.
    """

    image = ensure_image(image)
    if not image.flags.c_contiguous:
        raise InvalidDimensions("colour matrices are applied to C-contiguous buffers only")
    if matrix.is_identity():
        return
    pixels = image.reshape(-1, 4)
    _apply_matrix_kernel(pixels, matrix.coeffs.astype(np.float32))


def apply_color_matrix(image: np.ndarray, matrix: ColorMatrix) -> np.ndarray:
    """Return a transformed copy of *image*."""

    result = np.array(ensure_image(image), dtype=np.uint8, order="C", copy=True)
    apply_color_matrix_inplace(result, matrix)
    return result


@jit(nopython=True, cache=True)
def _apply_matrix_kernel(pixels: np.ndarray, coeffs: np.ndarray) -> None:
    """JIT-compiled affine transform over an ``(N, 4)`` pixel array."""

    count = pixels.shape[0]
    for i in range(count):
        r = float(pixels[i, 0])
        g = float(pixels[i, 1])
        b = float(pixels[i, 2])
        a = float(pixels[i, 3])
        for channel in range(4):
            value = (
                coeffs[channel, 0] * r
                + coeffs[channel, 1] * g
                + coeffs[channel, 2] * b
                + coeffs[channel, 3] * a
                + coeffs[channel, 4]
            )
            if value < 0.0:
                value = 0.0
            elif value > 255.0:
                value = 255.0
            pixels[i, channel] = int(value + 0.5)


__all__ = ["ColorMatrix", "apply_color_matrix", "apply_color_matrix_inplace"]
