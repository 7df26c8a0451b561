"""The retro filter catalog and the executor that runs its presets.

Each preset is a tuple of typed steps.  :func:`run_steps` is the only place
that knows how to execute a step, so adding a preset never needs new driver
code; it is enough to extend :data:`PRESETS`.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Union

import numpy as np

from ...errors import InvalidFilterId
from ..pixels import ensure_image
from .artifacts import (
    SCAN_NOISE_BANDS,
    SCRATCH_COUNT,
    RandomSource,
    add_grain,
    add_light_leak,
    add_scan_noise,
    add_scratches,
    add_vignette,
    resolve_rng,
)
from .color_matrix import ColorMatrix, apply_color_matrix_inplace

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColorMatrixStep:
    matrix: ColorMatrix


@dataclass(frozen=True)
class GrainStep:
    intensity: int


@dataclass(frozen=True)
class VignetteStep:
    pass


@dataclass(frozen=True)
class LightLeakStep:
    pass


@dataclass(frozen=True)
class NoiseStep:
    bands: int = SCAN_NOISE_BANDS


@dataclass(frozen=True)
class ScratchStep:
    count: int = SCRATCH_COUNT


FilterStep = Union[ColorMatrixStep, GrainStep, VignetteStep, LightLeakStep, NoiseStep, ScratchStep]


@dataclass(frozen=True)
class FilterPreset:
    """A named, ordered pipeline of filter steps."""

    filter_id: int
    name: str
    steps: tuple[FilterStep, ...] = ()


def _graded(
    saturation: float | None,
    scale: tuple[float, float, float],
    offset: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> ColorMatrixStep:
    """Return the colour step of a preset: saturation first, then the tone matrix."""

    tone = ColorMatrix.scale_offset(scale, offset)
    if saturation is None:
        return ColorMatrixStep(tone)
    return ColorMatrixStep(ColorMatrix.saturation(saturation).post_concat(tone))


_VHS_MIX = ColorMatrix.from_rows(
    (
        1.0, 0.2, 0.2, 0.0, 0.0,
        0.2, 1.0, 0.2, 0.0, 0.0,
        0.2, 0.2, 1.0, 0.0, 0.0,
        0.0, 0.0, 0.0, 1.0, 0.0,
    )
)

_PRESET_LIST = (
    FilterPreset(0, "Original"),
    FilterPreset(
        1,
        "CPM35",
        (_graded(0.8, (1.0, 1.0, 0.9), (10.0, 0.0, 10.0)), GrainStep(5)),
    ),
    FilterPreset(
        2,
        "Classic U",
        (_graded(None, (1.1, 1.0, 0.9), (10.0, 10.0, 20.0)), GrainStep(8)),
    ),
    FilterPreset(
        3,
        "NT16",
        (_graded(None, (1.1, 1.05, 1.0), (5.0, 0.0, 5.0)), GrainStep(3)),
    ),
    FilterPreset(
        4,
        "GRD",
        (_graded(0.7, (0.9, 0.9, 0.9), (10.0, 10.0, 10.0)), GrainStep(10)),
    ),
    FilterPreset(
        5,
        "S 67",
        (_graded(1.4, (1.2, 1.1, 0.9), (10.0, 10.0, 0.0)), GrainStep(5)),
    ),
    FilterPreset(
        6,
        "Inst SQC",
        (
            _graded(None, (1.2, 1.1, 1.0), (10.0, 10.0, 10.0)),
            VignetteStep(),
            GrainStep(8),
        ),
    ),
    FilterPreset(
        7,
        "D Classic",
        (
            _graded(1.2, (1.0, 0.9, 0.8), (15.0, 10.0, 20.0)),
            GrainStep(15),
            LightLeakStep(),
        ),
    ),
    FilterPreset(
        8,
        "VHS",
        (
            ColorMatrixStep(ColorMatrix.saturation(0.8).post_concat(_VHS_MIX)),
            NoiseStep(),
        ),
    ),
    FilterPreset(
        9,
        "8mm",
        (
            _graded(0.7, (1.2, 1.0, 0.8), (10.0, 0.0, 0.0)),
            GrainStep(20),
            ScratchStep(),
        ),
    ),
    FilterPreset(
        10,
        "Slide",
        (_graded(1.3, (1.2, 1.2, 1.2)), GrainStep(5)),
    ),
)

PRESETS: Mapping[int, FilterPreset] = MappingProxyType(
    {preset.filter_id: preset for preset in _PRESET_LIST}
)
"""Every preset keyed by its stable identifier."""

FILTER_IDS = range(len(_PRESET_LIST))
FILTER_NAMES = tuple(preset.name for preset in _PRESET_LIST)


def run_steps(image: np.ndarray, steps: Iterable[FilterStep], rng: np.random.Generator) -> None:
    """Execute *steps* on *image* in order, mutating it in place."""

    for step in steps:
        if isinstance(step, ColorMatrixStep):
            apply_color_matrix_inplace(image, step.matrix)
        elif isinstance(step, GrainStep):
            add_grain(image, step.intensity, rng=rng)
        elif isinstance(step, VignetteStep):
            add_vignette(image)
        elif isinstance(step, LightLeakStep):
            add_light_leak(image, rng=rng)
        elif isinstance(step, NoiseStep):
            add_scan_noise(image, rng=rng, bands=step.bands)
        elif isinstance(step, ScratchStep):
            add_scratches(image, rng=rng, count=step.count)
        else:
            raise TypeError(f"Unsupported filter step {step!r}")


class FilterCatalog:
    """Look up presets and apply them to fresh copies of an image."""

    def __init__(self, presets: Mapping[int, FilterPreset] = PRESETS) -> None:
        self._presets = presets
        self._by_name = {preset.name.strip().lower(): preset for preset in presets.values()}

    def ids(self) -> list[int]:
        return sorted(self._presets)

    def names(self) -> list[str]:
        return [self._presets[filter_id].name for filter_id in self.ids()]

    def preset(self, filter_id: int) -> FilterPreset:
        """Return the preset for *filter_id* or raise :class:`InvalidFilterId`."""

        if isinstance(filter_id, bool) or not isinstance(filter_id, numbers.Integral):
            raise InvalidFilterId(filter_id, self.ids())
        preset = self._presets.get(int(filter_id))
        if preset is None:
            raise InvalidFilterId(filter_id, self.ids())
        return preset

    def preset_by_name(self, name: str) -> FilterPreset:
        preset = self._by_name.get(str(name).strip().lower())
        if preset is None:
            raise InvalidFilterId(name, self.ids())
        return preset

    def apply(self, image: np.ndarray, filter_id: int, *, rng: RandomSource = None) -> np.ndarray:
        """Return a filtered copy of *image*; id 0 returns an untouched copy."""

        preset = self.preset(filter_id)
        result = np.array(ensure_image(image), dtype=np.uint8, order="C", copy=True)
        if preset.steps:
            _LOGGER.debug("Applying filter %d (%s)", preset.filter_id, preset.name)
            run_steps(result, preset.steps, resolve_rng(rng))
        return result


CATALOG = FilterCatalog()


def apply_filter(image: np.ndarray, filter_id: int, *, rng: RandomSource = None) -> np.ndarray:
    """Apply preset *filter_id* from the default catalog."""

    return CATALOG.apply(image, filter_id, rng=rng)


def apply_filter_by_name(image: np.ndarray, name: str, *, rng: RandomSource = None) -> np.ndarray:
    """Apply the preset whose display name matches *name* (case-insensitive)."""

    preset = CATALOG.preset_by_name(name)
    return CATALOG.apply(image, preset.filter_id, rng=rng)


def filter_name(filter_id: int) -> str:
    return CATALOG.preset(filter_id).name


__all__ = [
    "CATALOG",
    "ColorMatrixStep",
    "FILTER_IDS",
    "FILTER_NAMES",
    "FilterCatalog",
    "FilterPreset",
    "FilterStep",
    "GrainStep",
    "LightLeakStep",
    "NoiseStep",
    "PRESETS",
    "ScratchStep",
    "VignetteStep",
    "apply_filter",
    "apply_filter_by_name",
    "filter_name",
]
