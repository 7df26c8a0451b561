"""Tunable constants for the segmentation and blur pipelines.

Every value has a default that reproduces the camera application's behaviour,
so hosts only need :func:`load_settings` when they want to experiment with
different kernels or thresholds.  Instances are frozen; the module-level
:data:`DEFAULT_SETTINGS` is shared by every call that does not pass its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError
from .utils.jsonio import read_json


@dataclass(frozen=True)
class SegmentationSettings:
    """Kernel sizes and thresholds shared by the mask producers."""

    pre_blur_kernel: int = 5
    canny_low: float = 50.0
    canny_high: float = 150.0
    dilate_kernel: int = 3
    mask_blur_kernel: int = 11
    definite_foreground: int = 200
    definite_background: int = 50
    grabcut_iterations: int = 3
    refine_blur_kernel: int = 5
    brush_supersampling: int = 4

    def validate(self) -> "SegmentationSettings":
        """Return ``self`` after checking the kernels are usable by OpenCV."""

        for name in ("pre_blur_kernel", "mask_blur_kernel", "refine_blur_kernel"):
            value = getattr(self, name)
            if value < 1 or value % 2 == 0:
                raise ConfigError(f"{name} must be a positive odd integer, got {value}")
        if self.dilate_kernel < 1:
            raise ConfigError("dilate_kernel must be positive")
        if not 0 <= self.canny_low <= self.canny_high:
            raise ConfigError("canny thresholds must satisfy 0 <= low <= high")
        if not 0 <= self.definite_background < self.definite_foreground <= 255:
            raise ConfigError("refinement thresholds must satisfy 0 <= background < foreground <= 255")
        if self.grabcut_iterations < 1:
            raise ConfigError("grabcut_iterations must be at least 1")
        if self.brush_supersampling < 1:
            raise ConfigError("brush_supersampling must be at least 1")
        return self


@dataclass(frozen=True)
class BlurSettings:
    """Accepted blur intensity range and the radius-to-sigma conversion."""

    min_intensity: int = 1
    max_intensity: int = 25
    sigma_scale: float = 0.57735
    sigma_bias: float = 0.5

    def validate(self) -> "BlurSettings":
        if not 1 <= self.min_intensity <= self.max_intensity:
            raise ConfigError("blur intensity range must satisfy 1 <= min <= max")
        if self.sigma_scale <= 0.0:
            raise ConfigError("sigma_scale must be positive")
        return self

    def sigma_for(self, intensity: int) -> float:
        """Return the Gaussian sigma used for a blur of radius *intensity*."""

        return self.sigma_scale * float(intensity) + self.sigma_bias


@dataclass(frozen=True)
class Settings:
    """Bundle of every tunable section."""

    segmentation: SegmentationSettings = field(default_factory=SegmentationSettings)
    blur: BlurSettings = field(default_factory=BlurSettings)

    @classmethod
    def default(cls) -> "Settings":
        return DEFAULT_SETTINGS


DEFAULT_SETTINGS = Settings()


def _override(section: Any, values: Mapping[str, Any], label: str) -> Any:
    known = {item.name for item in fields(section)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown {label} setting(s): {', '.join(unknown)}")
    return replace(section, **dict(values)).validate()


def settings_from_mapping(data: Mapping[str, Any]) -> Settings:
    """Build :class:`Settings` from a mapping of ``{"segmentation": {...}, "blur": {...}}``."""

    unknown = sorted(set(data) - {"segmentation", "blur"})
    if unknown:
        raise ConfigError(f"Unknown settings section(s): {', '.join(unknown)}")

    segmentation = DEFAULT_SETTINGS.segmentation
    blur = DEFAULT_SETTINGS.blur
    if "segmentation" in data:
        segmentation = _override(segmentation, data["segmentation"], "segmentation")
    if "blur" in data:
        blur = _override(blur, data["blur"], "blur")
    return Settings(segmentation=segmentation, blur=blur)


def load_settings(path: Path) -> Settings:
    """Read overrides from the JSON file at *path*."""

    return settings_from_mapping(read_json(Path(path)))


__all__ = [
    "BlurSettings",
    "DEFAULT_SETTINGS",
    "SegmentationSettings",
    "Settings",
    "load_settings",
    "settings_from_mapping",
]
