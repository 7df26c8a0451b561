import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make the sources importable without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _solid(width: int, height: int, colour=(0, 0, 0, 255)) -> np.ndarray:
    image = np.empty((height, width, 4), dtype=np.uint8)
    image[:, :] = colour
    return image


@pytest.fixture
def make_image():
    """Factory returning solid RGBA images."""

    return _solid


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def flat_gray() -> np.ndarray:
    return _solid(100, 100, (128, 128, 128, 255))


@pytest.fixture
def white_square() -> np.ndarray:
    """100x100 black frame with a centred 40x40 white square."""

    image = _solid(100, 100, (0, 0, 0, 255))
    image[30:70, 30:70, :3] = 255
    return image


@pytest.fixture
def noisy_image(rng) -> np.ndarray:
    image = rng.integers(0, 256, size=(64, 80, 4), dtype=np.uint8)
    image[:, :, 3] = 255
    return image
