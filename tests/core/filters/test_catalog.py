from __future__ import annotations

import numpy as np
import pytest

from retrocam.core.filters import (
    CATALOG,
    FILTER_NAMES,
    PRESETS,
    apply_filter,
    apply_filter_by_name,
    filter_name,
)
from retrocam.core.filters.catalog import (
    ColorMatrixStep,
    FilterCatalog,
    FilterPreset,
    GrainStep,
    LightLeakStep,
    NoiseStep,
    ScratchStep,
    VignetteStep,
    run_steps,
)
from retrocam.core.filters.color_matrix import ColorMatrix
from retrocam.errors import InvalidDimensions, InvalidFilterId


def test_original_filter_returns_identical_copy(noisy_image) -> None:
    result = apply_filter(noisy_image, 0)

    np.testing.assert_array_equal(result, noisy_image)
    assert result is not noisy_image
    assert not np.shares_memory(result, noisy_image)


@pytest.mark.parametrize("filter_id", range(1, 11))
def test_every_preset_keeps_size_and_leaves_input_alone(noisy_image, filter_id) -> None:
    before = noisy_image.copy()

    result = apply_filter(noisy_image, filter_id, rng=filter_id)

    assert result.shape == noisy_image.shape
    assert result.dtype == np.uint8
    np.testing.assert_array_equal(noisy_image, before)


@pytest.mark.parametrize("filter_id", [-1, 11, 2.0, "3", None, True])
def test_unknown_ids_are_rejected(noisy_image, filter_id) -> None:
    with pytest.raises(InvalidFilterId):
        apply_filter(noisy_image, filter_id)


def test_seeded_presets_are_reproducible(noisy_image) -> None:
    first = apply_filter(noisy_image, 9, rng=99)
    second = apply_filter(noisy_image, 9, rng=99)

    np.testing.assert_array_equal(first, second)


def test_preset_table_matches_display_names() -> None:
    assert FILTER_NAMES == (
        "Original",
        "CPM35",
        "Classic U",
        "NT16",
        "GRD",
        "S 67",
        "Inst SQC",
        "D Classic",
        "VHS",
        "8mm",
        "Slide",
    )
    assert CATALOG.ids() == list(range(11))
    assert filter_name(8) == "VHS"
    assert PRESETS[0].steps == ()


def test_preset_step_order() -> None:
    kinds = {
        filter_id: [type(step) for step in preset.steps] for filter_id, preset in PRESETS.items()
    }

    assert kinds[1] == [ColorMatrixStep, GrainStep]
    assert kinds[6] == [ColorMatrixStep, VignetteStep, GrainStep]
    assert kinds[7] == [ColorMatrixStep, GrainStep, LightLeakStep]
    assert kinds[8] == [ColorMatrixStep, NoiseStep]
    assert kinds[9] == [ColorMatrixStep, GrainStep, ScratchStep]
    assert PRESETS[9].steps[1] == GrainStep(20)


def test_saturation_is_applied_before_tone() -> None:
    matrix = PRESETS[4].steps[0].matrix
    expected = ColorMatrix.saturation(0.7).post_concat(
        ColorMatrix.scale_offset((0.9, 0.9, 0.9), (10.0, 10.0, 10.0))
    )

    assert matrix == expected


def test_colour_only_preset_is_deterministic() -> None:
    image = np.zeros((2, 2, 4), dtype=np.uint8)
    image[:, :] = (100, 100, 100, 255)
    catalog = FilterCatalog({0: PRESETS[0], 2: FilterPreset(2, "Tone", PRESETS[2].steps[:1])})

    result = catalog.apply(image, 2)

    np.testing.assert_array_equal(result[0, 0], [120, 110, 110, 255])


def test_unknown_id_message_lists_the_catalog_ids(noisy_image) -> None:
    catalog = FilterCatalog({0: PRESETS[0], 2: PRESETS[2]})

    with pytest.raises(InvalidFilterId, match="expected one of 0, 2") as excinfo:
        catalog.apply(noisy_image, 1)
    assert excinfo.value.valid == (0, 2)

    with pytest.raises(InvalidFilterId, match=r"expected 0\.\.10"):
        apply_filter(noisy_image, 11)


def test_apply_by_name_is_case_insensitive(noisy_image) -> None:
    by_name = apply_filter_by_name(noisy_image, "  classic u ", rng=5)
    by_id = apply_filter(noisy_image, 2, rng=5)

    np.testing.assert_array_equal(by_name, by_id)
    with pytest.raises(InvalidFilterId):
        apply_filter_by_name(noisy_image, "Sepia")


def test_unknown_step_type_is_an_error(noisy_image) -> None:
    with pytest.raises(TypeError):
        run_steps(noisy_image.copy(), [object()], np.random.default_rng(0))


def test_bad_buffers_are_rejected() -> None:
    with pytest.raises(InvalidDimensions):
        apply_filter(np.zeros((5, 5), dtype=np.uint8), 1)
