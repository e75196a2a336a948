import numpy as np
import pytest

from terrain_generator.layers import generate_noise_map, merge_layers
from terrain_generator.noise import stretched_noise_grid
from terrain_generator.tables import build_tables


# --- generate_noise_map ---

def test_noise_map_shape_and_range():
    layer = generate_noise_map(16, 9, 1.0, 4.0, 1.0, seed=3)

    assert layer.shape == (9, 16)
    assert layer.dtype == np.float64
    assert layer.min() >= 0.0
    assert layer.max() <= 0.5


def test_noise_map_is_reproducible_for_a_seed():
    first = generate_noise_map(4, 4, 1.0, 4.0, 1.0, seed=2024)
    second = generate_noise_map(4, 4, 1.0, 4.0, 1.0, seed=2024)

    assert np.array_equal(first, second)


def test_noise_map_changes_with_the_seed():
    maps = {generate_noise_map(4, 4, 1.0, 4.0, 1.0, seed=seed).tobytes() for seed in range(10)}
    assert len(maps) > 1


def test_raw_noise_changes_with_the_tables():
    first = stretched_noise_grid(*build_tables(1), 4, 4, 1.0, 4.0)
    second = stretched_noise_grid(*build_tables(2), 4, 4, 1.0, 4.0)

    assert not np.array_equal(first, second)


def test_noise_map_matches_clamped_and_halved_raw_noise():
    perms, grads = build_tables(77)
    raw = stretched_noise_grid(perms, grads, 6, 5, 2.0, 3.0)

    layer = generate_noise_map(6, 5, 2.0, 3.0, 1.5, seed=77)

    assert np.allclose(layer, np.clip(raw * 1.5, 0.0, 1.0) * 0.5)


def test_noise_map_accepts_a_generator_as_seed():
    from_int = generate_noise_map(5, 5, 1.0, 2.0, 1.0, seed=11)
    from_rng = generate_noise_map(5, 5, 1.0, 2.0, 1.0, seed=np.random.default_rng(11))

    assert np.array_equal(from_int, from_rng)


def test_zero_amplitude_gives_flat_layer():
    layer = generate_noise_map(5, 5, 1.0, 2.0, 0.0, seed=1)
    assert np.all(layer == 0.0)


def test_unseeded_maps_are_generated():
    layer = generate_noise_map(3, 3, 1.0, 2.0, 1.0)
    assert layer.shape == (3, 3)


@pytest.mark.parametrize("kwargs", [
    dict(width=0),
    dict(height=-2),
    dict(width=2.5),
    dict(octave_frequency=0.0),
    dict(octave_frequency=-1.0),
    dict(stretch=0.0),
    dict(stretch=float("nan")),
    dict(amplitude=float("inf")),
])
def test_noise_map_rejects_invalid_configuration(kwargs):
    params = dict(width=4, height=4, octave_frequency=1.0, stretch=4.0, amplitude=1.0)
    params.update(kwargs)
    with pytest.raises(ValueError):
        generate_noise_map(**params, seed=0)


# --- merge_layers ---

def test_merge_normalizes_by_weight_sum():
    layers = [np.full((3, 4), 0.4) for _ in range(3)]

    merged = merge_layers([1.0, 1.0, 1.0], 1.0, 0.0, *layers)

    assert merged.shape == (3, 4)
    assert np.allclose(merged, 0.4)


def test_merge_accepts_a_list_of_layers():
    a = np.full((2, 2), 0.2)
    b = np.full((2, 2), 0.3)

    assert np.array_equal(merge_layers([1.0, 0.5], 1.0, 0.0, [a, b]), merge_layers([1.0, 0.5], 1.0, 0.0, a, b))


def test_merge_applies_redistribution():
    merged = merge_layers([1.0], 2.0, 0.0, np.full((2, 2), 0.5))
    assert np.allclose(merged, 0.25)


def test_merge_raises_values_below_water_level_to_water_level():
    layer = np.array([[0.02, 0.05], [0.3, 0.5]])

    merged = merge_layers([1.0], 1.0, 0.1, layer)

    assert merged[0, 0] == 0.1
    assert merged[0, 1] == 0.1
    assert merged[1, 0] == pytest.approx(0.3)
    assert merged.min() >= 0.1


def test_merge_clamps_to_one():
    layers = [np.full((2, 2), 0.5), np.full((2, 2), 0.5)]
    merged = merge_layers([0.5], 1.0, 0.0, *layers)
    assert np.all(merged == 1.0)


def test_merge_of_generated_layers_stays_in_range():
    weights = [1.0, 0.5, 0.25]
    layers = [
        generate_noise_map(12, 12, frequency, 5.0, weight, seed=index)
        for index, (frequency, weight) in enumerate(zip([1.0, 2.0, 4.0], weights))
    ]

    merged = merge_layers(weights, 0.72, 0.1, *layers)

    assert merged.min() >= 0.1
    assert merged.max() <= 1.0


def test_merge_requires_layers():
    with pytest.raises(ValueError):
        merge_layers([1.0], 1.0, 0.0)


def test_merge_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        merge_layers([1.0, 1.0], 1.0, 0.0, np.zeros((2, 2)), np.zeros((2, 3)))


@pytest.mark.parametrize("weights", [[], [0.0], [1.0, -1.0], [-1.0]])
def test_merge_rejects_unusable_weight_sums(weights):
    with pytest.raises(ValueError):
        merge_layers(weights, 1.0, 0.0, np.zeros((2, 2)))


@pytest.mark.parametrize("water_level", [-0.1, 1.5])
def test_merge_rejects_water_level_outside_unit_range(water_level):
    with pytest.raises(ValueError):
        merge_layers([1.0], 1.0, water_level, np.zeros((2, 2)))


@pytest.mark.parametrize("kwargs", [
    dict(width=float("inf")),
    dict(height=float("nan")),
    dict(width="4"),
    dict(stretch="4.0"),
    dict(amplitude=None),
])
def test_noise_map_rejects_non_finite_or_non_numeric_values(kwargs):
    params = dict(width=4, height=4, octave_frequency=1.0, stretch=4.0, amplitude=1.0)
    params.update(kwargs)
    with pytest.raises(ValueError):
        generate_noise_map(**params, seed=0)


@pytest.mark.parametrize("value", [-0.2, float("nan")])
def test_merge_rejects_negative_or_nan_heights(value):
    layer = np.array([[0.3, value]])
    with pytest.raises(ValueError):
        merge_layers([1.0], 0.72, 0.1, layer)


@pytest.mark.parametrize("exponent, water_level", [("0.72", 0.1), (0.72, "0.1"), (None, 0.1)])
def test_merge_rejects_non_numeric_settings(exponent, water_level):
    with pytest.raises(ValueError):
        merge_layers([1.0], exponent, water_level, np.full((2, 2), 0.3))
