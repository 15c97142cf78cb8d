import sys
import os
import math
import logging
from concurrent.futures import ThreadPoolExecutor
import numpy as np
import pytest

# Add the root directory to the Python path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gradient_noise.noise import Noise, PrecomputeScheduler, fade
from gradient_noise.gradients import GradientStore
from gradient_noise.errors import NonFiniteCoordinateError
from gradient_noise import config as DEFAULTS


@pytest.fixture
def noise():
    return Noise(config={'seed': 42})


# --- Fade ---

def test_fade_endpoints():
    assert fade(0.0, 2.0, 5.0) == 2.0
    assert fade(1.0, 2.0, 5.0) == 5.0
    assert fade(0.5, 2.0, 5.0) == pytest.approx(3.5)


def test_fade_has_flat_ends():
    h = 1e-6
    # Slope of the weight near t=0 and t=1 vanishes.
    assert (fade(h, 0.0, 1.0) - fade(0.0, 0.0, 1.0)) / h == pytest.approx(0.0, abs=1e-6)
    assert (fade(1.0, 0.0, 1.0) - fade(1.0 - h, 0.0, 1.0)) / h == pytest.approx(0.0, abs=1e-6)


# --- Evaluation ---

def test_repeated_get_is_bit_identical(noise):
    first = noise.get(2.3, 4.7)
    second = noise.get(2.3, 4.7)
    assert first == second
    assert math.copysign(1.0, first) == math.copysign(1.0, second)


def test_get_with_default_y(noise):
    assert noise.get(3.7) == noise.get(3.7, 0)
    assert noise(3.7) == noise.get(3.7, 0.0)


def test_negative_coordinates_are_finite(noise):
    v = noise.get(-1.5, -0.5)
    assert math.isfinite(v)
    assert DEFAULTS.NOMINAL_MIN <= v <= DEFAULTS.NOMINAL_MAX


def test_lattice_points_evaluate_to_zero(noise):
    assert noise.get(0, 0) == 0.0
    assert noise.get(-3.0, 7.0) == 0.0


def test_get_populates_only_enclosing_cell():
    noise = Noise(config={'seed': 1})
    noise.get(0, 0)
    assert noise.gradients.lattice_points() == {(0, 0), (1, 0), (0, 1), (1, 1)}


def test_get_in_negative_cell_uses_floor():
    noise = Noise(config={'seed': 1})
    noise.get(-1.5, -0.5)
    assert noise.gradients.lattice_points() == {(-2, -1), (-1, -1), (-2, 0), (-1, 0)}


def test_matches_manual_interpolation():
    store_noise = Noise(config={'seed': 3})
    x, y = 0.3, 0.8
    v = store_noise.get(x, y)

    g = store_noise.gradients
    def corner(ix, iy):
        gx, gy = g.get_or_create(ix, iy)
        return (x - ix) * gx + (y - iy) * gy

    def s(t):
        return t * t * t * (t * (t * 6 - 15) + 10)

    xt = corner(0, 0) + s(x) * (corner(1, 0) - corner(0, 0))
    xb = corner(0, 1) + s(x) * (corner(1, 1) - corner(0, 1))
    expected = xt + s(y) * (xb - xt)
    assert v == pytest.approx(expected, abs=1e-12)


@pytest.mark.parametrize("n", [-2, 0, 1, 5])
def test_continuous_across_integer_boundaries(noise, n):
    for y in (0.0, 0.37, 2.9):
        for eps in (1e-3, 1e-6, 1e-9):
            below = noise.get(n - eps, y)
            above = noise.get(n + eps, y)
            assert abs(below - above) < 10 * eps
        # Same along the y axis.
        assert abs(noise.get(y, n - 1e-9) - noise.get(y, n + 1e-9)) < 1e-7


def test_output_within_theoretical_bound(noise):
    xs = np.linspace(-4.0, 4.0, 61)
    ys = np.linspace(-3.0, 5.0, 61)
    values = [noise.get(float(x), float(y)) for x in xs for y in ys]
    assert max(abs(v) for v in values) <= DEFAULTS.THEORETICAL_BOUND + 1e-9


# --- Caches ---

def test_get_memoizes_value(noise):
    v = noise.get(1.25, 2.5)
    assert noise.values.get(1.25, 2.5) == v


def test_clear_cache_keeps_gradients(noise):
    v = noise.get(2.3, 4.7)
    gradients_before = len(noise.gradients)
    noise.clear_cache()
    assert len(noise.values) == 0
    assert len(noise.gradients) == gradients_before
    assert noise.get(2.3, 4.7) == v


def test_clear_gradients_keeps_cached_values(noise):
    v = noise.get(0.5, 0.5)
    noise.clear_gradients()
    assert len(noise.gradients) == 0
    # Memoized values survive; only new queries see the new lattice.
    assert noise.get(0.5, 0.5) == v
    assert len(noise.gradients) == 0


def test_clear_gradients_changes_new_values(noise):
    before = noise.get(0.5, 0.5)
    noise.clear_gradients()
    noise.clear_cache()
    after = noise.get(0.5, 0.5)
    assert after != before


def test_gradient_field_reproducible_with_seed():
    results = []
    for _ in range(2):
        noise = Noise(config={'seed': 2024})
        noise.clear_gradients()
        noise.precompute_gradients(0, 1, 0, 1)
        results.append(noise.get(0.5, 0.5))
    assert results[0] == results[1]


def test_injected_random_source_is_used():
    calls = []
    def source():
        calls.append(None)
        return 0.0
    noise = Noise(random_source=source)
    noise.get(0.5, 0.5)
    assert len(calls) == 4
    # Every gradient is (1, 0); left and right corners cancel at the cell centre.
    assert noise.get(0.5, 0.5) == pytest.approx(0.0, abs=1e-12)


def test_different_seeds_give_different_fields():
    a = Noise(config={'seed': 1}).get(0.4, 0.6)
    b = Noise(config={'seed': 2}).get(0.4, 0.6)
    assert a != b


def test_instances_do_not_share_state():
    a = Noise(config={'seed': 5})
    b = Noise(config={'seed': 5})
    a.get(10.5, 10.5)
    assert len(b.gradients) == 0
    assert len(b.values) == 0


# --- Precompute ---

def test_precompute_gradients_populates_rectangle(noise):
    noise.precompute_gradients(-0.5, 1.5, 0, 1)
    assert len(noise.gradients) == 4 * 2


def test_precompute_gradients_inverted_is_noop(noise):
    noise.precompute_gradients(3, 1, 3, 1)
    assert len(noise.gradients) == 0


def test_precompute_does_not_change_existing_field(noise):
    v = noise.get(0.25, 0.75)
    noise.clear_cache()
    noise.precompute_gradients(-2, 2, -2, 2)
    assert noise.get(0.25, 0.75) == v


def test_scheduler_delegates_to_store():
    store = GradientStore(np.random.default_rng(0).random)
    scheduler = PrecomputeScheduler(store)
    assert scheduler.run(0, 2, 0, 0) is None
    assert store.lattice_points() == {(0, 0), (1, 0), (2, 0)}


# --- Non-finite input ---

@pytest.mark.parametrize("x, y", [
    (float('nan'), 0.0),
    (0.0, float('nan')),
    (float('inf'), 1.0),
    (1.0, float('-inf')),
])
def test_non_finite_input_is_rejected(noise, x, y):
    with pytest.raises(NonFiniteCoordinateError):
        noise.get(x, y)
    assert len(noise.gradients) == 0
    assert len(noise.values) == 0


def test_non_finite_precompute_is_rejected(noise):
    with pytest.raises(ValueError):
        noise.precompute_gradients(0, 1, float('-inf'), 1)


# --- Logging & concurrency ---

def test_clears_are_logged(noise, caplog):
    noise.get(0.5, 0.5)
    with caplog.at_level(logging.INFO):
        noise.clear_cache()
        noise.clear_gradients()
    assert "Cleared 1 cached noise values." in caplog.text
    assert "Cleared 4 lattice gradients." in caplog.text


def test_concurrent_queries_agree():
    noise = Noise(config={'seed': 11})
    points = [(i * 0.37, j * 0.53) for i in range(20) for j in range(20)]

    def evaluate(_):
        return [noise.get(x, y) for x, y in points]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(evaluate, range(4)))

    assert all(r == results[0] for r in results)
    noise.clear_cache()
    assert [noise.get(x, y) for x, y in points] == results[0]
