# gradient_noise/sampling.py

"""
================================================================================
GRID SAMPLING
================================================================================
This module evaluates a Noise field over NumPy coordinate grids, optionally
summing several octaves into fractal noise. Every sample goes through
Noise.get, so the grid shares the instance's gradients and value cache.

Data Contract:
---------------
- Inputs:
    - noise: A Noise instance (anything with a get(x, y) method).
    - x_coords, y_coords: NumPy arrays of coordinates with the same shape.
    - octaves, persistence, lacunarity: Standard fractal parameters.
- Outputs:
    - A float64 NumPy array with the shape of the inputs. The octave sum is
      divided by the total amplitude, so it keeps the single-octave range.
- Side Effects: Populates the noise instance's caches.
================================================================================
"""
import numpy as np

from . import config as DEFAULTS


def get_coordinate_grid(x_min, y_min, width, height, resolution_w, resolution_h):
    """
    Generates a coordinate grid covering a rectangle, edges included.
    The returned arrays have shape (resolution_h, resolution_w).
    """
    x_coords = np.linspace(x_min, x_min + width, resolution_w)
    y_coords = np.linspace(y_min, y_min + height, resolution_h)
    return np.meshgrid(x_coords, y_coords)


def octave_extent(x_min, x_max, y_min, y_max, octaves=1, lacunarity=DEFAULTS.DEFAULT_LACUNARITY):
    """
    Returns the bounding rectangle of noise space touched by any octave when
    sampling the rectangle [x_min, x_max] x [y_min, y_max].
    """
    frequencies = [lacunarity ** i for i in range(octaves)]
    xs = [bound * f for f in frequencies for bound in (x_min, x_max)]
    ys = [bound * f for f in frequencies for bound in (y_min, y_max)]
    return min(xs), max(xs), min(ys), max(ys)


def lattice_extent(x_min, x_max, y_min, y_max, octaves=1, lacunarity=DEFAULTS.DEFAULT_LACUNARITY):
    """
    Returns bounds for precompute_gradients that cover every lattice point a
    sample in the rectangle can read. A sample on an integer edge n still
    reads the corners at n + 1, so the max sides are padded by one.
    """
    lo_x, hi_x, lo_y, hi_y = octave_extent(x_min, x_max, y_min, y_max, octaves, lacunarity)
    return lo_x, hi_x + 1, lo_y, hi_y + 1


def sample_grid(noise, x_coords: np.ndarray, y_coords: np.ndarray,
                octaves: int = DEFAULTS.DEFAULT_OCTAVES,
                persistence: float = DEFAULTS.DEFAULT_PERSISTENCE,
                lacunarity: float = DEFAULTS.DEFAULT_LACUNARITY) -> np.ndarray:
    """Samples noise at every (x, y) pair of the input grids."""
    x_coords = np.asarray(x_coords, dtype=float)
    y_coords = np.asarray(y_coords, dtype=float)
    if x_coords.shape != y_coords.shape:
        raise ValueError(f"Coordinate shapes differ: {x_coords.shape} vs {y_coords.shape}")
    if octaves < 1:
        raise ValueError(f"octaves must be at least 1, got {octaves}")

    total_noise = np.zeros(x_coords.shape)
    amplitude = 1.0
    frequency = 1.0
    total_amplitude = 0.0

    for _ in range(octaves):
        flat_x = (x_coords * frequency).ravel()
        flat_y = (y_coords * frequency).ravel()
        octave_noise = np.fromiter(
            (noise.get(float(x), float(y)) for x, y in zip(flat_x, flat_y)),
            dtype=float,
            count=flat_x.size,
        ).reshape(x_coords.shape)

        total_noise += octave_noise * amplitude
        total_amplitude += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    return total_noise / total_amplitude
