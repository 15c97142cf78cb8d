# gradient_noise/noise.py

"""
================================================================================
2D GRADIENT NOISE
================================================================================
This module provides the Noise class, an implementation of Ken Perlin's
gradient noise in two dimensions. Gradients are generated lazily per lattice
point and every evaluated point is memoized, so repeated queries are cheap
and always return the exact same float.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict, optional): Overrides for the defaults in config.py.
      Recognised keys: 'seed'.
    - logger (logging.Logger, optional): Logger for lifecycle messages.
    - random_source (callable, optional): Uniform [0, 1) source used for new
      gradients. If None, a numpy Generator is seeded from 'seed'.
- Public Methods:
    - get(x, y=0): The noise value at (x, y), nominally in [-1, 1].
    - clear_cache(): Drops memoized values only.
    - clear_gradients(): Drops gradients only, changing the field for any
      point evaluated afterwards.
    - precompute_gradients(x_min, x_max, y_min, y_max): Warms the lattice.
- Side Effects: Grows the gradient and value caches on demand.
- Invariants: The value at a point is continuous (C2) across lattice cell
  boundaries. Identical queries return bit-identical results until the value
  cache is cleared. Output is not clamped; its true bound is
  config.THEORETICAL_BOUND.
================================================================================
"""
import logging
import math
import threading
from typing import Callable, Optional

import numpy as np
from numba import njit

from . import config as DEFAULTS
from .errors import require_finite
from .gradients import GradientStore
from .value_cache import ValueCache

@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _dot(dx, dy, gx, gy):
    """Projects the offset from a lattice point onto that point's gradient."""
    return dx * gx + dy * gy

def fade(t: float, a: float, b: float) -> float:
    """Blends a towards b with the quintic smoothstep weight of t."""
    return _lerp(a, b, _fade(t))


class PrecomputeScheduler:
    """Warms a GradientStore over a rectangle ahead of heavy querying."""

    def __init__(self, store: GradientStore):
        self._store = store

    def run(self, x_min: float, x_max: float, y_min: float, y_max: float) -> None:
        self._store.precompute(x_min, x_max, y_min, y_max)


class Noise:
    """
    Deterministic, smooth 2D gradient noise with lazily created gradients.
    All state is owned by the instance; two Noise objects never share a
    lattice or a cache.
    """
    def __init__(self, config: dict = None, logger: logging.Logger = None,
                 random_source: Optional[Callable[[], float]] = None):
        """
        Initializes the noise field.

        Args:
            config (dict, optional): User-defined parameters to override defaults.
            logger (logging.Logger, optional): The logger instance for all output.
            random_source (callable, optional): A pre-built uniform [0, 1)
                source. If None, one will be generated from the seed.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.user_config = config or {}

        self.settings = {
            'seed': self.user_config.get('seed', DEFAULTS.DEFAULT_SEED),
        }
        self.seed = self.settings['seed']

        if random_source is not None:
            self._random = random_source
            self.logger.debug("Initialized with injected random source.")
        else:
            self._random = np.random.default_rng(self.seed).random
            self.logger.debug(f"No random source provided, seeding numpy generator with {self.seed}.")

        # A reentrant lock keeps the first caller's gradient for a lattice
        # point authoritative when one instance is shared between threads.
        self._lock = threading.RLock()
        self._gradients = GradientStore(self._random)
        self._values = ValueCache()
        self._scheduler = PrecomputeScheduler(self._gradients)

    @property
    def gradients(self) -> GradientStore:
        return self._gradients

    @property
    def values(self) -> ValueCache:
        return self._values

    def get(self, x: float, y: float = 0) -> float:
        """
        Gets the noise value at the specified coordinates.

        Args:
            x (float): The noise x coordinate.
            y (float): The noise y coordinate. Defaults to 0.

        Returns:
            float: The noise value, nominally between -1 and 1.

        Raises:
            NonFiniteCoordinateError: If x or y is NaN or infinite.
        """
        with self._lock:
            cached = self._values.get(x, y)
            if cached is not None:
                return cached

            require_finite(x, y)

            xf = math.floor(x)
            yf = math.floor(y)

            tl = self._grid_dot_product(x, y, xf, yf)
            tr = self._grid_dot_product(x, y, xf + 1, yf)
            bl = self._grid_dot_product(x, y, xf, yf + 1)
            br = self._grid_dot_product(x, y, xf + 1, yf + 1)

            xt = fade(x - xf, tl, tr)
            xb = fade(x - xf, bl, br)
            v = float(fade(y - yf, xt, xb))

            self._values.set(x, y, v)
            return v

    __call__ = get

    def clear_cache(self) -> None:
        """
        Clears the noise value cache. Gradients are kept, so recomputed
        values match the ones that were dropped.
        """
        with self._lock:
            count = len(self._values)
            self._values.clear()
        self.logger.info(f"Cleared {count} cached noise values.")

    def clear_gradients(self) -> None:
        """
        Clears the gradient cache. New random gradients are generated on
        subsequent get() calls; values already memoized are not touched.
        """
        with self._lock:
            count = len(self._gradients)
            self._gradients.clear()
        self.logger.info(f"Cleared {count} lattice gradients.")

    def precompute_gradients(self, x_min: float, x_max: float, y_min: float, y_max: float) -> None:
        """
        Precomputes gradients for a range of coordinates. Useful when the
        region that will be queried is known in advance.

        Args:
            x_min (float): Minimum x coordinate.
            x_max (float): Maximum x coordinate.
            y_min (float): Minimum y coordinate.
            y_max (float): Maximum y coordinate.
        """
        with self._lock:
            before = len(self._gradients)
            self._scheduler.run(x_min, x_max, y_min, y_max)
            created = len(self._gradients) - before
        self.logger.debug(
            f"Precomputed gradients over x=[{x_min}, {x_max}], y=[{y_min}, {y_max}]: "
            f"{created} new, {before + created} total."
        )

    def _grid_dot_product(self, x: float, y: float, ix: int, iy: int) -> float:
        gx, gy = self._gradients.get_or_create(ix, iy)
        return _dot(x - ix, y - iy, gx, gy)
