# gradient_noise/gen.py

"""
================================================================================
GENERATIVE HELPERS
================================================================================
Small numeric helpers that are commonly combined with noise when building
procedural content. The pure formulas are module-level functions; the
helpers that need randomness live on the Gen class, which draws from an
injectable uniform [0, 1) source just like Noise does.
================================================================================
"""
import math
from typing import Callable, Optional, Sequence

import numpy as np

from . import config as DEFAULTS

# Shape parameter of the 80-20 Pareto distribution.
PARETO_ALPHA = math.log(5) / math.log(4)


def round_half_up(n: float) -> int:
    """Rounds to the nearest integer, exact halves towards +inf (2.5 -> 3, -1.5 -> -1)."""
    return math.floor(n + 0.5)


def constrain(num: float, lo: float, hi: float) -> float:
    """Clamps num into [lo, hi]."""
    return min(max(num, lo), hi)


def dist(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between (x1, y1) and (x2, y2)."""
    return math.hypot(x1 - x2, y1 - y2)


def interp(start: float, stop: float, amount: float = 0.5) -> float:
    """Linear interpolation; returns the midpoint by default."""
    return amount * (stop - start) + start


def map_range(value: float, start1: float, stop1: float, start2: float, stop2: float,
              as_float: bool = True) -> float:
    """
    Re-maps a number from [start1, stop1] to [start2, stop2].
    Values outside the source range are extrapolated, not clamped.
    """
    n = (value - start1) / (stop1 - start1) * (stop2 - start2) + start2
    return n if as_float else round_half_up(n)


class Gen:
    """Random helpers backed by a single uniform [0, 1) source."""

    def __init__(self, random_source: Optional[Callable[[], float]] = None, seed: int = None):
        if random_source is None:
            random_source = np.random.default_rng(
                DEFAULTS.DEFAULT_SEED if seed is None else seed
            ).random
        self._random = random_source

    def chance(self, n1: float = 50, n2: float = None) -> bool:
        """
        Returns True with n1 percent probability. With two arguments they are
        read as odds, n1 to n2, so chance(1, 3) is true three times in four.
        """
        n = n2 / (n1 + n2) * 100 if n2 is not None else n1
        return n > self._random() * 100

    def gaussian(self, mean: float = 0.0, sigma: float = 1.0, as_float: bool = True) -> float:
        """
        Normal deviate via the standard Box-Muller transform, sqrt(-2 ln u) cos(2 pi v).
        Not the cos(pi v) sqrt(-ln u) shortcut: the same draws give different values.
        """
        u = 1.0 - self._random()  # (0, 1], keeps log() finite
        v = self._random()
        z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
        g = z * sigma + mean
        return g if as_float else round_half_up(g)

    def pareto(self, minimum: float, as_float: bool = True) -> float:
        """Power-law deviate, never below minimum (the 80-20 rule)."""
        n = 1.0 - self._random()
        p = minimum / n ** (1.0 / PARETO_ALPHA)
        return p if as_float else round_half_up(p)

    def random(self, lo: float, hi: float = 1, as_float: bool = False) -> float:
        """
        A random number between lo and hi. Rounded to an integer unless
        as_float is set or the range spans at most 1.
        """
        r = self._random() * (hi - lo) + lo
        return r if as_float or hi - lo <= 1 else round_half_up(r)

    def pick(self, items: Sequence):
        """A random element of a non-empty sequence."""
        if not items:
            raise IndexError("Cannot pick from an empty sequence")
        return items[round_half_up(self._random() * (len(items) - 1))]
