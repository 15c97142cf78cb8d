# gradient_noise/gradients.py

"""
================================================================================
GRADIENT STORE
================================================================================
This module owns the lattice of gradient vectors behind the noise field. Each
integer lattice point receives a random unit vector the first time it is
requested, and keeps it until the store is cleared.

Data Contract:
---------------
- Inputs (on initialization):
    - random_source (callable): Returns a uniform float in [0, 1) per call.
- Public Methods:
    - get_or_create(ix, iy): Returns the gradient for a lattice point.
    - precompute(x_min, x_max, y_min, y_max): Fills a rectangle of points.
    - clear(): Discards every gradient.
- Side Effects: Draws one value from random_source per new gradient.
- Invariants: Once created, a lattice point's gradient never changes until
  clear() is called. A seeded random_source plus the same sequence of
  requests always yields the same lattice.
================================================================================
"""
import math
from typing import Callable, Dict, Set, Tuple

from .errors import require_finite

LatticePoint = Tuple[int, int]
GradientVector = Tuple[float, float]

TWO_PI = 2.0 * math.pi


class GradientStore:
    """Lazily populated mapping of lattice points to unit gradient vectors."""

    def __init__(self, random_source: Callable[[], float]):
        self._random = random_source
        self._gradients: Dict[LatticePoint, GradientVector] = {}

    def __len__(self) -> int:
        return len(self._gradients)

    def __contains__(self, point) -> bool:
        return point in self._gradients

    def lattice_points(self) -> Set[LatticePoint]:
        """Returns a snapshot of every populated lattice point."""
        return set(self._gradients)

    def get_or_create(self, ix: int, iy: int) -> GradientVector:
        key = (ix, iy)
        gradient = self._gradients.get(key)
        if gradient is None:
            theta = self._random() * TWO_PI
            gradient = (math.cos(theta), math.sin(theta))
            self._gradients[key] = gradient
        return gradient

    def precompute(self, x_min: float, x_max: float, y_min: float, y_max: float) -> int:
        """
        Creates the gradient for every lattice point in the rectangle
        [floor(x_min), ceil(x_max)] x [floor(y_min), ceil(y_max)].

        Points that already hold a gradient are left untouched, and an
        inverted rectangle is simply empty. The x axis is the outer loop, so
        a seeded source always assigns draws to points in the same order.

        Returns:
            int: The number of gradients that were newly created.
        """
        require_finite(x_min, x_max, y_min, y_max)

        created = 0
        for ix in range(math.floor(x_min), math.ceil(x_max) + 1):
            for iy in range(math.floor(y_min), math.ceil(y_max) + 1):
                if (ix, iy) not in self._gradients:
                    self.get_or_create(ix, iy)
                    created += 1
        return created

    def clear(self) -> None:
        self._gradients = {}
