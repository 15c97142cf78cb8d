# gradient_noise/__init__.py

# This file makes the 'gradient_noise' directory a Python package.
# It also defines the public API of the package.

from .noise import Noise, PrecomputeScheduler
from .gradients import GradientStore
from .value_cache import ValueCache
from .errors import NonFiniteCoordinateError
from .gen import Gen

__all__ = [
    "Noise",
    "PrecomputeScheduler",
    "GradientStore",
    "ValueCache",
    "NonFiniteCoordinateError",
    "Gen",
]
