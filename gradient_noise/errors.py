# gradient_noise/errors.py

import math


class NonFiniteCoordinateError(ValueError):
    """Raised when a NaN or infinite coordinate reaches the noise field."""


def require_finite(*values: float) -> None:
    """Raises NonFiniteCoordinateError unless every value is finite."""
    for value in values:
        if not math.isfinite(value):
            raise NonFiniteCoordinateError(
                f"Noise coordinates must be finite, got {value!r}"
            )
