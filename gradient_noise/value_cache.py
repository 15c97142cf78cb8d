# gradient_noise/value_cache.py

from typing import Dict, Optional, Tuple

QueryKey = Tuple[float, float]


class ValueCache:
    """Memoizes noise values by their exact (x, y) query pair."""

    def __init__(self):
        self._values: Dict[QueryKey, float] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key) -> bool:
        return key in self._values

    def get(self, x: float, y: float) -> Optional[float]:
        return self._values.get((x, y))

    def set(self, x: float, y: float, value: float) -> None:
        self._values[(x, y)] = value

    def clear(self) -> None:
        self._values = {}
