from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
import math
from typing import SupportsFloat

import numpy as np


_CANONICAL_NAN_BITS = int(np.float64(np.nan).view(np.uint64))


def canonical_bits(value: float) -> int:
    """IEEE-754 binary64 bits of `value` with NaN payloads and signed zero folded."""

    if math.isnan(value):
        return _CANONICAL_NAN_BITS
    if value == 0.0:
        return 0
    return int(np.float64(value).view(np.uint64))


@total_ordering
@dataclass(frozen=True, eq=False)
class OrderedFloat:
    """Float key with a total order and a bit-stable hash.

    Every NaN equals every other NaN and sorts above `+inf`. `-0.0` and `0.0`
    are the same key. Only for hashing, equality and ordering; do arithmetic on
    `value` before wrapping.
    """

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    @property
    def bits(self) -> int:
        return canonical_bits(self.value)

    def _sort_key(self) -> tuple[int, float]:
        if math.isnan(self.value):
            return (1, 0.0)
        return (0, self.value + 0.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedFloat):
            return NotImplemented
        return self.bits == other.bits

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, OrderedFloat):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self.bits)

    def __float__(self) -> float:
        return self.value


def ordered_floats(*values: SupportsFloat) -> tuple[OrderedFloat, ...]:
    return tuple(OrderedFloat(float(v)) for v in values)
