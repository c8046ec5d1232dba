"""Path cost / fitness values with an explicit "unreachable" case.

``Cost`` is either ``Finite(value)`` or the ``UNREACHABLE`` singleton. All
finite costs order below ``UNREACHABLE``; adding anything to ``UNREACHABLE``
yields ``UNREACHABLE``. This keeps missing edges and invalid paths out of
floating-point arithmetic, so averages and deviations never turn into NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import total_ordering
from typing import Iterable, Union


@total_ordering
class Cost:
    __slots__ = ()

    is_finite: bool = False

    def _key(self) -> tuple[int, float]:
        raise NotImplementedError

    @staticmethod
    def of(value: Union["Cost", float, int]) -> "Cost":
        """Coerce a number (``inf`` meaning unreachable) into a Cost."""
        if isinstance(value, Cost):
            return value
        value = float(value)
        if math.isnan(value):
            raise ValueError("NaN is not a valid cost")
        if math.isinf(value):
            if value < 0:
                raise ValueError("Negative infinity is not a valid cost")
            return UNREACHABLE
        return Finite(value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            other = Cost.of(other)
        if not isinstance(other, Cost):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            other = Cost.of(other)
        if not isinstance(other, Cost):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        # consistent with numeric equality: Finite(3) == 3.0, UNREACHABLE == inf
        return hash(float(self))

    def __add__(self, other: Union["Cost", float, int]) -> "Cost":
        other = Cost.of(other)
        if not (self.is_finite and other.is_finite):
            return UNREACHABLE
        return Finite(self.value + other.value)  # type: ignore[attr-defined]

    __radd__ = __add__

    def within(self, other: Union["Cost", float, int], tolerance: float) -> bool:
        """True when both costs are finite and differ by less than ``tolerance``."""
        other = Cost.of(other)
        if not (self.is_finite and other.is_finite):
            return False
        return abs(self.value - other.value) < tolerance  # type: ignore[attr-defined]


@dataclass(frozen=True, eq=False)
class Finite(Cost):
    value: float

    is_finite = True

    def _key(self) -> tuple[int, float]:
        return (0, float(self.value))

    def __float__(self) -> float:
        return float(self.value)

    def __repr__(self) -> str:
        return f"Finite({self.value:g})"

    def __format__(self, spec: str) -> str:
        return format(float(self.value), spec or "g")


class Unreachable(Cost):
    __slots__ = ()

    _instance: "Unreachable | None" = None

    def __new__(cls) -> "Unreachable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def _key(self) -> tuple[int, float]:
        return (1, 0.0)

    def __float__(self) -> float:
        return math.inf

    def __repr__(self) -> str:
        return "UNREACHABLE"

    def __format__(self, spec: str) -> str:
        return "∞"

    def __reduce__(self):
        return (Unreachable, ())


UNREACHABLE = Unreachable()
ZERO = Finite(0.0)


def total(costs: Iterable[Union[Cost, float]]) -> Cost:
    result: Cost = ZERO
    for c in costs:
        result = result + c
        if not result.is_finite:
            return UNREACHABLE
    return result


def mean(costs: Iterable[Cost]) -> Cost:
    """Arithmetic mean; unreachable if any member is unreachable or empty."""
    items = list(costs)
    if not items:
        return UNREACHABLE
    s = total(items)
    if not s.is_finite:
        return UNREACHABLE
    return Finite(s.value / len(items))  # type: ignore[attr-defined]


def pstdev(costs: Iterable[Cost]) -> Cost:
    items = list(costs)
    avg = mean(items)
    if not avg.is_finite:
        return UNREACHABLE
    variance = sum((float(c) - avg.value) ** 2 for c in items) / len(items)  # type: ignore[attr-defined]
    return Finite(math.sqrt(variance))


__all__ = ["Cost", "Finite", "Unreachable", "UNREACHABLE", "ZERO", "total", "mean", "pstdev"]
