from dataclasses import dataclass
from typing import Optional, Union

from rxplay.errors import InvalidDemandError


class Demand:
    """
    Number of values a subscriber is still willing to receive.

    A demand is either ``unlimited`` or ``max(n)`` with ``n >= 0``.
    ``none`` is the same as ``max(0)``. Demands only ever grow through
    addition; the publisher side consumes them one value at a time.
    """

    __slots__ = ("_count",)

    def __init__(self, count: Optional[int]) -> None:
        if count is not None:
            if not isinstance(count, int) or isinstance(count, bool):
                raise TypeError("demand must be int or None")
            if count < 0:
                raise InvalidDemandError(f"demand must not be negative, got: {count}")
        self._count = count

    @classmethod
    def max(cls, count: int) -> "Demand":
        return cls(count)

    @classmethod
    def none(cls) -> "Demand":
        return cls(0)

    @classmethod
    def unlimited(cls) -> "Demand":
        return cls(None)

    @property
    def is_unlimited(self) -> bool:
        return self._count is None

    @property
    def count(self) -> Optional[int]:
        """Bounded count, or ``None`` for an unlimited demand."""
        return self._count

    def __add__(self, other: Union["Demand", int]) -> "Demand":
        other = as_demand(other)
        if self._count is None or other._count is None:
            return Demand.unlimited()
        return Demand(self._count + other._count)

    __radd__ = __add__

    def consume(self) -> "Demand":
        """Demand left after one value was delivered."""
        if self._count is None:
            return self
        if self._count == 0:
            raise InvalidDemandError("cannot deliver a value without demand")
        return Demand(self._count - 1)

    def __bool__(self) -> bool:
        return self._count is None or self._count > 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int) and not isinstance(other, bool):
            return self._count == other
        if not isinstance(other, Demand):
            return NotImplemented
        return self._count == other._count

    def __hash__(self) -> int:
        return hash(self._count)

    def __repr__(self) -> str:
        if self._count is None:
            return "unlimited"
        return f"max({self._count})"


def as_demand(value: Union[Demand, int, None]) -> Demand:
    """Coerce what a subscriber returned into a ``Demand``.

    ``None`` is treated as ``Demand.none()`` so ``receive`` implementations
    may simply fall off the end.
    """
    if isinstance(value, Demand):
        return value
    if value is None:
        return Demand.none()
    return Demand(value)


@dataclass(frozen=True)
class DemandState:
    """Initial request of a subscriber and the running total requested so far."""

    initial: Demand
    cumulative: Demand

    @classmethod
    def start(cls, initial: Union[Demand, int]) -> "DemandState":
        initial = as_demand(initial)
        return cls(initial=initial, cumulative=initial)

    def advance(self, delta: Union[Demand, int, None]) -> "DemandState":
        return DemandState(
            initial=self.initial, cumulative=self.cumulative + as_demand(delta)
        )
