import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Optional, TYPE_CHECKING, Union

from rxplay.completion import Completion
from rxplay.subscriber import Assign, AssignToSubject, Sink, Subscriber
from rxplay.subscription import Cancellable

if TYPE_CHECKING:  # pragma: no cover
    from rxplay.streams import AsyncValues


class Publisher(ABC):
    """
    Source of zero or more values followed by exactly one completion.

    Operators are methods returning a new publisher wrapping this one, so
    pipelines read top to bottom::

        publisher_of(range(1, 11)).filter(lambda n: n % 3 == 0).sink(print)
    """

    @abstractmethod
    def subscribe(self, subscriber: Subscriber) -> None:
        """Attach ``subscriber``; it receives a subscription right away."""
        pass

    # terminal consumers

    def sink(
        self,
        receive_value: Optional[Callable[[Any], Any]] = None,
        receive_completion: Optional[Callable[[Completion], Any]] = None,
    ) -> Cancellable:
        sink = Sink(receive_value=receive_value, receive_completion=receive_completion)
        self.subscribe(sink)
        return sink

    def assign(self, name: str, on: Any) -> Cancellable:
        assign = Assign(on, name)
        self.subscribe(assign)
        return assign

    def assign_to(self, subject: Any) -> Cancellable:
        """Republish every value through ``subject``, ignoring completion."""
        assign = AssignToSubject(subject)
        self.subscribe(assign)
        return assign

    def values(self, max_buffer_size: Union[int, float] = math.inf) -> "AsyncValues":
        """Subscribe now and return an async iterator over the values."""
        from rxplay.streams import AsyncValues

        return AsyncValues(self, max_buffer_size)

    def erase_to_any_publisher(self) -> "AnyPublisher":
        return AnyPublisher(self)

    # transforming operators

    def map(self, transform: Callable[[Any], Any]) -> "Publisher":
        return transforming.Map(self, transform)

    def try_map(self, transform: Callable[[Any], Any]) -> "Publisher":
        return transforming.TryMap(self, transform)

    def collect(self, count: Optional[int] = None) -> "Publisher":
        return transforming.Collect(self, count)

    def flat_map(
        self,
        transform: Callable[[Any], "Publisher"],
        max_publishers: Optional[int] = None,
    ) -> "Publisher":
        return transforming.FlatMap(self, transform, max_publishers)

    def replace_nil(self, value: Any) -> "Publisher":
        return transforming.Map(self, lambda v: value if v is None else v)

    def replace_empty(self, value: Any) -> "Publisher":
        return transforming.ReplaceEmpty(self, value)

    def scan(self, initial: Any, accumulate: Callable[[Any, Any], Any]) -> "Publisher":
        return transforming.Scan(self, initial, accumulate)

    def print_events(self, prefix: str = "", stream: Any = None) -> "Publisher":
        return transforming.PrintEvents(self, prefix, stream)

    # filtering operators

    def filter(self, predicate: Callable[[Any], bool]) -> "Publisher":
        return filtering.Filter(self, predicate)

    def compact_map(self, transform: Callable[[Any], Any]) -> "Publisher":
        return filtering.CompactMap(self, transform)

    def remove_duplicates(
        self, by: Optional[Callable[[Any, Any], bool]] = None
    ) -> "Publisher":
        return filtering.RemoveDuplicates(self, by)

    def ignore_output(self) -> "Publisher":
        return filtering.IgnoreOutput(self)

    def first(self, where: Optional[Callable[[Any], bool]] = None) -> "Publisher":
        return filtering.First(self, where)

    def last(self, where: Optional[Callable[[Any], bool]] = None) -> "Publisher":
        return filtering.Last(self, where)

    def drop_first(self, count: int = 1) -> "Publisher":
        return filtering.DropFirst(self, count)

    def drop_while(self, predicate: Callable[[Any], bool]) -> "Publisher":
        return filtering.DropWhile(self, predicate)

    def drop_until_output_from(self, other: "Publisher") -> "Publisher":
        return filtering.DropUntilOutputFrom(self, other)

    def prefix(self, count: int) -> "Publisher":
        return filtering.Prefix(self, count)

    def prefix_while(self, predicate: Callable[[Any], bool]) -> "Publisher":
        return filtering.PrefixWhile(self, predicate)

    def prefix_until_output_from(self, other: "Publisher") -> "Publisher":
        return filtering.PrefixUntilOutputFrom(self, other)


class AnyPublisher(Publisher):
    """Wraps a publisher so callers only see the publisher interface."""

    def __init__(self, upstream: Publisher) -> None:
        self._upstream = upstream

    def subscribe(self, subscriber: Subscriber) -> None:
        self._upstream.subscribe(subscriber)

    def erase_to_any_publisher(self) -> "AnyPublisher":
        return self

    def __repr__(self) -> str:
        return "AnyPublisher"


def publisher_of(values: Iterable[Any]) -> Publisher:
    """Publisher emitting the items of ``values`` for every subscriber."""
    from rxplay.sources import SequencePublisher

    return SequencePublisher(values)


# Operators subclass Publisher, so they can only be imported once it exists.
from rxplay.operators import filtering, transforming  # noqa: E402
