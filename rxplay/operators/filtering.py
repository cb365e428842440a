import logging
from typing import Any, Callable, Optional

from rxplay.completion import Completion
from rxplay.demand import Demand
from rxplay.operators.base import BufferedRelay, Operator, Relay
from rxplay.publisher import Publisher
from rxplay.subscriber import Sink
from rxplay.subscription import Subscription

logger = logging.getLogger(__name__)


class _PredicateOperator(Operator):
    def __init__(self, upstream: Publisher, predicate: Callable[[Any], bool]) -> None:
        super().__init__(upstream)
        self.predicate = predicate


class _FilterRelay(Relay):
    def on_value(self, value: Any) -> Demand:
        if self.operator.predicate(value):
            return self.deliver(value)
        return self.skip()


class Filter(_PredicateOperator):
    relay_class = _FilterRelay


class _CompactMapRelay(Relay):
    def on_value(self, value: Any) -> Demand:
        transformed = self.operator.transform(value)
        if transformed is None:
            return self.skip()
        return self.deliver(transformed)


class CompactMap(Operator):
    """Maps values and silently drops every ``None`` result."""

    relay_class = _CompactMapRelay

    def __init__(self, upstream: Publisher, transform: Callable[[Any], Any]) -> None:
        super().__init__(upstream)
        self.transform = transform


_UNSET = object()


class _RemoveDuplicatesRelay(Relay):
    previous = _UNSET

    def on_value(self, value: Any) -> Demand:
        previous, self.previous = self.previous, value
        if previous is not _UNSET and self.operator.same(previous, value):
            return self.skip()
        return self.deliver(value)


class RemoveDuplicates(Operator):
    """Drops a value when it equals the one right before it."""

    relay_class = _RemoveDuplicatesRelay

    def __init__(
        self, upstream: Publisher, by: Optional[Callable[[Any, Any], bool]] = None
    ) -> None:
        super().__init__(upstream)
        self.same = by if by is not None else (lambda a, b: a == b)


class _IgnoreOutputRelay(Relay):
    def on_value(self, value: Any) -> Demand:
        return self.skip()


class IgnoreOutput(Operator):
    relay_class = _IgnoreOutputRelay


class _FirstRelay(Relay):
    def on_value(self, value: Any) -> Demand:
        where = self.operator.where
        if where is not None and not where(value):
            return self.skip()
        self.deliver(value)
        self.terminate()
        return Demand.none()


class First(Operator):
    relay_class = _FirstRelay

    def __init__(
        self, upstream: Publisher, where: Optional[Callable[[Any], bool]] = None
    ) -> None:
        super().__init__(upstream)
        self.where = where


class _LastRelay(BufferedRelay):
    latest = _UNSET

    def on_value(self, value: Any) -> None:
        where = self.operator.where
        if where is None or where(value):
            self.latest = value

    def on_completion(self, completion: Completion) -> None:
        if completion.is_finished and self.latest is not _UNSET:
            self.emit(self.latest)
        self.finish(completion)


class Last(First):
    """Emits the last matching value once upstream finishes."""

    relay_class = _LastRelay


def _check_count(count: int) -> int:
    if not isinstance(count, int) or count < 0:
        raise ValueError(f"count must be a non-negative int, got: {count!r}")
    return count


class _DropFirstRelay(Relay):
    dropped = 0

    def on_value(self, value: Any) -> Demand:
        if self.dropped < self.operator.count:
            self.dropped += 1
            return self.skip()
        return self.deliver(value)


class DropFirst(Operator):
    relay_class = _DropFirstRelay

    def __init__(self, upstream: Publisher, count: int = 1) -> None:
        super().__init__(upstream)
        self.count = _check_count(count)


class _DropWhileRelay(Relay):
    dropping = True

    def on_value(self, value: Any) -> Demand:
        if self.dropping and self.operator.predicate(value):
            return self.skip()
        self.dropping = False
        return self.deliver(value)


class DropWhile(_PredicateOperator):
    """Drops values until ``predicate`` first returns False, then lets all through."""

    relay_class = _DropWhileRelay


class _PrefixRelay(Relay):
    taken = 0

    def receive_subscription(self, subscription: Subscription) -> None:
        super().receive_subscription(subscription)
        if self.operator.count == 0:
            self.terminate()

    def on_value(self, value: Any) -> Demand:
        count = self.operator.count
        if self.taken >= count:
            self.terminate()
            return Demand.none()
        self.taken += 1
        demand = self.deliver(value)
        if self.taken >= count:
            self.terminate()
            return Demand.none()
        return demand


class Prefix(Operator):
    """Passes at most ``count`` values, then finishes and cancels upstream."""

    relay_class = _PrefixRelay

    def __init__(self, upstream: Publisher, count: int) -> None:
        super().__init__(upstream)
        self.count = _check_count(count)


class _PrefixWhileRelay(Relay):
    def on_value(self, value: Any) -> Demand:
        if self.operator.predicate(value):
            return self.deliver(value)
        self.terminate()
        return Demand.none()


class PrefixWhile(_PredicateOperator):
    relay_class = _PrefixWhileRelay


class _TriggeredRelay(Relay):
    """Relay that also watches a second publisher for its first value."""

    triggered = False
    trigger: Optional[Sink] = None

    def receive_subscription(self, subscription: Subscription) -> None:
        super().receive_subscription(subscription)
        if self._done:
            return
        self.trigger = Sink(
            receive_value=self._on_trigger_value,
            receive_completion=self._on_trigger_completion,
        )
        self.operator.other.subscribe(self.trigger)

    def _on_trigger_value(self, value: Any) -> None:
        if self.triggered:
            return
        self.triggered = True
        logger.debug("%r triggered by %r", self, value)
        self._release_trigger()
        self.on_trigger()

    def _on_trigger_completion(self, completion: Completion) -> None:
        if completion.is_failure:
            self.terminate(completion)

    def on_trigger(self) -> None:
        pass

    def _release_trigger(self) -> None:
        trigger, self.trigger = self.trigger, None
        if trigger is not None:
            trigger.cancel()

    def cancel(self) -> None:
        self._release_trigger()
        super().cancel()

    def terminate(self, completion: Completion = Completion.finished) -> None:
        self._release_trigger()
        super().terminate(completion)

    def on_completion(self, completion: Completion) -> None:
        self._release_trigger()
        super().on_completion(completion)


class _DropUntilOutputFromRelay(_TriggeredRelay):
    def on_value(self, value: Any) -> Demand:
        if not self.triggered:
            return self.skip()
        return self.deliver(value)


class _PrefixUntilOutputFromRelay(_TriggeredRelay):
    def on_trigger(self) -> None:
        self.terminate()


class _OtherOperator(Operator):
    def __init__(self, upstream: Publisher, other: Publisher) -> None:
        super().__init__(upstream)
        self.other = other


class DropUntilOutputFrom(_OtherOperator):
    """Drops values until ``other`` emits its first value."""

    relay_class = _DropUntilOutputFromRelay


class PrefixUntilOutputFrom(_OtherOperator):
    """Passes values until ``other`` emits its first value, then finishes."""

    relay_class = _PrefixUntilOutputFromRelay
