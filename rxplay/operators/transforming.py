import logging
import sys
from typing import Any, Callable, List, Optional, Union

from rxplay.completion import Completion
from rxplay.demand import Demand, as_demand
from rxplay.operators.base import BufferedRelay, Operator, Relay
from rxplay.publisher import Publisher
from rxplay.subscriber import Subscriber
from rxplay.subscription import Subscription

logger = logging.getLogger(__name__)


class _MapRelay(Relay):
    def on_value(self, value: Any) -> Demand:
        return self.deliver(self.operator.transform(value))


class Map(Operator):
    relay_class = _MapRelay

    def __init__(self, upstream: Publisher, transform: Callable[[Any], Any]) -> None:
        super().__init__(upstream)
        self.transform = transform


class _TryMapRelay(Relay):
    def on_value(self, value: Any) -> Demand:
        try:
            mapped = self.operator.transform(value)
        except Exception as e:
            logger.debug("try_map failed on %r: %r", value, e)
            self.terminate(Completion.failure(e))
            return Demand.none()
        return self.deliver(mapped)


class TryMap(Map):
    """Like ``map``, but an exception raised by ``transform`` fails the stream."""

    relay_class = _TryMapRelay


class _ScanRelay(Relay):
    def __init__(self, operator: "Scan", downstream: Subscriber) -> None:
        super().__init__(operator, downstream)
        self.accumulated = operator.initial

    def on_value(self, value: Any) -> Demand:
        self.accumulated = self.operator.accumulate(self.accumulated, value)
        return self.deliver(self.accumulated)


class Scan(Operator):
    relay_class = _ScanRelay

    def __init__(
        self,
        upstream: Publisher,
        initial: Any,
        accumulate: Callable[[Any, Any], Any],
    ) -> None:
        super().__init__(upstream)
        self.initial = initial
        self.accumulate = accumulate


class _CollectRelay(BufferedRelay):
    def __init__(self, operator: "Collect", downstream: Subscriber) -> None:
        super().__init__(operator, downstream)
        self.buffer: List[Any] = []

    def on_value(self, value: Any) -> None:
        self.buffer.append(value)
        if self.operator.count is not None and len(self.buffer) == self.operator.count:
            chunk, self.buffer = self.buffer, []
            self.emit(chunk)

    def on_completion(self, completion: Completion) -> None:
        if completion.is_finished and (self.buffer or self.operator.count is None):
            chunk, self.buffer = self.buffer, []
            self.emit(chunk)
        self.finish(completion)


class Collect(Operator):
    """
    Gathers values into lists.

    Without ``count`` a single list is emitted when upstream finishes (an
    empty list for an empty upstream). With ``count`` a list is emitted
    every ``count`` values and the remainder, if any, on finish. A failure
    discards whatever was gathered.
    """

    relay_class = _CollectRelay

    def __init__(self, upstream: Publisher, count: Optional[int] = None) -> None:
        if count is not None and (not isinstance(count, int) or count < 1):
            raise ValueError(f"count must be a positive int, got: {count!r}")
        super().__init__(upstream)
        self.count = count


class _ReplaceEmptyRelay(BufferedRelay):
    seen = False

    def on_value(self, value: Any) -> None:
        self.seen = True
        self.emit(value)

    def on_completion(self, completion: Completion) -> None:
        if completion.is_finished and not self.seen:
            self.emit(self.operator.value)
        self.finish(completion)


class ReplaceEmpty(Operator):
    relay_class = _ReplaceEmptyRelay

    def __init__(self, upstream: Publisher, value: Any) -> None:
        super().__init__(upstream)
        self.value = value


class _InnerSubscriber(Subscriber):
    def __init__(self, outer: "_FlatMapRelay") -> None:
        self.outer = outer
        self.subscription: Optional[Subscription] = None

    def receive_subscription(self, subscription: Subscription) -> None:
        self.subscription = subscription
        subscription.request(Demand.unlimited())

    def receive(self, value: Any) -> Demand:
        self.outer.emit(value)
        return Demand.none()

    def receive_completion(self, completion: Completion) -> None:
        self.outer.inner_completed(self, completion)

    def cancel(self) -> None:
        if self.subscription is not None:
            self.subscription.cancel()


class _FlatMapRelay(BufferedRelay):
    def __init__(self, operator: "FlatMap", downstream: Subscriber) -> None:
        super().__init__(operator, downstream)
        self.inners: List[_InnerSubscriber] = []
        self.upstream_finished = False

    def upstream_demand(self) -> Demand:
        if self.operator.max_publishers is None:
            return Demand.unlimited()
        return Demand.max(self.operator.max_publishers)

    def on_value(self, value: Any) -> None:
        inner = _InnerSubscriber(self)
        self.inners.append(inner)
        self.operator.transform(value).subscribe(inner)

    def inner_completed(self, inner: _InnerSubscriber, completion: Completion) -> None:
        if inner in self.inners:
            self.inners.remove(inner)
        if completion.is_failure:
            self._fail(completion)
            return
        if self.operator.max_publishers is not None and self._upstream is not None:
            self._upstream.request(Demand.max(1))
        self._finish_if_idle()

    def on_completion(self, completion: Completion) -> None:
        if completion.is_failure:
            self._fail(completion)
            return
        self.upstream_finished = True
        self._finish_if_idle()

    def _finish_if_idle(self) -> None:
        if self.upstream_finished and not self.inners:
            self.finish(Completion.finished)

    def _fail(self, completion: Completion) -> None:
        self._cancel_inners()
        if self._upstream is not None:
            self._upstream.cancel()
        self.finish(completion)

    def _cancel_inners(self) -> None:
        inners, self.inners = self.inners, []
        for inner in inners:
            inner.cancel()

    def _on_cancel(self) -> None:
        super()._on_cancel()
        self._cancel_inners()


class FlatMap(Operator):
    """
    Subscribes to the publisher ``transform`` returns for each upstream value
    and merges their values into one stream.

    ``max_publishers`` bounds how many inner publishers are live at once.
    """

    relay_class = _FlatMapRelay

    def __init__(
        self,
        upstream: Publisher,
        transform: Callable[[Any], Publisher],
        max_publishers: Optional[int] = None,
    ) -> None:
        if max_publishers is not None and max_publishers < 1:
            raise ValueError("max_publishers must be greater than 0")
        super().__init__(upstream)
        self.transform = transform
        self.max_publishers = max_publishers


class _PrintRelay(Relay):
    def _print(self, message: str) -> None:
        stream = self.operator.stream if self.operator.stream is not None else sys.stdout
        prefix = f"{self.operator.prefix}: " if self.operator.prefix else ""
        print(f"{prefix}{message}", file=stream)

    def receive_subscription(self, subscription: Subscription) -> None:
        self._print(f"receive subscription: ({subscription!r})")
        super().receive_subscription(subscription)

    def request(self, demand: Union[Demand, int]) -> None:
        self._print(f"request {as_demand(demand)!r}")
        super().request(demand)

    def cancel(self) -> None:
        if not self._done:
            self._print("receive cancel")
        super().cancel()

    def on_value(self, value: Any) -> Demand:
        self._print(f"receive value: ({value!r})")
        return self.deliver(value)

    def on_completion(self, completion: Completion) -> None:
        if completion.is_failure:
            self._print(f"receive error: ({completion.error!r})")
        else:
            self._print("receive finished")
        super().on_completion(completion)


class PrintEvents(Operator):
    """Prints every event that passes through, for debugging pipelines."""

    DEFAULT_STREAM = None

    relay_class = _PrintRelay

    def __init__(self, upstream: Publisher, prefix: str = "", stream: Any = None) -> None:
        super().__init__(upstream)
        self.prefix = prefix
        self.stream = stream if stream is not None else self.DEFAULT_STREAM
