from typing import Any, Optional, Union

from rxplay.completion import Completion
from rxplay.demand import Demand, as_demand
from rxplay.publisher import Publisher
from rxplay.subscriber import Subscriber
from rxplay.subscription import BufferedSubscription, Subscription


class Operator(Publisher):
    """Publisher that wraps ``upstream`` with one relay per subscriber."""

    relay_class: type

    def __init__(self, upstream: Publisher) -> None:
        self.upstream = upstream

    def subscribe(self, subscriber: Subscriber) -> None:
        self.upstream.subscribe(self.make_relay(subscriber))

    def make_relay(self, subscriber: Subscriber) -> Subscriber:
        return self.relay_class(self, subscriber)

    def __repr__(self) -> str:
        return type(self).__name__


class Relay(Subscriber, Subscription):
    """
    Per-subscription stage that forwards demand upstream unchanged.

    ``receive`` returns whatever the downstream returned, so demand flows
    back through the chain without bookkeeping. A stage that swallows a
    value returns ``Demand.max(1)`` to replace it.
    """

    def __init__(self, operator: Operator, downstream: Subscriber) -> None:
        self.operator = operator
        self._downstream = downstream
        self._upstream: Optional[Subscription] = None
        self._done = False

    def receive_subscription(self, subscription: Subscription) -> None:
        self._upstream = subscription
        self._downstream.receive_subscription(self)

    def request(self, demand: Union[Demand, int]) -> None:
        demand = as_demand(demand)
        if not self._done and self._upstream is not None:
            self._upstream.request(demand)

    def cancel(self) -> None:
        if self._done:
            return
        self._done = True
        if self._upstream is not None:
            self._upstream.cancel()

    def receive(self, value: Any) -> Demand:
        if self._done:
            return Demand.none()
        return self.on_value(value)

    def receive_completion(self, completion: Completion) -> None:
        if self._done:
            return
        self._done = True
        self.on_completion(completion)

    def on_value(self, value: Any) -> Demand:
        return self.deliver(value)

    def on_completion(self, completion: Completion) -> None:
        self._downstream.receive_completion(completion)

    def deliver(self, value: Any) -> Demand:
        return as_demand(self._downstream.receive(value))

    def skip(self) -> Demand:
        return Demand.max(1)

    def terminate(self, completion: Completion = Completion.finished) -> None:
        """Cancel upstream and complete downstream from inside the stage."""
        if self._done:
            return
        self._done = True
        if self._upstream is not None:
            self._upstream.cancel()
        self._downstream.receive_completion(completion)

    def __repr__(self) -> str:
        return repr(self.operator)


class BufferedRelay(BufferedSubscription, Subscriber):
    """
    Stage that needs the whole upstream before it can emit.

    It requests unlimited demand from upstream and hands its output to the
    downstream through the demand-respecting buffer.
    """

    def __init__(self, operator: Operator, downstream: Subscriber) -> None:
        super().__init__(downstream)
        self.operator = operator
        self._upstream: Optional[Subscription] = None

    def upstream_demand(self) -> Demand:
        return Demand.unlimited()

    def receive_subscription(self, subscription: Subscription) -> None:
        self._upstream = subscription
        self._subscriber.receive_subscription(self)
        if not self.done:
            subscription.request(self.upstream_demand())

    def receive(self, value: Any) -> Demand:
        if not self.done and self._completion is None:
            self.on_value(value)
        return Demand.none()

    def receive_completion(self, completion: Completion) -> None:
        if self.done:
            return
        self.on_completion(completion)

    def on_value(self, value: Any) -> None:
        self.emit(value)

    def on_completion(self, completion: Completion) -> None:
        self.finish(completion)

    def _on_cancel(self) -> None:
        if self._upstream is not None:
            self._upstream.cancel()

    def __repr__(self) -> str:
        return repr(self.operator)
