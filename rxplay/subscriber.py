import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union

from rxplay.completion import Completion
from rxplay.demand import Demand, DemandState, as_demand
from rxplay.subscription import Cancellable, Subscription

logger = logging.getLogger(__name__)


class Subscriber(ABC):
    """
    Receiving end of a publisher.

    The publisher calls ``receive_subscription`` exactly once, then
    ``receive`` for each value within the requested demand, then at most one
    ``receive_completion``. ``receive`` returns how much demand to add.
    """

    @abstractmethod
    def receive_subscription(self, subscription: Subscription) -> None:
        pass

    @abstractmethod
    def receive(self, value: Any) -> Union[Demand, int, None]:
        pass

    @abstractmethod
    def receive_completion(self, completion: Completion) -> None:
        pass


class _Terminal(Subscriber, Cancellable):
    """Subscriber that requests unlimited demand and can be cancelled."""

    def __init__(self) -> None:
        self._subscription: Optional[Subscription] = None
        self._cancelled = False

    def receive_subscription(self, subscription: Subscription) -> None:
        if self._subscription is not None or self._cancelled:
            subscription.cancel()
            return
        self._subscription = subscription
        subscription.request(Demand.unlimited())

    def receive_completion(self, completion: Completion) -> None:
        self._subscription = None

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.cancel()


class Sink(_Terminal):
    """Calls ``receive_value`` for every value and ``receive_completion`` once."""

    def __init__(
        self,
        receive_value: Optional[Callable[[Any], Any]] = None,
        receive_completion: Optional[Callable[[Completion], Any]] = None,
    ) -> None:
        super().__init__()
        self._receive_value = receive_value
        self._receive_completion = receive_completion

    def receive(self, value: Any) -> Demand:
        if not self._cancelled and self._receive_value is not None:
            self._receive_value(value)
        return Demand.none()

    def receive_completion(self, completion: Completion) -> None:
        super().receive_completion(completion)
        if not self._cancelled and self._receive_completion is not None:
            self._receive_completion(completion)


class Assign(_Terminal):
    """Writes every value to ``name`` on ``target``."""

    def __init__(self, target: Any, name: str) -> None:
        super().__init__()
        self.target = target
        self.name = name

    def receive(self, value: Any) -> Demand:
        if not self._cancelled:
            setattr(self.target, self.name, value)
        return Demand.none()


class AssignToSubject(_Terminal):
    """Forwards values into a subject; the subject's own completion is untouched."""

    def __init__(self, subject: Any) -> None:
        super().__init__()
        self.subject = subject

    def receive(self, value: Any) -> Demand:
        if not self._cancelled:
            self.subject.send(value)
        return Demand.none()


class DemandSubscriber(Subscriber):
    """
    Subscriber with a bounded initial request that it may raise per value.

    ``adjust`` is a plain function of the received value returning the extra
    demand (``Demand.none()``, an int, or ``None`` for no change; a negative
    int also means no change). The running
    totals are kept in an immutable ``DemandState``.
    """

    def __init__(
        self,
        initial: Union[Demand, int],
        adjust: Optional[Callable[[Any], Union[Demand, int, None]]] = None,
        on_value: Optional[Callable[[Any], Any]] = None,
        on_completion: Optional[Callable[[Completion], Any]] = None,
    ) -> None:
        self.state = DemandState.start(initial)
        self.adjust = adjust
        self.on_value = on_value
        self.on_completion = on_completion
        self.received = []
        self.completion: Optional[Completion] = None
        self.subscription: Optional[Subscription] = None

    @property
    def terminated(self) -> bool:
        return self.completion is not None

    def receive_subscription(self, subscription: Subscription) -> None:
        self.subscription = subscription
        subscription.request(self.state.initial)

    def receive(self, value: Any) -> Demand:
        self.received.append(value)
        if self.on_value is not None:
            self.on_value(value)
        delta = self._delta(value)
        self.state = self.state.advance(delta)
        logger.debug("received %r, adding %r, now %r", value, delta, self.state.cumulative)
        return delta

    def _delta(self, value: Any) -> Demand:
        if self.adjust is None:
            return Demand.none()
        delta = self.adjust(value)
        # demand never shrinks
        if isinstance(delta, int) and delta < 0:
            logger.debug("clamping negative delta %d for %r to none", delta, value)
            return Demand.none()
        return as_demand(delta)

    def receive_completion(self, completion: Completion) -> None:
        self.completion = completion
        if self.on_completion is not None:
            self.on_completion(completion)
