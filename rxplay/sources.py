import logging
from typing import Any, Iterable, Iterator

from rxplay.completion import Completion
from rxplay.publisher import Publisher
from rxplay.subscriber import Subscriber
from rxplay.subscription import BufferedSubscription, EmptySubscription

logger = logging.getLogger(__name__)


class _SequenceSubscription(BufferedSubscription):
    def __init__(self, subscriber: Subscriber, iterator: Iterator[Any]) -> None:
        super().__init__(subscriber)
        self._iterator = iterator

    def _pull(self) -> bool:
        try:
            self._pending.append(next(self._iterator))
        except StopIteration:
            self._completion = Completion.finished
        return True

    def _on_cancel(self) -> None:
        self._iterator = iter(())

    def __repr__(self) -> str:
        return "Sequence"


class SequencePublisher(Publisher):
    """
    Publishes the items of an iterable, one per unit of demand, then finishes.

    Every subscriber starts a fresh iteration, so pass a re-iterable
    (list, tuple, range, str) when more than one subscriber is expected.
    """

    def __init__(self, values: Iterable[Any]) -> None:
        self.source = values

    def subscribe(self, subscriber: Subscriber) -> None:
        subscription = _SequenceSubscription(subscriber, iter(self.source))
        logger.debug("subscribe %r to %r", subscriber, self)
        subscriber.receive_subscription(subscription)

    def __repr__(self) -> str:
        return "Sequence"


class Just(SequencePublisher):
    """Publishes a single value to each subscriber, then finishes."""

    def __init__(self, value: Any) -> None:
        super().__init__((value,))
        self.value = value

    def __repr__(self) -> str:
        return "Just"


class Empty(Publisher):
    """Finishes immediately without a value."""

    def subscribe(self, subscriber: Subscriber) -> None:
        subscriber.receive_subscription(EmptySubscription())
        subscriber.receive_completion(Completion.finished)

    def __repr__(self) -> str:
        return "Empty"


class Fail(Publisher):
    """Fails immediately with ``error``."""

    def __init__(self, error: BaseException) -> None:
        self.completion = Completion.failure(error)

    def subscribe(self, subscriber: Subscriber) -> None:
        subscriber.receive_subscription(EmptySubscription())
        subscriber.receive_completion(self.completion)

    def __repr__(self) -> str:
        return "Fail"
