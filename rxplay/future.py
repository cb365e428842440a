import logging
import threading
from typing import Any, Callable, List, Optional

from rxplay.completion import Completion
from rxplay.errors import FutureTimeoutError
from rxplay.publisher import Publisher
from rxplay.subscriber import Subscriber
from rxplay.subscription import BufferedSubscription

logger = logging.getLogger(__name__)


class Promise:
    """Settles its future exactly once; later calls are ignored."""

    def __init__(self, future: "Future") -> None:
        self._future = future

    def resolve(self, value: Any) -> None:
        self._future._settle(value, Completion.finished)

    def reject(self, error: BaseException) -> None:
        self._future._settle(None, Completion.failure(error))


class _FutureSubscription(BufferedSubscription):
    def __init__(self, future: "Future", subscriber: Subscriber) -> None:
        super().__init__(subscriber)
        self._future = future

    def _on_cancel(self) -> None:
        self._future._detach(self)

    def __repr__(self) -> str:
        return "Future"


class Future(Publisher):
    """
    Single-shot producer.

    ``attempt`` is called once, right away, with a ``Promise``. Whenever the
    promise is settled, possibly from another thread, every subscriber gets
    the value followed by ``finished``, or the failure. Subscribers arriving
    later get the same outcome replayed.
    """

    DEFAULT_TIMER_DAEMON = True

    def __init__(self, attempt: Callable[[Promise], Any]) -> None:
        self._lock = threading.Lock()
        self._settled = threading.Event()
        self._value: Any = None
        self._completion: Optional[Completion] = None
        self._subscriptions: List[_FutureSubscription] = []
        attempt(Promise(self))

    @classmethod
    def after(
        cls,
        delay: float,
        factory: Callable[[], Any],
        daemon: Optional[bool] = None,
    ) -> "Future":
        """Future settled with ``factory()`` on a background timer after ``delay`` seconds.

        An exception raised by ``factory`` rejects the future.
        """

        def attempt(promise: Promise) -> None:
            def fire() -> None:
                try:
                    value = factory()
                except Exception as e:
                    promise.reject(e)
                    return
                promise.resolve(value)

            timer = threading.Timer(delay, fire)
            timer.daemon = cls.DEFAULT_TIMER_DAEMON if daemon is None else daemon
            timer.start()

        return cls(attempt)

    @property
    def done(self) -> bool:
        return self._completion is not None

    def result(self, timeout: Optional[float] = None) -> Any:
        """Block until settled; return the value or raise the failure."""
        if not self._settled.wait(timeout):
            raise FutureTimeoutError(f"future not settled after {timeout}s")
        if self._completion.is_failure:
            raise self._completion.error
        return self._value

    def subscribe(self, subscriber: Subscriber) -> None:
        subscription = _FutureSubscription(self, subscriber)
        subscriber.receive_subscription(subscription)
        with self._lock:
            settled = self._completion is not None
            if not settled:
                self._subscriptions.append(subscription)
        if settled:
            self._deliver(subscription)

    def _settle(self, value: Any, completion: Completion) -> None:
        with self._lock:
            if self._completion is not None:
                logger.debug("future already settled, ignoring %s", completion)
                return
            self._value = value
            self._completion = completion
            subscriptions, self._subscriptions = self._subscriptions, []
        logger.debug("future settled with %r (%s)", value, completion)
        for subscription in subscriptions:
            self._deliver(subscription)
        # waiters in result() wake only after current subscribers were served
        self._settled.set()

    def _deliver(self, subscription: _FutureSubscription) -> None:
        if self._completion.is_finished:
            subscription.emit(self._value)
        subscription.finish(self._completion)

    def _detach(self, subscription: _FutureSubscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def __repr__(self) -> str:
        return "Future"
