import logging
import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import TYPE_CHECKING, Any, Deque, Optional, Union

from rxplay.completion import Completion
from rxplay.demand import Demand, as_demand

if TYPE_CHECKING:  # pragma: no cover
    from rxplay.subscriber import Subscriber

logger = logging.getLogger(__name__)


class Cancellable(ABC):
    """Handle on a live subscription that can be torn down."""

    @abstractmethod
    def cancel(self) -> None:
        pass

    def store(self, collection: Union[set, list]) -> "Cancellable":
        """Keep this handle alive in ``collection`` (a set or a list)."""
        if isinstance(collection, set):
            collection.add(self)
        else:
            collection.append(self)
        return self


class Subscription(Cancellable):
    """Link between one publisher and one subscriber."""

    @abstractmethod
    def request(self, demand: Union[Demand, int]) -> None:
        pass


class EmptySubscription(Subscription):
    """Subscription handed out by sources that are already terminated."""

    def request(self, demand: Union[Demand, int]) -> None:
        as_demand(demand)

    def cancel(self) -> None:
        pass

    def __repr__(self) -> str:
        return "Empty"


class BufferedSubscription(Subscription):
    """
    Subscription that delivers values strictly within the subscriber's demand.

    Values handed to ``emit`` are queued and delivered while demand lasts;
    the demand a subscriber returns from ``receive`` is added back. A
    ``finished`` completion is delivered once the queue is drained, a
    failure is delivered immediately and discards queued values. Sources
    that produce on demand override ``_pull``.

    All state changes happen under a re-entrant lock, so a value may be
    emitted from a timer thread while the owner requests more demand.
    """

    def __init__(self, subscriber: "Subscriber") -> None:
        self._subscriber = subscriber
        self._demand = Demand.none()
        self._pending: Deque[Any] = deque()
        self._completion: Optional[Completion] = None
        self._done = False
        self._draining = False
        self._lock = threading.RLock()

    @property
    def done(self) -> bool:
        return self._done

    @property
    def demand(self) -> Demand:
        return self._demand

    @property
    def has_demand(self) -> bool:
        """True if a value emitted now would be delivered right away."""
        return (
            not self._done
            and self._completion is None
            and not self._pending
            and bool(self._demand)
        )

    def request(self, demand: Union[Demand, int]) -> None:
        demand = as_demand(demand)
        with self._lock:
            if self._done:
                return
            logger.debug("request %r on %r", demand, self)
            self._demand = self._demand + demand
            self._drain()

    def cancel(self) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
            self._pending.clear()
            logger.debug("cancel %r", self)
        self._on_cancel()

    def emit(self, value: Any) -> bool:
        """Queue ``value`` for delivery. Returns False once terminated."""
        with self._lock:
            if self._done or self._completion is not None:
                return False
            self._pending.append(value)
            self._drain()
            return True

    def finish(self, completion: Completion) -> None:
        with self._lock:
            if self._done or self._completion is not None:
                return
            if completion.is_failure:
                self._pending.clear()
            self._completion = completion
            self._drain()

    def _pull(self) -> bool:
        """Produce the next value or completion on demand.

        Returns True if anything was queued.
        """
        return False

    def _on_cancel(self) -> None:
        pass

    def _on_terminate(self) -> None:
        pass

    def _drain(self) -> None:
        if self._draining:
            return
        self._draining = True
        try:
            while not self._done:
                if self._pending:
                    if not self._demand:
                        break
                    value = self._pending.popleft()
                    self._demand = self._demand.consume()
                    extra = as_demand(self._subscriber.receive(value))
                    self._demand = self._demand + extra
                elif self._completion is not None:
                    self._done = True
                    logger.debug("%r completes with %s", self, self._completion)
                    self._subscriber.receive_completion(self._completion)
                    self._on_terminate()
                elif not (self._demand and self._pull()):
                    break
        finally:
            self._draining = False
