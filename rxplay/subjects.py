import logging
import threading
from typing import Any, List, Optional

from rxplay.completion import Completion
from rxplay.publisher import Publisher
from rxplay.subscriber import Subscriber
from rxplay.subscription import BufferedSubscription, EmptySubscription

logger = logging.getLogger(__name__)


class _SubjectSubscription(BufferedSubscription):
    def __init__(self, subject: "Subject", subscriber: Subscriber) -> None:
        super().__init__(subscriber)
        self._subject = subject

    def _on_cancel(self) -> None:
        self._subject._detach(self)

    def _on_terminate(self) -> None:
        self._subject._detach(self)

    def __repr__(self) -> str:
        return type(self._subject).__name__


class Subject(Publisher):
    """
    Publisher driven from the outside through ``send``.

    A value reaches only the subscriptions that have outstanding demand at
    the moment it is sent; the others never see it. Once a completion is
    sent the subject is terminated: later values are ignored and late
    subscribers receive the stored completion straight away.
    """

    def __init__(self) -> None:
        self._subscriptions: List[_SubjectSubscription] = []
        self._completion: Optional[Completion] = None
        self._lock = threading.RLock()

    @property
    def completion(self) -> Optional[Completion]:
        return self._completion

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            completion = self._completion
            if completion is None:
                subscription = _SubjectSubscription(self, subscriber)
                self._subscriptions.append(subscription)
        if completion is not None:
            subscriber.receive_subscription(EmptySubscription())
            subscriber.receive_completion(completion)
            return
        logger.debug("subscribe %r to %r", subscriber, self)
        subscriber.receive_subscription(subscription)
        self._subscribed(subscription)

    def send(self, value: Any = None) -> None:
        with self._lock:
            if self._completion is not None:
                logger.debug("%r already completed, ignoring %r", self, value)
                return
            self._store(value)
            subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            if subscription.has_demand:
                subscription.emit(value)
            else:
                logger.debug("no demand, %r drops %r", subscription, value)

    def send_completion(self, completion: Completion = Completion.finished) -> None:
        with self._lock:
            if self._completion is not None:
                return
            self._completion = completion
            subscriptions = list(self._subscriptions)
        logger.debug("%r completes with %s", self, completion)
        for subscription in subscriptions:
            subscription.finish(completion)

    def _store(self, value: Any) -> None:
        pass

    def _subscribed(self, subscription: _SubjectSubscription) -> None:
        pass

    def _detach(self, subscription: _SubjectSubscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def __repr__(self) -> str:
        return type(self).__name__


class PassthroughSubject(Subject):
    """Broadcasts each sent value to its current subscribers, keeping nothing."""

    pass


class CurrentValueSubject(Subject):
    """Subject that holds its latest value and replays it to new subscribers."""

    def __init__(self, value: Any) -> None:
        super().__init__()
        self._value = value

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self.send(value)

    def _store(self, value: Any) -> None:
        self._value = value

    def _subscribed(self, subscription: _SubjectSubscription) -> None:
        subscription.emit(self._value)


class Published:
    """
    Attribute whose changes are also published.

    Declared on a class, it reads and writes like a plain attribute; every
    write is sent through a per-instance ``CurrentValueSubject``::

        class Thermostat:
            temperature = Published(20)

        Published.publisher_of(thermostat, "temperature").sink(print)
    """

    def __init__(self, initial: Any) -> None:
        self.initial = initial
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def subject(self, instance: Any) -> CurrentValueSubject:
        key = f"_published_{self.name}"
        subject = instance.__dict__.get(key)
        if subject is None:
            subject = CurrentValueSubject(self.initial)
            instance.__dict__[key] = subject
        return subject

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return self.subject(instance).value

    def __set__(self, instance: Any, value: Any) -> None:
        self.subject(instance).send(value)

    @staticmethod
    def publisher_of(instance: Any, name: str) -> CurrentValueSubject:
        descriptor = getattr(type(instance), name, None)
        if not isinstance(descriptor, Published):
            raise AttributeError(f"{type(instance).__name__}.{name} is not Published")
        return descriptor.subject(instance)
