"""
Publishers, subscribers and subjects.

This example demonstrates:
- ``Just`` replaying one value to every subscriber
- ``assign`` and ``assign_to`` as terminal consumers
- A hand-written ``Subscriber`` with a fixed demand
- A ``Future`` whose attempt runs eagerly and settles on a background timer
- ``PassthroughSubject`` and ``CurrentValueSubject`` as broadcast channels
- Raising demand from inside ``receive``
- Hiding a subject behind ``erase_to_any_publisher``

Usage:
    python examples/01_publishers_and_subscribers.py
"""

import logging
import threading

from rxplay import (
    Completion,
    CurrentValueSubject,
    Demand,
    DemandSubscriber,
    Future,
    Just,
    PassthroughSubject,
    Published,
    Subscriber,
    publisher_of,
)
from rxplay.playground import configure_logging, example

subscriptions = set()


def just():
    publisher = Just("Hello World")

    publisher.sink(
        receive_value=lambda value: print("Received value", value),
        receive_completion=lambda completion: print("Received completion", completion),
    )
    publisher.sink(
        receive_value=lambda value: print("Received value (another)", value),
        receive_completion=lambda c: print("Received completion (another)", c),
    )


def assign_to_attribute():
    class SomeObject:
        def __init__(self):
            self._value = ""

        @property
        def value(self):
            return self._value

        @value.setter
        def value(self, value):
            self._value = value
            print(value)

    some_object = SomeObject()
    publisher_of(["Hello", "World"]).assign("value", on=some_object)


def assign_to_published():
    class SomeObject:
        value = Published(0)

    some_object = SomeObject()
    Published.publisher_of(some_object, "value").sink(print).store(subscriptions)

    # values go straight into the published property; its subject never finishes
    publisher_of(range(10)).assign_to(Published.publisher_of(some_object, "value"))


def custom_subscriber():
    class IntSubscriber(Subscriber):
        def receive_subscription(self, subscription):
            subscription.request(Demand.max(3))

        def receive(self, value):
            print("Received value", value)
            return Demand.none()

        def receive_completion(self, completion):
            print("Received completion", completion)

    # only 1, 2 and 3 are requested, so no completion is printed
    publisher_of(range(1, 7)).subscribe(IntSubscriber())


def future():
    def future_increment(integer, after_delay):
        def attempt(promise):
            # runs as soon as the future is created, before anyone subscribes
            print("Original")
            timer = threading.Timer(after_delay, promise.resolve, args=(integer + 1,))
            timer.daemon = True
            timer.start()

        return Future(attempt)

    future = future_increment(1, after_delay=1)

    future.sink(receive_value=print, receive_completion=print).store(subscriptions)
    future.sink(
        receive_value=lambda value: print("Second", value),
        receive_completion=lambda completion: print("Second", completion),
    ).store(subscriptions)

    # keep the script alive until the timer thread has delivered
    future.result(timeout=5)


def passthrough_subject():
    class MyError(Exception):
        pass

    def more_for_world(value):
        # "World" raises the bound from 2 to 3
        return Demand.max(1) if value == "World" else Demand.none()

    subscriber = DemandSubscriber(
        initial=2,
        adjust=more_for_world,
        on_value=lambda value: print("Received value", value),
        on_completion=lambda completion: print("Received completion", completion),
    )

    subject = PassthroughSubject()
    subject.subscribe(subscriber)

    subscription = subject.sink(
        receive_value=lambda value: print("Received value (sink)", value),
        receive_completion=lambda c: print("Received completion (sink)", c),
    )

    subject.send("Hello")
    subject.send("World")

    subscription.cancel()

    subject.send("Still there?")

    subject.send_completion(Completion.finished)
    subject.send("How about another one?")

    # failures are typed by the exception they carry
    failing = PassthroughSubject()
    failing.sink(receive_completion=lambda c: print("Received completion", c))
    failing.send_completion(Completion.failure(MyError("test")))


def current_value_subject():
    subject = CurrentValueSubject(0)

    subject.print_events().sink(print).store(subscriptions)

    subject.send(1)
    subject.send(2)

    print(subject.value)

    subject.value = 3
    print(subject.value)

    subject.print_events().sink(
        lambda value: print("Second subscription:", value)
    ).store(subscriptions)

    subject.send_completion(Completion.finished)


def dynamically_adjusting_demand():
    def adjust(value):
        if value == 1:
            return Demand.max(2)  # 2 + 2 = 4
        if value == 3:
            return Demand.max(1)  # 4 + 1 = 5
        return Demand.none()

    subscriber = DemandSubscriber(
        initial=2,
        adjust=adjust,
        on_value=lambda value: print("Received value", value),
        on_completion=lambda completion: print("Received completion", completion),
    )

    subject = PassthroughSubject()
    subject.subscribe(subscriber)

    # 6 arrives after the bound of 5 is used up and is dropped
    for value in range(1, 7):
        subject.send(value)

    print("Cumulative demand", subscriber.state.cumulative)


def type_erasure():
    subject = PassthroughSubject()
    publisher = subject.erase_to_any_publisher()

    publisher.sink(print).store(subscriptions)

    subject.send(0)
    print("Publisher can send:", hasattr(publisher, "send"))


if __name__ == "__main__":
    configure_logging(logging.WARNING)

    example("Just", just)
    example("assign(to:on:)", assign_to_attribute)
    example("assign(to:)", assign_to_published)
    example("Custom Subscriber", custom_subscriber)
    example("Future", future)
    example("PassthroughSubject", passthrough_subject)
    example("CurrentValueSubject", current_value_subject)
    example("Dynamically adjusting Demand", dynamically_adjusting_demand)
    example("Type erasure", type_erasure)
