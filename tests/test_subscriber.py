import pytest

from rxplay import (
    Completion,
    Demand,
    DemandSubscriber,
    PassthroughSubject,
    Subscriber,
    publisher_of,
)


class CountingSubscriber(Subscriber):
    def __init__(self, initial):
        self.initial = initial
        self.values = []
        self.completions = []
        self.subscription = None

    def receive_subscription(self, subscription):
        self.subscription = subscription
        subscription.request(Demand.max(self.initial))

    def receive(self, value):
        self.values.append(value)
        return Demand.none()

    def receive_completion(self, completion):
        self.completions.append(completion)


def test_custom_subscriber_whenMaxThree_thenReceivesThreeAndNoCompletion():
    subscriber = CountingSubscriber(3)

    publisher_of(range(1, 7)).subscribe(subscriber)

    assert subscriber.values == [1, 2, 3]
    assert subscriber.completions == []


def test_custom_subscriber_whenRequestingMore_thenResumesAndCompletes():
    subscriber = CountingSubscriber(3)
    publisher_of(range(1, 7)).subscribe(subscriber)

    subscriber.subscription.request(Demand.max(10))

    assert subscriber.values == [1, 2, 3, 4, 5, 6]
    assert subscriber.completions == [Completion.finished]


@pytest.mark.parametrize("initial", [0, 1, 3, 5, 20])
@pytest.mark.parametrize("count", [0, 4, 10])
def test_delivered_never_exceeds_initial_request(initial, count):
    sequence_subscriber = CountingSubscriber(initial)
    publisher_of(range(count)).subscribe(sequence_subscriber)

    subject = PassthroughSubject()
    subject_subscriber = CountingSubscriber(initial)
    subject.subscribe(subject_subscriber)
    for n in range(count):
        subject.send(n)

    assert len(sequence_subscriber.values) == min(initial, count)
    assert len(subject_subscriber.values) == min(initial, count)


class TestDemandSubscriber:
    def test_adjust_whenValueDependent_thenCumulativeIsRunningSum(self):
        def adjust(value):
            if value == 1:
                return Demand.max(2)
            if value == 3:
                return Demand.max(1)
            return Demand.none()

        subscriber = DemandSubscriber(initial=2, adjust=adjust)
        subject = PassthroughSubject()
        subject.subscribe(subscriber)

        for value in range(1, 7):
            subject.send(value)

        assert subscriber.received == [1, 2, 3, 4, 5]
        assert subscriber.state.initial == Demand.max(2)
        assert subscriber.state.cumulative == Demand.max(5)

    def test_adjust_whenZero_thenBoundUnchanged(self):
        subscriber = DemandSubscriber(initial=2, adjust=lambda value: 0)

        publisher_of("abcdef").subscribe(subscriber)

        assert subscriber.received == ["a", "b"]
        assert subscriber.state.cumulative == Demand.max(2)
        assert not subscriber.terminated

    def test_adjust_whenNegative_thenClampedAndOtherSubscribersStillServed(self):
        subscriber = DemandSubscriber(initial=2, adjust=lambda value: -1)
        others = []
        subject = PassthroughSubject()
        subject.subscribe(subscriber)
        subject.sink(others.append)

        for value in "abc":
            subject.send(value)

        assert subscriber.received == ["a", "b"]
        assert subscriber.state.cumulative == Demand.max(2)
        assert others == ["a", "b", "c"]

    def test_receive_completion_whenFailure_thenDeliveredOnce(self):
        completions = []
        subscriber = DemandSubscriber(initial=1, on_completion=completions.append)
        subject = PassthroughSubject()
        subject.subscribe(subscriber)
        error = RuntimeError("boom")

        subject.send_completion(Completion.failure(error))
        subject.send_completion(Completion.finished)
        subject.send("late")

        assert completions == [Completion.failure(error)]
        assert subscriber.received == []
        assert subscriber.terminated

    def test_callbacks_whenValuesArrive_thenCalledInOrder(self):
        seen = []
        subscriber = DemandSubscriber(
            initial=Demand.unlimited(),
            on_value=seen.append,
            on_completion=lambda c: seen.append(str(c)),
        )

        publisher_of([1, 2]).subscribe(subscriber)

        assert seen == [1, 2, "finished"]


class TestSink:
    def test_cancel_whenCancelled_thenNoMoreValuesOrCompletion(self, record):
        subject = PassthroughSubject()
        recorder = record(subject)

        subject.send(1)
        recorder.cancellable.cancel()
        subject.send(2)
        subject.send_completion()

        assert recorder.values == [1]
        assert recorder.completions == []
        assert subject.subscriber_count == 0

    def test_store_whenSetOrList_thenAdded(self):
        subscriptions_set = set()
        subscriptions_list = []

        first = publisher_of([1]).sink().store(subscriptions_set)
        second = publisher_of([1]).sink().store(subscriptions_list)

        assert first in subscriptions_set
        assert subscriptions_list == [second]

    def test_cancel_whenCalledInsideReceive_thenStops(self):
        values = []
        holder = {}

        def on_value(value):
            values.append(value)
            if value == 2:
                holder["sink"].cancel()

        subject = PassthroughSubject()
        holder["sink"] = subject.sink(on_value)
        for n in range(1, 5):
            subject.send(n)

        assert values == [1, 2]


class TestAssign:
    def test_assign_whenValues_thenAttributeHoldsLast(self):
        class Target:
            value = ""

        target = Target()

        publisher_of(["Hello", "World"]).assign("value", on=target)

        assert target.value == "World"

    def test_assign_whenPropertySetter_thenCalledPerValue(self):
        seen = []

        class Target:
            @property
            def value(self):
                return seen[-1]

            @value.setter
            def value(self, value):
                seen.append(value)

        publisher_of(["Hello", "World"]).assign("value", on=Target())

        assert seen == ["Hello", "World"]
