import io
import operator
import os
from dataclasses import dataclass

import pytest

from rxplay import Completion, DemandSubscriber, Empty, Just, PassthroughSubject, publisher_of


class TestCollect:
    def test_collect_whenCountTwo_thenPairsAndRemainder(self, record):
        recorder = record(publisher_of(["A", "B", "C", "D", "E"]).collect(2))

        assert recorder.values == [["A", "B"], ["C", "D"], ["E"]]
        assert recorder.completion == Completion.finished

    def test_collect_whenNoCount_thenSingleListOnFinish(self, record):
        subject = PassthroughSubject()
        recorder = record(subject.collect())

        subject.send(1)
        subject.send(2)
        assert recorder.values == []

        subject.send_completion()
        assert recorder.values == [[1, 2]]

    def test_collect_whenEmpty_thenEmptyList(self, record):
        assert record(Empty().collect()).values == [[]]
        assert record(Empty().collect(3)).values == []

    def test_collect_whenFailure_thenBufferDiscarded(self, record):
        subject = PassthroughSubject()
        recorder = record(subject.collect())

        subject.send(1)
        subject.send_completion(Completion.failure(RuntimeError("x")))

        assert recorder.values == []
        assert recorder.completion.is_failure

    @pytest.mark.parametrize("count", [0, -2])
    def test_collect_whenCountNotPositive_thenValueError(self, count):
        with pytest.raises(ValueError):
            publisher_of([1]).collect(count)

    def test_collect_whenBoundedDemand_thenChunksWaitForRequest(self):
        subscriber = DemandSubscriber(initial=1)

        publisher_of(range(6)).collect(2).subscribe(subscriber)
        assert subscriber.received == [[0, 1]]
        assert not subscriber.terminated

        subscriber.subscription.request(5)
        assert subscriber.received == [[0, 1], [2, 3], [4, 5]]
        assert subscriber.completion == Completion.finished


class TestMap:
    def test_map_thenTransformsInOrder(self, record):
        assert record(publisher_of([123, 4, 56]).map(str)).values == ["123", "4", "56"]

    def test_map_whenAttrGetter_thenTuples(self, record):
        @dataclass
        class Coordinate:
            x: int
            y: int

        subject = PassthroughSubject()
        recorder = record(subject.map(operator.attrgetter("x", "y")))

        subject.send(Coordinate(10, -8))
        subject.send(Coordinate(0, 5))

        assert recorder.values == [(10, -8), (0, 5)]

    def test_try_map_whenTransformRaises_thenFailureAndNoMoreValues(self, record):
        subject = PassthroughSubject()
        recorder = record(subject.try_map(lambda n: 10 // (n - 2)))

        subject.send(1)
        subject.send(2)
        subject.send(3)

        assert recorder.values == [-10]
        assert isinstance(recorder.completion.error, ZeroDivisionError)
        assert subject.subscriber_count == 0

    def test_try_map_whenMissingDirectory_thenFailure(self, record, tmp_path):
        recorder = record(Just(str(tmp_path / "does-not-exist")).try_map(os.listdir))

        assert recorder.values == []
        assert isinstance(recorder.completion.error, FileNotFoundError)

    def test_replace_nil_thenNoneReplaced(self, record):
        recorder = record(publisher_of(["A", None, "C"]).replace_nil("*"))

        assert recorder.values == ["A", "*", "C"]

    def test_replace_empty_whenEmpty_thenReplacement(self, record):
        recorder = record(Empty().replace_empty(5))

        assert recorder.values == [5]
        assert recorder.completion == Completion.finished

    def test_replace_empty_whenNotEmpty_thenUntouched(self, record):
        assert record(publisher_of([1, 2]).replace_empty(5)).values == [1, 2]


class TestScan:
    def test_scan_thenRunningAccumulation(self, record):
        recorder = record(
            publisher_of([10, -70, 5]).scan(50, lambda latest, current: max(0, latest + current))
        )

        assert recorder.values == [60, 0, 5]

    def test_scan_whenResubscribed_thenStartsFromInitial(self, record):
        publisher = publisher_of([1, 2, 3]).scan(0, operator.add)

        assert record(publisher).values == [1, 3, 6]
        assert record(publisher).values == [1, 3, 6]


class TestFlatMap:
    def test_flat_map_whenDecoding_thenHelloWorld(self, record):
        def decode(codes):
            return Just("".join(chr(code) for code in codes if 32 <= code <= 255))

        message = [72, 101, 108, 108, 111, 44, 32, 87, 111, 114, 108, 100, 33]

        recorder = record(publisher_of(message).collect().flat_map(decode))

        assert recorder.values == ["Hello, World!"]
        assert recorder.completion == Completion.finished

    def test_flat_map_whenInnersOutliveOuter_thenFinishesAfterAllInners(self, record):
        outer = PassthroughSubject()
        first, second = PassthroughSubject(), PassthroughSubject()
        recorder = record(outer.flat_map(lambda inner: inner))

        outer.send(first)
        outer.send(second)
        first.send(1)
        second.send(2)
        outer.send_completion()
        first.send(3)
        first.send_completion()
        assert recorder.completions == []

        second.send_completion()
        assert recorder.values == [1, 2, 3]
        assert recorder.completion == Completion.finished

    def test_flat_map_whenInnerFails_thenFailureAndEverythingCancelled(self, record):
        outer = PassthroughSubject()
        first, second = PassthroughSubject(), PassthroughSubject()
        recorder = record(outer.flat_map(lambda inner: inner))
        outer.send(first)
        outer.send(second)

        first.send_completion(Completion.failure(RuntimeError("inner")))
        second.send(1)

        assert recorder.values == []
        assert recorder.completion.is_failure
        assert outer.subscriber_count == 0
        assert second.subscriber_count == 0

    def test_flat_map_whenMaxPublishersOne_thenNextInnerAfterPreviousFinishes(self, record):
        first, second = PassthroughSubject(), PassthroughSubject()
        recorder = record(publisher_of([first, second]).flat_map(lambda s: s, max_publishers=1))

        first.send(1)
        second.send(2)
        first.send_completion()
        second.send(3)
        second.send_completion()

        assert recorder.values == [1, 3]
        assert recorder.completion == Completion.finished

    def test_flat_map_whenMaxPublishersZero_thenValueError(self):
        with pytest.raises(ValueError):
            publisher_of([]).flat_map(Just, max_publishers=0)


class TestPrintEvents:
    def test_print_events_thenLogsLifecycle(self, record):
        stream = io.StringIO()

        record(publisher_of([1]).print_events("numbers", stream=stream))

        assert stream.getvalue().splitlines() == [
            "numbers: receive subscription: (Sequence)",
            "numbers: request unlimited",
            "numbers: receive value: (1)",
            "numbers: receive finished",
        ]

    def test_print_events_whenCancelled_thenReceiveCancel(self, record, capsys):
        subject = PassthroughSubject()
        recorder = record(subject.print_events())

        recorder.cancellable.cancel()

        out = capsys.readouterr().out.splitlines()
        assert out == [
            "receive subscription: (PassthroughSubject)",
            "request unlimited",
            "receive cancel",
        ]
