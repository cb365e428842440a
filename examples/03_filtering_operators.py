"""
Filtering operators.

This example demonstrates:
- ``filter``, ``remove_duplicates`` and ``compact_map``
- ``ignore_output`` for when only completion matters
- ``first`` and ``last`` with a predicate
- ``drop_first``, ``drop_while`` and ``drop_until_output_from``
- ``prefix``, ``prefix_while`` and ``prefix_until_output_from``

Usage:
    python examples/03_filtering_operators.py
"""

import logging

from rxplay import Just, PassthroughSubject, publisher_of
from rxplay.playground import configure_logging, example

subscriptions = set()


def completed_with(completion):
    print(f"Completed with: {completion}")


def parse_float(text):
    try:
        return float(text)
    except ValueError:
        return None


def filter_values():
    numbers = publisher_of(range(1, 11))

    numbers.filter(lambda n: n % 3 == 0).sink(
        lambda n: print(f"{n} is a multiple of 3")
    ).store(subscriptions)


def remove_duplicates():
    words = publisher_of("hey hey there! want to listen to mister mister ?".split(" "))

    words.remove_duplicates().collect().flat_map(
        lambda words: Just(" ".join(words))
    ).sink(print).store(subscriptions)


def compact_map():
    strings = publisher_of(["a", "1.24", "3", "def", "45", "0.23"])

    # strings that are not numbers produce no value at all
    strings.compact_map(parse_float).sink(print).store(subscriptions)


def ignore_output():
    numbers = publisher_of(range(1, 10_001))

    numbers.ignore_output().sink(
        receive_value=print, receive_completion=completed_with
    ).store(subscriptions)


def first_where():
    numbers = publisher_of(range(1, 10))

    numbers.print_events("numbers").first(where=lambda n: n % 2 == 0).sink(
        receive_value=print, receive_completion=completed_with
    ).store(subscriptions)


def last_where():
    numbers = PassthroughSubject()

    numbers.last(where=lambda n: n % 2 == 0).sink(
        receive_value=print, receive_completion=completed_with
    ).store(subscriptions)

    for n in range(1, 10):
        numbers.send(n)
    numbers.send_completion()


def drop_first():
    publisher_of(range(1, 11)).drop_first(8).sink(print).store(subscriptions)


def drop_while():
    publisher_of(range(1, 11)).drop_while(lambda n: n % 5 != 0).sink(
        print
    ).store(subscriptions)


def drop_until_output_from():
    is_ready = PassthroughSubject()
    taps = PassthroughSubject()

    taps.drop_until_output_from(is_ready).sink(print).store(subscriptions)

    for n in range(1, 6):
        taps.send(n)
        if n == 3:
            is_ready.send()


def prefix():
    publisher_of(range(1, 11)).prefix(2).sink(
        receive_value=print, receive_completion=completed_with
    ).store(subscriptions)


def prefix_while():
    publisher_of(range(1, 11)).prefix_while(lambda n: n < 3).sink(
        receive_value=print, receive_completion=completed_with
    ).store(subscriptions)


def prefix_until_output_from():
    is_ready = PassthroughSubject()
    taps = PassthroughSubject()

    taps.prefix_until_output_from(is_ready).sink(
        receive_value=print, receive_completion=completed_with
    ).store(subscriptions)

    for n in range(1, 6):
        taps.send(n)
        if n == 2:
            is_ready.send()


if __name__ == "__main__":
    configure_logging(logging.WARNING)

    example("filter", filter_values)
    example("removeDuplicates", remove_duplicates)
    example("compactMap", compact_map)
    example("ignoreOutput", ignore_output)
    example("first(where:)", first_where)
    example("last(where:)", last_where)
    example("dropFirst", drop_first)
    example("drop(while:)", drop_while)
    example("drop(untilOutputFrom:)", drop_until_output_from)
    example("prefix", prefix)
    example("prefix(while:)", prefix_while)
    example("prefix(untilOutputFrom:)", prefix_until_output_from)
