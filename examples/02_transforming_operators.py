"""
Transforming operators.

This example demonstrates:
- ``collect`` turning single values into lists
- ``map`` with a plain function and with ``operator.attrgetter``
- ``try_map`` ending the stream with the first exception
- ``flat_map`` subscribing to a publisher per value
- ``replace_nil`` and ``replace_empty``
- ``scan`` carrying a running total across values

Usage:
    python examples/02_transforming_operators.py
"""

import logging
import operator
import os
import random
from dataclasses import dataclass

from rxplay import Empty, Just, PassthroughSubject, publisher_of
from rxplay.playground import configure_logging, example

subscriptions = set()

ONES = ["zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
TEENS = [
    "ten", "eleven", "twelve", "thirteen", "fourteen",
    "fifteen", "sixteen", "seventeen", "eighteen", "nineteen",
]
TENS = ["", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety"]


def spell_out(number):
    """English words for 0 <= number < 1000."""
    if number < 10:
        return ONES[number]
    if number < 20:
        return TEENS[number - 10]
    if number < 100:
        tens, ones = divmod(number, 10)
        return TENS[tens] if ones == 0 else f"{TENS[tens]}-{ONES[ones]}"
    hundreds, rest = divmod(number, 100)
    words = f"{ONES[hundreds]} hundred"
    return words if rest == 0 else f"{words} {spell_out(rest)}"


@dataclass
class Coordinate:
    x: int
    y: int


def quadrant_of(x, y):
    if x == 0 or y == 0:
        return "boundary"
    if x > 0:
        return "1" if y > 0 else "4"
    return "2" if y > 0 else "3"


def collect():
    publisher_of(["A", "B", "C", "D", "E"]).collect(2).sink(
        receive_value=print, receive_completion=print
    ).store(subscriptions)


def map_values():
    publisher_of([123, 4, 56]).map(spell_out).sink(print).store(subscriptions)


def mapping_attributes():
    publisher = PassthroughSubject()

    publisher.map(operator.attrgetter("x", "y")).sink(
        lambda xy: print(f"The coordinate at {xy} is in quadrant", quadrant_of(*xy))
    ).store(subscriptions)

    publisher.send(Coordinate(x=10, y=-8))
    publisher.send(Coordinate(x=0, y=5))


def try_map():
    Just("Directory name that does not exist").try_map(os.listdir).sink(
        receive_value=print, receive_completion=print
    ).store(subscriptions)


def flat_map():
    def decode(codes):
        # printable and extended ASCII only
        return Just("".join(chr(code) for code in codes if 32 <= code <= 255))

    message = [72, 101, 108, 108, 111, 44, 32, 87, 111, 114, 108, 100, 33]

    publisher_of(message).collect().flat_map(decode).sink(print).store(subscriptions)


def replace_nil():
    publisher_of(["A", None, "C"]).replace_nil("*").sink(print).store(subscriptions)


def replace_empty():
    Empty().replace_empty(5).sink(
        receive_value=print, receive_completion=print
    ).store(subscriptions)


def scan():
    def daily_gain_loss():
        return random.randint(-10, 10)

    august_2019 = publisher_of([daily_gain_loss() for _ in range(22)])

    # a stock price never drops below zero
    august_2019.scan(50, lambda latest, current: max(0, latest + current)).sink(
        print
    ).store(subscriptions)


if __name__ == "__main__":
    configure_logging(logging.WARNING)

    example("collect", collect)
    example("map", map_values)
    example("mapping key paths", mapping_attributes)
    example("tryMap", try_map)
    example("flatMap", flat_map)
    example("replaceNil", replace_nil)
    example("replaceEmpty", replace_empty)
    example("scan", scan)
