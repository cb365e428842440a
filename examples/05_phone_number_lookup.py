"""
Challenge: a phone number lookup.

This example demonstrates:
- Chaining ``map``, ``replace_nil``, ``collect`` and ``map`` again
- Driving a pipeline one keypress at a time through a subject

Keys that cannot be converted are dialed as ``0`` here, unlike
``compact_map`` in the filtering examples which drops them.

Usage:
    python examples/05_phone_number_lookup.py
"""

import logging

from rxplay import PassthroughSubject
from rxplay.demos.phone import lookup
from rxplay.playground import configure_logging, example


def phone_number_lookup():
    keypresses = PassthroughSubject()

    lookup(keypresses).sink(print)

    for key in "0!1234567":
        keypresses.send(key)

    for key in "4085554321":
        keypresses.send(key)

    for key in "A1BJKLDGEH":
        keypresses.send(key)


if __name__ == "__main__":
    configure_logging(logging.WARNING)

    example("Create a phone number lookup", phone_number_lookup)
