"""
Challenge: skip, take and filter.

From the numbers 1 through 100, skip the first 50, take the next 20 and
keep the even ones.

Usage:
    python examples/06_filtering_challenge.py
"""

import logging

from rxplay import publisher_of
from rxplay.playground import configure_logging, example


def skip_take_filter():
    publisher_of(range(1, 101)).drop_first(50).prefix(20).filter(
        lambda n: n % 2 == 0
    ).sink(
        receive_value=print,
        receive_completion=lambda c: print(f"Completed with: {c}"),
    )


if __name__ == "__main__":
    configure_logging(logging.WARNING)

    example("Skip, take and filter", skip_take_filter)
