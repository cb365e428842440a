"""
Challenge: a Blackjack card dealer.

This example demonstrates:
- A ``PassthroughSubject`` carrying both values and a domain failure
- Handling a failure completion in ``sink``

Usage:
    python examples/04_blackjack_dealer.py [card_count]
"""

import logging
import sys

from rxplay import PassthroughSubject
from rxplay.demos.blackjack import deal
from rxplay.playground import configure_logging, example


def blackjack_dealer(card_count=3):
    dealt_hand = PassthroughSubject()

    def on_completion(completion):
        if completion.is_failure:
            print(completion.error)

    dealt_hand.sink(receive_value=print, receive_completion=on_completion)

    deal(card_count, dealt_hand)


if __name__ == "__main__":
    configure_logging(logging.WARNING)

    count = int(sys.argv[1]) if len(sys.argv) > 1 else 3
    example("Create a Blackjack card dealer", lambda: blackjack_dealer(count))
