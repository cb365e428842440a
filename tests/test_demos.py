import random

import pytest

from rxplay import Completion, PassthroughSubject
from rxplay.demos.blackjack import CARDS, Card, Hand, HandError, deal
from rxplay.demos.phone import convert, dial, format_digits, lookup


class FirstCard:
    """Stands in for ``random.Random``: always draws the top card."""

    def randrange(self, stop):
        return 0


class TestBlackjack:
    def test_card_points(self):
        assert Card("A", "♠").points == 1
        assert Card("7", "♥").points == 7
        assert Card("Q", "♦").points == 10

    def test_deck_hasFiftyTwoDistinctCards(self):
        assert len(set(CARDS)) == 52

    def test_deal_whenTwentyThreePoints_thenBustedFailureAndNoValue(self, record):
        dealt_hand = PassthroughSubject()
        recorder = record(dealt_hand)
        deck = [Card("K", "♠"), Card("K", "♥"), Card("3", "♣")]

        hand = deal(3, dealt_hand, rng=FirstCard(), deck=deck)

        assert hand.points == 23
        assert recorder.values == []
        assert isinstance(recorder.completion.error, HandError)
        assert str(recorder.completion.error) == "busted"
        assert str(recorder.completion) == "failure(busted)"

    def test_deal_whenTwentyOneOrLess_thenHandSent(self, record):
        dealt_hand = PassthroughSubject()
        recorder = record(dealt_hand)
        deck = [Card("K", "♠"), Card("A", "♥"), Card("10", "♣")]

        deal(3, dealt_hand, rng=FirstCard(), deck=deck)

        assert len(recorder.values) == 1
        assert str(recorder.values[0]) == "Cards: K♠A♥10♣ [21]"
        assert recorder.completions == []

    def test_deal_whenSeeded_thenCardsComeFromDeckWithoutRepeats(self, record):
        dealt_hand = PassthroughSubject()

        hand = deal(5, dealt_hand, rng=random.Random(7))

        assert len(set(hand.cards)) == 5
        assert all(card in CARDS for card in hand.cards)

    def test_deal_whenMoreCardsThanDeck_thenValueError(self):
        with pytest.raises(ValueError):
            deal(53, PassthroughSubject())

    def test_hand_whenEmpty_thenZeroPoints(self):
        assert Hand().points == 0


class TestPhoneLookup:
    @pytest.mark.parametrize(
        "key,expected",
        [("1", 1), ("0", 0), ("a", 2), ("J", 5), ("s", 7), ("!", None), ("10", None), ("", None)],
    )
    def test_convert(self, key, expected):
        assert convert(key) == expected

    def test_format_digits(self):
        assert format_digits([4, 0, 8, 5, 5, 5, 4, 3, 2, 1]) == "408-555-4321"

    def test_dial(self):
        assert dial("408-555-4321") == "Dialing Marin (408-555-4321)..."
        assert dial("000-000-0000") == "Contact not found for 000-000-0000"

    def test_lookup_whenKnownNumber_thenDials(self, record):
        keypresses = PassthroughSubject()
        recorder = record(lookup(keypresses))

        for key in "4085554321":
            keypresses.send(key)

        assert recorder.values == ["Dialing Marin (408-555-4321)..."]

    def test_lookup_whenUnconvertibleKeys_thenDialedAsZero(self, record):
        keypresses = PassthroughSubject()
        recorder = record(lookup(keypresses))

        for key in "0!1234567" + "4085554321" + "A1BJKLDGEH":
            keypresses.send(key)

        assert recorder.values == [
            "Contact not found for 001-234-5674",
            "Contact not found for 085-554-3212",
        ]

    def test_lookup_whenLettersSpellNumber_thenDials(self, record):
        keypresses = PassthroughSubject()
        recorder = record(lookup(keypresses))

        for key in "6035551ADG":
            keypresses.send(key)

        assert recorder.values == ["Dialing Florent (603-555-1234)..."]
        assert recorder.completion is None
