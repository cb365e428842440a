import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from rxplay.completion import Completion
from rxplay.subjects import Subject

RANKS = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
SUITS = ["♠", "♣", "♥", "♦"]


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    @property
    def points(self) -> int:
        if self.rank == "A":
            return 1
        if self.rank in ("J", "Q", "K"):
            return 10
        return int(self.rank)

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"


CARDS = [Card(rank, suit) for suit in SUITS for rank in RANKS]


@dataclass
class Hand:
    cards: List[Card] = field(default_factory=list)

    @property
    def points(self) -> int:
        return sum(card.points for card in self.cards)

    @property
    def card_string(self) -> str:
        return "".join(str(card) for card in self.cards)

    def __str__(self) -> str:
        return f"Cards: {self.card_string} [{self.points}]"


class HandError(Exception):
    @classmethod
    def busted(cls) -> "HandError":
        return cls("busted")


def deal(
    card_count: int,
    dealt_hand: Subject,
    rng: Optional[random.Random] = None,
    deck: Optional[Sequence[Card]] = None,
) -> Hand:
    """
    Draw ``card_count`` cards and publish the hand through ``dealt_hand``.

    A hand worth more than 21 points fails the subject with
    ``HandError("busted")`` instead of being sent.
    """
    remaining = list(CARDS if deck is None else deck)
    if card_count > len(remaining):
        raise ValueError(f"cannot deal {card_count} cards from {len(remaining)}")
    rng = rng if rng is not None else random.Random()

    hand = Hand()
    for _ in range(card_count):
        hand.cards.append(remaining.pop(rng.randrange(len(remaining))))

    if hand.points > 21:
        dealt_hand.send_completion(Completion.failure(HandError.busted()))
    else:
        dealt_hand.send(hand)
    return hand
