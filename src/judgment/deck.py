"""
Standard 52-card deck: 4 suits × 13 ranks (2..14, 11=J 12=Q 13=K 14=A).
Suit order clubs < diamonds < hearts < spades is used for sorting and for
the priority discard.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence


class Suit(IntEnum):
    """Clubs, Diamonds, Hearts, Spades. Value is the fixed sort order."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def initial(self) -> str:
        return self.name[0]

    @classmethod
    def from_label(cls, label: str) -> "Suit":
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"Unknown suit: {label!r}") from None


RANK_JACK = 11
RANK_QUEEN = 12
RANK_KING = 13
RANK_ACE = 14

RANK_LABELS = {RANK_JACK: "J", RANK_QUEEN: "Q", RANK_KING: "K", RANK_ACE: "A"}
SUIT_SYMBOLS = "♣♦♥♠"

DECK_SIZE = 52


def card_id(rank: int, suit: Suit) -> str:
    """Stable identifier such as ``"AS"``, ``"10H"`` or ``"2C"``."""
    return f"{RANK_LABELS.get(rank, str(rank))}{suit.initial}"


@dataclass(frozen=True)
class Card:
    """A playing card. Equality covers rank, suit and id."""

    rank: int
    suit: Suit
    id: str = ""

    def __post_init__(self) -> None:
        if not 2 <= self.rank <= RANK_ACE:
            raise ValueError(f"Rank out of range: {self.rank}")
        if not isinstance(self.suit, Suit):
            object.__setattr__(self, "suit", Suit(self.suit))
        if not self.id:
            object.__setattr__(self, "id", card_id(self.rank, self.suit))

    def sort_key(self) -> tuple[int, int]:
        """(rank, suit) ascending: the priority-discard order."""
        return (self.rank, int(self.suit))

    def __str__(self) -> str:
        return f"{RANK_LABELS.get(self.rank, str(self.rank))}{SUIT_SYMBOLS[self.suit]}"

    def __repr__(self) -> str:
        return self.id


def card_from_id(cid: str) -> Card:
    """Inverse of :func:`card_id`."""
    if len(cid) < 2:
        raise ValueError(f"Invalid card id: {cid!r}")
    rank_part, suit_part = cid[:-1].upper(), cid[-1].upper()
    suits = {s.initial: s for s in Suit}
    if suit_part not in suits:
        raise ValueError(f"Invalid card id: {cid!r}")
    labels = {v: k for k, v in RANK_LABELS.items()}
    if rank_part in labels:
        rank = labels[rank_part]
    elif rank_part.isdigit():
        rank = int(rank_part)
    else:
        raise ValueError(f"Invalid card id: {cid!r}")
    return Card(rank=rank, suit=suits[suit_part])


def make_deck_52() -> list[Card]:
    """Build the full deck, suit by suit, ranks ascending. No randomness."""
    deck: list[Card] = []
    for s in Suit:
        for rank in range(2, RANK_ACE + 1):
            deck.append(Card(rank=rank, suit=s))
    return deck


def shuffle_deck(deck: Sequence[Card], seed: Optional[str] = None) -> list[Card]:
    """
    Fisher-Yates shuffle into a new list (input untouched).

    For i from len-1 down to 1, j is drawn uniformly in [0, i] and positions
    i and j are swapped. With a seed the draws come from ``random.Random(seed)``
    so the same seed string always yields the same order; without one the
    system entropy source is used.
    """
    rng = random.Random(seed) if seed is not None else random.SystemRandom()
    out = list(deck)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out


def sort_hand(hand: Sequence[Card]) -> list[Card]:
    """Display order: by suit (clubs..spades), rank descending within suit."""
    return sorted(hand, key=lambda c: (int(c.suit), -c.rank))


__all__ = [
    "Suit",
    "Card",
    "DECK_SIZE",
    "RANK_ACE",
    "card_id",
    "card_from_id",
    "make_deck_52",
    "shuffle_deck",
    "sort_hand",
]
