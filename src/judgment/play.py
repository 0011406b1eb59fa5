"""
Trick-taking: suit-following legality and trick winner.
Must follow the lead suit when able; otherwise anything (trump included) goes.
Trump beats every other suit; off-suit non-trump cards never win.
"""
from __future__ import annotations

from typing import NamedTuple, Optional, Sequence

from .deck import Card, Suit


class PlayedCard(NamedTuple):
    """One card on the table, tagged with the seat that played it."""
    seat_index: int
    card: Card


def lead_suit(trick: Sequence[PlayedCard]) -> Optional[Suit]:
    """Suit of the first card of the trick, None if nobody has played yet."""
    if not trick:
        return None
    return trick[0].card.suit


def has_suit(hand: Sequence[Card], suit: Suit) -> bool:
    return any(c.suit == suit for c in hand)


def is_valid_play(card: Card, hand: Sequence[Card], trick: Sequence[PlayedCard]) -> bool:
    """
    True if ``card`` may be played from ``hand`` onto ``trick``.

    Only checks suit-following; the caller checks that the card is in hand.
    """
    led = lead_suit(trick)
    if led is None:
        return True
    if has_suit(hand, led):
        return card.suit == led
    return True


def legal_plays(hand: Sequence[Card], trick: Sequence[PlayedCard]) -> list[Card]:
    """Cards of ``hand`` that may legally be played onto ``trick``."""
    return [c for c in hand if is_valid_play(c, hand, trick)]


def _beats(card: Card, best: Card, led: Suit, trump: Suit) -> bool:
    """True if card displaces the current best card."""
    if card.suit == trump:
        return best.suit != trump or card.rank > best.rank
    if best.suit == trump:
        return False
    if card.suit == led and best.suit == led:
        return card.rank > best.rank
    return False


def trick_winner(trick: Sequence[PlayedCard], trump: Suit) -> int:
    """
    Seat index of the player who wins the trick.

    The first card starts as the winner; each later card takes over if it is
    trump over non-trump, a higher trump, or a higher card of the lead suit.
    """
    if not trick:
        raise ValueError("Cannot resolve an empty trick")
    led = trick[0].card.suit
    best_seat, best_card = trick[0]
    for seat, card in trick[1:]:
        if _beats(card, best_card, led, trump):
            best_seat, best_card = seat, card
    return best_seat


__all__ = ["PlayedCard", "lead_suit", "has_suit", "is_valid_play", "legal_plays", "trick_winner"]
