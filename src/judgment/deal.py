"""
Round deck preparation: discard down to what the round needs, shuffle, deal.

Round 0 discards by priority (the lowest cards go); later rounds discard at
random. Discard and deal use separately derived seeds so the two draws are
independent but reproducible for a given match seed.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Sequence

from .deck import Card, Suit, shuffle_deck, sort_hand
from .errors import ResourceError

logger = logging.getLogger(__name__)

# Trump rotates spades -> hearts -> diamonds -> clubs, one suit per round.
TRUMP_ORDER = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)

DISCARD_AUTO = "auto"
DISCARD_PRIORITY = "priority"
DISCARD_RANDOM = "random"
DISCARD_STRATEGIES = (DISCARD_AUTO, DISCARD_PRIORITY, DISCARD_RANDOM)


class RoundDeal(NamedTuple):
    """Result of preparing one round: hands per seat, leftover stock, discards."""
    hands: list[list[Card]]
    remaining_deck: list[Card]
    discarded: list[Card]


def discard_seed(seed: str) -> str:
    return f"{seed}-discard"


def deal_seed(seed: str) -> str:
    return f"{seed}-deal"


def priority_discard(deck: Sequence[Card], count: int) -> tuple[list[Card], list[Card]]:
    """Remove the ``count`` lowest cards by (rank, suit order). Returns (kept, discarded)."""
    ordered = sorted(deck, key=Card.sort_key)
    return ordered[count:], ordered[:count]


def random_discard(deck: Sequence[Card], count: int, seed: str) -> tuple[list[Card], list[Card]]:
    """Shuffle with the discard seed and take the first ``count`` cards. Returns (kept, discarded)."""
    shuffled = shuffle_deck(deck, discard_seed(seed))
    return shuffled[count:], shuffled[:count]


def prepare_round_deck(
    current_deck: Sequence[Card],
    round_index: int,
    num_players: int,
    cards_per_player: int,
    seed: str,
    strategy: str = DISCARD_AUTO,
) -> RoundDeal:
    """
    Discard, shuffle and deal ``cards_per_player`` cards to each of ``num_players``.

    ``strategy`` "auto" discards by priority on round 0 and at random after;
    "priority" and "random" force one policy for every round.
    Raises ResourceError when the deck is too small.
    """
    if num_players < 1:
        raise ValueError(f"num_players must be positive, got {num_players}")
    if strategy not in DISCARD_STRATEGIES:
        raise ValueError(f"Unknown discard strategy: {strategy!r}")

    total_needed = num_players * cards_per_player
    to_discard = len(current_deck) - total_needed
    if to_discard < 0:
        raise ResourceError(
            f"Not enough cards: need {total_needed} for {num_players} players "
            f"x {cards_per_player}, deck has {len(current_deck)}"
        )

    kept: list[Card] = list(current_deck)
    discarded: list[Card] = []
    if to_discard > 0:
        use_priority = strategy == DISCARD_PRIORITY or (strategy == DISCARD_AUTO and round_index == 0)
        if use_priority:
            kept, discarded = priority_discard(current_deck, to_discard)
        else:
            kept, discarded = random_discard(current_deck, to_discard, seed)

    dealt = shuffle_deck(kept, deal_seed(seed))
    hands: list[list[Card]] = [[] for _ in range(num_players)]
    for i in range(total_needed):
        hands[i % num_players].append(dealt[i])

    logger.debug(
        "Round %d deck: %d players x %d cards, %d discarded",
        round_index, num_players, cards_per_player, len(discarded),
    )
    return RoundDeal(
        hands=[sort_hand(h) for h in hands],
        remaining_deck=dealt[total_needed:],
        discarded=discarded,
    )


def trump_for_round(round_index: int) -> Suit:
    return TRUMP_ORDER[round_index % len(TRUMP_ORDER)]


def dealer_for_round(round_index: int, num_players: int) -> int:
    """Dealer rotates one seat per round, starting at seat 0."""
    return round_index % num_players


def next_seat(seat: int, num_players: int) -> int:
    return (seat + 1) % num_players


def first_to_bid(dealer: int, num_players: int) -> int:
    """Seat left of the dealer bids first and leads the first trick."""
    return next_seat(dealer, num_players)


def default_cards_per_player(num_players: int, deck_size: int = 52) -> int:
    return deck_size // num_players


__all__ = [
    "RoundDeal",
    "TRUMP_ORDER",
    "DISCARD_AUTO",
    "DISCARD_PRIORITY",
    "DISCARD_RANDOM",
    "DISCARD_STRATEGIES",
    "prepare_round_deck",
    "priority_discard",
    "random_discard",
    "trump_for_round",
    "dealer_for_round",
    "next_seat",
    "first_to_bid",
    "default_cards_per_player",
]
