"""
Decision policies that act on a player's behalf.

``AwayAutoPlayer`` is what the host uses when a player is flagged away: it
bids as low as the hook allows and dumps low cards. ``RandomAgent`` picks
uniformly among legal moves and is mostly useful for simulations.

Both implement the small ``Policy`` protocol: ``choose_bet(state, player)``
and ``choose_card(state, player)``. Policies never touch the state; their
choice is fed back through the normal ``Bet``/``PlayCard`` actions.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol, Sequence

from .bidding import can_bet, legal_bets
from .deck import Card, RANK_ACE, Suit
from .play import PlayedCard, lead_suit, legal_plays
from .state import GameState, Player


class Policy(Protocol):
    def choose_bet(self, state: GameState, player: Player) -> int:
        """Bet for ``player``, who holds the turn in the betting phase."""

    def choose_card(self, state: GameState, player: Player) -> Card:
        """Card from ``player.hand`` to play onto ``state.current_trick``."""


def _lowest(cards: Sequence[Card]) -> Card:
    return min(cards, key=lambda c: c.rank)


def _lowest_preferring_non_trump(hand: Sequence[Card], trump: Suit) -> Card:
    non_trump = [c for c in hand if c.suit != trump]
    return _lowest(non_trump or hand)


def auto_play_bet(bets_so_far: Sequence[int], num_players: int, cards_per_player: int) -> int:
    """Bet 0, or 1 when 0 is the forbidden hook value."""
    if can_bet(0, bets_so_far, num_players, cards_per_player):
        return 0
    return 1


def auto_play_card(hand: Sequence[Card], trick: Sequence[PlayedCard], trump: Suit) -> Card:
    """
    Card an away player plays.

    Leading: lowest non-trump (lowest trump if only trumps remain).
    Following with the lead suit: its Ace if held, else its lowest card.
    Void in the lead suit: lowest non-trump, else lowest trump.
    """
    if not hand:
        raise ValueError("Cannot auto-play from an empty hand")
    led = lead_suit(trick)
    if led is None:
        return _lowest_preferring_non_trump(hand, trump)
    following = [c for c in hand if c.suit == led]
    if following:
        for c in following:
            if c.rank == RANK_ACE:
                return c
        return _lowest(following)
    return _lowest_preferring_non_trump(hand, trump)


class AwayAutoPlayer:
    """Policy the host applies to players flagged away."""

    def choose_bet(self, state: GameState, player: Player) -> int:
        return auto_play_bet(state.bets_placed(), state.num_players, state.cards_per_player)

    def choose_card(self, state: GameState, player: Player) -> Card:
        return auto_play_card(player.hand, state.current_trick, state.trump)


@dataclass
class RandomAgent:
    """
    Baseline policy: uniform over legal bets (0..hand size) and legal cards.

    Usage:
        agent = RandomAgent(seed=42)
        bet = agent.choose_bet(state, player)
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def choose_bet(self, state: GameState, player: Player) -> int:
        options = legal_bets(state.bets_placed(), state.num_players, state.cards_per_player)
        if not options:
            raise ValueError("No legal bets available for RandomAgent")
        return self._rng.choice(options)

    def choose_card(self, state: GameState, player: Player) -> Card:
        options = legal_plays(player.hand, state.current_trick)
        if not options:
            raise ValueError("No legal plays available for RandomAgent")
        return self._rng.choice(options)


__all__ = ["Policy", "AwayAutoPlayer", "RandomAgent", "auto_play_bet", "auto_play_card"]
