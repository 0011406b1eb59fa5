"""
Bidding (betting) with the dealer constraint, a.k.a. "the hook".
Players bid in seat order starting left of the dealer. The last bidder may not
bring the total of all bids to exactly the number of tricks in the round, so
at least one player must miss.
"""
from __future__ import annotations

from typing import Optional, Sequence


def forbidden_bet(bets_so_far: Sequence[int], num_players: int, cards_per_player: int) -> Optional[int]:
    """
    The one value the next bidder may not choose, or None.

    Only the last bidder (``len(bets_so_far) == num_players - 1``) is
    constrained, and only when the hook value is non-negative.
    """
    if len(bets_so_far) != num_players - 1:
        return None
    hook = cards_per_player - sum(bets_so_far)
    return hook if hook >= 0 else None


def can_bet(bet: int, bets_so_far: Sequence[int], num_players: int, cards_per_player: int) -> bool:
    """
    True if ``bet`` is acceptable given the bets already placed this round.

    Negative bets are refused. There is no upper bound: a bet above the hand
    size is legal and simply cannot be met.
    """
    if bet < 0:
        return False
    return bet != forbidden_bet(bets_so_far, num_players, cards_per_player)


def legal_bets(bets_so_far: Sequence[int], num_players: int, cards_per_player: int) -> list[int]:
    """Bets in [0, cards_per_player] the next bidder may choose."""
    hook = forbidden_bet(bets_so_far, num_players, cards_per_player)
    return [b for b in range(cards_per_player + 1) if b != hook]


__all__ = ["forbidden_bet", "can_bet", "legal_bets"]
