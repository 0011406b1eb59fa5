"""
Round scoring: (bet + 1) × 10 + bet for an exact bid, nothing otherwise.
Bet 0 made = 10, bet 1 = 21, bet 2 = 32.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Optional

if TYPE_CHECKING:
    from .state import Player

EXACT_BID_BASE = 10


def round_score(bet: Optional[int], tricks_won: int) -> int:
    """Points for one player this round. A missing bet counts as 0."""
    bet = bet or 0
    if bet == tricks_won:
        return (bet + 1) * EXACT_BID_BASE + bet
    return 0


def calculate_scores(players: Iterable["Player"]) -> Dict[str, int]:
    """Per-player round scores keyed by player id."""
    return {p.id: round_score(p.current_bet, p.tricks_won) for p in players}


__all__ = ["round_score", "calculate_scores", "EXACT_BID_BASE"]
