"""
Self-play: drive the reducer through whole matches with per-seat policies.

``run_match`` plays one match to ``finished``; ``run_matches`` repeats it
with derived seeds and ``summarize`` reduces the totals to per-seat stats.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from .actions import Bet, Join, PlayCard, StartGame
from .agents import Policy
from .game import apply_action, new_game
from .state import GameState, Phase

MAX_ACTIONS_PER_MATCH = 100_000


@dataclass
class MatchResult:
    totals: List[int]  # total points per seat
    per_round: List[Dict[str, int]]
    final_state: GameState

    @property
    def rounds(self) -> int:
        return len(self.per_round)


def seat_ids(num_players: int) -> List[str]:
    return [f"p{i}" for i in range(num_players)]


def setup_match(num_players: int, seed: str, initial_cards_per_player: Optional[int] = None) -> GameState:
    """Lobby with ``num_players`` seated players, started."""
    if num_players < 2:
        raise ValueError(f"Need at least 2 players, got {num_players}")
    ids = seat_ids(num_players)
    state = new_game("SIM", ids[0], ids[0], deck_seed=seed)
    for pid in ids[1:]:
        state = apply_action(state, Join(player_id=pid, name=pid))
    return apply_action(state, StartGame(initial_cards_per_player=initial_cards_per_player))


def run_match(
    num_players: int,
    policies: Sequence[Policy],
    seed: str,
    initial_cards_per_player: Optional[int] = None,
) -> MatchResult:
    """Play one match to the end, asking ``policies[seat]`` for every decision."""
    if len(policies) != num_players:
        raise ValueError(f"Expected {num_players} policies, got {len(policies)}")
    state = setup_match(num_players, seed, initial_cards_per_player)
    steps = 0
    while state.phase != Phase.FINISHED:
        if steps >= MAX_ACTIONS_PER_MATCH:
            raise RuntimeError("Match did not finish")
        player = state.current_player
        policy = policies[player.seat_index]
        if state.phase == Phase.BETTING:
            action = Bet(player_id=player.id, bet=policy.choose_bet(state, player))
        else:
            action = PlayCard(player_id=player.id, card=policy.choose_card(state, player))
        state = apply_action(state, action)
        steps += 1
    return MatchResult(
        totals=[p.total_points for p in state.players],
        per_round=list(state.scores_history),
        final_state=state,
    )


def run_matches(
    num_players: int,
    policies: Sequence[Policy],
    num_matches: int,
    seed: str,
    initial_cards_per_player: Optional[int] = None,
) -> List[MatchResult]:
    return [
        run_match(num_players, policies, f"{seed}-{i}", initial_cards_per_player)
        for i in range(num_matches)
    ]


def summarize(results: Sequence[MatchResult]) -> Dict[str, List[float]]:
    """Per-seat mean/std/min/max of match totals, plus win counts."""
    if not results:
        raise ValueError("No results to summarize")
    totals = np.array([r.totals for r in results], dtype=float)  # (matches, seats)
    best = totals.max(axis=1, keepdims=True)
    return {
        "mean": totals.mean(axis=0).tolist(),
        "std": totals.std(axis=0).tolist(),
        "min": totals.min(axis=0).tolist(),
        "max": totals.max(axis=0).tolist(),
        # Ties count as a win for every seat sharing the top score.
        "wins": (totals == best).sum(axis=0).astype(float).tolist(),
    }


__all__ = ["MatchResult", "run_match", "run_matches", "setup_match", "summarize", "seat_ids"]
