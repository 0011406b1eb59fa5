"""
Game state records: players, settings and the room-wide GameState.

All records are frozen; the reducer builds new ones with ``dataclasses.replace``
so a caller holding an old state never sees it change.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from .deal import DISCARD_AUTO, DISCARD_STRATEGIES
from .deck import Card, DECK_SIZE, Suit
from .errors import NotFoundError
from .play import PlayedCard


class Phase(str, Enum):
    LOBBY = "lobby"
    DEALING = "dealing"  # reserved, never entered by the reducer
    BETTING = "betting"
    PLAYING = "playing"
    SCORING = "scoring"  # reserved, never entered by the reducer
    FINISHED = "finished"


@dataclass(frozen=True)
class GameSettings:
    """Per-room options the host may change at any time."""

    discard_strategy: str = DISCARD_AUTO  # "auto" | "priority" | "random"
    auto_play_enabled: bool = True
    allow_spectators: bool = True  # let new players join a match in progress and wait for the next one

    def __post_init__(self) -> None:
        if self.discard_strategy not in DISCARD_STRATEGIES:
            raise ValueError(f"Unknown discard strategy: {self.discard_strategy!r}")


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    seat_index: int
    is_host: bool = False
    connected: bool = True
    is_away: bool = False
    current_bet: Optional[int] = None
    tricks_won: int = 0
    total_points: int = 0
    hand: Tuple[Card, ...] = ()


@dataclass(frozen=True)
class GameState:
    """Authoritative state of one room. Mutated only through ``apply_action``."""

    room_code: str = ""
    players: Tuple[Player, ...] = ()
    round_index: int = 0
    cards_per_player: int = 0
    trump: Suit = Suit.SPADES
    dealer_seat_index: int = 0
    # Next bettor while betting, next player to act while playing.
    current_leader_seat_index: int = 0
    current_trick: Tuple[PlayedCard, ...] = ()
    phase: Phase = Phase.LOBBY
    deck_seed: str = ""
    scores_history: Tuple[Dict[str, int], ...] = ()
    settings: GameSettings = field(default_factory=GameSettings)
    current_deck: Tuple[Card, ...] = ()
    played_pile: Tuple[Card, ...] = ()
    # Joined mid-match; seated at the next START_GAME.
    spectators: Tuple[Player, ...] = ()

    @property
    def num_players(self) -> int:
        return len(self.players)

    def player(self, player_id: str) -> Player:
        for p in self.players:
            if p.id == player_id:
                return p
        raise NotFoundError(f"Player not found: {player_id}")

    def has_player(self, player_id: str) -> bool:
        return any(p.id == player_id for p in self.players)

    def has_spectator(self, player_id: str) -> bool:
        return any(p.id == player_id for p in self.spectators)

    @property
    def host(self) -> Optional[Player]:
        for p in self.players:
            if p.is_host:
                return p
        return None

    @property
    def current_player(self) -> Optional[Player]:
        """Player whose turn it is, or None outside betting/playing."""
        if self.phase not in (Phase.BETTING, Phase.PLAYING) or not self.players:
            return None
        return self.players[self.current_leader_seat_index]

    def bets_placed(self) -> list[int]:
        return [p.current_bet for p in self.players if p.current_bet is not None]

    def card_count(self) -> int:
        """Cards accounted for in hands, stock, played pile and trick (52 during a match)."""
        return (
            sum(len(p.hand) for p in self.players)
            + len(self.current_deck)
            + len(self.played_pile)
            + len(self.current_trick)
        )

    def is_conserved(self) -> bool:
        return self.card_count() == DECK_SIZE


__all__ = ["Phase", "GameSettings", "Player", "GameState"]
