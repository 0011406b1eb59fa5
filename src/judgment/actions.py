"""
Player actions fed to the reducer.

Every action is a flat record tagged by its ``type`` string; fields that name
a player always use ``player_id``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Union

from .deck import Card


@dataclass(frozen=True)
class Join:
    type: ClassVar[str] = "JOIN"
    player_id: str
    name: str


@dataclass(frozen=True)
class StartGame:
    type: ClassVar[str] = "START_GAME"
    initial_cards_per_player: Optional[int] = None


@dataclass(frozen=True)
class Bet:
    type: ClassVar[str] = "BET"
    player_id: str
    bet: int


@dataclass(frozen=True)
class PlayCard:
    type: ClassVar[str] = "PLAY_CARD"
    player_id: str
    card: Card


@dataclass(frozen=True)
class UpdateSettings:
    """Partial settings; only the given keys are overwritten."""

    type: ClassVar[str] = "UPDATE_SETTINGS"
    settings: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToggleAway:
    type: ClassVar[str] = "TOGGLE_AWAY"
    player_id: str


@dataclass(frozen=True)
class RenamePlayer:
    type: ClassVar[str] = "RENAME_PLAYER"
    player_id: str
    new_name: str


@dataclass(frozen=True)
class EndGame:
    type: ClassVar[str] = "END_GAME"


GameAction = Union[Join, StartGame, Bet, PlayCard, UpdateSettings, ToggleAway, RenamePlayer, EndGame]

ACTION_TYPES = {
    cls.type: cls
    for cls in (Join, StartGame, Bet, PlayCard, UpdateSettings, ToggleAway, RenamePlayer, EndGame)
}


__all__ = [
    "Join",
    "StartGame",
    "Bet",
    "PlayCard",
    "UpdateSettings",
    "ToggleAway",
    "RenamePlayer",
    "EndGame",
    "GameAction",
    "ACTION_TYPES",
]
