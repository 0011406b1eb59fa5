"""
GameState and action serialization for storage and broadcast.

States and actions map to JSON-compatible dicts with snake_case keys. Cards
are ``{"rank": 14, "suit": "spades", "id": "AS"}``.
"""
from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict

from .actions import (
    ACTION_TYPES,
    Bet,
    GameAction,
    Join,
    PlayCard,
    RenamePlayer,
    StartGame,
    ToggleAway,
    UpdateSettings,
)
from .deck import Card, Suit, card_from_id
from .errors import UnknownActionError
from .play import PlayedCard
from .state import GameSettings, GameState, Phase, Player

SCHEMA_VERSION = 1


def card_to_dict(card: Card) -> Dict[str, Any]:
    return {"rank": card.rank, "suit": card.suit.label, "id": card.id}


def card_from_dict(d: Any) -> Card:
    """Accepts a card dict or a bare id string such as ``"10H"``."""
    if isinstance(d, str):
        return card_from_id(d)
    return Card(rank=int(d["rank"]), suit=Suit.from_label(d["suit"]))


def _player_to_dict(p: Player) -> Dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "seat_index": p.seat_index,
        "is_host": p.is_host,
        "connected": p.connected,
        "is_away": p.is_away,
        "current_bet": p.current_bet,
        "tricks_won": p.tricks_won,
        "total_points": p.total_points,
        "hand": [card_to_dict(c) for c in p.hand],
    }


def _player_from_dict(d: Dict[str, Any]) -> Player:
    bet = d.get("current_bet")
    return Player(
        id=d["id"],
        name=d["name"],
        seat_index=int(d["seat_index"]),
        is_host=bool(d.get("is_host", False)),
        connected=bool(d.get("connected", True)),
        is_away=bool(d.get("is_away", False)),
        current_bet=None if bet is None else int(bet),
        tricks_won=int(d.get("tricks_won", 0)),
        total_points=int(d.get("total_points", 0)),
        hand=tuple(card_from_dict(c) for c in d.get("hand", [])),
    )


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """Serialize a GameState to a JSON-compatible dict."""
    return {
        "schema_version": SCHEMA_VERSION,
        "room_code": state.room_code,
        "players": [_player_to_dict(p) for p in state.players],
        "round_index": state.round_index,
        "cards_per_player": state.cards_per_player,
        "trump": state.trump.label,
        "dealer_seat_index": state.dealer_seat_index,
        "current_leader_seat_index": state.current_leader_seat_index,
        "current_trick": [
            {"seat_index": pc.seat_index, "card": card_to_dict(pc.card)} for pc in state.current_trick
        ],
        "phase": state.phase.value,
        "deck_seed": state.deck_seed,
        "scores_history": [dict(s) for s in state.scores_history],
        "settings": asdict(state.settings),
        "current_deck": [card_to_dict(c) for c in state.current_deck],
        "played_pile": [card_to_dict(c) for c in state.played_pile],
        "spectators": [_player_to_dict(p) for p in state.spectators],
    }


def state_from_dict(d: Dict[str, Any]) -> GameState:
    """Deserialize a GameState from a dict produced by state_to_dict."""
    return GameState(
        room_code=d.get("room_code", ""),
        players=tuple(_player_from_dict(p) for p in d.get("players", [])),
        round_index=int(d.get("round_index", 0)),
        cards_per_player=int(d.get("cards_per_player", 0)),
        trump=Suit.from_label(d.get("trump", "spades")),
        dealer_seat_index=int(d.get("dealer_seat_index", 0)),
        current_leader_seat_index=int(d.get("current_leader_seat_index", 0)),
        current_trick=tuple(
            PlayedCard(int(pc["seat_index"]), card_from_dict(pc["card"]))
            for pc in d.get("current_trick", [])
        ),
        phase=Phase(d.get("phase", Phase.LOBBY.value)),
        deck_seed=d.get("deck_seed", ""),
        scores_history=tuple(
            {pid: int(score) for pid, score in s.items()} for s in d.get("scores_history", [])
        ),
        settings=GameSettings(**d.get("settings", {})),
        current_deck=tuple(card_from_dict(c) for c in d.get("current_deck", [])),
        played_pile=tuple(card_from_dict(c) for c in d.get("played_pile", [])),
        spectators=tuple(_player_from_dict(p) for p in d.get("spectators", [])),
    )


def state_to_json(state: GameState) -> str:
    return json.dumps(state_to_dict(state))


def state_from_json(s: str) -> GameState:
    return state_from_dict(json.loads(s))


def action_to_dict(action: GameAction) -> Dict[str, Any]:
    """Flat tagged dict: ``{"type": "BET", "player_id": "p1", "bet": 2}``."""
    d: Dict[str, Any] = {"type": action.type}
    d.update(asdict(action))
    if isinstance(action, PlayCard):
        d["card"] = card_to_dict(action.card)
    return d


def action_from_dict(d: Dict[str, Any]) -> GameAction:
    """Inverse of action_to_dict. Raises UnknownActionError on a bad type or missing field."""
    kind = d.get("type")
    cls = ACTION_TYPES.get(kind)
    if cls is None:
        raise UnknownActionError(f"Unknown action type: {kind!r}")
    try:
        if cls is Join:
            return Join(player_id=d["player_id"], name=d["name"])
        if cls is StartGame:
            cards = d.get("initial_cards_per_player")
            return StartGame(initial_cards_per_player=None if cards is None else int(cards))
        if cls is Bet:
            return Bet(player_id=d["player_id"], bet=d["bet"])
        if cls is PlayCard:
            return PlayCard(player_id=d["player_id"], card=card_from_dict(d["card"]))
        if cls is UpdateSettings:
            return UpdateSettings(settings=dict(d.get("settings", {})))
        if cls is ToggleAway:
            return ToggleAway(player_id=d["player_id"])
        if cls is RenamePlayer:
            return RenamePlayer(player_id=d["player_id"], new_name=d["new_name"])
    except KeyError as e:
        raise UnknownActionError(f"Action {kind} is missing field {e.args[0]!r}") from e
    return cls()


def action_to_json(action: GameAction) -> str:
    return json.dumps(action_to_dict(action))


def action_from_json(s: str) -> GameAction:
    return action_from_dict(json.loads(s))


__all__ = [
    "SCHEMA_VERSION",
    "card_to_dict",
    "card_from_dict",
    "state_to_dict",
    "state_from_dict",
    "state_to_json",
    "state_from_json",
    "action_to_dict",
    "action_from_dict",
    "action_to_json",
    "action_from_json",
]
