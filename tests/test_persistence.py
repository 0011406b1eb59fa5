"""Tests for GameState and action serialization."""
import json

import pytest

from judgment.actions import Bet, EndGame, Join, PlayCard, StartGame, UpdateSettings
from judgment.deck import card_from_id
from judgment.errors import UnknownActionError
from judgment.game import apply_action, new_game
from judgment.persistence import (
    SCHEMA_VERSION,
    action_from_dict,
    action_from_json,
    action_to_dict,
    action_to_json,
    state_from_dict,
    state_from_json,
    state_to_dict,
    state_to_json,
)


def _mid_trick_state():
    state = new_game("ABC123", "p0", "Ann", deck_seed="persist")
    state = apply_action(state, Join("p1", "Bob"))
    state = apply_action(state, StartGame(initial_cards_per_player=3))
    state = apply_action(state, Bet("p1", 1))
    state = apply_action(state, Bet("p0", 1))
    leader = state.current_player
    return apply_action(state, PlayCard(leader.id, leader.hand[0]))


def test_state_round_trip_mid_trick():
    state = _mid_trick_state()
    assert len(state.current_trick) == 1
    restored = state_from_json(state_to_json(state))
    assert restored == state


def test_state_round_trip_keeps_spectators():
    state = apply_action(_mid_trick_state(), Join("late", "Late"))
    restored = state_from_json(state_to_json(state))
    assert [p.id for p in restored.spectators] == ["late"]
    assert restored == state


def test_state_dict_is_plain_json():
    d = state_to_dict(_mid_trick_state())
    assert d["schema_version"] == SCHEMA_VERSION
    assert d["phase"] == "playing"
    assert d["trump"] == "spades"
    card = d["current_trick"][0]["card"]
    assert set(card) == {"rank", "suit", "id"}
    json.dumps(d)


def test_state_from_dict_defaults():
    state = state_from_dict({"room_code": "X", "players": []})
    assert state.phase.value == "lobby"
    assert state.settings.auto_play_enabled


def test_action_dicts_are_flat():
    d = action_to_dict(PlayCard("p1", card_from_id("10H")))
    assert d == {"type": "PLAY_CARD", "player_id": "p1", "card": {"rank": 10, "suit": "hearts", "id": "10H"}}
    assert action_to_dict(Bet("p2", 3)) == {"type": "BET", "player_id": "p2", "bet": 3}
    assert action_to_dict(EndGame()) == {"type": "END_GAME"}


def test_action_round_trips():
    for action in (
        Join("p1", "Bob"),
        StartGame(initial_cards_per_player=5),
        StartGame(),
        PlayCard("p1", card_from_id("AS")),
        UpdateSettings({"allow_spectators": False}),
        EndGame(),
    ):
        assert action_from_json(action_to_json(action)) == action


def test_action_from_dict_accepts_card_id():
    action = action_from_dict({"type": "PLAY_CARD", "player_id": "p0", "card": "QD"})
    assert action == PlayCard("p0", card_from_id("QD"))


def test_action_from_dict_errors():
    with pytest.raises(UnknownActionError):
        action_from_dict({"type": "NEXT_ROUND"})
    with pytest.raises(UnknownActionError, match="bet"):
        action_from_dict({"type": "BET", "player_id": "p0"})
