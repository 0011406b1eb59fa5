"""Tests for room stores and configuration."""
import random

import pytest

from judgment.actions import Bet, Join
from judgment.config import HostConfig
from judgment.game import new_game
from judgment.store import (
    ROOM_CODE_ALPHABET,
    MemoryRoomStore,
    RedisRoomStore,
    generate_room_code,
    make_store,
)


def test_memory_store_get_set_delete():
    store = MemoryRoomStore()
    state = new_game("R1", "h", "Host", deck_seed="s")
    assert store.get("R1") is None
    store.set("R1", state)
    assert store.get("R1") is state
    store.delete("R1")
    assert store.get("R1") is None


def test_memory_store_action_queue_is_fifo_and_drains():
    store = MemoryRoomStore()
    store.push_action("R1", "a", Join("a", "A"))
    store.push_action("R1", "b", Bet("b", 2))
    assert store.drain_actions("R1") == [("a", Join("a", "A")), ("b", Bet("b", 2))]
    assert store.drain_actions("R1") == []


def test_redis_store_round_trip(fake_redis):
    cfg = HostConfig(state_ttl_seconds=60, action_ttl_seconds=30)
    store = RedisRoomStore(fake_redis, cfg)
    state = new_game("R2", "h", "Host", deck_seed="s")
    store.set("R2", state)
    assert fake_redis.ttls["room:R2:state"] == 60
    assert store.get("R2") == state

    store.push_action("R2", "h", Bet("h", 1))
    store.push_action("R2", "x", Join("x", "X"))
    assert fake_redis.ttls["room:R2:actions"] == 30
    assert store.drain_actions("R2") == [("h", Bet("h", 1)), ("x", Join("x", "X"))]
    assert store.drain_actions("R2") == []

    store.delete("R2")
    assert store.get("R2") is None


def test_redis_store_decodes_bytes(fake_redis):
    store = RedisRoomStore(fake_redis)
    state = new_game("R3", "h", "Host", deck_seed="s")
    store.set("R3", state)
    fake_redis.values["room:R3:state"] = fake_redis.values["room:R3:state"].encode("utf-8")
    assert store.get("R3") == state


def test_make_store_defaults_to_memory():
    assert isinstance(make_store(HostConfig()), MemoryRoomStore)


def test_generate_room_code_format_and_collisions():
    store = MemoryRoomStore()
    code = generate_room_code(store, rng=random.Random(1))
    assert len(code) == 6
    assert set(code) <= set(ROOM_CODE_ALPHABET)

    # Same seed -> same first code, which is now taken.
    store.set(code, new_game(code, "h", "H"))
    other = generate_room_code(store, rng=random.Random(1))
    assert other != code


def test_generate_room_code_gives_up():
    class FullStore(MemoryRoomStore):
        def get(self, room_code):
            return new_game(room_code, "h", "H")

    with pytest.raises(RuntimeError):
        generate_room_code(FullStore())


def test_host_config_from_env():
    cfg = HostConfig.from_env(
        {
            "JUDGMENT_REDIS_URL": "redis://localhost:6379/0",
            "JUDGMENT_STATE_TTL": "120",
            "JUDGMENT_AUTOPLAY_DELAY": "0.25",
        }
    )
    assert cfg.redis_url == "redis://localhost:6379/0"
    assert cfg.state_ttl_seconds == 120
    assert cfg.action_ttl_seconds == 3600
    assert cfg.auto_play_delay == 0.25
    assert cfg.key_prefix == "room"


def test_host_config_from_process_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("JUDGMENT_REDIS_URL", raising=False)
    monkeypatch.setenv("JUDGMENT_ACTION_TTL", "10")
    cfg = HostConfig.from_env()
    assert cfg.redis_url is None
    assert cfg.action_ttl_seconds == 10
