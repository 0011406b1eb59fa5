"""
Room storage: latest GameState per room plus a FIFO queue of pending actions.

``MemoryRoomStore`` keeps everything in the instance (one per host process);
``RedisRoomStore`` shares rooms between processes through redis with TTLs.
Neither is a module-level singleton: the host receives its store explicitly.
"""
from __future__ import annotations

import json
import logging
import random
from collections import defaultdict
from typing import Dict, List, Optional, Protocol, Tuple

import redis

from .actions import GameAction
from .config import HostConfig
from .persistence import action_from_dict, action_to_dict, state_from_json, state_to_json
from .state import GameState

logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # no 0/O, 1/I
ROOM_CODE_LENGTH = 6
ROOM_CODE_ATTEMPTS = 5

QueuedAction = Tuple[str, GameAction]  # (sender player id, action)


class RoomStore(Protocol):
    def get(self, room_code: str) -> Optional[GameState]: ...

    def set(self, room_code: str, state: GameState) -> None: ...

    def delete(self, room_code: str) -> None: ...

    def push_action(self, room_code: str, player_id: str, action: GameAction) -> None: ...

    def drain_actions(self, room_code: str) -> List[QueuedAction]: ...


class MemoryRoomStore:
    """In-process store; states are immutable so they are kept as-is."""

    def __init__(self) -> None:
        self._states: Dict[str, GameState] = {}
        self._actions: Dict[str, List[QueuedAction]] = defaultdict(list)

    def get(self, room_code: str) -> Optional[GameState]:
        return self._states.get(room_code)

    def set(self, room_code: str, state: GameState) -> None:
        self._states[room_code] = state

    def delete(self, room_code: str) -> None:
        self._states.pop(room_code, None)
        self._actions.pop(room_code, None)

    def push_action(self, room_code: str, player_id: str, action: GameAction) -> None:
        self._actions[room_code].append((player_id, action))

    def drain_actions(self, room_code: str) -> List[QueuedAction]:
        return self._actions.pop(room_code, [])


class RedisRoomStore:
    """
    Redis-backed store. State is JSON under ``<prefix>:<code>:state``; the
    action queue is a list under ``<prefix>:<code>:actions`` (RPUSH, oldest first).
    """

    def __init__(self, client: "redis.Redis", config: Optional[HostConfig] = None) -> None:
        self.client = client
        self.config = config or HostConfig()

    @classmethod
    def from_url(cls, url: str, config: Optional[HostConfig] = None) -> "RedisRoomStore":
        return cls(redis.Redis.from_url(url, decode_responses=True), config)

    def _state_key(self, room_code: str) -> str:
        return f"{self.config.key_prefix}:{room_code}:state"

    def _actions_key(self, room_code: str) -> str:
        return f"{self.config.key_prefix}:{room_code}:actions"

    def get(self, room_code: str) -> Optional[GameState]:
        raw = self.client.get(self._state_key(room_code))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return state_from_json(raw)

    def set(self, room_code: str, state: GameState) -> None:
        self.client.set(self._state_key(room_code), state_to_json(state), ex=self.config.state_ttl_seconds)

    def delete(self, room_code: str) -> None:
        self.client.delete(self._state_key(room_code), self._actions_key(room_code))

    def push_action(self, room_code: str, player_id: str, action: GameAction) -> None:
        key = self._actions_key(room_code)
        payload = json.dumps({"player_id": player_id, "action": action_to_dict(action)})
        self.client.rpush(key, payload)
        self.client.expire(key, self.config.action_ttl_seconds)

    def drain_actions(self, room_code: str) -> List[QueuedAction]:
        key = self._actions_key(room_code)
        pipe = self.client.pipeline()
        pipe.lrange(key, 0, -1)
        pipe.delete(key)
        raw_items, _ = pipe.execute()
        drained: List[QueuedAction] = []
        for raw in raw_items:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            item = json.loads(raw)
            drained.append((item["player_id"], action_from_dict(item["action"])))
        return drained


def make_store(config: HostConfig) -> RoomStore:
    """Redis store when a URL is configured, in-memory store otherwise."""
    if config.redis_url:
        logger.info("Using redis room store at %s", config.redis_url)
        return RedisRoomStore.from_url(config.redis_url, config)
    logger.info("Using in-memory room store")
    return MemoryRoomStore()


def generate_room_code(store: RoomStore, rng: Optional[random.Random] = None) -> str:
    """Fresh unused room code; raises RuntimeError after a few collisions."""
    rng = rng or random.Random()
    for _ in range(ROOM_CODE_ATTEMPTS):
        code = "".join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))
        if store.get(code) is None:
            return code
    raise RuntimeError("Could not generate unique room code")


__all__ = [
    "RoomStore",
    "MemoryRoomStore",
    "RedisRoomStore",
    "QueuedAction",
    "make_store",
    "generate_room_code",
    "ROOM_CODE_ALPHABET",
]
