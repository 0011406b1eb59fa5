"""
Authoritative room host.

One ``RoomHost`` owns one room: it is the single writer of that room's
GameState. Actions, from the host's own player or drained from the store's
queue, are applied one at a time under a lock and the result is written back
to the store for everyone else to read.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional, Tuple

from .actions import Bet, GameAction, PlayCard
from .agents import AwayAutoPlayer, Policy
from .config import HostConfig
from .errors import GameError, TurnError
from .game import apply_action, new_game
from .state import GameSettings, GameState, Phase
from .store import RoomStore, generate_room_code

logger = logging.getLogger(__name__)

Rejected = Tuple[str, GameAction, GameError]


def _turn_marker(state: GameState) -> tuple:
    return (state.phase, state.round_index, state.current_leader_seat_index, len(state.current_trick), state.bets_placed())


class RoomHost:
    """Serializes actions for one room and publishes each new state."""

    def __init__(
        self,
        store: RoomStore,
        room_code: str,
        config: Optional[HostConfig] = None,
        policy: Optional[Policy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.store = store
        self.room_code = room_code
        self.config = config or HostConfig()
        self.policy = policy or AwayAutoPlayer()
        self._sleep = sleep
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        store: RoomStore,
        host_id: str,
        host_name: str,
        config: Optional[HostConfig] = None,
        deck_seed: Optional[str] = None,
        settings: Optional[GameSettings] = None,
        **kwargs,
    ) -> "RoomHost":
        """Reserve a room code, store a fresh lobby and return its host."""
        code = generate_room_code(store)
        store.set(code, new_game(code, host_id, host_name, deck_seed=deck_seed, settings=settings))
        logger.info("Created room %s for host %s", code, host_id)
        return cls(store, code, config=config, **kwargs)

    @property
    def state(self) -> GameState:
        state = self.store.get(self.room_code)
        if state is None:
            raise KeyError(f"Room not found: {self.room_code}")
        return state

    def submit(self, action: GameAction) -> GameState:
        """Apply one action and persist the result. GameErrors propagate; nothing is stored then."""
        with self._lock:
            return self._apply(action)

    def _apply(self, action: GameAction) -> GameState:
        # Caller holds self._lock.
        try:
            new_state = apply_action(self.state, action)
        except GameError as e:
            logger.warning("Room %s: rejected %s: %s", self.room_code, action.type, e)
            raise
        self.store.set(self.room_code, new_state)
        return new_state

    def enqueue(self, player_id: str, action: GameAction) -> None:
        """Queue an action from a remote client for the next ``process_pending``."""
        if self.store.get(self.room_code) is None:
            raise KeyError(f"Room not found: {self.room_code}")
        self.store.push_action(self.room_code, player_id, action)

    def process_pending(self) -> Tuple[GameState, List[Rejected]]:
        """
        Apply every queued action in arrival order.

        Rejected actions are logged and returned but do not stop the batch.
        An action naming a player other than its sender is rejected as a turn error.
        """
        rejected: List[Rejected] = []
        for sender, action in self.store.drain_actions(self.room_code):
            actor = getattr(action, "player_id", sender)
            try:
                if actor != sender:
                    raise TurnError(f"Player {sender} cannot act for {actor}")
                self.submit(action)
            except GameError as e:
                rejected.append((sender, action, e))
        return self.state, rejected

    def auto_play_action(self, state: Optional[GameState] = None) -> Optional[GameAction]:
        """Action the policy would take for the current player if they are away, else None."""
        state = state or self.state
        if not state.settings.auto_play_enabled:
            return None
        player = state.current_player
        if player is None or not player.is_away:
            return None
        if state.phase == Phase.BETTING:
            return Bet(player_id=player.id, bet=self.policy.choose_bet(state, player))
        return PlayCard(player_id=player.id, card=self.policy.choose_card(state, player))

    def step_auto_play(self) -> Optional[GameState]:
        """Wait the configured delay, then play one move for an away player if one is due."""
        state = self.state
        action = self.auto_play_action(state)
        if action is None:
            return None
        self._sleep(self.config.auto_play_delay)
        with self._lock:
            # The turn may have moved, or the player come back, while we waited.
            current = self.state
            if _turn_marker(current) != _turn_marker(state) or self.auto_play_action(current) is None:
                return None
            logger.debug("Room %s: auto-play %s", self.room_code, action)
            return self._apply(action)

    def run_auto_play(self, max_steps: int = 1000) -> int:
        """Keep auto-playing until a present player holds the turn. Returns moves made."""
        steps = 0
        while steps < max_steps and self.step_auto_play() is not None:
            steps += 1
        return steps


__all__ = ["RoomHost"]
