"""
Process-level configuration for room hosting.

Values come from the environment (a ``.env`` file in the working directory is
loaded first); anything unset falls back to the dataclass defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

ENV_REDIS_URL = "JUDGMENT_REDIS_URL"
ENV_STATE_TTL = "JUDGMENT_STATE_TTL"
ENV_ACTION_TTL = "JUDGMENT_ACTION_TTL"
ENV_AUTOPLAY_DELAY = "JUDGMENT_AUTOPLAY_DELAY"
ENV_KEY_PREFIX = "JUDGMENT_KEY_PREFIX"


@dataclass
class HostConfig:
    """Where room state lives and how the host schedules auto-play."""

    redis_url: Optional[str] = None  # None = in-memory store
    state_ttl_seconds: int = 86400
    action_ttl_seconds: int = 3600
    auto_play_delay: float = 1.0
    key_prefix: str = "room"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HostConfig":
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ
        defaults = cls()
        return cls(
            redis_url=environ.get(ENV_REDIS_URL) or None,
            state_ttl_seconds=int(environ.get(ENV_STATE_TTL, defaults.state_ttl_seconds)),
            action_ttl_seconds=int(environ.get(ENV_ACTION_TTL, defaults.action_ttl_seconds)),
            auto_play_delay=float(environ.get(ENV_AUTOPLAY_DELAY, defaults.auto_play_delay)),
            key_prefix=environ.get(ENV_KEY_PREFIX, defaults.key_prefix),
        )


__all__ = ["HostConfig"]
