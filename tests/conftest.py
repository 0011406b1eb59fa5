from collections import defaultdict
from typing import Callable

import pytest

from judgment.deck import Card, card_from_id
from judgment.play import PlayedCard


def cards(*ids: str) -> tuple[Card, ...]:
    return tuple(card_from_id(i) for i in ids)


def trick(*ids: str) -> list[PlayedCard]:
    """Trick with seat i playing the i-th card."""
    return [PlayedCard(i, card_from_id(cid)) for i, cid in enumerate(ids)]


class FakeRedis:
    """Dict-backed stand-in for the subset of redis.Redis the room store uses."""

    def __init__(self):
        self.values = {}
        self.lists = defaultdict(list)
        self.ttls = {}

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value, ex=None):
        self.values[key] = value
        if ex is not None:
            self.ttls[key] = ex

    def delete(self, *keys):
        for key in keys:
            self.values.pop(key, None)
            self.lists.pop(key, None)

    def rpush(self, key, value):
        self.lists[key].append(value)

    def expire(self, key, seconds):
        self.ttls[key] = seconds

    def lrange(self, key, start, end):
        items = list(self.lists.get(key, []))
        return items[start:] if end == -1 else items[start:end + 1]

    def pipeline(self):
        return _FakePipeline(self)


class _FakePipeline:
    def __init__(self, client):
        self.client = client
        self.calls = []

    def lrange(self, *args):
        self.calls.append(("lrange", args))

    def delete(self, *args):
        self.calls.append(("delete", args))

    def execute(self):
        return [getattr(self.client, name)(*args) for name, args in self.calls]


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def no_sleep() -> Callable[[float], None]:
    """Sleep replacement that records requested delays instead of waiting."""
    delays = []

    def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep
