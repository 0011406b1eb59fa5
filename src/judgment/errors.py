"""
Rule-engine errors.

Every rejected action raises one of these. They all derive from ``ValueError``
so callers that only care about "invalid move" can catch that.
"""
from __future__ import annotations


class GameError(ValueError):
    """Base class for every validation failure raised by the engine."""


class PhaseError(GameError):
    """Action attempted in the wrong phase (e.g. betting while playing)."""


class TurnError(GameError):
    """Action attempted by a player who does not hold the turn."""


class RuleViolation(GameError):
    """Illegal card (suit not followed) or illegal bet (dealer constraint)."""


class NotFoundError(GameError):
    """Referenced player id is not seated in the game."""


class ResourceError(GameError):
    """Deck preparation asked to deal more cards than the deck holds."""


class UnknownActionError(GameError):
    """Action type is not one the reducer understands."""


__all__ = [
    "GameError",
    "PhaseError",
    "TurnError",
    "RuleViolation",
    "NotFoundError",
    "ResourceError",
    "UnknownActionError",
]
