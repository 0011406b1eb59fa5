"""Judgment card game engine (trick-taking with exact bids and the dealer hook)."""

__version__ = "0.1.0"

from .deck import Card, Suit, make_deck_52, shuffle_deck, sort_hand, card_from_id
from .deal import RoundDeal, prepare_round_deck, trump_for_round
from .play import PlayedCard, is_valid_play, legal_plays, trick_winner
from .bidding import can_bet, forbidden_bet, legal_bets
from .scoring import round_score, calculate_scores
from .errors import (
    GameError,
    PhaseError,
    TurnError,
    RuleViolation,
    NotFoundError,
    ResourceError,
    UnknownActionError,
)
from .state import GameSettings, GameState, Phase, Player
from .actions import (
    Bet,
    EndGame,
    GameAction,
    Join,
    PlayCard,
    RenamePlayer,
    StartGame,
    ToggleAway,
    UpdateSettings,
)
from .game import apply_action, new_game
from .agents import AwayAutoPlayer, RandomAgent, auto_play_bet, auto_play_card
