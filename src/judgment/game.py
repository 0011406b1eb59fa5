"""
The rule engine: a pure reducer ``apply_action(state, action) -> new_state``.

Match flow: lobby → betting → playing → betting → … → finished. Each
betting/playing cycle is one round; every round deals one card fewer than the
last until no card would be dealt. Invalid actions raise a GameError subclass
and leave the input state untouched; the new state is only returned once the
whole transition has been built.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import fields, replace
from typing import Callable, Dict, Optional, Tuple

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
from .bidding import can_bet
from .deal import (
    dealer_for_round,
    default_cards_per_player,
    first_to_bid,
    next_seat,
    prepare_round_deck,
    trump_for_round,
)
from .deck import DECK_SIZE, make_deck_52
from .errors import GameError, PhaseError, RuleViolation, TurnError, UnknownActionError
from .play import PlayedCard, is_valid_play, trick_winner
from .scoring import calculate_scores
from .state import GameSettings, GameState, Phase, Player

logger = logging.getLogger(__name__)


def new_game(
    room_code: str,
    host_id: str,
    host_name: str,
    deck_seed: Optional[str] = None,
    settings: Optional[GameSettings] = None,
) -> GameState:
    """Fresh lobby with the host seated at 0."""
    host = Player(id=host_id, name=host_name, seat_index=0, is_host=True)
    return GameState(
        room_code=room_code,
        players=(host,),
        deck_seed=deck_seed or uuid.uuid4().hex,
        settings=settings or GameSettings(),
    )


def round_seed(state: GameState) -> str:
    """Seed for the round about to be dealt: the match seed, suffixed after round 0."""
    if state.round_index == 0:
        return state.deck_seed
    return f"{state.deck_seed}{state.round_index}"


def rematch_seed(seed: str) -> str:
    """Seed for the next match in the same room; each rematch deals new hands."""
    return f"{seed}-rematch"


def _replace_player(players: Tuple[Player, ...], seat: int, **changes) -> Tuple[Player, ...]:
    return players[:seat] + (replace(players[seat], **changes),) + players[seat + 1:]


def _begin_round(state: GameState) -> GameState:
    """
    Deal the round at ``state.round_index`` from ``state.current_deck``.

    Rounds after the first deal one card fewer; when that would be zero the
    match is finished instead.
    """
    cards = state.cards_per_player - 1 if state.round_index > 0 else state.cards_per_player
    if cards < 1:
        logger.info("Room %s: match finished after %d rounds", state.room_code, state.round_index)
        return replace(state, cards_per_player=0, phase=Phase.FINISHED)

    n = state.num_players
    deal = prepare_round_deck(
        state.current_deck,
        state.round_index,
        n,
        cards,
        round_seed(state),
        strategy=state.settings.discard_strategy,
    )
    players = tuple(
        replace(p, hand=tuple(deal.hands[i]), current_bet=None, tricks_won=0)
        for i, p in enumerate(state.players)
    )
    dealer = dealer_for_round(state.round_index, n)
    trump = trump_for_round(state.round_index)
    logger.info(
        "Room %s: round %d, %d cards each, trump %s, dealer seat %d",
        state.room_code, state.round_index, cards, trump.label, dealer,
    )
    return replace(
        state,
        players=players,
        cards_per_player=cards,
        # Discarded cards stay set aside in the stock for the rest of the round.
        current_deck=tuple(deal.remaining_deck) + tuple(deal.discarded),
        played_pile=(),
        current_trick=(),
        trump=trump,
        dealer_seat_index=dealer,
        current_leader_seat_index=first_to_bid(dealer, n),
        phase=Phase.BETTING,
    )


def _end_round(state: GameState) -> GameState:
    """Score the finished round, recycle the played cards, deal the next round."""
    scores = calculate_scores(state.players)
    players = tuple(replace(p, total_points=p.total_points + scores[p.id]) for p in state.players)
    logger.info("Room %s: round %d scores %s", state.room_code, state.round_index, scores)
    state = replace(
        state,
        players=players,
        scores_history=state.scores_history + (scores,),
        round_index=state.round_index + 1,
        current_deck=state.current_deck + state.played_pile,
        played_pile=(),
    )
    return _begin_round(state)


def _require_turn(state: GameState, player_id: str, phase: Phase, verb: str) -> Player:
    player = state.player(player_id)
    if state.phase != phase:
        raise PhaseError(f"Not {phase.value} phase (phase is {state.phase.value})")
    if state.players[state.current_leader_seat_index].id != player_id:
        raise TurnError(f"Not your turn to {verb}: {player_id}")
    return player


def _join(state: GameState, action: Join) -> GameState:
    if state.has_player(action.player_id):
        seat = state.player(action.player_id).seat_index
        return replace(state, players=_replace_player(state.players, seat, connected=True))
    if state.has_spectator(action.player_id):
        return state
    if state.phase in (Phase.BETTING, Phase.PLAYING):
        if not state.settings.allow_spectators:
            raise PhaseError("Cannot join - match in progress")
        spectator = Player(
            id=action.player_id,
            name=action.name,
            seat_index=state.num_players + len(state.spectators),
        )
        logger.debug("Room %s: %s joined as spectator", state.room_code, action.player_id)
        return replace(state, spectators=state.spectators + (spectator,))
    player = Player(
        id=action.player_id,
        name=action.name,
        seat_index=state.num_players,
        is_host=state.host is None,
    )
    logger.debug("Room %s: %s joined at seat %d", state.room_code, action.player_id, player.seat_index)
    return replace(state, players=state.players + (player,))


def _start_game(state: GameState, action: StartGame) -> GameState:
    if state.phase not in (Phase.LOBBY, Phase.FINISHED):
        raise PhaseError("Cannot start game - not in lobby")
    seated = state.players + state.spectators
    if not seated:
        raise RuleViolation("Cannot start game without players")
    cards = action.initial_cards_per_player
    if cards is None:
        cards = default_cards_per_player(len(seated), DECK_SIZE)
    elif cards < 1:
        raise RuleViolation(f"Invalid initial cards per player: {cards}")

    players = tuple(
        replace(p, seat_index=i, total_points=0, tricks_won=0, current_bet=None, hand=())
        for i, p in enumerate(seated)
    )
    seed = state.deck_seed or uuid.uuid4().hex
    if state.phase == Phase.FINISHED:
        seed = rematch_seed(seed)
    state = replace(
        state,
        players=players,
        round_index=0,
        scores_history=(),
        current_deck=tuple(make_deck_52()),
        played_pile=(),
        current_trick=(),
        cards_per_player=cards,
        deck_seed=seed,
        spectators=(),
    )
    return _begin_round(state)


def _bet(state: GameState, action: Bet) -> GameState:
    player = _require_turn(state, action.player_id, Phase.BETTING, "bet")
    bet = action.bet
    if isinstance(bet, bool) or not isinstance(bet, int) or bet < 0:
        raise RuleViolation(f"Invalid bet {bet!r}: must be a non-negative integer")
    if not can_bet(bet, state.bets_placed(), state.num_players, state.cards_per_player):
        raise RuleViolation(f"Invalid bet {bet} (dealer constraint)")

    n = state.num_players
    players = _replace_player(state.players, player.seat_index, current_bet=bet)
    state = replace(
        state,
        players=players,
        current_leader_seat_index=next_seat(state.current_leader_seat_index, n),
    )
    if all(p.current_bet is not None for p in players):
        state = replace(
            state,
            phase=Phase.PLAYING,
            current_leader_seat_index=first_to_bid(state.dealer_seat_index, n),
        )
    return state


def _play_card(state: GameState, action: PlayCard) -> GameState:
    player = _require_turn(state, action.player_id, Phase.PLAYING, "play")
    wanted = action.card
    held = next((c for c in player.hand if c.suit == wanted.suit and c.rank == wanted.rank), None)
    if held is None:
        raise RuleViolation(f"Card {wanted.id} not in hand")
    if not is_valid_play(held, player.hand, state.current_trick):
        raise RuleViolation(f"Invalid card play: {held.id} (must follow suit)")

    n = state.num_players
    hand = tuple(c for c in player.hand if c is not held)
    state = replace(
        state,
        players=_replace_player(state.players, player.seat_index, hand=hand),
        current_trick=state.current_trick + (PlayedCard(player.seat_index, held),),
        current_leader_seat_index=next_seat(state.current_leader_seat_index, n),
    )
    if len(state.current_trick) < n:
        return state

    winner = trick_winner(state.current_trick, state.trump)
    players = _replace_player(
        state.players, winner, tricks_won=state.players[winner].tricks_won + 1
    )
    logger.debug("Room %s: seat %d wins trick %s", state.room_code, winner, [pc.card.id for pc in state.current_trick])
    state = replace(
        state,
        players=players,
        played_pile=state.played_pile + tuple(pc.card for pc in state.current_trick),
        current_trick=(),
        current_leader_seat_index=winner,
    )
    if not state.players[winner].hand:
        return _end_round(state)
    return state


def _update_settings(state: GameState, action: UpdateSettings) -> GameState:
    known = {f.name for f in fields(GameSettings)}
    unknown = set(action.settings) - known
    if unknown:
        raise GameError(f"Unknown settings: {sorted(unknown)}")
    try:
        settings = replace(state.settings, **action.settings)
    except ValueError as e:
        raise RuleViolation(str(e)) from e
    return replace(state, settings=settings)


def _toggle_away(state: GameState, action: ToggleAway) -> GameState:
    player = state.player(action.player_id)
    return replace(
        state,
        players=_replace_player(state.players, player.seat_index, is_away=not player.is_away),
    )


def _rename_player(state: GameState, action: RenamePlayer) -> GameState:
    player = state.player(action.player_id)
    name = action.new_name.strip()
    if not name:
        raise RuleViolation("Player name cannot be empty")
    return replace(state, players=_replace_player(state.players, player.seat_index, name=name))


def _end_game(state: GameState, action: EndGame) -> GameState:
    logger.info("Room %s: match ended by host", state.room_code)
    return replace(state, phase=Phase.FINISHED)


_HANDLERS: Dict[type, Callable[[GameState, GameAction], GameState]] = {
    Join: _join,
    StartGame: _start_game,
    Bet: _bet,
    PlayCard: _play_card,
    UpdateSettings: _update_settings,
    ToggleAway: _toggle_away,
    RenamePlayer: _rename_player,
    EndGame: _end_game,
}


def apply_action(state: GameState, action: GameAction) -> GameState:
    """
    Apply one action and return the resulting state.

    Raises PhaseError, TurnError, RuleViolation, NotFoundError or
    ResourceError; ``state`` itself is never modified.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise UnknownActionError(f"Unknown action: {action!r}")
    return handler(state, action)


__all__ = ["new_game", "apply_action", "round_seed", "rematch_seed"]
