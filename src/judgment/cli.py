"""
Command-line interface for inspecting deals, simulating matches and
replaying recorded action logs.

Usage examples (after ``pip install -e .``):

    python -m judgment.cli deal --players 6 --cards 8 --seed demo
    python -m judgment.cli simulate --players 4 --matches 200 --policy random
    python -m judgment.cli replay actions.json --output final_state.json
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from .agents import AwayAutoPlayer, RandomAgent
from .deal import DISCARD_STRATEGIES, prepare_round_deck
from .deck import make_deck_52
from .errors import GameError
from .game import apply_action, new_game
from .persistence import action_from_dict, state_to_dict
from .simulate import run_matches, summarize

logger = logging.getLogger(__name__)


def _add_deal_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("deal", help="Show the hands a seeded round deal produces.")
    parser.add_argument("--players", type=int, default=4, help="Number of players.")
    parser.add_argument("--cards", type=int, default=None, help="Cards per player (default: 52 // players).")
    parser.add_argument("--round", type=int, default=0, dest="round_index", help="Round index (0 = priority discard).")
    parser.add_argument("--seed", type=str, default="demo", help="Deck seed string.")
    parser.add_argument(
        "--strategy",
        choices=DISCARD_STRATEGIES,
        default="auto",
        help="Discard strategy.",
    )
    parser.set_defaults(func=_cmd_deal)


def _cmd_deal(args: argparse.Namespace) -> None:
    cards = args.cards if args.cards is not None else 52 // args.players
    deal = prepare_round_deck(
        make_deck_52(), args.round_index, args.players, cards, args.seed, strategy=args.strategy
    )
    for seat, hand in enumerate(deal.hands):
        print(f"seat {seat}: {' '.join(str(c) for c in hand)}")
    print(f"discarded ({len(deal.discarded)}): {' '.join(str(c) for c in deal.discarded)}")


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("simulate", help="Play seeded matches with built-in policies.")
    parser.add_argument("--players", type=int, default=4, help="Number of players.")
    parser.add_argument("--matches", type=int, default=100, help="Number of matches to play.")
    parser.add_argument("--cards", type=int, default=None, help="Cards per player in round 0.")
    parser.add_argument("--seed", type=str, default="sim", help="Base seed; match i uses '<seed>-<i>'.")
    parser.add_argument(
        "--policy",
        choices=["auto", "random"],
        default="random",
        help="auto = away-player policy for every seat; random = seeded random agents.",
    )
    parser.add_argument("--output", type=str, default=None, help="Optional JSON file for the summary.")
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    if args.policy == "auto":
        policies = [AwayAutoPlayer() for _ in range(args.players)]
    else:
        policies = [RandomAgent(seed=i) for i in range(args.players)]
    results = run_matches(args.players, policies, args.matches, args.seed, args.cards)
    summary = summarize(results)
    for seat in range(args.players):
        print(
            f"seat {seat}: mean={summary['mean'][seat]:.1f} std={summary['std'][seat]:.1f} "
            f"min={summary['min'][seat]:.0f} max={summary['max'][seat]:.0f} "
            f"wins={summary['wins'][seat]:.0f}",
            flush=True,
        )
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        with out.open("w", encoding="utf-8") as f:
            json.dump({"players": args.players, "matches": args.matches, "summary": summary}, f, indent=2)
        print(f"Saved summary to {out.resolve()}")


def _add_replay_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser("replay", help="Apply a JSON list of actions to a fresh room.")
    parser.add_argument("actions", type=str, help="JSON file holding a list of action dicts.")
    parser.add_argument("--host-id", type=str, default="host", help="Player id of the room host.")
    parser.add_argument("--host-name", type=str, default="Host", help="Display name of the host.")
    parser.add_argument("--seed", type=str, default="replay", help="Deck seed of the match.")
    parser.add_argument("--output", type=str, default=None, help="Write the final state JSON here.")
    parser.add_argument("--strict", action="store_true", help="Stop at the first rejected action.")
    parser.set_defaults(func=_cmd_replay)


def _cmd_replay(args: argparse.Namespace) -> None:
    with open(args.actions, encoding="utf-8") as f:
        raw_actions = json.load(f)
    state = new_game("REPLAY", args.host_id, args.host_name, deck_seed=args.seed)
    rejected = 0
    for i, raw in enumerate(raw_actions):
        try:
            state = apply_action(state, action_from_dict(raw))
        except GameError as e:
            if args.strict:
                raise SystemExit(f"action {i} rejected: {e}")
            logger.warning("action %d rejected: %s", i, e)
            rejected += 1
    print(
        f"applied {len(raw_actions) - rejected}/{len(raw_actions)} actions; "
        f"phase={state.phase.value} round={state.round_index}"
    )
    for p in state.players:
        print(f"  {p.name}: {p.total_points} pts")
    if args.output:
        Path(args.output).write_text(json.dumps(state_to_dict(state), indent=2), encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="judgment", description="Judgment card game engine CLI.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_deal_parser(subparsers)
    _add_simulate_parser(subparsers)
    _add_replay_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
