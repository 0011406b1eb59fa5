import pytest

from judgment.agents import AwayAutoPlayer, RandomAgent
from judgment.simulate import run_match, run_matches, seat_ids, setup_match, summarize
from judgment.state import Phase


def test_setup_match_seats_players_and_starts():
    state = setup_match(3, "s", 4)
    assert [p.id for p in state.players] == seat_ids(3)
    assert state.phase == Phase.BETTING
    assert state.cards_per_player == 4


def test_setup_match_needs_two_players():
    with pytest.raises(ValueError):
        setup_match(1, "s")


def test_run_match_plays_every_round():
    result = run_match(4, [RandomAgent(seed=i) for i in range(4)], "match", initial_cards_per_player=5)
    assert result.final_state.phase == Phase.FINISHED
    assert result.rounds == 5
    assert result.totals == [sum(r[pid] for r in result.per_round) for pid in seat_ids(4)]
    assert result.final_state.is_conserved()


def test_run_match_is_deterministic():
    policies = [AwayAutoPlayer() for _ in range(3)]
    a = run_match(3, policies, "same", initial_cards_per_player=4)
    b = run_match(3, policies, "same", initial_cards_per_player=4)
    assert a.totals == b.totals
    assert a.per_round == b.per_round


def test_run_match_policy_count_must_match():
    with pytest.raises(ValueError):
        run_match(3, [AwayAutoPlayer()], "x")


def test_summarize_shapes_and_wins():
    results = run_matches(3, [AwayAutoPlayer() for _ in range(3)], 4, "batch", initial_cards_per_player=3)
    assert len(results) == 4
    summary = summarize(results)
    assert set(summary) == {"mean", "std", "min", "max", "wins"}
    assert all(len(v) == 3 for v in summary.values())
    assert sum(summary["wins"]) >= 4
    for seat in range(3):
        assert summary["min"][seat] <= summary["mean"][seat] <= summary["max"][seat]


def test_summarize_rejects_empty():
    with pytest.raises(ValueError):
        summarize([])
