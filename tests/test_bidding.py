"""Dealer constraint ("the hook") and scoring formula."""
from judgment.bidding import can_bet, forbidden_bet, legal_bets
from judgment.scoring import calculate_scores, round_score
from judgment.state import Player


def test_non_last_bidders_are_unconstrained():
    assert can_bet(5, [1, 2], 4, 10)
    assert can_bet(0, [], 4, 10)
    assert forbidden_bet([1, 2], 4, 10) is None


def test_last_bidder_cannot_make_total_equal_tricks():
    assert not can_bet(3, [2, 3, 2], 4, 10)
    assert can_bet(2, [2, 3, 2], 4, 10)
    assert can_bet(4, [2, 3, 2], 4, 10)
    assert forbidden_bet([2, 3, 2], 4, 10) == 3


def test_hook_out_of_reach_forbids_nothing():
    assert forbidden_bet([6, 6], 3, 10) is None
    assert can_bet(0, [6, 6], 3, 10)


def test_negative_bets_refused():
    assert not can_bet(-1, [], 4, 10)


def test_bets_above_hand_size_are_permitted():
    # No upper clamp: such a bet is legal and simply scores 0 when missed.
    assert can_bet(11, [], 4, 10)
    assert can_bet(11, [0, 0, 0], 4, 10)


def test_legal_bets_excludes_hook():
    assert legal_bets([1, 0], 3, 2) == [0, 2]
    assert legal_bets([], 3, 2) == [0, 1, 2]


def test_scoring_formula():
    assert round_score(0, 0) == 10
    assert round_score(1, 1) == 21
    assert round_score(2, 2) == 32
    assert round_score(5, 4) == 0
    assert round_score(None, 0) == 10


def test_calculate_scores_by_player_id():
    players = [
        Player(id="p1", name="a", seat_index=0, current_bet=0, tricks_won=0),
        Player(id="p2", name="b", seat_index=1, current_bet=1, tricks_won=1),
        Player(id="p3", name="c", seat_index=2, current_bet=2, tricks_won=2),
        Player(id="p4", name="d", seat_index=3, current_bet=5, tricks_won=4),
    ]
    assert calculate_scores(players) == {"p1": 10, "p2": 21, "p3": 32, "p4": 0}
