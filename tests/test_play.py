"""Trick winner and suit-following."""
import pytest
from conftest import cards, trick

from judgment.deck import Suit, card_from_id
from judgment.play import is_valid_play, legal_plays, trick_winner


def test_no_trump_highest_lead_suit_wins():
    assert trick_winner(trick("10H", "KH", "2H"), Suit.SPADES) == 1


def test_off_suit_high_card_never_wins():
    assert trick_winner(trick("10H", "KH", "AC"), Suit.SPADES) == 1


def test_any_trump_beats_lead_suit():
    assert trick_winner(trick("10H", "KH", "2S"), Suit.SPADES) == 2


def test_highest_trump_wins_among_trumps():
    assert trick_winner(trick("10H", "KH", "2S", "AS"), Suit.SPADES) == 3


def test_lower_trump_after_higher_trump_does_not_win():
    assert trick_winner(trick("10H", "AS", "2S"), Suit.SPADES) == 1


def test_trump_lead():
    assert trick_winner(trick("5S", "AH", "7S"), Suit.SPADES) == 2


def test_single_card_trick_and_empty_trick():
    assert trick_winner(trick("3D"), Suit.SPADES) == 0
    with pytest.raises(ValueError):
        trick_winner([], Suit.SPADES)


def test_must_follow_lead_suit():
    hand = cards("2H", "5C")
    hearts_lead = trick("9H")
    assert is_valid_play(card_from_id("2H"), hand, hearts_lead)
    assert not is_valid_play(card_from_id("5C"), hand, hearts_lead)


def test_void_in_lead_suit_plays_anything():
    hand = cards("2H", "5C")
    diamonds_lead = trick("9D")
    assert is_valid_play(card_from_id("2H"), hand, diamonds_lead)
    assert is_valid_play(card_from_id("5C"), hand, diamonds_lead)


def test_leading_plays_anything():
    hand = cards("2H", "5C", "AS")
    assert legal_plays(hand, []) == list(hand)


def test_legal_plays_filters_to_lead_suit():
    hand = cards("2H", "5C", "QH", "AS")
    assert [c.id for c in legal_plays(hand, trick("9H"))] == ["2H", "QH"]
