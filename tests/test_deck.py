"""Tests for the 52-card deck, card ids and seeded shuffling."""
import pytest

from judgment.deck import Card, Suit, card_from_id, make_deck_52, shuffle_deck, sort_hand


def test_deck_52_unique():
    deck = make_deck_52()
    assert len(deck) == 52
    assert len({c.id for c in deck}) == 52
    assert len({(c.rank, c.suit) for c in deck}) == 52


def test_deck_is_deterministic():
    assert make_deck_52() == make_deck_52()


def test_card_ids():
    assert Card(14, Suit.SPADES).id == "AS"
    assert Card(10, Suit.HEARTS).id == "10H"
    assert Card(2, Suit.CLUBS).id == "2C"
    assert Card(11, Suit.DIAMONDS).id == "JD"
    assert card_from_id("QD") == Card(12, Suit.DIAMONDS)
    assert card_from_id("10h") == Card(10, Suit.HEARTS)


@pytest.mark.parametrize("bad", ["", "1S", "ZZ", "10X", "H"])
def test_card_from_id_rejects_garbage(bad):
    with pytest.raises(ValueError):
        card_from_id(bad)


def test_card_rank_range():
    with pytest.raises(ValueError):
        Card(15, Suit.HEARTS)
    with pytest.raises(ValueError):
        Card(1, Suit.HEARTS)


def test_shuffle_seeded_is_reproducible():
    deck = make_deck_52()
    a = shuffle_deck(deck, "match-1")
    b = shuffle_deck(deck, "match-1")
    c = shuffle_deck(deck, "match-2")
    assert a == b
    assert a != c
    assert sorted(a, key=Card.sort_key) == sorted(deck, key=Card.sort_key)


def test_shuffle_does_not_mutate_input():
    deck = make_deck_52()
    before = list(deck)
    out = shuffle_deck(deck, "x")
    assert deck == before
    assert out is not deck


def test_shuffle_unseeded_keeps_cards():
    deck = make_deck_52()
    out = shuffle_deck(deck)
    assert set(out) == set(deck)


def test_sort_hand_suit_then_rank_descending():
    hand = [card_from_id(i) for i in ("3S", "AC", "10H", "2C", "KS", "5D")]
    assert [c.id for c in sort_hand(hand)] == ["AC", "2C", "5D", "10H", "KS", "3S"]
