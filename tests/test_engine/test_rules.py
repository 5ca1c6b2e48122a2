"""Tests for play validity."""

import pytest

from palace_engine.cards import Card, Rank, Suit, rank_value
from palace_engine.rules import is_valid_play, playable_indices
from palace_engine.state import Pile

ALL_CARDS = [Card(suit, rank) for suit in Suit for rank in Rank]


def on(name):
    return Pile().with_played(Card.parse(name))


class TestIsValidPlay:
    def test_empty_pile_takes_anything(self):
        """Scenario A: a Seven on an empty pile is fine."""
        assert all(is_valid_play(card, Pile()) for card in ALL_CARDS)
        assert is_valid_play(Card.parse("7H"), Pile())

    def test_seven_reverses(self):
        """Scenario B: on a Seven only equal or lower plays."""
        assert not is_valid_play(Card.parse("KS"), on("7H"))
        assert is_valid_play(Card.parse("3S"), on("7H"))
        assert is_valid_play(Card.parse("7D"), on("7H"))
        assert not is_valid_play(Card.parse("8D"), on("7H"))

    def test_two_is_wild(self):
        """Scenario C: a Two goes on a King, and anything goes on a Two."""
        assert is_valid_play(Card.parse("2C"), on("KS"))
        assert all(is_valid_play(card, on("2C")) for card in ALL_CARDS)

    def test_two_beats_seven_reversal(self):
        assert is_valid_play(Card.parse("2H"), on("7S"))

    def test_ten_always_playable(self):
        assert is_valid_play(Card.parse("10H"), on("AS"))
        assert is_valid_play(Card.parse("10H"), on("7S"))

    def test_normal_needs_equal_or_higher(self):
        assert is_valid_play(Card.parse("AS"), on("KD"))
        assert is_valid_play(Card.parse("KS"), on("KD"))
        assert not is_valid_play(Card.parse("5S"), on("KD"))
        assert not is_valid_play(Card.parse("9S"), on("10D"))

    @pytest.mark.parametrize("top", ALL_CARDS, ids=str)
    def test_precedence_over_every_pair(self, top):
        pile = on(str(top))
        for card in ALL_CARDS:
            if Rank.TWO in (card.rank, top.rank) or card.rank == Rank.TEN:
                expected = True
            elif top.rank == Rank.SEVEN:
                expected = rank_value(card) <= rank_value(top)
            else:
                expected = rank_value(card) >= rank_value(top)
            assert is_valid_play(card, pile) == expected, f"{card} on {top}"


class TestPlayableIndices:
    def test_marks_valid_positions(self):
        hand = [Card.parse(n) for n in ("3H", "QS", "10C", "2D", "9S")]
        assert playable_indices(hand, on("JH")) == [1, 2, 3]
        assert playable_indices(hand, on("7H")) == [0, 2, 3]
        assert playable_indices(hand, Pile()) == [0, 1, 2, 3, 4]
