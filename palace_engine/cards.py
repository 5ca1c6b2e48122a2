"""Card, Suit, Rank and Deck models for Palace."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator


class EmptyDeckError(Exception):
    """Raised when dealing from a deck with no cards left."""

    pass


class Suit(IntEnum):
    """Card suits, ordered alphabetically by name (starting-player tiebreak)."""

    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3

    def __str__(self) -> str:
        return self.letter

    @property
    def letter(self) -> str:
        return self.name[0]

    @property
    def title(self) -> str:
        return self.name.capitalize()


class Rank(IntEnum):
    """Card ranks by face value (Jack=11 through Ace=14)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return self.name[0]


# Ordering used for play validity and the starting-player scan.
# Two sits above the Ace: it is wild and resets the comparison.
RANK_VALUES: dict[Rank, int] = {
    Rank.TWO: 15,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 11,
    Rank.QUEEN: 12,
    Rank.KING: 13,
    Rank.ACE: 14,
}


def rank_value(card: Card) -> int:
    """Ordering value of a card's rank."""
    return RANK_VALUES[card.rank]


@dataclass(frozen=True, slots=True)
class Card:
    """A playing card. Immutable; equal when suit and rank match."""

    suit: Suit
    rank: Rank

    @property
    def long_name(self) -> str:
        return f"{self.rank.symbol} of {self.suit.title}"

    def __repr__(self) -> str:
        return f"Card({self.suit.name}, {self.rank.name})"

    def __str__(self) -> str:
        return f"{self.rank.symbol}{self.suit.letter}"

    @classmethod
    def parse(cls, text: str) -> Card:
        """Build a card from its short form, e.g. ``"10H"`` or ``"QS"``."""
        text = text.strip().upper()
        if len(text) < 2:
            raise ValueError(f"Not a card: {text!r}")
        rank_part, suit_part = text[:-1], text[-1]
        suit = next((s for s in Suit if s.letter == suit_part), None)
        rank = next((r for r in Rank if r.symbol == rank_part), None)
        if suit is None or rank is None:
            raise ValueError(f"Not a card: {text!r}")
        return cls(suit, rank)


@dataclass(frozen=True, slots=True)
class Deck:
    """An ordered stack of cards. The top of the deck is the last card.

    Decks are values: shuffling and dealing return new decks rather than
    mutating this one.
    """

    cards: tuple[Card, ...] = ()

    @classmethod
    def standard(cls) -> Deck:
        """The 52-card deck, one card per suit and rank."""
        return cls(tuple(Card(suit, rank) for suit in Suit for rank in Rank))

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def shuffled(self, rng: random.Random | None = None) -> Deck:
        """Return a uniformly shuffled copy (Fisher-Yates from the end)."""
        rng = rng or random.Random()
        cards = list(self.cards)
        for i in range(len(cards) - 1, 0, -1):
            j = rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]
        return Deck(tuple(cards))

    def deal(self) -> tuple[Card, Deck]:
        """Take the top card.

        Returns:
            Tuple of (dealt card, remaining deck).

        Raises:
            EmptyDeckError: If the deck has no cards.
        """
        if not self.cards:
            raise EmptyDeckError("Cannot deal from an empty deck")
        return self.cards[-1], Deck(self.cards[:-1])
