"""Narration events emitted by the Palace engine.

Events are reported to responders through ``Responder.notify``. Their string
form is the line a text interface shows for them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from palace_engine.cards import Card
    from palace_engine.state import EndReason


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Base class for narration events."""

    def __str__(self) -> str:
        return type(self).__name__


@dataclass(frozen=True, slots=True)
class GameStarted(GameEvent):
    player_ids: tuple[int, ...]
    starting_player: int

    def __str__(self) -> str:
        return f"Game started with {len(self.player_ids)} players. Player {self.starting_player} goes first."


@dataclass(frozen=True, slots=True)
class TurnStarted(GameEvent):
    player: int
    turn_number: int

    def __str__(self) -> str:
        return f"Player {self.player}'s turn."


@dataclass(frozen=True, slots=True)
class CardDrawn(GameEvent):
    player: int
    card: Card

    def __str__(self) -> str:
        return f"Player {self.player} drew a card. New card: {self.card}"


@dataclass(frozen=True, slots=True)
class DrawnCardUnplayable(GameEvent):
    player: int
    card: Card

    def __str__(self) -> str:
        return f"{self.card} cannot be played, next turn."


@dataclass(frozen=True, slots=True)
class DeckEmpty(GameEvent):
    player: int

    def __str__(self) -> str:
        return "Deck is empty. No card drawn."


@dataclass(frozen=True, slots=True)
class CardPlayed(GameEvent):
    player: int
    card: Card

    def __str__(self) -> str:
        return f"Player {self.player} played {self.card.long_name}"


@dataclass(frozen=True, slots=True)
class PileBurned(GameEvent):
    player: int
    card: Card
    cards: tuple[Card, ...]
    went_out: bool = False  # The ten was the player's last card

    def __str__(self) -> str:
        cleared = f"{self.card} played! Clearing the pile ({len(self.cards)} cards)"
        if self.went_out:
            return f"{cleared}."
        return f"{cleared} and player {self.player} goes again."


@dataclass(frozen=True, slots=True)
class PilePickedUp(GameEvent):
    player: int
    cards: tuple[Card, ...]

    def __str__(self) -> str:
        return f"Player {self.player} picked up the pile ({len(self.cards)} cards)."


@dataclass(frozen=True, slots=True)
class InvalidPlay(GameEvent):
    player: int
    card: Card
    top_card: Card | None

    def __str__(self) -> str:
        return f"Invalid play: {self.card} cannot go on {self.top_card}. Card returned to hand."


@dataclass(frozen=True, slots=True)
class InvalidIndex(GameEvent):
    player: int
    index: int

    def __str__(self) -> str:
        return f"Invalid card index: {self.index}."


@dataclass(frozen=True, slots=True)
class InputRejected(GameEvent):
    player: int
    value: str

    def __str__(self) -> str:
        return f"Invalid input: {self.value}"


@dataclass(frozen=True, slots=True)
class HandToppedUp(GameEvent):
    player: int
    cards: tuple[Card, ...]

    def __str__(self) -> str:
        return f"Player {self.player} drew {len(self.cards)} card(s) to refill their hand."


@dataclass(frozen=True, slots=True)
class PlayerOut(GameEvent):
    """A player emptied their hand and left the game."""

    player: int
    place: int

    def __str__(self) -> str:
        return f"Player {self.player} has won and is now out of the game! (place {self.place})"


@dataclass(frozen=True, slots=True)
class GameAbandoned(GameEvent):
    player: int

    def __str__(self) -> str:
        return f"Player {self.player} cancelled the game."


@dataclass(frozen=True, slots=True)
class GameEnded(GameEvent):
    reason: EndReason
    loser: int | None
    finished: tuple[int, ...]

    def __str__(self) -> str:
        if self.loser is not None:
            return f"Player {self.loser} has lost the game. Game over!"
        return "Game over!"
