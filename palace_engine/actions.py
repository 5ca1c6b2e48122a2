"""Player actions for Palace."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Action(ABC):
    """Base class for all actions."""

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable action description."""
        ...


@dataclass(frozen=True, slots=True)
class Draw(Action):
    """Draw a card from the deck."""

    def __str__(self) -> str:
        return "Draw"


@dataclass(frozen=True, slots=True)
class PickUp(Action):
    """Take the whole discard pile into hand, ending the turn."""

    def __str__(self) -> str:
        return "Pick up the pile"


@dataclass(frozen=True, slots=True)
class PlayAt(Action):
    """Play the card at a hand index."""

    index: int

    def __str__(self) -> str:
        return f"Play card {self.index}"


@dataclass(frozen=True, slots=True)
class Cancel(Action):
    """Abandon the whole game."""

    def __str__(self) -> str:
        return "Cancel"


@dataclass(frozen=True, slots=True)
class ConfirmDrawnCard(Action):
    """Answer to "play the card you just drew?"."""

    play: bool

    def __str__(self) -> str:
        return "Play the drawn card" if self.play else "Keep the drawn card"


# What a responder may answer when asked for its next action.
TURN_ACTIONS: tuple[type[Action], ...] = (Draw, PickUp, PlayAt, Cancel)
