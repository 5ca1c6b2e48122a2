"""Base responder interface for Palace players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from palace_engine.actions import Action
    from palace_engine.cards import Card
    from palace_engine.engine import GameResult
    from palace_engine.events import GameEvent
    from palace_engine.state import GameState, PlayerState


class Responder(ABC):
    """Abstract base class for whoever answers the engine's questions.

    The engine calls a responder only at its decision points and to narrate
    what happened. One responder may answer for several players (hot seat).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this responder."""
        ...

    @abstractmethod
    def choose_action(self, player: PlayerState, state: GameState) -> Action | Any:
        """Choose the active player's next action.

        Args:
            player: The active player.
            state: Current game state.

        Returns:
            A ``Draw``, ``PickUp``, ``PlayAt`` or ``Cancel``. Anything else is
            rejected as invalid input and the player is asked again.

        Raises:
            GameCancelled: To abandon the game.
        """
        ...

    @abstractmethod
    def confirm_play_drawn_card(self, player: PlayerState, card: Card, state: GameState) -> bool:
        """Whether the player wants to go on and play after drawing ``card``."""
        ...

    def notify(self, event: GameEvent) -> None:
        """Called for every narration event. Return value is ignored."""
        pass

    def on_game_start(self, state: GameState) -> None:
        """Called once the cards are dealt and the first player chosen."""
        pass

    def on_game_end(self, result: GameResult) -> None:
        """Called when the game is over or has been cancelled."""
        pass
