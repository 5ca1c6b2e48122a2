"""Scripted responder for deterministic games and tests."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any, Iterable

from responders.base import Responder

if TYPE_CHECKING:
    from palace_engine.actions import Action
    from palace_engine.cards import Card
    from palace_engine.engine import GameResult
    from palace_engine.events import GameEvent
    from palace_engine.state import GameState, PlayerState


class ScriptExhausted(RuntimeError):
    """Raised when the engine asks for more answers than were scripted."""

    pass


class ScriptedResponder(Responder):
    """Answers from fixed queues and records everything it is told.

    Actions are replayed in order regardless of which player is asked, so a
    single script can drive a whole hot-seat game.
    """

    def __init__(
        self,
        actions: Iterable[Action | Any] = (),
        confirmations: Iterable[bool] = (),
        name: str = "Scripted",
    ):
        """Initialize the scripted responder.

        Args:
            actions: Answers for ``choose_action``, consumed in order.
            confirmations: Answers for ``confirm_play_drawn_card``.
            name: Display name.
        """
        self._actions = deque(actions)
        self._confirmations = deque(confirmations)
        self._name = name
        self.events: list[GameEvent] = []
        self.prompts: list[int] = []
        self.result: GameResult | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def remaining_actions(self) -> int:
        return len(self._actions)

    def choose_action(self, player: PlayerState, state: GameState) -> Action | Any:
        self.prompts.append(player.id)
        if not self._actions:
            raise ScriptExhausted(f"No scripted action left for player {player.id}")
        return self._actions.popleft()

    def confirm_play_drawn_card(self, player: PlayerState, card: Card, state: GameState) -> bool:
        if not self._confirmations:
            raise ScriptExhausted(f"No scripted confirmation left for player {player.id}")
        return self._confirmations.popleft()

    def notify(self, event: GameEvent) -> None:
        self.events.append(event)

    def on_game_end(self, result: GameResult) -> None:
        self.result = result

    def events_of(self, event_type: type) -> list[GameEvent]:
        """Recorded events of one type."""
        return [e for e in self.events if isinstance(e, event_type)]
