"""Interactive terminal responder."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from palace_engine.actions import Cancel, Draw, PickUp, PlayAt
from palace_engine.executor import GameCancelled
from palace_engine.rules import playable_indices
from palace_engine.state import EndReason
from responders.base import Responder

if TYPE_CHECKING:
    from palace_engine.actions import Action
    from palace_engine.cards import Card
    from palace_engine.engine import GameResult
    from palace_engine.events import GameEvent
    from palace_engine.state import GameState, PlayerState

ACTION_PROMPT = (
    "Type 'draw' to draw a card, 'pickup' to pick up the pile, "
    "or enter the index of the card you want to play: "
)
CONFIRM_PROMPT = "Do you want to play the drawn card? (yes/no) "

_QUIT_WORDS = {"q", "quit", "exit", "cancel"}
_PICK_UP_WORDS = {"pickup", "pick up", "p"}


def parse_action(text: str) -> Action | str:
    """Turn a typed answer into an action.

    Unrecognised text is returned unchanged so the engine can reject it.
    """
    token = text.strip().lower()
    if token in ("draw", "d"):
        return Draw()
    if token in _PICK_UP_WORDS:
        return PickUp()
    if token in _QUIT_WORDS:
        return Cancel()
    try:
        return PlayAt(int(token))
    except ValueError:
        return text


def format_turn_info(player: PlayerState, state: GameState, show_hints: bool = False) -> str:
    """Format what the active player sees before choosing."""
    lines = []
    lines.append("-" * 60)
    lines.append(f"Turn {state.turn_number} | Player {player.id}")
    lines.append(f"Hand: {player.describe_hand() or '(empty)'}")

    if show_hints:
        playable = playable_indices(player.hand, state.pile)
        lines.append(f"Playable: {', '.join(map(str, playable)) or '(none)'}")

    top = state.pile.top_card
    if top is not None:
        lines.append(f"Last card played: {top.long_name} ({len(state.pile)} in pile)")
    else:
        lines.append("No card has been played yet.")

    others = [p for p in state.players if p.id != player.id]
    if others:
        counts = ", ".join(f"P{p.id}: {len(p.hand)}" for p in others)
        lines.append(f"Other hands: {counts}")
    lines.append(f"Deck: {len(state.deck)} cards")
    return "\n".join(lines)


def format_result(result: GameResult) -> str:
    """Format the final summary."""
    lines = ["=" * 60]
    if result.cancelled:
        lines.append("GAME CANCELLED")
    elif result.end_reason == EndReason.ALL_PLAYERS_OUT:
        lines.append("GAME OVER - everyone is out")
    else:
        lines.append(f"GAME OVER - Player {result.loser} loses")
    if result.finished:
        order = ", ".join(f"{place}. Player {pid}" for place, pid in enumerate(result.finished, 1))
        lines.append(f"Finishing order: {order}")
    lines.append(f"Turns: {result.turns} | Actions: {result.actions}")
    lines.append("=" * 60)
    return "\n".join(lines)


class TerminalResponder(Responder):
    """Hot-seat responder reading answers from a terminal.

    End of input (Ctrl-D) abandons the game.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], Any] | None = None,
        show_hints: bool = True,
    ):
        """Initialize the terminal responder.

        Args:
            input_fn: Reads one answer, given a prompt. Defaults to ``input``.
            output_fn: Writes one line. Defaults to ``print``.
            show_hints: Mark which hand indices are playable.
        """
        self._input = input_fn or input
        self._output = output_fn or print
        self._show_hints = show_hints

    @property
    def name(self) -> str:
        return "Terminal"

    def choose_action(self, player: PlayerState, state: GameState) -> Action | str:
        self._output(format_turn_info(player, state, show_hints=self._show_hints))
        try:
            response = self._input(ACTION_PROMPT)
        except EOFError:
            raise GameCancelled(f"Player {player.id} closed the input") from None
        return parse_action(response)

    def confirm_play_drawn_card(self, player: PlayerState, card: Card, state: GameState) -> bool:
        self._output(f"Hand after drawing: {player.describe_hand()}")
        try:
            response = self._input(CONFIRM_PROMPT)
        except EOFError:
            raise GameCancelled(f"Player {player.id} closed the input") from None
        return response.strip().lower() in ("yes", "y")

    def notify(self, event: GameEvent) -> None:
        self._output(str(event))

    def on_game_end(self, result: GameResult) -> None:
        self._output(format_result(result))
