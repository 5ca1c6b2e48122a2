"""Game driver for Palace.

``GameEngine`` owns the current ``GameState``, asks responders for the active
player's decisions, feeds them through ``execute_action`` and narrates the
resulting events. It performs no I/O of its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from palace_engine.actions import TURN_ACTIONS, Action, Cancel, ConfirmDrawnCard, PlayAt
from palace_engine.events import GameEvent, GameStarted, InputRejected, TurnStarted
from palace_engine.executor import (
    GameCancelled,
    IllegalActionError,
    InvalidInput,
    execute_action,
)
from palace_engine.state import EndReason, GameState, Phase, create_initial_state

if TYPE_CHECKING:
    from palace_engine.cards import Card, Deck
    from responders.base import Responder

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Outcome of a finished or cancelled game."""

    finished: tuple[int, ...]  # Player ids in the order they went out
    loser: int | None
    end_reason: EndReason
    turns: int
    actions: int
    seed: int | None = None

    @property
    def cancelled(self) -> bool:
        return self.end_reason == EndReason.CANCELLED


class GameEngine:
    """Runs one game of Palace against injected responders."""

    def __init__(
        self,
        responders: Responder | Mapping[int, Responder],
        player_count: int = 2,
        seed: int | None = None,
        deck: Deck | Iterable[Card] | None = None,
        state: GameState | None = None,
    ):
        """Initialize the engine.

        Args:
            responders: One responder answering for every player, or a
                mapping from player id to responder.
            player_count: Number of players, 1 to 5.
            seed: Random seed for shuffling.
            deck: Optional pre-ordered deck (dealt from its end).
            state: Optional state to resume from instead of dealing.
        """
        self._state = state or create_initial_state(player_count, seed=seed, deck=deck)
        self.seed = seed

        if isinstance(responders, Mapping):
            missing = set(self._state.player_ids) - set(responders)
            if missing:
                raise ValueError(f"No responder for players {sorted(missing)}")
            self._responders = dict(responders)
        else:
            self._responders = {pid: responders for pid in self._state.player_ids}

        # Each distinct responder hears every event once
        self._audience: list[Responder] = []
        for responder in self._responders.values():
            if not any(responder is r for r in self._audience):
                self._audience.append(responder)

        self._started = False
        self._action_count = 0
        self._result: GameResult | None = None

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_over(self) -> bool:
        return self._state.is_game_over

    @property
    def result(self) -> GameResult | None:
        """The outcome, once the game is over."""
        return self._result

    def responder_for(self, player_id: int) -> Responder:
        return self._responders[player_id]

    def start(self) -> GameState:
        """Announce the game. Called automatically by ``step`` and ``run``."""
        if self._started:
            return self._state
        self._started = True

        state = self._state
        if state.is_game_over:
            # Resumed from a finished or cancelled state
            if self._result is None:
                self._finish()
            return state

        current = state.current_player_state
        logger.info(
            f"Game started: players={len(state.players)}, seed={self.seed}, "
            f"starting player={current.id}"
        )
        for responder in self._audience:
            responder.on_game_start(state)
        self._broadcast(
            (
                GameStarted(state.player_ids, current.id),
                TurnStarted(current.id, state.turn_number),
            )
        )
        return state

    def step(self) -> GameState:
        """Ask the active player for one decision and apply it.

        Invalid answers are narrated and leave the state unchanged.

        Raises:
            IllegalActionError: If the game is already over.
        """
        self.start()
        if self.is_over:
            raise IllegalActionError("Game is already over")

        state = self._state
        player = state.current_player_state
        responder = self.responder_for(player.id)

        try:
            if state.phase == Phase.AWAITING_DRAWN_CARD_DECISION:
                play = responder.confirm_play_drawn_card(player, state.drawn_card, state)
                if not isinstance(play, bool):
                    raise InvalidInput(str(play))
                action: Action = ConfirmDrawnCard(play)
            else:
                answer = responder.choose_action(player, state)
                action = _check_answer(answer)
        except InvalidInput as e:
            logger.debug(f"Player {player.id} gave invalid input: {e}")
            self._broadcast((InputRejected(player.id, str(e)),))
            return state
        except GameCancelled as e:
            logger.info(f"Player {player.id} abandoned the game: {e}")
            action = Cancel()

        return self._apply(action)

    def run(self) -> GameResult:
        """Play until the game is over or cancelled."""
        self.start()
        while not self.is_over:
            self.step()
        return self._result

    def _apply(self, action: Action) -> GameState:
        player_id = self._state.current_player_state.id
        new_state, events = execute_action(self._state, action)
        self._action_count += 1
        logger.debug(
            f"Player {player_id}: {action} -> phase={new_state.phase.name}, "
            f"deck={len(new_state.deck)}, pile={len(new_state.pile)}"
        )

        self._state = new_state
        self._broadcast(events)
        if new_state.is_game_over:
            self._finish()
        return new_state

    def _broadcast(self, events: Iterable[GameEvent]) -> None:
        for event in events:
            for responder in self._audience:
                responder.notify(event)

    def _finish(self) -> None:
        state = self._state
        self._result = GameResult(
            finished=state.finished,
            loser=state.loser,
            end_reason=state.end_reason,
            turns=state.turn_number,
            actions=self._action_count,
            seed=self.seed,
        )
        logger.info(
            f"Game over: reason={state.end_reason.name}, loser={state.loser}, "
            f"finished={list(state.finished)}, actions={self._action_count}"
        )
        for responder in self._audience:
            responder.on_game_end(self._result)


def _check_answer(answer: Any) -> Action:
    """Accept only the actions a player may choose on their turn."""
    if not isinstance(answer, TURN_ACTIONS):
        raise InvalidInput(str(answer))
    if isinstance(answer, PlayAt) and (
        isinstance(answer.index, bool) or not isinstance(answer.index, int)
    ):
        raise InvalidInput(str(answer.index))
    return answer
