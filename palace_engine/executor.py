"""Action execution for Palace.

``execute_action`` is the turn state machine: it takes a state and an action
and returns the next state together with the narration events the action
produced. It never mutates its input.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from palace_engine.actions import (
    Action,
    Cancel,
    ConfirmDrawnCard,
    Draw,
    PickUp,
    PlayAt,
)
from palace_engine.cards import Rank
from palace_engine.events import (
    CardDrawn,
    CardPlayed,
    DeckEmpty,
    DrawnCardUnplayable,
    GameAbandoned,
    GameEnded,
    GameEvent,
    HandToppedUp,
    InvalidIndex,
    InvalidPlay,
    PileBurned,
    PilePickedUp,
    PlayerOut,
    TurnStarted,
)
from palace_engine.rules import is_valid_play
from palace_engine.state import (
    MIN_HAND_SIZE,
    EndReason,
    GameState,
    IndexOutOfRange,
    Phase,
    Pile,
)

logger = logging.getLogger(__name__)

Transition = tuple[GameState, tuple[GameEvent, ...]]


class IllegalActionError(Exception):
    """Raised when an action is not allowed in the current phase."""

    pass


class InvalidInput(ValueError):
    """Raised for an answer that is not one of the recognised actions."""

    pass


class GameCancelled(Exception):
    """Raised by a responder to abandon the whole game."""

    pass


def execute_action(state: GameState, action: Action) -> Transition:
    """Execute an action for the active player.

    Args:
        state: Current game state.
        action: Action to execute.

    Returns:
        Tuple of (new state, events produced by the action).

    Raises:
        IllegalActionError: If the game is over or the action does not fit
            the current phase.
        InvalidInput: If ``action`` is not an action at all.
    """
    if state.is_game_over:
        raise IllegalActionError("Game is already over")

    if state.phase == Phase.AWAITING_DRAWN_CARD_DECISION:
        match action:
            case ConfirmDrawnCard():
                return _execute_confirm_drawn_card(state, action)
            case Cancel():
                return _execute_cancel(state)
            case Draw() | PickUp() | PlayAt():
                raise IllegalActionError(f"Decide on the drawn card before: {action}")
            case _:
                raise InvalidInput(f"Unknown action: {action!r}")

    match action:
        case Draw():
            return _execute_draw(state)
        case PickUp():
            return _execute_pick_up(state)
        case PlayAt():
            return _execute_play_at(state, action)
        case Cancel():
            return _execute_cancel(state)
        case ConfirmDrawnCard():
            raise IllegalActionError("No drawn card is waiting for a decision")
        case _:
            raise InvalidInput(f"Unknown action: {action!r}")


def _execute_draw(state: GameState) -> Transition:
    """Draw one card; an unplayable draw forfeits the turn."""
    player = state.current_player_state
    if state.deck.is_empty:
        return state, (DeckEmpty(player.id),)

    player, deck, card = player.draw_card(state.deck)
    state = state.with_current_player_state(player).with_deck(deck)
    events: list[GameEvent] = [CardDrawn(player.id, card)]

    if not is_valid_play(card, state.pile):
        events.append(DrawnCardUnplayable(player.id, card))
        return _end_turn(state, events)

    return state.with_phase(Phase.AWAITING_DRAWN_CARD_DECISION, drawn_card=card), tuple(events)


def _execute_confirm_drawn_card(state: GameState, action: ConfirmDrawnCard) -> Transition:
    """Keep the turn open to play, or stop here."""
    if action.play:
        return _continue_turn(state, [])
    return _end_turn(state, [])


def _execute_pick_up(state: GameState) -> Transition:
    """Take the whole pile into hand and end the turn."""
    player = state.current_player_state
    cards = state.pile.accumulated
    player = player.with_hand(player.hand + cards)
    state = state.with_current_player_state(player).with_pile(Pile())
    return _end_turn(state, [PilePickedUp(player.id, cards)])


def _execute_play_at(state: GameState, action: PlayAt) -> Transition:
    """Play a card from hand onto the pile."""
    player = state.current_player_state
    try:
        card, remaining = player.play_card(action.index)
    except IndexOutOfRange as e:
        logger.debug(f"Rejected play: {e}")
        return _continue_turn(state, [InvalidIndex(player.id, action.index)])

    if not is_valid_play(card, state.pile):
        # Back where it came from, so the rest of the hand keeps its order
        state = state.with_current_player_state(remaining.return_card(action.index, card))
        return _continue_turn(state, [InvalidPlay(player.id, card, state.pile.top_card)])

    state = state.with_current_player_state(remaining)
    events: list[GameEvent] = [CardPlayed(player.id, card)]

    if card.rank == Rank.TEN:
        cleared = state.pile.accumulated + (card,)
        state = replace(state, pile=Pile(), burned=state.burned + cleared)
        events.append(PileBurned(player.id, card, cleared, went_out=remaining.is_out))
        if remaining.is_out:
            return _eliminate_current(state, events)
        return _continue_turn(state, events)

    state = state.with_pile(state.pile.with_played(card))
    if remaining.is_out:
        return _eliminate_current(state, events)
    return _end_turn(state, events)


def _execute_cancel(state: GameState) -> Transition:
    """Abandon the game."""
    player = state.current_player_state
    state = state.with_game_over(EndReason.CANCELLED)
    return state, (
        GameAbandoned(player.id),
        GameEnded(EndReason.CANCELLED, None, state.finished),
    )


def _top_up(state: GameState, events: list[GameEvent]) -> GameState:
    """Refill the active player's hand to the minimum while the deck lasts."""
    player = state.current_player_state
    deck = state.deck
    drawn = []
    while len(player.hand) < MIN_HAND_SIZE and not deck.is_empty:
        player, deck, card = player.draw_card(deck)
        drawn.append(card)

    if not drawn:
        return state
    events.append(HandToppedUp(player.id, tuple(drawn)))
    return state.with_current_player_state(player).with_deck(deck)


def _continue_turn(state: GameState, events: list[GameEvent]) -> Transition:
    """Top up and let the same player act again."""
    state = _top_up(state, events)
    return state.with_phase(Phase.AWAITING_ACTION), tuple(events)


def _end_turn(state: GameState, events: list[GameEvent]) -> Transition:
    """Top up and pass the turn to the next player."""
    state = _top_up(state, events)
    next_player = (state.current_player + 1) % len(state.players)
    state = replace(
        state,
        current_player=next_player,
        phase=Phase.AWAITING_ACTION,
        drawn_card=None,
        turn_number=state.turn_number + 1,
    )
    events.append(TurnStarted(state.current_player_state.id, state.turn_number))
    return state, tuple(events)


def _eliminate_current(state: GameState, events: list[GameEvent]) -> Transition:
    """Remove the active player, who has emptied their hand."""
    index = state.current_player
    player = state.players[index]
    players = state.players[:index] + state.players[index + 1 :]
    finished = state.finished + (player.id,)
    events.append(PlayerOut(player.id, len(finished)))
    logger.debug(f"Player {player.id} went out in place {len(finished)}")

    state = replace(
        state,
        players=players,
        finished=finished,
        retired_face_down=state.retired_face_down + player.face_down,
    )

    if len(players) <= 1:
        if players:
            reason, loser = EndReason.LAST_PLAYER_STANDING, players[0].id
        else:
            reason, loser = EndReason.ALL_PLAYERS_OUT, None
        state = replace(state, current_player=0).with_game_over(reason, loser)
        events.append(GameEnded(reason, loser, finished))
        return state, tuple(events)

    # The next player in order has slid into the vacated index
    state = replace(
        state,
        current_player=index % len(players),
        phase=Phase.AWAITING_ACTION,
        drawn_card=None,
        turn_number=state.turn_number + 1,
    )
    events.append(TurnStarted(state.current_player_state.id, state.turn_number))
    return state, tuple(events)
