"""Palace card game engine."""

from palace_engine.actions import Action, Cancel, ConfirmDrawnCard, Draw, PickUp, PlayAt
from palace_engine.cards import Card, Deck, EmptyDeckError, Rank, Suit, rank_value
from palace_engine.engine import GameEngine, GameResult
from palace_engine.executor import (
    GameCancelled,
    IllegalActionError,
    InvalidInput,
    execute_action,
)
from palace_engine.rules import is_valid_play, playable_indices
from palace_engine.state import (
    EndReason,
    GameState,
    IndexOutOfRange,
    Phase,
    Pile,
    PlayerState,
    create_initial_state,
    select_starting_player,
)

__all__ = [
    "Action",
    "Cancel",
    "ConfirmDrawnCard",
    "Draw",
    "PickUp",
    "PlayAt",
    "Card",
    "Deck",
    "EmptyDeckError",
    "Rank",
    "Suit",
    "rank_value",
    "GameEngine",
    "GameResult",
    "GameCancelled",
    "IllegalActionError",
    "InvalidInput",
    "execute_action",
    "is_valid_play",
    "playable_indices",
    "EndReason",
    "GameState",
    "IndexOutOfRange",
    "Phase",
    "Pile",
    "PlayerState",
    "create_initial_state",
    "select_starting_player",
]
