"""Play-validity rules for Palace."""

from __future__ import annotations

from typing import Sequence

from palace_engine.cards import Card, Rank, rank_value
from palace_engine.state import Pile


def is_valid_play(card: Card, pile: Pile) -> bool:
    """Whether ``card`` may be played on ``pile``.

    Checked in order:
    1. An empty pile takes anything.
    2. A Two is wild, and anything may follow a Two.
    3. A Ten (the burn card) is always playable.
    4. On a Seven the play must be equal or lower; otherwise equal or higher.
    """
    top = pile.top_card
    if top is None:
        return True

    if card.rank == Rank.TWO or top.rank == Rank.TWO:
        return True

    if card.rank == Rank.TEN:
        return True

    last_value = rank_value(top)
    current_value = rank_value(card)

    if top.rank == Rank.SEVEN:
        return current_value <= last_value
    return current_value >= last_value


def playable_indices(hand: Sequence[Card], pile: Pile) -> list[int]:
    """Hand positions holding a card that could be played on ``pile``."""
    return [i for i, card in enumerate(hand) if is_valid_play(card, pile)]
