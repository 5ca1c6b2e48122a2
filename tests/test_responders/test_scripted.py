"""Tests for the scripted responder."""

import pytest

from palace_engine.actions import Draw, PickUp
from palace_engine.cards import Card, Deck
from palace_engine.events import DeckEmpty, TurnStarted
from palace_engine.state import GameState, PlayerState
from responders.scripted import ScriptedResponder, ScriptExhausted


@pytest.fixture
def state():
    return GameState(players=(PlayerState(id=0), PlayerState(id=1)), deck=Deck())


class TestScriptedResponder:
    def test_replays_actions_in_order(self, state):
        responder = ScriptedResponder([Draw(), PickUp()])

        assert responder.choose_action(state.players[0], state) == Draw()
        assert responder.choose_action(state.players[1], state) == PickUp()
        assert responder.prompts == [0, 1]
        assert responder.remaining_actions == 0

    def test_exhausted_actions(self, state):
        with pytest.raises(ScriptExhausted):
            ScriptedResponder().choose_action(state.players[0], state)

    def test_confirmations(self, state):
        responder = ScriptedResponder(confirmations=[True, False])
        card = Card.parse("3H")

        assert responder.confirm_play_drawn_card(state.players[0], card, state) is True
        assert responder.confirm_play_drawn_card(state.players[0], card, state) is False
        with pytest.raises(ScriptExhausted):
            responder.confirm_play_drawn_card(state.players[0], card, state)

    def test_records_events(self):
        responder = ScriptedResponder()
        responder.notify(DeckEmpty(0))
        responder.notify(TurnStarted(1, 2))

        assert responder.events_of(DeckEmpty) == [DeckEmpty(0)]
        assert len(responder.events) == 2
