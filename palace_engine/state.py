"""Immutable game state models for Palace."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum, auto
from typing import Iterable, Sequence

from palace_engine.cards import Card, Deck, rank_value

MIN_PLAYERS = 1
MAX_PLAYERS = 5
MIN_HAND_SIZE = 3
FACE_DOWN_COUNT = 3


class IndexOutOfRange(IndexError):
    """Raised when a hand index does not point at a card."""

    pass


class Phase(IntEnum):
    """Where the turn state machine is waiting."""

    AWAITING_ACTION = auto()  # Active player picks draw, pick up, play or cancel
    AWAITING_DRAWN_CARD_DECISION = auto()  # Drawn card is playable: play it or stop
    GAME_OVER = auto()


class EndReason(IntEnum):
    """Why the game ended."""

    LAST_PLAYER_STANDING = auto()  # One player left holding cards: the loser
    ALL_PLAYERS_OUT = auto()  # Solo game, the only player went out
    CANCELLED = auto()  # A player abandoned the game


@dataclass(frozen=True, slots=True)
class PlayerState:
    """A player's cards.

    Attributes:
        id: Stable player number, kept after other players leave.
        hand: Playable cards. Positions are selection handles for
            ``play_card``, not card identity.
        face_down: Cards dealt face down at setup; never playable.
    """

    id: int
    hand: tuple[Card, ...] = ()
    face_down: tuple[Card, ...] = ()

    @property
    def is_out(self) -> bool:
        return not self.hand

    def with_hand(self, hand: tuple[Card, ...]) -> PlayerState:
        """Return new state with updated hand."""
        return replace(self, hand=hand)

    def draw_card(self, deck: Deck) -> tuple[PlayerState, Deck, Card]:
        """Move the top card of ``deck`` into the hand.

        Raises:
            EmptyDeckError: If the deck is empty.
        """
        card, deck = deck.deal()
        return self.with_hand(self.hand + (card,)), deck, card

    def play_card(self, index: int) -> tuple[Card, PlayerState]:
        """Remove the card at ``index`` from the hand.

        Raises:
            IndexOutOfRange: If ``index`` is not in ``[0, len(hand))``.
        """
        if not 0 <= index < len(self.hand):
            raise IndexOutOfRange(
                f"Player {self.id} has no card at index {index} (hand size {len(self.hand)})"
            )
        card = self.hand[index]
        return card, self.with_hand(self.hand[:index] + self.hand[index + 1 :])

    def return_card(self, index: int, card: Card) -> PlayerState:
        """Put a card back at the position it was played from."""
        return self.with_hand(self.hand[:index] + (card,) + self.hand[index:])

    def describe_hand(self) -> str:
        """Index-annotated hand, e.g. ``"0: 3H, 1: 10S"``."""
        return ", ".join(f"{i}: {card}" for i, card in enumerate(self.hand))


@dataclass(frozen=True, slots=True)
class Pile:
    """The discard pile.

    Attributes:
        top_card: Card that the next play is compared against.
        accumulated: Everything a player would take on pick up.
    """

    top_card: Card | None = None
    accumulated: tuple[Card, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.top_card is None

    def __len__(self) -> int:
        return len(self.accumulated)

    def with_played(self, card: Card) -> Pile:
        """Return the pile with ``card`` on top."""
        return Pile(top_card=card, accumulated=self.accumulated + (card,))


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete immutable game state.

    Attributes:
        players: Players still holding cards, in turn order.
        deck: Remaining draw pile.
        pile: Discard pile.
        current_player: Index into ``players`` of the active player.
        phase: Current phase of the turn state machine.
        drawn_card: The playable card just drawn, while awaiting the decision.
        burned: Cards cleared from play by a Ten.
        retired_face_down: Face-down cards of players who went out.
        finished: Ids of players who went out, in order.
        loser: Id of the last player left, once the game is over.
        end_reason: Why the game ended.
        turn_number: Increments whenever a turn passes to the next player.
    """

    players: tuple[PlayerState, ...]
    deck: Deck
    pile: Pile = Pile()
    current_player: int = 0
    phase: Phase = Phase.AWAITING_ACTION
    drawn_card: Card | None = None
    burned: tuple[Card, ...] = ()
    retired_face_down: tuple[Card, ...] = ()
    finished: tuple[int, ...] = ()
    loser: int | None = None
    end_reason: EndReason | None = None
    turn_number: int = 1

    @property
    def is_game_over(self) -> bool:
        return self.phase == Phase.GAME_OVER

    @property
    def was_cancelled(self) -> bool:
        return self.end_reason == EndReason.CANCELLED

    @property
    def current_player_state(self) -> PlayerState:
        """State of the active player."""
        return self.players[self.current_player]

    @property
    def player_ids(self) -> tuple[int, ...]:
        return tuple(player.id for player in self.players)

    def player_by_id(self, player_id: int) -> PlayerState:
        for player in self.players:
            if player.id == player_id:
                return player
        raise KeyError(f"Player {player_id} is not in the game")

    def all_cards(self) -> list[Card]:
        """Every card in every location, for conservation checks."""
        cards = list(self.deck)
        for player in self.players:
            cards.extend(player.hand)
            cards.extend(player.face_down)
        cards.extend(self.pile.accumulated)
        cards.extend(self.burned)
        cards.extend(self.retired_face_down)
        return cards

    def with_players(self, players: tuple[PlayerState, ...]) -> GameState:
        """Return new state with updated players."""
        return replace(self, players=players)

    def with_current_player_state(self, player: PlayerState) -> GameState:
        """Return new state with the active player replaced."""
        players = list(self.players)
        players[self.current_player] = player
        return replace(self, players=tuple(players))

    def with_deck(self, deck: Deck) -> GameState:
        """Return new state with updated deck."""
        return replace(self, deck=deck)

    def with_pile(self, pile: Pile) -> GameState:
        """Return new state with updated pile."""
        return replace(self, pile=pile)

    def with_phase(self, phase: Phase, drawn_card: Card | None = None) -> GameState:
        """Return new state in ``phase``; ``drawn_card`` only survives the draw decision."""
        return replace(self, phase=phase, drawn_card=drawn_card)

    def with_game_over(self, reason: EndReason, loser: int | None = None) -> GameState:
        """Return new state with the game finished."""
        return replace(
            self,
            phase=Phase.GAME_OVER,
            drawn_card=None,
            end_reason=reason,
            loser=loser,
        )


def select_starting_player(players: Sequence[PlayerState]) -> int:
    """Index of the player holding the lowest card.

    Cards compare by rank value, then by suit (Clubs < Diamonds < Hearts <
    Spades). Players with empty hands are skipped; defaults to 0.
    """
    best: tuple[int, int] | None = None
    start = 0
    for i, player in enumerate(players):
        for card in player.hand:
            key = (rank_value(card), int(card.suit))
            if best is None or key < best:
                best = key
                start = i
    return start


def create_initial_state(
    player_count: int,
    seed: int | None = None,
    deck: Deck | Iterable[Card] | None = None,
) -> GameState:
    """Create the initial game state.

    Args:
        player_count: Number of players, 1 to 5.
        seed: Random seed for shuffling (only used if deck is None).
        deck: Optional pre-ordered deck; cards are dealt from its end.

    Returns:
        Initial state with hands and face-down cards dealt and the starting
        player chosen.
    """
    if not MIN_PLAYERS <= player_count <= MAX_PLAYERS:
        raise ValueError(
            f"Player count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {player_count}"
        )

    if deck is None:
        deck = Deck.standard().shuffled(random.Random(seed))
    elif not isinstance(deck, Deck):
        deck = Deck(tuple(deck))

    needed = player_count * (FACE_DOWN_COUNT + MIN_HAND_SIZE)
    if len(deck) < needed:
        raise ValueError(f"Deck has {len(deck)} cards, {needed} needed to deal")

    players = [PlayerState(id=i) for i in range(player_count)]
    # Each player in turn gets a face-down card then a hand card, three times
    for i, player in enumerate(players):
        for _ in range(FACE_DOWN_COUNT):
            face_down, deck = deck.deal()
            player = replace(player, face_down=player.face_down + (face_down,))
            player, deck, _ = player.draw_card(deck)
        players[i] = player

    return GameState(
        players=tuple(players),
        deck=deck,
        current_player=select_starting_player(players),
    )
