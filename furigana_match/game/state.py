"""
Pure state machine for the matching game.

MatchState is immutable. transition() takes a state and an event and returns
the next state together with the side effects the driver has to carry out
(speech, scheduling the error reset). Nothing in this module touches a
clock, a speaker or a view.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple, Union

from ..models import Column, DisplayCard
from .board import Board


class CardState(Enum):
    """Per-card display state."""
    IDLE = "idle"
    SELECTED = "selected"
    MATCHED = "matched"
    ERROR_FLASH = "error_flash"


class SessionPhase(Enum):
    """Global phase of a game session."""
    AWAITING_FIRST_PICK = "awaiting_first_pick"
    AWAITING_SECOND_PICK = "awaiting_second_pick"
    COOLDOWN = "cooldown"


def card_state(card: DisplayCard) -> CardState:
    """Derive a card's state from its flags."""
    if card.is_matched:
        return CardState.MATCHED
    if card.is_error:
        return CardState.ERROR_FLASH
    if card.is_selected:
        return CardState.SELECTED
    return CardState.IDLE


@dataclass(frozen=True)
class MatchState:
    """Snapshot of the board and session bookkeeping."""
    cards: Tuple[DisplayCard, ...]
    total_pairs: int
    selected_card_id: Optional[str] = None
    matched_pair_ids: FrozenSet[str] = frozenset()
    mistaken_pair_ids: FrozenSet[str] = frozenset()
    is_processing: bool = False

    @classmethod
    def from_board(cls, board: Board) -> 'MatchState':
        return cls(cards=board.cards, total_pairs=board.pair_count)

    @property
    def phase(self) -> SessionPhase:
        if self.is_processing:
            return SessionPhase.COOLDOWN
        if self.selected_card_id is not None:
            return SessionPhase.AWAITING_SECOND_PICK
        return SessionPhase.AWAITING_FIRST_PICK

    @property
    def is_complete(self) -> bool:
        """All pairs matched. An empty board never counts as complete."""
        return self.total_pairs > 0 and len(self.matched_pair_ids) == self.total_pairs

    @property
    def jp_cards(self) -> Tuple[DisplayCard, ...]:
        return tuple(c for c in self.cards if c.column == Column.JP)

    @property
    def cn_cards(self) -> Tuple[DisplayCard, ...]:
        return tuple(c for c in self.cards if c.column == Column.CN)

    def card(self, card_id: str) -> Optional[DisplayCard]:
        for c in self.cards:
            if c.card_id == card_id:
                return c
        return None

    def update_cards(self, card_ids: Iterable[str], **flags) -> Tuple[DisplayCard, ...]:
        ids = set(card_ids)
        return tuple(replace(c, **flags) if c.card_id in ids else c for c in self.cards)


# Events

@dataclass(frozen=True)
class CardSelected:
    """The player clicked a card."""
    card_id: str


@dataclass(frozen=True)
class ErrorFlashElapsed:
    """The error-flash cooldown for a mismatched pair of cards is over."""
    card_ids: Tuple[str, str]


Event = Union[CardSelected, ErrorFlashElapsed]


# Effects

@dataclass(frozen=True)
class Speak:
    """Play pronunciation for a Japanese card."""
    text: str


@dataclass(frozen=True)
class ScheduleErrorReset:
    """Deliver ErrorFlashElapsed for these cards after the flash delay."""
    card_ids: Tuple[str, str]


Effect = Union[Speak, ScheduleErrorReset]


@dataclass(frozen=True)
class Transition:
    state: MatchState
    effects: Tuple[Effect, ...] = ()


def transition(state: MatchState, event: Event) -> Transition:
    """
    Compute the next state for an event.

    Malformed events (unknown card ids) leave the state untouched.
    """
    if isinstance(event, CardSelected):
        return _select(state, event.card_id)
    if isinstance(event, ErrorFlashElapsed):
        return _clear_error(state, event.card_ids)
    return Transition(state)


def _select(state: MatchState, card_id: str) -> Transition:
    clicked = state.card(card_id)
    if clicked is None:
        return Transition(state)

    if state.is_processing or clicked.is_matched or clicked.card_id == state.selected_card_id:
        return Transition(state)

    effects = []
    if clicked.column == Column.JP and clicked.speech_text:
        effects.append(Speak(clicked.speech_text))

    if state.selected_card_id is None:
        new_state = replace(
            state,
            cards=state.update_cards([clicked.card_id], is_selected=True),
            selected_card_id=clicked.card_id,
        )
        return Transition(new_state, tuple(effects))

    first = state.card(state.selected_card_id)
    if first is None:
        return Transition(state, tuple(effects))

    both = (first.card_id, clicked.card_id)

    if first.pair_id == clicked.pair_id:
        new_state = replace(
            state,
            cards=state.update_cards(both, is_selected=False, is_matched=True, is_error=False),
            selected_card_id=None,
            matched_pair_ids=state.matched_pair_ids | {first.pair_id},
        )
        return Transition(new_state, tuple(effects))

    new_state = replace(
        state,
        cards=state.update_cards(both, is_selected=False, is_error=True),
        mistaken_pair_ids=state.mistaken_pair_ids | {first.pair_id},
        is_processing=True,
    )
    effects.append(ScheduleErrorReset(both))
    return Transition(new_state, tuple(effects))


def _clear_error(state: MatchState, card_ids: Tuple[str, str]) -> Transition:
    new_state = replace(
        state,
        cards=state.update_cards(card_ids, is_error=False, is_selected=False),
        selected_card_id=None,
        is_processing=False,
    )
    return Transition(new_state)
