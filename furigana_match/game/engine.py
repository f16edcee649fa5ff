"""
Match engine driver.

Owns the current MatchState, feeds events through the pure transition
function, carries out the resulting effects and notifies subscribers.
"""

import logging
import random
from typing import Callable, List, Optional, Sequence

from ..config import Config
from ..errors import EmptyWordListError
from ..models import WordPair
from ..speech.services import Speaker
from .board import BoardBuilder
from .notifier import CompletionNotifier
from .recorder import SessionRecorder
from .state import (
    CardSelected,
    ErrorFlashElapsed,
    Event,
    MatchState,
    ScheduleErrorReset,
    Speak,
    transition,
)
from .timers import Scheduler


logger = logging.getLogger(__name__)

StateListener = Callable[[MatchState], None]


class MatchEngine:
    """
    Runs one matching session.

    All mutations go through select_card() or a timer queued on the
    scheduler, so state changes are serialized on the scheduler's thread.
    """

    def __init__(
        self,
        pairs: Sequence[WordPair],
        on_finish: Callable[[List[WordPair]], None],
        scheduler: Scheduler,
        speaker: Optional[Speaker] = None,
        rng: Optional[random.Random] = None,
        error_flash_ms: float = Config.ERROR_FLASH_MS,
        settle_delay_ms: float = Config.SETTLE_DELAY_MS,
        speech_locale: str = Config.SPEECH_LOCALE,
        speech_rate: float = Config.SPEECH_RATE,
    ):
        """
        Initialize a session.

        Args:
            pairs: Word pairs for this board (at least one)
            on_finish: Called once with the mistaken pairs after completion
            scheduler: Queue for the cooldown and settle timers
            speaker: Optional speech output; None plays nothing
            rng: Randomness source for the board shuffle
            error_flash_ms: How long mismatched cards flash before resetting
            settle_delay_ms: Pause between the last match and on_finish

        Raises:
            EmptyWordListError: If pairs is empty
        """
        if not pairs:
            raise EmptyWordListError()

        self.pairs = list(pairs)
        self.scheduler = scheduler
        self.speaker = speaker
        self.error_flash_ms = error_flash_ms
        self.speech_locale = speech_locale
        self.speech_rate = speech_rate

        board = BoardBuilder(rng).build(self.pairs)
        self._state = MatchState.from_board(board)
        self._active = True

        self.recorder = SessionRecorder()
        self.notifier = CompletionNotifier(
            self.pairs, self.recorder, on_finish, scheduler, settle_delay_ms
        )
        self._listeners: List[StateListener] = []

        logger.info(f"Started match session with {len(self.pairs)} pairs")

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._active

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Register a listener for state changes.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select_card(self, card_id: str) -> None:
        """Handle a card click. Unknown or ignored clicks are no-ops."""
        if self._state.card(card_id) is None:
            logger.debug(f"Ignoring click on unknown card {card_id!r}")
        self._dispatch(CardSelected(card_id))

    def abandon(self) -> None:
        """Leave the session. Pending timers no longer touch state or fire on_finish."""
        if not self._active:
            return
        self._active = False
        self.notifier.disarm()
        self._listeners.clear()
        logger.info("Match session abandoned")

    def _dispatch(self, event: Event) -> None:
        if not self._active:
            return

        result = transition(self._state, event)

        for effect in result.effects:
            if isinstance(effect, Speak):
                self._speak(effect.text)
            elif isinstance(effect, ScheduleErrorReset):
                card_ids = effect.card_ids
                self.scheduler.call_later(
                    self.error_flash_ms,
                    lambda: self._dispatch(ErrorFlashElapsed(card_ids)),
                )

        if result.state is self._state:
            return

        self._state = result.state
        self.recorder.observe(self._state)
        self.notifier.observe(self._state)
        for listener in list(self._listeners):
            listener(self._state)

    def _speak(self, text: str) -> None:
        if self.speaker is None:
            return
        try:
            self.speaker.speak(text, self.speech_locale, self.speech_rate)
        except Exception as e:
            logger.debug(f"Speech failed for {text!r}: {e}")
