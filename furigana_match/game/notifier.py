"""
End-of-game notification.
"""

import logging
from typing import Callable, List, Sequence

from ..config import Config
from ..models import WordPair
from .recorder import SessionRecorder
from .state import MatchState
from .timers import Scheduler


logger = logging.getLogger(__name__)


class CompletionNotifier:
    """
    Fires the finish callback once per session.

    Watches every state the engine produces. The first time all pairs are
    matched it schedules ``on_finish`` after the settle delay with the
    recorder's mistake list as it stands when the timer fires.
    """

    def __init__(self, pairs: Sequence[WordPair], recorder: SessionRecorder,
                 on_finish: Callable[[List[WordPair]], None], scheduler: Scheduler,
                 settle_delay_ms: float = Config.SETTLE_DELAY_MS):
        self.pairs = list(pairs)
        self.recorder = recorder
        self.on_finish = on_finish
        self.scheduler = scheduler
        self.settle_delay_ms = settle_delay_ms
        self.triggered = False
        self.fired = False
        self.disarmed = False

    def observe(self, state: MatchState) -> None:
        """State listener hook."""
        if self.triggered or self.disarmed or not state.is_complete:
            return
        self.triggered = True
        logger.info(f"All {state.total_pairs} pairs matched; finishing in {self.settle_delay_ms}ms")
        self.scheduler.call_later(self.settle_delay_ms, self._fire)

    def disarm(self) -> None:
        """Stop a scheduled finish from reaching the callback."""
        self.disarmed = True

    def _fire(self) -> None:
        if self.disarmed or self.fired:
            return
        self.fired = True
        mistakes = self.recorder.mistakes(self.pairs)
        logger.info(f"Session finished with {len(mistakes)} mistaken pairs")
        self.on_finish(mistakes)
