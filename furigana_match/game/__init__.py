"""
Matching game engine: board construction, state machine, mistake recording
and completion notification.
"""

from .board import Board, BoardBuilder, build_board
from .state import (
    CardState,
    SessionPhase,
    MatchState,
    CardSelected,
    ErrorFlashElapsed,
    Speak,
    ScheduleErrorReset,
    Transition,
    card_state,
    transition,
)
from .recorder import SessionRecorder
from .notifier import CompletionNotifier
from .timers import Scheduler, TimerQueue, ManualClock, monotonic_ms
from .engine import MatchEngine

__all__ = [
    'Board',
    'BoardBuilder',
    'build_board',
    'CardState',
    'SessionPhase',
    'MatchState',
    'CardSelected',
    'ErrorFlashElapsed',
    'Speak',
    'ScheduleErrorReset',
    'Transition',
    'card_state',
    'transition',
    'SessionRecorder',
    'CompletionNotifier',
    'Scheduler',
    'TimerQueue',
    'ManualClock',
    'monotonic_ms',
    'MatchEngine',
]
