"""
Furigana Match: a Japanese-Chinese vocabulary matching game.
"""

__version__ = "0.1.0"

from .models import (
    Column,
    ConjugationType,
    DisplayCard,
    FuriganaSegment,
    GameConfig,
    JapaneseTerm,
    JLPTLevel,
    WordPair,
)
from .game import MatchEngine, BoardBuilder, SessionRecorder, CompletionNotifier, TimerQueue
from .app import AppState, MatchGameApp

__all__ = [
    'Column',
    'ConjugationType',
    'DisplayCard',
    'FuriganaSegment',
    'GameConfig',
    'JapaneseTerm',
    'JLPTLevel',
    'WordPair',
    'MatchEngine',
    'BoardBuilder',
    'SessionRecorder',
    'CompletionNotifier',
    'TimerQueue',
    'AppState',
    'MatchGameApp',
]
