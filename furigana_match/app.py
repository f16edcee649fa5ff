"""
Application flow around the match engine.

Moves between the menu, loading, playing, result and error screens, loads
word lists, and turns a finished session into progress and review-list
updates.
"""

import logging
import random
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .config import Config
from .errors import ErrorHandler, error_handler as default_error_handler
from .game.engine import MatchEngine
from .game.timers import Scheduler
from .models import GameConfig, WordPair
from .sources.services import WordSource
from .speech.services import Speaker
from .storage.progress_store import ProgressStore


LOAD_ERROR_MESSAGE = "Could not load words. Please check your connection."


class AppState(Enum):
    """Top-level screens."""
    MENU = "MENU"
    LOADING = "LOADING"
    PLAYING = "PLAYING"
    RESULT = "RESULT"
    ERROR = "ERROR"


class MatchGameApp:
    """
    Drives one player through menu, rounds and results.

    Exactly one engine exists at a time; starting a round or going back
    discards the previous one.
    """

    def __init__(self, word_source: WordSource, progress_store: ProgressStore,
                 scheduler: Scheduler, speaker: Optional[Speaker] = None,
                 rng: Optional[random.Random] = None,
                 errors: Optional[ErrorHandler] = None):
        self.logger = logging.getLogger(__name__)
        self.word_source = word_source
        self.progress_store = progress_store
        self.scheduler = scheduler
        self.speaker = speaker
        self.rng = rng
        self.errors = errors or default_error_handler

        self.state = AppState.MENU
        self.engine: Optional[MatchEngine] = None
        self.current_data: List[WordPair] = []
        self.current_config: Optional[GameConfig] = None
        self.loading_error: Optional[str] = None
        self.last_mistakes: List[WordPair] = []
        self._state_listeners: List[Callable[[AppState], None]] = []

    def add_state_listener(self, listener: Callable[[AppState], None]) -> None:
        self._state_listeners.append(listener)

    def start_game(self, config: GameConfig) -> bool:
        """
        Load words for a round and start the engine.

        Args:
            config: Menu selection or review round

        Returns:
            True if a round is now playing, False if loading failed
        """
        self._discard_engine()
        self.current_config = config
        self.loading_error = None
        self.last_mistakes = []
        self._set_state(AppState.LOADING)

        try:
            if config.is_review_mode:
                data = list(config.review_data)
            else:
                data = self.word_source.fetch_word_pairs(config)

            if not data:
                self.errors.add_error(self.errors.handle_content_load_error(
                    context={'review_mode': config.is_review_mode}
                ))
                return self._fail_loading()

            # Duplicate pair ids in the loaded data surface here as ValueError
            engine = MatchEngine(
                data,
                on_finish=self._handle_finish,
                scheduler=self.scheduler,
                speaker=self.speaker,
                rng=self.rng,
            )

        except Exception as e:
            self.errors.add_error(self.errors.handle_content_load_error(
                e, context={'review_mode': config.is_review_mode}
            ))
            return self._fail_loading()

        self.current_data = data
        self.engine = engine
        self._set_state(AppState.PLAYING)
        return True

    def back(self) -> None:
        """Leave the current round without saving anything."""
        self._discard_engine()
        self._set_state(AppState.MENU)

    def reset(self) -> None:
        """Return to the menu and forget the last round."""
        self._discard_engine()
        self.current_data = []
        self.current_config = None
        self.loading_error = None
        self._set_state(AppState.MENU)

    def review_config(self, limit: int = Config.REVIEW_BATCH_SIZE) -> GameConfig:
        """Build a review round from the first items of the review list."""
        return GameConfig(
            is_review_mode=True,
            review_data=self.progress_store.get_review_list()[:limit],
        )

    def menu_summary(self) -> Dict[str, Any]:
        """Progress and review count shown on the menu."""
        return {
            'progress': self.progress_store.get_progress(),
            'review_count': len(self.progress_store.get_review_list()),
        }

    def _handle_finish(self, mistakes: List[WordPair]) -> None:
        config = self.current_config or GameConfig()

        if config.is_review_mode:
            mistaken_texts = {pair.jp.text for pair in mistakes}
            solved = [pair.jp.text for pair in self.current_data if pair.jp.text not in mistaken_texts]
            self.progress_store.remove_review_items_by_text(solved)
        else:
            if config.level is not None:
                self.progress_store.save_progress(config.level.value)
            if mistakes:
                self.progress_store.add_to_review_list(mistakes)

        self.last_mistakes = list(mistakes)
        self.engine = None
        self._set_state(AppState.RESULT)

    def _fail_loading(self) -> bool:
        self.loading_error = LOAD_ERROR_MESSAGE
        self._set_state(AppState.ERROR)
        return False

    def _discard_engine(self) -> None:
        if self.engine is not None:
            self.engine.abandon()
            self.engine = None

    def _set_state(self, state: AppState) -> None:
        if state != self.state:
            self.logger.debug(f"App state {self.state.value} -> {state.value}")
        self.state = state
        for listener in self._state_listeners:
            listener(state)
