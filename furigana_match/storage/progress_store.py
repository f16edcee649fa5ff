"""
Win-count and review-list bookkeeping on top of a key-value store.

Every operation is best-effort: read failures are treated as an empty store
and write failures are reported to the error handler and dropped, so a broken
store never interrupts a game.
"""

import json
import logging
from typing import Dict, Iterable, List, Optional

from ..errors import ErrorHandler, error_handler as default_error_handler
from ..models import WordPair
from .store import KeyValueStore


PROGRESS_KEY = 'furigana_match_progress_v1'
REVIEW_KEY = 'furigana_match_review_list_v1'


class ProgressStore:
    """Level win counts and the list of pairs pending review."""

    def __init__(self, store: KeyValueStore, errors: Optional[ErrorHandler] = None):
        self.store = store
        self.errors = errors or default_error_handler
        self.logger = logging.getLogger(__name__)

    def get_progress(self) -> Dict[str, int]:
        """Return the level -> win count mapping."""
        try:
            data = self.store.get(PROGRESS_KEY)
            if not data:
                return {}
            progress = json.loads(data)
            if not isinstance(progress, dict):
                raise ValueError("Progress record is not a mapping")
            return {str(k): int(v) for k, v in progress.items()}
        except Exception as e:
            self.errors.add_error(self.errors.handle_storage_error(e, "read progress"))
            return {}

    def save_progress(self, key: str) -> None:
        """Add one win for a level."""
        try:
            current = self.get_progress()
            current[key] = current.get(key, 0) + 1
            self.store.set(PROGRESS_KEY, json.dumps(current, ensure_ascii=False))
            self.logger.info(f"Recorded win for {key} (total {current[key]})")
        except Exception as e:
            self.errors.add_error(self.errors.handle_storage_error(e, "save progress"))

    def get_review_list(self) -> List[WordPair]:
        """Return the pairs waiting for review, oldest first."""
        try:
            data = self.store.get(REVIEW_KEY)
            if not data:
                return []
            return [WordPair.from_dict(item) for item in json.loads(data)]
        except Exception as e:
            self.errors.add_error(self.errors.handle_storage_error(e, "read review list"))
            return []

    def add_to_review_list(self, new_mistakes: Iterable[WordPair]) -> None:
        """
        Append mistakes to the review list.

        Pairs are deduplicated by Japanese text, since pair ids change with
        every generated round.
        """
        try:
            current = self.get_review_list()
            existing_texts = {item.jp.text for item in current}

            unique_new = []
            for item in new_mistakes:
                if item.jp.text not in existing_texts:
                    existing_texts.add(item.jp.text)
                    unique_new.append(item)

            if unique_new:
                updated = current + unique_new
                self._write_review_list(updated)
                self.logger.info(f"Added {len(unique_new)} pairs to review list ({len(updated)} total)")
        except Exception as e:
            self.errors.add_error(self.errors.handle_storage_error(e, "update review list"))

    def remove_review_items_by_text(self, jp_texts: Iterable[str]) -> None:
        """Drop review items whose Japanese text is in jp_texts."""
        try:
            texts_to_remove = set(jp_texts)
            current = self.get_review_list()
            updated = [item for item in current if item.jp.text not in texts_to_remove]
            self._write_review_list(updated)
            self.logger.info(f"Removed {len(current) - len(updated)} pairs from review list")
        except Exception as e:
            self.errors.add_error(self.errors.handle_storage_error(e, "clean review list"))

    def _write_review_list(self, pairs: List[WordPair]) -> None:
        self.store.set(REVIEW_KEY, json.dumps([p.to_dict() for p in pairs], ensure_ascii=False))
