"""
Base service interface for word sources.
"""

from abc import ABC, abstractmethod
from typing import List

from furigana_match.models import GameConfig, WordPair


class WordSource(ABC):
    """Base interface for services that produce word pairs for a round."""

    @abstractmethod
    def fetch_word_pairs(self, config: GameConfig) -> List[WordPair]:
        """
        Produce the word pairs for one round.

        Args:
            config: Menu selection (level and optional conjugation forms)

        Returns:
            List of WordPair objects; may be empty

        Raises:
            WordSourceError: If the source cannot produce any words
        """
        pass
