"""
Session mistake recording.
"""

from typing import FrozenSet, Iterable, List, Sequence, Set

from ..models import WordPair
from .state import MatchState


class SessionRecorder:
    """
    Accumulates the pair ids that were mismatched at least once.

    The set only grows: a pair that caused an error stays a mistake even if it
    is matched later in the same session.
    """

    def __init__(self):
        self._mistaken: Set[str] = set()

    @property
    def mistaken_pair_ids(self) -> FrozenSet[str]:
        return frozenset(self._mistaken)

    def record(self, pair_ids: Iterable[str]) -> None:
        self._mistaken.update(pair_ids)

    def observe(self, state: MatchState) -> None:
        """State listener hook."""
        self.record(state.mistaken_pair_ids)

    def mistakes(self, pairs: Sequence[WordPair]) -> List[WordPair]:
        """
        Return the mistaken pairs.

        Args:
            pairs: Full pair list of the session

        Returns:
            Pairs whose id was mismatched, in the order of ``pairs``
        """
        return [pair for pair in pairs if pair.id in self._mistaken]
