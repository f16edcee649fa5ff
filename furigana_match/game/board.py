"""
Board construction for the matching game.

Turns an ordered list of word pairs into two independently shuffled columns
of display cards, so a card's position says nothing about its partner.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..models import Column, DisplayCard, WordPair


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Board:
    """A shuffled two-column board."""
    jp_cards: Tuple[DisplayCard, ...]
    cn_cards: Tuple[DisplayCard, ...]

    @property
    def cards(self) -> Tuple[DisplayCard, ...]:
        """JP column followed by CN column."""
        return self.jp_cards + self.cn_cards

    @property
    def pair_count(self) -> int:
        return len(self.jp_cards)

    @property
    def is_empty(self) -> bool:
        return not self.jp_cards


class BoardBuilder:
    """
    Builds boards from word pairs.

    The randomness source is injectable; pass a seeded random.Random to get a
    reproducible layout.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def build(self, pairs: Sequence[WordPair]) -> Board:
        """
        Create one JP and one CN card per pair and shuffle each column.

        Args:
            pairs: Word pairs in display order; not modified

        Returns:
            Board with 2N cards for N pairs

        Raises:
            ValueError: If two pairs share an id
        """
        seen = set()
        for pair in pairs:
            if pair.id in seen:
                raise ValueError(f"Duplicate pair id on board: {pair.id}")
            seen.add(pair.id)

        jp_cards = [
            DisplayCard(
                card_id=f"card-jp-{index}",
                pair_id=pair.id,
                column=Column.JP,
                render_payload=pair.jp.segments,
                speech_text=pair.jp.text,
            )
            for index, pair in enumerate(pairs)
        ]
        cn_cards = [
            DisplayCard(
                card_id=f"card-cn-{index}",
                pair_id=pair.id,
                column=Column.CN,
                render_payload=pair.cn,
            )
            for index, pair in enumerate(pairs)
        ]

        self.rng.shuffle(jp_cards)
        self.rng.shuffle(cn_cards)

        logger.debug(f"Built board with {len(jp_cards)} pairs")
        return Board(jp_cards=tuple(jp_cards), cn_cards=tuple(cn_cards))


def build_board(pairs: Sequence[WordPair], rng: Optional[random.Random] = None) -> Board:
    """Convenience wrapper around BoardBuilder.build."""
    return BoardBuilder(rng).build(pairs)
