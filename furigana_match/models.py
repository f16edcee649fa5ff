"""
Core data models for Furigana Match.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class Column(Enum):
    """Board column a card is rendered in."""
    JP = "JP"
    CN = "CN"


class JLPTLevel(Enum):
    """Difficulty levels offered in the menu."""
    N5 = "N5"
    N4 = "N4"
    N3 = "N3"


class ConjugationType(Enum):
    """Verb forms available for conjugation practice."""
    DICTIONARY = "Dictionary"
    MASU = "Masu"
    TE = "Te"
    TA = "Ta"
    NAI = "Nai"
    POTENTIAL = "Potential"
    VOLITIONAL = "Volitional"
    PASSIVE = "Passive"
    CAUSATIVE = "Causative"
    IMPERATIVE = "Imperative"
    PROHIBITIVE = "Prohibitive"
    BA = "Ba"
    CAUSATIVE_PASSIVE = "CausativePassive"

    @property
    def label(self) -> str:
        """Chinese menu label for this form."""
        return CONJUGATION_LABELS[self]


CONJUGATION_LABELS = {
    ConjugationType.DICTIONARY: "辞书形 (原形)",
    ConjugationType.MASU: "ます形 (敬语)",
    ConjugationType.TE: "て形 (连接/进行)",
    ConjugationType.TA: "た形 (过去)",
    ConjugationType.NAI: "ない形 (否定)",
    ConjugationType.POTENTIAL: "可能形 (能)",
    ConjugationType.VOLITIONAL: "意向形 (想)",
    ConjugationType.IMPERATIVE: "命令形 (命令)",
    ConjugationType.PROHIBITIVE: "禁止形 (禁止)",
    ConjugationType.BA: "ば形 (假设)",
    ConjugationType.PASSIVE: "受身形 (被动)",
    ConjugationType.CAUSATIVE: "使役形 (让)",
    ConjugationType.CAUSATIVE_PASSIVE: "使役被动 (被迫)",
}


@dataclass(frozen=True)
class FuriganaSegment:
    """A run of base text with an optional phonetic reading."""
    text: str
    furigana: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'text': self.text}
        if self.furigana:
            data['furigana'] = self.furigana
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FuriganaSegment':
        return cls(text=data['text'], furigana=data.get('furigana') or None)


@dataclass(frozen=True)
class JapaneseTerm:
    """Japanese side of a pair: plain text for speech plus furigana segments."""
    text: str
    segments: Tuple[FuriganaSegment, ...]


@dataclass(frozen=True)
class WordPair:
    """One Japanese term and its Chinese translation."""
    id: str
    jp: JapaneseTerm
    cn: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'jp': {
                'text': self.jp.text,
                'segments': [segment.to_dict() for segment in self.jp.segments],
            },
            'cn': self.cn,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WordPair':
        """Create instance from dictionary."""
        jp = data['jp']
        segments = tuple(FuriganaSegment.from_dict(s) for s in jp.get('segments', []))
        return cls(
            id=str(data['id']),
            jp=JapaneseTerm(text=jp['text'], segments=segments),
            cn=data['cn'],
        )


def make_pair(pair_id: str, segments: List[Tuple[str, Optional[str]]], cn: str) -> WordPair:
    """
    Build a WordPair from (text, furigana) tuples.

    The speech text is the concatenation of the segment texts.
    """
    segs = tuple(FuriganaSegment(text, furigana or None) for text, furigana in segments)
    return WordPair(
        id=pair_id,
        jp=JapaneseTerm(text=''.join(s.text for s in segs), segments=segs),
        cn=cn,
    )


@dataclass(frozen=True)
class DisplayCard:
    """One half of a pair, shown in the JP or CN column."""
    card_id: str
    pair_id: str
    column: Column
    render_payload: Union[Tuple[FuriganaSegment, ...], str]
    speech_text: Optional[str] = None
    is_matched: bool = False
    is_selected: bool = False
    is_error: bool = False


@dataclass
class GameConfig:
    """Menu selection passed to the word source."""
    level: Optional[JLPTLevel] = None
    conjugations: List[ConjugationType] = field(default_factory=list)
    is_review_mode: bool = False
    review_data: List[WordPair] = field(default_factory=list)
