"""
Word sources that supply the pairs for a round.
"""

from furigana_match.sources.services import (
    WordSource
)
from furigana_match.sources.gemini_source import (
    GeminiWordSource,
    FallbackWordSource,
    FALLBACK_WORD_PAIRS,
    build_prompt,
    parse_word_pairs
)

__all__ = [
    'WordSource',
    'GeminiWordSource',
    'FallbackWordSource',
    'FALLBACK_WORD_PAIRS',
    'build_prompt',
    'parse_word_pairs'
]
