"""
Anki export of the review list.

Creates .apkg files with furigana-aware review cards.
"""

from .templates import ReviewCardTemplate, CardFormatter
from .package_generator import ReviewDeckExporter

__all__ = [
    'ReviewCardTemplate',
    'CardFormatter',
    'ReviewDeckExporter'
]
