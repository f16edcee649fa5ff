"""
Anki package (.apkg) export of the review list using genanki.
"""

import hashlib
import logging
from pathlib import Path
from typing import List, Optional, Sequence
import genanki

from ..config import Config
from ..errors import (
    ErrorCategory, ErrorHandler, ErrorSeverity, ExportError, ProcessingError,
    error_handler as default_error_handler
)
from ..models import WordPair
from .templates import ReviewCardTemplate, CardFormatter


logger = logging.getLogger(__name__)


class ReviewDeckExporter:
    """
    Writes mistaken word pairs to an Anki deck.
    """

    def __init__(self, errors: Optional[ErrorHandler] = None):
        self.model = ReviewCardTemplate.create_model()
        self.formatter = CardFormatter()
        self.errors = errors or default_error_handler

    def export(self, pairs: Sequence[WordPair], output_path, deck_name: str = None) -> bool:
        """
        Export pairs to an .apkg file.

        Args:
            pairs: Word pairs to export
            output_path: Path where to save the .apkg file
            deck_name: Name for the Anki deck (defaults to Config.ANKI_DECK_NAME)

        Returns:
            True if the package was written, False otherwise
        """
        if not pairs:
            logger.warning("Review list is empty; nothing to export")
            return False

        deck_name = deck_name or Config.ANKI_DECK_NAME

        try:
            output_path = Path(output_path)
            if output_path.suffix.lower() != '.apkg':
                raise ExportError(ProcessingError(
                    category=ErrorCategory.INPUT_VALIDATION,
                    severity=ErrorSeverity.ERROR,
                    message="Output file must have the .apkg extension",
                    details=f"Got '{output_path.name}'",
                    suggested_actions=[
                        f"Use a path such as {output_path.with_suffix('.apkg').name}"
                    ],
                    error_code="INPUT_001"
                ))

            deck = genanki.Deck(self._generate_deck_id(deck_name), deck_name)
            for note in self.create_notes(pairs):
                deck.add_note(note)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            genanki.Package(deck).write_to_file(str(output_path))

            logger.info(f"Exported {len(deck.notes)} review cards to {output_path}")
            return True

        except Exception as e:
            self.errors.add_error(self.errors.handle_export_error(e, {'output_path': str(output_path)}))
            return False

    def create_notes(self, pairs: Sequence[WordPair]) -> List[genanki.Note]:
        """Build one note per pair. The note guid follows the Japanese text so re-exports update cards."""
        notes = []
        for pair in pairs:
            fields = self.formatter.format_card_fields(pair)
            notes.append(genanki.Note(
                model=self.model,
                fields=[
                    fields['Japanese'],
                    fields['Reading'],
                    fields['Chinese'],
                    fields['Furigana'],
                ],
                guid=genanki.guid_for(pair.jp.text),
                tags=['furigana_match', 'review'],
            ))
        return notes

    def _generate_deck_id(self, deck_name: str) -> int:
        """
        Derive a stable deck ID from the deck name.

        Args:
            deck_name: Name of the deck

        Returns:
            Integer ID for the deck
        """
        hash_object = hashlib.md5(deck_name.encode('utf-8'))
        deck_id = int(hash_object.hexdigest()[:8], 16) % 2147483647
        logger.debug(f"Generated deck ID {deck_id} for '{deck_name}'")
        return deck_id
