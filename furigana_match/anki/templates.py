"""
Anki note model and field formatting for review cards.

Front: Japanese term with furigana. Back: the same plus the Chinese meaning.
"""

import logging
from typing import Dict, Any
import genanki

from ..furigana import to_anki_furigana, reading


logger = logging.getLogger(__name__)


class ReviewCardTemplate:
    """
    Anki card template for reviewing mistaken pairs.

    Creates cards with:
    - Front: Japanese term with furigana above the kanji
    - Back: Japanese term and its Chinese translation
    """

    # Unique model ID for this card type (generated randomly but fixed)
    MODEL_ID = 1839204716

    CSS = """
.card {
    font-family: "Hiragino Sans", "Noto Sans JP", "Noto Sans SC", sans-serif;
    font-size: 20px;
    text-align: center;
    color: black;
    background-color: white;
    padding: 20px;
}

.japanese {
    font-size: 32px;
    font-weight: bold;
    margin-bottom: 20px;
}

.japanese rt {
    font-size: 14px;
    color: #6c757d;
}

.chinese {
    font-size: 26px;
    font-weight: bold;
    margin: 20px 0;
}

@media (max-width: 480px) {
    .japanese {
        font-size: 26px;
    }

    .chinese {
        font-size: 22px;
    }
}
"""

    FRONT_TEMPLATE = """
<div class="card">
    <div class="japanese">
        {{furigana:Furigana}}
    </div>
</div>
"""

    BACK_TEMPLATE = """
<div class="card">
    <div class="japanese">
        {{furigana:Furigana}}
    </div>

    <hr>

    <div class="chinese">
        {{Chinese}}
    </div>
</div>
"""

    @classmethod
    def create_model(cls) -> genanki.Model:
        """
        Create the Anki model for review cards.

        Returns:
            genanki.Model: Configured Anki model
        """
        logger.info("Creating review card template model")

        return genanki.Model(
            model_id=cls.MODEL_ID,
            name='Furigana Match Review',
            fields=[
                {'name': 'Japanese'},
                {'name': 'Reading'},
                {'name': 'Chinese'},
                {'name': 'Furigana'},
            ],
            templates=[
                {
                    'name': 'Japanese → Chinese',
                    'qfmt': cls.FRONT_TEMPLATE,
                    'afmt': cls.BACK_TEMPLATE,
                },
            ],
            css=cls.CSS,
        )


class CardFormatter:
    """
    Formats word pairs into Anki note fields.
    """

    @staticmethod
    def format_card_fields(pair) -> Dict[str, Any]:
        """
        Format a word pair into Anki note fields.

        Args:
            pair: WordPair to format

        Returns:
            Dictionary with formatted fields
        """
        fields = {
            'Japanese': pair.jp.text.strip(),
            'Reading': reading(pair.jp.segments),
            'Chinese': pair.cn.strip(),
            'Furigana': to_anki_furigana(pair.jp.segments),
        }

        logger.debug(f"Formatted card: {pair.jp.text} → {pair.cn}")
        return fields
