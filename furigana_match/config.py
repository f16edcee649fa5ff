"""
Configuration settings for Furigana Match.
"""

import os
from pathlib import Path
from typing import Optional


class Config:
    """Configuration class for application settings."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent
    DATA_DIR = PROJECT_ROOT / "data"
    OUTPUT_DIR = PROJECT_ROOT / "output"
    STORE_FILE = DATA_DIR / "furigana_match_store.json"

    # Game timing (milliseconds)
    ERROR_FLASH_MS = 800
    SETTLE_DELAY_MS = 1000

    # Round sizes
    PAIRS_PER_ROUND = 7
    REVIEW_BATCH_SIZE = 7

    # Gemini word generation
    GEMINI_MODEL = "gemini-2.5-flash"
    GENERATION_TEMPERATURE = 0.9
    API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")
    THEMES = [
        "Daily Life", "Travel & Transport", "School & Education", "Nature & Animals",
        "Food & Cooking", "Business & Work", "Emotions & Personality", "House & Home",
        "Shopping", "Health & Body", "Weather", "Hobbies & Sports",
    ]

    # Speech settings
    SPEECH_LOCALE = "ja-JP"
    SPEECH_RATE = 0.8
    SPEECH_BASE_WPM = 200

    # Anki export
    ANKI_DECK_NAME = "Furigana Match Review"

    @classmethod
    def ensure_directories(cls):
        """Create necessary directories if they don't exist."""
        for directory in [cls.DATA_DIR, cls.OUTPUT_DIR]:
            directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_api_key(cls) -> Optional[str]:
        """Return the first Gemini API key found in the environment."""
        for name in cls.API_KEY_ENV_VARS:
            value = os.environ.get(name)
            if value:
                return value
        return None
