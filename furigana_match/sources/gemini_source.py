"""
Word source backed by the Gemini API.

Generates Japanese-Chinese vocabulary pairs with kanji/furigana segmentation
using structured JSON output. Falls back to a built-in word list when no API
key is configured or the request fails.
"""

import json
import logging
import random
import time
from typing import Any, List, Optional

from google import genai
from google.genai import types

from furigana_match.config import Config
from furigana_match.errors import ErrorCategory, ErrorSeverity, ProcessingError, WordSourceError
from furigana_match.models import GameConfig, JLPTLevel, WordPair, make_pair
from furigana_match.sources.services import WordSource


FALLBACK_WORD_PAIRS = [
    make_pair('1', [('猫', 'ねこ')], '猫'),
    make_pair('2', [('新', 'あたら'), ('しい', None)], '新的'),
    make_pair('3', [('勉', 'べん'), ('強', 'きょう'), ('する', None)], '学习'),
    make_pair('4', [('行', 'い'), ('かない', None)], '不去'),
    make_pair('5', [('読', 'よ'), ('める', None)], '能读'),
    make_pair('6', [('書', 'か'), ('かせる', None)], '让写'),
    make_pair('7', [('飲', 'の'), ('まれる', None)], '被喝'),
]


RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            'segments': types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(
                    type=types.Type.OBJECT,
                    properties={
                        'text': types.Schema(
                            type=types.Type.STRING,
                            description="The character(s)",
                        ),
                        'furigana': types.Schema(
                            type=types.Type.STRING,
                            description="Reading in Hiragana. Empty if not needed.",
                        ),
                    },
                    required=['text'],
                ),
            ),
            'chinese': types.Schema(
                type=types.Type.STRING,
                description="Chinese translation",
            ),
        },
        required=['segments', 'chinese'],
    ),
)


def build_prompt(config: GameConfig, theme: str, pair_count: int = Config.PAIRS_PER_ROUND) -> str:
    """
    Build the generation prompt for a round.

    Conjugation practice takes precedence over the level when forms are selected.
    """
    prompt = (
        f"Generate {pair_count} pairs of Japanese-Chinese words/phrases for a vocabulary game.\n"
        f"Theme: {theme} (Try to stick to this theme for variety).\n"
        "IMPORTANT: Do NOT use very common words like \"Taberu\" (Eat) or \"Miru\" (See) "
        "unless absolutely necessary. Randomize the vocabulary choice.\n"
    )

    if config.conjugations:
        forms = ", ".join(c.value for c in config.conjugations)
        prompt += (
            "Task: Japanese VERB CONJUGATION practice.\n"
            f"Conjugate verbs into these specific forms: {forms}.\n"
            "If multiple forms are selected, mix them up randomly.\n"
            "The Chinese translation must accurately reflect the conjugation nuance "
            "(e.g., Passive \"被...\", Causative \"让...\", Potential \"能...\").\n"
        )
    else:
        level = (config.level or JLPTLevel.N5).value
        prompt += (
            f"Difficulty Level: {level}.\n"
            "Include a mix of Nouns, Verbs, and Adjectives.\n"
        )

    prompt += (
        "OUTPUT FORMAT REQUIREMENT:\n"
        "For the Japanese word, split it into segments to strictly align Kanji with its Furigana.\n"
        "Example for '食べない':\n"
        "Segment 1: text='食', furigana='た'\n"
        "Segment 2: text='べない', furigana='' (Empty because it is Hiragana)\n"
        "Example for '学生':\n"
        "Segment 1: text='学', furigana='がく'\n"
        "Segment 2: text='生', furigana='せい'\n"
        "Ensure correct segmentation. Pure Kana words have 1 segment with no furigana.\n"
    )
    return prompt


def parse_word_pairs(raw: Any, id_prefix: str) -> List[WordPair]:
    """
    Convert the structured response into WordPairs.

    Args:
        raw: Decoded JSON list of {segments, chinese} objects
        id_prefix: Prefix for generated pair ids

    Returns:
        List of WordPair objects; the speech text is the joined segment text

    Raises:
        ValueError: If the payload does not have the expected shape
    """
    if not isinstance(raw, list):
        raise ValueError(f"Expected a list of word pairs, got {type(raw).__name__}")

    pairs = []
    for index, item in enumerate(raw):
        try:
            segments = [(s['text'], s.get('furigana') or None) for s in item['segments']]
            chinese = item['chinese']
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed word pair at index {index}: {e}") from e
        if not segments or not chinese:
            raise ValueError(f"Empty word pair at index {index}")
        pairs.append(make_pair(f"{id_prefix}-{index}", segments, chinese))
    return pairs


class GeminiWordSource(WordSource):
    """
    Word source using the Gemini API through the google-genai SDK.

    Reads the API key from GEMINI_API_KEY or API_KEY. Without a key, or when
    generation fails, the built-in fallback list is returned instead.
    """

    def __init__(self, api_key: Optional[str] = None, model: str = Config.GEMINI_MODEL,
                 rng: Optional[random.Random] = None, client: Any = None):
        """
        Initialize the word source.

        Args:
            api_key: Gemini API key; read from the environment when None
            model: Gemini model name
            rng: Randomness source for theme selection
            client: Pre-built genai.Client (mainly for tests)
        """
        self.logger = logging.getLogger(__name__)
        self.model = model
        self.rng = rng or random.Random()

        if client is not None:
            self.client = client
            return

        api_key = api_key or Config.get_api_key()
        if not api_key:
            self.logger.warning("No API Key found, using fallback data.")
            self.client = None
            return

        try:
            self.client = genai.Client(api_key=api_key)
            self.logger.info(f"Gemini word source initialized with model '{self.model}'")
        except Exception as e:
            self.logger.error(f"Failed to initialize Gemini client: {e}")
            self.client = None

    def fetch_word_pairs(self, config: GameConfig) -> List[WordPair]:
        if self.client is None:
            return list(FALLBACK_WORD_PAIRS)

        theme = self.rng.choice(Config.THEMES)
        prompt = build_prompt(config, theme)
        self.logger.info(f"Requesting word pairs (theme: {theme})")

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=RESPONSE_SCHEMA,
                    temperature=Config.GENERATION_TEMPERATURE,
                ),
            )

            json_str = response.text
            if not json_str:
                raise WordSourceError(ProcessingError(
                    category=ErrorCategory.CONTENT_LOAD,
                    severity=ErrorSeverity.ERROR,
                    message="Empty response from Gemini",
                    details=f"Model {self.model} returned no text",
                    suggested_actions=["Try again"],
                    error_code="LOAD_004"
                ))

            pairs = parse_word_pairs(json.loads(json_str), f"pair-{int(time.time() * 1000)}")
            self.logger.info(f"Generated {len(pairs)} word pairs")
            return pairs

        except Exception as e:
            self.logger.error(f"Gemini generation failed: {e}")
            return list(FALLBACK_WORD_PAIRS)


class FallbackWordSource(WordSource):
    """
    Offline word source for development and testing.

    Always returns the built-in word list.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.logger.info("Fallback word source initialized")

    def fetch_word_pairs(self, config: GameConfig) -> List[WordPair]:
        return list(FALLBACK_WORD_PAIRS)
