"""
Speech output through pyttsx3.
"""

import logging
import threading
from typing import Optional

import pyttsx3

from ..config import Config
from .services import Speaker


class Pyttsx3Speaker(Speaker):
    """
    Offline text-to-speech through pyttsx3.

    Each utterance runs on its own daemon thread. A lock queues utterances so
    rapid clicks play one after another instead of failing.
    """

    def __init__(self, base_wpm: int = Config.SPEECH_BASE_WPM):
        self.logger = logging.getLogger(__name__)
        self.base_wpm = base_wpm
        self._lock = threading.Lock()
        self._voice_cache = {}

    def speak(self, text: str, locale: str, rate: float) -> None:
        if not text:
            return
        thread = threading.Thread(
            target=self._run, args=(text, locale, rate), daemon=True
        )
        thread.start()

    def _run(self, text: str, locale: str, rate: float) -> None:
        with self._lock:
            try:
                engine = pyttsx3.init()
                voice_id = self._pick_voice(engine, locale)
                if voice_id:
                    engine.setProperty('voice', voice_id)
                engine.setProperty('rate', int(self.base_wpm * rate))
                engine.say(text)
                engine.runAndWait()
            except Exception as e:
                self.logger.debug(f"Speech playback failed: {e}")

    def _pick_voice(self, engine, locale: str) -> Optional[str]:
        """Pick the first voice whose id, name or languages mention the locale's language."""
        if locale in self._voice_cache:
            return self._voice_cache[locale]

        lang_hint = locale.split('-')[0].lower()
        voice_id = None
        for voice in engine.getProperty('voices'):
            vid = (getattr(voice, 'id', '') or '').lower()
            name = (getattr(voice, 'name', '') or '').lower()
            languages = []
            for lang in getattr(voice, 'languages', None) or []:
                if isinstance(lang, bytes):
                    lang = lang.decode('utf-8', errors='ignore')
                languages.append(str(lang).lower())
            if lang_hint in vid or lang_hint in name or any(lang_hint in x for x in languages):
                voice_id = voice.id
                break

        if voice_id is None:
            self.logger.debug(f"No voice found for locale {locale}; using default voice")
        self._voice_cache[locale] = voice_id
        return voice_id
