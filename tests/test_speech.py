"""
Tests for speech output.
"""

import subprocess
import sys
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from furigana_match.speech import NullSpeaker, Speaker
from furigana_match.speech.speaker import Pyttsx3Speaker


def _fake_engine(voices):
    engine = MagicMock()
    engine.getProperty.side_effect = lambda name: voices if name == 'voices' else None
    return engine


class TestNullSpeaker:

    def test_is_silent(self):
        assert NullSpeaker().speak("猫", "ja-JP", 0.8) is None


class TestPyttsx3Speaker:
    """Unit tests for Pyttsx3Speaker with pyttsx3 patched out."""

    def test_speaks_with_japanese_voice_and_scaled_rate(self):
        voices = [
            SimpleNamespace(id="english", name="English", languages=[b"\x05en-us"]),
            SimpleNamespace(id="kyoko", name="Kyoko", languages=["ja_JP"]),
        ]
        engine = _fake_engine(voices)
        speaker = Pyttsx3Speaker(base_wpm=200)

        with patch("furigana_match.speech.speaker.pyttsx3.init", return_value=engine):
            speaker._run("猫", "ja-JP", 0.8)

        engine.setProperty.assert_any_call('voice', "kyoko")
        engine.setProperty.assert_any_call('rate', 160)
        engine.say.assert_called_once_with("猫")
        engine.runAndWait.assert_called_once()

    def test_missing_voice_uses_default(self):
        engine = _fake_engine([SimpleNamespace(id="english", name="English", languages=[])])
        speaker = Pyttsx3Speaker()

        with patch("furigana_match.speech.speaker.pyttsx3.init", return_value=engine):
            speaker._run("猫", "ja-JP", 1.0)

        voice_calls = [c for c in engine.setProperty.call_args_list if c.args[0] == 'voice']
        assert voice_calls == []
        assert speaker._voice_cache == {"ja-JP": None}

    def test_engine_failure_is_swallowed(self):
        speaker = Pyttsx3Speaker()
        with patch("furigana_match.speech.speaker.pyttsx3.init", side_effect=RuntimeError("no driver")):
            speaker._run("猫", "ja-JP", 0.8)

    def test_empty_text_starts_nothing(self):
        with patch("furigana_match.speech.speaker.threading.Thread") as thread_cls:
            Pyttsx3Speaker().speak("", "ja-JP", 0.8)
        thread_cls.assert_not_called()

    def test_speak_runs_on_daemon_thread(self):
        with patch("furigana_match.speech.speaker.threading.Thread") as thread_cls:
            Pyttsx3Speaker().speak("猫", "ja-JP", 0.8)
        assert thread_cls.call_args.kwargs['daemon'] is True
        thread_cls.return_value.start.assert_called_once()


class TestSpeechImports:

    def test_engine_does_not_load_tts_backend(self):
        """The game core and CLI only depend on the Speaker port."""
        code = (
            "import sys\n"
            "import furigana_match.game.engine, furigana_match.app, furigana_match.main\n"
            "print('pyttsx3' in sys.modules)\n"
        )
        result = subprocess.run([sys.executable, "-c", code],
                                capture_output=True, text=True, check=True)
        assert result.stdout.strip() == "False"

    def test_null_speaker_is_a_speaker(self):
        assert isinstance(NullSpeaker(), Speaker)
        assert issubclass(Pyttsx3Speaker, Speaker)
