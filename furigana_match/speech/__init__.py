"""
Speech output for Japanese pronunciation.

The pyttsx3 backend lives in furigana_match.speech.speaker and is imported
only by callers that want real audio.
"""

from .services import Speaker, NullSpeaker

__all__ = [
    'Speaker',
    'NullSpeaker'
]
