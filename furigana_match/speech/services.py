"""
Base service interface for speech output.

Speech is fire-and-forget: speak() returns immediately and any failure is
logged and dropped. A game without speech plays exactly the same.
"""

from abc import ABC, abstractmethod


class Speaker(ABC):
    """Base interface for speech output."""

    @abstractmethod
    def speak(self, text: str, locale: str, rate: float) -> None:
        """
        Speak text without blocking the caller.

        Args:
            text: Text to pronounce
            locale: BCP-47 locale such as 'ja-JP'
            rate: Speed multiplier, 1.0 is normal speed
        """
        pass


class NullSpeaker(Speaker):
    """Speaker that stays silent."""

    def speak(self, text: str, locale: str, rate: float) -> None:
        pass
