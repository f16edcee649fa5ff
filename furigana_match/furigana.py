"""
Furigana rendering helpers.

Turns furigana segments into ruby HTML, terminal-friendly bracket text and
Anki's furigana field syntax.
"""

import html
from typing import Iterable

from .models import FuriganaSegment


def to_ruby_html(segments: Iterable[FuriganaSegment]) -> str:
    """Render segments as HTML <ruby> markup."""
    parts = []
    for seg in segments:
        text = html.escape(seg.text)
        if seg.furigana:
            parts.append(f"<ruby>{text}<rt>{html.escape(seg.furigana)}</rt></ruby>")
        else:
            parts.append(text)
    return ''.join(parts)


def to_bracket_text(segments: Iterable[FuriganaSegment]) -> str:
    """Render segments as 食(た)べない."""
    return ''.join(
        f"{seg.text}({seg.furigana})" if seg.furigana else seg.text
        for seg in segments
    )


def to_anki_furigana(segments: Iterable[FuriganaSegment]) -> str:
    """
    Render segments in Anki's furigana syntax, e.g. 食[た]べない.

    Anki attaches a reading to the run of text after the previous space, so
    a space is inserted before an annotated segment that follows other text.
    """
    parts = []
    for seg in segments:
        if seg.furigana:
            if parts:
                parts.append(' ')
            parts.append(f"{seg.text}[{seg.furigana}]")
        else:
            parts.append(seg.text)
    return ''.join(parts)


def reading(segments: Iterable[FuriganaSegment]) -> str:
    """Kana reading: furigana where present, base text otherwise."""
    return ''.join(seg.furigana or seg.text for seg in segments)
