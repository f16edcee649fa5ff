"""
Main entry point for Furigana Match.

Plays the matching game in a terminal, shows progress, and exports the
review list to Anki.
"""

import argparse
import logging
import random
import sys
import time
import unicodedata
from pathlib import Path
from typing import Callable, List, Optional

from .anki import ReviewDeckExporter
from .app import AppState, MatchGameApp
from .config import Config
from .errors import error_handler
from .furigana import to_bracket_text
from .game.state import CardState, MatchState, card_state
from .game.timers import TimerQueue
from .models import ConjugationType, DisplayCard, GameConfig, JLPTLevel
from .sources import FallbackWordSource, GeminiWordSource
from .speech import NullSpeaker
from .storage import JsonFileStore, ProgressStore


CARD_MARKERS = {
    CardState.IDLE: "  ",
    CardState.SELECTED: "▶ ",
    CardState.MATCHED: "✓ ",
    CardState.ERROR_FLASH: "✗ ",
}


def setup_logging(verbose: bool = False, default_level: int = logging.INFO):
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else default_level

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def card_label(card: DisplayCard) -> str:
    if isinstance(card.render_payload, str):
        return card.render_payload
    return to_bracket_text(card.render_payload)


def display_width(text: str) -> int:
    """Terminal cells taken by text; wide and full-width characters count double."""
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def render_board(state: MatchState) -> str:
    """Render both columns side by side, JP picks as J1.., CN picks as C1.."""
    jp_cards = state.jp_cards
    cn_cards = state.cn_cards
    jp_labels = [card_label(c) for c in jp_cards]
    width = max((display_width(label) for label in jp_labels), default=0) + 2

    lines = [f"  {len(state.matched_pair_ids)} / {state.total_pairs} matched"]
    for index in range(max(len(jp_cards), len(cn_cards))):
        left = ""
        right = ""
        if index < len(jp_cards):
            marker = CARD_MARKERS[card_state(jp_cards[index])]
            left = f"{marker}J{index + 1:<2} {jp_labels[index]}"
        if index < len(cn_cards):
            marker = CARD_MARKERS[card_state(cn_cards[index])]
            right = f"{marker}C{index + 1:<2} {card_label(cn_cards[index])}"
        padding = " " * (width + 6 - display_width(left))
        lines.append(f"{left}{padding}  {right}".rstrip())
    return "\n".join(lines)


def parse_pick(text: str, state: MatchState) -> Optional[str]:
    """
    Map a pick such as 'J3' or 'c1' to a card id.

    Returns:
        The card id, or None if the pick does not name a card
    """
    text = text.strip().upper()
    if len(text) < 2 or text[0] not in ("J", "C") or not text[1:].isdecimal():
        return None
    cards = state.jp_cards if text[0] == "J" else state.cn_cards
    index = int(text[1:]) - 1
    if 0 <= index < len(cards):
        return cards[index].card_id
    return None


def play_round(app: MatchGameApp, timers: TimerQueue,
               input_fn: Callable[[str], str] = input,
               sleep: Callable[[float], None] = time.sleep) -> None:
    """Run the terminal loop until the round finishes or the player quits."""
    while app.state == AppState.PLAYING and app.engine is not None:
        engine = app.engine
        print()
        print(render_board(engine.state))

        try:
            raw = input_fn("Pick a card (J1, C3, ...) or q to go back: ")
        except EOFError:
            raw = "q"

        if raw.strip().lower() in ("q", "quit", "exit"):
            app.back()
            return

        card_id = parse_pick(raw, engine.state)
        if card_id is None:
            print("   Unknown card. Use J<number> or C<number>.")
            continue

        engine.select_card(card_id)
        if timers.pending:
            print()
            print(render_board(engine.state))
            timers.run_until_idle(sleep)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Match Japanese words (with furigana) to their Chinese meanings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s play --level N4
  %(prog)s play --conjugation Te --conjugation Passive
  %(prog)s play --review
  %(prog)s progress
  %(prog)s export-review review.apkg
        """
    )

    parser.add_argument(
        "--store",
        type=Path,
        help=f"Path of the progress store (default: {Config.STORE_FILE})"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    subparsers = parser.add_subparsers(dest="command")

    play = subparsers.add_parser("play", help="Play a round (default)")
    play.add_argument(
        "--level",
        choices=[level.value for level in JLPTLevel],
        default=JLPTLevel.N5.value,
        help="JLPT level of the generated words"
    )
    play.add_argument(
        "--conjugation",
        action="append",
        default=[],
        choices=[form.value for form in ConjugationType],
        help="Practice a verb form (repeatable)"
    )
    play.add_argument(
        "--review",
        action="store_true",
        help="Play a round from the review list"
    )
    play.add_argument(
        "--seed",
        type=int,
        help="Seed for board shuffling and theme choice"
    )
    play.add_argument(
        "--offline",
        action="store_true",
        help="Use the built-in word list instead of Gemini"
    )
    play.add_argument(
        "--no-speech",
        action="store_true",
        help="Do not pronounce Japanese cards"
    )

    subparsers.add_parser("progress", help="Show win counts and review list size")

    export = subparsers.add_parser("export-review", help="Export the review list as an Anki deck")
    export.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=Config.OUTPUT_DIR / "furigana_match_review.apkg",
        help="Output .apkg path (default: %(default)s)"
    )
    export.add_argument("--deck-name", help=f"Deck name (default: {Config.ANKI_DECK_NAME})")

    parser.set_defaults(
        command="play", level=JLPTLevel.N5.value, conjugation=[], review=False,
        seed=None, offline=False, no_speech=False
    )
    return parser


def show_progress(progress_store: ProgressStore) -> None:
    progress = progress_store.get_progress()
    review_count = len(progress_store.get_review_list())

    print("📊 Progress")
    for level in JLPTLevel:
        wins = progress.get(level.value, 0)
        star = " ⭐" if wins > 0 else ""
        print(f"   {level.value}: {wins} win(s){star}")
    print(f"📝 Review list: {review_count} item(s)")


def run_play(args, progress_store: ProgressStore) -> int:
    rng = random.Random(args.seed) if args.seed is not None else None
    timers = TimerQueue()
    word_source = FallbackWordSource() if args.offline else GeminiWordSource(rng=rng)
    if args.no_speech:
        speaker = NullSpeaker()
    else:
        from .speech.speaker import Pyttsx3Speaker
        speaker = Pyttsx3Speaker()

    app = MatchGameApp(word_source, progress_store, timers, speaker=speaker, rng=rng)

    if args.review:
        config = app.review_config()
        if not config.review_data:
            print("📝 The review list is empty. Play a normal round first!")
            return 0
        print(f"🔁 Reviewing {len(config.review_data)} item(s)...")
    else:
        config = GameConfig(
            level=JLPTLevel(args.level),
            conjugations=[ConjugationType(form) for form in args.conjugation],
        )
        print("⏳ Generating words...")

    if not app.start_game(config):
        print(f"❌ {app.loading_error}")
        return 1

    play_round(app, timers)

    if app.state == AppState.RESULT:
        print()
        print("🎉 Excellent! All pairs matched!")
        if config.is_review_mode:
            print("   Words you got right were removed from the review list.")
        elif app.last_mistakes:
            print(f"   {len(app.last_mistakes)} pair(s) added to the review list:")
            for pair in app.last_mistakes:
                print(f"   • {to_bracket_text(pair.jp.segments)} = {pair.cn}")
        return 0

    print("👋 Back to the menu. Nothing was saved.")
    return 0


def run_export(args, progress_store: ProgressStore) -> int:
    pairs = progress_store.get_review_list()
    if not pairs:
        print("📝 The review list is empty; nothing to export.")
        return 1

    exporter = ReviewDeckExporter()
    if exporter.export(pairs, args.output, deck_name=args.deck_name):
        print(f"📦 Exported {len(pairs)} card(s) to {args.output}")
        return 0

    for error in error_handler.get_error_summary()['errors']:
        print(f"❌ {error['message']}")
        if error['suggested_actions']:
            print(f"   Suggestion: {error['suggested_actions'][0]}")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, default_level=logging.WARNING)

    if args.store is None:
        Config.ensure_directories()
    store_path = args.store or Config.STORE_FILE
    progress_store = ProgressStore(JsonFileStore(store_path))

    if args.command == "progress":
        show_progress(progress_store)
        return 0

    if args.command == "export-review":
        return run_export(args, progress_store)

    return run_play(args, progress_store)


if __name__ == "__main__":
    sys.exit(main())
