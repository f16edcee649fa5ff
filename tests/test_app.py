"""
Tests for the application flow around the match engine.
"""

import pytest

from furigana_match.app import AppState, LOAD_ERROR_MESSAGE, MatchGameApp
from furigana_match.config import Config
from furigana_match.errors import ErrorCategory
from furigana_match.models import Column, GameConfig, JLPTLevel, make_pair
from furigana_match.sources.services import WordSource


class StaticWordSource(WordSource):
    """Word source returning a fixed list, or raising a fixed error."""

    def __init__(self, pairs=None, error=None):
        self.pairs = pairs or []
        self.error = error
        self.requests = []

    def fetch_word_pairs(self, config):
        self.requests.append(config)
        if self.error is not None:
            raise self.error
        return list(self.pairs)


def _card_id(engine, pair_id, column):
    return next(c.card_id for c in engine.state.cards
                if c.pair_id == pair_id and c.column == column)


def _solve(app, pair_ids, wrong_first=None):
    """Match every pair, optionally starting with one mismatch."""
    engine = app.engine
    if wrong_first:
        first, second = wrong_first
        engine.select_card(_card_id(engine, first, Column.JP))
        engine.select_card(_card_id(engine, second, Column.CN))
        app.scheduler.run_until_idle(sleep=_advance(app))
    for pair_id in pair_ids:
        engine.select_card(_card_id(engine, pair_id, Column.JP))
        engine.select_card(_card_id(engine, pair_id, Column.CN))
    app.scheduler.run_until_idle(sleep=_advance(app))


def _advance(app):
    def sleep(seconds):
        app.scheduler.clock.advance(seconds * 1000)
    return sleep


@pytest.fixture
def make_app(progress_store, timers, errors):
    def factory(source):
        return MatchGameApp(source, progress_store, timers, errors=errors)
    return factory


class TestStartGame:
    """Unit tests for loading rounds."""

    def test_start_moves_to_playing(self, make_app, make_pairs):
        source = StaticWordSource(make_pairs(3))
        app = make_app(source)
        seen = []
        app.add_state_listener(seen.append)

        assert app.start_game(GameConfig(level=JLPTLevel.N5))
        assert seen == [AppState.LOADING, AppState.PLAYING]
        assert app.engine is not None
        assert app.engine.state.total_pairs == 3
        assert source.requests[0].level == JLPTLevel.N5

    def test_empty_word_list_is_load_error(self, make_app, errors):
        app = make_app(StaticWordSource([]))

        assert not app.start_game(GameConfig())
        assert app.state == AppState.ERROR
        assert app.loading_error == LOAD_ERROR_MESSAGE
        assert app.engine is None
        assert errors.errors[0].error_code == "LOAD_001"

    def test_source_exception_is_load_error(self, make_app, errors):
        app = make_app(StaticWordSource(error=RuntimeError("429 quota exhausted")))

        assert not app.start_game(GameConfig())
        assert app.state == AppState.ERROR
        assert errors.errors[0].category == ErrorCategory.CONTENT_LOAD
        assert errors.errors[0].error_code == "LOAD_002"

    def test_duplicate_pair_ids_are_load_error(self, make_app, errors):
        cat = make_pair("1", [("猫", "ねこ")], "猫")
        dog = make_pair("1", [("犬", "いぬ")], "狗")
        app = make_app(StaticWordSource([cat, dog]))

        assert not app.start_game(GameConfig())
        assert app.state == AppState.ERROR
        assert app.loading_error == LOAD_ERROR_MESSAGE
        assert app.engine is None
        assert errors.errors[0].error_code == "LOAD_003"

    def test_duplicate_ids_in_review_data(self, make_app, make_pairs):
        cat = make_pair("1", [("猫", "ねこ")], "猫")
        dog = make_pair("1", [("犬", "いぬ")], "狗")
        app = make_app(StaticWordSource(make_pairs(2)))

        assert not app.start_game(GameConfig(is_review_mode=True, review_data=[cat, dog]))
        assert app.state == AppState.ERROR

    def test_review_mode_uses_review_data(self, make_app, make_pairs):
        source = StaticWordSource(make_pairs(5))
        app = make_app(source)
        review = make_pairs(2)

        assert app.start_game(GameConfig(is_review_mode=True, review_data=review))
        assert source.requests == []
        assert app.current_data == review

    def test_empty_review_round_is_load_error(self, make_app, make_pairs):
        app = make_app(StaticWordSource(make_pairs(5)))
        assert not app.start_game(GameConfig(is_review_mode=True))
        assert app.state == AppState.ERROR

    def test_restart_abandons_previous_engine(self, make_app, make_pairs):
        app = make_app(StaticWordSource(make_pairs(2)))
        app.start_game(GameConfig())
        old = app.engine

        app.start_game(GameConfig())

        assert not old.is_active
        assert app.engine is not old


class TestFinish:
    """Finishing a round updates progress and the review list."""

    def test_clean_round_saves_progress(self, make_app, make_pairs, progress_store):
        app = make_app(StaticWordSource(make_pairs(2)))
        app.start_game(GameConfig(level=JLPTLevel.N4))

        _solve(app, ["p1", "p2"])

        assert app.state == AppState.RESULT
        assert app.last_mistakes == []
        assert progress_store.get_progress() == {"N4": 1}
        assert progress_store.get_review_list() == []

    def test_mistakes_go_to_review_list(self, make_app, make_pairs, progress_store):
        pairs = make_pairs(3)
        app = make_app(StaticWordSource(pairs))
        app.start_game(GameConfig(level=JLPTLevel.N5))

        _solve(app, ["p1", "p2", "p3"], wrong_first=("p2", "p3"))

        assert app.last_mistakes == [pairs[1]]
        assert progress_store.get_review_list() == [pairs[1]]
        assert progress_store.get_progress() == {"N5": 1}

    def test_conjugation_round_skips_level_progress(self, make_app, make_pairs, progress_store):
        app = make_app(StaticWordSource(make_pairs(1)))
        app.start_game(GameConfig())
        _solve(app, ["p1"])
        assert progress_store.get_progress() == {}

    def test_review_round_removes_solved_items(self, make_app, make_pairs, progress_store):
        pairs = make_pairs(3)
        progress_store.add_to_review_list(pairs)
        app = make_app(StaticWordSource())

        app.start_game(app.review_config())
        _solve(app, ["p1", "p2", "p3"], wrong_first=("p3", "p1"))

        assert app.state == AppState.RESULT
        assert progress_store.get_review_list() == [pairs[2]]
        assert progress_store.get_progress() == {}

    def test_back_persists_nothing(self, make_app, make_pairs, progress_store):
        app = make_app(StaticWordSource(make_pairs(1)))
        app.start_game(GameConfig(level=JLPTLevel.N5))
        engine = app.engine
        engine.select_card(_card_id(engine, "p1", Column.JP))
        engine.select_card(_card_id(engine, "p1", Column.CN))

        app.back()
        app.scheduler.run_until_idle(sleep=_advance(app))

        assert app.state == AppState.MENU
        assert progress_store.get_progress() == {}


class TestMenu:

    def test_review_config_takes_first_batch(self, make_app, make_pairs, progress_store):
        progress_store.add_to_review_list(make_pairs(10))
        app = make_app(StaticWordSource())

        config = app.review_config()

        assert config.is_review_mode
        assert len(config.review_data) == Config.REVIEW_BATCH_SIZE
        assert config.review_data[0].id == "p1"

    def test_menu_summary(self, make_app, make_pairs, progress_store):
        progress_store.save_progress("N3")
        progress_store.add_to_review_list(make_pairs(2))
        app = make_app(StaticWordSource())

        assert app.menu_summary() == {'progress': {"N3": 1}, 'review_count': 2}

    def test_reset_clears_round(self, make_app, make_pairs):
        app = make_app(StaticWordSource(make_pairs(1)))
        app.start_game(GameConfig())
        app.reset()

        assert app.state == AppState.MENU
        assert app.current_data == []
        assert app.current_config is None
