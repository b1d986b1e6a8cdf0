from newquiz.models import (
    GameError, GameSettings, MazeItem, SessionStatus, WordlePayload,
)
from newquiz.services.content_service import ContentService
from newquiz.services.events import Close, KeyPressed, PlayAgain, RewardedRow, VerifyRow
from newquiz.services.wordle_game import WordleGame


def make_game(content, end_game, clock, settings=None, **kwargs):
    return WordleGame(
        game_id="g1",
        uid="u1",
        content_service=content,
        end_game_service=end_game,
        settings=settings or GameSettings(),
        clock=clock,
        **kwargs
    ).start()


def guess(game, word):
    for key in word:
        game.on_event(KeyPressed(key))
    return game.on_event(VerifyRow())


def test_resumed_word_skips_the_content_source(end_game, clock):
    empty_content = ContentService(word_lists={}, questions=[])
    game = make_game(empty_content, end_game, clock, initial_word="ALLOY")
    assert game.session.word == "ALLOY"
    assert game.error is None
    assert not game.loading


def test_missing_content_surfaces_error(end_game, clock):
    game = make_game(ContentService(word_lists={}, questions=[]), end_game, clock)
    assert game.session is None
    assert game.error == GameError.CONTENT_UNAVAILABLE
    assert game.snapshot()["error"] == "CONTENT_UNAVAILABLE"


def test_daily_word_is_deterministic(content, end_game, clock):
    first = make_game(content, end_game, clock, day="2026-10-19")
    second = make_game(content, end_game, clock, day="2026-10-19")
    assert first.session.word == second.session.word


def test_win_then_close_plays_maze_before_recording(content, end_game, store, scheduler, clock):
    store.create_profile("u1")
    store.profiles["u1"].total_xp = 50
    store.insert_maze_items([MazeItem(id=1, payload=WordlePayload("ALLOY"))])

    game = make_game(content, end_game, clock, initial_word="ALLOY", maze_item_id=1)
    session = guess(game, "ALLOY")
    assert session.status == SessionStatus.WON

    assert game.close()
    assert not game.close()

    counts = scheduler.run_pending()
    assert counts["run"] == 2
    assert [job.name for job in scheduler.history] == ["maze_item:1", "wordle_result:g1"]

    assert store.get_maze()[0].played
    profile = store.get_profile("u1")
    assert profile.total_xp == 110
    assert profile.diamonds == 10
    assert profile.wordle_words_played == 1
    assert profile.wordle_words_correct == 1
    assert store.wordle_results[0].earned_xp == 60
    assert store.wordle_results[0].rows_used == 1


def test_lost_maze_game_does_not_unlock(content, end_game, store, scheduler, clock):
    store.insert_maze_items([MazeItem(id=1, payload=WordlePayload("ALLOY"))])
    game = make_game(content, end_game, clock, settings=GameSettings(row_limit=1),
                     initial_word="ALLOY", maze_item_id=1)
    assert guess(game, "CRANE").status == SessionStatus.LOST

    game.close()
    scheduler.run_pending()
    assert not store.get_maze()[0].played
    assert store.wordle_results[0].won is False


def test_missing_profile_records_unscored_result(content, end_game, store, scheduler, clock):
    game = make_game(content, end_game, clock, initial_word="ALLOY")
    guess(game, "ALLOY")
    game.close()

    counts = scheduler.run_pending()
    assert counts["failed"] == 0
    assert store.get_profile("u1") is None
    assert store.wordle_results[0].earned_xp == 0


def test_timer_verify_after_manual_verify_is_noop(content, end_game, clock):
    game = make_game(content, end_game, clock, settings=GameSettings(row_time_limit=10),
                     initial_word="ALLOY")
    first_countdown = game.countdown
    guess(game, "CRANE")
    assert game.session.current_row_position == 1

    # The first row's timer was cancelled and a stale verify changes nothing.
    clock.advance(5)
    assert not first_countdown.poll()
    before = game.session
    game.on_event(VerifyRow(row_index=0))
    assert game.session is before


def test_row_timer_expiry_verifies_current_row(content, end_game, clock):
    game = make_game(content, end_game, clock, settings=GameSettings(row_time_limit=10),
                     initial_word="ALLOY")
    for key in "CRANE":
        game.on_event(KeyPressed(key))

    clock.advance(10)
    assert game.poll()
    assert game.session.current_row_position == 1
    assert game.countdown.remaining() == 10


def test_row_timer_restarts_when_timed_out_row_is_incomplete(content, end_game, clock):
    game = make_game(content, end_game, clock, settings=GameSettings(row_time_limit=10),
                     initial_word="ALLOY")
    for key in "CRA":
        game.on_event(KeyPressed(key))

    clock.advance(10)
    assert game.poll()
    assert game.session.current_row_position == 0
    assert game.session.error == GameError.MALFORMED_ROW
    assert game.countdown.remaining() == 10

    for key in "NE":
        game.on_event(KeyPressed(key))
    clock.advance(10)
    assert game.poll()
    assert game.session.current_row_position == 1


def test_rewarded_row_reopens_lost_game(content, end_game, clock):
    game = make_game(content, end_game, clock, settings=GameSettings(row_limit=1), initial_word="ALLOY")
    guess(game, "CRANE")
    assert game.session.status == SessionStatus.LOST

    game.on_event(RewardedRow())
    assert game.session.status == SessionStatus.PLAYING
    assert guess(game, "ALLOY").status == SessionStatus.WON


def test_play_again_closes_and_starts_fresh(content, end_game, scheduler, clock):
    game = make_game(content, end_game, clock, initial_word="ALLOY", maze_item_id=4, day="2026-10-19")
    guess(game, "ALLOY")

    game.on_event(PlayAgain())
    # Maze unlock plus result recording for the closed session.
    assert scheduler.pending_count == 2
    assert not game.closed
    assert game.session.status == SessionStatus.PLAYING
    assert game.session.maze_item_id is None
    assert game.session.day is None
    assert game.session.word in ("ALLOY", "CRANE")


def test_close_event_freezes_session(content, end_game, scheduler, clock):
    game = make_game(content, end_game, clock, initial_word="ALLOY")
    game.on_event(Close())
    assert game.closed
    assert scheduler.pending_count == 1

    before = game.session
    game.on_event(KeyPressed("A"))
    assert game.session is before
