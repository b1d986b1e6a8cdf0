import pytest

from newquiz.models import (
    GameError, GameSettings, MazeItem, MultiChoicePayload, MultiChoiceQuestion, SessionStatus, StepState,
)
from newquiz.services.content_service import ContentService
from newquiz.services.events import SelectAnswer, VerifyAnswer
from newquiz.services.multi_choice_game import MultiChoiceGame


def make_game(content, end_game, clock, settings=None, **kwargs):
    return MultiChoiceGame(
        game_id="q1",
        uid="u1",
        content_service=content,
        end_game_service=end_game,
        settings=settings or GameSettings(question_count=3),
        clock=clock,
        **kwargs
    ).start()


def answer_current(game, correct=True):
    step = game.session.current_step
    answer = step.question.correct_answer
    if not correct:
        answer = (answer + 1) % len(step.question.answers)
    game.on_event(SelectAnswer(answer))
    return game.on_event(VerifyAnswer())


def test_start_makes_first_question_current(content, end_game, clock):
    game = make_game(content, end_game, clock)
    session = game.session
    assert len(session.steps) == 3
    assert session.current_question_index == 0
    assert session.steps[0].state == StepState.CURRENT
    assert game.countdown.remaining() == 30


def test_no_matching_questions_surfaces_error(content, end_game, clock):
    game = make_game(content, end_game, clock, category="history")
    assert game.session is None
    assert game.error == GameError.CONTENT_UNAVAILABLE


def test_select_answer_out_of_range(content, end_game, clock):
    game = make_game(content, end_game, clock)
    with pytest.raises(ValueError):
        game.on_event(SelectAnswer(9))


def test_verify_records_time_and_moves_on(content, end_game, clock):
    game = make_game(content, end_game, clock)
    clock.advance(4)
    session = answer_current(game)

    first = session.steps[0]
    assert first.state == StepState.COMPLETED
    assert first.correct
    assert first.question_time == 4
    assert session.current_question_index == 1
    assert session.selected_answer == -1


def test_timer_expiry_completes_question_unanswered(content, end_game, clock):
    game = make_game(content, end_game, clock)
    clock.advance(31)
    assert game.poll()

    first = game.session.steps[0]
    assert first.state == StepState.COMPLETED
    assert not first.correct
    assert first.question_time == 30
    assert game.session.current_question_index == 1


def test_stale_verify_is_noop(content, end_game, clock):
    game = make_game(content, end_game, clock)
    answer_current(game)
    before = game.session
    game.on_event(VerifyAnswer(question_index=0))
    assert game.session is before


def test_finishing_records_result(content, end_game, store, scheduler, clock):
    store.create_profile("u1")
    game = make_game(content, end_game, clock)
    for _ in range(3):
        clock.advance(3)
        answer_current(game)

    assert game.session.status == SessionStatus.FINISHED
    assert game.is_finished
    assert game.countdown is None

    scheduler.run_pending()
    profile = store.get_profile("u1")
    # (10 + round(10 * 0.9)) per correct answer plus the perfect bonus.
    assert profile.total_xp == 3 * 19 + 20
    assert profile.questions_played == 3
    assert profile.correct_answers == 3
    assert profile.last_quiz_times == [3.0]
    assert store.multi_choice_results[0].correct_answers == 3


def test_speed_bonus_uses_the_quiz_countdown(content, end_game, store, scheduler, clock):
    store.create_profile("u1")
    game = make_game(content, end_game, clock, settings=GameSettings(question_count=3, question_time_limit=60))
    for _ in range(3):
        clock.advance(30)
        answer_current(game)

    scheduler.run_pending()
    # (10 + round(10 * 0.5)) per correct answer plus the perfect bonus.
    assert store.get_profile("u1").total_xp == 3 * 15 + 20


def test_all_correct_maze_question_unlocks_item(content, end_game, store, scheduler, clock):
    question = content.get_questions()[0]
    store.insert_maze_items([MazeItem(id=1, payload=MultiChoicePayload(question))])
    game = make_game(content, end_game, clock, initial_questions=[question], maze_item_id=1)
    answer_current(game)

    scheduler.run_pending()
    assert store.get_maze()[0].played


def test_wrong_maze_answer_keeps_item_locked(content, end_game, store, scheduler, clock):
    question = MultiChoiceQuestion(id=9, description="Pick B", answers=("A", "B"), correct_answer=1)

    store.insert_maze_items([MazeItem(id=1, payload=MultiChoicePayload(question))])
    game = make_game(content, end_game, clock, initial_questions=[question], maze_item_id=1)
    answer_current(game, correct=False)

    scheduler.run_pending()
    assert not store.get_maze()[0].played
    assert store.multi_choice_results[0].correct_answers == 0


def test_close_before_finish_schedules_nothing(content, end_game, scheduler, clock):
    game = make_game(content, end_game, clock)
    answer_current(game)
    assert game.close()
    assert game.countdown is None
    assert scheduler.pending_count == 0

    before = game.session
    game.on_event(VerifyAnswer())
    assert game.session is before


def test_resumed_questions_skip_content(end_game, clock):
    question = MultiChoiceQuestion(id=9, description="Pick B", answers=("A", "B"), correct_answer=1)
    game = make_game(ContentService(word_lists={}, questions=[]), end_game, clock, initial_questions=[question])
    assert game.session.current_step.question == question
