import pytest

from newquiz.services.game_service import build_settings


def win_wordle(game_service, game_id, word='ALLOY'):
    for key in word:
        game_service.handle_event(game_id, {'type': 'key', 'key': key})
    return game_service.handle_event(game_id, {'type': 'verify'})


def test_build_settings_applies_overrides(app):
    settings = build_settings(app.config, {'row_limit': '4', 'hard_mode': 'true'})
    assert settings.row_limit == 4
    assert settings.hard_mode


@pytest.mark.parametrize('overrides', [
    {'row_limit': 0},
    {'question_time_limit': -1},
    {'question_count': 'x'},
])
def test_build_settings_rejects_bad_overrides(app, overrides):
    with pytest.raises(ValueError):
        build_settings(app.config, overrides)


def test_won_game_left_open_is_reaped_and_scored(game_service, clock):
    game_service.create_profile('u1')
    game = game_service.create_wordle_game('u1', initial_word='ALLOY')
    assert win_wordle(game_service, game.game_id)['session']['status'] == 'WON'

    assert game_service.reap_games()['reaped_count'] == 0

    clock.advance(game_service.config['FINISHED_GAME_TTL_SECONDS'])
    result = game_service.reap_games()
    assert result['reaped_count'] == 1
    assert result['reaped_games'][0]['reason'] == 'finished'
    assert game_service.get_game(game.game_id) is None
    assert game.closed

    game_service.run_jobs()
    profile = game_service.get_profile('u1')
    assert profile.total_xp == 60
    assert profile.wordle_words_correct == 1


def test_idle_quiz_is_abandoned(game_service, clock):
    game = game_service.create_multi_choice_game('u1', overrides={'question_count': 2})

    clock.advance(game_service.config['IDLE_GAME_TTL_SECONDS'])
    result = game_service.reap_games()

    assert result['reaped_games'][0]['reason'] == 'idle'
    assert game.closed
    assert game.countdown is None
    assert game_service.games == {}
    assert game_service.scheduler.pending_count == 0


def test_activity_keeps_a_game_alive(game_service, clock):
    idle_ttl = game_service.config['IDLE_GAME_TTL_SECONDS']
    game = game_service.create_wordle_game('u1', initial_word='ALLOY')

    clock.advance(idle_ttl - 1)
    game_service.handle_event(game.game_id, {'type': 'key', 'key': 'A'})
    clock.advance(2)

    assert game_service.reap_games()['reaped_count'] == 0
    assert game_service.get_game(game.game_id) is game


def test_closed_game_is_dropped_on_next_reap(game_service):
    game = game_service.create_multi_choice_game('u1', overrides={'question_count': 2})
    game_service.handle_event(game.game_id, {'type': 'close'})
    assert game_service.get_game(game.game_id) is game

    result = game_service.reap_games()
    assert result['reaped_games'][0]['reason'] == 'closed'
    assert game_service.get_game(game.game_id) is None


def test_reaped_wordle_records_its_result_once(game_service, clock):
    game = game_service.create_wordle_game('u1', initial_word='ALLOY')
    game_service.handle_event(game.game_id, {'type': 'close'})
    assert game_service.scheduler.pending_count == 1

    game_service.reap_games()
    assert game_service.scheduler.pending_count == 1
