from newquiz.websocket.handlers import broadcast_game_state_update


def last_event(client):
    received = client.get_received()
    assert received, "nothing was emitted"
    return received[-1]['name'], received[-1]['args'][0]


def test_join_game_pushes_current_state(socket_client, game_service):
    game = game_service.create_wordle_game('u1', initial_word='ALLOY')

    socket_client.emit('join_game', {'game_id': game.game_id})

    name, payload = last_event(socket_client)
    assert name == 'wordle_state'
    assert payload['success'] is True
    assert payload['state']['game_id'] == game.game_id
    assert payload['state']['session']['word'] is None


def test_join_game_errors(socket_client):
    socket_client.emit('join_game', {})
    assert last_event(socket_client) == ('error', {'error': 'Game ID is required'})

    socket_client.emit('join_game', {'game_id': 'missing'})
    assert last_event(socket_client) == ('error', {'error': 'Game not found'})


def test_wordle_event_is_broadcast_to_the_room(app, socket_client, game_service):
    game = game_service.create_wordle_game('u1', initial_word='ALLOY')
    watcher = app.socketio.test_client(app)
    watcher.emit('join_game', {'game_id': game.game_id})
    watcher.get_received()

    socket_client.emit('wordle_event', {'game_id': game.game_id, 'event': {'type': 'key', 'key': 'a'}})

    for client in (socket_client, watcher):
        name, payload = last_event(client)
        assert name == 'wordle_state'
        assert payload['success'] is True
    assert str(game.session.current_row.items[0].char) == 'A'
    watcher.disconnect()


def test_bad_events_report_errors(socket_client, game_service):
    game = game_service.create_wordle_game('u1', initial_word='ALLOY')

    socket_client.emit('wordle_event', {'game_id': game.game_id})
    assert last_event(socket_client) == ('error', {'error': 'Game ID and event required'})

    socket_client.emit('wordle_event', {'game_id': game.game_id, 'event': {'type': 'jump'}})
    name, payload = last_event(socket_client)
    assert name == 'wordle_state'
    assert payload['success'] is False

    socket_client.emit('wordle_event', {'game_id': 'missing', 'event': {'type': 'verify'}})
    assert last_event(socket_client) == ('error', {'error': 'Game not found'})


def test_events_are_scoped_to_their_mode(socket_client, game_service):
    game = game_service.create_wordle_game('u1', initial_word='ALLOY')
    socket_client.emit('multi_choice_event', {'game_id': game.game_id, 'event': {'type': 'verify'}})
    assert last_event(socket_client) == ('error', {'error': 'Game not found'})


def test_multi_choice_event_over_socket(socket_client, game_service):
    game = game_service.create_multi_choice_game('u1', overrides={'question_count': 2})
    answer = game.session.current_step.question.correct_answer

    socket_client.emit('multi_choice_event', {'game_id': game.game_id,
                                              'event': {'type': 'select_answer', 'answer': answer}})
    socket_client.emit('multi_choice_event', {'game_id': game.game_id, 'event': {'type': 'verify'}})

    name, payload = last_event(socket_client)
    assert name == 'multi_choice_state'
    assert payload['state']['session']['current_question_index'] == 1
    assert game.session.steps[0].correct


def test_timer_expiry_is_pushed_to_the_room(app, socket_client, game_service, clock):
    game = game_service.create_multi_choice_game('u1', overrides={'question_count': 2})
    socket_client.emit('join_game', {'game_id': game.game_id})
    socket_client.get_received()

    clock.advance(game.settings.question_time_limit)
    assert game_service.poll_timers() == [game.game_id]
    broadcast_game_state_update(game.game_id, app.socketio)

    name, payload = last_event(socket_client)
    assert name == 'multi_choice_state'
    assert payload['state']['session']['current_question_index'] == 1
