"""
Game Controller

Handles the word-guess and multi-choice game HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import get_user_id

wordle_bp = Blueprint('wordle', __name__)
multi_choice_bp = Blueprint('multi_choice', __name__)

WORDLE = 'wordle'
MULTI_CHOICE = 'multi_choice'


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _game_not_found(action, game_id):
    error_response = {
        'success': False,
        'error': 'Game not found'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 404


def _bad_request(action, error, game_id=None):
    game_logger.log_error(request, error, action, game_id)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 400


def _server_error(action, error, game_id=None):
    game_logger.log_error(request, error, action, game_id)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 500


def _new_game_response(action, game, user_id):
    state = game.snapshot()
    response_data = {
        'success': True,
        'game_id': game.game_id,
        'user_id': user_id,
        'state': state
    }
    game_logger.log_server_response(request, action, True, response_data, game.game_id, mode=game.kind)
    return jsonify(response_data)


def _get_state(kind, game_id):
    action = f'{kind}_state'
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, action, game_id, get_user_id())

        state = game_service.get_game_state(game_id, kind)
        if state is None:
            return _game_not_found(action, game_id)

        response_data = {
            'success': True,
            'state': state
        }
        game_logger.log_server_response(request, action, True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error(action, e, game_id)


def _handle_event(kind, game_id):
    action = f'{kind}_event'
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True)
        if not data or 'type' not in data:
            return _bad_request(action, ValueError('Event type is required'), game_id)

        game_logger.log_user_action(request, action, game_id, get_user_id(), event_type=data.get('type'))

        try:
            state = game_service.handle_event(game_id, data, kind)
        except (ValueError, IndexError) as e:
            return _bad_request(action, e, game_id)

        if state is None:
            return _game_not_found(action, game_id)

        response_data = {
            'success': True,
            'state': state
        }
        game_logger.log_server_response(request, action, True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error(action, e, game_id)


def _close_game(kind, game_id):
    action = f'{kind}_close'
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, action, game_id, get_user_id())

        if not game_service.close_game(game_id, kind):
            return _game_not_found(action, game_id)

        response_data = {
            'success': True,
            'message': 'Game closed'
        }
        game_logger.log_server_response(request, action, True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        return _server_error(action, e, game_id)


# Word-guess endpoints

@wordle_bp.route('/new_game', methods=['POST'])
def new_wordle_game():
    """Create a new word-guess session."""
    action = 'wordle_new_game'
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        user_id = get_user_id()

        game_logger.log_user_action(
            request, action, user_id=user_id,
            quiz_type=data.get('quiz_type'), day=data.get('day'), resumed=bool(data.get('word'))
        )

        try:
            game = game_service.create_wordle_game(
                user_id,
                quiz_type=data.get('quiz_type'),
                day=data.get('day'),
                overrides=data.get('settings'),
                initial_word=data.get('word'),
            )
        except ValueError as e:
            return _bad_request(action, e)

        return _new_game_response(action, game, user_id)

    except Exception as e:
        return _server_error(action, e)


@wordle_bp.route('/<game_id>/state', methods=['GET'])
def get_wordle_state(game_id):
    """Get current word-guess state."""
    return _get_state(WORDLE, game_id)


@wordle_bp.route('/<game_id>/event', methods=['POST'])
def wordle_event(game_id):
    """Apply a key, remove_key, verify, play_again or rewarded_row event."""
    return _handle_event(WORDLE, game_id)


@wordle_bp.route('/<game_id>', methods=['DELETE'])
def close_wordle_game(game_id):
    """Close a word-guess session and schedule its result."""
    return _close_game(WORDLE, game_id)


# Multi-choice endpoints

@multi_choice_bp.route('/new_game', methods=['POST'])
def new_multi_choice_game():
    """Create a new multi-choice quiz."""
    action = 'multi_choice_new_game'
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        user_id = get_user_id()

        game_logger.log_user_action(
            request, action, user_id=user_id,
            category=data.get('category'), difficulty=data.get('difficulty')
        )

        try:
            game = game_service.create_multi_choice_game(
                user_id,
                category=data.get('category'),
                difficulty=data.get('difficulty'),
                overrides=data.get('settings'),
            )
        except ValueError as e:
            return _bad_request(action, e)

        return _new_game_response(action, game, user_id)

    except Exception as e:
        return _server_error(action, e)


@multi_choice_bp.route('/<game_id>/state', methods=['GET'])
def get_multi_choice_state(game_id):
    """Get current quiz state."""
    return _get_state(MULTI_CHOICE, game_id)


@multi_choice_bp.route('/<game_id>/event', methods=['POST'])
def multi_choice_event(game_id):
    """Apply a select_answer or verify event."""
    return _handle_event(MULTI_CHOICE, game_id)


@multi_choice_bp.route('/<game_id>', methods=['DELETE'])
def close_multi_choice_game(game_id):
    """Close a quiz."""
    return _close_game(MULTI_CHOICE, game_id)
