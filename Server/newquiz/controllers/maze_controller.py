"""
Maze Controller

Handles the maze track HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..services.game_service import get_game_service
from ..services.maze_service import first_playable_index, is_maze_completed
from ..utils.game_logger import game_logger
from ..utils.helpers import get_user_id

maze_bp = Blueprint('maze', __name__)


def _maze_response(track):
    return {
        'items': [item.to_dict() for item in track],
        'next_playable_index': first_playable_index(track),
        'completed': is_maze_completed(track),
    }


@maze_bp.route('/maze', methods=['GET'])
def get_maze():
    """Get the maze track and the next playable item."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'get_maze', user_id=get_user_id())

        response_data = {
            'success': True,
            'maze': _maze_response(game_service.get_maze())
        }
        game_logger.log_server_response(request, 'get_maze', True, {'success': True})
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_maze')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_maze', False, error_response)
        return jsonify(error_response), 500


@maze_bp.route('/maze/generate', methods=['POST'])
def generate_maze():
    """Append a batch of generated items to the maze."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        data = request.get_json(silent=True) or {}
        count = data.get('count')
        seed = data.get('seed')

        game_logger.log_user_action(request, 'generate_maze', user_id=get_user_id(), count=count, seed=seed)

        try:
            track = game_service.generate_maze(
                int(count) if count is not None else None,
                int(seed) if seed is not None else None
            )
        except (TypeError, ValueError) as e:
            game_logger.log_error(request, e, 'generate_maze')
            error_response = {
                'success': False,
                'error': str(e)
            }
            game_logger.log_server_response(request, 'generate_maze', False, error_response)
            return jsonify(error_response), 400

        response_data = {
            'success': True,
            'maze': _maze_response(track)
        }
        game_logger.log_server_response(request, 'generate_maze', True, {'success': True}, total_items=len(track))
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'generate_maze')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'generate_maze', False, error_response)
        return jsonify(error_response), 500


@maze_bp.route('/maze/<int:index>/play', methods=['POST'])
def play_maze_item(index):
    """Start the game for a playable maze item."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        data = request.get_json(silent=True) or {}
        user_id = get_user_id()

        game_logger.log_user_action(request, 'play_maze_item', user_id=user_id, index=index)

        try:
            game = game_service.play_maze_item(user_id, index, data.get('settings'))
        except ValueError as e:
            game_logger.log_error(request, e, 'play_maze_item')
            error_response = {
                'success': False,
                'error': str(e)
            }
            game_logger.log_server_response(request, 'play_maze_item', False, error_response)
            return jsonify(error_response), 400

        response_data = {
            'success': True,
            'game_id': game.game_id,
            'mode': game.kind,
            'state': game.snapshot()
        }
        game_logger.log_server_response(request, 'play_maze_item', True, response_data, game.game_id, index=index)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'play_maze_item')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'play_maze_item', False, error_response)
        return jsonify(error_response), 500
