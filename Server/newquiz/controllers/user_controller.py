"""
User Controller

Handles user profile and health check endpoints.
"""

from flask import Blueprint, request, jsonify
from ..services.game_service import get_game_service
from ..services.xp_service import level
from ..utils.game_logger import game_logger
from ..utils.helpers import get_user_id

user_bp = Blueprint('user', __name__)


def _profile_response(profile, xp_config):
    data = profile.to_dict()
    data['level'] = level(profile.total_xp, xp_config)
    return data


@user_bp.route('/user', methods=['POST'])
def create_user():
    """Create the caller's profile (no-op if it already exists)."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        user_id = get_user_id()
        game_logger.log_user_action(request, 'create_user', user_id=user_id)

        profile = game_service.create_profile(user_id)
        response_data = {
            'success': True,
            'user': _profile_response(profile, game_service.xp_config)
        }
        game_logger.log_server_response(request, 'create_user', True, response_data)
        return jsonify(response_data), 201

    except Exception as e:
        game_logger.log_error(request, e, 'create_user')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'create_user', False, error_response)
        return jsonify(error_response), 500


@user_bp.route('/user', methods=['GET'])
def get_user():
    """Get the caller's profile with their level."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        user_id = get_user_id()
        game_logger.log_user_action(request, 'get_user', user_id=user_id)

        profile = game_service.get_profile(user_id)
        if profile is None:
            error_response = {
                'success': False,
                'error': 'User not found'
            }
            game_logger.log_server_response(request, 'get_user', False, error_response)
            return jsonify(error_response), 404

        response_data = {
            'success': True,
            'user': _profile_response(profile, game_service.xp_config)
        }
        game_logger.log_server_response(request, 'get_user', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_user')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_user', False, error_response)
        return jsonify(error_response), 500


@user_bp.route('/health', methods=['GET'])
def health():
    """Health check with live session and job queue counts."""
    game_service = get_game_service()
    if not game_service:
        return jsonify({'success': False, 'status': 'unavailable'}), 503
    return jsonify({
        'success': True,
        'status': 'ok',
        'active_games': len(game_service.games),
        'pending_jobs': game_service.scheduler.pending_count,
    })
