"""
WebSocket Event Handlers

Real-time event intake for running games and state pushes to game rooms.
"""

from flask_socketio import emit, join_room, leave_room
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger

STATE_EVENTS = {
    'wordle': 'wordle_state',
    'multi_choice': 'multi_choice_state',
}


def game_room(game_id):
    return f"game_{game_id}"


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        pass

    @socketio.on('join_game')
    def handle_join_game(data):
        """Subscribe to state pushes for a game (timer expiries included)."""
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        game_id = (data or {}).get('game_id')
        if not game_id:
            emit('error', {'error': 'Game ID is required'})
            return

        game = game_service.get_game(game_id)
        if game is None:
            emit('error', {'error': 'Game not found'})
            return

        join_room(game_room(game_id))
        emit(STATE_EVENTS[game.kind], {'success': True, 'state': game_service.get_game_state(game_id)})

    @socketio.on('leave_game')
    def handle_leave_game(data):
        game_id = (data or {}).get('game_id')
        if game_id:
            leave_room(game_room(game_id))

    @socketio.on('wordle_event')
    def handle_wordle_event(data):
        _handle_game_event(socketio, 'wordle', data)

    @socketio.on('multi_choice_event')
    def handle_multi_choice_event(data):
        _handle_game_event(socketio, 'multi_choice', data)


def _handle_game_event(socketio, kind, data):
    """Apply an event sent as {'game_id': ..., 'event': {...}} and push the new state."""
    game_service = get_game_service()
    if not game_service:
        emit('error', {'error': 'Game service unavailable'})
        return

    data = data or {}
    game_id = data.get('game_id')
    event = data.get('event')
    if not game_id or not isinstance(event, dict):
        emit('error', {'error': 'Game ID and event required'})
        return

    try:
        state = game_service.handle_event(game_id, event, kind)
    except (ValueError, IndexError) as e:
        game_logger.log_error(None, e, f'{kind}_event', game_id)
        emit(STATE_EVENTS[kind], {'success': False, 'error': str(e)})
        return
    except Exception as e:
        game_logger.log_error(None, e, f'{kind}_event', game_id)
        emit('error', {'error': str(e)})
        return

    if state is None:
        emit('error', {'error': 'Game not found'})
        return

    join_room(game_room(game_id))
    socketio.emit(STATE_EVENTS[kind], {'success': True, 'state': state}, room=game_room(game_id))


def broadcast_game_state_update(game_id, socketio):
    """Broadcast game state to everyone in the game's room."""
    try:
        game_service = get_game_service()
        if not game_service:
            return

        game = game_service.get_game(game_id)
        if game is None:
            return

        socketio.emit(STATE_EVENTS[game.kind], {
            'success': True,
            'state': game_service.get_game_state(game_id)
        }, room=game_room(game_id))

    except Exception as e:
        game_logger.logger.error(f"Error broadcasting game state for {game_id}: {e}")
