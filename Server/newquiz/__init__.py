"""
Quiz Game Server Application Package

Word-guess, multi-choice and maze games served over HTTP and WebSocket, with
XP and level rewards recorded after each game.
"""

import time

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config, clock=time.monotonic):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        clock: Monotonic time source for game countdowns

    Returns:
        Flask application instance and its SocketIO wrapper
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    from .utils.game_logger import game_logger
    game_logger.configure(app.config['LOG_DIR'], app.config['LOG_LEVEL'])

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Initialize services
    from .services.content_service import ContentService
    from .services.game_service import initialize_game_service
    from .services.job_scheduler import JobScheduler
    from .services.store import create_store
    from .services.xp_service import load_xp_config

    initialize_game_service(
        store=create_store(app.config),
        scheduler=JobScheduler(),
        content_service=ContentService(),
        xp_config=load_xp_config(app.config.get('XP_CONFIG_PATH')),
        app_config=app.config,
        clock=clock,
    )

    # Register blueprints
    from .controllers.game_controller import wordle_bp, multi_choice_bp
    from .controllers.maze_controller import maze_bp
    from .controllers.user_controller import user_bp

    app.register_blueprint(wordle_bp, url_prefix='/api/wordle')
    app.register_blueprint(multi_choice_bp, url_prefix='/api/multi_choice')
    app.register_blueprint(maze_bp, url_prefix='/api')
    app.register_blueprint(user_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
