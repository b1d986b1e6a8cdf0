"""
Quiz Game Server - Main Entry Point

This is the main entry point for the quiz game server.
It creates the application and starts the Flask-SocketIO server together
with the background worker for countdowns and end-of-game jobs.
"""

import os
import threading
import time
from newquiz import create_app
from newquiz.config import config
from newquiz.services.game_service import get_game_service
from newquiz.utils.game_logger import game_logger
from newquiz.websocket.handlers import broadcast_game_state_update


def game_worker(app, socketio, interval):
    """
    Background worker that fires expired countdowns, pushes the new state to
    the game rooms, reaps finished or idle games and drains the end-of-game
    job queue.
    """
    print("Game worker started")
    while True:
        try:
            with app.app_context():
                game_service = get_game_service()
                if game_service:
                    for game_id in game_service.poll_timers():
                        game_logger.log_game_event(game_id, 'countdown_expired')
                        broadcast_game_state_update(game_id, socketio)

                    reap_result = game_service.reap_games()
                    if reap_result["reaped_count"] > 0:
                        game_logger.logger.info(f"Game worker: reaped {reap_result['reaped_count']} game(s)")

                    counts = game_service.run_jobs()
                    if counts["run"] or counts["dropped"]:
                        game_logger.logger.info(
                            f"Game worker: ran {counts['run']} job(s), "
                            f"{counts['failed']} failed, {counts['dropped']} dropped"
                        )

        except Exception as e:
            game_logger.logger.error(f"Error in game worker: {e}")

        time.sleep(interval)


def main():
    """Main function to create the app and start the server."""
    config_class = config[os.getenv('FLASK_ENV', 'default')]
    try:
        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")
        print(f"✓ Store: {'MongoDB' if config_class.MONGO_URI else 'in-memory'}")

        if config_class.START_WORKER:
            worker_thread = threading.Thread(
                target=game_worker,
                args=(app, socketio, config_class.WORKER_INTERVAL_SECONDS),
                daemon=True
            )
            worker_thread.start()
            print(f"✓ Game worker started - polling every {config_class.WORKER_INTERVAL_SECONDS}s")

        game_logger.logger.info("Quiz Server Starting")

        print(f"\nStarting Quiz Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Quiz Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
