"""
Services Package

Contains all business logic and service classes.
"""

from .content_service import ContentService
from .end_game_service import EndGameService
from .game_service import GameService, build_settings, get_game_service, initialize_game_service
from .job_scheduler import JobScheduler
from .store import InMemoryStore, create_store
from .xp_service import ProfileNotFound, XpConfig, load_xp_config

__all__ = [
    'ContentService',
    'EndGameService',
    'GameService', 'build_settings', 'get_game_service', 'initialize_game_service',
    'JobScheduler',
    'InMemoryStore', 'create_store',
    'ProfileNotFound', 'XpConfig', 'load_xp_config',
]
