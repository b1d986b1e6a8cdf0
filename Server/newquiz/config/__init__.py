"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and content banks (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    WORD_LISTS, QUESTIONS, MAX_ROWS, QUIZ_COUNTDOWN_SECONDS, REWARDED_ROWS,
    validate_word_list_integrity, get_word_statistics,
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'WORD_LISTS', 'QUESTIONS', 'MAX_ROWS', 'QUIZ_COUNTDOWN_SECONDS', 'REWARDED_ROWS',
    'validate_word_list_integrity', 'get_word_statistics',
]
