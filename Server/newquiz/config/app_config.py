"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


def _env_bool(name: str, default: str = 'False') -> bool:
    return os.getenv(name, default).lower() == 'true'


def _env_optional_float(name: str):
    value = os.getenv(name)
    return float(value) if value else None


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = _env_bool('DEBUG')
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))
    WORKER_INTERVAL_SECONDS = float(os.getenv('WORKER_INTERVAL_SECONDS', 0.25))

    # Database Settings (unset MONGO_URI keeps everything in memory)
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'newquiz')

    # User Settings
    LOCAL_USER_ID = os.getenv('LOCAL_USER_ID', 'local')

    # Game Settings
    MAX_ROWS = int(os.getenv('MAX_ROWS', 6))
    HARD_MODE = _env_bool('HARD_MODE')
    COLOR_BLIND = _env_bool('COLOR_BLIND')
    LETTER_HINTS = _env_bool('LETTER_HINTS')
    ROW_TIME_LIMIT_SECONDS = _env_optional_float('ROW_TIME_LIMIT_SECONDS')
    QUIZ_COUNTDOWN_SECONDS = float(os.getenv('QUIZ_COUNTDOWN_SECONDS', 30))
    MULTI_CHOICE_QUESTION_COUNT = int(os.getenv('MULTI_CHOICE_QUESTION_COUNT', 5))
    REWARDED_ROWS = int(os.getenv('REWARDED_ROWS', 1))
    TRANSLATION_ENABLED = _env_bool('TRANSLATION_ENABLED')
    MAZE_GENERATE_COUNT = int(os.getenv('MAZE_GENERATE_COUNT', 10))

    # Session reaping (finished games are closed so their results get recorded)
    FINISHED_GAME_TTL_SECONDS = float(os.getenv('FINISHED_GAME_TTL_SECONDS', 120))
    IDLE_GAME_TTL_SECONDS = float(os.getenv('IDLE_GAME_TTL_SECONDS', 1800))

    # XP Settings (JSON file with coefficient overrides)
    XP_CONFIG_PATH = os.getenv('XP_CONFIG_PATH')

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')

    # Background worker (timers and end-of-game jobs)
    START_WORKER = True


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    MONGO_URI = None
    START_WORKER = False
    ROW_TIME_LIMIT_SECONDS = None
    HARD_MODE = False


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
