"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .wordle import (
    GameError, GameSettings, ItemState, SessionStatus, WordleChar, WordleItem,
    WordleQuizType, WordleRow, WordleSession,
)
from .multi_choice import (
    MultiChoiceQuestion, MultiChoiceQuestionStep, MultiChoiceSession, QuestionDifficulty, StepState,
)
from .maze import MazeItem, MazeTrack, MultiChoicePayload, WordlePayload, empty_maze
from .user import MultiChoiceGameResult, UserProfile, WordleGameResult
from .resource import Resource, ResourceStatus

__all__ = [
    'GameError', 'GameSettings', 'ItemState', 'SessionStatus', 'WordleChar', 'WordleItem',
    'WordleQuizType', 'WordleRow', 'WordleSession',
    'MultiChoiceQuestion', 'MultiChoiceQuestionStep', 'MultiChoiceSession', 'QuestionDifficulty', 'StepState',
    'MazeItem', 'MazeTrack', 'MultiChoicePayload', 'WordlePayload', 'empty_maze',
    'MultiChoiceGameResult', 'UserProfile', 'WordleGameResult',
    'Resource', 'ResourceStatus',
]
