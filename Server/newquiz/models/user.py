"""
User Data Models

Contains user progression state and game result records.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class UserProfile:
    """User progression data model."""
    uid: str
    total_xp: int = 0
    diamonds: int = 0
    wordle_words_played: int = 0
    wordle_words_correct: int = 0
    questions_played: int = 0
    correct_answers: int = 0
    last_quiz_times: List[float] = field(default_factory=list)
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "uid": self.uid,
            "total_xp": self.total_xp,
            "diamonds": self.diamonds,
            "wordle_words_played": self.wordle_words_played,
            "wordle_words_correct": self.wordle_words_correct,
            "questions_played": self.questions_played,
            "correct_answers": self.correct_answers,
            "last_quiz_times": list(self.last_quiz_times),
        }


@dataclass
class WordleGameResult:
    word: str
    word_length: int
    rows_used: int
    max_rows: int
    earned_xp: int
    category_id: str
    played_at: datetime
    won: bool = False
    day: Optional[str] = None
    uid: Optional[str] = None


@dataclass
class MultiChoiceGameResult:
    correct_answers: int
    question_count: int
    average_answer_time: float
    earned_xp: int
    played_at: datetime
    uid: Optional[str] = None
