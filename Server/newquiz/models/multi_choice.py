"""
Multi-Choice Quiz Data Models
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

from .wordle import GameSettings, SessionStatus


NO_ANSWER = -1


class QuestionDifficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def from_value(cls, value: Optional[str]) -> Optional["QuestionDifficulty"]:
        if value is None:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty: {value!r}")


@dataclass(frozen=True)
class MultiChoiceQuestion:
    """A trivia question with one correct answer."""
    id: int
    description: str
    answers: Tuple[str, ...]
    correct_answer: int
    category: str = "general"
    difficulty: QuestionDifficulty = QuestionDifficulty.EASY

    def __post_init__(self):
        if not 0 <= self.correct_answer < len(self.answers):
            raise ValueError(f"Question {self.id}: correct answer index out of range")

    def is_correct(self, selected_answer: int) -> bool:
        return selected_answer == self.correct_answer

    def to_dict(self, reveal_answer: bool = False) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "answers": list(self.answers),
            "correct_answer": self.correct_answer if reveal_answer else None,
            "category": self.category,
            "difficulty": self.difficulty.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MultiChoiceQuestion":
        return cls(
            id=int(data["id"]),
            description=data["description"],
            answers=tuple(data["answers"]),
            correct_answer=int(data["correct_answer"]),
            category=data.get("category", "general"),
            difficulty=QuestionDifficulty.from_value(data.get("difficulty")) or QuestionDifficulty.EASY,
        )


class StepState(Enum):
    NOT_CURRENT = "NOT_CURRENT"
    CURRENT = "CURRENT"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class MultiChoiceQuestionStep:
    """Progress of one question within a quiz."""
    question: MultiChoiceQuestion
    state: StepState = StepState.NOT_CURRENT
    correct: bool = False
    selected_answer: int = NO_ANSWER
    question_time: float = 0.0

    def as_current(self) -> "MultiChoiceQuestionStep":
        return replace(self, state=StepState.CURRENT)

    def as_completed(self, selected_answer: int, question_time: float) -> "MultiChoiceQuestionStep":
        return replace(
            self,
            state=StepState.COMPLETED,
            correct=self.question.is_correct(selected_answer),
            selected_answer=selected_answer,
            question_time=question_time,
        )

    @property
    def is_completed(self) -> bool:
        return self.state == StepState.COMPLETED

    def to_dict(self) -> dict:
        completed = self.is_completed
        return {
            "state": self.state.value,
            "question": self.question.to_dict(reveal_answer=completed),
            "correct": self.correct if completed else None,
            "selected_answer": self.selected_answer if completed else None,
            "question_time": self.question_time if completed else None,
        }


@dataclass(frozen=True)
class MultiChoiceSession:
    """Immutable snapshot of a multi-choice quiz."""
    steps: Tuple[MultiChoiceQuestionStep, ...]
    current_question_index: int = -1
    selected_answer: int = NO_ANSWER
    remaining_time: Optional[float] = None
    status: SessionStatus = SessionStatus.PLAYING
    maze_item_id: Optional[int] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    settings: GameSettings = field(default_factory=GameSettings)

    @property
    def current_step(self) -> Optional[MultiChoiceQuestionStep]:
        if 0 <= self.current_question_index < len(self.steps):
            step = self.steps[self.current_question_index]
            if step.state == StepState.CURRENT:
                return step
        return None

    @property
    def completed_steps(self) -> List[MultiChoiceQuestionStep]:
        return [step for step in self.steps if step.is_completed]

    @property
    def is_game_over(self) -> bool:
        return bool(self.steps) and all(step.is_completed for step in self.steps)

    @property
    def correct_count(self) -> int:
        return sum(1 for step in self.steps if step.is_completed and step.correct)

    @property
    def average_answer_time(self) -> float:
        completed = self.completed_steps
        if not completed:
            return 0.0
        return sum(step.question_time for step in completed) / len(completed)

    def next_index(self) -> int:
        """Index of the first step not yet completed, or -1."""
        for index, step in enumerate(self.steps):
            if not step.is_completed:
                return index
        return -1

    def copy(self, **changes) -> "MultiChoiceSession":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "steps": [step.to_dict() for step in self.steps],
            "current_question_index": self.current_question_index,
            "selected_answer": self.selected_answer if self.selected_answer != NO_ANSWER else None,
            "remaining_time": self.remaining_time,
            "status": self.status.value,
            "game_over": self.is_game_over,
            "correct_count": self.correct_count,
            "question_count": len(self.steps),
            "maze_item_id": self.maze_item_id,
            "category": self.category,
            "difficulty": self.difficulty,
            "settings": self.settings.to_dict(),
        }
