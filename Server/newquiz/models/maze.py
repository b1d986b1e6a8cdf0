"""
Maze Data Models

A maze is an append-only track of quiz items unlocked one after another.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple, Union

from .multi_choice import MultiChoiceQuestion, QuestionDifficulty
from .wordle import WordleQuizType


@dataclass(frozen=True)
class WordlePayload:
    word: str
    quiz_type: WordleQuizType = WordleQuizType.TEXT

    def to_dict(self, reveal_answer: bool = False) -> dict:
        return {
            "type": "wordle",
            "word": self.word if reveal_answer else None,
            "word_length": len(self.word),
            "quiz_type": self.quiz_type.value,
        }


@dataclass(frozen=True)
class MultiChoicePayload:
    question: MultiChoiceQuestion

    def to_dict(self, reveal_answer: bool = False) -> dict:
        return {"type": "multi_choice", "question": self.question.to_dict(reveal_answer=reveal_answer)}


MazePayload = Union[WordlePayload, MultiChoicePayload]


@dataclass(frozen=True)
class MazeItem:
    """One maze step. ``played`` only ever goes from False to True."""
    id: int
    payload: MazePayload
    difficulty: QuestionDifficulty = QuestionDifficulty.EASY
    played: bool = False

    @property
    def is_wordle(self) -> bool:
        return isinstance(self.payload, WordlePayload)

    def as_played(self) -> "MazeItem":
        if self.played:
            return self
        return replace(self, played=True)

    def to_dict(self, reveal_answer: bool = False) -> dict:
        """Public view hides the word and the correct answer; storage passes reveal_answer=True."""
        return {
            "id": self.id,
            "difficulty": self.difficulty.value,
            "played": self.played,
            "payload": self.payload.to_dict(reveal_answer),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MazeItem":
        payload_data = data["payload"]
        if payload_data["type"] == "wordle":
            payload = WordlePayload(
                word=payload_data["word"],
                quiz_type=WordleQuizType.from_value(payload_data.get("quiz_type")),
            )
        elif payload_data["type"] == "multi_choice":
            payload = MultiChoicePayload(MultiChoiceQuestion.from_dict(payload_data["question"]))
        else:
            raise ValueError(f"Unknown maze payload type: {payload_data['type']!r}")
        return cls(
            id=int(data["id"]),
            payload=payload,
            difficulty=QuestionDifficulty.from_value(data.get("difficulty")) or QuestionDifficulty.EASY,
            played=bool(data.get("played", False)),
        )


@dataclass(frozen=True)
class MazeTrack:
    """Ordered, cycle-free sequence of maze items."""
    items: Tuple[MazeItem, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> MazeItem:
        return self.items[index]

    def __iter__(self):
        return iter(self.items)

    def index_of(self, item_id: int) -> Optional[int]:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return index
        return None

    @property
    def max_id(self) -> int:
        return max((item.id for item in self.items), default=0)


def empty_maze() -> MazeTrack:
    return MazeTrack(items=())
