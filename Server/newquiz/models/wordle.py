"""
Wordle Data Models

Contains the guess-cell vocabulary (characters, items, rows), the quiz
variants and the immutable session snapshot.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Optional, Tuple


MATH_OPERATORS: FrozenSet[str] = frozenset("+-*/=")


class WordleQuizType(Enum):
    """Word-guess variants, each with its own alphabet and word-form rule."""
    TEXT = "TEXT"
    NUMBER = "NUMBER"
    MATH_FORMULA = "MATH_FORMULA"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "WordleQuizType":
        if not value:
            return cls.TEXT
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown wordle quiz type: {value!r}")


@dataclass(frozen=True)
class WordleChar:
    """A single validated, upper-cased guess character."""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or len(self.value) != 1:
            raise ValueError(f"Wordle char must be a single character, got {self.value!r}")
        normalized = self.value.upper()
        if not (normalized.isalpha() or normalized.isdigit() or normalized in MATH_OPERATORS):
            raise ValueError(f"Invalid wordle char: {self.value!r}")
        object.__setattr__(self, "value", normalized)

    @classmethod
    def for_quiz_type(cls, key: str, quiz_type: WordleQuizType) -> "WordleChar":
        """Build a char, rejecting keys outside the variant's alphabet."""
        char = cls(key)
        if quiz_type == WordleQuizType.TEXT and not char.value.isalpha():
            raise ValueError(f"Key {key!r} is not a letter")
        if quiz_type == WordleQuizType.NUMBER and not char.value.isdigit():
            raise ValueError(f"Key {key!r} is not a digit")
        if quiz_type == WordleQuizType.MATH_FORMULA and char.value.isalpha():
            raise ValueError(f"Key {key!r} is not a digit or operator")
        return char

    def __str__(self) -> str:
        return self.value


class ItemState(Enum):
    """Closed set of guess-cell states."""
    EMPTY = "EMPTY"
    PENDING = "PENDING"
    PRESENT = "PRESENT"
    CORRECT = "CORRECT"
    NONE = "NONE"


VERIFIED_STATES = frozenset({ItemState.PRESENT, ItemState.CORRECT, ItemState.NONE})
HINT_STATES = frozenset({ItemState.PRESENT, ItemState.CORRECT})


@dataclass(frozen=True)
class WordleItem:
    """One guess cell: a state plus the char it holds (none for EMPTY)."""
    state: ItemState
    char: Optional[WordleChar] = None

    def __post_init__(self):
        if self.state == ItemState.EMPTY and self.char is not None:
            raise ValueError("Empty items cannot hold a char")
        if self.state != ItemState.EMPTY and self.char is None:
            raise ValueError(f"{self.state.value} items must hold a char")

    @classmethod
    def empty(cls) -> "WordleItem":
        return cls(ItemState.EMPTY)

    @classmethod
    def pending(cls, char: WordleChar) -> "WordleItem":
        return cls(ItemState.PENDING, char)

    @classmethod
    def present(cls, char: WordleChar) -> "WordleItem":
        return cls(ItemState.PRESENT, char)

    @classmethod
    def correct(cls, char: WordleChar) -> "WordleItem":
        return cls(ItemState.CORRECT, char)

    @classmethod
    def none(cls, char: WordleChar) -> "WordleItem":
        return cls(ItemState.NONE, char)

    @property
    def is_verified(self) -> bool:
        return self.state in VERIFIED_STATES

    @property
    def letter(self) -> str:
        return self.char.value if self.char else ""

    def to_dict(self) -> dict:
        return {"state": self.state.value, "char": self.letter or None}


@dataclass(frozen=True)
class WordleRow:
    """Ordered, fixed-length sequence of guess cells."""
    items: Tuple[WordleItem, ...]

    @classmethod
    def empty(cls, size: int) -> "WordleRow":
        if size <= 0:
            raise ValueError("Row size must be positive")
        return cls(tuple(WordleItem.empty() for _ in range(size)))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    @property
    def is_completed(self) -> bool:
        """True when no cell is empty."""
        return all(item.state != ItemState.EMPTY for item in self.items)

    @property
    def is_verified(self) -> bool:
        return all(item.is_verified for item in self.items)

    @property
    def is_correct(self) -> bool:
        return all(item.state == ItemState.CORRECT for item in self.items)

    @property
    def as_text(self) -> str:
        return "".join(item.letter for item in self.items)

    def with_item(self, index: int, item: WordleItem) -> "WordleRow":
        if not 0 <= index < len(self.items):
            raise IndexError(f"Row index {index} out of range")
        items = list(self.items)
        items[index] = item
        return WordleRow(tuple(items))

    def to_list(self) -> list:
        return [item.to_dict() for item in self.items]


class SessionStatus(Enum):
    """Lifecycle of a game session."""
    LOADING = "LOADING"
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"
    FINISHED = "FINISHED"


class GameError(Enum):
    """Recoverable errors surfaced on a snapshot; the transition is blocked."""
    MALFORMED_ROW = "Row is not complete"
    INVALID_WORD_FORM = "Word form is not valid, formulas must balance"
    MISSING_REQUIRED_HINTS = "You need to use all hints from last row!"
    PROFILE_NOT_FOUND = "User profile not found, result recorded without XP"
    CONTENT_UNAVAILABLE = "Could not load game content, try again"


@dataclass(frozen=True)
class GameSettings:
    """Settings snapshot captured at session start."""
    hard_mode: bool = False
    color_blind: bool = False
    letter_hints: bool = False
    row_limit: int = 6
    row_time_limit: Optional[float] = None
    question_count: int = 5
    question_time_limit: float = 30.0
    translation_enabled: bool = False

    def to_dict(self) -> dict:
        return {
            "hard_mode": self.hard_mode,
            "color_blind": self.color_blind,
            "letter_hints": self.letter_hints,
            "row_limit": self.row_limit,
            "row_time_limit": self.row_time_limit,
            "question_count": self.question_count,
            "question_time_limit": self.question_time_limit,
            "translation_enabled": self.translation_enabled,
        }


@dataclass(frozen=True)
class WordleSession:
    """Immutable snapshot of one word-guess session."""
    word: str
    rows: Tuple[WordleRow, ...]
    row_limit: int
    quiz_type: WordleQuizType = WordleQuizType.TEXT
    current_row_position: int = 0
    keys_disabled: FrozenSet[str] = frozenset()
    day: Optional[str] = None
    maze_item_id: Optional[int] = None
    settings: GameSettings = field(default_factory=GameSettings)
    status: SessionStatus = SessionStatus.PLAYING
    error: Optional[GameError] = None

    @property
    def current_row(self) -> Optional[WordleRow]:
        if self.status != SessionStatus.PLAYING:
            return None
        if self.current_row_position >= len(self.rows):
            return None
        return self.rows[self.current_row_position]

    @property
    def current_row_completed(self) -> bool:
        row = self.current_row
        return row is not None and row.is_completed

    @property
    def is_game_over(self) -> bool:
        return self.status in (SessionStatus.WON, SessionStatus.LOST)

    @property
    def is_last_row_correct(self) -> bool:
        verified = [row for row in self.rows if row.is_verified]
        return bool(verified) and verified[-1].is_correct

    @property
    def rows_used(self) -> int:
        return sum(1 for row in self.rows if row.is_verified)

    def copy(self, **changes) -> "WordleSession":
        return replace(self, **changes)

    def to_dict(self, reveal_word: bool = False) -> dict:
        """Public snapshot; the word is only revealed once the game is over."""
        return {
            "word_length": len(self.word),
            "word": self.word if (reveal_word or self.is_game_over) else None,
            "rows": [row.to_list() for row in self.rows],
            "row_limit": self.row_limit,
            "current_row_position": self.current_row_position,
            "keys_disabled": sorted(self.keys_disabled),
            "quiz_type": self.quiz_type.value,
            "day": self.day,
            "maze_item_id": self.maze_item_id,
            "settings": self.settings.to_dict(),
            "status": self.status.value,
            "game_over": self.is_game_over,
            "won": self.status == SessionStatus.WON,
            "error": self.error.name if self.error else None,
            "error_message": self.error.value if self.error else None,
        }
