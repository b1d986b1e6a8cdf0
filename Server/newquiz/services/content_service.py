"""
Content Service

Local source of target words and trivia questions. Fetches are exposed as
status streams (loading, then success or error) so callers handle content the
same way whether it is immediate or slow.
"""

import hashlib
import random
from typing import Dict, Iterator, List, Optional, Sequence

from ..config.game_settings import QUESTIONS, WORD_LISTS
from ..models.multi_choice import MultiChoiceQuestion, QuestionDifficulty
from ..models.resource import Resource
from ..models.wordle import WordleQuizType


class ContentService:
    """Word and question bank backed by the JSON files in config/data."""

    def __init__(self,
                 word_lists: Optional[Dict[str, Sequence[str]]] = None,
                 questions: Optional[Sequence[dict]] = None,
                 rng: Optional[random.Random] = None):
        source = word_lists if word_lists is not None else WORD_LISTS
        self.word_lists: Dict[str, List[str]] = {key.upper(): [w.upper() for w in words] for key, words in source.items()}
        self.questions: List[MultiChoiceQuestion] = [
            MultiChoiceQuestion.from_dict(q) for q in (questions if questions is not None else QUESTIONS)
        ]
        self.rng = rng or random.Random()

    def _words_for(self, quiz_type: WordleQuizType) -> List[str]:
        words = self.word_lists.get(quiz_type.value)
        if not words:
            raise LookupError(f"No words available for {quiz_type.value}")
        return words

    def random_word(self, quiz_type: WordleQuizType, rng: Optional[random.Random] = None) -> str:
        return (rng or self.rng).choice(self._words_for(quiz_type))

    def daily_word(self, quiz_type: WordleQuizType, day: str) -> str:
        """Deterministic word for a day key such as '2026-10-19'."""
        words = self._words_for(quiz_type)
        digest = hashlib.sha256(f"{quiz_type.value}:{day}".encode('utf-8')).hexdigest()
        return words[int(digest, 16) % len(words)]

    def fetch_target_word(self, quiz_type: WordleQuizType, day: Optional[str] = None) -> Iterator[Resource[str]]:
        """Yield a loading status, then the word or an error."""
        yield Resource.loading()
        try:
            word = self.daily_word(quiz_type, day) if day else self.random_word(quiz_type)
        except LookupError as e:
            yield Resource.error(str(e))
            return
        yield Resource.success(word)

    def get_questions(self) -> List[MultiChoiceQuestion]:
        return list(self.questions)

    def fetch_random_questions(self,
                               amount: int,
                               category: Optional[str] = None,
                               difficulty: Optional[str] = None) -> Iterator[Resource[List[MultiChoiceQuestion]]]:
        """Yield a loading status, then up to ``amount`` matching questions or an error."""
        yield Resource.loading()

        wanted_difficulty = QuestionDifficulty.from_value(difficulty) if difficulty else None
        pool = [
            q for q in self.questions
            if (category is None or q.category == category)
            and (wanted_difficulty is None or q.difficulty == wanted_difficulty)
        ]
        if not pool:
            yield Resource.error("No questions available for the requested category/difficulty")
            return

        self.rng.shuffle(pool)
        yield Resource.success(pool[:max(1, amount)])
