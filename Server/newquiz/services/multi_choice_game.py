"""
Multi-Choice Game

Orchestrates a multi-choice quiz: question acquisition, a countdown per
question, answer verification and the end-of-game hand-off.
"""

import time
from typing import Callable, List, Optional, Sequence

from ..models.multi_choice import (
    NO_ANSWER, MultiChoiceQuestion, MultiChoiceQuestionStep, MultiChoiceSession,
)
from ..models.resource import ResourceStatus
from ..models.wordle import GameError, GameSettings, SessionStatus
from ..utils.game_logger import game_logger
from .content_service import ContentService
from .countdown import Countdown
from .end_game_service import EndGameService
from .events import Close, MultiChoiceEvent, SelectAnswer, VerifyAnswer


class MultiChoiceGame:
    """Stateful holder of a MultiChoiceSession snapshot."""

    kind = "multi_choice"

    def __init__(self,
                 game_id: str,
                 uid: str,
                 content_service: ContentService,
                 end_game_service: EndGameService,
                 settings: GameSettings,
                 initial_questions: Optional[Sequence[MultiChoiceQuestion]] = None,
                 category: Optional[str] = None,
                 difficulty: Optional[str] = None,
                 maze_item_id: Optional[int] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.game_id = game_id
        self.uid = uid
        self.content_service = content_service
        self.end_game_service = end_game_service
        self.settings = settings
        self.initial_questions = list(initial_questions or [])
        self.category = category
        self.difficulty = difficulty
        self.maze_item_id = maze_item_id
        self.clock = clock

        self.session: Optional[MultiChoiceSession] = None
        self.loading = False
        self.error: Optional[GameError] = None
        self.closed = False
        self.ended = False
        self.countdown: Optional[Countdown] = None
        self.question_started_at: Optional[float] = None

    # Lifecycle

    def start(self) -> "MultiChoiceGame":
        if self.initial_questions:
            self._create_question_steps(self.initial_questions)
        else:
            self._load_questions()
        return self

    def _load_questions(self) -> None:
        resources = self.content_service.fetch_random_questions(
            self.settings.question_count, self.category, self.difficulty
        )
        for resource in resources:
            if resource.status == ResourceStatus.LOADING:
                self.loading = True
            elif resource.status == ResourceStatus.SUCCESS:
                self._create_question_steps(resource.data)
            else:
                self.loading = False
                self.error = GameError.CONTENT_UNAVAILABLE
                game_logger.log_game_event(self.game_id, 'content_unavailable', self.uid, message=resource.message)

    def _create_question_steps(self, questions: List[MultiChoiceQuestion]) -> None:
        self.session = MultiChoiceSession(
            steps=tuple(MultiChoiceQuestionStep(question) for question in questions),
            maze_item_id=self.maze_item_id,
            category=self.category,
            difficulty=self.difficulty,
            settings=self.settings,
        )
        self.loading = False
        game_logger.log_game_event(
            self.game_id, 'game_started', self.uid,
            mode=self.kind, questions_size=len(questions), category=self.category,
            difficulty=self.difficulty, maze_item_id=self.maze_item_id
        )
        self._next_question()

    def _next_question(self) -> None:
        session = self.session
        if session.is_game_over:
            self.session = session.copy(current_question_index=-1, status=SessionStatus.FINISHED)
            self._end_game()
            return

        next_index = session.next_index()
        steps = list(session.steps)
        steps[next_index] = steps[next_index].as_current()
        self.session = session.copy(steps=tuple(steps), current_question_index=next_index)
        self._start_countdown(next_index)

    def _end_game(self) -> None:
        if self.ended:
            return
        self.ended = True
        self._cancel_countdown()
        self.end_game_service.end_multi_choice_game(self.game_id, self.uid, self.session)
        game_logger.log_game_event(
            self.game_id, 'game_finished', self.uid,
            correct_count=self.session.correct_count, question_count=len(self.session.steps)
        )

    def close(self) -> bool:
        """Stop the quiz. An unfinished quiz is abandoned without a result."""
        if self.closed:
            return False
        self.closed = True
        self._cancel_countdown()
        if not self.ended:
            game_logger.log_game_event(self.game_id, 'game_abandoned', self.uid)
        return True

    # Events

    def on_event(self, event: MultiChoiceEvent) -> MultiChoiceSession:
        if isinstance(event, Close):
            self.close()
            return self.session
        if self.session is None:
            raise ValueError("Game has no questions yet")
        if isinstance(event, SelectAnswer):
            self._select_answer(event.answer)
        elif isinstance(event, VerifyAnswer):
            self._verify_question(event.question_index)
        else:
            raise ValueError(f"Unsupported multi-choice event: {event!r}")
        return self.session

    def _select_answer(self, answer: int) -> None:
        step = self.session.current_step
        if step is None or self.closed:
            return
        if not 0 <= answer < len(step.question.answers):
            raise ValueError(f"Answer index {answer} out of range")
        self.session = self.session.copy(selected_answer=answer)

    def _verify_question(self, question_index: Optional[int]) -> None:
        """Complete the current question. Verifying an already completed question is a no-op."""
        if self.closed:
            return
        session = self.session
        if question_index is not None and question_index != session.current_question_index:
            return
        step = session.current_step
        if step is None:
            return

        self._cancel_countdown()
        elapsed = self.clock() - self.question_started_at if self.question_started_at is not None else 0.0
        question_time = min(max(elapsed, 0.0), self.settings.question_time_limit)

        completed = step.as_completed(session.selected_answer, question_time)
        steps = list(session.steps)
        steps[session.current_question_index] = completed
        self.session = session.copy(steps=tuple(steps), selected_answer=NO_ANSWER)

        game_logger.log_game_event(
            self.game_id, 'question_verified', self.uid,
            question_index=session.current_question_index, correct=completed.correct,
            question_time=round(question_time, 3)
        )
        self._next_question()

    # Timer

    def _start_countdown(self, question_index: int) -> None:
        self._cancel_countdown()
        self.question_started_at = self.clock()
        self.countdown = Countdown(
            self.settings.question_time_limit,
            lambda: self.on_event(VerifyAnswer(question_index=question_index)),
            clock=self.clock,
        ).start()

    def _cancel_countdown(self) -> None:
        if self.countdown is not None:
            self.countdown.cancel()
            self.countdown = None

    def poll(self, now: Optional[float] = None) -> bool:
        countdown = self.countdown
        if countdown is None:
            return False
        return countdown.poll(now)

    # Snapshot

    @property
    def is_finished(self) -> bool:
        return self.ended

    def snapshot(self) -> dict:
        session = self.session
        if session is not None and self.countdown is not None:
            session = session.copy(remaining_time=self.countdown.remaining())
        return {
            'game_id': self.game_id,
            'mode': self.kind,
            'loading': self.loading,
            'closed': self.closed,
            'error': self.error.name if self.error else None,
            'error_message': self.error.value if self.error else None,
            'session': session.to_dict() if session else None,
        }
