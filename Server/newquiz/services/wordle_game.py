"""
Wordle Game

Orchestrates one word-guess game: word acquisition, event intake, the
optional per-row countdown and the end-of-game hand-off.
"""

import time
from typing import Callable, Optional

from ..models.resource import ResourceStatus
from ..models.wordle import GameError, GameSettings, SessionStatus, WordleQuizType, WordleSession
from ..utils.game_logger import game_logger
from .content_service import ContentService
from .countdown import Countdown
from .end_game_service import EndGameService
from .events import Close, KeyPressed, KeyRemoved, PlayAgain, RewardedRow, VerifyRow, WordleEvent
from .wordle_rules import add_key, add_rewarded_rows, new_wordle_session, remove_key, verify_row


class WordleGame:
    """
    Stateful holder of a WordleSession snapshot.

    Events are applied one at a time by the caller (the game service holds a
    lock). Each event replaces the snapshot with a new immutable one.
    """

    kind = "wordle"

    def __init__(self,
                 game_id: str,
                 uid: str,
                 content_service: ContentService,
                 end_game_service: EndGameService,
                 settings: GameSettings,
                 quiz_type: WordleQuizType = WordleQuizType.TEXT,
                 day: Optional[str] = None,
                 maze_item_id: Optional[int] = None,
                 initial_word: Optional[str] = None,
                 rewarded_rows: int = 1,
                 clock: Callable[[], float] = time.monotonic):
        self.game_id = game_id
        self.uid = uid
        self.content_service = content_service
        self.end_game_service = end_game_service
        self.settings = settings
        self.quiz_type = quiz_type
        self.day = day
        self.maze_item_id = maze_item_id
        self.initial_word = initial_word
        self.rewarded_rows = rewarded_rows
        self.clock = clock

        self.session: Optional[WordleSession] = None
        self.loading = False
        self.error: Optional[GameError] = None
        self.closed = False
        self.countdown: Optional[Countdown] = None

    # Lifecycle

    def start(self) -> "WordleGame":
        self._generate_game()
        return self

    def _generate_game(self) -> None:
        """Use the resumed word when there is one; otherwise fetch a word."""
        self.session = None
        self.error = None

        if self.initial_word is not None:
            self._generate_rows(self.initial_word)
            return

        for resource in self.content_service.fetch_target_word(self.quiz_type, self.day):
            if resource.status == ResourceStatus.LOADING:
                self.loading = True
            elif resource.status == ResourceStatus.SUCCESS:
                self._generate_rows(resource.data)
            else:
                self.loading = False
                self.error = GameError.CONTENT_UNAVAILABLE
                game_logger.log_game_event(self.game_id, 'content_unavailable', self.uid, message=resource.message)

    def _generate_rows(self, word: str) -> None:
        self.session = new_wordle_session(
            word=word,
            settings=self.settings,
            quiz_type=self.quiz_type,
            day=self.day,
            maze_item_id=self.maze_item_id,
        )
        self.loading = False
        self.closed = False
        game_logger.log_game_event(
            self.game_id, 'game_started', self.uid,
            mode=self.kind, word_length=len(self.session.word), row_limit=self.session.row_limit,
            quiz_type=self.quiz_type.value, day=self.day, maze_item_id=self.maze_item_id
        )
        self._start_row_countdown()

    def close(self) -> bool:
        """
        End the session: cancel the countdown and hand the result to the
        end-of-game jobs. Returns False if it was already closed.
        """
        if self.closed:
            return False
        self.closed = True
        self._cancel_countdown()
        if self.session is not None:
            self.end_game_service.end_wordle_game(self.game_id, self.uid, self.session)
            game_logger.log_game_event(
                self.game_id, 'game_closed', self.uid,
                status=self.session.status.value, rows_used=self.session.rows_used
            )
        return True

    # Events

    def on_event(self, event: WordleEvent) -> WordleSession:
        if isinstance(event, PlayAgain):
            self._play_again()
        elif isinstance(event, Close):
            self.close()
        elif self.session is None:
            raise ValueError("Game has no word yet")
        elif self.closed:
            return self.session
        elif isinstance(event, KeyPressed):
            self.session = add_key(self.session, event.key)
        elif isinstance(event, KeyRemoved):
            self.session = remove_key(self.session, event.index)
        elif isinstance(event, VerifyRow):
            self._verify_row(event.row_index)
        elif isinstance(event, RewardedRow):
            self._add_rewarded_row()
        else:
            raise ValueError(f"Unsupported wordle event: {event!r}")
        return self.session

    def _verify_row(self, row_index: Optional[int]) -> None:
        before = self.session
        after = verify_row(before, row_index=row_index)
        self.session = after

        if after.current_row_position == before.current_row_position:
            if after.error is not None and after.error != before.error:
                game_logger.log_game_event(self.game_id, 'row_rejected', self.uid, error=after.error.name)
            if self.countdown is not None and self.countdown.finished:
                # Timed-out row that could not be verified gets a fresh period
                self._start_row_countdown()
            return

        self._cancel_countdown()
        game_logger.log_game_event(
            self.game_id, 'row_verified', self.uid,
            row=before.current_row_position, status=after.status.value
        )
        if after.status == SessionStatus.WON:
            game_logger.log_game_event(self.game_id, 'game_won', self.uid, rows_used=after.rows_used)
        elif after.status == SessionStatus.LOST:
            game_logger.log_game_event(self.game_id, 'game_lost', self.uid, rows_used=after.rows_used)
        else:
            self._start_row_countdown()

    def _add_rewarded_row(self) -> None:
        if self.closed:
            return
        before = self.session
        self.session = add_rewarded_rows(before, self.rewarded_rows)
        if self.session is not before:
            game_logger.log_game_event(
                self.game_id, 'rewarded_row_added', self.uid, row_limit=self.session.row_limit
            )
            self._start_row_countdown()

    def _play_again(self) -> None:
        """Close the current session and start a fresh random word."""
        self.close()
        self.initial_word = None
        self.day = None
        self.maze_item_id = None
        self._generate_game()

    # Timer

    def _start_row_countdown(self) -> None:
        self._cancel_countdown()
        if not self.settings.row_time_limit or self.session is None:
            return
        row_index = self.session.current_row_position
        self.countdown = Countdown(
            self.settings.row_time_limit,
            lambda: self.on_event(VerifyRow(row_index=row_index)),
            clock=self.clock,
        ).start()

    def _cancel_countdown(self) -> None:
        if self.countdown is not None:
            self.countdown.cancel()
            self.countdown = None

    def poll(self, now: Optional[float] = None) -> bool:
        """Fire the countdown if it expired. Returns True when state may have changed."""
        countdown = self.countdown
        if countdown is None:
            return False
        return countdown.poll(now)

    # Snapshot

    @property
    def is_finished(self) -> bool:
        return self.session is not None and self.session.is_game_over

    def snapshot(self) -> dict:
        remaining = self.countdown.remaining() if self.countdown else None
        return {
            'game_id': self.game_id,
            'mode': self.kind,
            'loading': self.loading,
            'closed': self.closed,
            'error': self.error.name if self.error else None,
            'error_message': self.error.value if self.error else None,
            'remaining_time': remaining,
            'session': self.session.to_dict() if self.session else None,
        }
