"""
End Game Service

Turns finished sessions into background jobs: maze unlock first (when the
session belongs to a maze item and was solved), then XP award and result
recording.
"""

from datetime import datetime, timezone
from typing import Optional

from ..models.multi_choice import MultiChoiceSession
from ..models.user import MultiChoiceGameResult, WordleGameResult
from ..models.wordle import GameError, WordleSession
from ..utils.game_logger import game_logger
from .job_scheduler import Job, JobScheduler
from .store import GameStore
from .xp_service import (
    MultiChoicePerformance, ProfileNotFound, WordlePerformance, XpConfig,
    generate_multi_choice_xp, generate_wordle_xp,
)


class EndGameService:
    """
    Schedules and runs end-of-game work.

    The store is the only writer of profile, result and maze data; the XP
    engine only hands back decisions.
    """

    def __init__(self, store: GameStore, scheduler: JobScheduler, xp_config: XpConfig):
        self.store = store
        self.scheduler = scheduler
        self.xp_config = xp_config

    def end_wordle_game(self, game_id: str, uid: str, session: WordleSession) -> Job:
        """
        Enqueue the jobs for a closed word-guess session.

        Returns:
            The result-recording job (chained after the maze job if any)
        """
        won = session.is_last_row_correct
        maze_job = None
        if session.maze_item_id is not None and won:
            maze_job = self._enqueue_maze_job(game_id, uid, session.maze_item_id)

        return self.scheduler.enqueue(
            lambda: self.record_wordle_game(game_id, uid, session),
            name=f"wordle_result:{game_id}",
            after=maze_job,
        )

    def end_multi_choice_game(self, game_id: str, uid: str, session: MultiChoiceSession) -> Job:
        """Enqueue the jobs for a finished multi-choice quiz."""
        all_correct = bool(session.steps) and session.correct_count == len(session.steps)
        maze_job = None
        if session.maze_item_id is not None and all_correct:
            maze_job = self._enqueue_maze_job(game_id, uid, session.maze_item_id)

        return self.scheduler.enqueue(
            lambda: self.record_multi_choice_game(game_id, uid, session),
            name=f"multi_choice_result:{game_id}",
            after=maze_job,
        )

    def _enqueue_maze_job(self, game_id: str, uid: str, maze_item_id: int) -> Job:
        def play_maze_item():
            self.store.mark_maze_item_played(maze_item_id)
            game_logger.log_game_event(game_id, 'maze_item_played', uid, maze_item_id=maze_item_id)

        return self.scheduler.enqueue(play_maze_item, name=f"maze_item:{maze_item_id}")

    # Job bodies

    def award_xp(self, game_id: str, uid: str, xp: int) -> Optional[int]:
        """
        Apply XP and any level-up diamonds.

        Returns:
            XP applied, or None when the user has no profile
        """
        try:
            award = self.store.apply_xp(uid, xp, self.xp_config)
        except ProfileNotFound:
            game_logger.log_game_event(game_id, 'profile_not_found', uid, error=GameError.PROFILE_NOT_FOUND.name)
            return None

        game_logger.log_game_event(game_id, 'xp_awarded', uid, **award.to_dict())
        if award.leveled_up:
            diamonds = self.store.adjust_diamonds(uid, award.diamonds_reward)
            game_logger.log_game_event(
                game_id, 'level_up', uid,
                new_level=award.new_level, diamonds_reward=award.diamonds_reward, diamonds=diamonds
            )
        return award.earned_xp

    def record_wordle_game(self, game_id: str, uid: str, session: WordleSession) -> WordleGameResult:
        won = session.is_last_row_correct
        xp = generate_wordle_xp(WordlePerformance(rows_used=session.rows_used, solved=won), self.xp_config)
        earned = self.award_xp(game_id, uid, xp)
        if earned is not None:
            self.store.update_wordle_stats(uid, won)

        result = WordleGameResult(
            word=session.word,
            word_length=len(session.word),
            rows_used=session.rows_used,
            max_rows=session.row_limit,
            earned_xp=earned or 0,
            category_id=session.quiz_type.value,
            played_at=datetime.now(timezone.utc),
            won=won,
            day=session.day,
            uid=uid,
        )
        self.store.record_wordle_result(result)
        game_logger.log_game_event(
            game_id, 'wordle_result_recorded', uid,
            rows_used=result.rows_used, max_rows=result.max_rows, won=won, earned_xp=result.earned_xp
        )
        return result

    def record_multi_choice_game(self, game_id: str, uid: str, session: MultiChoiceSession) -> MultiChoiceGameResult:
        sample = MultiChoicePerformance(
            correct_count=session.correct_count,
            question_count=len(session.steps),
            average_answer_time=session.average_answer_time,
            question_time_limit=session.settings.question_time_limit,
        )
        xp = generate_multi_choice_xp(sample, self.xp_config)
        earned = self.award_xp(game_id, uid, xp)
        if earned is not None:
            self.store.update_multi_choice_stats(
                uid, sample.question_count, sample.correct_count, sample.average_answer_time
            )

        result = MultiChoiceGameResult(
            correct_answers=sample.correct_count,
            question_count=sample.question_count,
            average_answer_time=sample.average_answer_time,
            earned_xp=earned or 0,
            played_at=datetime.now(timezone.utc),
            uid=uid,
        )
        self.store.record_multi_choice_result(result)
        game_logger.log_game_event(
            game_id, 'multi_choice_result_recorded', uid,
            correct_answers=result.correct_answers, question_count=result.question_count,
            earned_xp=result.earned_xp
        )
        return result
