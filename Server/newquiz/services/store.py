"""
Game Store

Persistence and reward sinks used by end-of-game jobs, plus the saved maze
track. ``InMemoryStore`` keeps everything in process; ``MongoStore`` (see
mongo_store.py) is used when MONGO_URI is configured.
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol, Sequence

from ..config.game_settings import MAX_LAST_QUIZ_TIMES
from ..models.maze import MazeItem, MazeTrack, empty_maze
from ..models.user import MultiChoiceGameResult, UserProfile, WordleGameResult
from .maze_service import append_items, mark_played_by_id
from .xp_service import XpAward, XpConfig, apply_xp


class GameStore(Protocol):
    """Operations the game services need from a store."""

    def get_profile(self, uid: str) -> Optional[UserProfile]: ...

    def create_profile(self, uid: str, initial_diamonds: int = 0) -> UserProfile: ...

    def apply_xp(self, uid: str, delta: int, config: XpConfig) -> XpAward: ...

    def adjust_diamonds(self, uid: str, delta: int) -> int: ...

    def update_wordle_stats(self, uid: str, correct: bool) -> None: ...

    def update_multi_choice_stats(self, uid: str, questions: int, correct: int, average_time: float) -> None: ...

    def record_wordle_result(self, result: WordleGameResult) -> None: ...

    def record_multi_choice_result(self, result: MultiChoiceGameResult) -> None: ...

    def get_maze(self) -> MazeTrack: ...

    def insert_maze_items(self, items: Sequence[MazeItem]) -> MazeTrack: ...

    def mark_maze_item_played(self, item_id: int) -> MazeTrack: ...


class InMemoryStore:
    """Thread-safe store keeping profiles, results and the maze in memory."""

    def __init__(self):
        self._lock = threading.RLock()
        self.profiles: Dict[str, UserProfile] = {}
        self.wordle_results: List[WordleGameResult] = []
        self.multi_choice_results: List[MultiChoiceGameResult] = []
        self.maze: MazeTrack = empty_maze()

    # Users

    def get_profile(self, uid: str) -> Optional[UserProfile]:
        with self._lock:
            profile = self.profiles.get(uid)
            return replace(profile, last_quiz_times=list(profile.last_quiz_times)) if profile else None

    def create_profile(self, uid: str, initial_diamonds: int = 0) -> UserProfile:
        with self._lock:
            if uid not in self.profiles:
                self.profiles[uid] = UserProfile(uid=uid, diamonds=initial_diamonds, created_at=datetime.now(timezone.utc))
            return self.get_profile(uid)

    def apply_xp(self, uid: str, delta: int, config: XpConfig) -> XpAward:
        with self._lock:
            award = apply_xp(self.profiles.get(uid), delta, config)
            self.profiles[uid].total_xp = award.new_total_xp
            return award

    def adjust_diamonds(self, uid: str, delta: int) -> int:
        with self._lock:
            profile = self.profiles.get(uid)
            if profile is None:
                raise KeyError(f"User {uid} not found")
            profile.diamonds += delta
            return profile.diamonds

    def update_wordle_stats(self, uid: str, correct: bool) -> None:
        with self._lock:
            profile = self.profiles.get(uid)
            if profile is None:
                return
            profile.wordle_words_played += 1
            profile.wordle_words_correct += int(correct)

    def update_multi_choice_stats(self, uid: str, questions: int, correct: int, average_time: float) -> None:
        with self._lock:
            profile = self.profiles.get(uid)
            if profile is None:
                return
            profile.questions_played += questions
            profile.correct_answers += correct
            profile.last_quiz_times = (profile.last_quiz_times + [average_time])[-MAX_LAST_QUIZ_TIMES:]

    # Results

    def record_wordle_result(self, result: WordleGameResult) -> None:
        with self._lock:
            self.wordle_results.append(result)

    def record_multi_choice_result(self, result: MultiChoiceGameResult) -> None:
        with self._lock:
            self.multi_choice_results.append(result)

    # Maze

    def get_maze(self) -> MazeTrack:
        with self._lock:
            return self.maze

    def insert_maze_items(self, items: Sequence[MazeItem]) -> MazeTrack:
        with self._lock:
            self.maze = append_items(self.maze, items)
            return self.maze

    def mark_maze_item_played(self, item_id: int) -> MazeTrack:
        with self._lock:
            self.maze = mark_played_by_id(self.maze, item_id)
            return self.maze


def create_store(app_config) -> GameStore:
    """Pick the store for an app config: MongoDB when MONGO_URI is set."""
    mongo_uri = app_config.get('MONGO_URI')
    if mongo_uri:
        from .mongo_store import MongoStore
        return MongoStore(mongo_uri, app_config.get('MONGO_DB_NAME', 'newquiz'))
    return InMemoryStore()
