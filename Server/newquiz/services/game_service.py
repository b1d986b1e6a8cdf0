"""
Game Service

Registry of live game sessions (word-guess and multi-choice) plus the maze
and profile operations the HTTP layer exposes.
"""

import threading
import time
import uuid
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..models.maze import MazeTrack, MultiChoicePayload
from ..models.user import UserProfile
from ..models.wordle import GameSettings, WordleQuizType
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_bool
from .content_service import ContentService
from .end_game_service import EndGameService
from .events import parse_multi_choice_event, parse_wordle_event
from .job_scheduler import JobScheduler
from .maze_service import generate_maze_items, is_playable
from .multi_choice_game import MultiChoiceGame
from .store import GameStore
from .wordle_game import WordleGame
from .xp_service import XpConfig

Game = Union[WordleGame, MultiChoiceGame]


def build_settings(app_config: Mapping, overrides: Optional[dict] = None) -> GameSettings:
    """
    Snapshot game settings from the app config, with per-request overrides.

    Raises:
        ValueError: If an override is not a valid number
    """
    overrides = overrides or {}

    row_time_limit = overrides.get('row_time_limit', app_config.get('ROW_TIME_LIMIT_SECONDS'))
    settings = GameSettings(
        hard_mode=parse_bool(overrides.get('hard_mode'), app_config.get('HARD_MODE', False)),
        color_blind=parse_bool(overrides.get('color_blind'), app_config.get('COLOR_BLIND', False)),
        letter_hints=parse_bool(overrides.get('letter_hints'), app_config.get('LETTER_HINTS', False)),
        row_limit=int(overrides.get('row_limit', app_config.get('MAX_ROWS', 6))),
        row_time_limit=float(row_time_limit) if row_time_limit else None,
        question_count=int(overrides.get('question_count', app_config.get('MULTI_CHOICE_QUESTION_COUNT', 5))),
        question_time_limit=float(overrides.get('question_time_limit', app_config.get('QUIZ_COUNTDOWN_SECONDS', 30.0))),
        translation_enabled=parse_bool(overrides.get('translation_enabled'), app_config.get('TRANSLATION_ENABLED', False)),
    )

    if settings.row_limit < 1:
        raise ValueError("row_limit must be at least 1")
    if settings.question_count < 1:
        raise ValueError("question_count must be at least 1")
    if settings.question_time_limit <= 0:
        raise ValueError("question_time_limit must be positive")
    return settings


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Session creation for both game modes, keyed by a unique game ID
    - Event intake, applied one at a time under the service lock
    - Countdown polling and the end-of-game job queue
    - Maze track and user profile access
    """

    def __init__(self,
                 store: GameStore,
                 scheduler: JobScheduler,
                 content_service: ContentService,
                 xp_config: XpConfig,
                 app_config: Optional[Mapping] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.games: Dict[str, Game] = {}
        self.last_active: Dict[str, float] = {}
        self.lock = threading.RLock()
        self.store = store
        self.scheduler = scheduler
        self.content_service = content_service
        self.xp_config = xp_config
        self.config = app_config or {}
        self.clock = clock
        self.end_game_service = EndGameService(store, scheduler, xp_config)

    # Game creation

    def create_wordle_game(self,
                           uid: str,
                           quiz_type: Optional[str] = None,
                           day: Optional[str] = None,
                           overrides: Optional[dict] = None,
                           initial_word: Optional[str] = None,
                           maze_item_id: Optional[int] = None) -> WordleGame:
        """
        Creates a new word-guess session.

        Args:
            uid: Owner of the game
            quiz_type: Variant name ('TEXT', 'NUMBER', 'MATH_FORMULA')
            day: Day key for a daily word, or None for a random word
            overrides: Per-game settings overriding the app config
            initial_word: Word to resume with instead of fetching one
            maze_item_id: Maze item this game plays, if any

        Returns:
            The started WordleGame
        """
        settings = build_settings(self.config, overrides)
        game = WordleGame(
            game_id=str(uuid.uuid4()),
            uid=uid,
            content_service=self.content_service,
            end_game_service=self.end_game_service,
            settings=settings,
            quiz_type=WordleQuizType.from_value(quiz_type),
            day=day,
            maze_item_id=maze_item_id,
            initial_word=str(initial_word).upper() if initial_word else None,
            rewarded_rows=int(self.config.get('REWARDED_ROWS', 1)),
            clock=self.clock,
        )
        with self.lock:
            game.start()
            self.games[game.game_id] = game
            self.last_active[game.game_id] = self.clock()
        return game

    def create_multi_choice_game(self,
                                 uid: str,
                                 category: Optional[str] = None,
                                 difficulty: Optional[str] = None,
                                 overrides: Optional[dict] = None,
                                 initial_questions=None,
                                 maze_item_id: Optional[int] = None) -> MultiChoiceGame:
        """Creates a new multi-choice quiz, fetching questions unless some are given."""
        settings = build_settings(self.config, overrides)
        game = MultiChoiceGame(
            game_id=str(uuid.uuid4()),
            uid=uid,
            content_service=self.content_service,
            end_game_service=self.end_game_service,
            settings=settings,
            initial_questions=initial_questions,
            category=category,
            difficulty=difficulty,
            maze_item_id=maze_item_id,
            clock=self.clock,
        )
        with self.lock:
            game.start()
            self.games[game.game_id] = game
            self.last_active[game.game_id] = self.clock()
        return game

    # Sessions

    def get_game(self, game_id: str, kind: Optional[str] = None) -> Optional[Game]:
        """Look up a game, optionally requiring a mode ('wordle' or 'multi_choice')."""
        game = self.games.get(game_id)
        if game is None or (kind is not None and game.kind != kind):
            return None
        return game

    def get_game_state(self, game_id: str, kind: Optional[str] = None) -> Optional[dict]:
        with self.lock:
            game = self.get_game(game_id, kind)
            return game.snapshot() if game else None

    def handle_event(self, game_id: str, data: dict, kind: Optional[str] = None) -> Optional[dict]:
        """
        Apply a JSON event to a game.

        Returns:
            The new snapshot, or None if the game was not found

        Raises:
            ValueError: For malformed events or invalid input
        """
        with self.lock:
            game = self.get_game(game_id, kind)
            if game is None:
                return None
            if game.kind == WordleGame.kind:
                event = parse_wordle_event(data)
            else:
                event = parse_multi_choice_event(data)
            game.on_event(event)
            self.last_active[game_id] = self.clock()
            return game.snapshot()

    def close_game(self, game_id: str, kind: Optional[str] = None) -> bool:
        """
        Closes a session and removes it from memory. Closing a word-guess
        session enqueues its end-of-game jobs.

        Returns:
            bool: True if the game was closed, False if not found
        """
        with self.lock:
            game = self.get_game(game_id, kind)
            if game is None:
                return False
            del self.games[game_id]
            self.last_active.pop(game_id, None)
            game.close()
            return True

    # Background work

    def poll_timers(self, now: Optional[float] = None) -> List[str]:
        """
        Fire expired countdowns.

        Returns:
            IDs of games whose state changed
        """
        changed = []
        with self.lock:
            for game_id, game in list(self.games.items()):
                try:
                    if game.poll(now):
                        changed.append(game_id)
                except Exception as e:
                    game_logger.log_error(None, e, 'poll_timer', game_id)
        return changed

    def reap_games(self, now: Optional[float] = None) -> Dict[str, Any]:
        """
        Close and forget games nobody will come back to.

        A game is reaped when it was already closed, when it finished and has
        been untouched for FINISHED_GAME_TTL_SECONDS, or when it has been idle
        for IDLE_GAME_TTL_SECONDS. Closing a word-guess game here records its
        result exactly as an explicit close would.

        Returns:
            Dictionary with the reaped count and per-game details
        """
        now = self.clock() if now is None else now
        finished_ttl = float(self.config.get('FINISHED_GAME_TTL_SECONDS', 120))
        idle_ttl = float(self.config.get('IDLE_GAME_TTL_SECONDS', 1800))

        reaped_games = []
        with self.lock:
            for game_id, game in list(self.games.items()):
                idle_seconds = now - self.last_active.get(game_id, now)
                if game.closed:
                    reason = 'closed'
                elif game.is_finished and idle_seconds >= finished_ttl:
                    reason = 'finished'
                elif idle_seconds >= idle_ttl:
                    reason = 'idle'
                else:
                    continue

                del self.games[game_id]
                self.last_active.pop(game_id, None)
                try:
                    game.close()
                except Exception as e:
                    game_logger.log_error(None, e, 'reap_game', game_id)
                game_logger.log_game_event(
                    game_id, 'game_reaped', game.uid,
                    mode=game.kind, reason=reason, idle_seconds=round(idle_seconds, 1)
                )
                reaped_games.append({
                    'game_id': game_id,
                    'mode': game.kind,
                    'reason': reason,
                    'idle_seconds': idle_seconds,
                })

        return {'reaped_count': len(reaped_games), 'reaped_games': reaped_games}

    def run_jobs(self) -> Dict[str, int]:
        return self.scheduler.run_pending()

    # Maze

    def get_maze(self) -> MazeTrack:
        return self.store.get_maze()

    def generate_maze(self, count: Optional[int] = None, seed: Optional[int] = None) -> MazeTrack:
        count = count if count is not None else int(self.config.get('MAZE_GENERATE_COUNT', 10))
        items = generate_maze_items(self.content_service, count, seed)
        track = self.store.insert_maze_items(items)
        game_logger.log_game_event(None, 'maze_generated', None, added=len(items), total=len(track))
        return track

    def play_maze_item(self, uid: str, index: int, overrides: Optional[dict] = None) -> Game:
        """
        Start the game for a maze item.

        Raises:
            ValueError: If the item does not exist or is locked or already played
        """
        track = self.store.get_maze()
        if not is_playable(track, index):
            raise ValueError(f"Maze item at index {index} is not playable")

        item = track[index]
        if isinstance(item.payload, MultiChoicePayload):
            return self.create_multi_choice_game(
                uid,
                overrides=overrides,
                initial_questions=[item.payload.question],
                maze_item_id=item.id,
            )
        return self.create_wordle_game(
            uid,
            quiz_type=item.payload.quiz_type.value,
            overrides=overrides,
            initial_word=item.payload.word,
            maze_item_id=item.id,
        )

    # Users

    def get_profile(self, uid: str) -> Optional[UserProfile]:
        return self.store.get_profile(uid)

    def create_profile(self, uid: str) -> UserProfile:
        profile = self.store.create_profile(uid, self.xp_config.initial_diamonds)
        game_logger.log_game_event(None, 'profile_created', uid)
        return profile


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(store: GameStore,
                            scheduler: JobScheduler,
                            content_service: ContentService,
                            xp_config: XpConfig,
                            app_config: Optional[Mapping] = None,
                            clock: Callable[[], float] = time.monotonic) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(store, scheduler, content_service, xp_config, app_config, clock)
    return _game_service
