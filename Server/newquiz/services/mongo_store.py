"""
Mongo Store

MongoDB-backed implementation of the game store: user profiles, game
results and the maze track.
"""

from dataclasses import asdict
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from pymongo import ASCENDING, ReturnDocument
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..config.game_settings import MAX_LAST_QUIZ_TIMES
from ..models.maze import MazeItem, MazeTrack
from ..models.user import MultiChoiceGameResult, UserProfile, WordleGameResult
from ..utils.game_logger import game_logger
from .maze_service import append_items, mark_played_by_id
from .xp_service import ProfileNotFound, XpAward, XpConfig, apply_xp


_PROFILE_FIELDS = (
    "uid", "total_xp", "diamonds", "wordle_words_played", "wordle_words_correct",
    "questions_played", "correct_answers", "last_quiz_times", "created_at",
)


def _profile_from_doc(doc: Optional[dict]) -> Optional[UserProfile]:
    if not doc:
        return None
    return UserProfile(**{key: doc[key] for key in _PROFILE_FIELDS if key in doc})


class MongoStore:
    """
    Game store persisted in MongoDB.
    """

    def __init__(self, mongo_uri: str, db_name: str = "newquiz", client: Optional[MongoClient] = None):
        """
        Initialize the store with a MongoDB connection.

        Args:
            mongo_uri: MongoDB connection string
            db_name: Database name
            client: Pre-built client (tests pass one in)
        """
        self.client = client or MongoClient(mongo_uri, server_api=ServerApi('1'))
        self.db = self.client[db_name]
        self.users_collection = self.db.users
        self.wordle_results_collection = self.db.wordle_results
        self.multi_choice_results_collection = self.db.multi_choice_results
        self.maze_collection = self.db.maze_items

        # Test connection
        try:
            self.client.admin.command('ping')
            game_logger.logger.info("Successfully connected to MongoDB")
        except Exception as e:
            game_logger.logger.error(f"MongoDB connection error: {e}")
            raise

        self.users_collection.create_index("uid", unique=True)
        self.maze_collection.create_index("id", unique=True)
        self.wordle_results_collection.create_index([("uid", ASCENDING), ("played_at", ASCENDING)])
        self.multi_choice_results_collection.create_index([("uid", ASCENDING), ("played_at", ASCENDING)])

    # Users

    def get_profile(self, uid: str) -> Optional[UserProfile]:
        return _profile_from_doc(self.users_collection.find_one({"uid": uid}))

    def create_profile(self, uid: str, initial_diamonds: int = 0) -> UserProfile:
        profile = UserProfile(uid=uid, diamonds=initial_diamonds, created_at=datetime.now(timezone.utc))
        # Upsert without overwriting an existing profile
        self.users_collection.update_one({"uid": uid}, {"$setOnInsert": asdict(profile)}, upsert=True)
        return self.get_profile(uid)

    def apply_xp(self, uid: str, delta: int, config: XpConfig) -> XpAward:
        if delta < 0:
            raise ValueError("XP delta cannot be negative")
        before = self.users_collection.find_one_and_update(
            {"uid": uid},
            {"$inc": {"total_xp": delta}},
            return_document=ReturnDocument.BEFORE,
        )
        if before is None:
            raise ProfileNotFound(f"User {uid} not found")
        return apply_xp(_profile_from_doc(before), delta, config)

    def adjust_diamonds(self, uid: str, delta: int) -> int:
        after = self.users_collection.find_one_and_update(
            {"uid": uid},
            {"$inc": {"diamonds": delta}},
            return_document=ReturnDocument.AFTER,
        )
        if after is None:
            raise KeyError(f"User {uid} not found")
        return after["diamonds"]

    def update_wordle_stats(self, uid: str, correct: bool) -> None:
        self.users_collection.update_one(
            {"uid": uid},
            {"$inc": {"wordle_words_played": 1, "wordle_words_correct": int(correct)}},
        )

    def update_multi_choice_stats(self, uid: str, questions: int, correct: int, average_time: float) -> None:
        self.users_collection.update_one(
            {"uid": uid},
            {
                "$inc": {"questions_played": questions, "correct_answers": correct},
                "$push": {"last_quiz_times": {"$each": [average_time], "$slice": -MAX_LAST_QUIZ_TIMES}},
            },
        )

    # Results

    def record_wordle_result(self, result: WordleGameResult) -> None:
        self.wordle_results_collection.insert_one(asdict(result))

    def record_multi_choice_result(self, result: MultiChoiceGameResult) -> None:
        self.multi_choice_results_collection.insert_one(asdict(result))

    # Maze

    def get_maze(self) -> MazeTrack:
        docs = self.maze_collection.find({}, {"_id": 0}).sort("id", ASCENDING)
        return MazeTrack(tuple(MazeItem.from_dict(doc) for doc in docs))

    def insert_maze_items(self, items: Sequence[MazeItem]) -> MazeTrack:
        current = self.get_maze()
        track = append_items(current, items)
        new_items: List[MazeItem] = list(track.items[len(current):])
        if new_items:
            self.maze_collection.insert_many([item.to_dict(reveal_answer=True) for item in new_items])
        return track

    def mark_maze_item_played(self, item_id: int) -> MazeTrack:
        track = mark_played_by_id(self.get_maze(), item_id)
        # Only ever sets played to true
        self.maze_collection.update_one({"id": item_id}, {"$set": {"played": True}})
        return track
