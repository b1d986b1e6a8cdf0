"""
Maze Service

Sequential unlock rules for the maze track plus generation of new items from
the content source.
"""

import random
from typing import List, Optional, Sequence

from ..models.maze import MazeItem, MazeTrack, MultiChoicePayload, WordlePayload
from ..models.multi_choice import QuestionDifficulty
from ..models.wordle import WordleQuizType


def is_item_played(track: MazeTrack, index: int) -> bool:
    """True if the item at ``index`` exists and has been played."""
    if not 0 <= index < len(track):
        return False
    return track[index].played


def is_playable(track: MazeTrack, index: int) -> bool:
    """
    An item is playable when it has not been played and either it is the
    first item or the item before it has been played.
    """
    if not 0 <= index < len(track):
        return False
    if track[index].played:
        return False
    if index == 0:
        return True
    return is_item_played(track, index - 1)


def first_playable_index(track: MazeTrack) -> Optional[int]:
    for index in range(len(track)):
        if is_playable(track, index):
            return index
    return None


def is_maze_completed(track: MazeTrack) -> bool:
    return len(track) > 0 and all(item.played for item in track)


def mark_played(track: MazeTrack, index: int) -> MazeTrack:
    """Return a track with the item at ``index`` played. Already played is a no-op."""
    if not 0 <= index < len(track):
        raise IndexError(f"Maze index {index} out of range")
    if track[index].played:
        return track
    items = list(track.items)
    items[index] = items[index].as_played()
    return MazeTrack(tuple(items))


def mark_played_by_id(track: MazeTrack, item_id: int) -> MazeTrack:
    index = track.index_of(item_id)
    if index is None:
        raise KeyError(f"Maze item {item_id} not found")
    return mark_played(track, index)


def append_items(track: MazeTrack, items: Sequence[MazeItem]) -> MazeTrack:
    """
    Append items at the tail. Ids are reassigned after the current max id so
    they stay unique; new items always start unplayed.
    """
    next_id = track.max_id + 1
    appended = []
    for offset, item in enumerate(items):
        appended.append(MazeItem(
            id=next_id + offset,
            payload=item.payload,
            difficulty=item.difficulty,
            played=False,
        ))
    return MazeTrack(track.items + tuple(appended))


def difficulty_for_position(position: int, count: int) -> QuestionDifficulty:
    """Difficulty rises along the generated batch: first third easy, then medium, then hard."""
    if count <= 0:
        return QuestionDifficulty.EASY
    fraction = position / count
    if fraction < 1 / 3:
        return QuestionDifficulty.EASY
    if fraction < 2 / 3:
        return QuestionDifficulty.MEDIUM
    return QuestionDifficulty.HARD


def generate_maze_items(content_service, count: int, seed: Optional[int] = None) -> List[MazeItem]:
    """
    Build a batch of maze items mixing word-guess and multi-choice steps.

    Args:
        content_service: Source of words and questions
        count: Number of items to generate
        seed: Optional random seed for reproducible mazes

    Returns:
        List of unplayed items with provisional ids (reassigned on append)
    """
    if count < 1:
        raise ValueError("Maze item count must be at least 1")

    rng = random.Random(seed)
    items: List[MazeItem] = []
    questions = list(content_service.get_questions())
    rng.shuffle(questions)

    for position in range(count):
        difficulty = difficulty_for_position(position, count)
        use_question = bool(questions) and rng.random() < 0.5
        if use_question:
            payload = MultiChoicePayload(questions.pop())
        else:
            quiz_type = rng.choice(list(WordleQuizType))
            payload = WordlePayload(word=content_service.random_word(quiz_type, rng), quiz_type=quiz_type)
        items.append(MazeItem(id=position + 1, payload=payload, difficulty=difficulty))

    return items
