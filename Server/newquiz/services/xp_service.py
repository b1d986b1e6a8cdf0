"""
XP Service

Turns quiz performance into experience points and decides level-ups.
The functions here never touch persisted state; callers apply the returned
totals and diamond reward themselves.
"""

import json
import math
from dataclasses import asdict, dataclass, fields
from typing import Optional

from ..models.user import UserProfile


class ProfileNotFound(Exception):
    """Raised when XP is applied without a resolvable user profile."""


@dataclass(frozen=True)
class XpConfig:
    """Tunable XP coefficients."""
    # Multi-choice
    xp_per_correct: int = 10
    speed_bonus_xp: int = 10
    perfect_bonus_xp: int = 20
    # Wordle
    wordle_max_xp: int = 60
    wordle_row_penalty: int = 10
    wordle_min_xp: int = 10
    # Leveling
    xp_per_level_base: int = 100
    new_level_diamonds: int = 10
    initial_diamonds: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "XpConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown XP config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict:
        return asdict(self)


def load_xp_config(path: Optional[str]) -> XpConfig:
    """
    Load XP coefficients from a JSON file, falling back to defaults.

    Raises:
        FileNotFoundError: If ``path`` is given but missing
        ValueError: If the file holds unknown keys or is not an object
    """
    if not path:
        return XpConfig()
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("XP config file must contain a JSON object")
    return XpConfig.from_dict(data)


@dataclass(frozen=True)
class MultiChoicePerformance:
    correct_count: int
    question_count: int
    average_answer_time: float
    question_time_limit: float = 30.0


@dataclass(frozen=True)
class WordlePerformance:
    rows_used: int
    solved: bool


@dataclass(frozen=True)
class XpAward:
    """Outcome of applying XP to a profile."""
    earned_xp: int
    new_total_xp: int
    old_level: int
    new_level: int
    leveled_up: bool
    diamonds_reward: int

    def to_dict(self) -> dict:
        return asdict(self)


def generate_multi_choice_xp(sample: MultiChoicePerformance, config: XpConfig = XpConfig()) -> int:
    """
    XP for a multi-choice quiz. Only correct answers earn XP; faster average
    answers earn a larger speed bonus per correct answer, scaled against the
    per-question time limit the quiz was played with.
    """
    if sample.correct_count < 0 or sample.question_count < 0:
        raise ValueError("Counts cannot be negative")
    if sample.correct_count > sample.question_count:
        raise ValueError("Correct count cannot exceed question count")
    if sample.correct_count == 0:
        return 0

    time_limit = sample.question_time_limit
    speed_factor = max(0.0, 1.0 - max(sample.average_answer_time, 0.0) / time_limit) if time_limit > 0 else 0.0
    per_correct = config.xp_per_correct + round(config.speed_bonus_xp * speed_factor)

    xp = sample.correct_count * per_correct
    if sample.correct_count == sample.question_count:
        xp += config.perfect_bonus_xp
    return xp


def generate_wordle_xp(sample: WordlePerformance, config: XpConfig = XpConfig()) -> int:
    """XP for a word-guess game: fewer rows earn more, a lost game earns nothing."""
    if not sample.solved:
        return 0
    if sample.rows_used < 1:
        raise ValueError("A solved game uses at least one row")
    xp = config.wordle_max_xp - (sample.rows_used - 1) * config.wordle_row_penalty
    return max(config.wordle_min_xp, xp)


def level(total_xp: int, config: XpConfig = XpConfig()) -> int:
    """Level for an XP total: floor(sqrt(xp / base)) + 1."""
    if total_xp < 0:
        raise ValueError("Total XP cannot be negative")
    return int(math.isqrt(total_xp // config.xp_per_level_base)) + 1


def is_new_level(current_total_xp: int, delta_xp: int, config: XpConfig = XpConfig()) -> bool:
    return level(current_total_xp, config) != level(current_total_xp + delta_xp, config)


def apply_xp(profile: Optional[UserProfile], delta_xp: int, config: XpConfig = XpConfig()) -> XpAward:
    """
    Decide the result of adding ``delta_xp`` to a profile.

    Raises:
        ProfileNotFound: If there is no profile to apply XP to
        ValueError: If ``delta_xp`` is negative
    """
    if profile is None:
        raise ProfileNotFound("No user profile to apply XP to")
    if delta_xp < 0:
        raise ValueError("XP delta cannot be negative")

    old_level = level(profile.total_xp, config)
    new_total = profile.total_xp + delta_xp
    new_level = level(new_total, config)
    leveled_up = old_level != new_level

    return XpAward(
        earned_xp=delta_xp,
        new_total_xp=new_total,
        old_level=old_level,
        new_level=new_level,
        leveled_up=leveled_up,
        diamonds_reward=config.new_level_diamonds if leveled_up else 0,
    )
