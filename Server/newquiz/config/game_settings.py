"""
Game Configuration Constants Module

Game rule constants plus the word and question banks the local content
source draws from. Banks are loaded from JSON files next to this module;
run this module directly to validate them.
"""

import json
import os
from typing import Dict, Final, List

# Core Game Configuration Constants
MAX_ROWS: Final[int] = 6
"""Default number of guess rows per word-guess game."""

QUIZ_COUNTDOWN_SECONDS: Final[float] = 30.0
"""Seconds allowed per multi-choice question before it is auto-verified."""

REWARDED_ROWS: Final[int] = 1
"""Rows granted when a lost word-guess game is continued."""

MAX_LAST_QUIZ_TIMES: Final[int] = 5
"""How many recent average quiz times a profile keeps."""

MIN_WORD_LENGTH: Final[int] = 3
MAX_WORD_LENGTH: Final[int] = 12
"""Bounds on target word length, resumed words included."""

_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')


def _load_json(file_name: str):
    json_file_path = os.path.join(_DATA_DIR, file_name)
    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Game data file not found: {json_file_path}")


def _load_word_lists() -> Dict[str, List[str]]:
    """
    Load word lists per quiz type from words.json.

    Returns:
        Dict mapping quiz type name to a list of upper-cased words

    Raises:
        FileNotFoundError: If words.json is missing
        ValueError: If a list is empty or holds a word of the wrong form
    """
    data = _load_json('words.json')
    if not isinstance(data, dict):
        raise ValueError("words.json must contain an object keyed by quiz type")

    word_lists = {}
    for quiz_type, words in data.items():
        if not isinstance(words, list) or not words:
            raise ValueError(f"Word list for {quiz_type} cannot be empty")
        word_lists[quiz_type.upper()] = [str(word).upper() for word in words]
    return word_lists


def _load_questions() -> List[dict]:
    data = _load_json('questions.json')
    if not isinstance(data, list) or not data:
        raise ValueError("questions.json must contain a non-empty array")
    return data


WORD_LISTS: Final[Dict[str, List[str]]] = _load_word_lists()
QUESTIONS: Final[List[dict]] = _load_questions()


def validate_word_list_integrity() -> bool:
    """
    Validates the word banks.

    - TEXT words are alphabetic
    - NUMBER words are numeric
    - MATH_FORMULA words hold exactly one '=' and no letters
    - No duplicates inside a bank

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    for quiz_type, words in WORD_LISTS.items():
        for index, word in enumerate(words):
            if quiz_type == 'TEXT' and not word.isalpha():
                raise ValueError(f"{quiz_type} word at index {index} '{word}' contains non-alphabetic characters")
            if quiz_type == 'NUMBER' and not word.isdigit():
                raise ValueError(f"{quiz_type} word at index {index} '{word}' contains non-digit characters")
            if quiz_type == 'MATH_FORMULA' and (word.count('=') != 1 or any(ch.isalpha() for ch in word)):
                raise ValueError(f"{quiz_type} word at index {index} '{word}' is not a formula")

        if len(words) != len(set(words)):
            duplicates = sorted({word for word in words if words.count(word) > 1})
            raise ValueError(f"Duplicate words found in {quiz_type} list: {duplicates}")

    return True


def get_word_statistics() -> dict:
    """Word bank sizes and average word length per quiz type."""
    return {
        quiz_type: {
            'total_words': len(words),
            'avg_length': round(sum(len(word) for word in words) / len(words), 2),
        }
        for quiz_type, words in WORD_LISTS.items()
    }


if __name__ == "__main__":
    try:
        validate_word_list_integrity()
        print(" Word list validation passed")
        print(f" Word statistics: {get_word_statistics()}")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
