"""
Word Verifier

Implements the per-letter verdict algorithm and the hint rules built on it.
All functions are pure: they take rows and return new rows or facts.
"""

from collections import Counter
from typing import FrozenSet, List, Optional

from ..models.wordle import HINT_STATES, ItemState, WordleItem, WordleRow


def verify_from_word(row: WordleRow, word: str) -> WordleRow:
    """
    Implements the authentic Wordle letter evaluation algorithm.

    First pass marks exact position matches and consumes them from the
    remaining letter counts; second pass marks present letters while the
    target still has an unclaimed occurrence, otherwise absent.

    Args:
        row: Fully entered row (no empty cells)
        word: Target word, same length as the row

    Returns:
        Verified row of CORRECT / PRESENT / NONE items

    Raises:
        ValueError: If the row is incomplete or lengths differ
    """
    target = word.upper()
    if len(row) != len(target):
        raise ValueError(f"Row length ({len(row)}) != word length ({len(target)})")
    if not row.is_completed:
        raise ValueError("Cannot verify an incomplete row")

    remaining = Counter(target)
    result: List[Optional[WordleItem]] = [None] * len(target)

    # First pass: exact position matches
    for i, item in enumerate(row.items):
        if item.letter == target[i]:
            result[i] = WordleItem.correct(item.char)
            remaining[item.letter] -= 1

    # Second pass: present letters and misses
    for i, item in enumerate(row.items):
        if result[i] is not None:
            continue
        if remaining[item.letter] > 0:
            result[i] = WordleItem.present(item.char)
            remaining[item.letter] -= 1
        else:
            result[i] = WordleItem.none(item.char)

    return WordleRow(tuple(result))


def revealed_hints(row: Optional[WordleRow]) -> FrozenSet[str]:
    """Letters marked CORRECT or PRESENT in a verified row."""
    if row is None:
        return frozenset()
    return frozenset(item.letter for item in row.items if item.state in HINT_STATES)


def contains_all_last_revealed_hints(row: WordleRow, last_row: Optional[WordleRow]) -> bool:
    """
    Hard-mode gate: every hint letter from the previous verified row must be
    reused somewhere in the new row.
    """
    required = revealed_hints(last_row)
    used = {item.letter for item in row.items}
    return required.issubset(used)


def get_keys_disabled(row: WordleRow) -> FrozenSet[str]:
    """Letters confirmed absent from the target by a verified row."""
    hinted = revealed_hints(row)
    return frozenset(
        item.letter
        for item in row.items
        if item.state == ItemState.NONE and item.letter not in hinted
    )
