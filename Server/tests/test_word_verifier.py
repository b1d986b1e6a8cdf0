from collections import Counter

import pytest

from newquiz.models import ItemState, WordleChar, WordleItem, WordleRow
from newquiz.services.word_verifier import (
    contains_all_last_revealed_hints, get_keys_disabled, revealed_hints, verify_from_word,
)


def pending_row(text):
    return WordleRow(tuple(WordleItem.pending(WordleChar(ch)) for ch in text))


def states(row):
    return [item.state for item in row]


def test_exact_match_is_all_correct():
    row = verify_from_word(pending_row("CRANE"), "CRANE")
    assert row.is_correct
    assert row.as_text == "CRANE"


def test_repeated_letters_against_alloy():
    row = verify_from_word(pending_row("LOLLY"), "ALLOY")
    assert states(row) == [
        ItemState.PRESENT, ItemState.PRESENT, ItemState.CORRECT, ItemState.NONE, ItemState.CORRECT,
    ]


def test_correct_position_claims_priority():
    # Target has one E; the guess puts one E in place and another out of place.
    row = verify_from_word(pending_row("EERIE"), "CRANE")
    assert row.items[4].state == ItemState.CORRECT
    assert row.items[0].state == ItemState.NONE
    assert row.items[1].state == ItemState.NONE


@pytest.mark.parametrize("guess,target", [
    ("LOLLY", "ALLOY"),
    ("EERIE", "CRANE"),
    ("SPEED", "ABIDE"),
    ("AAAAA", "BANAL"),
    ("11223", "12312"),
])
def test_hint_count_never_exceeds_target_count(guess, target):
    row = verify_from_word(pending_row(guess), target)
    hinted = Counter(item.letter for item in row if item.state in (ItemState.CORRECT, ItemState.PRESENT))
    target_counts = Counter(target)
    for letter, count in hinted.items():
        assert count <= target_counts[letter]


def test_lowercase_target_is_normalized():
    row = verify_from_word(pending_row("crane"), "crane")
    assert row.is_correct


def test_incomplete_row_is_rejected():
    row = WordleRow.empty(5).with_item(0, WordleItem.pending(WordleChar("A")))
    with pytest.raises(ValueError):
        verify_from_word(row, "ALLOY")


def test_length_mismatch_is_rejected():
    with pytest.raises(ValueError):
        verify_from_word(pending_row("CAT"), "ALLOY")


def test_revealed_hints_and_disabled_keys():
    row = verify_from_word(pending_row("LOLLY"), "ALLOY")
    assert revealed_hints(row) == {"L", "O", "Y"}
    # The fourth L is NONE but L is hinted elsewhere, so it stays enabled.
    assert get_keys_disabled(row) == frozenset()

    row = verify_from_word(pending_row("CRANE"), "ALLOY")
    assert get_keys_disabled(row) == {"C", "R", "N", "E"}


def test_hard_mode_hints_use_set_semantics():
    last = verify_from_word(pending_row("LOLLY"), "ALLOY")
    assert contains_all_last_revealed_hints(pending_row("YOLKS"), last)
    assert not contains_all_last_revealed_hints(pending_row("CRANE"), last)
    assert contains_all_last_revealed_hints(pending_row("CRANE"), None)
