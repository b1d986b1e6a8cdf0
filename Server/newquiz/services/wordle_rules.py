"""
Wordle Rules

Pure state transitions over WordleSession snapshots. Every function returns a
new snapshot; the input is never modified.
"""

from typing import Optional

from ..config.game_settings import MAX_WORD_LENGTH, MIN_WORD_LENGTH
from ..models.wordle import (
    GameError, GameSettings, ItemState, SessionStatus, WordleChar, WordleItem,
    WordleQuizType, WordleRow, WordleSession,
)
from .word_validators import WordValidator, get_word_validator
from .word_verifier import contains_all_last_revealed_hints, get_keys_disabled, verify_from_word


def new_wordle_session(
    word: str,
    settings: GameSettings,
    quiz_type: WordleQuizType = WordleQuizType.TEXT,
    day: Optional[str] = None,
    maze_item_id: Optional[int] = None,
    row_limit: Optional[int] = None,
) -> WordleSession:
    """
    Build a fresh session with a single empty row.

    Raises:
        ValueError: If the word is not a valid target for the quiz type
    """
    word = validate_target_word(word, quiz_type)
    limit = row_limit if row_limit is not None else settings.row_limit
    if limit < 1:
        raise ValueError("Row limit must be at least 1")
    return WordleSession(
        word=word,
        rows=(WordleRow.empty(len(word)),),
        row_limit=limit,
        quiz_type=quiz_type,
        day=day,
        maze_item_id=maze_item_id,
        settings=settings,
    )


def validate_target_word(word: str, quiz_type: WordleQuizType) -> str:
    """Normalize a target word and check it against the variant's alphabet and word form."""
    word = (word or "").strip().upper()
    if not MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH:
        raise ValueError(f"Word must have {MIN_WORD_LENGTH} to {MAX_WORD_LENGTH} characters")
    for key in word:
        WordleChar.for_quiz_type(key, quiz_type)
    if not get_word_validator(quiz_type)(word):
        raise ValueError(f"{word!r} is not a valid {quiz_type.value} word")
    return word


def add_key(session: WordleSession, key: str) -> WordleSession:
    """Put a key in the first empty cell of the current row."""
    row = session.current_row
    if row is None:
        return session
    char = WordleChar.for_quiz_type(key, session.quiz_type)
    for index, item in enumerate(row.items):
        if item.state == ItemState.EMPTY:
            return _replace_current_row(session, row.with_item(index, WordleItem.pending(char)))
    return session


def remove_key(session: WordleSession, index: int) -> WordleSession:
    """Empty one cell of the current row."""
    row = session.current_row
    if row is None:
        return session
    if not 0 <= index < len(row):
        raise ValueError(f"Key index {index} out of range")
    return _replace_current_row(session, row.with_item(index, WordleItem.empty()))


def verify_row(
    session: WordleSession,
    row_index: Optional[int] = None,
    validator: Optional[WordValidator] = None,
) -> WordleSession:
    """
    Verify the current row and advance the session.

    ``row_index`` names the row the caller means to verify; when it is not the
    current row (already verified by an earlier call) nothing changes.
    """
    if session.status != SessionStatus.PLAYING:
        return session
    if row_index is not None and row_index != session.current_row_position:
        return session

    row = session.current_row
    if row is None or row.is_verified:
        return session

    if not row.is_completed:
        return session.copy(error=GameError.MALFORMED_ROW)

    validator = validator or get_word_validator(session.quiz_type)
    if not validator(row.as_text):
        return session.copy(error=GameError.INVALID_WORD_FORM)

    verified = verify_from_word(row, session.word)

    if session.settings.hard_mode and session.current_row_position > 0:
        last_row = session.rows[session.current_row_position - 1]
        if not contains_all_last_revealed_hints(verified, last_row):
            return session.copy(error=GameError.MISSING_REQUIRED_HINTS)

    new_position = session.current_row_position + 1
    rows = list(session.rows)
    rows[session.current_row_position] = verified

    if verified.is_correct:
        status = SessionStatus.WON
    elif new_position >= session.row_limit:
        status = SessionStatus.LOST
    else:
        status = SessionStatus.PLAYING
        rows.append(WordleRow.empty(len(session.word)))

    return session.copy(
        rows=tuple(rows),
        current_row_position=new_position,
        keys_disabled=session.keys_disabled | get_keys_disabled(verified),
        status=status,
        error=None,
    )


def add_rewarded_rows(session: WordleSession, rows_to_add: int) -> WordleSession:
    """Reopen a lost session with extra rows."""
    if session.status != SessionStatus.LOST:
        return session
    if rows_to_add < 1:
        raise ValueError("Rows to add must be at least 1")
    return session.copy(
        rows=session.rows + (WordleRow.empty(len(session.word)),),
        row_limit=session.row_limit + rows_to_add,
        status=SessionStatus.PLAYING,
        error=None,
    )


def _replace_current_row(session: WordleSession, row: WordleRow) -> WordleSession:
    rows = list(session.rows)
    rows[session.current_row_position] = row
    return session.copy(rows=tuple(rows), error=None)
