"""
Game Events

Event variants accepted by the game orchestrators, and parsing from the JSON
bodies the HTTP and WebSocket layers receive.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class KeyRemoved:
    index: int


@dataclass(frozen=True)
class VerifyRow:
    row_index: Optional[int] = None


@dataclass(frozen=True)
class PlayAgain:
    pass


@dataclass(frozen=True)
class RewardedRow:
    pass


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class SelectAnswer:
    answer: int


@dataclass(frozen=True)
class VerifyAnswer:
    question_index: Optional[int] = None


WordleEvent = Union[KeyPressed, KeyRemoved, VerifyRow, PlayAgain, RewardedRow, Close]
MultiChoiceEvent = Union[SelectAnswer, VerifyAnswer, Close]


def _optional_int(data: dict, key: str) -> Optional[int]:
    value = data.get(key)
    return None if value is None else int(value)


def parse_wordle_event(data: dict) -> WordleEvent:
    """
    Build a wordle event from a JSON body such as {'type': 'key', 'key': 'A'}.

    Raises:
        ValueError: For unknown event types or missing fields
    """
    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")
    event_type = data.get('type')
    try:
        if event_type == 'key':
            return KeyPressed(key=str(data['key']))
        if event_type == 'remove_key':
            return KeyRemoved(index=int(data['index']))
        if event_type == 'verify':
            return VerifyRow(row_index=_optional_int(data, 'row_index'))
        if event_type == 'play_again':
            return PlayAgain()
        if event_type == 'rewarded_row':
            return RewardedRow()
        if event_type == 'close':
            return Close()
    except KeyError as e:
        raise ValueError(f"Event '{event_type}' is missing field {e}")
    raise ValueError(f"Unknown wordle event type: {event_type!r}")


def parse_multi_choice_event(data: dict) -> MultiChoiceEvent:
    """
    Build a multi-choice event from a JSON body such as {'type': 'select_answer', 'answer': 2}.

    Raises:
        ValueError: For unknown event types or missing fields
    """
    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")
    event_type = data.get('type')
    try:
        if event_type == 'select_answer':
            return SelectAnswer(answer=int(data['answer']))
        if event_type == 'verify':
            return VerifyAnswer(question_index=_optional_int(data, 'question_index'))
        if event_type == 'close':
            return Close()
    except KeyError as e:
        raise ValueError(f"Event '{event_type}' is missing field {e}")
    raise ValueError(f"Unknown multi-choice event type: {event_type!r}")
