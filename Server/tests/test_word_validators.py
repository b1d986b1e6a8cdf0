from fractions import Fraction

import pytest

from newquiz.models import WordleQuizType
from newquiz.services.word_validators import (
    evaluate_expression, get_word_validator, is_number_word, is_text_word, is_valid_math_formula,
)


def test_text_and_number_words():
    assert is_text_word("CRANE")
    assert not is_text_word("CR4NE")
    assert is_number_word("12345")
    assert not is_number_word("123A5")
    assert not is_number_word("")


def test_evaluate_expression_follows_precedence():
    assert evaluate_expression("2+3*4") == 14
    assert evaluate_expression("8/3") == Fraction(8, 3)


@pytest.mark.parametrize("expression", ["", "1+", "4/0", "1++2", "2**3", "(1)"])
def test_evaluate_expression_rejects_bad_input(expression):
    with pytest.raises(ValueError):
        evaluate_expression(expression)


@pytest.mark.parametrize("formula,expected", [
    ("1+2=3", True),
    ("6*7=42", True),
    ("9/3=3", True),
    ("7/2=3", False),
    ("1+2=4", False),
    ("1+2+3", False),
    ("1=1=1", False),
    ("=3", False),
])
def test_math_formula_must_balance(formula, expected):
    assert is_valid_math_formula(formula) is expected


def test_validator_per_quiz_type():
    assert get_word_validator(WordleQuizType.TEXT) is is_text_word
    assert get_word_validator(WordleQuizType.NUMBER) is is_number_word
    assert get_word_validator(WordleQuizType.MATH_FORMULA) is is_valid_math_formula
