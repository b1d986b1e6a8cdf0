"""
Word Form Validators

Each wordle variant supplies a predicate deciding whether an entered row is an
acceptable word form before letters are verified against the target.
"""

import ast
from fractions import Fraction
from typing import Callable, Dict

from ..models.wordle import WordleQuizType


WordValidator = Callable[[str], bool]

_BIN_OPS = {
    ast.Add: lambda a, b: a + b,
    ast.Sub: lambda a, b: a - b,
    ast.Mult: lambda a, b: a * b,
    ast.Div: lambda a, b: a / b,
}


def is_text_word(word: str) -> bool:
    return bool(word) and word.isalpha()


def is_number_word(word: str) -> bool:
    return bool(word) and word.isdigit()


def _evaluate(node: ast.AST) -> Fraction:
    if isinstance(node, ast.Expression):
        return _evaluate(node.body)
    if isinstance(node, ast.Constant) and type(node.value) is int:
        return Fraction(node.value)
    if isinstance(node, ast.BinOp) and type(node.op) in _BIN_OPS:
        return _BIN_OPS[type(node.op)](_evaluate(node.left), _evaluate(node.right))
    raise ValueError(f"Unsupported expression element: {type(node).__name__}")


def evaluate_expression(expression: str) -> Fraction:
    """
    Evaluate an integer arithmetic expression using + - * / with standard
    precedence. Division is exact.

    Raises:
        ValueError: If the expression is malformed or divides by zero
    """
    if not expression or not all(ch.isdigit() or ch in "+-*/" for ch in expression):
        raise ValueError(f"Invalid expression: {expression!r}")
    try:
        tree = ast.parse(expression, mode="eval")
        return _evaluate(tree)
    except (SyntaxError, ZeroDivisionError) as e:
        raise ValueError(f"Invalid expression: {expression!r}") from e


def is_valid_math_formula(word: str) -> bool:
    """True for '<expr>=<integer>' rows whose left side equals the right side."""
    if word.count("=") != 1:
        return False
    left, right = word.split("=")
    if not right.isdigit():
        return False
    try:
        return evaluate_expression(left) == Fraction(int(right))
    except ValueError:
        return False


VALIDATORS: Dict[WordleQuizType, WordValidator] = {
    WordleQuizType.TEXT: is_text_word,
    WordleQuizType.NUMBER: is_number_word,
    WordleQuizType.MATH_FORMULA: is_valid_math_formula,
}


def get_word_validator(quiz_type: WordleQuizType) -> WordValidator:
    """Return the word-form predicate for a quiz type."""
    return VALIDATORS[quiz_type]
