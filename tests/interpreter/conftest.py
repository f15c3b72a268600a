"""
Test helpers for interpreter tests.

This module provides:
- evaluate(): Tokenize an expression and evaluate it on an empty stack
- eval_and_assert(): Evaluate an expression and check the resulting stack
- eval_and_catch(): Evaluate an expression and expect an exception
- number(): Read a single-element result stack as a float
- interp: fixture with a fresh, seeded interpreter
"""

import pytest
from typing import Callable, List, Optional, Sequence, Type

from rpnlisp.interpreter import Interpreter
from rpnlisp.lexer import tokenize


def evaluate(expression: str, interp: Optional[Interpreter] = None,
             stack: Sequence[str] = ()) -> List[str]:
    """
    Evaluate an rpnlisp expression and return the resulting stack.
    """
    if interp is None:
        interp = Interpreter(seed=0)
    return interp.evaluate(tokenize(expression), stack)


def eval_and_assert(expression: str, expected: List[str],
                    interp: Optional[Interpreter] = None, stack: Sequence[str] = ()):
    """
    Evaluate an expression and assert the resulting stack equals expected.
    """
    actual = evaluate(expression, interp, stack)
    if actual != expected:
        raise AssertionError(
            f"EvalAndAssert failed. Expected: {expected}. Actual: {actual}. "
            f"Expression was: {expression}"
        )


def eval_and_catch(
    expression: str,
    exception_type: Type[Exception],
    predicate: Optional[Callable[[Exception], bool]] = None,
    interp: Optional[Interpreter] = None
) -> Exception:
    """
    Evaluate an expression and expect it to raise an exception.
    """
    try:
        result = evaluate(expression, interp)
    except exception_type as ex:
        if predicate is not None and not predicate(ex):
            raise AssertionError(
                f"EvalAndCatch failed. Predicate returned false. Exception: {ex}"
            )
        return ex
    raise AssertionError(
        f"EvalAndCatch failed. Expected exception: {exception_type.__name__}. "
        f"Actual: no exception, returned {result}. Expression was: {expression}"
    )


def number(expression: str, interp: Optional[Interpreter] = None) -> float:
    """
    Evaluate an expression that leaves exactly one value and return it as a float.
    """
    result = evaluate(expression, interp)
    assert len(result) == 1, f"expected one value, got {result}"
    return float(result[0])


# Pytest fixtures

@pytest.fixture
def interp():
    """Create a fresh interpreter with a fixed random seed."""
    return Interpreter(seed=0)
