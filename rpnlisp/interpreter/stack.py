"""
Value stack helpers.

The stack is a list of text tokens with its top at the end. Operators never
modify the list they are given; every helper here returns a new list for
the remaining elements alongside the values it took off the top.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import StackUnderflowError
from .numeric import parse_float


Stack = List[str]


@dataclass
class StepResult:
    """Outcome of one builtin: the next stack and an optional message."""
    stack: Stack
    message: Optional[str] = None


def require(stack: Stack, count: int, symbol: str):
    """Raise StackUnderflowError unless the stack holds count elements."""
    if len(stack) < count:
        raise StackUnderflowError(symbol, count, len(stack))


def take(stack: Stack, count: int) -> Tuple[Stack, List[str]]:
    """Split off the top count tokens, oldest first."""
    if count <= 0:
        return list(stack), []
    return stack[:-count], stack[-count:]


def take_number(stack: Stack) -> Tuple[Stack, float]:
    """Pop the top token as a number."""
    return stack[:-1], parse_float(stack[-1])


def take_numbers(stack: Stack, count: int) -> Tuple[Stack, List[float]]:
    """Pop count tokens as numbers; the earliest pushed comes first."""
    rest, tokens = take(stack, count)
    return rest, [parse_float(token) for token in tokens]


def take_count(stack: Stack, symbol: str) -> Tuple[Stack, int]:
    """Pop an element count N and check that N more elements remain.

    N is truncated toward zero. Negative, NaN and infinite counts mean 0.
    """
    rest, value = take_number(stack)
    if not math.isfinite(value) or value < 0:
        count = 0
    else:
        count = int(value)
    require(stack, count + 1, symbol)
    return rest, count
