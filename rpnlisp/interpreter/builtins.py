"""
Built-in operator table.

Every builtin is a Builtin record: a symbol, the number of stack elements it
needs (its arity) and a handler ``handler(interp, stack) -> StepResult``.
The interpreter checks the arity before calling the handler, so handlers
may assume at least ``arity`` elements are present. Handlers never modify
the stack they receive.

Operands are read with parse_float and results written with format_number.
For binary operators ``a`` is the earlier pushed operand and ``b`` the top.
"""

import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from .colors import average_colors, hex_to_rgb, rgb_to_hex
from .errors import IterationLimitError
from .numeric import (
    NAN, ceil, count_ones, divide, factorial, floor, format_number, gcd, ieee,
    log2, log10, natural_log, parse_float, parse_int, power, round_half_up,
    sign, to_int32, to_radix, to_uint16, to_uint32,
)
from .recorder import DEFINE_START
from .stack import Stack, StepResult, take, take_count, take_number, take_numbers


DEG_PER_RAD = 180 / math.pi
KILOMETERS_PER_MILE = 1.60934
FEET_PER_METER = 3.28084
POUNDS_PER_KILOGRAM = 2.20462

MAGIC8_ANSWERS = (
    "it is certain",
    "it is decidedly so",
    "without a doubt",
    "yes definitely",
    "you may rely on it",
    "as I see it, yes",
    "most likely",
    "outlook good",
    "yes",
    "signs point to yes",
    "reply hazy try again",
    "ask again later",
    "better not tell you now",
    "cannot predict now",
    "concentrate and ask again",
    "don't count on it",
    "my reply is no",
    "my sources say no",
    "outlook not so good",
    "very doubtful",
)

HELP_TEXT = (
    "enter values and commands in postfix order, e.g. '3 4 +'. "
    "define a command with '( name body... )' and the anonymous function "
    "for map and fold with '( _ body... )'. "
    "'cmds' lists the built-in commands, 'cls' clears the stack."
)


@dataclass
class Builtin:
    """A built-in operator."""
    name: str
    arity: int
    handler: Callable[..., StepResult]
    listed: bool = True  # included in the 'cmds' listing

    def __repr__(self):
        return f"Builtin({self.name}, arity={self.arity})"


# =============================================================================
# Handler factories
# =============================================================================

def unary(op: Callable[[float], float]):
    """Pop one number, push op(a)."""
    def handler(interp, stack: Stack) -> StepResult:
        rest, a = take_number(stack)
        return StepResult(rest + [format_number(op(a))])
    return handler


def binary(op: Callable[[float, float], float]):
    """Pop a and b, push op(a, b)."""
    def handler(interp, stack: Stack) -> StepResult:
        rest, (a, b) = take_numbers(stack, 2)
        return StepResult(rest + [format_number(op(a, b))])
    return handler


def bitwise(op: Callable[[int, int], int]):
    """Binary operator on the signed 32-bit integer values of a and b."""
    def handler(interp, stack: Stack) -> StepResult:
        rest, (a, b) = take_numbers(stack, 2)
        return StepResult(rest + [format_number(op(to_int32(a), to_int32(b)))])
    return handler


def reinterpret(from_base: int, to_base: int):
    """Read the top token in from_base and write it in to_base."""
    def handler(interp, stack: Stack) -> StepResult:
        token = stack[-1]
        value = parse_float(token) if from_base == 10 else parse_int(token, from_base)
        return StepResult(stack[:-1] + [to_radix(value, to_base)])
    return handler


def message(text_fn: Callable[..., str]):
    """Leave the stack alone and emit text_fn(interp) as a message."""
    def handler(interp, stack: Stack) -> StepResult:
        return StepResult(list(stack), text_fn(interp))
    return handler


def constant(value: float):
    def handler(interp, stack: Stack) -> StepResult:
        return StepResult(stack + [format_number(value)])
    return handler


# =============================================================================
# Numeric helpers that need more than one expression
# =============================================================================

def shift_right(a: int, b: int) -> int:
    return a >> (to_uint32(b) & 31)


def shift_left(a: int, b: int) -> int:
    return to_int32(a << (to_uint32(b) & 31))


def nth_root(a: float, b: float) -> float:
    return power(a, divide(1.0, b))


def log_base(a: float, b: float) -> float:
    return divide(natural_log(a), natural_log(b))


_fmod = ieee(math.fmod)


def modulo(a: float, b: float) -> float:
    """Remainder with the sign of the dividend."""
    if math.isinf(b) and math.isfinite(a):
        return a
    return _fmod(a, b)


def char_code(token: str) -> float:
    """UTF-16 code unit of the first character, NaN for an empty token."""
    if not token:
        return NAN
    return float(int.from_bytes(token[0].encode('utf-16-le')[:2], 'little'))


# =============================================================================
# Stateful and structural handlers
# =============================================================================

def _random_below(interp, stack: Stack) -> StepResult:
    rest, a = take_number(stack)
    return StepResult(rest + [format_number(floor(a * interp.random.random()))])


def _magic8(interp) -> str:
    return MAGIC8_ANSWERS[interp.random.randrange(len(MAGIC8_ANSWERS))]


def _quadratic_roots(interp, stack: Stack) -> StepResult:
    rest, (a, b, c) = take_numbers(stack, 3)
    disc = b * b - 4 * a * c
    if disc < 0:
        real1 = divide(-b, 2 * a)
        imag1 = divide(math.sqrt(-disc), 2 * a)
        real2 = real1
        imag2 = divide(-math.sqrt(-disc), 2 * a)
    else:
        root = ieee(math.sqrt)(disc)
        real1 = divide(-b + root, 2 * a)
        imag1 = 0.0
        real2 = divide(-b - root, 2 * a)
        imag2 = 0.0
    return StepResult(rest + [format_number(v) for v in (real1, imag1, real2, imag2)])


def _char_code(interp, stack: Stack) -> StepResult:
    return StepResult(stack[:-1] + [format_number(char_code(stack[-1]))])


def _from_char_code(interp, stack: Stack) -> StepResult:
    rest, a = take_number(stack)
    return StepResult(rest + [chr(to_uint16(a))])


def _store(interp, stack: Stack) -> StepResult:
    rest, (value, name) = take(stack, 2)
    interp.store_function(name, [value])
    return StepResult(rest)


def _begin_definition(interp, stack: Stack) -> StepResult:
    interp.recorder.begin()
    return StepResult(list(stack))


def _map(interp, stack: Stack) -> StepResult:
    body = interp.functions.lambda_body('map')
    name = interp.functions.lambda_name
    result: List[str] = []
    for token in stack:
        result.extend(interp.call_function(name, body, [token]))
    return StepResult(result)


def fold(symbol: str):
    """Apply the anonymous function to the whole stack until one value remains."""
    def handler(interp, stack: Stack) -> StepResult:
        body = interp.functions.lambda_body(symbol)
        name = interp.functions.lambda_name
        current = list(stack)
        iterations = 0
        while len(current) > 1:
            if iterations >= interp.max_iterations:
                raise IterationLimitError(symbol, interp.max_iterations)
            current = interp.call_function(name, body, current)
            iterations += 1
        return StepResult(current)
    return handler


def _drop_n(interp, stack: Stack) -> StepResult:
    rest, n = take_count(stack, 'dropn')
    return StepResult(rest[:len(rest) - n])


def _roll(interp, stack: Stack) -> StepResult:
    return StepResult(stack[-1:] + stack[:-1])


def _roll_n(interp, stack: Stack) -> StepResult:
    rest, n = take_count(stack, 'rolln')
    split = len(rest) - n
    return StepResult(rest[split:] + rest[:split])


def _rot(interp, stack: Stack) -> StepResult:
    return StepResult(stack[1:] + stack[:1])


def _rot_n(interp, stack: Stack) -> StepResult:
    rest, n = take_count(stack, 'rotn')
    return StepResult(rest[n:] + rest[:n])


def _take_n(interp, stack: Stack) -> StepResult:
    rest, n = take_count(stack, 'taken')
    return StepResult(rest[len(rest) - n:])


def _swap(interp, stack: Stack) -> StepResult:
    return StepResult(stack[:-2] + [stack[-1], stack[-2]])


def _total(stack: Stack) -> float:
    # left to right, no compensated summation
    total = 0.0
    for token in stack:
        total += parse_float(token)
    return total


def _sum(interp, stack: Stack) -> StepResult:
    return StepResult([format_number(_total(stack))])


def _product(interp, stack: Stack) -> StepResult:
    product = 1.0
    for token in stack:
        product *= parse_float(token)
    return StepResult([format_number(product)])


def _average(interp, stack: Stack) -> StepResult:
    return StepResult([format_number(_total(stack) / len(stack))])


def _iota(interp, stack: Stack) -> StepResult:
    rest, n = take_number(stack)
    values: List[str] = []
    k = 1
    while k < n + 1:
        if len(values) >= interp.max_iterations:
            raise IterationLimitError('io', interp.max_iterations)
        values.append(format_number(k))
        k += 1
    return StepResult(rest + values)


def _range(interp, stack: Stack) -> StepResult:
    rest, (start, end, step) = take_numbers(stack, 3)
    step = abs(step)
    if end > start:
        def within(n): return n <= end
    else:
        def within(n): return n >= end
        step = -step

    if step == 0 and within(start):
        raise IterationLimitError('to', interp.max_iterations)

    values: List[str] = []
    n = start
    while within(n):
        if len(values) >= interp.max_iterations:
            raise IterationLimitError('to', interp.max_iterations)
        values.append(format_number(n))
        n += step
    return StepResult(rest + values)


def _rgb_hex(interp, stack: Stack) -> StepResult:
    rest, channels = take(stack, 3)
    return StepResult(rest + [rgb_to_hex(channels)])


def _rgb_scale(interp, stack: Stack) -> StepResult:
    rest, scale = take_number(stack)
    rest, channels = take(rest, 3)
    return StepResult(rest + [rgb_to_hex(channels, scale)])


def _hex_rgb(interp, stack: Stack) -> StepResult:
    channels = hex_to_rgb(stack[-1])
    return StepResult(stack[:-1] + [format_number(c) for c in channels])


def _hex_rgb_average(interp, stack: Stack) -> StepResult:
    rest, codes = take(stack, 2)
    return StepResult(rest + [average_colors(codes)])


# =============================================================================
# Table
# =============================================================================

class BuiltinTable:
    """Registry of built-in operators, keyed by symbol.

    The table is filled once in the constructor and not changed afterwards.
    """

    def __init__(self):
        self._builtins: Dict[str, Builtin] = {}
        self._install_nullary()
        self._install_unary()
        self._install_conversions()
        self._install_binary()
        self._install_ternary()
        self._install_stack()
        self._install_functions()
        self._install_colors()

    def _register(self, name: str, arity: int, handler, listed: bool = True):
        if name in self._builtins:
            raise ValueError(f"builtin '{name}' registered twice")
        self._builtins[name] = Builtin(name, arity, handler, listed)

    def get(self, name: str) -> Optional[Builtin]:
        return self._builtins.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._builtins

    def __iter__(self) -> Iterator[Builtin]:
        return iter(self._builtins.values())

    def __len__(self) -> int:
        return len(self._builtins)

    def names(self, listed_only: bool = False) -> List[str]:
        """Sorted builtin symbols."""
        return sorted(b.name for b in self if b.listed or not listed_only)

    def listing(self) -> str:
        """Text of the 'cmds' command."""
        return ' '.join(self.names(listed_only=True))

    # -------------------------------------------------------------------------

    def _install_nullary(self):
        self._register('pi', 0, constant(math.pi))
        self._register('e', 0, constant(math.e))
        self._register('magic8', 0, message(_magic8), listed=False)
        self._register('cmds', 0, message(lambda interp: interp.builtins.listing()))
        self._register('help', 0, message(lambda interp: HELP_TEXT))

    def _install_unary(self):
        self._register('abs', 1, unary(abs))
        self._register('chs', 1, unary(lambda a: -a))
        self._register('floor', 1, unary(floor))
        self._register('ceil', 1, unary(ceil))
        self._register('inv', 1, unary(lambda a: divide(1.0, a)))
        self._register('ln', 1, unary(natural_log))
        self._register('log', 1, unary(log10))
        self._register('log2', 1, unary(log2))
        self._register('log10', 1, unary(log10))
        self._register('rand', 1, _random_below)
        self._register('round', 1, unary(round_half_up))
        self._register('sgn', 1, unary(sign))
        self._register('sqrt', 1, unary(ieee(math.sqrt)))
        self._register('tng', 1, unary(lambda a: a * (a + 1) / 2))
        self._register('!', 1, unary(factorial))

        # Trigonometry (radians)
        self._register('deg_rad', 1, unary(lambda a: a / DEG_PER_RAD))
        self._register('rad_deg', 1, unary(lambda a: a * DEG_PER_RAD))
        self._register('sin', 1, unary(ieee(math.sin)))
        self._register('cos', 1, unary(ieee(math.cos)))
        self._register('tan', 1, unary(ieee(math.tan)))
        self._register('asin', 1, unary(ieee(math.asin)))
        self._register('acos', 1, unary(ieee(math.acos)))
        self._register('atan', 1, unary(ieee(math.atan)))

        # Units
        self._register('c_f', 1, unary(lambda a: a * 9 / 5 + 32))
        self._register('f_c', 1, unary(lambda a: (a - 32) * 5 / 9))
        self._register('mi_km', 1, unary(lambda a: a * KILOMETERS_PER_MILE))
        self._register('km_mi', 1, unary(lambda a: a / KILOMETERS_PER_MILE))
        self._register('m_ft', 1, unary(lambda a: a * FEET_PER_METER))
        self._register('ft_m', 1, unary(lambda a: a / FEET_PER_METER))
        self._register('kg_lb', 1, unary(lambda a: a * POUNDS_PER_KILOGRAM))
        self._register('lb_kg', 1, unary(lambda a: a / POUNDS_PER_KILOGRAM))

        # Bits
        self._register('not', 1, unary(lambda a: ~to_int32(a)))
        self._register('ones', 1, unary(count_ones))

    def _install_conversions(self):
        self._register('dec_hex', 1, reinterpret(10, 16))
        self._register('hex_dec', 1, reinterpret(16, 10))
        self._register('dec_bin', 1, reinterpret(10, 2))
        self._register('bin_dec', 1, reinterpret(2, 10))
        self._register('dec_oct', 1, reinterpret(10, 8))
        self._register('oct_dec', 1, reinterpret(8, 10))
        self._register('hex_bin', 1, reinterpret(16, 2))
        self._register('bin_hex', 1, reinterpret(2, 16))
        self._register('dec_asc', 1, _from_char_code)
        self._register('asc_dec', 1, _char_code)

    def _install_binary(self):
        self._register('+', 2, binary(lambda a, b: a + b))
        self._register('-', 2, binary(lambda a, b: a - b))
        self._register('x', 2, binary(lambda a, b: a * b))
        self._register('/', 2, binary(divide))
        self._register('%', 2, binary(modulo))
        self._register('^', 2, binary(power))
        self._register('min', 2, binary(lambda a, b: NAN if math.isnan(a) or math.isnan(b) else min(a, b)))
        self._register('max', 2, binary(lambda a, b: NAN if math.isnan(a) or math.isnan(b) else max(a, b)))
        self._register('nroot', 2, binary(nth_root))
        self._register('gcd', 2, binary(gcd))
        self._register('logn', 2, binary(log_base))

        self._register('and', 2, bitwise(lambda a, b: a & b))
        self._register('or', 2, bitwise(lambda a, b: a | b))
        self._register('xor', 2, bitwise(lambda a, b: a ^ b))
        self._register('nand', 2, bitwise(lambda a, b: ~(a & b)))
        self._register('nor', 2, bitwise(lambda a, b: ~(a | b)))
        self._register('xnor', 2, bitwise(lambda a, b: ~(a ^ b)))
        self._register('>>', 2, bitwise(shift_right))
        self._register('<<', 2, bitwise(shift_left))

    def _install_ternary(self):
        self._register('proot', 3, _quadratic_roots)
        self._register('to', 3, _range)

    def _install_stack(self):
        self._register('cls', 0, lambda interp, stack: StepResult([]))
        self._register('dup', 1, lambda interp, stack: StepResult(stack + stack[-1:]))
        self._register('drop', 1, lambda interp, stack: StepResult(stack[:-1]))
        self._register('dropn', 1, _drop_n)
        self._register('rev', 0, lambda interp, stack: StepResult(stack[::-1]))
        self._register('reverse', 0, lambda interp, stack: StepResult(stack[::-1]))
        self._register('roll', 0, _roll)
        self._register('rolln', 1, _roll_n)
        self._register('rot', 0, _rot)
        self._register('rotn', 1, _rot_n)
        self._register('swap', 2, _swap)
        self._register('head', 1, lambda interp, stack: StepResult(stack[:1]))
        self._register('tail', 0, lambda interp, stack: StepResult(stack[1:]))
        self._register('init', 0, lambda interp, stack: StepResult(stack[:-1]))
        self._register('last', 1, lambda interp, stack: StepResult(stack[-1:]))
        self._register('taken', 1, _take_n)
        self._register('sum', 0, _sum)
        self._register('prod', 0, _product)
        self._register('avg', 1, _average)
        self._register('io', 1, _iota)

    def _install_functions(self):
        self._register(DEFINE_START, 0, _begin_definition, listed=False)
        self._register('store', 2, _store)
        self._register('map', 0, _map)
        self._register('fold', 0, fold('fold'))
        self._register('reduce', 0, fold('reduce'))

    def _install_colors(self):
        self._register('rgb_hex', 3, _rgb_hex)
        self._register('rgbx', 4, _rgb_scale)
        self._register('hex_rgb', 1, _hex_rgb)
        self._register('hex_rgbavg', 2, _hex_rgb_average)
