"""
rpnlisp interpreter.

Evaluates a token sequence left to right against a stack. For each token:

1. while a definition is being recorded, the token goes to the recorder
2. a builtin symbol runs its handler on the current stack
3. a user function name evaluates the function body on the current stack
4. anything else is pushed as a literal value

User functions share the caller's stack; there are no frames or scopes.
Nesting of user-function calls (including map and fold applications) is
bounded by max_depth, and loops by max_iterations, so runaway definitions
end in an error instead of hanging.
"""

import random
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .builtins import BuiltinTable
from .errors import InterpreterError, RecursionLimitError, UnterminatedDefinitionError
from .functions import FunctionStore
from .recorder import Recorder
from .stack import Stack, require


DEFAULT_MAX_DEPTH = 128
DEFAULT_MAX_ITERATIONS = 100000

MessageSink = Callable[[str], None]


@dataclass
class EvalResult:
    """Result of evaluating a token sequence."""
    stack: Stack
    messages: List[str] = field(default_factory=list)


class Interpreter:
    """Postfix command interpreter with user-defined functions."""

    def __init__(self, message_sink: Optional[MessageSink] = None,
                 max_depth: int = DEFAULT_MAX_DEPTH,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS,
                 verbose: bool = False, seed: Optional[int] = None):
        self.message_sink = message_sink
        self.max_depth = max_depth
        self.max_iterations = max_iterations
        self.verbose = verbose
        self.random = random.Random(seed)

        self.builtins = BuiltinTable()
        self.functions = FunctionStore()
        self.recorder = Recorder()

        self.warnings: List[str] = []
        self._depth = 0
        self._messages: List[str] = []

    def log(self, message: str):
        """Print log message if verbose mode is enabled."""
        if self.verbose:
            print(f"[rpnlisp] {message}", file=sys.stderr)

    def warn(self, code: str, message: str):
        """Add a warning with a code."""
        warning = f"{code}: {message}"
        self.warnings.append(warning)
        if self.verbose:
            print(f"[rpnlisp] Warning: {warning}", file=sys.stderr)

    def get_warnings(self) -> List[str]:
        """Get all warnings generated so far."""
        return self.warnings.copy()

    # =========================================================================
    # Public interface
    # =========================================================================

    def set_message_sink(self, sink: Optional[MessageSink]):
        """Replace the message callback; None drops messages."""
        self.message_sink = sink

    def user_function_names(self) -> List[str]:
        """Names of user-defined functions in definition order."""
        return self.functions.user_names()

    def run(self, tokens: Sequence[str], stack: Sequence[str] = ()) -> EvalResult:
        """
        Evaluate tokens against a stack.

        Args:
            tokens: Token sequence, as produced by the lexer
            stack: Initial stack; it is not modified

        Returns:
            EvalResult with the new stack and the messages emitted

        Raises:
            InterpreterError: on stack underflow, an unterminated definition,
                or a recursion/iteration limit. Functions defined by earlier
                tokens of the same call stay defined; the recorder is reset.
        """
        self._messages = []
        try:
            result = self._evaluate(tokens, list(stack))
            if self.recorder.active:
                raise UnterminatedDefinitionError(self.recorder.name)
        except InterpreterError as e:
            self.log(f"evaluation failed: {e}")
            self.recorder.reset()
            self._messages = []
            raise
        finally:
            self._depth = 0

        messages, self._messages = self._messages, []
        return EvalResult(result, messages)

    def evaluate(self, tokens: Sequence[str], stack: Sequence[str] = ()) -> Stack:
        """Evaluate tokens and send any messages to the message sink."""
        result = self.run(tokens, stack)
        if self.message_sink is not None:
            for message in result.messages:
                self.message_sink(message)
        return result.stack

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _evaluate(self, tokens: Sequence[str], stack: Stack) -> Stack:
        for token in tokens:
            stack = self._step(token, stack)
        return stack

    def _step(self, token: str, stack: Stack) -> Stack:
        if self.recorder.active:
            definition = self.recorder.feed(token)
            if definition is not None:
                self.define_function(*definition)
            return stack

        builtin = self.builtins.get(token)
        if builtin is not None:
            require(stack, builtin.arity, token)
            result = builtin.handler(self, stack)
            if result.message is not None:
                self._messages.append(result.message)
            return result.stack

        body = self.functions.get(token)
        if body is not None:
            return self.call_function(token, body, stack)

        return stack + [token]

    def call_function(self, name: str, body: Sequence[str], stack: Stack) -> Stack:
        """Evaluate a function body on stack, one level deeper."""
        if self._depth >= self.max_depth:
            raise RecursionLimitError(name, self.max_depth)
        self._depth += 1
        try:
            return self._evaluate(body, list(stack))
        except RecursionError:
            # Python's own frame limit was reached before max_depth
            raise RecursionLimitError(name, self._depth) from None
        finally:
            self._depth -= 1

    # =========================================================================
    # Function store updates
    # =========================================================================

    def define_function(self, name: str, body: List[str]):
        """Store a recorded definition."""
        if name in self.builtins:
            self.warn("RPN0101", f"function '{name}' is hidden by the builtin of the same name")
        self.functions.define(name, body)
        self.log(f"defined {name}: {' '.join(body) or '(empty)'}")

    def store_function(self, name: str, body: List[str]):
        """Store a value under a name (the 'store' command)."""
        if name in self.builtins:
            self.warn("RPN0102", f"stored value '{name}' is hidden by the builtin of the same name")
        self.functions.define(name, body)
        self.log(f"stored {name} = {' '.join(body)}")
