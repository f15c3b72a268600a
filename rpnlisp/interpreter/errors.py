"""
Interpreter exceptions.

Every structural failure aborts the current evaluation call and reaches the
caller as an InterpreterError subclass. Numeric parse failures are not
errors: they produce a NaN token instead.
"""


class InterpreterError(Exception):
    """Base exception for interpreter errors."""
    pass


class StackUnderflowError(InterpreterError):
    """An operator needed more stack elements than were available."""

    def __init__(self, symbol: str, required: int, available: int):
        self.symbol = symbol
        self.required = required
        self.available = available
        super().__init__(
            f"stack underflow: '{symbol}' needs {required} "
            f"value{'s' if required != 1 else ''}, stack has {available}"
        )


class UnterminatedDefinitionError(InterpreterError):
    """Input ended while a function definition was still being recorded."""

    def __init__(self, name=None):
        self.name = name
        if name is None:
            message = "unterminated definition: missing function name"
        else:
            message = f"unterminated definition of '{name}': missing ')'"
        super().__init__(message)


class UndefinedFunctionError(InterpreterError):
    """A higher-order command needs a function that was never defined."""

    def __init__(self, name: str, command: str):
        self.name = name
        self.command = command
        super().__init__(f"'{command}' needs function '{name}', define it with ( {name} ... )")


class NonTerminatingReductionError(InterpreterError):
    """Evaluation exceeded a configured limit instead of terminating."""
    pass


class RecursionLimitError(NonTerminatingReductionError):
    """User-function nesting went deeper than max_depth."""

    def __init__(self, name: str, limit: int):
        self.name = name
        self.limit = limit
        super().__init__(f"recursion limit of {limit} exceeded calling '{name}'")


class IterationLimitError(NonTerminatingReductionError):
    """A fold or range generator ran longer than max_iterations."""

    def __init__(self, command: str, limit: int):
        self.command = command
        self.limit = limit
        super().__init__(f"'{command}' did not finish within {limit} iterations")
