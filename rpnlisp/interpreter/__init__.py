"""rpnlisp Interpreter - Evaluates token sequences against a value stack."""

from .interpreter import Interpreter, EvalResult, DEFAULT_MAX_DEPTH, DEFAULT_MAX_ITERATIONS
from .builtins import Builtin, BuiltinTable
from .functions import FunctionStore, LAMBDA_NAME
from .recorder import Recorder, RecorderState, DEFINE_START, DEFINE_END
from .stack import Stack, StepResult
from .errors import (
    InterpreterError, StackUnderflowError, UnterminatedDefinitionError,
    UndefinedFunctionError, NonTerminatingReductionError,
    RecursionLimitError, IterationLimitError,
)

__all__ = [
    'Interpreter', 'EvalResult', 'DEFAULT_MAX_DEPTH', 'DEFAULT_MAX_ITERATIONS',
    'Builtin', 'BuiltinTable',
    'FunctionStore', 'LAMBDA_NAME',
    'Recorder', 'RecorderState', 'DEFINE_START', 'DEFINE_END',
    'Stack', 'StepResult',
    'InterpreterError', 'StackUnderflowError', 'UnterminatedDefinitionError',
    'UndefinedFunctionError', 'NonTerminatingReductionError',
    'RecursionLimitError', 'IterationLimitError',
]
