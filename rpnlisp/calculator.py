"""
rpnlisp calculator.

Coordinates the lexer and interpreter for one session: keeps the stack
between lines, collects messages, and provides the command-line interface.
"""

import sys
from typing import List, Optional

from .interpreter import (
    Interpreter, InterpreterError, DEFAULT_MAX_DEPTH, DEFAULT_MAX_ITERATIONS,
)
from .lexer import Lexer


PROMPT = 'exp: '


def printable(value: str) -> str:
    """Escape characters that cannot be written as UTF-8 (lone surrogates)."""
    return value.encode('utf-8', 'backslashreplace').decode('utf-8')


class RPNCalculator:
    """Session around an Interpreter: stack, messages and error reporting."""

    def __init__(self, verbose: bool = False, max_depth: int = DEFAULT_MAX_DEPTH,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS, seed: Optional[int] = None,
                 echo_messages: bool = True):
        self.verbose = verbose
        self.echo_messages = echo_messages
        self.interpreter = Interpreter(message_sink=self._on_message,
                                       max_depth=max_depth,
                                       max_iterations=max_iterations,
                                       verbose=verbose, seed=seed)
        self.stack: List[str] = []
        self.messages: List[str] = []

    def log(self, message: str):
        """Print log message if verbose mode is enabled."""
        if self.verbose:
            print(f"[rpnlisp] {message}", file=sys.stderr)

    def _on_message(self, message: str):
        self.messages.append(message)
        if self.echo_messages:
            print(message)

    def evaluate_line(self, line: str, filename: str = "<input>") -> bool:
        """
        Evaluate one line of input against the session stack.

        Args:
            line: Expression text
            filename: Name used in lexer error locations

        Returns:
            True if evaluation succeeded, False otherwise (the stack is kept)
        """
        try:
            tokens = Lexer(line, filename).tokenize()
            self.log(f"tokens: {tokens}")
            self.stack = self.interpreter.evaluate(tokens, self.stack)
            return True
        except SyntaxError as e:
            print(f"Syntax error: {e}", file=sys.stderr)
            return False
        except InterpreterError as e:
            print(f"Error: {e}", file=sys.stderr)
            return False

    def run_file(self, input_path: str) -> bool:
        """
        Evaluate a script file as a single expression.

        Definitions may span lines, since the whole file is tokenized at once.

        Returns:
            True if evaluation succeeded, False otherwise
        """
        try:
            self.log(f"Reading {input_path}...")
            with open(input_path, 'r', encoding='utf-8') as f:
                source = f.read()
        except FileNotFoundError:
            print(f"Error: File not found: {input_path}", file=sys.stderr)
            return False

        return self.evaluate_line(source, str(input_path))

    def format_stack(self) -> str:
        """Stack contents, bottom first, one element per line."""
        if not self.stack:
            return '(empty)'
        size = len(self.stack)
        width = len(str(size - 1))
        return '\n'.join(f"{size - 1 - i:>{width}}: {printable(value)}"
                         for i, value in enumerate(self.stack))

    def format_user_commands(self) -> str:
        names = self.interpreter.user_function_names()
        return 'custom: ' + ' '.join(names) if names else ''

    def repl(self):
        """Interactive loop: read a line, evaluate it, show the stack."""
        print("rpnlisp - enter 'help' for help, 'cmds' to list commands, Ctrl-D to exit")
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print()
                continue

            if not line.strip():
                continue

            self.evaluate_line(line)
            print(self.format_stack())
            custom = self.format_user_commands()
            if custom:
                print(custom)


def main(argv: Optional[List[str]] = None):
    """Command-line interface for the calculator."""
    import argparse

    parser = argparse.ArgumentParser(
        description='rpnlisp - Reverse-Polish list processor calculator'
    )
    parser.add_argument('scripts', nargs='*', help='Script files to evaluate in order')
    parser.add_argument('-e', '--expr', action='append',
                        help='Expression to evaluate (can be used multiple times)')
    parser.add_argument('-i', '--interactive', action='store_true',
                        help='Start the interactive prompt after scripts and expressions')
    parser.add_argument('--max-depth', type=int, default=DEFAULT_MAX_DEPTH,
                        help=f'Maximum user-function nesting (default: {DEFAULT_MAX_DEPTH})')
    parser.add_argument('--max-iterations', type=int, default=DEFAULT_MAX_ITERATIONS,
                        help=f'Maximum fold steps or range length (default: {DEFAULT_MAX_ITERATIONS})')
    parser.add_argument('--seed', type=int,
                        help='Seed for rand and magic8')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose output')

    args = parser.parse_args(argv)

    calculator = RPNCalculator(verbose=args.verbose, max_depth=args.max_depth,
                               max_iterations=args.max_iterations, seed=args.seed)

    batch = bool(args.scripts or args.expr)
    success = True
    for path in args.scripts:
        if not calculator.run_file(path):
            success = False
            break
    if success:
        for expr in args.expr or []:
            if not calculator.evaluate_line(expr):
                success = False
                break

    if batch:
        print(' '.join(printable(value) for value in calculator.stack))

    if args.interactive or not batch:
        calculator.repl()
        success = True

    sys.exit(0 if success else 1)


if __name__ == '__main__':
    main()
