"""
rpnlisp Lexer - Splits expression text into tokens.

Handles:
- Whitespace separation (spaces, tabs, newlines)
- Case folding (all tokens are lowercased)

Tokens are plain strings. Whether a token is a number, an operator or a
function name is decided later by the interpreter's table lookups, so the
lexer performs no further classification or normalization.
"""

from typing import List, Optional


class Lexer:
    """Tokenizes rpnlisp expressions."""

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[str] = []

    def error(self, message: str):
        """Raise a lexer error with location information."""
        raise SyntaxError(f"{self.filename}:{self.line}:{self.column}: {message}")

    def peek(self) -> Optional[str]:
        """Peek at the character at the current position."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        ch = self.source[self.pos]
        self.pos += 1

        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return ch

    def skip_whitespace(self):
        """Skip whitespace characters."""
        while self.peek() and self.peek().isspace():
            self.advance()

    def read_word(self) -> str:
        """Read a run of non-whitespace characters."""
        start = self.pos
        while self.peek() and not self.peek().isspace():
            self.advance()
        return self.source[start:self.pos]

    def tokenize(self) -> List[str]:
        """Tokenize the entire source."""
        if not isinstance(self.source, str):
            self.error(f"expected text, got {type(self.source).__name__}")

        while self.pos < len(self.source):
            self.skip_whitespace()

            if self.pos >= len(self.source):
                break

            word = self.read_word()
            if word:
                self.tokens.append(word.lower())

        return self.tokens


def tokenize(source: str, filename: str = "<input>") -> List[str]:
    """Convenience function to tokenize an rpnlisp expression."""
    lexer = Lexer(source, filename)
    return lexer.tokenize()
