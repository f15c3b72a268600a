"""
Function definition recorder.

A definition is written as ``( name token token ... )``. The ``(`` builtin
starts the recorder; the next token becomes the name and every following
token is captured into the body until the matching ``)``.

Nested ``(`` / ``)`` pairs inside a body only adjust the nesting depth so the
outer definition does not end early. The markers themselves are not stored.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple


DEFINE_START = '('
DEFINE_END = ')'


class RecorderState(Enum):
    """Recorder states."""
    IDLE = auto()           # tokens are evaluated
    AWAITING_NAME = auto()  # '(' seen, next token names the function
    RECORDING = auto()      # tokens are captured into the body


class Recorder:
    """State machine that captures function bodies."""

    def __init__(self, start_marker: str = DEFINE_START, end_marker: str = DEFINE_END):
        self.start_marker = start_marker
        self.end_marker = end_marker
        self.state = RecorderState.IDLE
        self.name: Optional[str] = None
        self.depth = 0
        self.body: List[str] = []

    @property
    def active(self) -> bool:
        """True while tokens should be fed to the recorder."""
        return self.state is not RecorderState.IDLE

    def begin(self):
        """Start a definition; the next token fed is its name."""
        self.state = RecorderState.AWAITING_NAME
        self.name = None
        self.depth = 0
        self.body = []

    def feed(self, token: str) -> Optional[Tuple[str, List[str]]]:
        """Consume one token.

        Returns:
            (name, body) once the closing marker ends the definition,
            otherwise None
        """
        if self.state is RecorderState.AWAITING_NAME:
            self.name = token
            self.state = RecorderState.RECORDING
            return None

        if token == self.end_marker:
            if self.depth == 0:
                definition = (self.name, self.body)
                self.reset()
                return definition
            self.depth -= 1
            return None

        if token == self.start_marker:
            self.depth += 1
            return None

        self.body.append(token)
        return None

    def reset(self):
        """Return to IDLE, abandoning any partial definition."""
        self.state = RecorderState.IDLE
        self.name = None
        self.depth = 0
        self.body = []
