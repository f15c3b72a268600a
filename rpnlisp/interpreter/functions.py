"""
User function storage.

Maps names to recorded token bodies. One reserved name holds the anonymous
function that map and fold apply.
"""

from typing import Dict, List, Optional

from .errors import UndefinedFunctionError


LAMBDA_NAME = '_'


class FunctionStore:
    """Named token bodies, in definition order."""

    def __init__(self, lambda_name: str = LAMBDA_NAME):
        self.lambda_name = lambda_name
        self._bodies: Dict[str, List[str]] = {}

    def define(self, name: str, body: List[str]):
        """Create or replace a function. A replaced function keeps its position."""
        self._bodies[name] = list(body)

    def get(self, name: str) -> Optional[List[str]]:
        return self._bodies.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._bodies

    def __len__(self) -> int:
        return len(self._bodies)

    def lambda_body(self, command: str) -> List[str]:
        """Body of the anonymous function, for the higher-order command named."""
        body = self._bodies.get(self.lambda_name)
        if body is None:
            raise UndefinedFunctionError(self.lambda_name, command)
        return body

    def user_names(self) -> List[str]:
        """Names of user functions, excluding the anonymous function."""
        return [name for name in self._bodies if name != self.lambda_name]
