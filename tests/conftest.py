"""
Shared pytest configuration for the rpnlisp test suite.

Makes the repository root importable so the tests run from a plain checkout.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
