"""Allow running the calculator with ``python -m rpnlisp``."""

from .calculator import main

if __name__ == '__main__':
    main()
