#!/usr/bin/env python3
"""
rpnlisp calculator entry point.

Usage: python rpnlisp.py [script.rpn ...] [-e EXPR] [--verbose]
"""

from rpnlisp.calculator import main

if __name__ == '__main__':
    main()
