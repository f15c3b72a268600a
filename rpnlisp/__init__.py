"""
RPN list processor (rpnlisp) - A postfix expression interpreter.

This package provides a small reverse-Polish command language that operates
on a single stack of text tokens, with user-recorded functions and
map/fold over an anonymous function.
"""

__version__ = "0.1.0"
__author__ = "rpnlisp Project"
