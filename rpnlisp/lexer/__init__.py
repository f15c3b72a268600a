"""rpnlisp Lexer - Splits expression text into lowercase tokens."""

from .lexer import Lexer, tokenize

__all__ = ['Lexer', 'tokenize']
