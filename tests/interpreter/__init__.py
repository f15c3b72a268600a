"""
Tests for the rpnlisp interpreter.

These tests verify that the interpreter correctly handles:
- Arithmetic, trigonometric, logarithmic and bitwise operators
- Numeric base and character code conversions
- Stack shape, aggregate and range operators
- Function recording, store, map and fold
- Messages sent to the message sink
- Stack underflow, unterminated definitions and runaway evaluation
"""
