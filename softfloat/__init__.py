"""Bit-exact software IEEE-754 binary32/binary64 arithmetic, comparison and conversion."""

__version__ = "0.1.0"

__all__ = ["add", "cmp", "conv", "div", "extend", "format", "mul", "pow", "trunc"]