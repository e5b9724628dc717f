"""IEEE-754 binary interchange formats and bit-level helpers."""

from __future__ import annotations

import struct
from dataclasses import dataclass


def leading_zeros(value: int, width: int) -> int:
    """Count the leading zero bits of ``value`` seen as a ``width``-bit unsigned integer."""
    if not 0 <= value < (1 << width):
        raise ValueError(f"{value} does not fit in {width} unsigned bits")
    return width - value.bit_length()


@dataclass(frozen=True)
class FloatFormat:
    """A binary floating-point format described by its total and significand widths.

    Bit patterns are plain non-negative ints no wider than ``bits``.
    """

    name: str
    bits: int
    significand_bits: int
    float_code: str
    int_code: str

    @property
    def int_mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def exponent_bits(self) -> int:
        return self.bits - self.significand_bits - 1

    @property
    def exponent_max(self) -> int:
        return (1 << self.exponent_bits) - 1

    @property
    def exponent_bias(self) -> int:
        return self.exponent_max >> 1

    @property
    def sign_mask(self) -> int:
        return 1 << (self.bits - 1)

    @property
    def significand_mask(self) -> int:
        return (1 << self.significand_bits) - 1

    @property
    def implicit_bit(self) -> int:
        return 1 << self.significand_bits

    @property
    def exponent_mask(self) -> int:
        return self.int_mask & ~(self.sign_mask | self.significand_mask)

    def _check(self, bits: int) -> int:
        if not 0 <= bits <= self.int_mask:
            raise ValueError(f"{bits:#x} is not a {self.bits}-bit pattern")
        return bits

    def to_bits(self, value: float) -> int:
        """Return the bit pattern of ``value`` rounded to this format.

        Raises OverflowError if a finite value is too large for the format.
        """
        packed = struct.pack("<" + self.float_code, value)
        return struct.unpack("<" + self.int_code, packed)[0]

    def from_bits(self, bits: int) -> float:
        """Return the float whose bit pattern in this format is ``bits``."""
        packed = struct.pack("<" + self.int_code, self._check(bits))
        return struct.unpack("<" + self.float_code, packed)[0]

    def signed_repr(self, bits: int) -> int:
        """Reinterpret ``bits`` as a two's complement signed integer."""
        self._check(bits)
        return bits - (1 << self.bits) if bits & self.sign_mask else bits

    def _is_nan(self, bits: int) -> bool:
        return (bits & (self.sign_mask - 1)) > self.exponent_mask

    def eq_repr(self, a: int, b: int) -> bool:
        """Compare two patterns bit for bit, treating any two NaNs as equal."""
        if self._is_nan(a) and self._is_nan(b):
            return True
        return a == b

    def sign(self, bits: int) -> bool:
        """True when the sign bit is set."""
        return self.signed_repr(bits) < 0

    def exponent(self, bits: int) -> int:
        """The biased exponent field."""
        return (self._check(bits) & self.exponent_mask) >> self.significand_bits

    def fraction(self, bits: int) -> int:
        """The significand without its implicit bit."""
        return self._check(bits) & self.significand_mask

    def implicit_fraction(self, bits: int) -> int:
        """The significand with the implicit bit set."""
        return self.fraction(bits) | self.implicit_bit

    def from_parts(self, sign: bool, exponent: int, significand: int) -> int:
        """Assemble a bit pattern from a sign, a biased exponent and a significand."""
        return (
            (int(bool(sign)) << (self.bits - 1))
            | ((exponent << self.significand_bits) & self.exponent_mask)
            | (significand & self.significand_mask)
        )

    def normalize(self, significand: int) -> tuple[int, int]:
        """Shift a subnormal significand up to the implicit bit.

        Returns the adjusted exponent and the normalized significand.
        """
        shift = leading_zeros(significand, self.bits) - leading_zeros(
            self.implicit_bit, self.bits
        )
        return 1 - shift, (significand << shift) & self.int_mask

    def is_subnormal(self, bits: int) -> bool:
        """True when the exponent field is zero (subnormals and zeros)."""
        return (self._check(bits) & self.exponent_mask) == 0


F32 = FloatFormat("binary32", 32, 23, "f", "I")
F64 = FloatFormat("binary64", 64, 52, "d", "Q")