"""Arithmetic in the scalar field of the BLS12-381 curve."""

from __future__ import annotations

from typing import Union

from .errors import SerializationError

MODULUS = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001

_BYTE_LENGTH = 32
_BIT_MASK = (1 << MODULUS.bit_length()) - 1


def _random_bytes(rng, size: int) -> bytes:
    """Draw ``size`` bytes from an rng with ``fill_bytes`` or ``randbytes``."""
    fill = getattr(rng, "fill_bytes", None)
    if fill is not None:
        return bytes(fill(size))
    return rng.randbytes(size)


class Fr:
    """An element of the prime field of order ``MODULUS``."""

    __slots__ = ("value",)

    MODULUS = MODULUS

    def __init__(self, value: Union[int, "Fr"] = 0) -> None:
        if isinstance(value, Fr):
            value = value.value
        elif not isinstance(value, int):
            raise TypeError(f"cannot build a field element from {type(value).__name__}")
        self.value = value % MODULUS

    @staticmethod
    def _coerce(other):
        if isinstance(other, Fr):
            return other
        if isinstance(other, int):
            return Fr(other)
        return NotImplemented

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return Fr(self.value + other.value)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return Fr(self.value - other.value)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return Fr(other.value - self.value)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return Fr(self.value * other.value)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self * other.inverse()

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other * self.inverse()

    def __neg__(self) -> "Fr":
        return Fr(-self.value)

    def __pow__(self, exponent: int) -> "Fr":
        if not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            return self.inverse() ** (-exponent)
        return Fr(pow(self.value, exponent, MODULUS))

    def __eq__(self, other) -> bool:
        if isinstance(other, Fr):
            return self.value == other.value
        if isinstance(other, int):
            return self.value == other % MODULUS
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __bool__(self) -> bool:
        return self.value != 0

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Fr({self.value})"

    def __str__(self) -> str:
        return str(self.value)

    def inverse(self) -> "Fr":
        """Return the multiplicative inverse; zero has none."""
        if self.value == 0:
            raise ZeroDivisionError("zero has no inverse in the field")
        return Fr(pow(self.value, -1, MODULUS))

    def to_bytes(self) -> bytes:
        """Serialize as 32 little-endian bytes."""
        return self.value.to_bytes(_BYTE_LENGTH, "little")

    @classmethod
    def from_bytes(cls, data) -> "Fr":
        """Read an element written by :meth:`to_bytes`."""
        data = bytes(data)
        if len(data) != _BYTE_LENGTH:
            raise SerializationError(
                f"expected {_BYTE_LENGTH} bytes, got {len(data)}"
            )
        value = int.from_bytes(data, "little")
        if value >= MODULUS:
            raise SerializationError("value is not a canonical field element")
        return cls(value)

    @classmethod
    def random(cls, rng) -> "Fr":
        """Sample a uniform element by rejection from ``rng``."""
        while True:
            value = int.from_bytes(_random_bytes(rng, _BYTE_LENGTH), "little") & _BIT_MASK
            if value < MODULUS:
                return cls(value)