"""Fiat-Shamir random generator fed with protocol messages."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from dataclasses import fields, is_dataclass
from typing import Iterator

from .errors import SerializationError
from .field import Fr

_DIGEST_SIZE = 64
_U64_LIMIT = 1 << 64


def _serialize_parts(msg) -> Iterator[bytes]:
    if isinstance(msg, Fr):
        yield msg.to_bytes()
    elif isinstance(msg, bool):
        yield bytes([msg])
    elif isinstance(msg, int):
        if not 0 <= msg < _U64_LIMIT:
            raise SerializationError(f"integer {msg} does not fit in 64 unsigned bits")
        yield msg.to_bytes(8, "little")
    elif isinstance(msg, (bytes, bytearray, memoryview)):
        yield bytes(msg)
    elif is_dataclass(msg) and not isinstance(msg, type):
        for item in fields(msg):
            yield from _serialize_parts(getattr(msg, item.name))
    elif isinstance(msg, list):
        yield len(msg).to_bytes(8, "little")
        for item in msg:
            yield from _serialize_parts(item)
    elif isinstance(msg, tuple):
        for item in msg:
            yield from _serialize_parts(item)
    else:
        raise SerializationError(f"cannot serialize {type(msg).__name__}")


def serialize(msg) -> bytes:
    """Serialize a message in canonical uncompressed form.

    Field elements take 32 little-endian bytes, integers 8, booleans 1.
    Byte strings and tuples are written as they are, lists carry an
    8-byte length prefix, and dataclasses write their fields in order.
    """
    return b"".join(_serialize_parts(msg))


class FeedableRNG(ABC):
    """Random generator whose output depends on every message fed to it.

    The same sequence of ``feed`` and draw calls yields the same output.
    """

    @abstractmethod
    def feed(self, msg) -> None:
        """Add the serialized message to the generator's entropy."""

    @abstractmethod
    def fill_bytes(self, size: int) -> bytes:
        """Return ``size`` pseudorandom bytes."""


class Blake2b512Rng(FeedableRNG):
    """Pseudorandom generator over a running 512-bit BLAKE2b digest."""

    def __init__(self) -> None:
        self._state = hashlib.blake2b(digest_size=_DIGEST_SIZE)

    def feed(self, msg) -> None:
        self._state.update(serialize(msg))

    def fill_bytes(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("size must not be negative")
        output = self._state.copy().digest()
        result = bytearray()
        position = 0
        while len(result) < size:
            take = min(_DIGEST_SIZE - position, size - len(result))
            result += output[position:position + take]
            position += take
            if position == _DIGEST_SIZE:
                self._state.update(output)
                output = self._state.copy().digest()
                position = 0
        self._state.update(output)
        return bytes(result)

    def next_u32(self) -> int:
        return int.from_bytes(self.fill_bytes(4), "little")

    def next_u64(self) -> int:
        return int.from_bytes(self.fill_bytes(8), "little")