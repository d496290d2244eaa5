import random

import pytest

from mlsumcheck.errors import SerializationError
from mlsumcheck.field import MODULUS, Fr
from mlsumcheck.rng import Blake2b512Rng


def _samples(seed, count=10):
    rng = random.Random(seed)
    return [Fr.random(rng) for _ in range(count)]


def test_one_serializes_little_endian():
    assert Fr(1).to_bytes() == b"\x01" + bytes(31)


def test_reduction_modulo():
    assert Fr(-1) == Fr(MODULUS - 1)
    assert int(Fr(MODULUS)) == 0
    assert hash(Fr(5)) == hash(Fr(5 + MODULUS))


def test_bytes_round_trip():
    for value in _samples(1):
        data = value.to_bytes()
        assert len(data) == 32
        assert Fr.from_bytes(data) == value


def test_from_bytes_rejects_wrong_length():
    with pytest.raises(SerializationError):
        Fr.from_bytes(bytes(31))


def test_from_bytes_rejects_non_canonical():
    with pytest.raises(SerializationError):
        Fr.from_bytes(MODULUS.to_bytes(32, "little"))


def test_inverse():
    for value in _samples(2):
        if value:
            assert value * value.inverse() == Fr(1)
            assert value / value == Fr(1)


def test_zero_has_no_inverse():
    with pytest.raises(ZeroDivisionError):
        Fr(0).inverse()
    with pytest.raises(ZeroDivisionError):
        Fr(1) / Fr(0)


def test_field_laws():
    a, b, c = _samples(3, 3)
    assert (a + b) - b == a
    assert a * (b + c) == a * b + a * c
    assert -a + a == Fr(0)
    assert a ** (MODULUS - 1) == Fr(1)
    assert a ** -1 == a.inverse()


def test_mixing_with_ints():
    assert Fr(3) + 4 == 4 + Fr(3)
    assert Fr(3) + 4 == Fr(3) + Fr(4)
    assert 10 - Fr(3) == Fr(10) - Fr(3)
    assert 2 * Fr(5) == Fr(5) + Fr(5)


def test_rejects_non_integers():
    with pytest.raises(TypeError):
        Fr("1")


def test_random_is_deterministic_and_in_range():
    first = _samples(7)
    second = _samples(7)
    assert first == second
    assert all(0 <= int(x) < MODULUS for x in first)
    assert Fr.random(Blake2b512Rng()) == Fr.random(Blake2b512Rng())