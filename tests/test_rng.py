import hashlib
import random
from dataclasses import dataclass

import pytest

from mlsumcheck.errors import SerializationError
from mlsumcheck.field import Fr
from mlsumcheck.rng import Blake2b512Rng, FeedableRNG, serialize


def _rw_sequence(r, msgs):
    out = []
    r.feed(msgs[0])
    out.append(Fr.random(r))
    out.append(Fr.random(r))
    r.feed(msgs[1])
    r.feed(msgs[2])
    out.append(Fr.random(r))
    r.feed(msgs[3])
    out.append(Fr.random(r))
    out.append(Fr.random(r))
    r.feed(msgs[4])
    r.feed(msgs[5])
    r.feed(msgs[6])
    f1 = Fr.random(r)
    out.append(f1)
    f2 = Fr.random(r)
    out.append(f2)
    assert f1 != f2, "Producing same element"
    out.append(Fr.random(r))
    out.append(Fr.random(r))
    buf1 = r.fill_bytes(127)
    r.feed(buf1)
    buf2 = r.fill_bytes(128)
    buf3 = r.fill_bytes(777)
    assert buf2[:64] != buf3[:64]
    out.append(Fr.random(r))
    r.feed(buf3)
    out.append(Fr.random(r))
    return out


@pytest.mark.parametrize("seed", range(5))
def test_deterministic_pseudorandom_generator(seed):
    source = random.Random(seed)
    msgs = [source.randbytes(128) for _ in range(7)]
    expected = _rw_sequence(Blake2b512Rng(), msgs)
    assert len(expected) == 11
    for _ in range(10):
        assert _rw_sequence(Blake2b512Rng(), msgs) == expected


def test_fresh_output_is_digest_of_empty_state():
    assert Blake2b512Rng().fill_bytes(64) == hashlib.blake2b().digest()


def test_prefix_consistency_and_length():
    long = Blake2b512Rng().fill_bytes(777)
    assert len(long) == 777
    assert Blake2b512Rng().fill_bytes(10) == long[:10]


def test_state_advances():
    r = Blake2b512Rng()
    first = r.fill_bytes(32)
    second = r.fill_bytes(32)
    empty_digest = hashlib.blake2b().digest()
    assert first == empty_digest[:32]
    assert second == hashlib.blake2b(empty_digest).digest()[:32]
    assert first != second


def test_feed_changes_output():
    a, b, c = Blake2b512Rng(), Blake2b512Rng(), Blake2b512Rng()
    a.feed(b"Test Trivial Works")
    b.feed(b"Test Trivial Fails")
    c.feed(b"Test Trivial Works")
    out_a = a.fill_bytes(32)
    assert out_a != b.fill_bytes(32)
    assert out_a == c.fill_bytes(32)


def test_next_integers_match_bytes():
    assert Blake2b512Rng().next_u32() == int.from_bytes(Blake2b512Rng().fill_bytes(4), "little")
    assert Blake2b512Rng().next_u64() == int.from_bytes(Blake2b512Rng().fill_bytes(8), "little")


@dataclass
class _Info:
    max_multiplicands: int
    num_variables: int


def test_serialize_formats():
    assert serialize(Fr(1)) == Fr(1).to_bytes()
    assert serialize(b"ab") == b"ab"
    assert serialize(True) == b"\x01"
    assert serialize(_Info(2, 3)) == (2).to_bytes(8, "little") + (3).to_bytes(8, "little")
    assert serialize([Fr(1), Fr(2)]) == (
        (2).to_bytes(8, "little") + Fr(1).to_bytes() + Fr(2).to_bytes()
    )
    assert serialize((Fr(1), Fr(2))) == Fr(1).to_bytes() + Fr(2).to_bytes()


@pytest.mark.parametrize("bad", ["text", -1, 1 << 64, 1.5])
def test_serialize_rejects_unsupported(bad):
    with pytest.raises(SerializationError):
        serialize(bad)


def test_feed_rejects_unsupported():
    with pytest.raises(SerializationError):
        Blake2b512Rng().feed(object())


def test_feedable_rng_is_abstract():
    with pytest.raises(TypeError):
        FeedableRNG()