import random

import pytest

from mlsumcheck.field import Fr
from mlsumcheck.polynomials import DenseMultilinearExtension, ListOfProductsOfPolynomials
from mlsumcheck.prover import ProverMsg, prove_round, prover_init
from mlsumcheck.rng import serialize
from mlsumcheck.verifier import VerifierMsg


def _random_poly(nv, seed=1):
    rng = random.Random(seed)
    mles = [DenseMultilinearExtension.random(nv, rng) for _ in range(3)]
    poly = ListOfProductsOfPolynomials(nv)
    poly.add_product([mles[0], mles[1]], Fr.random(rng))
    poly.add_product([mles[2], mles[0], mles[2]], Fr.random(rng))
    poly.add_product([mles[1]], Fr.random(rng))
    return poly


def _bits(index, count):
    return [Fr((index >> k) & 1) for k in range(count)]


def _sum_with_prefix(poly, prefix):
    rest = poly.num_variables - len(prefix)
    return sum(
        (poly.evaluate(list(prefix) + _bits(b, rest)) for b in range(1 << rest)),
        Fr(0),
    )


def test_constant_polynomial_rejected():
    with pytest.raises(ValueError):
        prover_init(ListOfProductsOfPolynomials(0))


def test_first_message_sums_to_total():
    poly = _random_poly(3)
    state = prover_init(poly)
    msg = prove_round(state, None)
    assert len(msg.evaluations) == poly.max_multiplicands + 1
    assert msg.evaluations[0] + msg.evaluations[1] == _sum_with_prefix(poly, [])


def test_first_message_evaluations_match_partial_sums():
    poly = _random_poly(3, seed=5)
    state = prover_init(poly)
    msg = prove_round(state, None)
    for t, value in enumerate(msg.evaluations):
        assert value == _sum_with_prefix(poly, [Fr(t)])


def test_second_round_uses_randomness():
    poly = _random_poly(3, seed=9)
    state = prover_init(poly)
    prove_round(state, None)
    r = Fr(123456789)
    msg = prove_round(state, VerifierMsg(r))
    assert state.randomness == [r]
    assert state.round == 2
    assert msg.evaluations[0] + msg.evaluations[1] == _sum_with_prefix(poly, [r])


def test_message_before_first_round_rejected():
    state = prover_init(_random_poly(2))
    with pytest.raises(RuntimeError):
        prove_round(state, VerifierMsg(Fr(1)))


def test_missing_message_after_first_round_rejected():
    state = prover_init(_random_poly(2))
    prove_round(state, None)
    with pytest.raises(RuntimeError):
        prove_round(state, None)


def test_prover_inactive_after_last_round():
    state = prover_init(_random_poly(2))
    prove_round(state, None)
    prove_round(state, VerifierMsg(Fr(3)))
    with pytest.raises(RuntimeError):
        prove_round(state, VerifierMsg(Fr(4)))


def test_shared_references_are_stored_once():
    rng = random.Random(11)
    mles = [DenseMultilinearExtension.random(4, rng) for _ in range(5)]
    poly = ListOfProductsOfPolynomials(4)
    poly.add_product([mles[2], mles[3], mles[0]], Fr.random(rng))
    poly.add_product([mles[1], mles[4], mles[4]], Fr.random(rng))
    poly.add_product([mles[3], mles[2], mles[1]], Fr.random(rng))
    poly.add_product([mles[0], mles[0]], Fr.random(rng))
    poly.add_product([mles[4]], Fr.random(rng))
    state = prover_init(poly)
    assert len(state.flattened_ml_extensions) == 5
    assert state.max_multiplicands == 3


def test_prover_init_does_not_alias_polynomial_lists():
    poly = _random_poly(2)
    state = prover_init(poly)
    prove_round(state, None)
    prove_round(state, VerifierMsg(Fr(2)))
    assert all(m.num_vars == 2 for m in poly.flattened_ml_extensions)
    assert all(m.num_vars == 1 for m in state.flattened_ml_extensions)


def test_message_serialization_layout():
    msg = ProverMsg([Fr(1), Fr(2), Fr(3)])
    data = serialize(msg)
    assert len(data) == 8 + 3 * 32
    assert data[:8] == (3).to_bytes(8, "little")
    assert data[8:40] == Fr(1).to_bytes()