"""Non-interactive sumcheck for sums of products of multilinear extensions."""

from __future__ import annotations

from typing import Sequence

from .field import Fr
from .polynomials import ListOfProductsOfPolynomials, PolynomialInfo
from .prover import ProverMsg, ProverState, prove_round, prover_init
from .rng import Blake2b512Rng, FeedableRNG
from .verifier import (
    SubClaim,
    check_and_generate_subclaim,
    sample_round,
    verifier_init,
    verify_round,
)


def extract_sum(proof: Sequence[ProverMsg]) -> Fr:
    """Return the sum claimed by the first message of ``proof``."""
    first = proof[0].evaluations
    return first[0] + first[1]


def prove(polynomial: ListOfProductsOfPolynomials) -> list:
    """Prove the sum of ``polynomial`` over the boolean hypercube."""
    proof, _ = prove_as_subprotocol(Blake2b512Rng(), polynomial)
    return proof


def prove_as_subprotocol(
    fs_rng: FeedableRNG, polynomial: ListOfProductsOfPolynomials
) -> tuple[list, ProverState]:
    """Prove using ``fs_rng`` as the transcript; also return the prover state.

    The returned state's ``randomness`` holds every verifier challenge,
    the last one included.
    """
    fs_rng.feed(polynomial.info())
    prover_state = prover_init(polynomial)
    verifier_msg = None
    prover_msgs = []
    for _ in range(polynomial.num_variables):
        prover_msg = prove_round(prover_state, verifier_msg)
        fs_rng.feed(prover_msg)
        prover_msgs.append(prover_msg)
        verifier_msg = sample_round(fs_rng)
    prover_state.randomness.append(verifier_msg.randomness)
    return prover_msgs, prover_state


def verify(polynomial_info: PolynomialInfo, claimed_sum, proof: Sequence[ProverMsg]) -> SubClaim:
    """Check ``proof`` of ``claimed_sum`` and return the resulting subclaim."""
    return verify_as_subprotocol(Blake2b512Rng(), polynomial_info, claimed_sum, proof)


def verify_as_subprotocol(
    fs_rng: FeedableRNG,
    polynomial_info: PolynomialInfo,
    claimed_sum,
    proof: Sequence[ProverMsg],
) -> SubClaim:
    """Verify using ``fs_rng`` as the transcript.

    Raises :class:`~mlsumcheck.errors.RejectError` when the proof does not
    match the claim, and :class:`ValueError` when it has too few rounds.
    """
    fs_rng.feed(polynomial_info)
    verifier_state = verifier_init(polynomial_info)
    if len(proof) < polynomial_info.num_variables:
        raise ValueError("proof is incomplete")
    for prover_msg in proof[: polynomial_info.num_variables]:
        fs_rng.feed(prover_msg)
        verify_round(prover_msg, verifier_state, fs_rng)
    return check_and_generate_subclaim(verifier_state, claimed_sum)