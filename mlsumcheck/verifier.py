"""Verifier side of the interactive multilinear sumcheck protocol."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from .errors import RejectError
from .field import Fr
from .polynomials import PolynomialInfo
from .prover import ProverMsg


@dataclass
class VerifierMsg:
    """Randomness sampled by the verifier in one round."""

    randomness: Fr


@dataclass
class VerifierState:
    """Messages received and randomness sampled so far."""

    round: int
    nv: int
    max_multiplicands: int
    finished: bool = False
    polynomials_received: list = field(default_factory=list)
    randomness: list = field(default_factory=list)


@dataclass
class SubClaim:
    """Claim that the polynomial evaluates to ``expected_evaluation`` at ``point``."""

    point: list
    expected_evaluation: Fr


def verifier_init(index_info: PolynomialInfo) -> VerifierState:
    """Start a verifier for a polynomial of the given shape."""
    return VerifierState(
        round=1,
        nv=index_info.num_variables,
        max_multiplicands=index_info.max_multiplicands,
    )


def sample_round(rng) -> VerifierMsg:
    """Draw a verifier message without checking anything."""
    return VerifierMsg(Fr.random(rng))


def verify_round(prover_msg: ProverMsg, verifier_state: VerifierState, rng) -> VerifierMsg:
    """Record the prover's message and sample this round's randomness.

    The consistency checks are deferred to :func:`check_and_generate_subclaim`.
    """
    if verifier_state.finished:
        raise RuntimeError("incorrect verifier state: verifier is already finished")
    msg = sample_round(rng)
    verifier_state.randomness.append(msg.randomness)
    verifier_state.polynomials_received.append(list(prover_msg.evaluations))
    if verifier_state.round == verifier_state.nv:
        verifier_state.finished = True
    else:
        verifier_state.round += 1
    return msg


def check_and_generate_subclaim(verifier_state: VerifierState, asserted_sum) -> SubClaim:
    """Check every round against the claim and return the final subclaim.

    Raises :class:`RejectError` when a round is inconsistent with the claim.
    """
    if not verifier_state.finished:
        raise RuntimeError("verifier has not finished")
    if len(verifier_state.polynomials_received) != verifier_state.nv:
        raise RuntimeError("insufficient rounds")
    expected = Fr(asserted_sum)
    for evaluations, r in zip(verifier_state.polynomials_received, verifier_state.randomness):
        if len(evaluations) != verifier_state.max_multiplicands + 1:
            raise ValueError("incorrect number of evaluations")
        if evaluations[0] + evaluations[1] != expected:
            raise RejectError("Prover message is not consistent with the claim.")
        expected = interpolate_uni_poly(evaluations, r)
    return SubClaim(point=list(verifier_state.randomness), expected_evaluation=expected)


def interpolate_uni_poly(evaluations: Sequence, eval_at) -> Fr:
    """Evaluate at ``eval_at`` the polynomial of least degree through
    ``(i, evaluations[i])`` for ``i = 0, ..., len(evaluations) - 1``."""
    values = [Fr(value) for value in evaluations]
    if not values:
        raise ValueError("at least one evaluation is needed")
    x = Fr(eval_at)
    for i, value in enumerate(values):
        if x == i:
            return value
    last = len(values) - 1
    diffs = [x - j for j in range(len(values))]
    numerator = math.prod(diffs, start=Fr(1))
    total = Fr(0)
    for i, (value, diff) in enumerate(zip(values, diffs)):
        weight = math.factorial(i) * math.factorial(last - i)
        if (last - i) % 2:
            weight = -weight
        total += value * numerator / (Fr(weight) * diff)
    return total