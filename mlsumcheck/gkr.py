"""Sumcheck argument for the GKR round function f1(g, x, y) * f2(x) * f3(y)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .field import Fr
from .polynomials import (
    DenseMultilinearExtension,
    ListOfProductsOfPolynomials,
    PolynomialInfo,
    SparseMultilinearExtension,
)
from .prover import ProverState, prove_round, prover_init
from .rng import FeedableRNG
from .verifier import (
    check_and_generate_subclaim,
    sample_round,
    verifier_init,
    verify_round,
)


@dataclass
class GKRProof:
    """Prover messages of both sumcheck phases."""

    phase1_sumcheck_msgs: list
    phase2_sumcheck_msgs: list

    def extract_sum(self) -> Fr:
        """Return the sum the proof claims."""
        first = self.phase1_sumcheck_msgs[0].evaluations
        return first[0] + first[1]


@dataclass
class GKRRoundSumcheckSubClaim:
    """Claim that f1(g, u, v) * f2(u) * f3(v) equals ``expected_evaluation``."""

    u: list
    v: list
    expected_evaluation: Fr

    def verify_subclaim(
        self,
        f1: SparseMultilinearExtension,
        f2: DenseMultilinearExtension,
        f3: DenseMultilinearExtension,
        g: Sequence,
    ) -> bool:
        """Evaluate the round function and compare with the expected value."""
        dim = len(self.u)
        if (
            len(self.v) != dim
            or f1.num_vars != 3 * dim
            or f2.num_vars != dim
            or f3.num_vars != dim
            or len(g) != dim
        ):
            raise ValueError("dimensions of the subclaim and the round function differ")
        guv = [*g, *self.u, *self.v]
        actual = f1.evaluate(guv) * f2.evaluate(self.u) * f3.evaluate(self.v)
        return actual == self.expected_evaluation


def initialize_phase_one(
    f1: SparseMultilinearExtension, f3: DenseMultilinearExtension, g: Sequence
) -> tuple[DenseMultilinearExtension, SparseMultilinearExtension]:
    """Return h_g with h_g(x) = sum_y f1(g, x, y) * f3(y), and f1 fixed at g."""
    dim = f3.num_vars
    if f1.num_vars != 3 * dim:
        raise ValueError("f1 must have three times as many variables as f3")
    if len(g) != dim:
        raise ValueError("g must have as many coordinates as f3 has variables")
    mask = (1 << dim) - 1
    a_hg = [Fr(0)] * (1 << dim)
    f1_at_g = f1.fix_variables(g)
    for xy, value in f1_at_g.evaluations.items():
        if value:
            a_hg[xy & mask] += value * f3[xy >> dim]
    return DenseMultilinearExtension(dim, tuple(a_hg)), f1_at_g


def start_phase1_sumcheck(
    h_g: DenseMultilinearExtension, f2: DenseMultilinearExtension
) -> ProverState:
    """Start a prover for the sum of h_g * f2."""
    dim = h_g.num_vars
    if f2.num_vars != dim:
        raise ValueError("h_g and f2 must have the same number of variables")
    poly = ListOfProductsOfPolynomials(dim)
    poly.add_product([h_g, f2], Fr(1))
    return prover_init(poly)


def initialize_phase_two(
    f1_g: SparseMultilinearExtension, u: Sequence
) -> DenseMultilinearExtension:
    """Return f1 fixed at g || u as a dense extension."""
    if len(u) * 2 != f1_g.num_vars:
        raise ValueError("u must fix half of the remaining variables of f1")
    return f1_g.fix_variables(u).to_dense()


def start_phase2_sumcheck(
    f1_gu: DenseMultilinearExtension, f3: DenseMultilinearExtension, f2_u
) -> ProverState:
    """Start a prover for the sum of f1(g, u, y) * f2(u) * f3(y)."""
    dim = f1_gu.num_vars
    if f3.num_vars != dim:
        raise ValueError("f1 fixed at g||u and f3 must have the same number of variables")
    f3_f2u = f3 * Fr(f2_u)
    poly = ListOfProductsOfPolynomials(dim)
    poly.add_product([f1_gu, f3_f2u], Fr(1))
    return prover_init(poly)


def _run_phase(rng: FeedableRNG, state: ProverState, rounds: int) -> tuple[list, list]:
    messages = []
    challenges = []
    verifier_msg = None
    for _ in range(rounds):
        prover_msg = prove_round(state, verifier_msg)
        rng.feed(prover_msg)
        messages.append(prover_msg)
        verifier_msg = sample_round(rng)
        challenges.append(verifier_msg.randomness)
    return messages, challenges


def prove(
    rng: FeedableRNG,
    f1: SparseMultilinearExtension,
    f2: DenseMultilinearExtension,
    f3: DenseMultilinearExtension,
    g: Sequence,
) -> GKRProof:
    """Prove the sum over x, y of f1(g, x, y) * f2(x) * f3(y)."""
    if f1.num_vars != 3 * f2.num_vars or f1.num_vars != 3 * f3.num_vars:
        raise ValueError("f1 must have three times as many variables as f2 and f3")
    dim = f2.num_vars
    g = [Fr(value) for value in g]

    h_g, f1_g = initialize_phase_one(f1, f3, g)
    phase1_msgs, u = _run_phase(rng, start_phase1_sumcheck(h_g, f2), dim)

    f1_gu = initialize_phase_two(f1_g, u)
    phase2_state = start_phase2_sumcheck(f1_gu, f3, f2.evaluate(u))
    phase2_msgs, _ = _run_phase(rng, phase2_state, dim)

    return GKRProof(phase1_sumcheck_msgs=phase1_msgs, phase2_sumcheck_msgs=phase2_msgs)


def _verify_phase(rng: FeedableRNG, dim: int, messages: Sequence, claimed_sum):
    state = verifier_init(PolynomialInfo(max_multiplicands=2, num_variables=dim))
    for index in range(dim):
        prover_msg = messages[index]
        rng.feed(prover_msg)
        verify_round(prover_msg, state, rng)
    return check_and_generate_subclaim(state, claimed_sum)


def verify(
    rng: FeedableRNG, f2_num_vars: int, proof: GKRProof, claimed_sum
) -> GKRRoundSumcheckSubClaim:
    """Check ``proof`` of ``claimed_sum`` and return the subclaim left to check.

    Raises :class:`~mlsumcheck.errors.RejectError` when the proof does not
    match the claim.
    """
    dim = f2_num_vars
    phase1 = _verify_phase(rng, dim, proof.phase1_sumcheck_msgs, claimed_sum)
    phase2 = _verify_phase(rng, dim, proof.phase2_sumcheck_msgs, phase1.expected_evaluation)
    return GKRRoundSumcheckSubClaim(
        u=phase1.point, v=phase2.point, expected_evaluation=phase2.expected_evaluation
    )