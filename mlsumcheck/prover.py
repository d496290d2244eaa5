"""Prover side of the interactive multilinear sumcheck protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .field import MODULUS, Fr
from .polynomials import ListOfProductsOfPolynomials

if TYPE_CHECKING:
    from .verifier import VerifierMsg


@dataclass
class ProverMsg:
    """Evaluations P(0), P(1), ..., P(d) of the round polynomial."""

    evaluations: list


@dataclass
class ProverState:
    """Everything the prover carries from one round to the next.

    ``list_of_products`` holds ``(coefficient, indices)`` pairs whose
    indices point into ``flattened_ml_extensions``.
    """

    randomness: list
    list_of_products: list
    flattened_ml_extensions: list
    num_vars: int
    max_multiplicands: int
    round: int = 0


def prover_init(polynomial: ListOfProductsOfPolynomials) -> ProverState:
    """Start a prover for the sum of ``polynomial`` over the boolean hypercube."""
    if polynomial.num_variables == 0:
        raise ValueError("attempt to prove a constant")
    return ProverState(
        randomness=[],
        list_of_products=[
            (Fr(coefficient), list(indices))
            for coefficient, indices in polynomial.products
        ],
        flattened_ml_extensions=list(polynomial.flattened_ml_extensions),
        num_vars=polynomial.num_variables,
        max_multiplicands=polynomial.max_multiplicands,
    )


def _round_sums(state: ProverState) -> list:
    count = state.max_multiplicands + 1
    pairs = [
        list(zip(m.evaluations[::2], m.evaluations[1::2]))
        for m in state.flattened_ml_extensions
    ]
    sums = [0] * count
    for coefficient, indices in state.list_of_products:
        c = coefficient.value
        for point_pairs in zip(*(pairs[index] for index in indices)):
            product = [c] * count
            for low, high in point_pairs:
                start = low.value
                step = high.value - start
                product = [
                    value * ((start + t * step) % MODULUS) % MODULUS
                    for t, value in enumerate(product)
                ]
            sums = [total + value for total, value in zip(sums, product)]
    return [Fr(total) for total in sums]


def prove_round(
    prover_state: ProverState, verifier_msg: Optional["VerifierMsg"]
) -> ProverMsg:
    """Take the verifier's message, fix one variable and answer the next round."""
    if verifier_msg is not None:
        if prover_state.round == 0:
            raise RuntimeError("first round should be prover first")
        prover_state.randomness.append(Fr(verifier_msg.randomness))
        r = prover_state.randomness[prover_state.round - 1]
        prover_state.flattened_ml_extensions = [
            m.fix_variables([r]) for m in prover_state.flattened_ml_extensions
        ]
    elif prover_state.round > 0:
        raise RuntimeError("verifier message is empty")

    prover_state.round += 1
    if prover_state.round > prover_state.num_vars:
        raise RuntimeError("prover is not active")

    return ProverMsg(_round_sums(prover_state))