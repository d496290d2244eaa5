# mlsumcheck

Sumcheck protocols over the BLS12-381 scalar field, written in pure Python
with no dependencies beyond the standard library:

- **Multilinear sumcheck** for a sum of coefficient-weighted products of
  dense multilinear extensions. It is made non-interactive with a
  BLAKE2b-512 Fiat–Shamir transcript.
- **GKR round sumcheck** for functions of the form
  `f1(g, x, y) * f2(x) * f3(y)` summed over the boolean hypercube.

## Installation

```
pip install mlsumcheck
```

## Proving and verifying a sum

```python
from mlsumcheck.field import Fr
from mlsumcheck.rng import Blake2b512Rng
from mlsumcheck.polynomials import DenseMultilinearExtension, ListOfProductsOfPolynomials
from mlsumcheck import ml_sumcheck

rng = Blake2b512Rng()
rng.feed(b"example seed")

a = DenseMultilinearExtension.random(4, rng)
b = DenseMultilinearExtension.random(4, rng)

poly = ListOfProductsOfPolynomials(4)
poly.add_product([a, b], Fr(3))

proof = ml_sumcheck.prove(poly)
claimed = ml_sumcheck.extract_sum(proof)

subclaim = ml_sumcheck.verify(poly.info(), claimed, proof)
assert poly.evaluate(subclaim.point) == subclaim.expected_evaluation
```

`ml_sumcheck.prove` returns a list of `ProverMsg` objects, one for each
variable. `ml_sumcheck.verify` returns a `SubClaim`. Checking that subclaim
against the polynomial is left to the caller.

`ListOfProductsOfPolynomials.add_product` stores a multiplicand once, even
when the same object appears in several products. It raises `ValueError`
for an empty product, and also when a multiplicand has the wrong number of
variables.

To embed the sumcheck in a larger protocol, pass your own transcript to
`ml_sumcheck.prove_as_subprotocol` and `ml_sumcheck.verify_as_subprotocol`.
Prover and verifier must feed their transcripts the same messages.
`prove_as_subprotocol` returns both the proof and the final `ProverState`.
The `randomness` of that state holds every verifier challenge.

## GKR round sumcheck

```python
from mlsumcheck import gkr
from mlsumcheck.polynomials import SparseMultilinearExtension

f1 = SparseMultilinearExtension.random(9, 8, rng)
f2 = DenseMultilinearExtension.random(3, rng)
f3 = DenseMultilinearExtension.random(3, rng)
g = [Fr.random(rng) for _ in range(3)]

proof = gkr.prove(Blake2b512Rng(), f1, f2, f3, g)
subclaim = gkr.verify(Blake2b512Rng(), 3, proof, proof.extract_sum())
assert subclaim.verify_subclaim(f1, f2, f3, g)
```

The building blocks of the two phases are also available:

- `gkr.initialize_phase_one`
- `gkr.start_phase1_sumcheck`
- `gkr.initialize_phase_two`
- `gkr.start_phase2_sumcheck`

## Errors

All errors raised by this package derive from `mlsumcheck.errors.SumcheckError`.

- **`RejectError`** is raised when a proof does not match the claimed sum.
- **`SerializationError`** is raised for bytes that do not encode a field
  element. It is also raised for a message the transcript cannot serialize.
- **`RNGError`** is defined for random-generator failures.

Misuse of the protocol state is reported with built-in exceptions:

- **`ValueError`**:
  - proving a polynomial with zero variables;
  - a proof with too few rounds;
  - a round message with the wrong number of evaluations;
  - mismatched dimensions.
- **`RuntimeError`**: calling the round functions out of order.

## Lower-level pieces

- **`mlsumcheck.field.Fr`**: field elements with the usual arithmetic
  operators, and with `inverse`, `to_bytes`, `from_bytes` and `random`.
- **`mlsumcheck.rng`**:
  - `FeedableRNG`, the transcript interface;
  - `Blake2b512Rng`, with `feed`, `fill_bytes`, `next_u32` and `next_u64`;
  - `serialize`, the canonical encoding that is fed to the transcript.
- **`mlsumcheck.polynomials`**:
  - `DenseMultilinearExtension`;
  - `SparseMultilinearExtension`;
  - `PolynomialInfo`;
  - `ListOfProductsOfPolynomials`.
- **`mlsumcheck.prover`**: `prover_init` and `prove_round`.
- **`mlsumcheck.verifier`**:
  - `verifier_init`;
  - `verify_round`;
  - `check_and_generate_subclaim`;
  - `sample_round`;
  - `interpolate_uni_poly`.

## What this package does not do

This is a library only. It has:

- no command-line program;
- no polynomial commitment scheme;
- no zero-knowledge masking.

Its proofs show that a claimed sum is consistent with a subclaim. The caller
must still check that subclaim against the polynomial itself.

## Running the tests

```
pip install -e ".[test]"
pytest
```