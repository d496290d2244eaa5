"""Multilinear extensions and sums of their products."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .field import Fr, _random_bytes


def _random_below(rng, bound: int) -> int:
    if bound <= 1:
        return 0
    bits = (bound - 1).bit_length()
    mask = (1 << bits) - 1
    size = (bits + 7) // 8
    while True:
        value = int.from_bytes(_random_bytes(rng, size), "little") & mask
        if value < bound:
            return value


@dataclass(frozen=True)
class DenseMultilinearExtension:
    """Multilinear polynomial given by its values on the boolean hypercube.

    The value at index ``i`` is the value at the point whose k-th
    coordinate is bit k of ``i``.
    """

    num_vars: int
    evaluations: tuple

    def __post_init__(self) -> None:
        if self.num_vars < 0:
            raise ValueError("number of variables must not be negative")
        evaluations = tuple(Fr(value) for value in self.evaluations)
        if len(evaluations) != 1 << self.num_vars:
            raise ValueError(
                f"{self.num_vars} variables need {1 << self.num_vars} evaluations, "
                f"got {len(evaluations)}"
            )
        object.__setattr__(self, "evaluations", evaluations)

    @classmethod
    def from_evaluations(cls, num_vars: int, evaluations: Iterable) -> "DenseMultilinearExtension":
        return cls(num_vars, tuple(evaluations))

    @classmethod
    def random(cls, num_vars: int, rng) -> "DenseMultilinearExtension":
        return cls(num_vars, tuple(Fr.random(rng) for _ in range(1 << num_vars)))

    def __len__(self) -> int:
        return len(self.evaluations)

    def __getitem__(self, index: int) -> Fr:
        return self.evaluations[index]

    def __iter__(self) -> Iterator[Fr]:
        return iter(self.evaluations)

    def fix_variables(self, partial_point: Iterable) -> "DenseMultilinearExtension":
        """Fix the lowest variables to the given values."""
        point = [Fr(value) for value in partial_point]
        if len(point) > self.num_vars:
            raise ValueError("invalid size of partial point")
        evaluations = list(self.evaluations)
        for r in point:
            evaluations = [
                low + r * (high - low)
                for low, high in zip(evaluations[::2], evaluations[1::2])
            ]
        return type(self)(self.num_vars - len(point), tuple(evaluations))

    def evaluate(self, point: Iterable) -> Fr:
        point = list(point)
        if len(point) != self.num_vars:
            raise ValueError(
                f"point has {len(point)} coordinates, polynomial has {self.num_vars} variables"
            )
        return self.fix_variables(point).evaluations[0]

    def __add__(self, other):
        if not isinstance(other, DenseMultilinearExtension):
            return NotImplemented
        if other.num_vars != self.num_vars:
            raise ValueError("polynomials have different numbers of variables")
        return type(self)(
            self.num_vars, tuple(a + b for a, b in zip(self.evaluations, other.evaluations))
        )

    def __mul__(self, scalar):
        if not isinstance(scalar, (Fr, int)):
            return NotImplemented
        scalar = Fr(scalar)
        return type(self)(self.num_vars, tuple(scalar * value for value in self.evaluations))

    __rmul__ = __mul__


@dataclass
class SparseMultilinearExtension:
    """Multilinear polynomial given by its nonzero values on the hypercube."""

    num_vars: int
    evaluations: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.num_vars < 0:
            raise ValueError("number of variables must not be negative")
        size = 1 << self.num_vars
        entries = {}
        for index, value in dict(self.evaluations).items():
            if not 0 <= index < size:
                raise ValueError(f"index {index} out of range for {self.num_vars} variables")
            value = Fr(value)
            if value:
                entries[index] = value
        self.evaluations = entries

    @classmethod
    def random(cls, num_vars: int, num_nonzero: int, rng) -> "SparseMultilinearExtension":
        """Sample a polynomial with ``num_nonzero`` random nonzero entries."""
        size = 1 << num_vars
        if num_nonzero > size:
            raise ValueError("more nonzero entries requested than the hypercube holds")
        entries = {}
        while len(entries) < num_nonzero:
            index = _random_below(rng, size)
            value = Fr.random(rng)
            while not value:
                value = Fr.random(rng)
            entries[index] = value
        return cls(num_vars, entries)

    def fix_variables(self, partial_point: Iterable) -> "SparseMultilinearExtension":
        """Fix the lowest variables to the given values."""
        point = [Fr(value) for value in partial_point]
        if len(point) > self.num_vars:
            raise ValueError("invalid size of partial point")
        entries = dict(self.evaluations)
        one = Fr(1)
        for r in point:
            folded: dict = {}
            for index, value in entries.items():
                weight = r if index & 1 else one - r
                target = index >> 1
                folded[target] = folded.get(target, Fr(0)) + weight * value
            entries = folded
        return type(self)(self.num_vars - len(point), entries)

    def evaluate(self, point: Iterable) -> Fr:
        point = list(point)
        if len(point) != self.num_vars:
            raise ValueError(
                f"point has {len(point)} coordinates, polynomial has {self.num_vars} variables"
            )
        return self.fix_variables(point).evaluations.get(0, Fr(0))

    def to_dense(self) -> DenseMultilinearExtension:
        zero = Fr(0)
        return DenseMultilinearExtension(
            self.num_vars,
            tuple(self.evaluations.get(index, zero) for index in range(1 << self.num_vars)),
        )


@dataclass(frozen=True)
class PolynomialInfo:
    """Shape of a sum of products, used as the verifier key."""

    max_multiplicands: int
    num_variables: int


class ListOfProductsOfPolynomials:
    """Sum of coefficient-weighted products of multilinear extensions.

    Each product refers to its multiplicands by index into
    ``flattened_ml_extensions``; the same object added twice is stored once.
    """

    def __init__(self, num_variables: int) -> None:
        self.max_multiplicands = 0
        self.num_variables = num_variables
        self.products: list = []
        self.flattened_ml_extensions: list = []
        self._index_by_id: dict = {}

    def add_product(self, product: Iterable, coefficient) -> None:
        """Add the product of ``product`` scaled by ``coefficient``."""
        multiplicands = list(product)
        if not multiplicands:
            raise ValueError("a product needs at least one multiplicand")
        if any(m.num_vars != self.num_variables for m in multiplicands):
            raise ValueError("product has a multiplicand with wrong number of variables")
        self.max_multiplicands = max(self.max_multiplicands, len(multiplicands))
        indices = []
        for multiplicand in multiplicands:
            index = self._index_by_id.get(id(multiplicand))
            if index is None:
                index = len(self.flattened_ml_extensions)
                self.flattened_ml_extensions.append(multiplicand)
                self._index_by_id[id(multiplicand)] = index
            indices.append(index)
        self.products.append((Fr(coefficient), indices))

    def evaluate(self, point: Iterable) -> Fr:
        point = [Fr(value) for value in point]
        values = [m.evaluate(point) for m in self.flattened_ml_extensions]
        return sum(
            (coefficient * math.prod((values[i] for i in indices), start=Fr(1))
             for coefficient, indices in self.products),
            Fr(0),
        )

    def info(self) -> PolynomialInfo:
        return PolynomialInfo(self.max_multiplicands, self.num_variables)