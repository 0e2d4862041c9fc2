"""Witness solving and verification for rank-one constraint systems."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from .fields import BN254
from .mod_ring import ModRingElement
from .r1cs import R1CS
from .sparse_matrix import SparseMatrix

_log = logging.getLogger(__name__)

RANDOM_BITS = 128


class UnsolvableConstraint(ValueError):
    """Raised when a constraint cannot be solved or does not hold."""


def sparse_dot(
    row: Iterable[Tuple[int, ModRingElement]],
    witness: Sequence[Optional[ModRingElement]],
) -> Optional[ModRingElement]:
    """Dot product of a sparse row with a partial witness; None if a needed value is missing."""
    accumulator = BN254.zero()
    for col, coeff in row:
        value = witness[col]
        if value is None:
            return None
        accumulator = accumulator + coeff * value
    return accumulator


def solve_dot(
    row: Iterable[Tuple[int, ModRingElement]],
    witness: Sequence[Optional[ModRingElement]],
    target: ModRingElement,
) -> Optional[Tuple[int, ModRingElement]]:
    """Find ``(col, value)`` so that setting ``witness[col] = value`` makes the dot product ``target``.

    Returns None unless exactly one needed witness value is missing.
    """
    accumulator = -target
    missing: Optional[Tuple[int, ModRingElement]] = None
    for col, coeff in row:
        value = witness[col]
        if value is not None:
            accumulator = accumulator + coeff * value
        elif missing is None:
            missing = (col, coeff)
        else:
            return None
    if missing is None:
        return None
    col, coeff = missing
    return col, -accumulator / coeff


def mat_mul(matrix: SparseMatrix, vector: Sequence[ModRingElement]) -> list[ModRingElement]:
    """Product of a sparse field matrix with a dense vector."""
    result = [BN254.zero()] * matrix.rows
    for (row, col), value in matrix:
        result[row] = result[row] + value * vector[col]
    return result


def solve_witness(
    r1cs: R1CS,
    assignments: Mapping[int, ModRingElement],
    rng: random.Random | None = None,
) -> list[ModRingElement]:
    """Solve the constraints in order, starting from the given witness values.

    Witness 0 is the constant one. Values left undetermined are filled with
    random 128-bit field elements.
    """
    witness: list[Optional[ModRingElement]] = [None] * r1cs.witnesses
    witness[0] = BN254.one()
    for index, value in assignments.items():
        witness[index] = value

    matrices = (r1cs.a, r1cs.b, r1cs.c)
    for row in range(r1cs.constraints):
        a, b, c = (sparse_dot(m.iter_row(row), witness) for m in matrices)
        try:
            if a is not None and b is not None and c is not None:
                if a * b != c:
                    raise UnsolvableConstraint(f"Constraint {row} failed")
                continue
            if a is not None and b is not None:
                value, matrix = a * b, r1cs.c
            elif a is not None and c is not None:
                value, matrix = c / a, r1cs.b
            elif b is not None and c is not None:
                value, matrix = c / b, r1cs.a
            else:
                raise UnsolvableConstraint(f"Can not solve constraint {row}.")
        except ZeroDivisionError:
            raise UnsolvableConstraint(f"Can not solve constraint {row}.") from None
        solution = solve_dot(matrix.iter_row(row), witness, value)
        if solution is None:
            raise UnsolvableConstraint(f"Could not solve constraint {row}.")
        col, solved = solution
        _log.debug("Constraint %d: Solved for witness[%d] = %s", row, col, solved)
        witness[col] = solved

    source = rng if rng is not None else random
    return [
        value if value is not None else BN254.element(source.getrandbits(RANDOM_BITS))
        for value in witness
    ]


def verify(r1cs: R1CS, witness: Sequence[ModRingElement]) -> int:
    """Check every constraint; return the number checked or raise on the first failure."""
    a = mat_mul(r1cs.a, witness)
    b = mat_mul(r1cs.b, witness)
    c = mat_mul(r1cs.c, witness)
    for row, (x, y, z) in enumerate(zip(a, b, c)):
        if x * y != z:
            raise UnsolvableConstraint(f"Constraint {row} failed")
    return len(a)