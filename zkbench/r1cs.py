"""Rank-one constraint systems built from arithmetic circuit opcodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence, Tuple, Union

from .fields import BN254
from .mod_ring import ModRingElement
from .sparse_matrix import SparseMatrix

Coefficient = Union[ModRingElement, int]
Term = Tuple[ModRingElement, int]


def _to_field(value: Coefficient) -> ModRingElement:
    """Interpret an integer or field element as a BN254 field element."""
    if isinstance(value, ModRingElement):
        return value
    return BN254.element(value % BN254.modulus)


@dataclass(frozen=True)
class Expression:
    """Assertion that ``sum(q * w1 * w2) + sum(q * w) + q_c`` equals zero.

    Witnesses are the circuit's own witness indices.
    """

    mul_terms: Sequence[Tuple[Coefficient, int, int]] = ()
    linear_combinations: Sequence[Tuple[Coefficient, int]] = ()
    q_c: Coefficient = 0

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "mul_terms",
            tuple((_to_field(q), w1, w2) for q, w1, w2 in self.mul_terms),
        )
        object.__setattr__(
            self,
            "linear_combinations",
            tuple((_to_field(q), w) for q, w in self.linear_combinations),
        )
        object.__setattr__(self, "q_c", _to_field(self.q_c))


@dataclass(frozen=True)
class AssertZero:
    """Opcode asserting that an expression evaluates to zero."""

    expr: Expression


class UnsupportedOpcode(ValueError):
    """Raised for circuit opcodes that cannot be turned into constraints."""


def _new_matrix() -> SparseMatrix:
    return SparseMatrix(0, 1, BN254.zero())


@dataclass
class R1CS:
    """Constraint system ``(A w) * (B w) = (C w)``; witness 0 is the constant one."""

    a: SparseMatrix = field(default_factory=_new_matrix)
    b: SparseMatrix = field(default_factory=_new_matrix)
    c: SparseMatrix = field(default_factory=_new_matrix)
    witnesses: int = 1
    remap: dict[int, int] = field(default_factory=dict)
    constraints: int = 0

    def _grow(self) -> None:
        for matrix in (self.a, self.b, self.c):
            matrix.grow(self.constraints, self.witnesses)

    def add_circuit(self, opcodes: Iterable[Any]) -> None:
        """Add constraints for every opcode of a circuit."""
        for opcode in opcodes:
            if isinstance(opcode, AssertZero):
                self.add_assert_zero(opcode.expr)
            else:
                name = opcode if isinstance(opcode, str) else type(opcode).__name__
                raise UnsupportedOpcode(f"unsupported opcode: {name}")

    def witness_one(self) -> int:
        """Index of the constant one witness."""
        return 0

    def new_witness(self) -> int:
        """Create a new witness variable and return its index."""
        value = self.witnesses
        self.witnesses += 1
        self._grow()
        return value

    def map_witness(self, witness: int) -> int:
        """Map a circuit witness index to its constraint-system index."""
        if witness not in self.remap:
            self.remap[witness] = self.new_witness()
        return self.remap[witness]

    def add_constraint(
        self,
        a: Sequence[Tuple[Coefficient, int]],
        b: Sequence[Tuple[Coefficient, int]],
        c: Sequence[Tuple[Coefficient, int]],
    ) -> None:
        """Add one constraint given as sparse rows of ``(coefficient, column)``."""
        row = self.constraints
        self.constraints += 1
        self._grow()
        for matrix, terms in ((self.a, a), (self.b, b), (self.c, c)):
            for coeff, col in terms:
                matrix.set(row, col, _to_field(coeff))

    def add_assert_zero(self, expr: Expression) -> None:
        """Add the constraints asserting that ``expr`` is zero."""
        one = BN254.one()
        linear: list[Term] = []
        for coeff, left, right in expr.mul_terms:
            a = self.map_witness(left)
            b = self.map_witness(right)
            product = self.new_witness()
            self.add_constraint([(one, a)], [(one, b)], [(one, product)])
            linear.append((coeff, product))
        linear.extend(
            (coeff, self.map_witness(witness))
            for coeff, witness in expr.linear_combinations
        )
        linear.append((expr.q_c, self.witness_one()))
        self.add_constraint([], [], linear)