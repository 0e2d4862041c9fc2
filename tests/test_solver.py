import random

import pytest

from zkbench.fields import BN254, bn254_element
from zkbench.r1cs import R1CS, AssertZero, Expression
from zkbench.solver import (
    UnsolvableConstraint,
    mat_mul,
    solve_dot,
    solve_witness,
    sparse_dot,
    verify,
)


def _product_system():
    r1cs = R1CS()
    r1cs.add_circuit(
        [AssertZero(Expression(mul_terms=[(1, 0, 1)], linear_combinations=[(-1, 2)]))]
    )
    return r1cs


def test_sparse_dot_known_values():
    row = [(0, bn254_element(2)), (1, bn254_element(3))]
    witness = [bn254_element(4), bn254_element(5)]
    expected = bn254_element(2) * bn254_element(4) + bn254_element(3) * bn254_element(5)
    assert sparse_dot(row, witness) == expected


def test_sparse_dot_missing_value():
    row = [(0, bn254_element(2)), (1, bn254_element(3))]
    assert sparse_dot(row, [bn254_element(4), None]) is None


def test_sparse_dot_empty_row_is_zero():
    assert sparse_dot([], [None]) == BN254.zero()


def test_solve_dot_fills_single_gap():
    row = [(0, bn254_element(2)), (1, bn254_element(3))]
    witness = [bn254_element(4), None]
    target = bn254_element(100)
    col, value = solve_dot(row, witness, target)
    assert col == 1
    witness[col] = value
    assert sparse_dot(row, witness) == target


def test_solve_dot_two_gaps():
    row = [(0, bn254_element(2)), (1, bn254_element(3))]
    assert solve_dot(row, [None, None], bn254_element(1)) is None


def test_mat_mul_matches_matrix_product():
    r1cs = _product_system()
    rng = random.Random(3)
    vector = [BN254.random(rng) for _ in range(r1cs.witnesses)]
    for matrix in (r1cs.a, r1cs.b, r1cs.c):
        assert mat_mul(matrix, vector) == matrix * vector


def test_solve_and_verify_product():
    r1cs = _product_system()
    x, y, z = (r1cs.remap[w] for w in (0, 1, 2))
    a, b = bn254_element(1234), bn254_element(5678)
    witness = solve_witness(r1cs, {x: a, y: b}, random.Random(0))
    assert witness[0] == BN254.one()
    assert witness[z] == a * b
    assert verify(r1cs, witness) == r1cs.constraints


def test_unconstrained_witness_is_random_128_bit():
    r1cs = _product_system()
    extra = r1cs.new_witness()
    x, y = r1cs.remap[0], r1cs.remap[1]
    witness = solve_witness(r1cs, {x: bn254_element(2), y: bn254_element(3)}, random.Random(1))
    assert witness[extra].to_uint() < 2**128
    assert verify(r1cs, witness) == 2


def test_missing_inputs_are_unsolvable():
    r1cs = _product_system()
    with pytest.raises(UnsolvableConstraint, match="constraint 0"):
        solve_witness(r1cs, {})


def test_inconsistent_assignment_fails():
    r1cs = _product_system()
    x, y, z = (r1cs.remap[w] for w in (0, 1, 2))
    product = r1cs.witnesses - 2
    assignments = {
        x: bn254_element(2),
        y: bn254_element(3),
        product: bn254_element(7),
    }
    with pytest.raises(UnsolvableConstraint, match="Constraint 0 failed"):
        solve_witness(r1cs, assignments)


def test_division_by_zero_is_unsolvable():
    r1cs = R1CS()
    p, q, r = r1cs.new_witness(), r1cs.new_witness(), r1cs.new_witness()
    r1cs.add_constraint([(1, p)], [(1, q)], [(1, r)])
    with pytest.raises(UnsolvableConstraint):
        solve_witness(r1cs, {p: BN254.zero(), r: bn254_element(5)})


def test_verify_detects_tampering():
    r1cs = _product_system()
    x, y, z = (r1cs.remap[w] for w in (0, 1, 2))
    witness = solve_witness(r1cs, {x: bn254_element(6), y: bn254_element(7)})
    witness[z] = witness[z] + BN254.one()
    with pytest.raises(UnsolvableConstraint, match="Constraint 1 failed"):
        verify(r1cs, witness)