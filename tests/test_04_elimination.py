"""Exact row reduction of counter systems."""
import pytest
import numpy as np
from scipy import sparse
import factorypress as fp
from factorypress import InconsistentSystem, LinearSystem, RationalNumber, row_echelon


def reduce_machine(line):
    machine = fp.parse_machine(line)
    system = LinearSystem.from_incidence(machine.incidence_matrix(), machine.requirements)
    return system, row_echelon(system)


def test_from_incidence():
    incidence = sparse.csr_matrix(np.array([[1, 0], [1, 1]]))
    system = LinearSystem.from_incidence(incidence, [2, 5])
    assert (system.get_value_at(1, 0) == RationalNumber(1))
    assert system.get_value_at(0, 1).is_zero()
    assert (system.get_rhs_at(1) == RationalNumber(5))
    with pytest.raises(ValueError):
        LinearSystem.from_incidence(incidence, [1])


def test_example_rref():
    """Pivots are taken left to right, redundant buttons end up as free columns."""
    system, pivot_cols = reduce_machine("[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}")
    assert (pivot_cols == [0, 1, 2, 4])
    for row, col in enumerate(pivot_cols):
        assert system.get_value_at(row, col).is_one()
        for other in range(system.get_row_count()):
            if other != row:
                assert system.get_value_at(other, col).is_zero()


@pytest.mark.parametrize("line", [
    "[.##.] (3) (1,3) (2) (2,3) (0,2) (0,1) {3,5,4,7}",
    "[...#.] (0,2,3,4) (2,3) (0,4) (0,1,2) (1,2,3,4) {7,5,12,7,2}",
    "[.###.#] (0,1,2,3,4) (0,3,4) (0,1,2,4,5) (1,2) {10,11,11,5,10,5}",
    "[...] (0,1) (1,2) (0,2) {1,1,1}",
    "[....] (0,1) (0,1) (2) () {2,2,0,0}",
])
def test_rref_matches_sympy(line):
    machine = fp.parse_machine(line)
    system = LinearSystem.from_incidence(machine.incidence_matrix(), machine.requirements)
    expected, expected_pivots = system.to_sympy().rref()
    pivot_cols = row_echelon(system)
    assert (system.to_sympy() == expected)
    assert ([c for c in pivot_cols if c is not None] == list(expected_pivots))


def test_rref_is_idempotent(example_machines):
    for machine in example_machines:
        system = LinearSystem.from_incidence(machine.incidence_matrix(), machine.requirements)
        pivot_cols = row_echelon(system)
        again = system.copy()
        assert (row_echelon(again) == pivot_cols)
        assert (again == system)


def test_swap_rows_moves_rhs():
    system = LinearSystem.from_incidence(sparse.csr_matrix(np.array([[0, 1], [1, 0]])), [3, 4])
    system.swap_rows(0, 1)
    assert system.get_value_at(0, 0).is_one()
    assert (system.get_rhs_at(0) == RationalNumber(4))
    assert (system.get_rhs_at(1) == RationalNumber(3))


def test_inconsistent_system():
    """A single button cannot raise two counters to different values."""
    with pytest.raises(InconsistentSystem):
        reduce_machine("[..] (0,1) {1,2}")
    with pytest.raises(InconsistentSystem):
        fp.min_counter_presses(fp.parse_machine("[..] (0,1) {1,2}"))


def test_fractional_pivots_stay_exact():
    """Elimination of an odd cycle produces halves, not floats."""
    system, pivot_cols = reduce_machine("[...] (0,1) (1,2) (0,2) {1,1,1}")
    assert (pivot_cols == [0, 1, 2])
    for row in range(3):
        assert (system.get_rhs_at(row) == RationalNumber(1, 2))
