"""Pivot expressions and press caps."""
import factorypress as fp
from factorypress import PivotExpression, SolutionSpace, counter_solution_space, press_caps


def test_press_caps(example_machines):
    """A button is capped by the smallest requirement among the counters it increments."""
    assert (press_caps(example_machines[0]) == [7, 5, 4, 4, 3, 3])


def test_example_expressions(example_machines):
    space = counter_solution_space(example_machines[0])
    assert (space.free_cols == [3, 5])
    assert (space.free_caps == [4, 3])
    exprs = [(e.column, e.denom, e.base, e.coeffs) for e in space.pivot_exprs]
    assert (exprs == [
        (0, 1, 2, ((0, 1), (1, -1))),
        (1, 1, 5, ((1, 1),)),
        (2, 1, 1, ((0, 1), (1, -1))),
        (4, 1, 3, ((1, 1),)),
    ])
    assert (space.evaluate([1, 0]) == 10)
    assert (space.presses([1, 0]) == [1, 5, 0, 1, 3, 0])
    # x2 = 1 - 2 would be negative
    assert (space.evaluate([2, 0]) is None)


def test_constant_expressions():
    """Without free columns every pivot value is independent of the assignment."""
    space = counter_solution_space(fp.parse_machine("[..] (0) (1) {2,3}"))
    assert (space.free_cols == [])
    for expr in space.pivot_exprs:
        assert expr.is_constant()
        assert (expr.evaluate([]) == expr.evaluate([5, 7]))
    assert (space.evaluate([]) == 5)


def test_fractional_expression():
    expr = PivotExpression(0, 2, 3, [(0, 1)])
    assert (expr.numerator([1]) == 2)
    assert (expr.evaluate([1]) == 1)
    assert (expr.evaluate([0]) is None)
    assert (expr.evaluate([5]) == -1)


def test_shared_denominator_of_odd_cycle():
    space = counter_solution_space(fp.parse_machine("[...] (0,1) (1,2) (0,2) {1,1,1}"))
    assert ([(e.denom, e.base) for e in space.pivot_exprs] == [(2, 1), (2, 1), (2, 1)])
    assert (space.evaluate([]) is None)


def test_empty_button_never_pressed():
    """A button wired to nothing has cap 0 and no coefficient in any pivot expression."""
    machine = fp.parse_machine("[.#.] () (1) (0,2) (2) {2,3,4}")
    space = counter_solution_space(machine)
    assert (space.button_caps[0] == 0)
    assert (0 in space.free_cols)
    empty = space.free_cols.index(0)
    for expr in space.pivot_exprs:
        assert all(idx != empty for idx, _ in expr.coeffs)
    assert (fp.counter_presses(machine)[0] == 0)
    assert (fp.min_counter_presses(machine) == 7)
