"""Minimal press totals under additive semantics (part B)."""
import pytest
import numpy as np
from scipy.optimize import Bounds, LinearConstraint, milp
import factorypress as fp
from factorypress import (InconsistentSystem, MachineError, Machine, RequirementsUnreachable, SearchBudgetExceeded,
                          counter_solution_space, minimal_total)


def milp_presses(machine):
    """Reference optimum from scipy's MILP solver, None if infeasible."""
    A = machine.incidence_matrix().toarray()
    b = np.array(machine.requirements, dtype=float)
    res = milp(c=np.ones(machine.button_count),
               constraints=LinearConstraint(A, b, b),
               integrality=np.ones(machine.button_count),
               bounds=Bounds(0, np.inf))
    if res.status == 2:
        return None
    assert (res.status == 0)
    return int(round(res.fun))


def test_example(example_machines):
    assert ([fp.min_counter_presses(m) for m in example_machines] == [10, 12, 11])
    assert (fp.total_counter_presses(example_machines) == 33)


def test_presses_reach_requirements(example_machines):
    for machine in example_machines:
        presses = fp.counter_presses(machine)
        counters = machine.incidence_matrix().toarray() @ np.array(presses)
        assert (counters.tolist() == list(machine.requirements))
        assert (sum(presses) == fp.min_counter_presses(machine))


@pytest.mark.parametrize("line", ["[.] (0) (0) {0}", "[#] () {0}", "[..] (0,1) {0,0}"])
def test_zero_requirements(line):
    assert (fp.min_counter_presses(fp.parse_machine(line)) == 0)


def test_half_integer_solution_is_unreachable():
    """Three pairwise buttons would each need half a press to raise three counters by one."""
    machine = fp.parse_machine("[...] (0,1) (1,2) (0,2) {1,1,1}")
    with pytest.raises(RequirementsUnreachable):
        fp.min_counter_presses(machine)


def test_negative_solution_is_unreachable():
    machine = fp.parse_machine("[..] (0,1) (0) {0,1}")
    with pytest.raises(RequirementsUnreachable):
        fp.min_counter_presses(machine)


def test_search_budget(example_machines):
    machine = example_machines[0]
    with pytest.raises(SearchBudgetExceeded):
        fp.min_counter_presses(machine, search_budget=0)
    assert (fp.min_counter_presses(machine, search_budget=10000) == 10)
    state = minimal_total(counter_solution_space(machine))
    assert (state.best == 10)
    assert (state.evaluations >= 1)
    with pytest.raises(ValueError):
        fp.min_counter_presses(machine, search_budget=-1)


def test_unknown_key(example_machines):
    with pytest.raises(ValueError):
        fp.min_counter_presses(example_machines[0], budget=3)


def random_machine(rng, feasible):
    lights = int(rng.integers(1, 5))
    buttons = int(rng.integers(1, 6))
    masks = [int(m) for m in rng.integers(1, 1 << lights, size=buttons)]
    if feasible:
        presses = rng.integers(0, 5, size=buttons)
        A = Machine(0, masks, [0] * lights, lights).incidence_matrix().toarray()
        requirements = (A @ presses).tolist()
    else:
        requirements = rng.integers(0, 8, size=lights).tolist()
    return Machine(0, masks, requirements, lights)


@pytest.mark.parametrize("feasible", [True, False])
def test_matches_milp(feasible):
    rng = np.random.default_rng(2025 + feasible)
    for _ in range(60):
        machine = random_machine(rng, feasible)
        expected = milp_presses(machine)
        if expected is None:
            with pytest.raises((InconsistentSystem, RequirementsUnreachable)):
                fp.min_counter_presses(machine)
        else:
            assert (fp.min_counter_presses(machine) == expected)


def test_errors_are_machine_errors():
    assert issubclass(InconsistentSystem, MachineError)
    assert issubclass(RequirementsUnreachable, MachineError)
    assert issubclass(SearchBudgetExceeded, MachineError)
