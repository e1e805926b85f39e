#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""Minimum button presses per machine and summed over all machines"""

from typing import Dict, List, Sequence, Tuple, Union
from pandas import DataFrame
import logging

from factorypress.bounded_search import minimal_total
from factorypress.errors import MachineError
from factorypress.linear_system import LinearSystem, row_echelon
from factorypress.machine import Machine
from factorypress.names import *
from factorypress.parse_machine import parse_input
from factorypress.pool import MachinePool
from factorypress.reachability import min_toggle_distance
from factorypress.solution_space import SolutionSpace


def read_config(kwargs: Dict) -> Dict:
    """Check keyword arguments against the supported keys and fill in defaults"""
    for key in kwargs:
        if key not in DEFAULTS:
            raise ValueError("Key " + str(key) + " is not supported.")
    config = dict(DEFAULTS)
    config.update(kwargs)
    if config[SEARCH_BUDGET] is not None and config[SEARCH_BUDGET] < 0:
        raise ValueError("The search budget must be non-negative.")
    if config[PROCESSES] < 1:
        raise ValueError("At least one process is required.")
    return config


def min_toggle_presses(machine: Machine, **kwargs) -> int:
    """Minimum presses that light exactly the machine's target pattern (toggle semantics)

    Args:
        machine (Machine):
            The machine to solve.

        early_exit (bool):
            (Default: True)
            Stop the breadth-first search as soon as the target pattern is dequeued.

    Returns:
        (int):
        Minimum number of presses.

    Raises:
        TargetUnreachable: No combination of buttons produces the target pattern.
    """
    config = read_config(kwargs)
    return min_toggle_distance(machine.light_count, machine.button_masks, machine.target_mask, config[EARLY_EXIT])


def counter_solution_space(machine: Machine) -> SolutionSpace:
    """Reduce the machine's counter system and parameterize it by its free buttons

    Raises:
        InconsistentSystem: The requirements are not a rational combination of the buttons.
    """
    system = LinearSystem.from_incidence(machine.incidence_matrix(), machine.requirements)
    pivot_cols = row_echelon(system)
    return SolutionSpace(machine, system, pivot_cols)


def min_counter_presses(machine: Machine, **kwargs) -> int:
    """Minimum presses that raise every counter exactly to its requirement (additive semantics)

    Args:
        machine (Machine):
            The machine to solve.

        search_budget (int):
            (Default: None)
            Maximum number of free-button assignments to evaluate.

    Returns:
        (int):
        Minimum number of presses.

    Raises:
        InconsistentSystem: The linear system has no solution at all.
        RequirementsUnreachable: No non-negative integral solution exists.
        SearchBudgetExceeded: The search budget ran out.
    """
    return sum(counter_presses(machine, **kwargs))


def counter_presses(machine: Machine, **kwargs) -> List[int]:
    """Presses per button of a minimal solution under additive semantics"""
    config = read_config(kwargs)
    if all(r == 0 for r in machine.requirements):
        return [0] * machine.button_count
    space = counter_solution_space(machine)
    state = minimal_total(space, config[SEARCH_BUDGET])
    return space.presses(state.best_values)


_SOLVERS = {PART_A: min_toggle_presses, PART_B: min_counter_presses}

# Worker state for parallel solves, set by worker_init on every worker process
_worker_machines = None
_worker_part = None
_worker_config = None


def worker_init(machines, part, config):
    """Helper function for parallel solves

    Keep the machines and configuration on the worker. Is executed on workers, not on main thread.
    """
    global _worker_machines, _worker_part, _worker_config
    _worker_machines = machines
    _worker_part = part
    _worker_config = config


def worker_compute(i) -> Tuple[int, Union[int, MachineError]]:
    """Helper function for parallel solves

    Solve machine i with the worker's settings. Machine failures are returned rather than raised
    so the main thread can report the failing machine with the lowest index.
    """
    try:
        return i, _SOLVERS[_worker_part](_worker_machines[i], **_worker_config)
    except MachineError as e:
        return i, e


def _total(machines: Sequence[Machine], part: str, kwargs: Dict) -> int:
    config = read_config(kwargs)
    processes = min(config.pop(PROCESSES), len(machines))
    solve_one = _SOLVERS[part]
    logging.info(f"Solving part {part.upper()} for {len(machines)} machines.")

    if processes > 1:
        results = [None] * len(machines)
        with MachinePool(processes, initializer=worker_init, initargs=(list(machines), part, config)) as pool:
            chunk_size = max(1, len(machines) // processes)
            for i, value in pool.imap_unordered(worker_compute, range(len(machines)), chunksize=chunk_size):
                results[i] = value
        for i, value in enumerate(results):
            if isinstance(value, MachineError):
                value.machine = i
                raise value
        total = sum(results)
    else:
        total = 0
        for i, machine in enumerate(machines):
            try:
                total += solve_one(machine, **config)
            except MachineError as e:
                e.machine = i
                raise
    logging.info(f"Part {part.upper()}: {total} presses in total.")
    return total


def total_toggle_presses(machines: Sequence[Machine], **kwargs) -> int:
    """Sum of the minimum toggle presses of all machines

    Args:
        machines (list of Machine):
            The machines to solve independently.

        early_exit (bool):
            (Default: True)
            Stop every breadth-first search once its target is dequeued.

        processes (int):
            (Default: 1)
            Number of worker processes.

    Returns:
        (int):
        Total number of presses. A failing machine raises its error with ``machine`` set to
        its index.
    """
    return _total(machines, PART_A, kwargs)


def total_counter_presses(machines: Sequence[Machine], **kwargs) -> int:
    """Sum of the minimum counter presses of all machines

    Args:
        machines (list of Machine):
            The machines to solve independently.

        search_budget (int):
            (Default: None)
            Maximum number of free-button assignments evaluated per machine.

        processes (int):
            (Default: 1)
            Number of worker processes.

    Returns:
        (int):
        Total number of presses. A failing machine raises its error with ``machine`` set to
        its index.
    """
    return _total(machines, PART_B, kwargs)


def solve(machines: Union[str, Sequence[Machine]], **kwargs) -> Tuple[int, int]:
    """Totals of both parts for a whole input, given as text or as parsed machines"""
    if isinstance(machines, str):
        machines = parse_input(machines)
    return total_toggle_presses(machines, **kwargs), total_counter_presses(machines, **kwargs)


def press_report(machines: Sequence[Machine], **kwargs) -> DataFrame:
    """Per-machine overview of both parts

    Returns:
        (pandas.DataFrame):
        One row per machine with the columns 'lights', 'buttons', 'free_buttons',
        'toggle_presses' and 'counter_presses'. 'free_buttons' counts the columns without
        pivot in the machine's reduced counter system.
    """
    config = read_config(kwargs)
    config.pop(PROCESSES)
    rows = []
    for i, machine in enumerate(machines):
        try:
            space = counter_solution_space(machine)
            rows.append((machine.light_count, machine.button_count, len(space.free_cols),
                         min_toggle_presses(machine, **config), min_counter_presses(machine, **config)))
        except MachineError as e:
            e.machine = i
            raise
    return DataFrame(rows, columns=['lights', 'buttons', 'free_buttons', 'toggle_presses', 'counter_presses'],
                     dtype=int)
