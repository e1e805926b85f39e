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
"""Pruned enumeration of free-button assignments for the minimal press total"""

from typing import Optional
import logging

from factorypress.errors import RequirementsUnreachable, SearchBudgetExceeded
from factorypress.solution_space import SolutionSpace

LOG = logging.getLogger(__name__)


class SearchState:
    """State of one bounded search

    Owned by a single ``minimal_total`` call. ``best`` only ever decreases.
    """

    def __init__(self, free_count: int, budget: Optional[int] = None):
        self.free_values = [0] * free_count
        self.best = None
        self.best_values = None
        self.evaluations = 0
        self.budget = budget

    def offer(self, total: int):
        if self.best is None or total < self.best:
            self.best = total
            self.best_values = list(self.free_values)
            LOG.debug(f"New best total {total} at {self.best_values}.")

    def prunes(self, partial_sum: int) -> bool:
        return self.best is not None and partial_sum >= self.best


def minimal_total(space: SolutionSpace, budget: Optional[int] = None) -> SearchState:
    """Search all free-variable assignments within their caps for the minimal feasible total

    Free variables are assigned in index order. A branch is cut as soon as the sum of the
    assigned free values reaches the best total found so far, since pivot contributions are
    non-negative.

    Args:
        space (SolutionSpace):
            Parameterization of the machine's counter system.

        budget (int):
            (Default: None)
            Maximum number of complete assignments to evaluate. None means unlimited.

    Returns:
        (SearchState):
        The finished search; ``best`` is the minimal total and ``best_values`` the assignment
        of the free variables that attains it.

    Raises:
        RequirementsUnreachable: No assignment is feasible.
        SearchBudgetExceeded: The budget ran out before the search space was exhausted.
    """
    state = SearchState(len(space.free_cols), budget)
    _search(0, 0, space, state)
    LOG.debug(f"Search finished after {state.evaluations} evaluations.")
    if state.best is None:
        raise RequirementsUnreachable("Joltage requirements unreachable")
    return state


def _search(idx: int, partial_sum: int, space: SolutionSpace, state: SearchState):
    if idx == len(space.free_caps):
        if state.budget is not None and state.evaluations >= state.budget:
            raise SearchBudgetExceeded(f"Search budget of {state.budget} evaluations exceeded")
        state.evaluations += 1
        total = space.evaluate(state.free_values)
        if total is not None:
            state.offer(total)
        return

    for value in range(space.free_caps[idx] + 1):
        new_sum = partial_sum + value
        if state.prunes(new_sum):
            break
        state.free_values[idx] = value
        _search(idx + 1, new_sum, space, state)
    state.free_values[idx] = 0
