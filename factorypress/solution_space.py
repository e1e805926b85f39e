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
"""Affine parameterization of a reduced counter system by its free buttons"""

from typing import List, Optional, Sequence, Tuple
import logging
import math

from factorypress.linear_system import LinearSystem
from factorypress.machine import Machine

LOG = logging.getLogger(__name__)


class PivotExpression:
    """Value of a pivot button in terms of the free buttons

    All terms are scaled to one shared integer denominator, so that

        denom * pivot_value = base - sum(coeff * free_values[idx] for idx, coeff in coeffs)

    and evaluating an assignment needs integer arithmetic only.

    Args:
        column (int):
            Button (column) index of the pivot variable.

        denom (int):
            Positive shared denominator.

        base (int):
            Particular-solution term scaled by ``denom``.

        coeffs (list of (int, int)):
            Non-zero (free variable index, scaled coefficient) pairs.
    """

    __slots__ = ('column', 'denom', 'base', 'coeffs')

    def __init__(self, column: int, denom: int, base: int, coeffs: Sequence[Tuple[int, int]]):
        self.column = column
        self.denom = denom
        self.base = base
        self.coeffs = tuple(coeffs)

    def is_constant(self) -> bool:
        return not self.coeffs

    def numerator(self, free_values: Sequence[int]) -> int:
        """Scaled pivot value ``denom * pivot_value`` for an assignment of the free variables"""
        value = self.base
        for idx, coeff in self.coeffs:
            value -= coeff * free_values[idx]
        return value

    def evaluate(self, free_values: Sequence[int]) -> Optional[int]:
        """Integral pivot value, or None if the assignment makes it fractional"""
        value, remainder = divmod(self.numerator(free_values), self.denom)
        if remainder:
            return None
        return value

    def __repr__(self):
        terms = ''.join(f" - {c}*f{i}" for i, c in self.coeffs)
        return f"PivotExpression(x{self.column} = ({self.base}{terms}) / {self.denom})"


def press_caps(machine: Machine) -> List[int]:
    """Upper bound on the presses of every button

    Presses only ever add to counters, so a button can be pressed at most as often as the
    smallest requirement among the counters it is wired to. A button wired to no counter
    gets cap 0.
    """
    caps = []
    for b in range(machine.button_count):
        affected = [req for light, req in enumerate(machine.requirements) if machine.affects(b, light)]
        caps.append(min(affected) if affected else 0)
    return caps


def build_pivot_expressions(system: LinearSystem, pivot_cols: Sequence[Optional[int]],
                            free_cols: Sequence[int]) -> List[PivotExpression]:
    """Derive one PivotExpression per pivot row of a reduced system

    Args:
        system (LinearSystem):
            System in reduced row echelon form.

        pivot_cols (list of int or None):
            Pivot column per row as returned by ``row_echelon``.

        free_cols (list of int):
            Columns without pivot, in increasing order. Position i in this list is free
            variable i.

    Returns:
        (list of PivotExpression):
        Expressions in row order.
    """
    expressions = []
    for row, column in enumerate(pivot_cols):
        if column is None:
            continue
        rhs = system.get_rhs_at(row)
        denom = rhs.denominator
        for col in free_cols:
            denom = math.lcm(denom, system.get_value_at(row, col).denominator)
        coeffs = []
        for idx, col in enumerate(free_cols):
            value = system.get_value_at(row, col)
            if not value.is_zero():
                coeffs.append((idx, value.scaled(denom)))
        expressions.append(PivotExpression(column, denom, rhs.scaled(denom), coeffs))
    return expressions


class SolutionSpace:
    """Free variables, pivot expressions and press caps of one machine's counter system

    Args:
        machine (Machine):
            The machine whose counter requirements are solved.

        system (LinearSystem):
            The machine's system after ``row_echelon``.

        pivot_cols (list of int or None):
            Pivot column per row.
    """

    def __init__(self, machine: Machine, system: LinearSystem, pivot_cols: Sequence[Optional[int]]):
        pivots = set(c for c in pivot_cols if c is not None)
        self.free_cols = [c for c in range(system.get_column_count()) if c not in pivots]
        self.pivot_exprs = build_pivot_expressions(system, pivot_cols, self.free_cols)
        self.button_caps = press_caps(machine)
        self.free_caps = [self.button_caps[c] for c in self.free_cols]
        LOG.debug(f"{len(self.pivot_exprs)} pivot buttons, {len(self.free_cols)} free buttons with caps {self.free_caps}.")

    def evaluate(self, free_values: Sequence[int]) -> Optional[int]:
        """Total presses of a complete free-variable assignment, or None if it is infeasible

        Every pivot value must be integral, non-negative and within its button's cap.
        """
        total = sum(free_values)
        for expr in self.pivot_exprs:
            value = expr.evaluate(free_values)
            if value is None or value < 0 or value > self.button_caps[expr.column]:
                return None
            total += value
        return total

    def presses(self, free_values: Sequence[int]) -> List[int]:
        """Per-button presses of a feasible assignment"""
        result = [0] * len(self.button_caps)
        for idx, col in enumerate(self.free_cols):
            result[col] = free_values[idx]
        for expr in self.pivot_exprs:
            result[expr.column] = expr.evaluate(free_values)
        return result
