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
"""
Linear system of a machine's counters over exact rationals.

The system has one row per light and one column per button. Entry (l, b) is 1 if button b
increments counter l. The right-hand side holds the counter requirements. Elimination
brings the system to reduced row echelon form in place, applying every row operation to
the right-hand side as well.
"""

from typing import List, Optional, Sequence
import logging
import numpy as np
from scipy import sparse
from sympy import Matrix

from factorypress.errors import InconsistentSystem
from factorypress.rational import RationalNumber, ZERO

LOG = logging.getLogger(__name__)


class LinearSystem:
    """
    Dense rows x cols matrix of RationalNumber with a right-hand-side vector.

    Rows are stored as a numpy object array, so row swaps are index exchanges on
    the row axis and never copy individual entries.
    """

    def __init__(self, rows: int, cols: int):
        """
        Initialize an all-zero system.

        Args:
            rows: Number of rows (lights)
            cols: Number of columns (buttons)
        """
        self.rows = rows
        self.cols = cols
        self.data = np.full((rows, cols), ZERO, dtype=object)
        self.rhs = np.full(rows, ZERO, dtype=object)

    @classmethod
    def from_incidence(cls, incidence: sparse.spmatrix, requirements: Sequence[int]) -> 'LinearSystem':
        """
        Create the system from a sparse incidence matrix and integer requirements.

        Args:
            incidence: Scipy sparse matrix with one row per light and one column per button
            requirements: One integer requirement per row

        Returns:
            LinearSystem with the same entries
        """
        rows, cols = incidence.shape
        if len(requirements) != rows:
            raise ValueError(f"Expected {rows} requirements, got {len(requirements)}")
        system = cls(rows, cols)
        coo = incidence.tocoo()
        for i, j, v in zip(coo.row, coo.col, coo.data):
            system.set_value_at(int(i), int(j), RationalNumber.from_int(int(v)))
        for i, r in enumerate(requirements):
            system.rhs[i] = RationalNumber.from_int(int(r))
        return system

    def get_row_count(self) -> int:
        return self.rows

    def get_column_count(self) -> int:
        return self.cols

    def get_value_at(self, row: int, col: int) -> RationalNumber:
        return self.data[row, col]

    def set_value_at(self, row: int, col: int, value: RationalNumber):
        self.data[row, col] = RationalNumber.value_of(value)

    def get_rhs_at(self, row: int) -> RationalNumber:
        return self.rhs[row]

    def swap_rows(self, row1: int, row2: int):
        """Swap two rows together with their right-hand-side entries."""
        if row1 == row2:
            return
        self.data[[row1, row2]] = self.data[[row2, row1]]
        self.rhs[[row1, row2]] = self.rhs[[row2, row1]]

    def copy(self) -> 'LinearSystem':
        result = LinearSystem(self.rows, self.cols)
        result.data = self.data.copy()
        result.rhs = self.rhs.copy()
        return result

    def to_sympy(self) -> Matrix:
        """Augmented matrix [A | b] as a sympy Matrix of Rationals."""
        return Matrix(self.rows, self.cols + 1,
                      lambda i, j: (self.data[i, j] if j < self.cols else self.rhs[i]).to_sympy())

    def __eq__(self, other) -> bool:
        if not isinstance(other, LinearSystem):
            return NotImplemented
        return self.rows == other.rows and self.cols == other.cols and \
            bool(np.all(self.data == other.data)) and bool(np.all(self.rhs == other.rhs))

    def __repr__(self) -> str:
        lines = []
        for i in range(self.rows):
            lines.append(' '.join(str(v) for v in self.data[i]) + ' | ' + str(self.rhs[i]))
        return f"LinearSystem({self.rows}x{self.cols})\n" + '\n'.join(lines)


def row_echelon(system: LinearSystem) -> List[Optional[int]]:
    """
    Bring ``system`` to reduced row echelon form in place.

    Columns are visited left to right. For every column the first row at or below the current
    pivot row with a non-zero entry becomes the pivot row; if there is none the column is free
    and the pivot row does not advance. The pivot row is scaled so the pivot is exactly 1 and
    the column is eliminated from every other row.

    Args:
        system: LinearSystem to reduce (modified in place)

    Returns:
        Pivot column of every row, None for rows without a pivot

    Raises:
        InconsistentSystem: A row without pivot has a non-zero right-hand side
    """
    rows = system.get_row_count()
    cols = system.get_column_count()
    pivot_cols = [None] * rows
    row = 0

    for col in range(cols):
        if row == rows:
            break
        pivot_row = _find_pivot_row(system, row, col)
        if pivot_row == -1:
            continue
        system.swap_rows(row, pivot_row)

        pivot_val = system.get_value_at(row, col)
        if not pivot_val.is_one():
            for c in range(col, cols):
                system.data[row, c] = system.data[row, c] / pivot_val
            system.rhs[row] = system.rhs[row] / pivot_val

        for r in range(rows):
            if r == row or system.data[r, col].is_zero():
                continue
            factor = system.data[r, col]
            for c in range(col, cols):
                if not system.data[row, c].is_zero():
                    system.data[r, c] = system.data[r, c] - factor * system.data[row, c]
            system.rhs[r] = system.rhs[r] - factor * system.rhs[row]

        pivot_cols[row] = col
        row += 1

    for r, pivot in enumerate(pivot_cols):
        if pivot is None and not system.rhs[r].is_zero():
            raise InconsistentSystem("System of equations inconsistent")

    LOG.debug(f"Reduced {rows}x{cols} system to rank {row}.")
    return pivot_cols


def _find_pivot_row(system: LinearSystem, start_row: int, col: int) -> int:
    """First row at or below ``start_row`` with a non-zero entry in ``col``, or -1."""
    for r in range(start_row, system.get_row_count()):
        if not system.get_value_at(r, col).is_zero():
            return r
    return -1
