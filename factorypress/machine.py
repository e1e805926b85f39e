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
"""Machine descriptions: indicator target, button wiring and counter requirements"""

from typing import Sequence
from scipy import sparse


class Machine(object):
    """A machine with a row of lights/counters and a set of buttons

    Instances are immutable once created. Light i corresponds to bit i of every mask.

    Args:
        target_mask (int):
            Bit pattern of the indicator lights that must be on.

        button_masks (list of int):
            One bit pattern per button naming the lights it is wired to. The order is
            kept and determines the column order of the linear system.

        requirements (list of int):
            One non-negative counter requirement per light.

        light_count (int):
            Number of lights L.
    """

    __slots__ = ('_target_mask', '_button_masks', '_requirements', '_light_count')

    def __init__(self, target_mask: int, button_masks: Sequence[int], requirements: Sequence[int], light_count: int):
        if light_count <= 0:
            raise ValueError("A machine must have at least one light.")
        if len(requirements) != light_count:
            raise ValueError(f"Expected {light_count} requirements, found {len(requirements)}.")
        if any(r < 0 for r in requirements):
            raise ValueError("Requirements must be non-negative.")
        limit = 1 << light_count
        if not 0 <= target_mask < limit:
            raise ValueError(f"Target mask {target_mask:#b} exceeds {light_count} lights.")
        for i, mask in enumerate(button_masks):
            if not 0 <= mask < limit:
                raise ValueError(f"Mask {mask:#b} of button {i} exceeds {light_count} lights.")
        object.__setattr__(self, '_target_mask', int(target_mask))
        object.__setattr__(self, '_button_masks', tuple(int(m) for m in button_masks))
        object.__setattr__(self, '_requirements', tuple(int(r) for r in requirements))
        object.__setattr__(self, '_light_count', int(light_count))

    def __setattr__(self, name, value):
        raise AttributeError("Machine is immutable")

    @property
    def target_mask(self) -> int:
        return self._target_mask

    @property
    def button_masks(self) -> tuple:
        return self._button_masks

    @property
    def requirements(self) -> tuple:
        return self._requirements

    @property
    def light_count(self) -> int:
        return self._light_count

    @property
    def button_count(self) -> int:
        return len(self._button_masks)

    def affects(self, button: int, light: int) -> bool:
        """True if pressing ``button`` toggles/increments ``light``"""
        return bool(self._button_masks[button] >> light & 1)

    def incidence_matrix(self) -> sparse.csr_matrix:
        """Light/button incidence as an L x B sparse integer matrix"""
        rows, cols = [], []
        for b, mask in enumerate(self._button_masks):
            for light in range(self._light_count):
                if mask >> light & 1:
                    rows.append(light)
                    cols.append(b)
        return sparse.csr_matrix(([1] * len(rows), (rows, cols)),
                                 shape=(self._light_count, len(self._button_masks)),
                                 dtype=int)

    def __eq__(self, other):
        if not isinstance(other, Machine):
            return NotImplemented
        return (self._target_mask, self._button_masks, self._requirements, self._light_count) == \
               (other._target_mask, other._button_masks, other._requirements, other._light_count)

    def __hash__(self):
        return hash((self._target_mask, self._button_masks, self._requirements, self._light_count))

    def __repr__(self):
        diagram = ''.join('#' if self._target_mask >> i & 1 else '.' for i in range(self._light_count))
        return f"Machine([{diagram}], {len(self._button_masks)} buttons, {{{','.join(map(str, self._requirements))}}})"

    def __reduce__(self):
        return (Machine, (self._target_mask, self._button_masks, self._requirements, self._light_count))
