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
"""Breadth-first search over the toggle states of a machine's lights"""

from collections import deque
from typing import List, Optional, Sequence
import logging

from factorypress.errors import TargetUnreachable

LOG = logging.getLogger(__name__)


def toggle_distances(light_count: int, button_masks: Sequence[int], target: Optional[int] = None) -> List[Optional[int]]:
    """Minimum number of presses from the all-off pattern to every light pattern

    Each press XORs the current pattern with the pressed button's mask, so the state graph has
    2^L nodes and one edge per button and node. Memory and time are O(2^L).

    Args:
        light_count (int):
            Number of lights L.

        button_masks (list of int):
            Button wiring as bit patterns.

        target (int):
            (Default: None)
            If given, the search stops as soon as this pattern is dequeued. Patterns not settled
            by then may be missing (None) or carry their first-visit distance.

    Returns:
        (list of int or None):
        Distance per pattern, None for patterns that were not reached.
    """
    for mask in button_masks:
        if not 0 <= mask < 1 << light_count:
            raise ValueError(f"Button mask {mask:#b} exceeds {light_count} lights.")
    dist = [None] * (1 << light_count)
    dist[0] = 0
    queue = deque([0])
    while queue:
        state = queue.popleft()
        if state == target:
            break
        next_dist = dist[state] + 1
        for mask in button_masks:
            nxt = state ^ mask
            if dist[nxt] is None:
                dist[nxt] = next_dist
                queue.append(nxt)
    return dist


def min_toggle_distance(light_count: int, button_masks: Sequence[int], target: int, early_exit: bool = True) -> int:
    """Minimum number of presses that turn the all-off pattern into ``target``"""
    if not 0 <= target < 1 << light_count:
        raise ValueError(f"Target pattern {target:#b} exceeds {light_count} lights.")
    dist = toggle_distances(light_count, button_masks, target if early_exit else None)
    presses = dist[target]
    if presses is None:
        raise TargetUnreachable("Target configuration unreachable with given buttons")
    LOG.debug(f"Pattern {target:#b} reached with {presses} presses.")
    return presses
