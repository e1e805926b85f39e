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
"""Functions for parsing machine descriptions written as text"""

from typing import List
import re

from factorypress.errors import ParseError
from factorypress.machine import Machine
from factorypress.names import LIGHT_ON, LIGHT_OFF

BUTTON_RE = re.compile(r"\(([^()]*)\)")


def parse_machine(line: str) -> Machine:
    """Parses a single machine description

    Parses a line of the form ``[.##.] (3) (1,3) (2) {3,5,4,7}``: the indicator diagram in
    brackets, one wiring diagram per button in parentheses and the counter requirements in
    braces.

    Args:
        line (str):
            Machine description.

    Returns:
        (Machine):
        The parsed machine.
    """
    line = line.strip()
    if not line.startswith('['):
        raise ParseError("Machine description must start with '['")
    end_indicator = line.find(']')
    if end_indicator < 0:
        raise ParseError("Missing closing ']' for indicator diagram")
    diagram = line[1:end_indicator]
    lights = len(diagram)
    if lights == 0:
        raise ParseError("Indicator diagram must contain at least one light")
    target = 0
    for i, c in enumerate(diagram):
        if c == LIGHT_ON:
            target |= 1 << i
        elif c != LIGHT_OFF:
            raise ParseError(f"Invalid indicator character '{c}'")

    rest = line[end_indicator + 1:].strip()
    brace_start = rest.rfind('{')
    if brace_start < 0:
        raise ParseError("Missing requirement block")
    buttons_part = rest[:brace_start].strip()
    requirements_part = rest[brace_start:].strip()
    if not requirements_part.endswith('}'):
        raise ParseError("Missing closing '}' for requirements")
    try:
        requirements = [int(v) for v in requirements_part[1:-1].split(',')]
    except ValueError:
        raise ParseError(f"Invalid requirement block '{requirements_part}'") from None
    if len(requirements) != lights:
        raise ParseError(f"Expected {lights} requirement entries, found {len(requirements)}")
    if any(r < 0 for r in requirements):
        raise ParseError("Requirements must be non-negative")

    button_masks = []
    pos = 0
    for match in BUTTON_RE.finditer(buttons_part):
        if buttons_part[pos:match.start()].strip():
            raise ParseError(f"Expected '(' when parsing button definition at {pos}")
        pos = match.end()
        mask = 0
        wiring = match.group(1).strip()
        if wiring:
            for entry in wiring.split(','):
                try:
                    light = int(entry)
                except ValueError:
                    raise ParseError(f"Invalid light index '{entry}'") from None
                if not 0 <= light < lights:
                    raise ParseError(f"Light index {light} out of bounds for {lights}-light machine")
                mask ^= 1 << light
        button_masks.append(mask)
    if buttons_part[pos:].strip():
        raise ParseError(f"Unterminated button definition '{buttons_part[pos:].strip()}'")
    if not button_masks:
        raise ParseError("Machine must list at least one button")

    return Machine(target, button_masks, requirements, lights)


def parse_input(text: str) -> List[Machine]:
    """Parses all machine descriptions of a text, one per non-blank line"""
    return [parse_machine(line) for line in text.splitlines() if line.strip()]
