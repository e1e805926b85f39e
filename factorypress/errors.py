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
"""Failure kinds raised while solving machines"""


class MachineError(Exception):
    """A machine has no solution under the requested semantics

    Failures are only recoverable at the granularity of a whole machine. The aggregate
    entry points set ``machine`` to the zero-based index of the failing machine before
    re-raising the error.
    """

    def __init__(self, message: str, machine=None):
        super().__init__(message)
        self.machine = machine

    def __str__(self):
        message = super().__str__()
        if self.machine is None:
            return message
        return f"machine {self.machine}: {message}"


class TargetUnreachable(MachineError):
    """The toggle-state search exhausted all reachable patterns without finding the target"""


class InconsistentSystem(MachineError):
    """Row reduction found a zero row with a non-zero right-hand side"""


class RequirementsUnreachable(MachineError):
    """No non-negative, integral, cap-respecting press assignment meets the requirements"""


class SearchBudgetExceeded(MachineError):
    """The bounded search evaluated more assignments than the configured budget allows"""


class ParseError(ValueError):
    """A machine description could not be parsed"""
