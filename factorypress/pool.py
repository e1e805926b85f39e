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
"""Provide a process pool for solving machines in parallel"""

from multiprocessing.pool import Pool
from multiprocessing import get_context
from typing import Callable, Optional, Tuple
import sys


class MachinePool(Pool):
    """Spawn-context process pool that does not re-run the caller's main module

    Workers are spawned rather than forked. While the workers start, ``__main__.__spec__`` and
    ``__main__.__file__`` are hidden so that the spawned interpreters do not import the
    caller's script; both are restored afterwards.
    """

    def __init__(self, processes: Optional[int] = None, initializer: Optional[Callable] = None, initargs: Tuple = ()):
        main = sys.modules['__main__']
        spec = getattr(main, '__spec__', None)
        file = getattr(main, '__file__', None)
        if spec:
            main.__spec__ = None
        if file:
            main.__file__ = None
        try:
            super().__init__(processes=processes, initializer=initializer, initargs=initargs,
                             context=get_context('spawn'))
        finally:
            if spec:
                main.__spec__ = spec
            if file:
                main.__file__ = file
