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
Exact rational numbers for the elimination of button/counter systems.

RationalNumber keeps a signed numerator over a positive denominator in lowest terms.
Every arithmetic operation returns a new, reduced value. Sums and differences are built
over the least common multiple of both denominators, so no intermediate value grows beyond
what the reduced result needs.
"""

from fractions import Fraction
from typing import Union
import math

from sympy import Rational


class RationalNumber:
    """
    Exact fraction with automatic reduction.

    Two rationals are equal iff their reduced (numerator, denominator) pairs are equal.
    """

    __slots__ = ('_num', '_den')

    def __init__(self, numerator: int, denominator: int = 1):
        """
        Args:
            numerator: Signed integer numerator
            denominator: Non-zero integer denominator (default 1)
        """
        if denominator == 0:
            raise ZeroDivisionError("Denominator must not be zero")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        g = math.gcd(numerator, denominator)
        self._num = numerator // g
        self._den = denominator // g

    @property
    def numerator(self) -> int:
        return self._num

    @property
    def denominator(self) -> int:
        return self._den

    @classmethod
    def from_int(cls, value: int) -> 'RationalNumber':
        return cls(value, 1)

    @classmethod
    def from_fraction(cls, value: Fraction) -> 'RationalNumber':
        return cls(value.numerator, value.denominator)

    @staticmethod
    def value_of(value: Union[int, Fraction, Rational, 'RationalNumber']) -> 'RationalNumber':
        """Convert ints, Fractions, sympy Rationals and RationalNumbers to a RationalNumber."""
        if isinstance(value, RationalNumber):
            return value
        elif isinstance(value, Fraction):
            return RationalNumber.from_fraction(value)
        elif isinstance(value, Rational):
            return RationalNumber(int(value.p), int(value.q))
        elif isinstance(value, int) and not isinstance(value, bool):
            return RationalNumber.from_int(value)
        raise TypeError(f"Cannot convert {type(value)} to RationalNumber")

    def to_fraction(self) -> Fraction:
        return Fraction(self._num, self._den)

    def to_sympy(self) -> Rational:
        return Rational(self._num, self._den)

    def is_zero(self) -> bool:
        return self._num == 0

    def is_one(self) -> bool:
        return self._num == 1 and self._den == 1

    def is_integer(self) -> bool:
        return self._den == 1

    def signum(self) -> int:
        return (self._num > 0) - (self._num < 0)

    def negate(self) -> 'RationalNumber':
        return RationalNumber(-self._num, self._den)

    def add(self, other: 'RationalNumber') -> 'RationalNumber':
        other = RationalNumber.value_of(other)
        lcm = math.lcm(self._den, other._den)
        return RationalNumber(self._num * (lcm // self._den) + other._num * (lcm // other._den), lcm)

    def subtract(self, other: 'RationalNumber') -> 'RationalNumber':
        other = RationalNumber.value_of(other)
        lcm = math.lcm(self._den, other._den)
        return RationalNumber(self._num * (lcm // self._den) - other._num * (lcm // other._den), lcm)

    def multiply(self, other: Union[int, 'RationalNumber']) -> 'RationalNumber':
        """Multiply by a rational or by a plain integer."""
        if isinstance(other, int) and not isinstance(other, bool):
            return RationalNumber(self._num * other, self._den)
        other = RationalNumber.value_of(other)
        return RationalNumber(self._num * other._num, self._den * other._den)

    def divide(self, other: 'RationalNumber') -> 'RationalNumber':
        other = RationalNumber.value_of(other)
        if other.is_zero():
            raise ZeroDivisionError("Division by zero")
        return RationalNumber(self._num * other._den, self._den * other._num)

    def scaled(self, denominator: int) -> int:
        """
        Numerator of this value over ``denominator``.

        Args:
            denominator: A positive multiple of this value's own denominator

        Returns:
            The integer n with n / denominator == self
        """
        if denominator <= 0 or denominator % self._den != 0:
            raise ArithmeticError(f"{denominator} is not a multiple of the denominator {self._den}")
        return self._num * (denominator // self._den)

    def __eq__(self, other) -> bool:
        if isinstance(other, RationalNumber):
            return self._num == other._num and self._den == other._den
        if isinstance(other, int) and not isinstance(other, bool):
            return self._den == 1 and self._num == other
        return NotImplemented

    def __lt__(self, other) -> bool:
        other = RationalNumber.value_of(other)
        return self._num * other._den < other._num * self._den

    def __le__(self, other) -> bool:
        other = RationalNumber.value_of(other)
        return self._num * other._den <= other._num * self._den

    def __gt__(self, other) -> bool:
        other = RationalNumber.value_of(other)
        return self._num * other._den > other._num * self._den

    def __ge__(self, other) -> bool:
        other = RationalNumber.value_of(other)
        return self._num * other._den >= other._num * self._den

    def __hash__(self) -> int:
        if self._den == 1:
            return hash(self._num)
        return hash((self._num, self._den))

    def __str__(self) -> str:
        if self._den == 1:
            return str(self._num)
        return f"{self._num}/{self._den}"

    def __repr__(self) -> str:
        return f"RationalNumber({self._num}, {self._den})"

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        return self.multiply(other)

    def __truediv__(self, other):
        return self.divide(other)

    def __neg__(self):
        return self.negate()


ZERO = RationalNumber(0)
ONE = RationalNumber(1)
