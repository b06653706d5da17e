"""
Provides ``Calculator``, a short-lived accumulator that chains number
system operations.

Examples
--------
>>> from pyexact.numeric import Calculator
>>> Calculator.of(1).divide(3).multiply(6).peek()
np.int64(2)
>>> Calculator.of(10).subtract(0.25).peek()
Decimal('9.75')
"""
from __future__ import annotations

from pyexact._opts import get_number_system
from pyexact.exceptions import NullOperandError
from pyexact.numeric.number_system import NumberSystem


# ======================================================================

class Calculator:
    """
    Accumulator that applies the operations of a ``NumberSystem`` in
    sequence.  Every operation returns the same ``Calculator`` so calls
    can be chained, with ``peek()`` giving the (narrowed) result.

    A ``Calculator`` is meant for a single expression at a single call
    site and is not thread-safe.
    """

    def __init__(self, ns: NumberSystem = None):
        """
        Parameters
        ----------
        ns : NumberSystem, optional
            Number system to use.  If `None`, the process-wide number
            system (``pyexact.get_number_system()``) is used.

        Notes
        -----
        The accumulator starts at zero.
        """
        self._ns = ns if ns is not None else get_number_system()
        self._acc = 0

    @classmethod
    def of(cls, number, ns: NumberSystem = None) -> Calculator:
        """Returns a new ``Calculator`` with `number` loaded."""
        return cls(ns).load(number)

    @property
    def number_system(self) -> NumberSystem:
        return self._ns

    def __repr__(self):
        return f"Calculator({self._acc!r})"

    # -- Operations ----------------------------------------------------

    def load(self, number) -> Calculator:
        """Replace the accumulator with `number`."""
        self._acc = self._ns.narrow(_required(number))
        return self

    def add(self, number) -> Calculator:
        self._acc = self._ns.add(self._acc, self._ns.narrow(
            _required(number)))
        return self

    def subtract(self, number) -> Calculator:
        self._acc = self._ns.subtract(self._acc, self._ns.narrow(
            _required(number)))
        return self

    def multiply(self, number) -> Calculator:
        self._acc = self._ns.multiply(self._acc, self._ns.narrow(
            _required(number)))
        return self

    def divide(self, number) -> Calculator:
        self._acc = self._ns.divide(self._acc, self._ns.narrow(
            _required(number)))
        return self

    def power(self, exponent: int) -> Calculator:
        self._acc = self._ns.power(self._acc, _required(exponent))
        return self

    def abs(self) -> Calculator:
        self._acc = self._ns.abs(self._acc)
        return self

    def negate(self) -> Calculator:
        self._acc = self._ns.negate(self._acc)
        return self

    def reciprocal(self) -> Calculator:
        self._acc = self._ns.reciprocal(self._acc)
        return self

    def exp(self) -> Calculator:
        self._acc = self._ns.exp(self._acc)
        return self

    def log(self) -> Calculator:
        self._acc = self._ns.log(self._acc)
        return self

    # -- Terminals -----------------------------------------------------

    def peek(self):
        """Returns the narrowed value of the accumulator."""
        return self._ns.narrow(self._acc)

    def is_less_than_one(self) -> bool:
        return self._ns.is_less_than_one(self._acc)


def _required(x):
    if x is None:
        raise NullOperandError("Operand cannot be None.")
    return x
