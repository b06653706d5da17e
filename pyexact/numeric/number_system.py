"""
Number systems (:mod:`pyexact.numeric.number_system`).

A ``NumberSystem`` supplies the arithmetic used by ``Calculator``, the
converters and the radix layer.  ``DefaultNumberSystem`` works over the
numeric tower described by ``NumberKind`` and follows these promotion
rules:

    - Integer / integer operations use machine integers (``numpy.int64``)
      when the result is known to fit in 63 bits, otherwise Python's
      arbitrary-precision ``int``.  Results are never wrapped.
    - Operations between rationals, or a rational and an integer, are
      exact.
    - Anything involving a ``float`` or ``Decimal`` is done in
      ``Decimal`` arithmetic in the context given by
      ``pyexact.decimal_context()``.

Examples
--------
>>> ns = DefaultNumberSystem()
>>> big = 2**62
>>> ns.add(big, big)  # Promoted, not wrapped.
9223372036854775808
>>> ns.divide(1, 3)
RationalNumber(1, 3)
>>> ns.narrow(ns.multiply(RationalNumber.of(3, 2), 4))
np.int64(6)
"""
from __future__ import annotations

import decimal
import math
import warnings
from abc import ABC, abstractmethod

import numpy as np

from pyexact._opts import decimal_context, get_calc_options
from pyexact.exceptions import PrecisionLossWarning
from pyexact.numeric.kinds import (NumberKind, kind_of, bit_length,
                                   as_machine_int, MACHINE_INT_BITS)
from pyexact.numeric.rational import RationalNumber

_ZERO = np.int64(0)
_ONE = np.int64(1)


# ======================================================================

class NumberSystem(ABC):
    """
    Abstract base class for number systems.  Implementations decide how
    numbers of the various kinds are combined and which kind the result
    takes.
    """

    @abstractmethod
    def add(self, x, y):
        """Returns ``x + y``."""
        raise NotImplementedError

    @abstractmethod
    def subtract(self, x, y):
        """Returns ``x - y``."""
        raise NotImplementedError

    @abstractmethod
    def multiply(self, x, y):
        """Returns ``x * y``."""
        raise NotImplementedError

    @abstractmethod
    def divide(self, x, y):
        """Returns ``x / y``."""
        raise NotImplementedError

    @abstractmethod
    def divide_and_remainder(self, x, y,
                             round_remainder_toward_zero: bool) -> tuple:
        """
        Returns ``(quotient, remainder)`` of ``x / y`` where the quotient
        is a whole number.  If `round_remainder_toward_zero` is `True` the
        remainder is also truncated to a whole number.
        """
        raise NotImplementedError

    @abstractmethod
    def power(self, x, exponent: int):
        """Returns ``x ** exponent`` for whole number `exponent`."""
        raise NotImplementedError

    @abstractmethod
    def reciprocal(self, x):
        """Returns ``1 / x``."""
        raise NotImplementedError

    @abstractmethod
    def negate(self, x):
        """Returns ``-x``."""
        raise NotImplementedError

    @abstractmethod
    def signum(self, x) -> int:
        raise NotImplementedError

    @abstractmethod
    def abs(self, x):
        raise NotImplementedError

    @abstractmethod
    def exp(self, x):
        """Returns Euler's number raised to the power of `x`."""
        raise NotImplementedError

    @abstractmethod
    def log(self, x):
        """Returns the natural logarithm of `x`."""
        raise NotImplementedError

    @abstractmethod
    def narrow(self, x):
        """
        Returns `x` converted to the narrowest representation that
        preserves its value exactly.  Used to keep later work cheap.
        """
        raise NotImplementedError

    @abstractmethod
    def compare(self, x, y) -> int:
        """Returns -1, 0 or +1 as `x` is less than, equal to or greater
        than `y`."""
        raise NotImplementedError

    @abstractmethod
    def is_zero(self, x) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_one(self, x) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_less_than_one(self, x) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_integer(self, x) -> bool:
        """Returns `True` if `x` has no fractional part."""
        raise NotImplementedError

    def is_equal(self, x, y) -> bool:
        """Returns `True` if `x` and `y` have the same numeric value,
        regardless of their kind."""
        return x is y or self.compare(x, y) == 0


# ----------------------------------------------------------------------

class DefaultNumberSystem(NumberSystem):
    """
    Number system over the kinds given by ``NumberKind``.  See the module
    documentation for the promotion rules.
    """

    def __repr__(self):
        return f"{type(self).__name__}()"

    # -- Arithmetic ----------------------------------------------------

    def add(self, x, y):
        kind_x, kind_y = kind_of(x), kind_of(y)
        if kind_y.value > kind_x.value:
            return self._add_wide_narrow(kind_y, y, kind_x, x)
        return self._add_wide_narrow(kind_x, x, kind_y, y)

    def subtract(self, x, y):
        return self.add(x, self.negate(y))

    def multiply(self, x, y):
        kind_x, kind_y = kind_of(x), kind_of(y)
        if kind_y.value > kind_x.value:
            return self._multiply_wide_narrow(kind_y, y, kind_x, x)
        return self._multiply_wide_narrow(kind_x, x, kind_y, y)

    def divide(self, x, y):
        return self.multiply(x, self.reciprocal(y))

    def divide_and_remainder(self, x, y,
                             round_remainder_toward_zero: bool) -> tuple:
        """
        Returns ``(quotient, remainder)`` using truncating division, so
        that ``x == quotient * y + remainder`` and the remainder has the
        sign of `x`.

        If both `x` and `y` are integers the result is exact integer
        division.  Otherwise the division is carried out in ``Decimal``
        arithmetic and, if `round_remainder_toward_zero` is `True`, the
        remainder is truncated to a whole number.

        Raises
        ------
        ZeroDivisionError
            If `y` is zero.
        """
        sign_x, sign_y = self.signum(x), self.signum(y)
        if sign_y == 0:
            raise ZeroDivisionError("Division by zero.")
        if sign_x == 0:
            return _ZERO, _ZERO

        sign_q = sign_x * sign_y
        abs_x, abs_y = self.abs(x), self.abs(y)
        kind_x, kind_y = kind_of(abs_x), kind_of(abs_y)

        if kind_x.is_integer_only and kind_y.is_integer_only:
            quo, rem = divmod(int(abs_x), int(abs_y))
            return sign_q * quo, sign_x * rem

        ctx = decimal_context()
        quo, rem = ctx.divmod(self.to_decimal(abs_x),
                              self.to_decimal(abs_y))
        if sign_q < 0:
            quo = quo.copy_negate()

        if round_remainder_toward_zero:
            return quo, sign_x * int(rem)
        return quo, rem.copy_negate() if sign_x < 0 else rem

    def power(self, x, exponent: int):
        """
        Raises
        ------
        ValueError
            For ``0 ** 0``.
        """
        exponent = int(exponent)
        kind = kind_of(x)
        if exponent == 0:
            if self.is_zero(x):
                raise ValueError("0^0 is not defined.")
            return _ONE
        if exponent == 1:
            return x

        if kind.is_integer_only:
            if exponent > 0:
                return int(x) ** exponent
            return RationalNumber.of_integer(x).pow(exponent)
        if kind is NumberKind.RATIONAL:
            return x.pow(exponent)

        # Float, Decimal.
        return decimal_context().power(self.to_decimal(x), exponent)

    def reciprocal(self, x):
        """
        Integers give an exact ``RationalNumber``; decimals and floats
        give the ``Decimal`` result of ``1 / x``.
        """
        kind = kind_of(x)
        if kind.is_integer_only:
            return RationalNumber.of(1, x)
        if kind is NumberKind.RATIONAL:
            return x.reciprocal()
        return decimal_context().divide(decimal.Decimal(1),
                                        self.to_decimal(x))

    def negate(self, x):
        kind = kind_of(x)
        if kind is NumberKind.INTEGER:
            return _machine_or_big(-int(x))
        if kind is NumberKind.BIG_INTEGER:
            return -x
        if kind is NumberKind.RATIONAL:
            return x.negate()
        if kind is NumberKind.DECIMAL:
            return x.copy_negate()
        return -x  # Float.

    def signum(self, x) -> int:
        kind = kind_of(x)
        if kind.is_integer_only:
            x = int(x)
            return (x > 0) - (x < 0)
        if kind is NumberKind.RATIONAL:
            return x.signum
        if kind is NumberKind.DECIMAL:
            if x.is_zero():
                return 0
            return -1 if x.is_signed() else 1
        return (x > 0) - (x < 0)  # Float.

    def abs(self, x):
        kind = kind_of(x)
        if kind is NumberKind.INTEGER:
            return _machine_or_big(abs(int(x)))
        if kind is NumberKind.BIG_INTEGER:
            return abs(x)
        if kind is NumberKind.RATIONAL:
            return x.abs()
        if kind is NumberKind.DECIMAL:
            return x.copy_abs()
        return abs(x)  # Float.

    def exp(self, x):
        return decimal_context().exp(self.to_decimal(x))

    def log(self, x):
        return decimal_context().ln(self.to_decimal(x))

    # -- Narrowing -----------------------------------------------------

    def narrow(self, x):
        """
        Integers that fit in 63 bits become ``numpy.int64``.  Decimals,
        floats and rationals that are whole numbers become integers (then
        narrowed again).  Other values are returned unchanged.

        Raises
        ------
        ValueError
            If `x` is a float or decimal that is not finite.
        """
        kind = kind_of(x)
        if kind.is_integer_only:
            return _machine_or_big(int(x))

        if kind is NumberKind.RATIONAL:
            return self.narrow(x.numerator) if x.is_integer else x

        if kind is NumberKind.FLOAT:
            if not math.isfinite(x):
                raise ValueError(f"Unsupported number value {x!r}.")
            if x == 0:
                return _ZERO
            if float(x).is_integer():
                return self.narrow(int(x))
            return x

        # Decimal.
        if not x.is_finite():
            raise ValueError(f"Unsupported number value {x!r}.")
        if x == x.to_integral_value():
            return self.narrow(int(x))
        return x

    # -- Comparison ----------------------------------------------------

    def compare(self, x, y) -> int:
        """
        Exact comparison.  Floats and decimals are compared by lifting
        them to rationals (floats via their shortest representation) so
        no rounding takes place.
        """
        kind_x, kind_y = kind_of(x), kind_of(y)
        if kind_x.is_integer_only and kind_y.is_integer_only:
            x, y = int(x), int(y)
            return (x > y) - (x < y)
        return self.to_rational(x).compare(self.to_rational(y))

    def is_zero(self, x) -> bool:
        return self.signum(x) == 0

    def is_one(self, x) -> bool:
        return self.compare(x, _ONE) == 0

    def is_less_than_one(self, x) -> bool:
        return self.compare(x, _ONE) < 0

    def is_integer(self, x) -> bool:
        kind = kind_of(x)
        if kind.is_integer_only:
            return True
        if kind is NumberKind.RATIONAL:
            return x.is_integer
        if kind is NumberKind.FLOAT:
            return math.isfinite(x) and float(x).is_integer()
        return x.is_finite() and x == x.to_integral_value()

    # -- Conversion ----------------------------------------------------

    def to_decimal(self, x) -> decimal.Decimal:
        """
        Returns `x` as a ``Decimal``.  Floats are converted using their
        shortest representation, e.g. ``0.1`` -> ``Decimal('0.1')``.
        """
        kind = kind_of(x)
        if kind is NumberKind.DECIMAL:
            return x
        if kind.is_integer_only:
            return decimal.Decimal(int(x))
        if kind is NumberKind.RATIONAL:
            if not x.is_integer:
                _warn_precision(x)
            return x.decimal_value()
        _warn_precision(x)
        return decimal.Decimal(repr(float(x)))

    def to_rational(self, x) -> RationalNumber:
        """
        Returns `x` as a ``RationalNumber``.  This is exact for every kind
        (floats via their shortest representation).
        """
        kind = kind_of(x)
        if kind is NumberKind.RATIONAL:
            return x
        if kind.is_integer_only:
            return RationalNumber.of_integer(x)
        if kind is NumberKind.DECIMAL:
            return RationalNumber.of_decimal(x)
        return RationalNumber.of_float(x)

    # -- Helpers -------------------------------------------------------

    def _add_wide_narrow(self, wide_kind: NumberKind, wide,
                         narrow_kind: NumberKind, narrow):
        # Skip widening if either argument is zero.
        if self.is_zero(wide):
            return narrow
        if self.is_zero(narrow):
            return wide

        if wide_kind.is_integer_only:
            # Both are integers. +1 for carry, sign not included.
            bits = max(bit_length(wide), bit_length(narrow)) + 1
            if bits < MACHINE_INT_BITS:
                return as_machine_int(wide) + as_machine_int(narrow)
            return int(wide) + int(narrow)

        if wide_kind is NumberKind.RATIONAL:
            # Narrow is a rational or an integer.
            return wide.add(self.to_rational(narrow))

        return decimal_context().add(self.to_decimal(wide),
                                     self.to_decimal(narrow))

    def _multiply_wide_narrow(self, wide_kind: NumberKind, wide,
                              narrow_kind: NumberKind, narrow):
        if self.is_zero(wide) or self.is_zero(narrow):
            return _ZERO

        if wide_kind.is_integer_only:
            bits = bit_length(wide) + bit_length(narrow)
            if bits < MACHINE_INT_BITS:
                return as_machine_int(wide) * as_machine_int(narrow)
            return int(wide) * int(narrow)

        if wide_kind is NumberKind.RATIONAL:
            return wide.multiply(self.to_rational(narrow))

        return decimal_context().multiply(self.to_decimal(wide),
                                          self.to_decimal(narrow))


# ----------------------------------------------------------------------

def _machine_or_big(x: int):
    # Smallest integer representation holding `x` exactly.
    if x.bit_length() < MACHINE_INT_BITS:
        return np.int64(x)
    return x


def _warn_precision(x):
    if get_calc_options().warn_precision_loss:
        warnings.warn(f"Possible loss of precision converting "
                      f"{type(x).__name__} value {x} to Decimal.",
                      PrecisionLossWarning, stacklevel=3)
