"""
Exact rational numbers (:mod:`pyexact.numeric.rational`).

``RationalNumber`` is always kept in canonical form: the numerator and
denominator are coprime, the denominator is positive and the sign is
held separately.  As a result equal values always have identical
internal representations, e.g.:

>>> RationalNumber.of(6, -8)
RationalNumber(-3, 4)
>>> RationalNumber.of(-3, 4) is RationalNumber.of(6, -8)
False
>>> RationalNumber.of(-3, 4) == RationalNumber.of(6, -8)
True

Zero and one are singletons:

>>> RationalNumber.of(0, 5) is RationalNumber.ZERO
True
>>> RationalNumber.of(7, 7) is RationalNumber.ONE
True
"""
from __future__ import annotations

import decimal
import functools
import math
import numbers
from fractions import Fraction
from typing import ClassVar

import numpy as np

from pyexact._opts import decimal_context
from pyexact.exceptions import InvalidRationalError, NullOperandError
from pyexact.util.lazy import Lazy


# ======================================================================

def _expand(signum: int, abs_numerator: int,
            abs_denominator: int) -> decimal.Decimal:
    # Decimal expansion in the context active at the time of the call.
    ctx = decimal_context()
    res = ctx.divide(decimal.Decimal(abs_numerator),
                     decimal.Decimal(abs_denominator))
    return res.copy_negate() if signum < 0 else res


def _whole(x) -> int | None:
    # Integer operands usable directly in exact arithmetic, else None.
    if isinstance(x, np.integer):
        return int(x)
    if isinstance(x, int) and not isinstance(x, bool):
        return x
    return None


# ----------------------------------------------------------------------

@functools.total_ordering
class RationalNumber:
    """
    Immutable exact fraction built on two arbitrary-precision integers
    plus a sign.  Construct using ``RationalNumber.of()``,
    ``of_integer()``, ``of_decimal()`` or ``of_float()``.

    The decimal expansion (``decimal_value()``) is computed at most once
    per instance and cached.

    .. note:: The Python operators (``==``, ``<``, ``hash()``) compare
       against a ``float`` using its exact binary value, the same as
       ``fractions.Fraction``, so that equal values hash equally.
       ``of_float()`` and ``DefaultNumberSystem.compare()`` instead use
       the float's shortest representation.  For example
       ``RationalNumber.of_float(0.1) == 0.1`` is `False` while
       ``DefaultNumberSystem().is_equal(RationalNumber.of_float(0.1),
       0.1)`` is `True`.
    """
    __slots__ = ('_signum', '_abs_num', '_abs_den', '_hash', '_decimal')

    ZERO: ClassVar[RationalNumber]
    ONE: ClassVar[RationalNumber]

    def __new__(cls, numerator=0, denominator=1):
        return cls.of(numerator, denominator)

    @classmethod
    def _canonical(cls, signum: int, abs_num: int,
                   abs_den: int) -> RationalNumber:
        # Arguments must already be reduced, with abs_den > 0.
        obj = object.__new__(cls)
        obj._signum = signum
        obj._abs_num = abs_num
        obj._abs_den = abs_den
        obj._hash = None
        obj._decimal = Lazy(functools.partial(_expand, signum, abs_num,
                                              abs_den))
        return obj

    # -- Construction --------------------------------------------------

    @classmethod
    def of(cls, numerator, denominator=1) -> RationalNumber:
        """
        Returns the canonical rational `numerator` / `denominator`.

        Parameters
        ----------
        numerator, denominator : int
            Python or NumPy integers.  `denominator` defaults to 1.

        Raises
        ------
        InvalidRationalError
            If `denominator` is zero.
        TypeError
            If either argument is not an integer.
        """
        if numerator is None or denominator is None:
            raise NullOperandError("Numerator and denominator are "
                                   "required.")
        num, den = _whole(numerator), _whole(denominator)
        if num is None or den is None:
            raise TypeError(f"Rational requires integer arguments, got "
                            f"{numerator!r} / {denominator!r}.")
        if den == 0:
            raise InvalidRationalError(
                "Cannot create a rational number with a zero denominator.",
                numerator=num)
        if den == 1:
            return cls.of_integer(num)
        if den == -1:
            return cls.of_integer(-num)

        signum = _sign(num) * _sign(den)
        if signum == 0:
            return cls.ZERO

        abs_num, abs_den = abs(num), abs(den)
        gcd = math.gcd(abs_num, abs_den)
        abs_num, abs_den = abs_num // gcd, abs_den // gcd
        if abs_den == 1 and abs_num == 1 and signum > 0:
            return cls.ONE
        return cls._canonical(signum, abs_num, abs_den)

    @classmethod
    def of_integer(cls, number) -> RationalNumber:
        """Returns the whole number `number` as a rational."""
        num = _whole(number)
        if num is None:
            raise TypeError(f"Expected an integer, got {number!r}.")
        if num == 0 and hasattr(cls, 'ZERO'):
            return cls.ZERO
        if num == 1 and hasattr(cls, 'ONE'):
            return cls.ONE
        return cls._canonical(_sign(num), abs(num), 1)

    @classmethod
    def of_decimal(cls, number: decimal.Decimal) -> RationalNumber:
        """
        Returns the exact value of finite decimal `number` as a rational,
        e.g. ``Decimal('0.25')`` gives 1/4.
        """
        if not number.is_finite():
            raise ValueError(f"Cannot convert {number!r} to a rational.")
        return cls.of(*number.as_integer_ratio())

    @classmethod
    def of_float(cls, number: float) -> RationalNumber:
        """
        Returns the value of finite float `number` as a rational, using
        its shortest decimal representation (so that ``of_float(0.1)``
        gives 1/10 rather than the exact binary value).
        """
        return cls.of_decimal(decimal.Decimal(repr(float(number))))

    def __reduce__(self):
        return RationalNumber.of, (self.numerator, self._abs_den)

    # -- Properties ----------------------------------------------------

    @property
    def numerator(self) -> int:
        """Signed numerator."""
        return -self._abs_num if self._signum < 0 else self._abs_num

    @property
    def denominator(self) -> int:
        """Positive denominator."""
        return self._abs_den

    @property
    def signum(self) -> int:
        """-1, 0 or +1."""
        return self._signum

    @property
    def is_integer(self) -> bool:
        return self._abs_den == 1

    def decimal_value(self) -> decimal.Decimal:
        """
        Returns the decimal expansion of this number, rounded to the
        decimal precision in effect the first time it is requested.
        """
        return self._decimal.get()

    # -- Arithmetic ----------------------------------------------------

    def add(self, that: RationalNumber) -> RationalNumber:
        # a/b + c/d = (ad + bc) / bd
        a, b = self.numerator, self._abs_den
        c, d = that.numerator, that._abs_den
        return RationalNumber.of(a * d + b * c, b * d)

    def subtract(self, that: RationalNumber) -> RationalNumber:
        return self.add(that.negate())

    def multiply(self, that: RationalNumber) -> RationalNumber:
        """
        Returns ``self * that``.  The product is reduced again, because the
        product of two reduced fractions need not be reduced (e.g.
        2/3 * 3/2).
        """
        signum = self._signum * that._signum
        if signum == 0:
            return RationalNumber.ZERO

        # a/b * c/d = ac / bd
        ac = self._abs_num * that._abs_num
        bd = self._abs_den * that._abs_den
        gcd = math.gcd(ac, bd)
        ac, bd = ac // gcd, bd // gcd
        if ac == 1 and bd == 1 and signum > 0:
            return RationalNumber.ONE
        return RationalNumber._canonical(signum, ac, bd)

    def divide(self, that: RationalNumber) -> RationalNumber:
        return self.multiply(that.reciprocal())

    def negate(self) -> RationalNumber:
        if self._signum == 0:
            return self
        return RationalNumber._canonical(-self._signum, self._abs_num,
                                         self._abs_den)

    def reciprocal(self) -> RationalNumber:
        """
        Raises
        ------
        InvalidRationalError
            If this number is zero.
        """
        if self._signum == 0:
            raise InvalidRationalError("Zero has no reciprocal.")
        if self._abs_num == 1 and self._abs_den == 1 and self._signum > 0:
            return self
        return RationalNumber._canonical(self._signum, self._abs_den,
                                         self._abs_num)

    def abs(self) -> RationalNumber:
        return self.negate() if self._signum < 0 else self

    def pow(self, exponent: int) -> RationalNumber:
        """
        Returns ``self ** exponent`` for integer `exponent`.

        Raises
        ------
        ValueError
            For ``0 ** 0``.
        InvalidRationalError
            For zero raised to a negative power.
        """
        if exponent == 0:
            if self._signum == 0:
                raise ValueError("0^0 is not defined.")
            return RationalNumber.ONE
        if self._signum == 0:
            if exponent < 0:
                raise InvalidRationalError("Zero has no reciprocal.")
            return RationalNumber.ZERO
        if exponent < 0:
            return self.reciprocal().pow(-exponent)

        signum = -1 if (self._signum < 0 and exponent % 2) else 1
        # Powers of coprime numbers remain coprime.
        return RationalNumber._canonical(signum, self._abs_num ** exponent,
                                         self._abs_den ** exponent)

    def compare(self, that: RationalNumber) -> int:
        """Returns -1, 0 or +1 as ``self`` is less than, equal to or
        greater than `that`."""
        if self._signum != that._signum:
            return -1 if self._signum < that._signum else 1
        if self._signum == 0:
            return 0

        # Same sign: a/b > c/d <=> ad > bc.
        ad = self._abs_num * that._abs_den
        bc = self._abs_den * that._abs_num
        abs_cmp = (ad > bc) - (ad < bc)
        return abs_cmp if self._signum > 0 else -abs_cmp

    # -- Python Numeric Protocol ---------------------------------------

    def _coerce(self, other) -> RationalNumber | None:
        if isinstance(other, RationalNumber):
            return other
        whole = _whole(other)
        if whole is not None:
            return RationalNumber.of_integer(whole)
        return None

    def _ratio_cmp(self, other) -> int | None:
        # Exact comparison with any supported operand, None if not
        # comparable.
        that = self._coerce(other)
        if that is not None:
            return self.compare(that)
        if isinstance(other, (float, np.floating, decimal.Decimal)):
            if isinstance(other, decimal.Decimal):
                finite = other.is_finite()
            else:
                finite = math.isfinite(other)
            if not finite:
                return None
            p, q = other.as_integer_ratio()
            lhs, rhs = self.numerator * q, p * self._abs_den
            return (lhs > rhs) - (lhs < rhs)
        return None

    def __eq__(self, other):
        if isinstance(other, RationalNumber):
            return (self._signum == other._signum and
                    self._abs_num == other._abs_num and
                    self._abs_den == other._abs_den)
        res = self._ratio_cmp(other)
        if res is None:
            return NotImplemented
        return res == 0

    def __lt__(self, other):
        res = self._ratio_cmp(other)
        if res is None:
            return NotImplemented
        return res < 0

    def __hash__(self):
        # Equal to the hash of any int / float / Decimal of equal value.
        if self._hash is None:
            self._hash = hash(Fraction(self.numerator, self._abs_den))
        return self._hash

    def __bool__(self):
        return self._signum != 0

    def __int__(self):
        # Truncates toward zero.
        res = self._abs_num // self._abs_den
        return -res if self._signum < 0 else res

    def __float__(self):
        return self.numerator / self._abs_den

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    def __add__(self, other):
        that = self._coerce(other)
        return NotImplemented if that is None else self.add(that)

    __radd__ = __add__

    def __sub__(self, other):
        that = self._coerce(other)
        return NotImplemented if that is None else self.subtract(that)

    def __rsub__(self, other):
        that = self._coerce(other)
        return NotImplemented if that is None else that.subtract(self)

    def __mul__(self, other):
        that = self._coerce(other)
        return NotImplemented if that is None else self.multiply(that)

    __rmul__ = __mul__

    def __truediv__(self, other):
        that = self._coerce(other)
        return NotImplemented if that is None else self.divide(that)

    def __rtruediv__(self, other):
        that = self._coerce(other)
        return NotImplemented if that is None else that.divide(self)

    def __pow__(self, exponent):
        whole = _whole(exponent)
        return NotImplemented if whole is None else self.pow(whole)

    def __rpow__(self, base):
        if self.is_integer:
            that = self._coerce(base)
            if that is not None:
                return that.pow(self.numerator)
        if isinstance(base, (int, float, np.integer, np.floating)):
            # Non-integral exponents give inexact results.
            return float(base) ** float(self)
        return NotImplemented

    def __floordiv__(self, other):
        that = self._coerce(other)
        return (NotImplemented if that is None else
                math.floor(self.divide(that)))

    def __rfloordiv__(self, other):
        that = self._coerce(other)
        return (NotImplemented if that is None else
                math.floor(that.divide(self)))

    def __mod__(self, other):
        that = self._coerce(other)
        if that is None:
            return NotImplemented
        return self.subtract(that.multiply(
            RationalNumber.of_integer(self // that)))

    def __rmod__(self, other):
        that = self._coerce(other)
        return NotImplemented if that is None else that % self

    # -- Rounding ------------------------------------------------------

    def __trunc__(self):
        return int(self)

    def __floor__(self):
        return self.numerator // self._abs_den

    def __ceil__(self):
        return -(-self.numerator // self._abs_den)

    def __round__(self, ndigits=None):
        """Rounds half to even, as for ``fractions.Fraction``."""
        if ndigits is None:
            floor, rem = divmod(self.numerator, self._abs_den)
            if 2 * rem < self._abs_den:
                return floor
            if 2 * rem > self._abs_den:
                return floor + 1
            return floor + floor % 2

        shift = 10 ** abs(ndigits)
        if ndigits > 0:
            return RationalNumber.of(round(self * shift), shift)
        return RationalNumber.of(round(self / shift) * shift)

    # -- Complex Parts -------------------------------------------------

    @property
    def real(self) -> RationalNumber:
        return self

    @property
    def imag(self) -> int:
        return 0

    def conjugate(self) -> RationalNumber:
        return self

    def __complex__(self):
        return complex(float(self))

    def __repr__(self):
        return f"RationalNumber({self.numerator}, {self._abs_den})"

    def __str__(self):
        if self.is_integer:
            return str(self.numerator)
        return f"{self.numerator}/{self._abs_den}"


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


RationalNumber.ZERO = RationalNumber.of_integer(0)
RationalNumber.ONE = RationalNumber.of_integer(1)

numbers.Rational.register(RationalNumber)
