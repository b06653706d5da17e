"""
Mixed-radix arithmetic (:mod:`pyexact.function.radix`).

A *radix* is the scale factor between one positional digit of a
mixed-radix value and the next more significant one, e.g. 60 between
minutes and hours.  ``MixedRadixSupport`` splits a total into its digits
and sums digits back into a total.

Examples
--------
Seconds to ``[hours, minutes, seconds]``:

>>> support = MixedRadixSupport([Radix.of_number_factor(60),
...                              Radix.of_number_factor(60)])
>>> [int(x) for x in support.radix_numbers(3725)]
[5, 2, 1]
>>> support.sum_most_significant([1, 2, 5])
np.int64(3725)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Sequence

from pyexact._opts import get_number_system
from pyexact.exceptions import InvalidRadixError, NullOperandError
from pyexact.function.converters import AbstractConverter
from pyexact.numeric.calculator import Calculator


# ======================================================================

class Radix(ABC):
    """
    Scale factor between a positional unit and the next larger one.
    Factors are always positive.
    """

    @staticmethod
    def of_number_factor(value) -> Radix:
        """
        Returns a radix with the given numeric factor.

        Raises
        ------
        InvalidRadixError
            If `value` is `None`, zero or negative.
        """
        return NumberFactorRadix(value)

    @staticmethod
    def of_scale_converter(conv: AbstractConverter) -> Radix:
        """
        Returns a radix taking its factor from the linear converter
        `conv`, i.e. the result of ``conv.convert(1)``.

        Raises
        ------
        InvalidRadixError
            If `conv` is `None`, not linear or does not give a positive
            factor.
        """
        return ConverterRadix(conv)

    @property
    @abstractmethod
    def factor(self):
        """The (narrowed) scale factor."""
        raise NotImplementedError

    @abstractmethod
    def multiply(self, value):
        """Scale `value` up by this radix, i.e. into the next smaller
        positional unit."""
        raise NotImplementedError

    def divide_and_remainder(self, value,
                             round_remainder_toward_zero: bool) -> tuple:
        """
        Returns ``(quotient, remainder)`` dividing `value` by this radix.
        Both results are narrowed.  See
        ``NumberSystem.divide_and_remainder()``.
        """
        ns = get_number_system()
        quo, rem = ns.divide_and_remainder(
            ns.narrow(value), self.factor, round_remainder_toward_zero)
        return ns.narrow(quo), ns.narrow(rem)

    def __repr__(self):
        return f"{type(self).__name__}({self.factor})"


def _check_factor(factor):
    ns = get_number_system()
    factor = ns.narrow(factor)
    if ns.signum(factor) <= 0:
        raise InvalidRadixError(f"Radix factor must be positive, got "
                                f"{factor}.", factor=factor)
    return factor


# ----------------------------------------------------------------------

class NumberFactorRadix(Radix):
    """Radix given directly by a number."""

    def __init__(self, value):
        if value is None:
            raise InvalidRadixError("Radix factor is required.")
        self._factor = _check_factor(value)

    @property
    def factor(self):
        return self._factor

    def multiply(self, value):
        return Calculator.of(value).multiply(self._factor).peek()


class ConverterRadix(Radix):
    """Radix given by the scale of a linear converter."""

    def __init__(self, conv: AbstractConverter):
        if conv is None:
            raise InvalidRadixError("Radix converter is required.")
        if not conv.is_linear():
            raise InvalidRadixError(
                f"Radix requires a linear converter, got {conv!r}.",
                converter=conv)
        self._conv = conv
        self._factor = _check_factor(conv.convert(1))

    @property
    def converter(self) -> AbstractConverter:
        return self._conv

    @property
    def factor(self):
        return self._factor

    def multiply(self, value):
        return get_number_system().narrow(self._conv.convert(value))


# ======================================================================

class MixedRadixSupport:
    """
    Decomposes and recomposes values over a sequence of radices ordered
    most-significant first.  A sequence of `n` radices gives `n + 1`
    digits.
    """

    def __init__(self, radices: Sequence[Radix]):
        if radices is None:
            raise NullOperandError("Radices cannot be None.")
        self._radices = tuple(radices)
        if not self._radices:
            raise ValueError("At least one radix is required.")

    @property
    def radices(self) -> tuple[Radix, ...]:
        return self._radices

    def radix_numbers(self, total) -> Iterator:
        """
        Yields the digits of `total` (given in the least significant
        unit), least-significant first.  The least significant digit
        keeps any fractional part of `total`; all other digits are whole
        numbers.  The final value yielded is the leftover most
        significant digit.
        """
        if total is None:
            raise NullOperandError("Total cannot be None.")

        value = total
        for i, radix in enumerate(reversed(self._radices)):
            value, rem = radix.divide_and_remainder(
                value, round_remainder_toward_zero=(i != 0))
            yield rem
        yield value

    def visit_radix_numbers(self, total, visitor: Callable[..., None]):
        """Calls `visitor` with each value from ``radix_numbers(total)``
        in turn."""
        for x in self.radix_numbers(total):
            visitor(x)

    def sum_most_significant(self, values: Sequence):
        """
        Returns the total in the least significant unit of `values`,
        given most-significant first.  `values` may be shorter than the
        number of digits, in which case the missing less significant
        digits are taken as zero.

        Raises
        ------
        ValueError
            If `values` is empty or has more than ``len(radices) + 1``
            entries.
        """
        values = list(values)
        if not values:
            raise ValueError("At least one value is required.")
        if len(values) > len(self._radices) + 1:
            raise ValueError(f"Got {len(values)} values for "
                             f"{len(self._radices)} radices.")

        calc = Calculator.of(values[0])
        for i, radix in enumerate(self._radices, start=1):
            calc.load(radix.multiply(calc.peek()))
            if i < len(values):
                calc.add(values[i])
        return calc.peek()
