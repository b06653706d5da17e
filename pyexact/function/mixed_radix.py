"""
Labelled mixed-radix values (:mod:`pyexact.function.mixed_radix`).

Examples
--------
>>> hms = MixedRadix.of('h').mix('min', 60).mix('s', 60)
>>> hms.labels
('h', 'min', 's')
>>> [int(x) for x in hms.decompose(3725)]
[1, 2, 5]
>>> hms.compose([1, 2, 5])
np.int64(3725)
>>> hms.compose_primary([1, 30])
RationalNumber(3, 2)
"""
from __future__ import annotations

from collections.abc import Sequence

from pyexact._opts import get_number_system
from pyexact.exceptions import InvalidRadixError, NullOperandError
from pyexact.function.converters import AbstractConverter
from pyexact.function.radix import MixedRadixSupport, Radix
from pyexact.numeric.calculator import Calculator


# ======================================================================

class MixedRadix:
    """
    A value split over a chain of labelled positional units ordered
    most-significant first, e.g. hours, minutes and seconds.  The leading
    label is the *primary* unit.  Instances are immutable; ``mix()``
    returns a new ``MixedRadix`` with one more unit.
    """

    def __init__(self, labels: Sequence[str], radices: Sequence[Radix]):
        """
        Parameters
        ----------
        labels : Sequence[str]
            Unit labels, most-significant first.
        radices : Sequence[Radix]
            Radix between each unit and the next, so there is one fewer
            than `labels`.

        Raises
        ------
        ValueError
            If a label is repeated or the lengths do not agree.
        """
        self._labels = tuple(labels)
        self._radices = tuple(radices)
        if not self._labels:
            raise ValueError("At least the leading label is required.")
        if len(set(self._labels)) != len(self._labels):
            raise ValueError(f"Duplicate labels in {self._labels}.")
        if len(self._radices) != len(self._labels) - 1:
            raise ValueError("Require one radix between each pair of "
                             "labels.")

        self._support = (MixedRadixSupport(self._radices)
                         if self._radices else None)

    @classmethod
    def of(cls, leading_label: str) -> MixedRadix:
        """Returns a ``MixedRadix`` with a single (primary) unit."""
        return cls([leading_label], [])

    def mix(self, label: str, radix) -> MixedRadix:
        """
        Returns a new ``MixedRadix`` with `label` appended as the least
        significant unit.

        Parameters
        ----------
        label : str
            Label of the new unit.
        radix : Radix, AbstractConverter or number
            Number of new units in one unit of the current least
            significant label.  Converters must be linear.

        Raises
        ------
        InvalidRadixError
            If the radix is invalid or is not greater than one (the new
            unit must be of lesser significance).
        """
        if isinstance(radix, Radix):
            pass
        elif isinstance(radix, AbstractConverter):
            radix = Radix.of_scale_converter(radix)
        else:
            radix = Radix.of_number_factor(radix)

        if get_number_system().compare(radix.factor, 1) <= 0:
            raise InvalidRadixError(
                f"Unit '{label}' must be of lesser significance than "
                f"'{self._labels[-1]}'.", factor=radix.factor)

        return MixedRadix(self._labels + (label,),
                          self._radices + (radix,))

    # -- Properties ----------------------------------------------------

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    @property
    def primary_label(self) -> str:
        return self._labels[0]

    @property
    def radices(self) -> tuple[Radix, ...]:
        return self._radices

    def __len__(self):
        return len(self._labels)

    def __repr__(self):
        parts = [repr(self._labels[0])]
        for label, radix in zip(self._labels[1:], self._radices):
            parts.append(f"{radix.factor} {label!r}")
        return f"MixedRadix({' : '.join(parts)})"

    # -- Decomposition -------------------------------------------------

    def decompose(self, total, max_parts: int = None) -> list:
        """
        Returns `total` (given in the least significant unit) split into
        one value per label, most-significant first.  Only the least
        significant value can have a fractional part.

        If `max_parts` is given, only the first (most significant)
        `max_parts` values are returned.
        """
        if total is None:
            raise NullOperandError("Total cannot be None.")
        if self._support is None:
            values = [Calculator.of(total).peek()]
        else:
            values = list(self._support.radix_numbers(total))[::-1]

        if max_parts is not None:
            values = values[:max(max_parts, 0)]
        return values

    def decompose_labelled(self, total) -> dict:
        """As for ``decompose()`` but returns a ``{label: value}`` dict."""
        return dict(zip(self._labels, self.decompose(total)))

    def decompose_primary(self, value) -> list:
        """As for ``decompose()`` with `value` given in the primary
        unit."""
        calc = Calculator.of(value)
        for radix in self._radices:
            calc.multiply(radix.factor)
        return self.decompose(calc.peek())

    # -- Composition ---------------------------------------------------

    def compose(self, values: Sequence):
        """
        Returns the total in the least significant unit of `values`
        (most-significant first).  Missing trailing values are taken as
        zero.

        Raises
        ------
        ValueError
            If `values` is empty or longer than the number of labels.
        """
        values = list(values)
        if len(values) > len(self._labels):
            raise ValueError(f"Got {len(values)} values for "
                             f"{len(self._labels)} labels.")
        if self._support is None:
            if not values:
                raise ValueError("At least one value is required.")
            return Calculator.of(values[0]).peek()
        return self._support.sum_most_significant(values)

    def compose_primary(self, values: Sequence):
        """As for ``compose()`` but the total is given in the primary
        unit."""
        calc = Calculator.of(self.compose(values))
        for radix in self._radices:
            calc.divide(radix.factor)
        return calc.peek()
