"""
Classification of the numeric values handled by ``pyexact``.

The supported values form a closed set, given by ``NumberKind``.  Every
operation in the number system first classifies its operands with
``kind_of()`` and then branches on the kind, so adding a new kind of
number means adding a member here and handling it everywhere the kinds
are branched on.
"""
from __future__ import annotations

import decimal
from enum import Enum

import numpy as np

from pyexact.exceptions import NullOperandError, UnsupportedNumberError
from pyexact.numeric.rational import RationalNumber

# Largest bit length (sign not included) that is stored as a machine
# integer.  int64 has 63 value bits.
MACHINE_INT_BITS = 63


# ======================================================================

class NumberKind(Enum):
    """
    Kinds of number in the tower, listed from narrowest to widest.  The
    `value` of each member gives its position so that kinds can be
    compared to find the wider of two operands.
    """
    INTEGER = 0  # Machine integer (numpy integer scalar).
    BIG_INTEGER = 1  # Arbitrary-precision integer (Python int).
    RATIONAL = 2  # Exact fraction (RationalNumber).
    FLOAT = 3  # Binary floating point (float, numpy floating).
    DECIMAL = 4  # Arbitrary-precision decimal (decimal.Decimal).

    @property
    def is_integer_only(self) -> bool:
        """True if every value of this kind is a whole number."""
        return self in (NumberKind.INTEGER, NumberKind.BIG_INTEGER)

    @property
    def is_exact(self) -> bool:
        """True for kinds whose arithmetic never rounds."""
        return self in (NumberKind.INTEGER, NumberKind.BIG_INTEGER,
                        NumberKind.RATIONAL)


def kind_of(x) -> NumberKind:
    """
    Returns the ``NumberKind`` of `x`.

    Raises
    ------
    NullOperandError
        If `x` is ``None``.
    UnsupportedNumberError
        If `x` is not one of the supported kinds.  Note that ``bool``,
        ``complex`` and ``fractions.Fraction`` are not supported.
    """
    if x is None:
        raise NullOperandError("Number cannot be None.")

    # Ordered by how often each type turns up.
    if isinstance(x, np.integer):
        return NumberKind.INTEGER
    if isinstance(x, int) and not isinstance(x, bool):
        return NumberKind.BIG_INTEGER
    if isinstance(x, decimal.Decimal):
        return NumberKind.DECIMAL
    if isinstance(x, RationalNumber):
        return NumberKind.RATIONAL
    if isinstance(x, (float, np.floating)):
        return NumberKind.FLOAT

    raise UnsupportedNumberError(
        f"Unsupported numeric kind '{type(x).__name__}'.", value=repr(x))


def is_supported(x) -> bool:
    """Returns `True` if `x` is a number that ``kind_of`` accepts."""
    try:
        kind_of(x)
    except (NullOperandError, UnsupportedNumberError):
        return False
    return True


# ----------------------------------------------------------------------

def bit_length(x) -> int:
    """
    Returns the number of bits needed for the magnitude of integer `x`,
    not including the sign.
    """
    return abs(int(x)).bit_length()


def as_machine_int(x) -> np.int64:
    """Returns integer-only value `x` as a ``numpy.int64``.  The caller
    must already know that the value fits."""
    return np.int64(int(x))
