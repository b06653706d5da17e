from __future__ import annotations

import decimal
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from pyexact.exceptions import NullOperandError
from pyexact.util.lazy import Lazy

if TYPE_CHECKING:
    from pyexact.numeric.number_system import NumberSystem


# ======================================================================


@dataclass(frozen=True, kw_only=True)
class CalcOptions:
    """
    Dataclass that holds option flags for calculations.  See
    'get_calc_options' and  'set_calc_options' for full details.
    """
    decimal_precision: int
    warn_precision_loss: bool

    def __post_init__(self):
        """Check certain values"""
        if self.decimal_precision < 1:
            raise ValueError("Require 'decimal_precision' >= 1.")


# Create single instance and set defaults.  Precision of 34 digits
# matches the IEEE 754 DECIMAL128 format.
_calc_options = CalcOptions(
    decimal_precision=34,
    warn_precision_loss=False
)


# ----------------------------------------------------------------------

def get_calc_options() -> CalcOptions:
    """
    Returns
    -------
    calc_options : CalcOptions
        Returns a CalcOptions object containing the options.  For a
        full description of each option, see `set_calc_options`.
    """
    return replace(_calc_options)


# noinspection PyIncorrectDocstring
def set_calc_options(**kwargs):
    """
    Set the current calculation options.

    Parameters
    ----------
    decimal_precision : int, default = 34
        Number of significant digits kept when a result has to be
        represented as a ``Decimal`` (i.e. any operation involving a
        decimal or float operand, and the decimal expansion of rational
        numbers).  Rounding is always ``ROUND_HALF_EVEN``.

        .. note:: Rational numbers cache their decimal expansion the first
           time it is requested, so changing the precision afterwards does
           not affect values that were already expanded.

    warn_precision_loss : bool, default = False
        If `True`, issue a ``PrecisionLossWarning`` whenever an exact
        rational or a binary float operand has to be converted to a
        decimal to complete an operation.

    See Also
    --------
    get_calc_options, calc_options

    Examples
    --------
    >>> from pyexact import get_calc_options, set_calc_options
    >>> set_calc_options(decimal_precision=16)
    >>> get_calc_options().decimal_precision
    16
    >>> set_calc_options(decimal_precision=34)
    """
    global _calc_options
    _calc_options = replace(_calc_options, **kwargs)


@contextmanager
def calc_options(**kwargs):
    """
    Context manager that applies `kwargs` as with ``set_calc_options``
    and restores the previous options on exit.

    Examples
    --------
    >>> from pyexact import calc_options, get_calc_options
    >>> with calc_options(decimal_precision=8):
    ...     get_calc_options().decimal_precision
    8
    >>> get_calc_options().decimal_precision
    34
    """
    global _calc_options
    previous = _calc_options
    set_calc_options(**kwargs)
    try:
        yield get_calc_options()
    finally:
        _calc_options = previous


def decimal_context() -> decimal.Context:
    """
    Returns a new ``decimal.Context`` set up for the current options.
    Division by zero and invalid operations are trapped (raised).
    """
    return decimal.Context(prec=_calc_options.decimal_precision,
                           rounding=decimal.ROUND_HALF_EVEN,
                           traps=[decimal.DivisionByZero,
                                  decimal.InvalidOperation,
                                  decimal.Overflow])


# -- Number System Provider --------------------------------------------

def _default_number_system() -> NumberSystem:
    from pyexact.numeric.number_system import DefaultNumberSystem
    return DefaultNumberSystem()


_number_system = Lazy(_default_number_system)
_number_system_lock = threading.Lock()


def get_number_system() -> NumberSystem:
    """
    Returns the process-wide number system used by ``Calculator`` and the
    converter / radix layers when none is passed explicitly.  The default
    (``DefaultNumberSystem``) is created on first use.
    """
    return _number_system.get()


def _install(cell: Lazy):
    # Cells are filled before being published.
    global _number_system
    with _number_system_lock:
        _number_system = cell


def set_number_system(ns: NumberSystem):
    """
    Replace the process-wide number system with `ns`.  Use
    ``reset_number_system()`` to go back to the default.
    """
    if ns is None:
        raise NullOperandError("Number system cannot be None.")
    cell = Lazy(_default_number_system)
    cell.set(ns)
    _install(cell)


def reset_number_system():
    """Go back to the default number system (recreated on next use)."""
    _install(Lazy(_default_number_system))


@contextmanager
def use_number_system(ns: NumberSystem):
    """
    Context manager that installs `ns` as the process-wide number system
    and restores the previous one on exit.  Mostly useful for tests or
    trying an alternate precision policy.
    """
    previous = get_number_system()
    set_number_system(ns)
    try:
        yield ns
    finally:
        set_number_system(previous)
