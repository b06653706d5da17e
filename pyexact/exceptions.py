"""
Exceptions and warnings raised by ``pyexact``.

Every error derives from ``CalcError`` and also from the builtin
exception that best describes it, so callers can catch either.  None of
these are transient: they are raised at the point of detection and are
never retried internally.
"""


# ======================================================================

class CalcError(Exception):
    """
    Base class for all errors raised by ``pyexact``.  Additional
    information (optional) can be attached as keyword attributes to help
    find the cause of the failure.
    """

    def __init__(self, *args, **kwargs):
        """
        Parameters
        ----------
        args :
            Passed to `Exception`.
        kwargs :
            Additional attributes can be added to the object using
            keyword arguments.
        """
        super().__init__(*args)
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __str__(self):
        """Add additional details below the main failure notice."""
        error_str = super().__str__()
        for k, v in self.__dict__.items():
            if v is not None:
                error_str += f"\n{k} -> {v}"
        return error_str


class NullOperandError(CalcError, ValueError):
    """A required operand was ``None``."""
    pass


class InvalidRationalError(CalcError, ZeroDivisionError):
    """A rational number was requested with a zero denominator."""
    pass


class InvalidRadixError(CalcError, ValueError):
    """
    A radix factor was zero or negative, or a radix was requested from a
    converter that carries an offset (i.e. is not linear).
    """
    pass


class UnsupportedNumberError(CalcError, TypeError):
    """
    A numeric value is of a kind the number system does not recognise.
    This indicates an integration fault (a new kind of number was used
    without the number system being extended), not a transient problem.
    """
    pass


class NormalFormOrderError(CalcError, LookupError):
    """
    A converter class has no priority in the normal-form order table.
    Ordering unknown kinds arbitrarily would break the canonical form so
    this is always fatal.
    """
    pass


class AlreadyMemoizedError(CalcError, RuntimeError):
    """``Lazy.set()`` was called after a value was already memoized."""
    pass


# ----------------------------------------------------------------------

class PrecisionLossWarning(UserWarning):
    """
    Issued (when enabled by ``set_calc_options(warn_precision_loss=True)``)
    whenever an exact or binary floating point operand has to be forced
    into a decimal representation.
    """
    pass
