"""
Converters (:mod:`pyexact.function.converters`).

A converter is a function taking a value in one unit to a value in
another.  Converters are combined using ``concatenate()`` which always
gives the result in normal form (see :mod:`pyexact.function.normal_form`)
so that equivalent chains compare equal:

>>> km = PowerOfIntConverter.of(10, 3)
>>> double = MultiplyConverter.of(2)
>>> km.concatenate(double) == double.concatenate(km)
True
>>> km.concatenate(km.inverse())
IDENTITY

*Linear* converters (pure scale, no offset) commute with each other.
Converters with an offset, or non-linear ones such as logarithms, do
not, and their position in a chain is preserved.
"""
from __future__ import annotations

import decimal
from abc import ABC, abstractmethod

from pyexact._opts import decimal_context, get_number_system
from pyexact.exceptions import NullOperandError
from pyexact.numeric.kinds import NumberKind, kind_of, is_supported

# π to 60 significant digits; rounded to the working precision on use.
_PI = decimal.Decimal(
    '3.14159265358979323846264338327950288419716939937510582097494')


# ======================================================================

class AbstractConverter(ABC):
    """
    Base class for all converters.  Converters are immutable and compare
    equal when they are of the same type and have numerically equal
    parameters.
    """

    # -- Abstract Methods ----------------------------------------------

    @abstractmethod
    def convert(self, value):
        """Returns `value` converted by this converter."""
        raise NotImplementedError

    @abstractmethod
    def inverse(self) -> AbstractConverter:
        raise NotImplementedError

    @abstractmethod
    def is_identity(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def is_linear(self) -> bool:
        """
        Returns `True` if this converter has the form ``y = k.x`` (no
        offset).  Linear converters commute with each other.
        """
        raise NotImplementedError

    @abstractmethod
    def _key(self) -> tuple:
        # Parameters that give the identity of this converter.
        raise NotImplementedError

    # -- Composition ---------------------------------------------------

    @property
    def conversion_steps(self) -> list[AbstractConverter]:
        """Returns the individual steps of this converter, outermost
        (last applied) first."""
        return [self]

    def can_reduce_with(self, that: AbstractConverter) -> bool:
        """
        Returns `True` if ``self ∘ that`` (i.e. `that` applied first) can
        be replaced by a single converter using ``reduce()``.
        """
        return False

    def reduce(self, that: AbstractConverter) -> AbstractConverter:
        """Returns the single converter equivalent to ``self ∘ that``.
        Only valid if ``can_reduce_with(that)`` is `True`."""
        raise NotImplementedError(f"{type(self).__name__} does not "
                                  f"implement reduce().")

    def normal_form_key(self) -> tuple:
        """
        Secondary sort key used to order converters of the same type when
        building the normal form.  By default converters of the same type
        keep their relative order.
        """
        return ()

    def concatenate(self, that: AbstractConverter) -> AbstractConverter:
        """
        Returns the converter ``self ∘ that`` in normal form, i.e. `that`
        is applied first and then `self`.
        """
        from pyexact.function.normal_form import compose
        return compose(self, that, _can_reduce, _do_reduce)

    # -- Python Protocol -----------------------------------------------

    def __call__(self, value):
        return self.convert(value)

    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        ns = get_number_system()
        return all(_same(a, b, ns) for a, b in zip(self._key(),
                                                   other._key()))

    def __hash__(self):
        return hash((type(self).__name__, self._key()))


def _can_reduce(a: AbstractConverter, b: AbstractConverter) -> bool:
    return a.can_reduce_with(b)


def _do_reduce(a: AbstractConverter, b: AbstractConverter):
    return a.reduce(b)


def _same(a, b, ns) -> bool:
    if is_supported(a) and is_supported(b):
        return ns.is_equal(a, b)
    return a == b


def _exact_param(value, name: str):
    # Narrowed parameter with floats replaced by their decimal value, so
    # that hashing agrees with numeric equality.
    if value is None:
        raise NullOperandError(f"'{name}' cannot be None.")
    ns = get_number_system()
    value = ns.narrow(value)
    if kind_of(value) is NumberKind.FLOAT:
        value = ns.narrow(decimal.Decimal(repr(float(value))))
    return value


# ----------------------------------------------------------------------

class IdentityConverter(AbstractConverter):
    """Converter that returns its argument unchanged.  Use the
    ``IDENTITY`` instance."""

    def convert(self, value):
        return value

    def inverse(self) -> IdentityConverter:
        return self

    def is_identity(self) -> bool:
        return True

    def is_linear(self) -> bool:
        return True

    def _key(self) -> tuple:
        return ()

    def __repr__(self):
        return "IDENTITY"


IDENTITY = IdentityConverter()


# ----------------------------------------------------------------------

class MultiplyConverter(AbstractConverter):
    """Linear converter ``y = factor.x``."""

    def __init__(self, factor):
        self._factor = _exact_param(factor, 'factor')

    @classmethod
    def of(cls, factor) -> AbstractConverter:
        """Returns ``IDENTITY`` if `factor` is one, otherwise a new
        ``MultiplyConverter``."""
        conv = cls(factor)
        return IDENTITY if conv.is_identity() else conv

    @classmethod
    def of_ratio(cls, numerator: int,
                 denominator: int) -> AbstractConverter:
        """Exact rational factor `numerator` / `denominator`."""
        ns = get_number_system()
        return cls.of(ns.divide(numerator, denominator))

    @property
    def factor(self):
        return self._factor

    def convert(self, value):
        return get_number_system().multiply(value, self._factor)

    def inverse(self) -> AbstractConverter:
        return MultiplyConverter.of(
            get_number_system().reciprocal(self._factor))

    def is_identity(self) -> bool:
        return get_number_system().is_one(self._factor)

    def is_linear(self) -> bool:
        return True

    def can_reduce_with(self, that: AbstractConverter) -> bool:
        return isinstance(that, MultiplyConverter)

    def reduce(self, that: MultiplyConverter) -> AbstractConverter:
        return MultiplyConverter.of(
            get_number_system().multiply(self._factor, that._factor))

    def _key(self) -> tuple:
        return (self._factor,)

    def __repr__(self):
        return f"MultiplyConverter({self._factor})"


# ----------------------------------------------------------------------

class PowerOfIntConverter(AbstractConverter):
    """
    Linear converter ``y = base^exponent . x`` with integer `base` and
    `exponent`, e.g. the metric prefixes are powers of 10.  Kept separate
    from ``MultiplyConverter`` so that powers of the same base combine by
    adding exponents.
    """

    def __init__(self, base: int, exponent: int):
        if base is None or exponent is None:
            raise NullOperandError("Base and exponent are required.")
        base, exponent = int(base), int(exponent)
        if base == 0:
            raise ValueError("Base cannot be zero.")
        self._base, self._exponent = base, exponent

    @classmethod
    def of(cls, base: int, exponent: int) -> AbstractConverter:
        conv = cls(base, exponent)
        return IDENTITY if conv.is_identity() else conv

    @property
    def base(self) -> int:
        return self._base

    @property
    def exponent(self) -> int:
        return self._exponent

    @property
    def factor(self):
        """``base ** exponent``, rational when `exponent` < 0."""
        return get_number_system().power(self._base, self._exponent)

    def convert(self, value):
        return get_number_system().multiply(value, self.factor)

    def inverse(self) -> AbstractConverter:
        return PowerOfIntConverter.of(self._base, -self._exponent)

    def is_identity(self) -> bool:
        return self._exponent == 0 or self._base == 1

    def is_linear(self) -> bool:
        return True

    def can_reduce_with(self, that: AbstractConverter) -> bool:
        return (isinstance(that, PowerOfIntConverter) and
                that._base == self._base)

    def reduce(self, that: PowerOfIntConverter) -> AbstractConverter:
        return PowerOfIntConverter.of(self._base,
                                      self._exponent + that._exponent)

    def normal_form_key(self) -> tuple:
        return (self._base,)

    def _key(self) -> tuple:
        return self._base, self._exponent

    def __repr__(self):
        return f"PowerOfIntConverter({self._base}, {self._exponent})"


# ----------------------------------------------------------------------

class PowerOfPiConverter(AbstractConverter):
    """Linear converter ``y = π^exponent . x``."""

    def __init__(self, exponent: int):
        if exponent is None:
            raise NullOperandError("Exponent is required.")
        self._exponent = int(exponent)

    @classmethod
    def of(cls, exponent: int) -> AbstractConverter:
        conv = cls(exponent)
        return IDENTITY if conv.is_identity() else conv

    @property
    def exponent(self) -> int:
        return self._exponent

    @property
    def factor(self) -> decimal.Decimal:
        return decimal_context().power(_PI, self._exponent)

    def convert(self, value):
        return get_number_system().multiply(value, self.factor)

    def inverse(self) -> AbstractConverter:
        return PowerOfPiConverter.of(-self._exponent)

    def is_identity(self) -> bool:
        return self._exponent == 0

    def is_linear(self) -> bool:
        return True

    def can_reduce_with(self, that: AbstractConverter) -> bool:
        return isinstance(that, PowerOfPiConverter)

    def reduce(self, that: PowerOfPiConverter) -> AbstractConverter:
        return PowerOfPiConverter.of(self._exponent + that._exponent)

    def _key(self) -> tuple:
        return (self._exponent,)

    def __repr__(self):
        return f"PowerOfPiConverter({self._exponent})"


# ----------------------------------------------------------------------

class AddConverter(AbstractConverter):
    """Converter ``y = x + offset``.  Not linear."""

    def __init__(self, offset):
        self._offset = _exact_param(offset, 'offset')

    @classmethod
    def of(cls, offset) -> AbstractConverter:
        conv = cls(offset)
        return IDENTITY if conv.is_identity() else conv

    @property
    def offset(self):
        return self._offset

    def convert(self, value):
        return get_number_system().add(value, self._offset)

    def inverse(self) -> AbstractConverter:
        return AddConverter.of(get_number_system().negate(self._offset))

    def is_identity(self) -> bool:
        return get_number_system().is_zero(self._offset)

    def is_linear(self) -> bool:
        return False

    def can_reduce_with(self, that: AbstractConverter) -> bool:
        return isinstance(that, AddConverter)

    def reduce(self, that: AddConverter) -> AbstractConverter:
        return AddConverter.of(
            get_number_system().add(self._offset, that._offset))

    def _key(self) -> tuple:
        return (self._offset,)

    def __repr__(self):
        return f"AddConverter({self._offset})"


# ----------------------------------------------------------------------

class LogConverter(AbstractConverter):
    """Converter ``y = log_base(x)``."""

    def __init__(self, base):
        self._base = _exact_param(base, 'base')
        ns = get_number_system()
        if ns.signum(self._base) <= 0 or ns.is_one(self._base):
            raise ValueError(f"Invalid logarithm base {self._base}.")

    @property
    def base(self):
        return self._base

    def convert(self, value):
        ns = get_number_system()
        return ns.divide(ns.log(value), ns.log(self._base))

    def inverse(self) -> ExpConverter:
        return ExpConverter(self._base)

    def is_identity(self) -> bool:
        return False

    def is_linear(self) -> bool:
        return False

    def can_reduce_with(self, that: AbstractConverter) -> bool:
        return (isinstance(that, ExpConverter) and
                get_number_system().is_equal(that.base, self._base))

    def reduce(self, that: ExpConverter) -> AbstractConverter:
        return IDENTITY

    def _key(self) -> tuple:
        return (self._base,)

    def __repr__(self):
        return f"LogConverter({self._base})"


class ExpConverter(AbstractConverter):
    """Converter ``y = base^x``."""

    def __init__(self, base):
        self._base = _exact_param(base, 'base')
        ns = get_number_system()
        if ns.signum(self._base) <= 0 or ns.is_one(self._base):
            raise ValueError(f"Invalid exponent base {self._base}.")

    @property
    def base(self):
        return self._base

    def convert(self, value):
        ns = get_number_system()
        return ns.exp(ns.multiply(ns.log(self._base), value))

    def inverse(self) -> LogConverter:
        return LogConverter(self._base)

    def is_identity(self) -> bool:
        return False

    def is_linear(self) -> bool:
        return False

    def can_reduce_with(self, that: AbstractConverter) -> bool:
        return (isinstance(that, LogConverter) and
                get_number_system().is_equal(that.base, self._base))

    def reduce(self, that: LogConverter) -> AbstractConverter:
        return IDENTITY

    def _key(self) -> tuple:
        return (self._base,)

    def __repr__(self):
        return f"ExpConverter({self._base})"


# ----------------------------------------------------------------------

class ConverterPair(AbstractConverter):
    """
    Composite converter ``left ∘ right``: `right` is applied first, then
    `left`.  Normally built by the normal-form engine rather than
    directly.
    """

    def __init__(self, left: AbstractConverter, right: AbstractConverter):
        if left is None or right is None:
            raise NullOperandError("Converters cannot be None.")
        if left.is_identity() and right.is_identity():
            raise ValueError("Cannot pair two identity converters.")
        self._left, self._right = left, right

    @property
    def left(self) -> AbstractConverter:
        return self._left

    @property
    def right(self) -> AbstractConverter:
        return self._right

    @property
    def conversion_steps(self) -> list[AbstractConverter]:
        return (self._left.conversion_steps +
                self._right.conversion_steps)

    def convert(self, value):
        return self._left.convert(self._right.convert(value))

    def inverse(self) -> ConverterPair:
        return ConverterPair(self._right.inverse(), self._left.inverse())

    def is_identity(self) -> bool:
        return False

    def is_linear(self) -> bool:
        return self._left.is_linear() and self._right.is_linear()

    def _key(self) -> tuple:
        return self._left, self._right

    def __repr__(self):
        return f"ConverterPair({self._left!r}, {self._right!r})"
