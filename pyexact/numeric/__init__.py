"""
=================================
Numeric (:mod:`pyexact.numeric`)
=================================

.. currentmodule:: pyexact.numeric

The numeric tower: exact rationals, the number system that combines the
supported kinds of number, and the ``Calculator`` used at every
arithmetic call site.

.. autosummary::
    :toctree:

    Calculator
    DefaultNumberSystem
    NumberKind
    NumberSystem
    RationalNumber
    kind_of

"""
from .rational import RationalNumber
from .kinds import NumberKind, kind_of, is_supported
from .number_system import NumberSystem, DefaultNumberSystem
from .calculator import Calculator
