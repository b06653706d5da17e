"""
===================================
Functions (:mod:`pyexact.function`)
===================================

.. currentmodule:: pyexact.function

Converters and the algorithms that work on them: normal-form composition
of converter chains and mixed-radix decomposition.

Converters
----------

.. autosummary::
    :toctree:

    AbstractConverter
    AddConverter
    ConverterPair
    ExpConverter
    IdentityConverter
    LogConverter
    MultiplyConverter
    PowerOfIntConverter
    PowerOfPiConverter

Normal Form
-----------

.. autosummary::
    :toctree:

    BitScanner
    CompositionTask
    NormalFormCompositionHandler
    NormalFormOrder
    compose
    sequence_to_converter

Mixed Radix
-----------

.. autosummary::
    :toctree:

    MixedRadix
    MixedRadixSupport
    Radix

"""
from .converters import (AbstractConverter, AddConverter, ConverterPair,
                         ExpConverter, IDENTITY, IdentityConverter,
                         LogConverter, MultiplyConverter,
                         PowerOfIntConverter, PowerOfPiConverter)
from .normal_form import (BitScanner, CompositionTask, DEFAULT_ORDER,
                          NormalFormCompositionHandler, NormalFormOrder,
                          compose, sequence_to_converter)
from .radix import (ConverterRadix, MixedRadixSupport, NumberFactorRadix,
                    Radix)
from .mixed_radix import MixedRadix
