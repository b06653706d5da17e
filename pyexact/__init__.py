"""
.. This module acts as the top-level API documentation.

.. module: pyexact

Exact, overflow-safe arithmetic over a small numeric tower (machine
integers, arbitrary-precision integers, exact rationals and
arbitrary-precision decimals), together with the algorithms that rely on
it:

.. autosummary::
    :toctree: generated/

    numeric
    function
    util

"""

__version__ = "0.1.0"

import sys

# ======================================================================

assert sys.version_info >= (3, 10)

from ._opts import (CalcOptions, calc_options, decimal_context,
                    get_calc_options, get_number_system,
                    reset_number_system, set_calc_options,
                    set_number_system, use_number_system)
from .exceptions import (AlreadyMemoizedError, CalcError,
                         InvalidRadixError, InvalidRationalError,
                         NormalFormOrderError, NullOperandError,
                         PrecisionLossWarning, UnsupportedNumberError)
