"""
===============================
Utilities (:mod:`pyexact.util`)
===============================

.. currentmodule:: pyexact.util

Small general purpose helpers used in various places.

.. autosummary::
    :toctree:

    Lazy

"""
from .lazy import Lazy
