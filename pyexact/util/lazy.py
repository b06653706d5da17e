"""
Provides the ``Lazy`` class, a holder for a value that is expensive to
compute and is only computed when first needed.

Examples
--------
>>> calls = []
>>> cell = Lazy(lambda: calls.append('x') or 42)
>>> cell.is_memoized
False
>>> cell.get(), cell.get()
(42, 42)
>>> calls
['x']
"""
from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from pyexact.exceptions import AlreadyMemoizedError, NullOperandError

_T = TypeVar('_T')


# ======================================================================

class Lazy(Generic[_T]):
    """
    A compute-once cell.  The supplier is called on the first ``get()``
    and the result is returned on every later call.  Concurrent first
    callers are serialised by a lock so the supplier runs exactly once and
    all callers see the same value.

    .. note:: ``Lazy`` objects hold a callable (often a closure) and can't
       be pickled.
    """

    __slots__ = ('_supplier', '_value', '_memoized', '_lock')

    def __init__(self, supplier: Callable[[], _T]):
        """
        Parameters
        ----------
        supplier : Callable[[], T]
            Function with no arguments returning the value to memoize.
        """
        if supplier is None:
            raise NullOperandError("Lazy requires a supplier.")
        self._supplier = supplier
        self._value = None
        self._memoized = False
        self._lock = threading.Lock()

    def __reduce__(self):
        raise TypeError(f"Cannot pickle '{type(self).__name__}' objects.")

    def __repr__(self):
        if self._memoized:
            return f"Lazy({self._value!r})"
        return "Lazy(<not computed>)"

    @property
    def is_memoized(self) -> bool:
        with self._lock:
            return self._memoized

    def clear(self):
        """Discard any memoized value.  The next ``get()`` recomputes."""
        with self._lock:
            self._memoized = False
            self._value = None

    def get(self) -> _T:
        """Return the memoized value, computing it on the first call."""
        if self._memoized:  # Fast path, no lock needed once set.
            return self._value

        with self._lock:
            if not self._memoized:
                self._value = self._supplier()
                self._memoized = True
            return self._value

    def set(self, value: _T):
        """
        Memoize `value` directly without calling the supplier.

        Raises
        ------
        AlreadyMemoizedError
            If a value has already been memoized (by ``get()`` or
            ``set()``).  Call ``clear()`` first to replace it.
        """
        with self._lock:
            if self._memoized:
                raise AlreadyMemoizedError(
                    f"Cannot set value {value!r} on Lazy that has already "
                    f"memoized a value.")
            self._value = value
            self._memoized = True
