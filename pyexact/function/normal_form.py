"""
Normal form of converter chains (:mod:`pyexact.function.normal_form`).

Two chains of converters that are mathematically equivalent should give
structurally identical results so that converter equality can be
decided.  This is done by rewriting each chain into a *normal form*:

    1. Find each maximal run of adjacent converters that commute (linear
       or identity converters).
    2. Sort each run by the fixed ``NormalFormOrder``: identities first,
       then by the priority of the converter type, then by a type
       specific secondary key (e.g. the base of a ``PowerOfIntConverter``).
    3. Scan adjacent pairs, dropping identities and replacing pairs that
       can be reduced with their reduction.
    4. Repeat from 1 until no more simplifications occur.  Every
       simplification shortens the chain, so this always terminates.
    5. Fold what remains into a single converter.

Which pairs can be reduced, and how, is supplied by the caller.  See
``compose()``.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

import numpy as np

from pyexact.exceptions import NormalFormOrderError
from pyexact.function.converters import (
    AbstractConverter, AddConverter, ConverterPair, ExpConverter,
    IDENTITY, IdentityConverter, LogConverter, MultiplyConverter,
    PowerOfIntConverter, PowerOfPiConverter)

ReducePredicate = Callable[[AbstractConverter, AbstractConverter], bool]
ReduceOperator = Callable[[AbstractConverter, AbstractConverter],
                          AbstractConverter]


# ======================================================================

class NormalFormOrder:
    """
    Immutable table giving the sort priority of each converter type.
    Lower priorities are placed first (outermost) in a normal form chain.
    Subclasses of a registered type share its priority.
    """

    def __init__(self, priorities: Mapping[type, int]):
        self._priorities = MappingProxyType(dict(priorities))

    @property
    def priorities(self) -> Mapping[type, int]:
        return self._priorities

    def priority(self, conv: AbstractConverter) -> int:
        """
        Raises
        ------
        NormalFormOrderError
            If no priority is registered for the type of `conv` or any of
            its bases.
        """
        for cls in type(conv).__mro__:
            try:
                return self._priorities[cls]
            except KeyError:
                continue
        raise NormalFormOrderError(
            f"No normal-form order defined for '{type(conv).__name__}'.")

    def with_priority(self, cls: type, priority: int) -> NormalFormOrder:
        """Returns a new table with `cls` given `priority`."""
        priorities = dict(self._priorities)
        priorities[cls] = priority
        return NormalFormOrder(priorities)

    def sort_key(self, conv: AbstractConverter) -> tuple:
        # Type name separates different types that share a priority.
        return (0 if conv.is_identity() else 1, self.priority(conv),
                type(conv).__name__, conv.normal_form_key())

    def is_identity_order(self, a: AbstractConverter,
                          b: AbstractConverter) -> bool:
        """For two identity converters, `True` if `a` goes first."""
        if type(a) is type(b):
            return True
        return self.priority(a) <= self.priority(b)

    def is_commutative_order(self, a: AbstractConverter,
                             b: AbstractConverter) -> bool:
        """For two commuting converters, `True` if `a` goes first."""
        return self.sort_key(a)[1:] <= self.sort_key(b)[1:]


DEFAULT_ORDER = NormalFormOrder({
    IdentityConverter: 0,
    PowerOfIntConverter: 1,
    MultiplyConverter: 2,
    PowerOfPiConverter: 3,
    AddConverter: 5,
    LogConverter: 6,
    ExpConverter: 7,
    ConverterPair: 99
})


# ----------------------------------------------------------------------

class BitScanner:
    """
    Marks each element of a sequence with a bit and finds the maximal
    runs of set bits.

    Examples
    --------
    >>> scanner = BitScanner.of([1, 2, -1, 3, 4, 5], lambda x: x > 0)
    >>> list(scanner.bit_sequences())
    [(0, 2), (3, 6)]
    """

    def __init__(self, mask: Sequence[bool] | np.ndarray):
        self._mask = np.asarray(mask, dtype=bool)

    @classmethod
    def of(cls, items: Sequence, bit_test: Callable[..., bool]
           ) -> BitScanner:
        return cls(np.fromiter((bool(bit_test(x)) for x in items),
                               dtype=bool, count=len(items)))

    @property
    def mask(self) -> np.ndarray:
        return self._mask

    def bit_sequences(self) -> Iterator[tuple[int, int]]:
        """
        Yields ``(from_index, to_index)`` for each run of set bits, with
        `to_index` exclusive.
        """
        padded = np.concatenate(([0], self._mask.astype(np.int8), [0]))
        edges = np.flatnonzero(np.diff(padded))
        for start, stop in zip(edges[0::2], edges[1::2]):
            yield int(start), int(stop)

    def visit_bit_sequences(self, visitor: Callable[[int, int], None]):
        for start, stop in self.bit_sequences():
            visitor(start, stop)


# ----------------------------------------------------------------------

class CompositionTask:
    """
    Rewrites a sequence of converters into normal form.  A task holds no
    state between calls apart from ``simplification_count`` which gives
    the number of simplifications made by the most recent call.
    """

    def __init__(self, can_reduce: ReducePredicate,
                 do_reduce: ReduceOperator,
                 order: NormalFormOrder = None):
        """
        Parameters
        ----------
        can_reduce : Callable[[AbstractConverter, AbstractConverter], bool]
            Returns `True` if adjacent converters ``(a, b)`` can be
            replaced by a single converter.
        do_reduce : Callable[[AbstractConverter, AbstractConverter],
                    AbstractConverter]
            Returns the single converter replacing ``(a, b)``.
        order : NormalFormOrder, optional
            Sort order to use.  Defaults to ``DEFAULT_ORDER``.
        """
        self._can_reduce = can_reduce
        self._do_reduce = do_reduce
        self._order = order if order is not None else DEFAULT_ORDER
        self.simplification_count = 0

    def reduce_to_normal_form(self, steps: Iterable[AbstractConverter]
                              ) -> AbstractConverter:
        """Returns the single converter equal to the chain `steps` (given
        outermost first) in normal form."""
        return sequence_to_converter(self.simplify(steps))

    def simplify(self, steps: Iterable[AbstractConverter]
                 ) -> list[AbstractConverter]:
        """Returns the normal form of `steps` as a new list."""
        seq = self._sorted(list(steps))
        self.simplification_count = 0
        while True:
            seq, count = self._simplify_pass(seq)
            if count == 0:
                break
            self.simplification_count += count
            seq = self._sorted(seq)
        return seq

    def _sorted(self, seq: list[AbstractConverter]
                ) -> list[AbstractConverter]:
        # Sort each run of commuting converters.  Python's sort is
        # stable, so equal keys keep their order.
        scanner = BitScanner.of(
            seq, lambda c: c.is_identity() or c.is_linear())
        for start, stop in scanner.bit_sequences():
            seq[start:stop] = sorted(seq[start:stop],
                                     key=self._order.sort_key)
        return seq

    def _simplify_pass(self, seq: list[AbstractConverter]
                       ) -> tuple[list[AbstractConverter], int]:
        # A slot merged into its left neighbour is marked removed and the
        # pair starting at that slot is skipped for this pass.
        seq = list(seq)
        removed = [False] * len(seq)
        count = 0
        for i in range(1, len(seq)):
            if removed[i - 1]:
                continue
            res = self._simplify_pair(seq[i - 1], seq[i])
            if res is not None:
                seq[i - 1] = res
                removed[i] = True
                count += 1

        return [c for c, gone in zip(seq, removed) if not gone], count

    def _simplify_pair(self, a: AbstractConverter, b: AbstractConverter
                       ) -> AbstractConverter | None:
        if a.is_identity():
            return b
        if b.is_identity():
            return a
        if self._can_reduce(a, b):
            return self._do_reduce(a, b)
        return None


def sequence_to_converter(seq: Sequence[AbstractConverter]
                          ) -> AbstractConverter:
    """
    Folds `seq` into a single converter: an empty sequence gives
    ``IDENTITY``, a single converter is returned as-is and longer
    sequences become left-nested ``ConverterPair`` objects.
    """
    if not seq:
        return IDENTITY
    res = seq[0]
    for conv in seq[1:]:
        res = ConverterPair(res, conv)
    return res


# ----------------------------------------------------------------------

class NormalFormCompositionHandler:
    """Composes two converters giving a result in normal form."""

    def __init__(self, order: NormalFormOrder = None):
        self._order = order if order is not None else DEFAULT_ORDER

    @property
    def order(self) -> NormalFormOrder:
        return self._order

    def compose(self, a: AbstractConverter, b: AbstractConverter,
                can_reduce: ReducePredicate,
                do_reduce: ReduceOperator) -> AbstractConverter:
        """
        Returns ``a ∘ b`` (`b` applied first) in normal form.  See
        ``compose()``.
        """
        if a.is_identity():
            if b.is_identity():
                return a if self._order.is_identity_order(a, b) else b
            return b
        if b.is_identity():
            return a

        if can_reduce(a, b):
            return do_reduce(a, b)

        commutative = a.is_linear() and b.is_linear()
        if commutative and not self._order.is_commutative_order(a, b):
            a, b = b, a

        task = CompositionTask(can_reduce, do_reduce, self._order)
        return task.reduce_to_normal_form(a.conversion_steps +
                                          b.conversion_steps)


_DEFAULT_HANDLER = NormalFormCompositionHandler()


def compose(a: AbstractConverter, b: AbstractConverter,
            can_reduce: ReducePredicate, do_reduce: ReduceOperator,
            order: NormalFormOrder = None) -> AbstractConverter:
    """
    Compose converters `a` and `b` into a single converter ``a ∘ b`` (`b`
    applied first) in normal form.

    Parameters
    ----------
    a, b : AbstractConverter
        Converters to compose.
    can_reduce : Callable[[AbstractConverter, AbstractConverter], bool]
        Returns `True` if the adjacent pair ``(x, y)`` can be reduced.
    do_reduce : Callable[[AbstractConverter, AbstractConverter],
                AbstractConverter]
        Returns the reduction of the pair ``(x, y)``.
    order : NormalFormOrder, optional
        If given, use this instead of the default normal form order.

    Returns
    -------
    AbstractConverter
        The composed converter.

    Raises
    ------
    NormalFormOrderError
        If a converter type involved has no normal form priority.

    Examples
    --------
    >>> from pyexact.function.converters import (
    ...     AddConverter, MultiplyConverter)
    >>> reducible = lambda x, y: x.can_reduce_with(y)
    >>> reduction = lambda x, y: x.reduce(y)
    >>> compose(MultiplyConverter(3), MultiplyConverter(4), reducible,
    ...         reduction)
    MultiplyConverter(12)
    >>> compose(AddConverter(1), MultiplyConverter(2), reducible,
    ...         reduction)
    ConverterPair(AddConverter(1), MultiplyConverter(2))
    """
    if order is None:
        handler = _DEFAULT_HANDLER
    else:
        handler = NormalFormCompositionHandler(order)
    return handler.compose(a, b, can_reduce, do_reduce)
