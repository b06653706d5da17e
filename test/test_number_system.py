import itertools
import warnings
from decimal import Decimal
from fractions import Fraction
from unittest import TestCase

import numpy as np

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)

# Integer operands around the machine integer limit.
INT_OPERANDS = [0, 1, -1, 7, -13, 2 ** 31, 2 ** 62 - 1, 2 ** 62, -2 ** 62,
                INT64_MAX, INT64_MIN, 2 ** 80, -3 ** 50]


def _both_forms(x: int):
    # Python int, plus the numpy form where it fits.
    if INT64_MIN <= x <= INT64_MAX:
        return [x, np.int64(x)]
    return [x]


class TestKinds(TestCase):
    def test_kind_of(self):
        from pyexact.numeric import NumberKind, RationalNumber, kind_of

        self.assertIs(kind_of(np.int64(3)), NumberKind.INTEGER)
        self.assertIs(kind_of(np.int32(3)), NumberKind.INTEGER)
        self.assertIs(kind_of(3), NumberKind.BIG_INTEGER)
        self.assertIs(kind_of(RationalNumber.of(1, 2)), NumberKind.RATIONAL)
        self.assertIs(kind_of(0.5), NumberKind.FLOAT)
        self.assertIs(kind_of(np.float32(0.5)), NumberKind.FLOAT)
        self.assertIs(kind_of(Decimal('0.5')), NumberKind.DECIMAL)

        self.assertTrue(NumberKind.BIG_INTEGER.is_integer_only)
        self.assertTrue(NumberKind.RATIONAL.is_exact)
        self.assertFalse(NumberKind.FLOAT.is_exact)

    def test_unsupported(self):
        from pyexact import NullOperandError, UnsupportedNumberError
        from pyexact.numeric import is_supported, kind_of

        with self.assertRaises(NullOperandError):
            kind_of(None)
        for x in (True, Fraction(1, 2), 1 + 2j, '1'):
            with self.assertRaises(UnsupportedNumberError):
                kind_of(x)
            with self.assertRaises(TypeError):
                kind_of(x)
            self.assertFalse(is_supported(x))
        self.assertTrue(is_supported(Decimal(1)))


class TestIntegerArithmetic(TestCase):
    def test_no_overflow(self):
        # Every result must match unbounded integer arithmetic.
        from pyexact.numeric import DefaultNumberSystem

        ns = DefaultNumberSystem()
        for a, b in itertools.product(INT_OPERANDS, repeat=2):
            for x, y in itertools.product(_both_forms(a), _both_forms(b)):
                self.assertEqual(int(ns.add(x, y)), a + b)
                self.assertEqual(int(ns.subtract(x, y)), a - b)
                self.assertEqual(int(ns.multiply(x, y)), a * b)

        self.assertEqual(int(ns.negate(np.int64(INT64_MIN))), 2 ** 63)
        self.assertEqual(int(ns.abs(np.int64(INT64_MIN))), 2 ** 63)

    def test_machine_int_results(self):
        from pyexact.numeric import DefaultNumberSystem

        ns = DefaultNumberSystem()
        res = ns.add(np.int64(2), np.int64(3))
        self.assertIsInstance(res, np.int64)
        self.assertEqual(res, 5)

        res = ns.multiply(2, -3)
        self.assertIsInstance(res, np.int64)
        self.assertEqual(res, -6)

        res = ns.multiply(np.int64(2 ** 40), np.int64(2 ** 40))
        self.assertIsInstance(res, int)
        self.assertEqual(res, 2 ** 80)

        res = ns.add(np.int64(INT64_MAX), np.int64(1))
        self.assertIsInstance(res, int)
        self.assertEqual(res, 2 ** 63)

    def test_divide(self):
        from pyexact.numeric import DefaultNumberSystem, RationalNumber

        ns = DefaultNumberSystem()
        self.assertEqual(ns.divide(1, 3), RationalNumber.of(1, 3))
        self.assertEqual(ns.narrow(ns.divide(6, 3)), 2)
        self.assertEqual(ns.divide(Decimal(1), 4), Decimal('0.25'))
        self.assertEqual(ns.divide(2 ** 80, 2 ** 79), 2)
        with self.assertRaises(ZeroDivisionError):
            ns.divide(1, 0)

    def test_divide_and_remainder(self):
        from pyexact.numeric import DefaultNumberSystem

        ns = DefaultNumberSystem()
        self.assertEqual(ns.divide_and_remainder(17, 5, True), (3, 2))
        self.assertEqual(ns.divide_and_remainder(-17, 5, True), (-3, -2))
        self.assertEqual(ns.divide_and_remainder(17, -5, True), (-3, 2))
        self.assertEqual(ns.divide_and_remainder(np.int64(0), 5, True),
                         (0, 0))

        q, r = ns.divide_and_remainder(Decimal('8300.234'), np.int64(15),
                                       False)
        self.assertEqual(q, 553)
        self.assertEqual(r, Decimal('5.234'))

        q, r = ns.divide_and_remainder(Decimal('8300.234'), 15, True)
        self.assertEqual(q, 553)
        self.assertEqual(r, 5)

        q, r = ns.divide_and_remainder(Decimal('-8300.234'), 15, False)
        self.assertEqual(q, -553)
        self.assertEqual(r, Decimal('-5.234'))

        with self.assertRaises(ZeroDivisionError):
            ns.divide_and_remainder(1, 0, True)

    def test_power(self):
        from pyexact.numeric import DefaultNumberSystem, RationalNumber

        ns = DefaultNumberSystem()
        self.assertEqual(ns.power(2, 100), 2 ** 100)
        self.assertEqual(ns.power(np.int64(2), -2), RationalNumber.of(1, 4))
        self.assertEqual(ns.power(RationalNumber.of(2, 3), 2),
                         RationalNumber.of(4, 9))
        self.assertEqual(ns.power(Decimal('1.5'), 2), Decimal('2.25'))
        self.assertEqual(ns.power(7, 0), 1)
        with self.assertRaises(ValueError):
            ns.power(0, 0)


class TestMixedArithmetic(TestCase):
    def test_float_decimal(self):
        from pyexact.numeric import DefaultNumberSystem, NumberKind, \
            RationalNumber, kind_of

        ns = DefaultNumberSystem()
        # Floats are taken at their shortest representation.
        self.assertEqual(ns.add(0.1, 0.2), Decimal('0.3'))
        self.assertEqual(ns.multiply(Decimal('2.5'), 4), Decimal('10.0'))
        self.assertIs(kind_of(ns.add(RationalNumber.of(1, 3), 0.5)),
                      NumberKind.DECIMAL)
        self.assertEqual(ns.add(RationalNumber.of(1, 3), 2),
                         RationalNumber.of(7, 3))

    def test_negative_rational_decimal_precision(self):
        from pyexact import get_calc_options
        from pyexact.numeric import DefaultNumberSystem, RationalNumber

        # Negative rationals keep the full decimal precision when
        # promoted, the same as positive ones.
        ns = DefaultNumberSystem()
        prec = get_calc_options().decimal_precision
        pos = ns.add(RationalNumber.of(1, 3), Decimal('0.5'))
        neg = ns.add(RationalNumber.of(-1, 3), Decimal('0.5'))
        self.assertEqual(pos, Decimal('0.8' + '3' * 33))
        self.assertEqual(neg, Decimal('0.1' + '6' * 32 + '7'))
        self.assertEqual(len(pos.as_tuple().digits), prec)
        self.assertEqual(len(neg.as_tuple().digits), prec)

    def test_zero_shortcuts(self):
        from pyexact.numeric import DefaultNumberSystem

        ns = DefaultNumberSystem()
        self.assertEqual(ns.add(0, Decimal('2.5')), Decimal('2.5'))
        self.assertEqual(ns.multiply(Decimal('2.5'), 0), 0)
        self.assertIsInstance(ns.multiply(0.5, 0), np.int64)

    def test_involutions(self):
        from pyexact.numeric import DefaultNumberSystem, RationalNumber

        ns = DefaultNumberSystem()
        values = [np.int64(7), np.int64(-7), 2 ** 80,
                  RationalNumber.of(3, 4), RationalNumber.of(-5, 2),
                  Decimal('2.5'), Decimal('-0.125'), 0.5, -4.0]
        for x in values:
            self.assertTrue(ns.is_equal(ns.negate(ns.negate(x)), x))
            self.assertTrue(ns.is_equal(ns.reciprocal(ns.reciprocal(x)), x))
            self.assertEqual(ns.signum(ns.negate(x)), -ns.signum(x))

    def test_decimal_reciprocal_round_trip(self):
        from pyexact import get_calc_options
        from pyexact.numeric import DefaultNumberSystem

        # Decimal reciprocals round, so the round trip only holds to
        # within the context precision.
        ns = DefaultNumberSystem()
        prec = get_calc_options().decimal_precision
        rel_tol = Decimal(10) ** -(prec - 2)
        for x in (Decimal('7'), Decimal('9.1'), Decimal('-3'), 0.3):
            back = ns.reciprocal(ns.reciprocal(x))
            err = ns.abs(ns.subtract(back, x))
            self.assertLessEqual(ns.compare(
                err, ns.multiply(ns.abs(x), rel_tol)), 0)

        self.assertFalse(ns.is_equal(
            ns.reciprocal(ns.reciprocal(Decimal('7'))), Decimal('7')))

    def test_exp_log(self):
        from pyexact.numeric import DefaultNumberSystem

        ns = DefaultNumberSystem()
        self.assertEqual(ns.exp(0), 1)
        self.assertEqual(ns.log(1), 0)
        self.assertAlmostEqual(float(ns.log(ns.exp(2))), 2.0, places=12)


class TestNarrowCompare(TestCase):
    def test_narrow(self):
        from pyexact.numeric import DefaultNumberSystem, RationalNumber

        ns = DefaultNumberSystem()
        x = ns.narrow(2 ** 62 - 1)
        self.assertIsInstance(x, np.int64)
        self.assertIsInstance(ns.narrow(2 ** 62), int)
        self.assertIsInstance(ns.narrow(np.int32(5)), np.int64)

        for value in (Decimal('3.000'), 3.0, RationalNumber.of(6, 2)):
            x = ns.narrow(value)
            self.assertIsInstance(x, np.int64)
            self.assertEqual(x, 3)

        self.assertEqual(ns.narrow(Decimal('2.5')), Decimal('2.5'))
        self.assertEqual(ns.narrow(RationalNumber.of(1, 2)),
                         RationalNumber.of(1, 2))
        self.assertEqual(ns.narrow(0.25), 0.25)
        self.assertIsInstance(ns.narrow(Decimal('1E+30')), int)

        for value in (float('nan'), float('inf'), Decimal('Infinity')):
            with self.assertRaises(ValueError):
                ns.narrow(value)

    def test_compare(self):
        from pyexact.numeric import DefaultNumberSystem, RationalNumber

        ns = DefaultNumberSystem()
        self.assertEqual(ns.compare(0.1, RationalNumber.of(1, 10)), 0)
        self.assertEqual(ns.compare(Decimal('0.3'), 0.3), 0)
        self.assertEqual(ns.compare(2 ** 80, np.int64(1)), 1)
        self.assertEqual(ns.compare(RationalNumber.of(-1, 3), 0), -1)
        self.assertTrue(ns.is_equal(Decimal('2.50'), RationalNumber.of(5, 2)))
        self.assertTrue(ns.is_one(Decimal('1.0')))
        self.assertTrue(ns.is_less_than_one(RationalNumber.of(99, 100)))
        self.assertTrue(ns.is_zero(0.0))
        self.assertTrue(ns.is_integer(Decimal('4.00')))
        self.assertFalse(ns.is_integer(0.5))

    def test_precision_warning(self):
        from pyexact import PrecisionLossWarning, calc_options
        from pyexact.numeric import DefaultNumberSystem, RationalNumber

        ns = DefaultNumberSystem()
        with calc_options(warn_precision_loss=True):
            with self.assertWarns(PrecisionLossWarning):
                ns.add(0.1, 1)
            with self.assertWarns(PrecisionLossWarning):
                ns.add(RationalNumber.of(1, 3), Decimal('1.5'))

        # Off by default.
        with warnings.catch_warnings():
            warnings.simplefilter('error', PrecisionLossWarning)
            ns.add(0.1, 1)
