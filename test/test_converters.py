from decimal import Decimal
from unittest import TestCase


class TestSimpleConverters(TestCase):
    def test_identity(self):
        from pyexact.function import IDENTITY, MultiplyConverter

        self.assertEqual(IDENTITY.convert(5), 5)
        self.assertIs(IDENTITY.inverse(), IDENTITY)
        self.assertTrue(IDENTITY.is_linear())
        self.assertEqual(repr(IDENTITY), 'IDENTITY')
        self.assertIs(IDENTITY.concatenate(MultiplyConverter(2)).__class__,
                      MultiplyConverter)

    def test_multiply(self):
        from pyexact.function import IDENTITY, MultiplyConverter
        from pyexact.numeric import RationalNumber

        self.assertIs(MultiplyConverter.of(1), IDENTITY)
        self.assertIs(MultiplyConverter.of(Decimal('1.00')), IDENTITY)

        conv = MultiplyConverter(4)
        self.assertEqual(conv.convert(3), 12)
        self.assertEqual(conv(3), 12)
        self.assertEqual(conv.inverse().convert(8), 2)
        self.assertEqual(conv.inverse(), MultiplyConverter.of_ratio(1, 4))
        self.assertEqual(MultiplyConverter.of_ratio(1, 4).factor,
                         RationalNumber.of(1, 4))

        # Floats are held as their decimal value.
        self.assertEqual(MultiplyConverter(0.5).factor, Decimal('0.5'))
        self.assertEqual(MultiplyConverter(0.5),
                         MultiplyConverter(RationalNumber.of(1, 2)))
        self.assertEqual(hash(MultiplyConverter(0.5)),
                         hash(MultiplyConverter(RationalNumber.of(1, 2))))
        self.assertNotEqual(MultiplyConverter(2), MultiplyConverter(3))

    def test_power_of_int(self):
        from pyexact.function import IDENTITY, PowerOfIntConverter

        kilo = PowerOfIntConverter(10, 3)
        self.assertEqual(kilo.factor, 1000)
        self.assertEqual(kilo.convert(2), 2000)
        self.assertEqual(kilo.inverse().convert(5000), 5)
        self.assertIs(PowerOfIntConverter.of(10, 0), IDENTITY)
        self.assertIs(PowerOfIntConverter.of(1, 7), IDENTITY)
        self.assertIs(kilo.concatenate(kilo.inverse()), IDENTITY)
        self.assertEqual(kilo.concatenate(PowerOfIntConverter(10, 2)),
                         PowerOfIntConverter(10, 5))
        with self.assertRaises(ValueError):
            PowerOfIntConverter(0, 1)

    def test_power_of_pi(self):
        from pyexact.function import IDENTITY, PowerOfPiConverter

        conv = PowerOfPiConverter(1)
        self.assertAlmostEqual(float(conv.convert(1)), 3.141592653589793)
        self.assertAlmostEqual(float(conv.concatenate(conv).convert(1)),
                               9.869604401089358)
        self.assertIs(conv.concatenate(conv.inverse()), IDENTITY)

    def test_add(self):
        from pyexact.function import AddConverter, IDENTITY

        conv = AddConverter(1)
        self.assertFalse(conv.is_linear())
        self.assertEqual(conv.convert(2), 3)
        self.assertIs(AddConverter.of(0), IDENTITY)
        self.assertEqual(conv.concatenate(AddConverter(2)), AddConverter(3))
        self.assertEqual(AddConverter(0.5).inverse(), AddConverter(-0.5))
        self.assertIs(conv.concatenate(conv.inverse()), IDENTITY)

    def test_log_exp(self):
        from pyexact.function import ExpConverter, IDENTITY, LogConverter

        log10 = LogConverter(10)
        self.assertAlmostEqual(float(log10.convert(1000)), 3.0, places=12)
        self.assertAlmostEqual(float(ExpConverter(2).convert(3)), 8.0,
                               places=12)
        self.assertEqual(log10.inverse(), ExpConverter(10))
        self.assertIs(log10.concatenate(ExpConverter(10)), IDENTITY)
        self.assertIs(ExpConverter(10).concatenate(log10), IDENTITY)
        self.assertIsNot(log10.concatenate(ExpConverter(2)), IDENTITY)

        for base in (1, 0, -2):
            with self.assertRaises(ValueError):
                LogConverter(base)
            with self.assertRaises(ValueError):
                ExpConverter(base)


class TestConverterPair(TestCase):
    def test_pair(self):
        from pyexact.function import (AddConverter, ConverterPair,
                                      MultiplyConverter)

        pair = ConverterPair(AddConverter(1), MultiplyConverter(2))
        self.assertEqual(pair.convert(3), 7)  # Right applied first.
        self.assertFalse(pair.is_linear())
        self.assertEqual(pair.conversion_steps,
                         [AddConverter(1), MultiplyConverter(2)])

        inv = pair.inverse()
        self.assertEqual(inv.convert(7), 3)
        self.assertEqual(inv.left, MultiplyConverter.of_ratio(1, 2))
        self.assertEqual(inv.right, AddConverter(-1))

    def test_invalid(self):
        from pyexact import NullOperandError
        from pyexact.function import (ConverterPair, IDENTITY,
                                      MultiplyConverter)

        with self.assertRaises(ValueError):
            ConverterPair(IDENTITY, IDENTITY)
        with self.assertRaises(NullOperandError):
            ConverterPair(None, MultiplyConverter(2))

    def test_concatenate(self):
        from pyexact.function import (AddConverter, ConverterPair,
                                      MultiplyConverter, PowerOfIntConverter)

        kilo = PowerOfIntConverter.of(10, 3)
        double = MultiplyConverter.of(2)
        self.assertEqual(kilo.concatenate(double), double.concatenate(kilo))
        self.assertEqual(double.concatenate(double), MultiplyConverter(4))

        # Offsets don't commute with scaling.
        a = AddConverter(1).concatenate(double)
        b = double.concatenate(AddConverter(1))
        self.assertIsInstance(a, ConverterPair)
        self.assertNotEqual(a, b)
        self.assertEqual(a.convert(5), 11)
        self.assertEqual(b.convert(5), 12)

        # Chains that cancel return to the plain converter.
        chain = double.concatenate(kilo).concatenate(
            MultiplyConverter.of_ratio(1, 2))
        self.assertEqual(chain, kilo)
