from decimal import Decimal
from unittest import TestCase


def _hms():
    from pyexact.function import MixedRadix
    return MixedRadix.of('h').mix('min', 60).mix('s', 60)


class TestMixedRadix(TestCase):
    def test_build(self):
        from pyexact.function import MixedRadix

        hms = _hms()
        self.assertEqual(hms.labels, ('h', 'min', 's'))
        self.assertEqual(hms.primary_label, 'h')
        self.assertEqual(len(hms), 3)
        self.assertEqual([r.factor for r in hms.radices], [60, 60])

        # Building is non-destructive.
        hm = MixedRadix.of('h').mix('min', 60)
        hm.mix('s', 60)
        self.assertEqual(len(hm), 2)

    def test_build_invalid(self):
        from pyexact import InvalidRadixError
        from pyexact.function import AddConverter, MixedRadix

        with self.assertRaises(ValueError):
            MixedRadix.of('h').mix('h', 60)
        for factor in (1, Decimal('0.5'), 0, -60):
            with self.assertRaises(InvalidRadixError):
                MixedRadix.of('h').mix('min', factor)
        with self.assertRaises(InvalidRadixError):
            MixedRadix.of('h').mix('min', AddConverter(60))
        with self.assertRaises(ValueError):
            MixedRadix([], [])

    def test_decompose(self):
        hms = _hms()
        self.assertEqual(hms.decompose(3725), [1, 2, 5])
        self.assertEqual(hms.decompose(Decimal('3725.5')),
                         [1, 2, Decimal('5.5')])
        self.assertEqual(hms.decompose(3725, max_parts=2), [1, 2])
        self.assertEqual(hms.decompose_labelled(3725),
                         {'h': 1, 'min': 2, 's': 5})

    def test_compose(self):
        from pyexact.numeric import RationalNumber

        hms = _hms()
        self.assertEqual(hms.compose([1, 2, 5]), 3725)
        self.assertEqual(hms.compose([1]), 3600)
        self.assertEqual(hms.compose([1, 2, Decimal('5.5')]),
                         Decimal('3725.5'))
        self.assertEqual(hms.compose_primary([1, 30]),
                         RationalNumber.of(3, 2))
        with self.assertRaises(ValueError):
            hms.compose([1, 2, 3, 4])
        with self.assertRaises(ValueError):
            hms.compose([])

    def test_primary(self):
        from pyexact.numeric import RationalNumber

        hms = _hms()
        self.assertEqual(hms.decompose_primary(RationalNumber.of(3, 2)),
                         [1, 30, 0])
        self.assertEqual(hms.decompose_primary(Decimal('2.25')), [2, 15, 0])

    def test_converter_radix(self):
        from pyexact.function import (MixedRadix, MultiplyConverter,
                                      PowerOfIntConverter, Radix)

        length = (MixedRadix.of('km')
                  .mix('m', PowerOfIntConverter(10, 3))
                  .mix('cm', Radix.of_number_factor(100))
                  .mix('mm', MultiplyConverter(10)))
        self.assertEqual(length.decompose(2503071), [2, 503, 7, 1])
        self.assertEqual(length.compose([2, 503, 7, 1]), 2503071)

    def test_single_label(self):
        from pyexact.function import MixedRadix

        m = MixedRadix.of('m')
        self.assertEqual(m.decompose(Decimal('5.5')), [Decimal('5.5')])
        self.assertEqual(m.compose([5]), 5)
        self.assertEqual(m.compose_primary([5]), 5)
