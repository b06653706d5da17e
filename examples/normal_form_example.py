#!/usr/bin/env python3

# Examples of exact arithmetic and converter normal forms.

from pyexact import calc_options
from pyexact.function import (AddConverter, MultiplyConverter,
                              PowerOfIntConverter)
from pyexact.numeric import Calculator, RationalNumber


# ----------------------------------------------------------------------------

def main():
    # Exact arithmetic.
    third = Calculator.of(1).divide(3).peek()
    print(f"1/3 = {third!r}, decimal value {third.decimal_value()}")
    print(f"1/3 * 6 = {Calculator.of(third).multiply(6).peek()!r}")
    print(f"2^62 + 2^62 = {Calculator.of(2**62).add(2**62).peek()}")
    with calc_options(decimal_precision=10):
        print(f"1/7 to 10 digits = "
              f"{RationalNumber.of(1, 7).decimal_value()}")

    # Normal forms: chains built in a different order compare equal.
    kilo = PowerOfIntConverter.of(10, 3)
    inch_to_m = MultiplyConverter.of_ratio(254, 10000)
    a = kilo.inverse().concatenate(inch_to_m)
    b = inch_to_m.concatenate(kilo.inverse())
    print(f"in -> km: {a!r}")
    print(f"Same either way round: {a == b}")
    print(f"12 in = {Calculator.of(a.convert(12)).peek()} km")

    # Celsius to Fahrenheit: offsets keep their position.
    c_to_f = AddConverter(32).concatenate(MultiplyConverter.of_ratio(9, 5))
    print(f"°C -> °F: {c_to_f!r}")
    print(f"100 °C = {c_to_f.convert(100)} °F")
    print(f"Round trip: {c_to_f.inverse().concatenate(c_to_f)!r}")


# -----------------------------------------------------------------------------

if __name__ == "__main__":
    main()
