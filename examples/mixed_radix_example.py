#!/usr/bin/env python3

# Examples of mixed-radix decomposition and composition.

from decimal import Decimal

from pyexact.function import MixedRadix, PowerOfIntConverter


# ----------------------------------------------------------------------------

def main():
    hms = MixedRadix.of('h').mix('min', 60).mix('s', 60)
    flight_time = Decimal('12345.67')  # Seconds.
    print(f"Flight time {flight_time} s = "
          f"{hms.decompose_labelled(flight_time)}")
    print(f"2 h 30 min = {hms.compose([2, 30])} s = "
          f"{hms.compose_primary([2, 30])} h")

    # Degrees, minutes, seconds of arc.
    dms = MixedRadix.of('deg').mix("'", 60).mix('"', 60)
    latitude = Decimal('-33.8688')
    parts = dms.decompose_primary(latitude)
    print(f"Latitude {latitude}° = {parts[0]}° {parts[1]}' {parts[2]}\"")

    # Radices can also come from linear converters.
    length = (MixedRadix.of('km').mix('m', PowerOfIntConverter(10, 3))
              .mix('mm', PowerOfIntConverter(10, 3)))
    print(f"1234567 mm = {length.decompose_labelled(1234567)}")
    print(f"{length!r}")


# -----------------------------------------------------------------------------

if __name__ == "__main__":
    main()
