"""
Equality of colors.

Comparing colors for equality runs into three problems:

 1. Hues outside the range of 0 to 360 still denote the same angle, just with
    additional rotations. Complementing a color twice yields such a hue.
 2. Conversion between color spaces and interpolation accrue some amount of
    floating point error.
 3. Python requires that, if a class redefines ``__eq__()`` it must also
    redefine ``__hash__()``, so that two equal instances also have the same
    hash codes.

Testing whether two coordinates are within some epsilon of each other would
address the second problem but makes hashing impossible. Instead, this module
normalizes coordinates to a canonical representation that serves for both hash
computation and equality comparison.
"""
import math


PRECISION = 14
"""
The default precision for rounding coordinates during normalization.
"""


def normalize(
    coordinates: tuple[float, ...],
    *,
    angular_index: int = -1,
    precision: int = PRECISION,
) -> tuple[None | float, ...]:
    """
    Normalize the coordinates.

    Args:
        coordinates: are the color's components, possibly including alpha.
        angular_index: is the index of the angular coordinate, if there is one.
        precision: is the number of decimals to round to.
    Returns:
        The normalized coordinates.

    This function replaces not-a-numbers with ``None``, maps angles to 0–360
    and rounds them to two decimal digits less than precision, and rounds all
    other coordinates to as many decimal digits as precision. Negative zero becomes positive zero.
    """
    result: list[None | float] = []

    for index, value in enumerate(coordinates):
        if math.isnan(value):
            result.append(None)
            continue

        if index == angular_index:
            value = round(value % 360, precision - 2)
            # Rounding may produce a full turn again
            result.append(0.0 if value == 360 else value + 0.0)
        else:
            result.append(round(value, precision) + 0.0)

    return tuple(result)
