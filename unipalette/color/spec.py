"""
Basic type declarations for coordinates and conversions:

  * ``IntCoordinateSpec`` and ``FloatCoordinateSpec`` are triples of integers
    and floating point values, respectively
  * ``CoordinateSpec`` combines the two types
  * ``ConverterSpec`` describes a function that converts from one color format
    or space into another

All container types are immutable.
"""
from typing import overload, Protocol, TypeAlias

IntCoordinateSpec: TypeAlias = tuple[int, int, int]
FloatCoordinateSpec: TypeAlias = tuple[float, float, float]
CoordinateSpec: TypeAlias = tuple[int, int, int] | tuple[float, float, float]


class ConverterSpec(Protocol):
    @overload
    def __call__(
        self, __c1: int, __c2: int, __c3: int
    ) -> CoordinateSpec: ...
    @overload
    def __call__(
        self, __c1: float, __c2: float, __c3: float
    ) -> CoordinateSpec: ...

    def __call__(
        self,
        __c1: int | float,
        __c2: int | float,
        __c3: int | float,
    ) -> CoordinateSpec:
        ...
