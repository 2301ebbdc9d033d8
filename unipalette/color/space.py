"""
The bounds of the color spaces that colors are clipped or compared in.

The ``conversion`` module implements the actual conversions between these
spaces.
"""
import dataclasses
from typing import cast

from .equality import normalize
from .spec import CoordinateSpec


@dataclasses.dataclass(frozen=True, slots=True)
class Bound:
    """
    The range of one coordinate. Either limit may be missing. An angle wraps
    around instead and hence is never clipped.
    """
    min: None | float = None
    max: None | float = None
    angular: bool = False

    def clip(self, value: float) -> float:
        if self.angular:
            return value
        if self.min is not None and value < self.min:
            return self.min
        if self.max is not None and value > self.max:
            return self.max
        return value


@dataclasses.dataclass(frozen=True, slots=True)
class Space:
    """A color space, identified by its conversion tag."""
    tag: str
    bounds: tuple[Bound, Bound, Bound]

    @property
    def angular_index(self) -> int:
        """The index of the hue for polar spaces, -1 otherwise."""
        for index, bound in enumerate(self.bounds):
            if bound.angular:
                return index
        return -1

    def clip(self, *coordinates: float) -> CoordinateSpec:
        """Clip the coordinates to this color space's gamut."""
        return cast(
            CoordinateSpec,
            tuple(b.clip(v) for b, v in zip(self.bounds, coordinates)),
        )

    def normalize(self, *coordinates: float) -> tuple[None | float, ...]:
        """
        Normalize coordinates for comparison and hashing. See
        :func:`.normalize`.
        """
        return normalize(coordinates, angular_index=self.angular_index)


_UNIT = Bound(0, 1)

LINEAR_SRGB = Space('linear_srgb', (_UNIT, _UNIT, _UNIT))

SRGB = Space('srgb', (_UNIT, _UNIT, _UNIT))

LCH = Space(
    'lch',
    # Chroma has no upper bound in the model, only on display
    (Bound(0, 100), Bound(0), Bound(0, 360, angular=True)),
)
