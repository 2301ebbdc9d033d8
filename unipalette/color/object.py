"""unipalette's color value."""
import dataclasses
from typing import cast, Self

from .conversion import get_converter
from .equality import normalize
from .serde import parse_format_spec, parse_hex, stringify
from .space import LCH, LINEAR_SRGB, SRGB
from .spec import CoordinateSpec, FloatCoordinateSpec


MAX_CHROMA = 128.0
"""
The practical upper bound for chroma when saturating colors. Chroma itself is
unbounded, but this value covers sRGB and then some.
"""


@dataclasses.dataclass(frozen=True, slots=True, eq=False)
class Color:
    """
    A color in CIE LCh with D65 white point and an alpha channel.

    Attributes:
        l: is the lightness between 0 and 100
        c: is the chroma, which is at least 0 but otherwise unbounded
        h: is the hue in degrees, stored as computed
        alpha: is the opacity between 0 and 1

    All transformations return new colors, since instances of this class are
    immutable. Lightness and chroma are only clamped by the relative
    transformations :meth:`lighten` and :meth:`saturate`; the absolute
    overrides store their arguments verbatim. The hue is stored as computed,
    e.g., 390 after complementing 210, and normalized by :attr:`hue`.

    This class implements ``__hash__()`` and ``__eq__()`` so that colors with
    sufficiently close coordinates are treated as equal. "Sufficiently close"
    means equality after rounding to 14 significant digits, with hues taken
    modulo 360 and rounded to 12 digits.
    """
    l: float
    c: float
    h: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        # Coerce to float, so that integer literals behave the same
        for name in ('l', 'c', 'h', 'alpha'):
            value = getattr(self, name)
            if not isinstance(value, float):
                object.__setattr__(self, name, float(value))

    @classmethod
    def from_rgb256(cls, r: int, g: int, b: int, alpha: float = 1.0) -> Self:
        """Create a new color from 24-bit sRGB."""
        l, c, h = get_converter('rgb256', 'lch')(r, g, b)
        return cls(l, c, h, alpha)

    @classmethod
    def from_hex(cls, color: str) -> Self:
        """Create a new color from its hashed hexadecimal notation."""
        return cls.from_rgb256(*parse_hex(color))

    # ----------------------------------------------------------------------------------

    @property
    def hue(self) -> float:
        """The hue normalized to 0 up to but excluding 360 degrees."""
        hue = self.h % 360
        return 0.0 if hue == 360 else hue

    @property
    def coordinates(self) -> FloatCoordinateSpec:
        """The LCh coordinates without alpha."""
        return self.l, self.c, self.h

    # ----------------------------------------------------------------------------------
    # Relative Transformations

    def lighten(self, factor: float) -> Self:
        """
        Lighten this color by the factor relative to the remaining headroom.
        A positive factor moves lightness towards 100 by that fraction of the
        difference, a negative factor moves it towards 0 by that fraction of
        the current lightness.
        """
        difference = 100 - self.l if factor >= 0 else self.l
        l = self.l + max(difference, 0) * factor
        return dataclasses.replace(self, l=min(max(l, 0.0), 100.0))

    def lighten_fixed(self, amount: float) -> Self:
        """Lighten this color by the amount scaled to the full lightness range."""
        l = self.l + 100 * amount
        return dataclasses.replace(self, l=min(max(l, 0.0), 100.0))

    def saturate(self, factor: float) -> Self:
        """
        Saturate this color by the factor relative to :data:`MAX_CHROMA`. A
        positive factor moves chroma towards that maximum, a negative factor
        towards 0.
        """
        difference = MAX_CHROMA - self.c if factor >= 0 else self.c
        c = self.c + max(difference, 0) * factor
        return dataclasses.replace(self, c=max(c, 0.0))

    def rotate_hue(self, degrees: float) -> Self:
        """Rotate the hue by the given degrees without normalizing it."""
        return dataclasses.replace(self, h=self.h + degrees)

    def complement(self) -> Self:
        """Determine the complementary color with the hue rotated by 180°."""
        return self.rotate_hue(180)

    def mix(self, other: 'Color', factor: float) -> Self:
        """
        Linearly interpolate between this and the other color in LCh. Hues
        interpolate along the shorter arc. The factor is not clamped; values
        outside 0 to 1 extrapolate.
        """
        delta = (other.h - self.h) % 360
        if delta > 180:
            delta -= 360

        return type(self)(
            self.l + factor * (other.l - self.l),
            self.c + factor * (other.c - self.c),
            self.h + factor * delta,
            self.alpha + factor * (other.alpha - self.alpha),
        )

    # ----------------------------------------------------------------------------------
    # Absolute Overrides

    def with_lightness(self, l: float) -> Self:
        """Replace the lightness."""
        return dataclasses.replace(self, l=l)

    def with_chroma(self, c: float) -> Self:
        """Replace the chroma."""
        return dataclasses.replace(self, c=c)

    def with_alpha(self, alpha: float) -> Self:
        """Replace the alpha."""
        return dataclasses.replace(self, alpha=alpha)

    # ----------------------------------------------------------------------------------
    # Conversion to Other Formats and Color Spaces

    def to(self, target: str) -> CoordinateSpec:
        """Convert this color's coordinates to the specified format or space."""
        return get_converter('lch', target)(*self.coordinates)

    def _clipped_alpha(self) -> float:
        return min(max(self.alpha, 0.0), 1.0)

    def to_srgba(self) -> tuple[float, float, float, float]:
        """Convert to gamma-encoded sRGB with alpha, all clipped to 0–1."""
        r, g, b = SRGB.clip(*self.to('srgb'))
        return r, g, b, self._clipped_alpha()

    def to_linear_srgba(self) -> tuple[float, float, float, float]:
        """Convert to linear sRGB with alpha, all clipped to 0–1."""
        r, g, b = LINEAR_SRGB.clip(*self.to('linear_srgb'))
        return r, g, b, self._clipped_alpha()

    @staticmethod
    def _quantize(
        channels: tuple[float, float, float, float]
    ) -> tuple[int, int, int, int]:
        return cast(
            tuple[int, int, int, int],
            tuple(int(c * 255 + 0.5) for c in channels),
        )

    def to_rgba8(self) -> tuple[int, int, int, int]:
        """Convert to 8-bit gamma-encoded sRGB with alpha."""
        return self._quantize(self.to_srgba())

    def to_linear_rgba8(self) -> tuple[int, int, int, int]:
        """Convert to 8-bit linear sRGB with alpha."""
        return self._quantize(self.to_linear_srgba())

    # ----------------------------------------------------------------------------------
    # Hash and Equality

    def _key(self) -> tuple[None | float, ...]:
        return (*LCH.normalize(*self.coordinates), *normalize((self.alpha,)))

    def __hash__(self) -> int:
        return hash(self._key())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self._key() == other._key()

    # ----------------------------------------------------------------------------------
    # Serialization to Text

    def __format__(self, format_spec: str) -> str:
        format, alpha, alpha_first = parse_format_spec(format_spec)
        return stringify(self, format, alpha=alpha, alpha_first=alpha_first)

    def __str__(self) -> str:
        return stringify(self)
