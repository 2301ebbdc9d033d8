"""
The abstract syntax of color expressions and palette items.

A :data:`ColorSpec` is the parsed but unresolved form of a color expression.
It is a closed union of immutable node classes, each of which owns its
subexpressions. Names are plain strings, independent of the source text.
"""
import dataclasses
from typing import TypeAlias


@dataclasses.dataclass(frozen=True, slots=True)
class Id:
    """A reference to a palette color or a function parameter."""
    name: str


@dataclasses.dataclass(frozen=True, slots=True)
class Named:
    """A reference to a CSS named color, written ``$name``."""
    name: str


@dataclasses.dataclass(frozen=True, slots=True)
class Lch:
    """A literal color, written ``L<l>C<c>H<h>``, which is fully opaque."""
    l: float
    c: float
    h: float


@dataclasses.dataclass(frozen=True, slots=True)
class Shade:
    """Lighten (or, if negative, darken) by a percentage, written ``li``."""
    inner: 'ColorSpec'
    percent: float


@dataclasses.dataclass(frozen=True, slots=True)
class Saturate:
    """Saturate (or desaturate) by a percentage, written ``st``."""
    inner: 'ColorSpec'
    percent: float


@dataclasses.dataclass(frozen=True, slots=True)
class WithChroma:
    """Set the chroma, written ``ch``."""
    inner: 'ColorSpec'
    value: float


@dataclasses.dataclass(frozen=True, slots=True)
class WithLightness:
    """Set the lightness, written ``li=``."""
    inner: 'ColorSpec'
    value: float


@dataclasses.dataclass(frozen=True, slots=True)
class WithAlpha:
    """Set the alpha as a percentage, written ``a``."""
    inner: 'ColorSpec'
    percent: float


@dataclasses.dataclass(frozen=True, slots=True)
class Mix:
    """Interpolate between two colors, written ``a *<percent>* b``."""
    a: 'ColorSpec'
    b: 'ColorSpec'
    percent: float


@dataclasses.dataclass(frozen=True, slots=True)
class Complement:
    """Rotate the hue by 180°, written ``~``."""
    inner: 'ColorSpec'


@dataclasses.dataclass(frozen=True, slots=True)
class FnCall:
    """Invoke a user-defined function with positional arguments."""
    name: str
    args: tuple['ColorSpec', ...]


ColorSpec: TypeAlias = (
    Id | Named | Lch | Shade | Saturate | WithChroma | WithLightness | WithAlpha
    | Mix | Complement | FnCall
)


# --------------------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True, slots=True)
class ColorFn:
    """
    A user-defined function.

    Attributes:
        name: is the function's name
        params: are the distinct names of the formal parameters
        body: is the unresolved expression, which may reference the parameters
            as well as any palette color defined by the time of a call
    """
    name: str
    params: tuple[str, ...]
    body: ColorSpec


@dataclasses.dataclass(frozen=True, slots=True)
class ColorItem:
    """A palette line binding a name to a color expression."""
    name: str
    spec: ColorSpec


@dataclasses.dataclass(frozen=True, slots=True)
class FnItem:
    """A palette line defining a function."""
    fn: ColorFn


PaletteItem: TypeAlias = ColorItem | FnItem
