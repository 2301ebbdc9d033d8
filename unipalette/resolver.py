"""
Resolving color expressions to colors.

Identifiers resolve against a local scope first and the palette's colors
second. Function calls resolve their arguments in the caller's scope and then
the body in a fresh scope holding only the parameters. Scoping thus is not
lexical: a function body sees the palette as it stands at the time of the
call, not at the time of definition.
"""
from collections.abc import Mapping
from typing import TYPE_CHECKING

from .color import Color, named_color
from .errors import (
    ArityError,
    CallDepthError,
    UnknownFunction,
    UnknownIdentifier,
    UnknownNamedColor,
)
from .parser import parse_color
from .syntax import (
    ColorSpec,
    Complement,
    FnCall,
    Id,
    Lch,
    Mix,
    Named,
    Saturate,
    Shade,
    WithAlpha,
    WithChroma,
    WithLightness,
)

if TYPE_CHECKING:
    from .palette import Palette


MAX_CALL_DEPTH = 64
"""The maximum nesting of function calls."""


def resolve(
    spec: ColorSpec,
    palette: 'Palette',
    scope: None | Mapping[str, Color] = None,
    depth: int = 0,
) -> Color:
    """
    Resolve the color expression.

    Args:
        spec: is the expression
        palette: provides colors and functions
        scope: binds function parameters
        depth: is the current nesting of function calls
    Returns:
        the resulting color
    Raises:
        ResolveError: if a name is unknown, a call has the wrong number of
            arguments, or calls nest too deeply
    """
    match spec:
        case Id(name):
            if scope is not None and name in scope:
                return scope[name]
            color = palette.colors.get(name)
            if color is None:
                raise UnknownIdentifier(name)
            return color
        case Named(name):
            color = named_color(name)
            if color is None:
                raise UnknownNamedColor(name)
            return color
        case Lch(l, c, h):
            return Color(l, c, h)
        case Shade(inner, percent):
            return resolve(inner, palette, scope, depth).lighten(percent / 100)
        case Saturate(inner, percent):
            return resolve(inner, palette, scope, depth).saturate(percent / 100)
        case WithChroma(inner, value):
            return resolve(inner, palette, scope, depth).with_chroma(value)
        case WithLightness(inner, value):
            return resolve(inner, palette, scope, depth).with_lightness(value)
        case WithAlpha(inner, percent):
            return resolve(inner, palette, scope, depth).with_alpha(percent / 100)
        case Mix(a, b, percent):
            return resolve(a, palette, scope, depth).mix(
                resolve(b, palette, scope, depth), percent / 100
            )
        case Complement(inner):
            return resolve(inner, palette, scope, depth).complement()
        case FnCall(name, args):
            return _call(name, args, palette, scope, depth)

    raise TypeError(f'"{spec}" is not a color expression')


def _call(
    name: str,
    args: tuple[ColorSpec, ...],
    palette: 'Palette',
    scope: None | Mapping[str, Color],
    depth: int,
) -> Color:
    fn = palette.functions.get(name)
    if fn is None:
        raise UnknownFunction(name)
    if len(args) != len(fn.params):
        raise ArityError(name, len(fn.params), len(args))
    if depth >= MAX_CALL_DEPTH:
        raise CallDepthError(name, MAX_CALL_DEPTH)

    values = [resolve(arg, palette, scope, depth) for arg in args]
    return resolve(fn.body, palette, dict(zip(fn.params, values)), depth + 1)


def evaluate(palette: 'Palette', expression: str, format_spec: str = '#') -> str:
    """
    Parse, resolve, and format the color expression.

    Raises:
        ColorError: if the expression is malformed or cannot be resolved
        ValueError: if the format specifier is malformed
    """
    color = resolve(parse_color(expression), palette)
    return format(color, format_spec)
