"""Support for serializing and deserializing color values"""
import enum
from typing import cast, Literal, NoReturn, overload, TYPE_CHECKING

if TYPE_CHECKING:
    from .object import Color


@overload
def _check(
    is_valid: Literal[False], entity: str, value: object, deficiency: str = ...
) -> NoReturn:
    ...
@overload
def _check(
    is_valid: bool, entity: str, value: object, deficiency: str = ...
) -> None | NoReturn:
    ...
def _check(
    is_valid: bool, entity: str, value: object, deficiency: str = 'is malformed'
) -> None | NoReturn:
    if not is_valid:
        raise ValueError(f'{entity} "{value}" {deficiency}')
    return


def parse_hex(color: str) -> tuple[int, int, int]:
    """Parse the string specifying a color in hashed hexadecimal format."""
    entity = 'hex web color'

    _check(color.startswith('#'), entity, color, 'does not start with "#"')
    digits = color[1:]
    _check(len(digits) in (3, 6), entity, color, 'does not have 3 or 6 digits')
    if len(digits) == 3:
        digits = ''.join(f'{d}{d}' for d in digits)

    try:
        return cast(
            tuple[int, int, int],
            tuple(int(digits[n:n+2], base=16) for n in range(0, 6, 2)),
        )
    except ValueError:
        _check(False, entity, color, 'contains non-hexadecimal digits')


class Format(enum.Enum):
    """
    The color representation

    Attributes:
        HEX: for ``#rrggbb`` notation of gamma-encoded sRGB
        LINEAR_HEX: for ``#rrggbb`` notation of linear sRGB
        CSS_RGB: for CSS ``rgb()`` notation with percentages
        CSS_LCH: for CSS ``lch()`` notation with unrounded numbers

    Each value is the selector character used by template tags and the
    command line.
    """
    HEX = '#'
    LINEAR_HEX = '~'
    CSS_RGB = '$'
    CSS_LCH = '!'


def parse_format_spec(spec: str) -> tuple[Format, bool, bool]:
    """
    Parse the color format specifier.

    Args:
        spec: selects the desired representation and alpha handling
    Returns:
        the format, the flag for including alpha, and the flag for placing
        alpha before the color channels

    A valid format specifier comprises up to three characters:

     1. An optional ``a`` or ``A`` includes alpha. Lower case places alpha
        after the color channels (``#rrggbbaa``), upper case before them
        (``#aarrggbb``). This is the form used by template tags.
     2. A mandatory selector: ``#`` for hex sRGB, ``~`` for hex linear sRGB,
        ``$`` for CSS ``rgb()``, and ``!`` for CSS ``lch()``.
     3. An optional trailing ``a`` includes alpha after the color channels.
        This is the form used on the command line.

    The empty specifier selects hex sRGB without alpha. Alpha placement only
    affects the hex formats; CSS formats always put alpha last.
    """
    s = spec
    alpha = alpha_first = False

    if s[:1] in ('a', 'A'):
        alpha = True
        alpha_first = s[0] == 'A'
        s = s[1:]
    if not s:
        if alpha:
            raise ValueError(f'malformed color format "{spec}"')
        return Format.HEX, False, False

    try:
        format = Format(s[0])
    except ValueError:
        raise ValueError(f'malformed color format "{spec}"') from None
    s = s[1:]

    if s == 'a' and not alpha:
        alpha = True
        s = ''
    if s:
        raise ValueError(f'malformed color format "{spec}"')

    return format, alpha, alpha_first


def _number(value: float) -> str:
    """Format the number without a fractional part if it is integral."""
    value = float(value) + 0.0
    return f'{value:.0f}' if value.is_integer() else f'{value}'


def stringify(
    color: 'Color',
    format: Format = Format.HEX,
    *,
    alpha: bool = False,
    alpha_first: bool = False,
) -> str:
    """
    Format the color in the specified representation.

    Hex formats quantize to 8 bits per channel. CSS ``rgb()`` retains two
    decimals per percentage. CSS ``lch()`` shows the raw coordinates with a
    normalized hue.
    """
    if format is Format.HEX or format is Format.LINEAR_HEX:
        if format is Format.HEX:
            r, g, b, a = color.to_rgba8()
        else:
            r, g, b, a = color.to_linear_rgba8()

        if not alpha:
            channels: tuple[int, ...] = (r, g, b)
        elif alpha_first:
            channels = (a, r, g, b)
        else:
            channels = (r, g, b, a)
        return '#' + ''.join(f'{c:02x}' for c in channels)

    elif format is Format.CSS_RGB:
        fr, fg, fb, fa = color.to_srgba()
        text = f'{fr * 100:.2f}% {fg * 100:.2f}% {fb * 100:.2f}%'
        if alpha:
            text += f' / {fa:.2f}'
        return f'rgb({text})'

    assert format is Format.CSS_LCH
    text = f'{_number(color.l)}% {_number(color.c)} {_number(color.hue)}'
    if alpha:
        text += f' / {_number(color.alpha)}'
    return f'lch({text})'
