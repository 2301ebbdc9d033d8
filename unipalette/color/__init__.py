"""
The color model: CIE LCh colors with alpha, conversions to and from sRGB, the
CSS named colors, and serialization to text.
"""
from .object import Color, MAX_CHROMA
from .named import named_color
from .serde import Format, parse_format_spec, stringify

__all__ = (
    'Color',
    'Format',
    'MAX_CHROMA',
    'named_color',
    'parse_format_spec',
    'stringify',
)
