"""
A small language for defining palettes of colors in terms of each other.
"""
from .color import Color, Format
from .errors import (
    ArityError,
    CallDepthError,
    ColorError,
    ColorSyntaxError,
    MalformedPaletteLine,
    NumericParseError,
    PaletteSealedError,
    ResolveError,
    UnknownFunction,
    UnknownIdentifier,
    UnknownNamedColor,
)
from .expander import expand, expand_directory, expand_file, expand_text, ExpansionReport
from .palette import load_palette, Palette, PaletteState, read_palette
from .parser import MAX_NESTING, parse_color, parse_item
from .resolver import evaluate, MAX_CALL_DEPTH, resolve

__all__ = (
    'ArityError',
    'CallDepthError',
    'Color',
    'ColorError',
    'ColorSyntaxError',
    'evaluate',
    'expand',
    'expand_directory',
    'expand_file',
    'expand_text',
    'ExpansionReport',
    'Format',
    'load_palette',
    'MalformedPaletteLine',
    'MAX_CALL_DEPTH',
    'MAX_NESTING',
    'NumericParseError',
    'Palette',
    'PaletteSealedError',
    'PaletteState',
    'parse_color',
    'parse_item',
    'read_palette',
    'resolve',
    'ResolveError',
    'UnknownFunction',
    'UnknownIdentifier',
    'UnknownNamedColor',
)
