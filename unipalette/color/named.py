"""
The CSS named colors, which extend the X11 color names.

See https://www.w3.org/TR/css-color-3/#svg-color
"""
from functools import cache

import webcolors

from .object import Color


@cache
def _lookup(name: str) -> None | Color:
    try:
        hex_color = webcolors.name_to_hex(name)
    except ValueError:
        return None
    return Color.from_hex(hex_color)


def named_color(name: str) -> None | Color:
    """
    Look up the named color, ignoring case. The result is ``None`` for unknown
    names.
    """
    return _lookup(name.lower())
