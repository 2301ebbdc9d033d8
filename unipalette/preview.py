"""
Previewing palettes in the terminal.

The grid preview shows each color as a tile labelled with its name, the
shades preview shows each color at several fixed lightness offsets.
"""
from collections.abc import Sequence

from .color import Color
from .palette import Palette
from .terminal import Terminal


SHADES: tuple[float, ...] = (-0.5, -0.25, 0.0, 0.25, 0.5)
TILE_WIDTH = 16

_BLACK = Color(0, 0, 0)
_WHITE = Color(100, 0, 0)


def text_color(color: Color) -> Color:
    """Pick black or white text, whichever is more legible on the color."""
    return _BLACK if color.l > 50 else _WHITE


def sorted_colors(palette: Palette) -> list[tuple[str, Color]]:
    """
    Sort the palette's colors by the product of lightness and hue, breaking
    ties by name.
    """
    return sorted(palette.colors.items(), key=lambda item: (item[1].l * item[1].hue, item[0]))


def tile_label(name: str) -> str:
    """Center the name in a tile, truncating overly long names."""
    if len(name) > TILE_WIDTH:
        return name[:TILE_WIDTH - 1] + '…'
    return f'{name:^{TILE_WIDTH}}'


def write_grid(terminal: Terminal, colors: Sequence[tuple[str, Color]]) -> None:
    per_line = max(terminal.width // TILE_WIDTH, 1)

    for index, (name, color) in enumerate(colors):
        terminal.fg(text_color(color)).bg(color).write(tile_label(name))
        if (index + 1) % per_line == 0:
            terminal.reset_style().writeln()

    if len(colors) % per_line != 0:
        terminal.reset_style().writeln()


def write_shades(terminal: Terminal, colors: Sequence[tuple[str, Color]]) -> None:
    width = max((len(name) for name, _ in colors), default=0) + 2

    terminal.write_control(4).write(' ' * width)
    for shade in SHADES:
        terminal.write(f'{shade:^5g}')
    terminal.reset_style().writeln()

    for name, color in colors:
        terminal.write(name.ljust(width))
        for shade in SHADES:
            terminal.fg(color.lighten_fixed(shade)).write('█████')
        terminal.reset_style().writeln()


def preview(
    palette: Palette,
    title: str,
    *,
    shades: bool = False,
    terminal: None | Terminal = None,
) -> None:
    """Write a preview of the palette's colors to the terminal."""
    terminal = terminal or Terminal()
    terminal.bold().write('Unipalette').reset_style().writeln('|', title)

    colors = sorted_colors(palette)
    if shades:
        write_shades(terminal, colors)
    else:
        write_grid(terminal, colors)
    terminal.flush()


def write_color(terminal: Terminal, color: Color, text: str, colored: bool) -> None:
    """Write the text, optionally on a background of the color."""
    if colored:
        terminal.fg(text_color(color)).bg(color)
    terminal.write(text)
    if colored:
        terminal.reset_style()
    terminal.writeln().flush()
