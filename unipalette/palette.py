"""
Palettes: named colors and functions, built line by line.

A palette is built by defining items in source order. Color items resolve
immediately, against the colors and functions defined so far. Function items
are stored unresolved, so that their bodies may reference colors defined
after them. Once sealed, a palette is read-only and may be shared between
threads.
"""
from collections.abc import Iterable, Mapping
import enum
import logging
from pathlib import Path
from types import MappingProxyType

from .color import Color
from .errors import ColorError, PaletteSealedError
from .parser import parse_item
from .resolver import resolve
from .syntax import ColorFn, ColorItem, FnItem, PaletteItem


logger = logging.getLogger(__name__)


class PaletteState(enum.Enum):
    """The construction state of a palette."""
    EMPTY = 'empty'
    BUILDING = 'building'
    BUILT = 'built'


class Palette:
    """
    A table of named colors and named functions.

    Later definitions of a name replace earlier ones. Colors and functions
    live in separate namespaces.
    """

    def __init__(self) -> None:
        self._colors: dict[str, Color] = {}
        self._functions: dict[str, ColorFn] = {}
        self._state = PaletteState.EMPTY

    @property
    def state(self) -> PaletteState:
        return self._state

    @property
    def colors(self) -> Mapping[str, Color]:
        """A read-only view of the palette's colors in definition order."""
        return MappingProxyType(self._colors)

    @property
    def functions(self) -> Mapping[str, ColorFn]:
        """A read-only view of the palette's functions."""
        return MappingProxyType(self._functions)

    def define(self, item: PaletteItem) -> None:
        """
        Add the item to this palette. A color item is resolved right away.

        Raises:
            PaletteSealedError: if the palette has been sealed
            ResolveError: if the color item's expression cannot be resolved
        """
        if self._state is PaletteState.BUILT:
            raise PaletteSealedError('cannot define items in a sealed palette')

        self._state = PaletteState.BUILDING
        if isinstance(item, ColorItem):
            self._colors[item.name] = resolve(item.spec, self)
        elif isinstance(item, FnItem):
            self._functions[item.fn.name] = item.fn
        else:
            raise TypeError(f'"{item}" is not a palette item')

    def seal(self) -> None:
        """Mark this palette as built. Further definitions fail."""
        self._state = PaletteState.BUILT

    def __len__(self) -> int:
        return len(self._colors)

    def __repr__(self) -> str:
        return (
            f'<Palette {self._state.value} with {len(self._colors)} colors '
            f'and {len(self._functions)} functions>'
        )


def read_palette(source: str | Iterable[str], filename: None | str = None) -> Palette:
    """
    Build and seal a palette from its source lines.

    Any error aborts the read. It is annotated with the filename and the
    1-based line number before propagating.
    """
    lines = source.splitlines() if isinstance(source, str) else source
    palette = Palette()

    for lineno, line in enumerate(lines, start=1):
        try:
            item = parse_item(line)
            if item is not None:
                palette.define(item)
        except ColorError as x:
            raise x.locate(filename, lineno)

    palette.seal()
    logger.debug('read %r from %s', palette, filename or '<palette>')
    return palette


def load_palette(path: str | Path) -> Palette:
    """Read the palette file, which must be encoded as UTF-8."""
    path = Path(path)
    with open(path, mode='r', encoding='utf8') as file:
        return read_palette(file.read(), str(path))
