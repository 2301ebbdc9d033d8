"""
The failures of parsing palettes and expressions and of resolving expressions.

All exceptions derive from :class:`ColorError`. Syntax errors carry the column
of the offending input, resolution errors the offending name. Neither knows
which file or line the input came from; callers that do may add that context
with :meth:`ColorError.locate`.
"""
from typing import Self


class ColorError(Exception):
    """The base class for all failures reported by unipalette."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.filename: None | str = None
        self.lineno: None | int = None

    def locate(self, filename: None | str, lineno: None | int) -> Self:
        """Record the file and 1-based line the failing input came from."""
        self.filename = filename
        self.lineno = lineno
        return self

    def __str__(self) -> str:
        if self.lineno is None:
            return self.message
        return f'{self.filename or "<palette>"}:{self.lineno}: {self.message}'


# --------------------------------------------------------------------------------------


class ColorSyntaxError(ColorError):
    """
    The input does not match the grammar. The offset is the 1-based column of
    the failure within the text.
    """

    def __init__(self, message: str, text: str = '', offset: int = 1) -> None:
        super().__init__(f'{message} at column {offset}')
        self.text = text
        self.offset = offset


class MalformedPaletteLine(ColorSyntaxError):
    """A palette line is neither a color item nor a function item."""


class NumericParseError(ColorSyntaxError):
    """A numeric literal is not a valid floating point number."""


# --------------------------------------------------------------------------------------


class ResolveError(ColorError, LookupError):
    """The base class for failures resolving an expression."""


class UnknownIdentifier(ResolveError):
    """Neither the local scope nor the palette binds the identifier."""

    def __init__(self, name: str) -> None:
        super().__init__(f'unknown color "{name}"')
        self.name = name


class UnknownNamedColor(ResolveError):
    """The name is not a CSS named color."""

    def __init__(self, name: str) -> None:
        super().__init__(f'unknown named color "${name}"')
        self.name = name


class UnknownFunction(ResolveError):
    """The palette defines no function with the name."""

    def __init__(self, name: str) -> None:
        super().__init__(f'unknown function "{name}"')
        self.name = name


class ArityError(ResolveError):
    """A function call has more or fewer arguments than parameters."""

    def __init__(self, name: str, expected: int, actual: int) -> None:
        super().__init__(
            f'function "{name}" takes {expected} argument'
            f'{"" if expected == 1 else "s"} but was called with {actual}'
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class CallDepthError(ResolveError):
    """Function calls are nested too deeply, usually because of recursion."""

    def __init__(self, name: str, depth: int) -> None:
        super().__init__(f'calling function "{name}" exceeds maximum depth {depth}')
        self.name = name
        self.depth = depth


# --------------------------------------------------------------------------------------


class PaletteSealedError(ColorError):
    """A definition was added to a palette that has already been built."""
