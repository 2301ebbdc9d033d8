import os
import sys
from typing import cast, Self, TextIO

from .color import Color


CSI = '\x1b['


def _defined(*variables: str) -> bool:
    for variable in variables:
        if variable in os.environ:
            return True
    return False


def environment_supports_color(is_tty: bool) -> bool:
    """
    Determine whether the current terminal displays colors based on the
    environment variables for this process. The ``is_tty`` argument indicates
    whether the terminal's output is a TTY.
    """
    if _defined('NO_COLOR'):
        return False

    force = os.environ.get('FORCE_COLOR')
    if force is not None and force != 'false':
        return force in ('', '1', '2', '3', 'true')

    if not is_tty:
        return False
    return os.environ.get('TERM') != 'dumb'


class Terminal:
    """
    Terminal output with 24-bit colors.

    This class wraps an output stream with methods for writing text and for
    setting styles. All methods return the terminal, so that calls can be
    chained. If the output does not accept ANSI escape sequences, the styling
    methods write nothing and only the text remains.
    """
    def __init__(
        self,
        output: None | TextIO = None,
        color: None | bool = None,
    ) -> None:
        self._output = cast(TextIO, output or sys.__stdout__)
        is_tty = self._output.isatty()
        self._color = environment_supports_color(is_tty) if color is None else color
        self._width = self.request_size() or 80

    @property
    def has_color(self) -> bool:
        """Whether this terminal writes ANSI escape sequences."""
        return self._color

    @property
    def width(self) -> int:
        """The cached terminal width."""
        return self._width

    def request_size(self) -> None | int:
        """
        Determine the terminal's width in fixed-width columns. If the output
        has been redirected, this method returns ``None``.
        """
        try:
            return os.get_terminal_size(self._output.fileno()).columns
        except (AttributeError, OSError, ValueError):
            return None

    # ----------------------------------------------------------------------------------

    def write(self, *fragments: str) -> Self:
        """Write the string fragments. This method does not flush the output."""
        self._output.write(''.join(fragments))
        return self

    def writeln(self, *fragments: str) -> Self:
        """Write the string fragments followed by a line terminator."""
        return self.write(*fragments, '\n')

    def write_control(self, *parameters: int | str) -> Self:
        """Write the SGR control sequence with the given parameters."""
        if self._color:
            self._output.write(f'{CSI}{";".join(str(p) for p in parameters)}m')
        return self

    def flush(self) -> Self:
        """Flush this terminal's output."""
        self._output.flush()
        return self

    # ----------------------------------------------------------------------------------

    def reset_style(self) -> Self:
        """Reset all styles."""
        return self.write_control(0)

    def bold(self) -> Self:
        """Set bold style."""
        return self.write_control(1)

    def fg(self, color: Color) -> Self:
        """Set the foreground color."""
        r, g, b, _ = color.to_rgba8()
        return self.write_control(38, 2, r, g, b)

    def bg(self, color: Color) -> Self:
        """Set the background color."""
        r, g, b, _ = color.to_rgba8()
        return self.write_control(48, 2, r, g, b)
