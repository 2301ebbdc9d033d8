import io
import os
import unittest
from unittest import mock

from unipalette.color import Color
from unipalette.palette import read_palette
from unipalette.preview import (
    preview,
    sorted_colors,
    text_color,
    tile_label,
    write_color,
)
from unipalette.terminal import environment_supports_color, Terminal


PALETTE = read_palette("""\
zeta = L50C20H10
alpha = L50C20H10
dark = L20C30H200
gray = L60C0H0
""")


class TestPreview(unittest.TestCase):

    def test_sorted_colors(self) -> None:
        names = [name for name, _ in sorted_colors(PALETTE)]
        self.assertListEqual(names, ['gray', 'alpha', 'zeta', 'dark'])

    def test_text_color(self) -> None:
        self.assertEqual(text_color(Color(51, 0, 0)), Color(0, 0, 0))
        self.assertEqual(text_color(Color(50, 0, 0)), Color(100, 0, 0))

    def test_tile_label(self) -> None:
        self.assertEqual(tile_label('red'), ' ' * 6 + 'red' + ' ' * 7)
        self.assertEqual(tile_label('a' * 16), 'a' * 16)
        self.assertEqual(tile_label('b' * 20), 'b' * 15 + '…')

    def test_grid(self) -> None:
        output = io.StringIO()
        preview(PALETTE, 'demo.pal', terminal=Terminal(output, color=False))
        self.assertEqual(
            output.getvalue(),
            'Unipalette|demo.pal\n'
            + ''.join(tile_label(name) for name in ('gray', 'alpha', 'zeta', 'dark'))
            + '\n',
        )

    def test_shades(self) -> None:
        output = io.StringIO()
        preview(PALETTE, 'demo.pal', shades=True, terminal=Terminal(output, color=False))
        lines = output.getvalue().splitlines()
        self.assertEqual(lines[0], 'Unipalette|demo.pal')
        self.assertEqual(lines[1], '       -0.5 -0.25  0  0.25  0.5 ')
        self.assertEqual(lines[2], 'gray   ' + '█████' * 5)
        self.assertEqual(len(lines), 6)

    def test_colored_output(self) -> None:
        output = io.StringIO()
        terminal = Terminal(output, color=True)
        self.assertTrue(terminal.has_color)
        write_color(terminal, Color(100, 0, 0), 'white', True)
        self.assertEqual(
            output.getvalue(),
            '\x1b[38;2;0;0;0m\x1b[48;2;255;255;255mwhite\x1b[0m\n',
        )

        output = io.StringIO()
        write_color(Terminal(output, color=False), Color(100, 0, 0), 'white', True)
        self.assertEqual(output.getvalue(), 'white\n')

    def test_environment(self) -> None:
        with mock.patch.dict(os.environ, {'TERM': 'xterm-256color'}, clear=True):
            self.assertTrue(environment_supports_color(True))
            self.assertFalse(environment_supports_color(False))
        with mock.patch.dict(os.environ, {'TERM': 'dumb'}, clear=True):
            self.assertFalse(environment_supports_color(True))
        with mock.patch.dict(os.environ, {'NO_COLOR': '1', 'FORCE_COLOR': '1'}, clear=True):
            self.assertFalse(environment_supports_color(True))
        with mock.patch.dict(os.environ, {'FORCE_COLOR': ''}, clear=True):
            self.assertTrue(environment_supports_color(False))


if __name__ == '__main__':
    unittest.main()
