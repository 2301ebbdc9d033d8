import os
import tempfile
import unittest

from unipalette.color import Color
from unipalette.errors import (
    ColorSyntaxError,
    MalformedPaletteLine,
    PaletteSealedError,
    UnknownFunction,
    UnknownIdentifier,
)
from unipalette.palette import load_palette, Palette, PaletteState, read_palette
from unipalette.parser import parse_item


PALETTE = """\
# A small palette
base = L50C20H30
light = base li 10

fn mixed(a, b) = a *50* b
purple = mixed($red, $blue)
"""


class TestPalette(unittest.TestCase):

    def test_read(self) -> None:
        palette = read_palette(PALETTE)
        self.assertIs(palette.state, PaletteState.BUILT)
        self.assertListEqual(list(palette.colors), ['base', 'light', 'purple'])
        self.assertListEqual(list(palette.functions), ['mixed'])
        self.assertEqual(len(palette), 3)
        self.assertEqual(palette.colors['light'], Color(55, 20, 30))

    def test_state_machine(self) -> None:
        palette = Palette()
        self.assertIs(palette.state, PaletteState.EMPTY)

        item = parse_item('base = L50C20H30')
        assert item is not None
        palette.define(item)
        self.assertIs(palette.state, PaletteState.BUILDING)

        palette.seal()
        self.assertIs(palette.state, PaletteState.BUILT)
        with self.assertRaises(PaletteSealedError):
            palette.define(item)

    def test_read_only(self) -> None:
        palette = read_palette(PALETTE)
        with self.assertRaises(TypeError):
            palette.colors['base'] = Color(0, 0, 0)  # type: ignore
        with self.assertRaises(TypeError):
            palette.functions['mixed'] = palette.functions['mixed']  # type: ignore

    def test_redefinition(self) -> None:
        palette = read_palette('x = L10C0H0\ny = x\nx = L90C0H0\n')
        self.assertEqual(palette.colors['x'], Color(90, 0, 0))
        self.assertEqual(palette.colors['y'], Color(10, 0, 0))
        self.assertListEqual(list(palette.colors), ['x', 'y'])

    def test_forward_reference(self) -> None:
        with self.assertRaises(UnknownIdentifier) as context:
            read_palette('a = b\nb = L50C0H0\n', 'forward.pal')
        error = context.exception
        self.assertEqual(error.name, 'b')
        self.assertEqual(error.lineno, 1)
        self.assertEqual(error.filename, 'forward.pal')
        self.assertEqual(str(error), 'forward.pal:1: unknown color "b"')

    def test_function_body_is_lazy(self) -> None:
        palette = read_palette(
            'fn f(x) = x *50* later\n'
            'later = L0C0H0\n'
            'c = f(L100C0H0)\n'
        )
        self.assertEqual(palette.colors['c'], Color(50, 0, 0))

    def test_function_defined_later(self) -> None:
        with self.assertRaises(UnknownFunction) as context:
            read_palette('c = f($red)\nfn f(a) = a\n')
        self.assertEqual(context.exception.lineno, 1)

    def test_syntax_errors_are_located(self) -> None:
        for source, kind, lineno in (
            ('a = L0C0H0\nnot a palette line\n', MalformedPaletteLine, 2),
            ('# comment\n\nb = (L0C0H0\n', ColorSyntaxError, 3),
        ):
            with self.subTest(source=source):
                with self.assertRaises(kind) as context:
                    read_palette(source)
                self.assertEqual(context.exception.lineno, lineno)
                self.assertTrue(str(context.exception).startswith(f'<palette>:{lineno}:'))

    def test_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'colors.pal')
            with open(path, mode='w', encoding='utf8') as file:
                file.write(PALETTE)
                file.write('bad = nope\n')

            with self.assertRaises(UnknownIdentifier) as context:
                load_palette(path)
            self.assertEqual(context.exception.filename, path)
            self.assertEqual(context.exception.lineno, 7)

            with open(path, mode='w', encoding='utf8') as file:
                file.write(PALETTE)
            palette = load_palette(path)
            self.assertIn('purple', palette.colors)


if __name__ == '__main__':
    unittest.main()
