import unittest

from unipalette.color import Color, Format, parse_format_spec, stringify
from unipalette.color.serde import parse_hex


class TestSerde(unittest.TestCase):

    def test_parse_hex(self) -> None:
        self.assertEqual(parse_hex('#abc'), (0xaa, 0xbb, 0xcc))
        self.assertEqual(parse_hex('#3178ea'), (0x31, 0x78, 0xea))

        for text in ('abc', '#abcd', '#ggg', ''):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_hex(text)

    def test_parse_format_spec(self) -> None:
        for spec, expected in (
            ('', (Format.HEX, False, False)),
            ('#', (Format.HEX, False, False)),
            ('~', (Format.LINEAR_HEX, False, False)),
            ('$', (Format.CSS_RGB, False, False)),
            ('!', (Format.CSS_LCH, False, False)),
            ('a#', (Format.HEX, True, False)),
            ('A#', (Format.HEX, True, True)),
            ('#a', (Format.HEX, True, False)),
            ('!a', (Format.CSS_LCH, True, False)),
            ('A~', (Format.LINEAR_HEX, True, True)),
        ):
            with self.subTest(spec=spec):
                self.assertEqual(parse_format_spec(spec), expected)

        for spec in ('a', 'A', 'x', '#b', '#aa', 'a#a', '##'):
            with self.subTest(spec=spec):
                with self.assertRaises(ValueError):
                    parse_format_spec(spec)

    def test_hex(self) -> None:
        white = Color(100, 0, 0, 0.5)
        self.assertEqual(stringify(white), '#ffffff')
        self.assertEqual(stringify(white, alpha=True), '#ffffff80')
        self.assertEqual(stringify(white, alpha=True, alpha_first=True), '#80ffffff')
        self.assertEqual(f'{white:a#}', '#ffffff80')
        self.assertEqual(f'{white:A#}', '#80ffffff')
        self.assertEqual(f'{white:#a}', '#ffffff80')

    def test_linear_hex(self) -> None:
        gray = Color(50, 0, 0)
        # Linear sRGB is darker than gamma-encoded sRGB for mid grays
        self.assertEqual(format(gray, '#'), '#777777')
        self.assertEqual(format(gray, '~'), '#2f2f2f')
        self.assertEqual(stringify(Color(100, 0, 0), Format.LINEAR_HEX), '#ffffff')

    def test_css_rgb(self) -> None:
        self.assertEqual(format(Color(100, 0, 0), '$'), 'rgb(100.00% 100.00% 100.00%)')
        self.assertEqual(format(Color(0, 0, 0), '$'), 'rgb(0.00% 0.00% 0.00%)')
        self.assertEqual(
            format(Color(0, 0, 0, 0.25), '$a'), 'rgb(0.00% 0.00% 0.00% / 0.25)'
        )

    def test_css_lch(self) -> None:
        self.assertEqual(format(Color(50, 0, 0), '!'), 'lch(50% 0 0)')
        self.assertEqual(format(Color(50.5, 20, 390), '!'), 'lch(50.5% 20 30)')
        self.assertEqual(format(Color(50, 20, 30, 0.5), 'a!'), 'lch(50% 20 30 / 0.5)')
        self.assertEqual(format(Color(50, 20, 30), '!a'), 'lch(50% 20 30 / 1)')


if __name__ == '__main__':
    unittest.main()
