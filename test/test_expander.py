from pathlib import Path
import tempfile
import unittest
from unittest import mock

from unipalette.errors import ColorSyntaxError, UnknownIdentifier
from unipalette.expander import (
    expand,
    expand_directory,
    expand_file,
    expand_text,
    find_templates,
    output_path,
)
from unipalette.palette import read_palette


PALETTE = read_palette("""\
gray = L50C0H0
white = L100C0H0
""")


class TestExpander(unittest.TestCase):

    def test_expand_text(self) -> None:
        for text, expected in (
            ('color: ~~!#L50C0H0!;', 'color: #777777;'),
            ('~~!#gray! ~~!~gray!', '#777777 #2f2f2f'),
            ('~~!!gray!', 'lch(50% 0 0)'),
            ('~~!$white!', 'rgb(100.00% 100.00% 100.00%)'),
            ('~~!a#white a 50!', '#ffffff80'),
            ('~~!A#white a 50!', '#80ffffff'),
            ('~~!a!gray a 25!', 'lch(50% 0 0 / 0.25)'),
            ('no tags at all', 'no tags at all'),
            ('~~!x not a tag!', '~~!x not a tag!'),
        ):
            with self.subTest(text=text):
                actual, errors = expand_text(text, PALETTE)
                self.assertEqual(actual, expected)
                self.assertListEqual(errors, [])

    def test_failing_tags_expand_to_nothing(self) -> None:
        with self.assertLogs('unipalette.expander', level='WARNING') as logs:
            text, errors = expand_text(
                'a=~~!#nope!; b=~~!#gray li!; c=~~!#gray!', PALETTE, 'theme.conf'
            )

        self.assertEqual(text, 'a=; b=; c=#777777')
        self.assertEqual(len(errors), 2)
        self.assertIsInstance(errors[0], UnknownIdentifier)
        self.assertIsInstance(errors[1], ColorSyntaxError)
        self.assertEqual(len(logs.output), 2)
        self.assertIn('theme.conf', logs.output[0])
        self.assertIn('nope', logs.output[0])

    def test_output_path(self) -> None:
        self.assertEqual(output_path(Path('foo.conf.uncol')), Path('foo.conf'))
        self.assertEqual(output_path(Path('dir/theme.uncol')), Path('dir/theme'))

    def test_expand_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            template = Path(tmpdir) / 'foo.conf.uncol'
            template.write_text('fg = ~~!#gray!\n', encoding='utf8')

            target = expand_file(template, PALETTE)
            self.assertEqual(target, Path(tmpdir) / 'foo.conf')
            self.assertEqual(target.read_text(encoding='utf8'), 'fg = #777777\n')

            report = expand(template, PALETTE)
            self.assertListEqual(report.written, [target])
            self.assertEqual(report.tag_errors, 0)
            self.assertTrue(report.ok)

    def test_expand_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / 'nested').mkdir()
            (root / 'a.conf.uncol').write_text('~~!#gray!', encoding='utf8')
            (root / 'nested' / 'b.css.uncol').write_text(
                '~~!$white! ~~!#nope!', encoding='utf8'
            )
            (root / 'nested' / 'c.uncol').write_bytes(b'\xff\xfe not utf-8 \xfa')
            (root / 'ignored.conf').write_text('~~!#gray!', encoding='utf8')

            self.assertListEqual(
                find_templates(root),
                [root / 'a.conf.uncol', root / 'nested/b.css.uncol', root / 'nested/c.uncol'],
            )

            with self.assertLogs('unipalette.expander', level='WARNING') as logs:
                report = expand_directory(root, PALETTE, jobs=2)

            self.assertListEqual(report.written, [root / 'a.conf', root / 'nested/b.css'])
            self.assertListEqual(report.failed, [root / 'nested/c.uncol'])
            self.assertEqual(report.tag_errors, 1)
            self.assertFalse(report.ok)
            self.assertTrue(any('c.uncol' in line for line in logs.output))

            self.assertEqual((root / 'a.conf').read_text(encoding='utf8'), '#777777')
            self.assertEqual(
                (root / 'nested' / 'b.css').read_text(encoding='utf8'),
                'rgb(100.00% 100.00% 100.00%) ',
            )
            self.assertFalse((root / 'nested' / 'c').exists())
            self.assertEqual((root / 'ignored.conf').read_text(encoding='utf8'), '~~!#gray!')

            # Expanding the directory itself dispatches to expand_directory
            report = expand(root, PALETTE)
            self.assertEqual(len(report.written), 2)

    def test_pathological_tag_does_not_abort_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / 'a.uncol').write_text('~~!#gray!', encoding='utf8')
            (root / 'b.uncol').write_text('x~~!#' + '(' * 5000 + '!y', encoding='utf8')

            with self.assertLogs('unipalette.expander', level='WARNING'):
                report = expand_directory(root, PALETTE, jobs=2)

            self.assertListEqual(report.written, [root / 'a', root / 'b'])
            self.assertEqual(report.tag_errors, 1)
            self.assertTrue(report.ok)
            self.assertEqual((root / 'b').read_text(encoding='utf8'), 'xy')

    def test_unexpected_failure_stays_with_its_template(self) -> None:
        def explode(text, palette, source='<text>'):
            if source.endswith('b.uncol'):
                raise RuntimeError('boom')
            return text, []

        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / 'a.uncol').write_text('plain', encoding='utf8')
            (root / 'b.uncol').write_text('plain', encoding='utf8')

            with mock.patch('unipalette.expander.expand_text', side_effect=explode):
                with self.assertLogs('unipalette.expander', level='ERROR') as logs:
                    report = expand_directory(root, PALETTE)

            self.assertListEqual(report.written, [root / 'a'])
            self.assertListEqual(report.failed, [root / 'b.uncol'])
            self.assertIn('boom', '\n'.join(logs.output))


if __name__ == '__main__':
    unittest.main()
