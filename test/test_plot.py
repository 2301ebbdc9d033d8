import importlib.util
from pathlib import Path
import tempfile
import unittest

from unipalette.color import Color
from unipalette.palette import read_palette


HAS_MATPLOTLIB = importlib.util.find_spec('matplotlib') is not None


@unittest.skipUnless(HAS_MATPLOTLIB, 'requires matplotlib')
class TestPlot(unittest.TestCase):

    def setUp(self) -> None:
        import matplotlib
        matplotlib.use('Agg')

    def test_plotter(self) -> None:
        from unipalette.plot import ColorPlotter

        plotter = ColorPlotter('test')
        plotter.add('red', Color(53, 104, 40))
        plotter.add('also-red', Color(53, 104, 400))
        plotter.add('gray', Color(50, 0.5, 0))
        plotter.add('blue', Color(32, 134, 306))

        self.assertEqual(plotter.chromatic_count, 2)
        self.assertEqual(plotter.total_count, 3)
        self.assertEqual(plotter.duplicate_count, 1)
        self.assertEqual(plotter.format_counts(), '2+1')
        self.assertEqual(plotter.effective_max_chroma(), 150)

    def test_plot_palette(self) -> None:
        from unipalette.plot import plot_palette

        palette = read_palette(
            'base = L50C40H30\n'
            'accent = ~base\n'
            'gray = L60C0H0\n'
        )
        with tempfile.TemporaryDirectory() as tmpdir:
            path = plot_palette(palette, 'demo', Path(tmpdir) / 'demo.svg')
            self.assertTrue(path.exists())
            self.assertIn('<svg', path.read_text(encoding='utf8'))


if __name__ == '__main__':
    unittest.main()
