"""
Plotting palettes on the hue/chroma plane of CIE LCh.
"""
import sys

try:
    import matplotlib.pyplot as plt
    from matplotlib.ticker import FixedFormatter, FixedLocator, FuncFormatter
except ImportError:
    print("unipalette's plot command requires matplotlib. Please install the", file=sys.stderr)
    print("package, e.g., by executing `pip install matplotlib`, and then", file=sys.stderr)
    print("run `unipalette <palette> plot` again.", file=sys.stderr)
    sys.exit(1)

import logging
import math
from pathlib import Path
from typing import Any

from .color import Color
from .palette import Palette
from .preview import sorted_colors


logger = logging.getLogger(__name__)


class ColorPlotter:
    ACHROMATIC_THRESHOLD = 1.0

    def __init__(self, collection_name: None | str = None) -> None:
        self._collection_name = collection_name

        # Scattered colors
        self._xs: list[float] = []
        self._ys: list[float] = []
        self._mark_colors: list[str] = []

        # Averaged grays as one
        self._grays: list[float] = []

        # Lightness bars
        self._lightness: list[float] = []
        self._bar_color: list[str] = []
        self._bar_label: list[str] = []

        # Counts
        self._colors: set[Color] = set()
        self._duplicate_count = 0

    # ----------------------------------------------------------------------------------
    # Individual Color Markers

    def add(self, name: str, color: Color) -> None:
        # Matplotlib is sRGB only
        hex_color = format(color, '#')
        dup = color in self._colors
        logger.debug(
            '%-16s %s  %6.2f  %6.2f  %5.1f %s',
            name, hex_color, color.l, color.c, color.hue, ' ✘' if dup else '',
        )

        if dup:
            self._duplicate_count += 1
            return
        self._colors.add(color)

        # Display lightness for *all* non-duplicate colors
        self._lightness.append(color.l)
        self._bar_color.append(hex_color)
        self._bar_label.append(name)

        if color.c < ColorPlotter.ACHROMATIC_THRESHOLD:
            self._grays.append(color.l)
            return

        self._xs.append(math.radians(color.hue))
        self._ys.append(color.c)
        self._mark_colors.append(hex_color)

    @property
    def chromatic_count(self) -> int:
        return len(self._xs)

    @property
    def total_count(self) -> int:
        return len(self._xs) + len(self._grays)

    @property
    def duplicate_count(self) -> int:
        return self._duplicate_count

    def format_counts(self) -> str:
        counts = f'{len(self._xs)}'
        if self._grays:
            counts += f'+{len(self._grays)}'
        return counts

    # ----------------------------------------------------------------------------------

    def effective_max_chroma(self) -> float:
        """Round the largest chroma up to the next multiple of 25."""
        largest = max(self._ys, default=0.0)
        return max(25.0, 25.0 * math.ceil(largest / 25))

    def format_ytick_label(self, y: float, _: int) -> str:
        if y > 0.01 and y < self.effective_max_chroma() - 0.01:
            return f'{y:.0f}'
        return ''

    def create_figure(
        self,
        collection_name: None | str = None,
        with_lightness: bool = True,
    ) -> Any:
        if with_lightness:
            fig: Any = plt.figure(layout="constrained", figsize=(5, 6.5))  # type: ignore
            axes: Any = fig.add_subplot(6, 10, (1, 50), polar=True)
            light_axes: Any = fig.add_subplot(6, 10, (51, 60))
        else:
            fig = plt.figure(layout="constrained", figsize=(5, 5.5))  # type: ignore
            axes = fig.add_subplot(polar=True)
            light_axes = None

        # Since markers are shared for all marks in a series, we use a new
        # series for every single color.
        for x, y, color in zip(self._xs, self._ys, self._mark_colors):
            axes.scatter([x], [y], c=[color], s=[80], marker="o", edgecolors='#000', zorder=5)

        if self._grays:
            gray = format(Color(sum(self._grays) / len(self._grays), 0, 0), '#')
            axes.scatter([0], [0], c=[gray], s=[80], marker="o", edgecolors='#000', zorder=5)

        axes.set_rmin(0)
        axes.set_rmax(self.effective_max_chroma())
        axes.set_rlabel_position(0)
        axes.yaxis.set_major_formatter(FuncFormatter(self.format_ytick_label))
        plt.setp(axes.yaxis.get_majorticklabels(), ha="center")  # type: ignore

        # Make grid appear below points
        axes.set_axisbelow(True)

        if light_axes is not None:
            light_axes.set_yticks([0, 50, 100], minor=False)
            light_axes.set_yticks([25, 75], minor=True)
            light_axes.yaxis.grid(True, which="major")
            light_axes.yaxis.grid(True, which="minor")

            light_axes.bar(
                [x for x in range(len(self._lightness))],
                self._lightness,
                color=self._bar_color,
                zorder=5,
                edgecolor="#000",
                linewidth=0.5,
            )

            light_axes.set_ylim(0, 100)
            light_axes.margins(x=0.02, tight=True)

            if len(self._bar_label) <= 24:
                light_axes.xaxis.set_major_locator(
                    FixedLocator([*range(len(self._bar_label))])
                )
                light_axes.xaxis.set_major_formatter(FixedFormatter(self._bar_label))
                plt.setp(light_axes.xaxis.get_majorticklabels(), rotation=90, size=7)  # type: ignore
            else:
                light_axes.get_xaxis().set_visible(False)

        collection_name = collection_name or self._collection_name
        title = f"{collection_name}: " if collection_name else ""
        title += f"{self.format_counts()} Color"
        if self.total_count != 1:
            title += "s"
        title += " in LCh"

        fig.suptitle(title, ha="left", x=0.044, weight="bold", size=13)
        axes.set_title("Hue & Chroma", style="italic", size=13, x=0.11, y=1.01)
        return fig


def plot_palette(palette: Palette, title: str, path: str | Path) -> Path:
    """Plot the palette's colors and save the figure to the given path."""
    plotter = ColorPlotter(title)
    for name, color in sorted_colors(palette):
        plotter.add(name, color)

    logger.info(
        'plotting %d chromatic and %d achromatic colors, skipping %d duplicates',
        plotter.chromatic_count,
        plotter.total_count - plotter.chromatic_count,
        plotter.duplicate_count,
    )

    fig = plotter.create_figure()
    path = Path(path)
    fig.savefig(path, bbox_inches="tight")  # type: ignore
    plt.close(fig)
    return path
