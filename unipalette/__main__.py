"""
unipalette's command line.
"""
import argparse
import logging
from pathlib import Path
import sys

from .color import parse_format_spec
from .errors import ColorError
from .expander import expand
from .palette import load_palette
from .parser import parse_color
from .preview import preview, write_color
from .resolver import resolve
from .terminal import Terminal


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )


def format_spec(text: str) -> str:
    try:
        parse_format_spec(text)
    except ValueError as x:
        raise argparse.ArgumentTypeError(str(x)) from None
    return text


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unipalette",
        description="""
            Define colors in terms of each other with a small expression
            language over CIE LCh, then preview them, evaluate expressions,
            expand templates, or plot the palette.
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="print debug information to the console",
    )
    parser.add_argument(
        "palette",
        type=Path,
        help="specify the color palette file to use",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    preview_parser = commands.add_parser("preview", help="preview the color palette")
    preview_parser.add_argument(
        "--shades",
        action="store_true",
        help="display different lightness variations of each color",
    )

    expand_parser = commands.add_parser(
        "expand",
        help="expand color expressions in templates",
        description="""
            Expand the color expressions in a template file. If the path is a
            directory, expand all files ending in `.uncol` below it and write
            the results besides them without the `.uncol` suffix.
        """,
    )
    expand_parser.add_argument("path", type=Path, help="template file or directory")
    expand_parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="number of templates to expand in parallel",
    )

    eval_parser = commands.add_parser("eval", help="evaluate a color expression")
    eval_parser.add_argument("expression", help="the color expression to evaluate")
    eval_parser.add_argument(
        "-c", "--colored",
        action="store_true",
        help="color the output with the resulting color",
    )
    eval_parser.add_argument(
        "-o", "--output-format",
        type=format_spec,
        default="#",
        help="""
            format of the result: '#' for sRGB hex, '~' for linear sRGB hex,
            '$' for CSS rgb(), and '!' for CSS lch(); a trailing 'a' adds alpha
        """,
    )

    plot_parser = commands.add_parser(
        "plot", help="plot the palette's colors on the hue/chroma plane"
    )
    plot_parser.add_argument(
        "-o", "--output",
        type=Path,
        help="file for the plot; defaults to the palette name with `-colors.svg`",
    )

    return parser


def run(options: argparse.Namespace) -> int:
    palette = load_palette(options.palette)

    if options.command == "preview":
        preview(
            palette,
            str(options.palette),
            shades=options.shades,
            terminal=Terminal(sys.stdout),
        )

    elif options.command == "expand":
        report = expand(options.path, palette, options.jobs)
        logger.debug(
            "expanded %d templates with %d failed tags",
            len(report.written),
            report.tag_errors,
        )
        if not report.ok:
            logger.error("could not expand %d templates", len(report.failed))
            return 1

    elif options.command == "eval":
        color = resolve(parse_color(options.expression), palette)
        write_color(
            Terminal(sys.stdout, color=True if options.colored else None),
            color,
            format(color, options.output_format),
            options.colored,
        )

    elif options.command == "plot":
        # Import lazily since matplotlib is optional
        from .plot import plot_palette
        path = options.output or Path(f"{options.palette.stem}-colors.svg")
        plot_palette(palette, options.palette.stem, path)
        logger.info("saved plot to %s", path)

    return 0


def main(argv: None | list[str] = None) -> int:
    options = create_parser().parse_args(argv)
    setup_logging(options.verbose)

    try:
        return run(options)
    except (ColorError, OSError) as x:
        print(f"error: {x}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
