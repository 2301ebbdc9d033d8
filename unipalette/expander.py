"""
Expanding color expressions embedded in template files.

A template tag has the form ``~~!<format><expression>!``, where the format is
an optional ``a`` or ``A`` for alpha followed by one of the selectors ``#``,
``~``, ``$``, or ``!`` (see :class:`unipalette.color.Format`). Each tag is
replaced by the formatted color. A tag that fails to resolve is replaced by
the empty string and reported as a warning; the rest of the text still
expands.

Templates carry the ``.uncol`` suffix, which is dropped for the output file.
Directories are searched recursively and their templates expanded in
parallel.
"""
from concurrent.futures import ThreadPoolExecutor
import dataclasses
import logging
import os
from pathlib import Path
import re

from .color import parse_format_spec, stringify
from .errors import ColorError
from .palette import Palette
from .parser import parse_color
from .resolver import resolve


logger = logging.getLogger(__name__)


TEMPLATE_SUFFIX = '.uncol'

_TAG = re.compile(r'~~!([aA])?([#~$!])([^!]*)!')


@dataclasses.dataclass(slots=True)
class ExpansionReport:
    """
    The outcome of expanding one or more templates.

    Attributes:
        written: are the output files in template order
        failed: are the templates that could not be expanded at all
        tag_errors: counts tags that could not be resolved
    """
    written: list[Path] = dataclasses.field(default_factory=list)
    failed: list[Path] = dataclasses.field(default_factory=list)
    tag_errors: int = 0

    @property
    def ok(self) -> bool:
        return not self.failed


def expand_text(
    text: str, palette: Palette, source: str = '<text>'
) -> tuple[str, list[ColorError]]:
    """
    Replace all template tags in the text.

    Returns:
        the expanded text and the errors for tags replaced by the empty string
    """
    errors: list[ColorError] = []

    def replace(match: re.Match[str]) -> str:
        alpha, selector, expression = match.groups()
        format, with_alpha, alpha_first = parse_format_spec((alpha or '') + selector)
        try:
            color = resolve(parse_color(expression), palette)
        except ColorError as x:
            logger.warning('%s: cannot expand "%s": %s', source, expression, x)
            errors.append(x)
            return ''
        return stringify(color, format, alpha=with_alpha, alpha_first=alpha_first)

    return _TAG.sub(replace, text), errors


def output_path(path: Path) -> Path:
    """Determine the output path for the template, i.e., drop the suffix."""
    return path.with_suffix('')


def _expand(path: Path, palette: Palette) -> tuple[Path, int]:
    """
    Expand the template file, returning the path of the written file and the
    number of failed tags.

    Raises:
        OSError: if reading the template or writing the output fails
    """
    with open(path, mode='r', encoding='utf8') as file:
        text = file.read()

    expanded, errors = expand_text(text, palette, str(path))

    target = output_path(path)
    with open(target, mode='w', encoding='utf8') as file:
        file.write(expanded)

    logger.debug('expanded %s to %s', path, target)
    return target, len(errors)


def expand_file(path: str | Path, palette: Palette) -> Path:
    """Expand the template file and return the path of the written file."""
    return _expand(Path(path), palette)[0]


def find_templates(root: str | Path) -> list[Path]:
    """Find all template files below the root directory in sorted order."""
    templates = []
    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            if filename.endswith(TEMPLATE_SUFFIX):
                templates.append(Path(dirpath) / filename)
    return sorted(templates)


def expand_directory(
    root: str | Path, palette: Palette, jobs: None | int = None
) -> ExpansionReport:
    """
    Expand all template files below the root directory in parallel. Failure
    to expand one template does not affect the others.
    """
    report = ExpansionReport()
    templates = find_templates(root)
    logger.debug('found %d templates below %s', len(templates), root)

    with ThreadPoolExecutor(max_workers=jobs) as executor:
        futures = {
            path: executor.submit(_expand, path, palette) for path in templates
        }

        for path, future in futures.items():
            try:
                target, tag_errors = future.result()
            except (OSError, UnicodeError) as x:
                logger.error('%s: cannot expand template: %s', path, x)
                report.failed.append(path)
            except Exception as x:
                logger.exception('%s: unexpected failure expanding template: %s', path, x)
                report.failed.append(path)
            else:
                report.written.append(target)
                report.tag_errors += tag_errors

    return report


def expand(
    path: str | Path, palette: Palette, jobs: None | int = None
) -> ExpansionReport:
    """Expand the template file or all template files below the directory."""
    path = Path(path)
    if path.is_dir():
        return expand_directory(path, palette, jobs)

    report = ExpansionReport()
    target, tag_errors = _expand(path, palette)
    report.written.append(target)
    report.tag_errors = tag_errors
    return report
