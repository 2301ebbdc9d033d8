"""
Parsing color expressions and palette lines.

The expression grammar, from loosest to tightest binding, is::

    expr     := unary (ws? "*" ws? number ws? "*" ws? unary)*
    unary    := "~" ws? unary | postfix
    postfix  := atom modifier*
    modifier := ws "ch" ws? number | ws "st" ws? number
              | ws "li=" ws? number | ws "li" ws? number
              | ws? "a" ws? number
    atom     := lch | name "(" expr ("," expr)* ")" | name | "$" name
              | "(" expr ")"

Mixes are left-associative, complements right-associative, and modifiers
apply in textual order. An LCh literal takes precedence over a name, and a
name immediately followed by an opening parenthesis always is a call. A
modifier keyword without a number is no modifier; the parser backs up and
leaves the text to the enclosing production.
Expression trees are at most ``MAX_NESTING`` deep; deeper input is a syntax error.

The parser is a hand-written recursive descent over the source string, which
keeps track of columns for error messages.
"""
import re

from .errors import ColorSyntaxError, MalformedPaletteLine, NumericParseError
from .syntax import (
    ColorFn,
    ColorItem,
    ColorSpec,
    Complement,
    FnCall,
    FnItem,
    Id,
    Lch,
    Mix,
    Named,
    PaletteItem,
    Saturate,
    Shade,
    WithAlpha,
    WithChroma,
    WithLightness,
)


_WHITESPACE = re.compile(r'[ \t\r\n]+')
_NAME = re.compile(r'[A-Za-z0-9_-]+')
_NUMBER = re.compile(r'[+-]?[0-9.]+')
_LCH = re.compile(r'[lL]([+-]?[0-9.]+)[cC]([+-]?[0-9.]+)[hH]([+-]?[0-9.]+)')
_FN_HEAD = re.compile(r'\s*fn\s+([A-Za-z0-9_-]+)\s*\(')

MAX_NESTING = 64
"""The maximum depth of a parsed expression tree."""

# Keyword, node class, and whether whitespace must precede the keyword.
# "li=" must come before "li".
_MODIFIERS: tuple[tuple[str, type, bool], ...] = (
    ('ch', WithChroma, True),
    ('st', Saturate, True),
    ('li=', WithLightness, True),
    ('li', Shade, True),
    ('a', WithAlpha, False),
)


class _Parser:
    """A cursor over the source text between ``start`` and ``end``."""

    def __init__(self, text: str, start: int = 0, end: None | int = None) -> None:
        self._text = text
        self._pos = start
        self._end = len(text) if end is None else end
        self._depth = 0

    # ----------------------------------------------------------------------------------
    # Scanning

    def _error(
        self,
        message: str,
        pos: None | int = None,
        kind: type[ColorSyntaxError] = ColorSyntaxError,
    ) -> ColorSyntaxError:
        return kind(message, self._text, (self._pos if pos is None else pos) + 1)

    def _match(self, pattern: re.Pattern[str]) -> None | re.Match[str]:
        match = pattern.match(self._text, self._pos, self._end)
        if match is not None:
            self._pos = match.end()
        return match

    def _skip_ws(self) -> bool:
        return self._match(_WHITESPACE) is not None

    def _accept(self, literal: str) -> bool:
        if self._text.startswith(literal, self._pos, self._end):
            self._pos += len(literal)
            return True
        return False

    def _expect(self, literal: str) -> None:
        if not self._accept(literal):
            raise self._error(f'expected "{literal}"')

    def _to_float(self, text: str, pos: int) -> float:
        try:
            return float(text)
        except ValueError:
            raise self._error(
                f'malformed number "{text}"', pos, NumericParseError
            ) from None

    def _number(self) -> float:
        start = self._pos
        match = self._match(_NUMBER)
        if match is None:
            raise self._error('expected number')
        return self._to_float(match.group(), start)

    def _name(self, what: str) -> str:
        match = self._match(_NAME)
        if match is None:
            raise self._error(f'expected {what}')
        return match.group()

    @property
    def at_end(self) -> bool:
        return self._pos >= self._end

    def _descend(self) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING:
            raise self._error('expression nested too deeply')

    # ----------------------------------------------------------------------------------
    # Expressions

    def complete(self) -> ColorSpec:
        """Parse an expression that spans all remaining input."""
        self._skip_ws()
        spec = self.expression()
        self._skip_ws()
        if not self.at_end:
            raise self._error(f'unexpected "{self._text[self._pos:self._end]}"')
        return spec

    def expression(self) -> ColorSpec:
        depth = self._depth
        spec = self._unary()
        while True:
            mark = self._pos
            self._skip_ws()
            if not self._accept('*'):
                self._pos = mark
                self._depth = depth
                return spec

            # Each mix deepens the tree by one
            self._descend()
            self._skip_ws()
            percent = self._number()
            self._skip_ws()
            self._expect('*')
            self._skip_ws()
            spec = Mix(spec, self._unary(), percent)

    def _unary(self) -> ColorSpec:
        if self._accept('~'):
            self._descend()
            self._skip_ws()
            spec = Complement(self._unary())
            self._depth -= 1
            return spec
        return self._postfix()

    def _postfix(self) -> ColorSpec:
        depth = self._depth
        spec = self._atom()
        while True:
            modified = self._modifier(spec)
            if modified is None:
                self._depth = depth
                return spec
            self._descend()
            spec = modified

    def _modifier(self, spec: ColorSpec) -> None | ColorSpec:
        mark = self._pos
        spaced = self._skip_ws()

        for keyword, node, needs_space in _MODIFIERS:
            if needs_space and not spaced:
                continue
            if self._accept(keyword):
                self._skip_ws()
                if _NUMBER.match(self._text, self._pos, self._end):
                    return node(spec, self._number())
                break

        self._pos = mark
        return None

    def _atom(self) -> ColorSpec:
        if self._accept('('):
            self._descend()
            self._skip_ws()
            spec = self.expression()
            self._skip_ws()
            if not self._accept(')'):
                raise self._error('expected ")" to close parenthesis')
            self._depth -= 1
            return spec

        if self._accept('$'):
            return Named(self._name('color name after "$"'))

        match = self._match(_LCH)
        if match is not None:
            l, c, h = (self._to_float(match.group(i), match.start(i)) for i in (1, 2, 3))
            return Lch(l, c, h)

        match = self._match(_NAME)
        if match is not None:
            if self._accept('('):
                return FnCall(match.group(), self._arguments())
            return Id(match.group())

        if self.at_end:
            raise self._error('expected color expression but input ended')
        raise self._error('expected color expression')

    def _arguments(self) -> tuple[ColorSpec, ...]:
        args: list[ColorSpec] = []
        self._descend()
        while True:
            self._skip_ws()
            args.append(self.expression())
            self._skip_ws()
            if self._accept(')'):
                self._depth -= 1
                return tuple(args)
            if not self._accept(','):
                raise self._error('expected "," or ")" in function call')

    # ----------------------------------------------------------------------------------
    # Function Definitions

    def function(self) -> ColorFn:
        """Parse a function definition ``fn name(p1, p2) = expr``."""
        match = self._match(_FN_HEAD)
        assert match is not None
        name = match.group(1)

        params: list[str] = []
        while True:
            self._skip_ws()
            start = self._pos
            param = self._name('parameter name')
            if param in params:
                raise self._error(
                    f'duplicate parameter "{param}" of function "{name}"', start
                )
            params.append(param)
            self._skip_ws()
            if self._accept(')'):
                break
            if not self._accept(','):
                raise self._error('expected "," or ")" in parameter list')

        self._skip_ws()
        self._expect('=')
        return ColorFn(name, tuple(params), self.complete())


# --------------------------------------------------------------------------------------


def parse_color(text: str) -> ColorSpec:
    """
    Parse the color expression.

    Raises:
        ColorSyntaxError: if the text is not a well-formed expression
    """
    return _Parser(text).complete()


def is_comment(line: str) -> bool:
    """Determine whether the palette line is blank or a comment."""
    stripped = line.strip()
    return not stripped or stripped.startswith('#')


def parse_item(line: str) -> None | PaletteItem:
    """
    Parse a palette line. Blank lines and comments produce ``None``. Lines of
    the form ``fn name(p1, ...) = expr`` produce a function item, lines of
    the form ``name = expr`` a color item.

    Raises:
        MalformedPaletteLine: if the line has neither form
        ColorSyntaxError: if the line's expression or parameter list is
            malformed
    """
    if is_comment(line):
        return None

    if _FN_HEAD.match(line):
        return FnItem(_Parser(line).function())

    eq = line.find('=')
    if eq < 0:
        raise MalformedPaletteLine('palette line does not contain "="', line, len(line) + 1)

    name = line[:eq].strip()
    if not name:
        raise MalformedPaletteLine('palette line has no name before "="', line, eq + 1)
    if not _NAME.fullmatch(name):
        raise MalformedPaletteLine(f'"{name}" is not a valid color name', line, 1)

    return ColorItem(name, _Parser(line, eq + 1).complete())
