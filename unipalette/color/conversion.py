"""Conversion between color formats and spaces"""
import itertools
import math
from typing import cast, TypeAlias

from .spec import ConverterSpec, CoordinateSpec


# See https://github.com/color-js/color.js/blob/a77e080a070039c534dda3965a769675aac5f75e/src/spaces/srgb-linear.js

_XYZ_TO_LINEAR_SRGB = (
	(  3.2409699419045226,  -1.537383177570094,   -0.4986107602930034  ),
	( -0.9692436362808796,   1.8759675015077202,   0.04155505740717559 ),
	(  0.05563007969699366, -0.20397695888897652,  1.0569715142428786  ),
)

_LINEAR_SRGB_TO_XYZ = (
	( 0.41239079926595934, 0.357584339383878,   0.1804807884018343  ),
	( 0.21263900587151027, 0.715168678767756,   0.07219231536073371 ),
	( 0.01933081871559182, 0.11919477979462598, 0.9505321522496607  ),
)

# CIE Lab constants, see https://github.com/color-js/color.js/blob/a77e080a070039c534dda3965a769675aac5f75e/src/spaces/lab.js

_LAB_EPSILON = 216 / 24389
_LAB_KAPPA = 24389 / 27


# --------------------------------------------------------------------------------------


_Vector: TypeAlias = tuple[float, float, float]
_Matrix: TypeAlias = tuple[_Vector, _Vector, _Vector]

def _multiply(matrix: _Matrix, vector: _Vector) -> _Vector:
    return cast(
        _Vector,
        tuple(sum(r * c for r, c in zip(row, vector)) for row in matrix)
    )


# The D65 white point in XYZ is whatever linear sRGB white maps to. Deriving it
# from the matrix keeps achromatic Lab colors achromatic in sRGB, too.
D65: tuple[float, float, float] = _multiply(_LINEAR_SRGB_TO_XYZ, (1.0, 1.0, 1.0))


# --------------------------------------------------------------------------------------
# 24-bit RGB


def rgb256_to_srgb(r: int, g: int, b: int) -> tuple[float, float, float]:
    """Convert the given color from 24-bit RGB to sRGB."""
    return cast(_Vector, tuple(map(lambda c: c / 255.0, (r, g, b))))


# --------------------------------------------------------------------------------------
# sRGB and Linear sRGB
# See https://github.com/color-js/color.js/blob/a77e080a070039c534dda3965a769675aac5f75e/src/spaces/srgb.js


def srgb_to_linear_srgb(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert the given color from sRGB to linear sRGB."""
    def convert(value: float) -> float:
        magnitude = math.fabs(value)

        if magnitude <= 0.04045:
            return value / 12.92

        return math.copysign(math.pow((magnitude + 0.055) / 1.055, 2.4), value)

    return convert(r), convert(g), convert(b)


def linear_srgb_to_srgb(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert the given color from linear sRGB to sRGB."""
    def convert(value: float) -> float:
        magnitude = math.fabs(value)

        if magnitude <= 0.0031308:
            return value * 12.92

        return math.copysign(math.pow(magnitude, 1/2.4) * 1.055 - 0.055, value)

    return convert(r), convert(g), convert(b)


def linear_srgb_to_xyz(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert the given color from linear sRGB to XYZ."""
    return _multiply(_LINEAR_SRGB_TO_XYZ, (r, g, b))


# --------------------------------------------------------------------------------------
# Lab and LCh, both relative to D65 without chromatic adaptation


def lch_to_lab(L: float, C: float, h: float) -> tuple[float, float, float]:
    """Convert the given color from LCh to Lab."""
    a = C * math.cos(h * math.pi / 180)
    b = C * math.sin(h * math.pi / 180)
    return L, a, b


def lab_to_lch(L: float, a: float, b: float) -> tuple[float, float, float]:
    """
    Convert the given color from Lab to LCh. Achromatic colors get a hue of
    zero degrees.
    """
    ε = 0.0002

    if math.fabs(a) < ε and math.fabs(b) < ε:
        h = 0.0
    else:
        h = math.atan2(b, a) * 180 / math.pi

    return L, math.sqrt(math.pow(a, 2) + math.pow(b, 2)), math.fmod(h + 360, 360)


def lab_to_xyz(L: float, a: float, b: float) -> tuple[float, float, float]:
    """Convert the given color from Lab to XYZ."""
    fy = (L + 16) / 116
    fx = a / 500 + fy
    fz = fy - b / 200

    x = fx ** 3 if fx ** 3 > _LAB_EPSILON else (116 * fx - 16) / _LAB_KAPPA
    y = fy ** 3 if L > _LAB_KAPPA * _LAB_EPSILON else L / _LAB_KAPPA
    z = fz ** 3 if fz ** 3 > _LAB_EPSILON else (116 * fz - 16) / _LAB_KAPPA

    return x * D65[0], y * D65[1], z * D65[2]


# --------------------------------------------------------------------------------------
# XYZ


def xyz_to_linear_srgb(X: float, Y: float, Z: float) -> tuple[float, float, float]:
    """Convert the given color from XYZ to linear sRGB."""
    return _multiply(_XYZ_TO_LINEAR_SRGB, (X, Y, Z))


def xyz_to_lab(X: float, Y: float, Z: float) -> tuple[float, float, float]:
    """Convert the given color from XYZ to Lab."""
    def f(value: float) -> float:
        if value > _LAB_EPSILON:
            return math.cbrt(value)
        return (_LAB_KAPPA * value + 16) / 116

    fx, fy, fz = f(X / D65[0]), f(Y / D65[1]), f(Z / D65[2])
    return 116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz)


# --------------------------------------------------------------------------------------
# Arbitrary Conversions


def _collect_conversions(
    mod: dict[str, object],
    conversions: dict[str, dict[str, ConverterSpec]]
) -> None:
    for name, value in mod.items():
        if not name.startswith('_') and '_to_' in name and callable(value):
            source, _, target = name.partition('_to_')
            targets = conversions.setdefault(source, {})
            if target in targets:
                raise ValueError(f'duplicate conversion from {source} to {target}')
            targets[target] = cast(ConverterSpec, value)


_BASE_TREE = {
    'rgb256': ('srgb', 3),
    'srgb': ('linear_srgb', 2),
    'linear_srgb': ('xyz', 1),
    'lch': ('lab', 2),
    'lab': ('xyz', 1),
    'xyz': (None, 0),
}

def _elaborate_route(source: str, target: str) -> tuple[str, ...]:
    """Elaborate the route from the source to the target color format or space."""
    if source not in _BASE_TREE:
        raise ValueError(f'{source} is not a valid color format or space')
    if target not in _BASE_TREE:
        raise ValueError(f'{target} is not a valid color format or space')

    # Trace paths from source and target towards root of base tree
    source_path: list[str] = [source]
    target_path: list[str] = [target]

    def step(path: list[str]) -> bool:
        tag, _ = _BASE_TREE[path[-1]]
        if tag is not None:
            path.append(tag)
        return tag is None

    # Sync up traces, so that both have same distance from root
    _, source_dist = _BASE_TREE[source]
    _, target_dist = _BASE_TREE[target]

    path = source_path if source_dist >= target_dist else target_path
    for _ in range(abs(source_dist - target_dist)):
        done = step(path)
        assert not done

    # Keep tracing in lock step until paths share last node
    while source_path[-1] != target_path[-1]:
        done = step(source_path)
        done |= step(target_path)
        assert not done

    # Assemble complete path
    target_path.pop()
    target_path.reverse()
    return tuple(itertools.chain(source_path, target_path))


def _pass_through(*coordinates: float) -> CoordinateSpec:
    """Pass through the coordinates."""
    return cast(CoordinateSpec, tuple(coordinates))


def _create_converter(conversions: tuple[ConverterSpec, ...]) -> ConverterSpec:
    """
    Instantiate a closure that applies the given conversions. Doing so in a
    dedicated top-level function keeps the closure environment minimal.
    """
    def converter(*coordinates: float) -> CoordinateSpec:
        value = cast(CoordinateSpec, coordinates)
        for fn in conversions:
            value = fn(*value)
        return value
    return cast(ConverterSpec, converter)


_converter_cache: dict[str, dict[str, ConverterSpec]] = {}

def get_converter(source: str, target: str) -> ConverterSpec:
    """
    Instantiate a function that converts coordinates from the source color
    format or space to the target color format or space.

    This function factory caches converters to avoid re-instantiating the same
    converter over and over again. Each converter's name is computed as
    ``f"{source}_to_{target}"``. Converters are plain functions over immutable
    tuples, so cached converters may be shared between threads.
    """
    # Handle trivial case
    if source == target:
        return cast(ConverterSpec, _pass_through)

    # Check whether converter already exists
    maybe_converter = _converter_cache.get(source, {}).get(target)
    if maybe_converter is not None:
        return maybe_converter

    route = _elaborate_route(source, target)

    # Turn list of nodes into list of functions into converter function
    try:
        conversions = tuple(
            _converter_cache[t1][t2] for t1, t2 in itertools.pairwise(route)
        )
    except KeyError:
        raise ValueError(f'no conversion from {source} to {target}') from None

    # Annotate converter for easy debugability
    converter = _create_converter(conversions)
    name = f'{source}_to_{target}'
    setattr(converter, '__name__', name)
    setattr(converter, '__qualname__', name)
    setattr(converter, 'route', route)
    setattr(converter, 'conversions', conversions)

    _converter_cache[source][target] = converter
    return converter


# Collect eagerly, so that concurrent first lookups cannot race on the cache.
_collect_conversions(globals(), _converter_cache)
