"""
Typed values bound to storage cells.

A TypedValue knows how to parse text into one of the supported kinds,
store the result in a Cell owned by the caller and render it back to text.
The set of kinds is closed; parsing and rendering go through one dispatch
table keyed by Kind.
"""

import math
import re
from enum import Enum
from typing import Any, Callable, Dict

from .duration import Duration, parse_duration
from .errors import ConfigurationError, ParseError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1


class Cell:
    """Mutable storage for one config value"""

    def __init__(self, value: Any = None):
        self.value = value

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.value!r})'


class AttrCell(Cell):
    """
    Storage that lives in an attribute of another object.

    Example:
        ```python
        class Settings:
            port = 0

        settings = Settings()
        cs.int_var(AttrCell(settings, 'port'), 'port', 8080, 'listen port')
        ```
    """

    def __init__(self, obj: Any, attr: str):
        self._obj = obj
        self._attr = attr

    @property
    def value(self) -> Any:
        return getattr(self._obj, self._attr)

    @value.setter
    def value(self, value: Any) -> None:
        setattr(self._obj, self._attr, value)


class Kind(Enum):
    BOOL = 'bool'
    INT = 'int'
    INT64 = 'int64'
    UINT = 'uint'
    UINT64 = 'uint64'
    FLOAT64 = 'float64'
    STRING = 'string'
    DURATION = 'duration'


# -- parsing

_BOOL_LITERALS = {
    '1': True, 't': True, 'T': True, 'true': True, 'TRUE': True, 'True': True,
    '0': False, 'f': False, 'F': False, 'false': False, 'FALSE': False, 'False': False,
}

_INT_RE = re.compile(r'([+-]?)(0[xX][0-9a-fA-F]+|0[bB][01]+|0[oO][0-7]+|0[0-7]*|[1-9][0-9]*)\Z')
_HEX_FLOAT_RE = re.compile(r'[+-]?0[xX]')
_INF_RE = re.compile(r'[+-]?(inf|infinity)\Z', re.IGNORECASE)


def _parse_bool(text: str) -> bool:
    try:
        return _BOOL_LITERALS[text]
    except KeyError:
        raise ParseError(text, 'bool') from None


def _parse_integer(text: str, kind: str, signed: bool, low: int, high: int) -> int:
    m = _INT_RE.match(text)
    if m is None or (m.group(1) and not signed):
        raise ParseError(text, kind)
    digits = m.group(2)
    significant = digits[2:] if digits[1:2] in ('x', 'X', 'b', 'B', 'o', 'O') else digits
    if len(significant.lstrip('0')) > 64:
        # no base needs more than 64 digits for a 64-bit value
        raise ParseError(text, kind, 'value out of range')
    if len(digits) > 1 and digits[0] == '0' and digits[1] in '01234567':
        # C-style octal
        number = int(digits, 8)
    else:
        number = int(digits, 0)
    if m.group(1) == '-':
        number = -number
    if not low <= number <= high:
        raise ParseError(text, kind, 'value out of range')
    return number


def _parse_int(text: str) -> int:
    return _parse_integer(text, 'int', True, INT64_MIN, INT64_MAX)


def _parse_int64(text: str) -> int:
    return _parse_integer(text, 'int64', True, INT64_MIN, INT64_MAX)


def _parse_uint(text: str) -> int:
    return _parse_integer(text, 'uint', False, 0, UINT64_MAX)


def _parse_uint64(text: str) -> int:
    return _parse_integer(text, 'uint64', False, 0, UINT64_MAX)


def _parse_float(text: str) -> float:
    # float() is more lenient than the file and flag grammar
    if not text or not text.isascii() or text != text.strip() or '_' in text:
        raise ParseError(text, 'float64')
    try:
        if _HEX_FLOAT_RE.match(text):
            number = float.fromhex(text)
        else:
            number = float(text)
    except ValueError:
        raise ParseError(text, 'float64') from None
    if math.isinf(number) and not _INF_RE.match(text):
        raise ParseError(text, 'float64', 'value out of range')
    return number


def _parse_string(text: str) -> str:
    return text


def _parse_duration(text: str) -> Duration:
    return Duration(parse_duration(text))


# -- rendering

def _render_bool(value: bool) -> str:
    return 'true' if value else 'false'


def _render_int(value: int) -> str:
    return str(int(value))


def _render_float(value: float) -> str:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return '+Inf' if value > 0 else '-Inf'
    text = repr(float(value))
    if text.endswith('.0'):
        text = text[:-2]
    return text


def _render_string(value: str) -> str:
    return value


def _render_duration(value: int) -> str:
    return str(Duration(value))


# -- coercion of registration defaults

def _coerce_bool(value: Any) -> bool:
    if not isinstance(value, (bool, int)):
        raise TypeError(f'expected bool, got {type(value).__name__}')
    return bool(value)


def _int_coercer(low: int, high: int) -> Callable[[Any], int]:
    def coerce(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'expected int, got {type(value).__name__}')
        if not low <= value <= high:
            raise OverflowError(f'{value} out of range [{low}, {high}]')
        return int(value)
    return coerce


def _coerce_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f'expected float, got {type(value).__name__}')
    return float(value)


def _coerce_string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f'expected str, got {type(value).__name__}')
    return value


_PARSERS: Dict[Kind, Callable[[str], Any]] = {
    Kind.BOOL: _parse_bool,
    Kind.INT: _parse_int,
    Kind.INT64: _parse_int64,
    Kind.UINT: _parse_uint,
    Kind.UINT64: _parse_uint64,
    Kind.FLOAT64: _parse_float,
    Kind.STRING: _parse_string,
    Kind.DURATION: _parse_duration,
}

_RENDERERS: Dict[Kind, Callable[[Any], str]] = {
    Kind.BOOL: _render_bool,
    Kind.INT: _render_int,
    Kind.INT64: _render_int,
    Kind.UINT: _render_int,
    Kind.UINT64: _render_int,
    Kind.FLOAT64: _render_float,
    Kind.STRING: _render_string,
    Kind.DURATION: _render_duration,
}

_COERCERS: Dict[Kind, Callable[[Any], Any]] = {
    Kind.BOOL: _coerce_bool,
    Kind.INT: _int_coercer(INT64_MIN, INT64_MAX),
    Kind.INT64: _int_coercer(INT64_MIN, INT64_MAX),
    Kind.UINT: _int_coercer(0, UINT64_MAX),
    Kind.UINT64: _int_coercer(0, UINT64_MAX),
    Kind.FLOAT64: _coerce_float,
    Kind.STRING: _coerce_string,
    Kind.DURATION: Duration,
}

# Zero values, used to decide whether a default is worth showing in usage
ZERO_TEXT = {
    Kind.BOOL: 'false',
    Kind.INT: '0',
    Kind.INT64: '0',
    Kind.UINT: '0',
    Kind.UINT64: '0',
    Kind.FLOAT64: '0',
    Kind.STRING: '',
    Kind.DURATION: '0s',
}


def parse(kind: Kind, text: str) -> Any:
    """Parses text as the given kind without storing it anywhere"""
    return _PARSERS[kind](text)


def render(kind: Kind, value: Any) -> str:
    return _RENDERERS[kind](value)


class TypedValue:
    """
    Parses, stores and renders one config value.

    The value itself lives in `cell`; the TypedValue only mutates it. The
    cell is set to `default` on construction.
    """

    __slots__ = ('kind', 'cell')

    def __init__(self, kind: Kind, cell: Cell, default: Any):
        self.kind = kind
        self.cell = cell
        try:
            cell.value = _COERCERS[kind](default)
        except (TypeError, OverflowError, ParseError) as e:
            raise ConfigurationError(f'bad default for {kind.value} config: {e}') from e

    @property
    def is_bool(self) -> bool:
        return self.kind is Kind.BOOL

    def set(self, text: str) -> None:
        """
        Parses text and stores the result in the cell.

        Raises:
            ParseError: If text is not valid for this kind; the cell is left untouched
        """
        self.cell.value = _PARSERS[self.kind](text)

    def get(self) -> Any:
        return self.cell.value

    def native(self) -> Any:
        """Current value as a plain scalar that YAML and JSON can hold"""
        if self.kind is Kind.DURATION:
            return str(self)
        if self.kind is Kind.FLOAT64 and not math.isfinite(self.cell.value):
            return str(self)
        return self.cell.value

    def __str__(self) -> str:
        return _RENDERERS[self.kind](self.cell.value)

    def __repr__(self) -> str:
        return f'<TypedValue {self.kind.value} {self}>'
