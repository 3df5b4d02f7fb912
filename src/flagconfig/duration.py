"""
Durations as signed 64-bit nanosecond counts.

Text form is a sequence of decimal numbers, each with optional fraction
and a unit suffix, such as "300ms", "-1.5h" or "2h45m". Valid units are
"ns", "us" (or "µs"), "ms", "s", "m", "h".

Example:
    ```python
    >>> Duration('1h30m') == 90 * MINUTE
    True
    >>> str(Duration(90 * MINUTE))
    '1h30m'
    ```
"""

from datetime import timedelta
from typing import Tuple, Union

from .errors import ParseError

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

MAX_DURATION = (1 << 63) - 1
MIN_DURATION = -(1 << 63)

_UNITS = {
    'ns': NANOSECOND,
    'us': MICROSECOND,
    'µs': MICROSECOND,  # MICRO SIGN
    'μs': MICROSECOND,  # GREEK SMALL LETTER MU
    'ms': MILLISECOND,
    's': SECOND,
    'm': MINUTE,
    'h': HOUR,
}

_DIGITS = '0123456789'
_MAX_FRACTION_DIGITS = 30


def _leading_int(s: str, text: str) -> Tuple[int, str]:
    i = 0
    while i < len(s) and s[i] in _DIGITS:
        i += 1
    digits = s[:i].lstrip('0')
    if len(digits) > 19:
        # more than 1<<63 whatever the digits are
        raise ParseError(text, 'duration', 'value out of range')
    return (int(digits) if digits else 0), s[i:]


def _leading_fraction(s: str) -> Tuple[int, int, str]:
    """
    Returns (digits as int, 10**len(digits), rest)

    Only the first _MAX_FRACTION_DIGITS digits count; the rest are below
    a nanosecond for every unit.
    """
    i = 0
    while i < len(s) and s[i] in _DIGITS:
        i += 1
    digits = s[:_MAX_FRACTION_DIGITS] if i > _MAX_FRACTION_DIGITS else s[:i]
    return (int(digits) if digits else 0), 10 ** len(digits), s[i:]


def parse_duration(text: str) -> int:
    """
    Parses a duration string into nanoseconds.

    Raises:
        ParseError: On malformed text, unknown units or int64 overflow
    """
    s = text
    neg = False
    if s and s[0] in '-+':
        neg = s[0] == '-'
        s = s[1:]
    if s == '0':
        return 0
    if not s:
        raise ParseError(text, 'duration')

    total = 0
    while s:
        if s[0] != '.' and s[0] not in _DIGITS:
            raise ParseError(text, 'duration')

        before = len(s)
        whole, s = _leading_int(s, text)
        pre = before != len(s)

        frac, scale, post = 0, 1, False
        if s and s[0] == '.':
            s = s[1:]
            before = len(s)
            frac, scale, s = _leading_fraction(s)
            post = before != len(s)
        if not pre and not post:
            # no digits on either side of '.'
            raise ParseError(text, 'duration')

        i = 0
        while i < len(s) and s[i] != '.' and s[i] not in _DIGITS:
            i += 1
        unit_name, s = s[:i], s[i:]
        if not unit_name:
            raise ParseError(text, 'duration', 'missing unit')
        unit = _UNITS.get(unit_name)
        if unit is None:
            raise ParseError(text, 'duration', f'unknown unit "{unit_name}"')

        total += whole * unit + frac * unit // scale
        if total > 1 << 63:
            raise ParseError(text, 'duration', 'value out of range')

    if neg:
        return -total
    if total > MAX_DURATION:
        raise ParseError(text, 'duration', 'value out of range')
    return total


def _format_fraction(value: int, size: int) -> str:
    whole, frac = divmod(value, size)
    if not frac:
        return str(whole)
    width = len(str(size)) - 1
    return f'{whole}.' + f'{frac:0{width}d}'.rstrip('0')


def format_duration(ns: int) -> str:
    """
    Renders nanoseconds in the compact form accepted by parse_duration.

    Zero components are left out, so one and a half hours is "1h30m" and
    one hour and five seconds is "1h5s". Durations under a second use the
    largest sub-second unit that keeps the integer part non-zero.
    """
    if ns == 0:
        return '0s'
    sign = '-' if ns < 0 else ''
    u = abs(ns)

    if u < SECOND:
        if u < MICROSECOND:
            return f'{sign}{u}ns'
        if u < MILLISECOND:
            return sign + _format_fraction(u, MICROSECOND) + 'µs'
        return sign + _format_fraction(u, MILLISECOND) + 'ms'

    hours, rest = divmod(u, HOUR)
    minutes, rest = divmod(rest, MINUTE)
    out = sign
    if hours:
        out += f'{hours}h'
    if minutes:
        out += f'{minutes}m'
    if rest:
        out += _format_fraction(rest, SECOND) + 's'
    return out


class Duration(int):
    """
    Nanosecond count that prints as a duration string.

    Accepts an int (nanoseconds), a datetime.timedelta or a duration string.
    """

    def __new__(cls, value: Union[int, str, timedelta] = 0):
        if isinstance(value, timedelta):
            value = (value.days * 86400 + value.seconds) * SECOND + \
                value.microseconds * MICROSECOND
        elif isinstance(value, str):
            value = parse_duration(value)
        elif isinstance(value, float):
            raise TypeError('Duration() needs whole nanoseconds, not float')
        value = int(value)
        if not MIN_DURATION <= value <= MAX_DURATION:
            raise OverflowError(f'duration out of range: {value}ns')
        return super().__new__(cls, value)

    def total_seconds(self) -> float:
        return int(self) / SECOND

    def to_timedelta(self) -> timedelta:
        """Converts to timedelta, truncating below microseconds"""
        micros = abs(int(self)) // MICROSECOND
        return timedelta(microseconds=-micros if self < 0 else micros)

    def __str__(self) -> str:
        return format_duration(int(self))

    def __repr__(self) -> str:
        return f"Duration('{format_duration(int(self))}')"
