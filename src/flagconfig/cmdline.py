"""
Command line parsing into a ConfigSet.

Accepted forms:
    -config
    -config=x
    -config x  # non-boolean configs only

One or two minus signs may be used; they are equivalent. Boolean configs
never take the next argument as their value, because the meaning of
`cmd -x *` would depend on whether a file named 0 or false exists; use
-config=false to turn one off.

Parsing stops just before the first non-config argument ("-" is a
non-config argument) or after the terminator "--".
"""

import logging
from typing import List, Sequence, Tuple

from .errors import ParseError, UnknownConfigError

log = logging.getLogger(__name__)


def _next_flag(configset, arguments: List[str]) -> Tuple[bool, List[str]]:
    """
    Consumes one flag (and possibly its value) from the front of arguments.

    Returns:
        (seen, remaining) where seen is False once parsing should stop
    """
    if not arguments:
        return False, arguments
    s = arguments[0]
    if len(s) < 2 or s[0] != '-':
        return False, arguments
    num_minuses = 1
    if s[1] == '-':
        num_minuses += 1
        if len(s) == 2:  # "--" terminates the flags
            return False, arguments[1:]
    name = s[num_minuses:]
    if not name or name[0] == '-' or name[0] == '=':
        raise ParseError(s, 'flag', 'bad flag syntax')

    arguments = arguments[1:]
    has_value = False
    value = ''
    if '=' in name[1:]:
        name, value = name.split('=', 1)
        has_value = True

    config = configset.lookup(name)
    if config is not None and config.value.is_bool:
        configset.set(name, value if has_value else 'true')
        return True, arguments

    if config is None and configset.strict:
        raise UnknownConfigError(name, value)

    # Unknown names are treated like string configs and need a value too
    if not has_value and arguments:
        value, arguments = arguments[0], arguments[1:]
        has_value = True
    if not has_value:
        raise ParseError('', 'flag', f'flag needs an argument: -{name}', name=name)
    configset.set(name, value)
    return True, arguments


def parse_args(configset, arguments: Sequence[str]) -> List[str]:
    """
    Parses flags from arguments into configset

    Args:
        configset: ConfigSet receiving the values
        arguments: Command line without the program name

    Returns:
        Remaining positional arguments

    Raises:
        ParseError: On bad flag syntax, a missing value or a value that
            doesn't parse for its config
    """
    remaining = list(arguments)
    while True:
        seen, remaining = _next_flag(configset, remaining)
        if not seen:
            break
    log.debug(f'Parsed command line, positional arguments: {remaining}')
    return remaining
