"""
Flat `key = value  # comment` config files.

Reading:
    - everything from the first '#' to the end of the line is dropped, even
      inside quotes
    - the rest is split on '='; lines that don't give exactly two parts are
      ignored (so values can't contain '=')
    - key and value are trimmed, and one pair of surrounding double quotes
      is removed from the value

Writing produces one `name=value # usage` line per config, sorted by name.
Values are never quoted on write.
"""

import logging
from typing import Iterable, Optional, TextIO, Tuple

from .errors import ParseError

log = logging.getLogger(__name__)


def parse_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Splits one config file line into key and value

    Returns:
        (key, value), or None for blank, comment-only or malformed lines
    """
    hash_pos = line.find('#')
    if hash_pos > -1:
        line = line[:hash_pos]
    parts = line.split('=')
    if len(parts) != 2:
        return None
    key = parts[0].strip()
    if not key:
        return None
    value = parts[1].strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        value = value[1:-1]
    return key, value


def read_config(configset, lines: Iterable[str]) -> int:
    """
    Feeds config file lines into configset.set()

    A line whose value doesn't parse is logged and skipped; the rest of the
    file is still applied.

    Returns:
        Number of lines applied
    """
    applied = 0
    for number, line in enumerate(lines, 1):
        kv = parse_line(line.rstrip('\r\n'))
        if kv is None:
            continue
        key, value = kv
        try:
            configset.set(key, value)
        except ParseError as e:
            log.warning(f'Line {number} skipped: {e}')
            continue
        applied += 1
    return applied


def format_line(config) -> str:
    return f'{config.name}={config.value} # {config.usage}\n'


def write_config(configset, stream: TextIO) -> int:
    """
    Writes every config of configset to stream

    Returns:
        Number of configs written
    """
    written = 0

    def _write(config):
        nonlocal written
        stream.write(format_line(config))
        written += 1

    configset.visit_all(_write)
    return written
