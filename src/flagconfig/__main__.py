"""
Config file inspector

Usage:
    flagconfig [options] FILE [-name=value ...]

Loads FILE, applies the flags that follow it and prints the result.
Settings read this way are untyped (string) configs. With -write the
merged settings are saved back to FILE; usage comments are not kept.
"""

import logging
import sys
from typing import List, Optional

from .configset import ConfigSet
from .errors import ConfigError, ConfigFileError
from .logsetup import setup_logging

log = logging.getLogger(__name__)


def _usage(tool: ConfigSet) -> None:
    print('Usage: flagconfig [options] FILE [-name=value ...]', file=sys.stderr)
    print(tool.format_defaults(), end='', file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    tool = ConfigSet(strict=True)
    table = tool.define_bool('table', False, 'print a table instead of plain lines')
    write = tool.define_bool('write', False, 'save the merged settings back to FILE')
    strict = tool.define_bool('strict', False, 'reject settings that FILE does not contain')
    log_level = tool.define_string('log_level', 'WARNING', 'log level')

    try:
        rest = tool.parse(argv)
    except ConfigError as e:
        print(f'flagconfig: {e}', file=sys.stderr)
        _usage(tool)
        return 2
    if not rest:
        _usage(tool)
        return 2

    try:
        setup_logging(log_level.value)
    except ValueError as e:
        print(f'flagconfig: {e}', file=sys.stderr)
        return 2

    path = rest[0]
    target = ConfigSet(path)
    try:
        target.load_file(path)
    except ConfigFileError as e:
        if not e.missing:
            log.error(f'Error loading configuration from {path}: {e.cause}')
            return 1
        log.info(f'{path} does not exist yet, starting empty')

    target.strict = strict.value
    try:
        extra = target.parse(rest[1:])
    except ConfigError as e:
        log.error(str(e))
        return 2
    if extra:
        log.warning(f"Ignoring arguments after the flags: {' '.join(extra)}")

    if table.value:
        target.get_table_view()
    else:
        target.print_config()

    if write.value:
        try:
            target.save_file(path)
        except ConfigFileError as e:
            log.error(f'Error saving configuration: {e.cause}')
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
