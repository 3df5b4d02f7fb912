"""
Config registry

A ConfigSet maps config names to typed values bound to caller-owned storage.
Values come in through set(), either directly, from the command line
(parse) or from a config file (load), and can be written back to a file
(save) or printed.

Example:
    ```python
    from flagconfig import ConfigSet

    cs = ConfigSet('server.conf')
    port = cs.define_int('port', 8080, 'listen port')
    debug = cs.define_bool('debug', False, 'verbose output')

    cs.load()                          # file values
    rest = cs.parse(sys.argv[1:])      # command line overrides
    print(port.value, debug.value)

    cs.save()
    ```

Note:
    A ConfigSet does no locking. Register configs at startup and serialize
    any later access from multiple threads yourself.
"""

import io
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Set, Union

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .cmdline import parse_args
from .duration import Duration
from .errors import ConfigFileError, ConfigRedefinedError, ParseError, UnknownConfigError
from .formats import load_path, save_path
from .values import Cell, Kind, TypedValue, ZERO_TEXT

KEY_COLOR = 'wheat1'
SOURCE_COLOR = 'grey30'

log = logging.getLogger(__name__)

# Type names used in usage listings
_USAGE_TYPE = {
    Kind.BOOL: '',
    Kind.INT: 'int',
    Kind.INT64: 'int',
    Kind.UINT: 'uint',
    Kind.UINT64: 'uint',
    Kind.FLOAT64: 'float',
    Kind.STRING: 'string',
    Kind.DURATION: 'duration',
}


class Singleton(type):
    _instances = {}

    def __call__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super(Singleton, cls).__call__(*args, **kwargs)
        return cls._instances[cls]


@dataclass(frozen=True)
class Config:
    """
    State of one config

    Attributes:
        name: Name as it appears on the command line and in files
        usage: Help message
        value: Typed value bound to the storage cell
        def_value: Default value as text, captured at registration
    """
    name: str
    usage: str
    value: TypedValue
    def_value: str


def _sort_configs(configs: Dict[str, Config]) -> List[Config]:
    return [configs[name] for name in sorted(configs)]


def _capture(renderable_lines, width: int = 120) -> str:
    console = Console(record=True, file=io.StringIO(), width=width)
    for line in renderable_lines:
        console.print(line, soft_wrap=True)
    return console.export_text()


class ConfigSet:
    """
    A set of defined configs.

    Args:
        filename: File used by load() and save(). Empty means no file.
        strict: Reject names that were never registered instead of adding
            them as string configs.
    """

    def __init__(self, filename: str = '', strict: bool = False):
        self._filename = filename
        self.strict = strict
        self._parsed = False
        self._args: List[str] = []
        self._formal: Dict[str, Config] = {}
        self._actual: Dict[str, Config] = {}

    def init(self, filename: str) -> None:
        """Sets the file used by load() and save()"""
        self._filename = filename

    @property
    def filename(self) -> str:
        return self._filename

    def __repr__(self) -> str:
        return f'<ConfigSet {self._filename!r} configs={len(self._formal)} set={len(self._actual)}>'

    # -- registration

    def var(self, value: TypedValue, name: str, usage: str) -> None:
        """
        Defines a config with the given name and usage string.

        Raises:
            ConfigRedefinedError: If the name is already defined
        """
        self._check_unique(name)
        # Remember the default value as a string; it won't change.
        self._formal[name] = Config(name, usage, value, str(value))

    def _check_unique(self, name: str) -> None:
        if name in self._formal:
            err = ConfigRedefinedError(name, self._filename)
            log.critical(str(err))
            raise err

    def _define(self, kind: Kind, cell: Cell, name: str, value: Any, usage: str) -> None:
        # before TypedValue touches the cell
        self._check_unique(name)
        self.var(TypedValue(kind, cell, value), name, usage)

    def bool_var(self, cell: Cell, name: str, value: bool, usage: str) -> None:
        """Defines a bool config stored in cell"""
        self._define(Kind.BOOL, cell, name, value, usage)

    def define_bool(self, name: str, value: bool, usage: str) -> Cell:
        """Defines a bool config and returns the cell holding its value"""
        cell = Cell()
        self.bool_var(cell, name, value, usage)
        return cell

    def int_var(self, cell: Cell, name: str, value: int, usage: str) -> None:
        self._define(Kind.INT, cell, name, value, usage)

    def define_int(self, name: str, value: int, usage: str) -> Cell:
        cell = Cell()
        self.int_var(cell, name, value, usage)
        return cell

    def int64_var(self, cell: Cell, name: str, value: int, usage: str) -> None:
        self._define(Kind.INT64, cell, name, value, usage)

    def define_int64(self, name: str, value: int, usage: str) -> Cell:
        cell = Cell()
        self.int64_var(cell, name, value, usage)
        return cell

    def uint_var(self, cell: Cell, name: str, value: int, usage: str) -> None:
        self._define(Kind.UINT, cell, name, value, usage)

    def define_uint(self, name: str, value: int, usage: str) -> Cell:
        cell = Cell()
        self.uint_var(cell, name, value, usage)
        return cell

    def uint64_var(self, cell: Cell, name: str, value: int, usage: str) -> None:
        self._define(Kind.UINT64, cell, name, value, usage)

    def define_uint64(self, name: str, value: int, usage: str) -> Cell:
        cell = Cell()
        self.uint64_var(cell, name, value, usage)
        return cell

    def float64_var(self, cell: Cell, name: str, value: float, usage: str) -> None:
        self._define(Kind.FLOAT64, cell, name, value, usage)

    def define_float64(self, name: str, value: float, usage: str) -> Cell:
        cell = Cell()
        self.float64_var(cell, name, value, usage)
        return cell

    def string_var(self, cell: Cell, name: str, value: str, usage: str) -> None:
        self._define(Kind.STRING, cell, name, value, usage)

    def define_string(self, name: str, value: str, usage: str) -> Cell:
        cell = Cell()
        self.string_var(cell, name, value, usage)
        return cell

    def duration_var(self, cell: Cell, name: str,
                     value: Union[Duration, int, str, timedelta], usage: str) -> None:
        """
        Defines a duration config stored in cell.

        The default may be nanoseconds, a timedelta or a duration string
        such as "1h30m".
        """
        self._define(Kind.DURATION, cell, name, value, usage)

    def define_duration(self, name: str, value: Union[Duration, int, str, timedelta],
                        usage: str) -> Cell:
        cell = Cell()
        self.duration_var(cell, name, value, usage)
        return cell

    # -- access

    def set(self, name: str, value: str) -> None:
        """
        Sets the named config from text.

        An unknown name is added as a string config with value as its default,
        unless the set is strict.

        Raises:
            ParseError: If value is not valid for the config's type
            UnknownConfigError: For an unknown name in strict mode
        """
        config = self._formal.get(name)
        if config is None:
            if self.strict:
                raise UnknownConfigError(name, value)
            self.define_string(name, value, '')
            log.info(f'Added config (string) {name} = {value}')
            return
        try:
            config.value.set(value)
        except ParseError as e:
            raise ParseError(value, e.kind, e.reason, name=name) from None
        self._actual[name] = config

    def lookup(self, name: str) -> Optional[Config]:
        """Returns the named Config, or None if none exists"""
        return self._formal.get(name)

    def get(self, name: str) -> Any:
        """
        Returns the current value of the named config

        Raises:
            KeyError: If no such config exists
        """
        return self._formal[name].value.get()

    def visit_all(self, fn: Callable[[Config], None]) -> None:
        """Calls fn for every config in lexicographical order, set or not"""
        for config in _sort_configs(self._formal):
            fn(config)

    def visit(self, fn: Callable[[Config], None]) -> None:
        """Calls fn, in lexicographical order, for configs that have been set"""
        for config in _sort_configs(self._actual):
            fn(config)

    def n_config(self) -> int:
        """Number of configs that have been set"""
        return len(self._actual)

    def __contains__(self, name: str) -> bool:
        return name in self._formal

    def __len__(self) -> int:
        return len(self._formal)

    def __iter__(self) -> Iterator[Config]:
        return iter(_sort_configs(self._formal))

    def actual_names(self) -> Set[str]:
        return set(self._actual)

    # -- command line

    def parse(self, arguments: Sequence[str]) -> List[str]:
        """
        Parses flags from arguments, which should not include the program name.

        Returns:
            Positional arguments left after the flags (also available via args())

        Raises:
            ParseError: On bad flag syntax or values
        """
        self._parsed = True
        self._args = parse_args(self, arguments)
        return list(self._args)

    def parsed(self) -> bool:
        return self._parsed

    def args(self) -> List[str]:
        """Non-flag arguments left by parse()"""
        return list(self._args)

    def arg(self, i: int) -> str:
        """i'th positional argument, or empty string if there is none"""
        if i < 0 or i >= len(self._args):
            return ''
        return self._args[i]

    def n_arg(self) -> int:
        return len(self._args)

    # -- files

    def load_file(self, path: str) -> int:
        """
        Loads config values from path

        Returns:
            Number of values applied

        Raises:
            ConfigFileError: If the file is missing or unreadable
        """
        log.info(f'Loading config from {path}')
        return load_path(self, path)

    def save_file(self, path: str) -> int:
        """
        Writes all configs to path

        Raises:
            ConfigFileError: If the file can't be written
        """
        log.info(f'Writing config to {path}')
        written = save_path(self, path)
        log.info('Done.')
        return written

    def load(self) -> None:
        """Loads the configured file, logging instead of raising on I/O errors"""
        if not self._filename:
            log.info('No file to load.')
            return
        try:
            self.load_file(self._filename)
        except ConfigFileError as e:
            if e.missing:
                log.info(f'Config file {self._filename} not found, nothing to load')
            else:
                log.error(f'Error loading configuration from {self._filename}: {e.cause}')

    def save(self) -> None:
        """Saves to the configured file, logging instead of raising on I/O errors"""
        if not self._filename:
            log.info('No filename to save.')
            return
        try:
            self.save_file(self._filename)
        except ConfigFileError as e:
            log.error(f'Error saving configuration: {e.cause}')

    # -- output

    def _config_lines(self) -> List[str]:
        lines = []
        for config in self:
            name = escape(f'{config.name:<20}')
            usage = escape(config.usage)
            lines.append(f'[{KEY_COLOR}]{name}[/{KEY_COLOR}] = {escape(str(config.value))} '
                         f'[{SOURCE_COLOR}]# {usage}[/{SOURCE_COLOR}]')
        return lines

    def format_config(self) -> str:
        """Returns all configs as `name = value # usage` lines"""
        return _capture(self._config_lines())

    def print_config(self) -> None:
        """Prints all current config values to the console"""
        console = Console()
        for line in self._config_lines():
            console.print(line, soft_wrap=True)

    def format_defaults(self) -> str:
        """
        Returns the usage listing of all configs.

        Each config gets two lines: `-name type` and the indented usage
        followed by the default, if the default isn't the type's zero value.
        """
        out = []
        for config in self:
            kind = config.value.kind
            line = f'  -{config.name}'
            type_name = _USAGE_TYPE[kind]
            if type_name:
                line += f' {type_name}'
            line += f'\n    \t{config.usage}'
            if config.def_value != ZERO_TEXT[kind]:
                if kind is Kind.STRING:
                    line += f' (default "{config.def_value}")'
                else:
                    line += f' (default {config.def_value})'
            out.append(line + '\n')
        return ''.join(out)

    def print_defaults(self) -> None:
        print(self.format_defaults(), end='')

    def get_table_view(self) -> str:
        """
        Prints the configs as a table.

        Returns:
            str: Tabular representation of the configs
        """
        console = Console(record=True)
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Name", style=KEY_COLOR)
        table.add_column("Value", style="green")
        table.add_column("Default", style="dim")
        table.add_column("Type", style="blue")
        table.add_column("Set", justify="center")
        table.add_column("Usage")

        for config in self:
            table.add_row(
                escape(config.name),
                escape(str(config.value)),
                escape(config.def_value),
                config.value.kind.value,
                '*' if config.name in self._actual else '',
                escape(config.usage),
            )
        console.print(table)
        return console.export_text()


class DefaultConfigSet(ConfigSet, metaclass=Singleton):
    """
    Process-wide config set used by the module level functions.

    Constructed once on first use and kept for the life of the process.
    Use _reset() in tests to start over.
    """

    @classmethod
    def _reset(cls):
        """Resets the singleton for testing"""
        cls._instances.pop(cls, None)
