"""
Module level functions working on the process-wide DefaultConfigSet.

Example:
    ```python
    import sys
    import flagconfig

    verbose = flagconfig.define_bool('verbose', False, 'chatty output')
    flagconfig.set_file('app.conf')
    flagconfig.load()
    flagconfig.parse(sys.argv[1:])
    ```
"""

from typing import Any, Callable, List, Optional, Sequence

from .configset import Config, ConfigSet, DefaultConfigSet
from .values import Cell, TypedValue


def configuration() -> ConfigSet:
    """Returns the process-wide config set, creating it on first use"""
    return DefaultConfigSet()


def set_file(filename: str) -> None:
    configuration().init(filename)


def var(value: TypedValue, name: str, usage: str) -> None:
    configuration().var(value, name, usage)


def bool_var(cell: Cell, name: str, value: bool, usage: str) -> None:
    configuration().bool_var(cell, name, value, usage)


def define_bool(name: str, value: bool, usage: str) -> Cell:
    return configuration().define_bool(name, value, usage)


def int_var(cell: Cell, name: str, value: int, usage: str) -> None:
    configuration().int_var(cell, name, value, usage)


def define_int(name: str, value: int, usage: str) -> Cell:
    return configuration().define_int(name, value, usage)


def int64_var(cell: Cell, name: str, value: int, usage: str) -> None:
    configuration().int64_var(cell, name, value, usage)


def define_int64(name: str, value: int, usage: str) -> Cell:
    return configuration().define_int64(name, value, usage)


def uint_var(cell: Cell, name: str, value: int, usage: str) -> None:
    configuration().uint_var(cell, name, value, usage)


def define_uint(name: str, value: int, usage: str) -> Cell:
    return configuration().define_uint(name, value, usage)


def uint64_var(cell: Cell, name: str, value: int, usage: str) -> None:
    configuration().uint64_var(cell, name, value, usage)


def define_uint64(name: str, value: int, usage: str) -> Cell:
    return configuration().define_uint64(name, value, usage)


def float64_var(cell: Cell, name: str, value: float, usage: str) -> None:
    configuration().float64_var(cell, name, value, usage)


def define_float64(name: str, value: float, usage: str) -> Cell:
    return configuration().define_float64(name, value, usage)


def string_var(cell: Cell, name: str, value: str, usage: str) -> None:
    configuration().string_var(cell, name, value, usage)


def define_string(name: str, value: str, usage: str) -> Cell:
    return configuration().define_string(name, value, usage)


def duration_var(cell: Cell, name: str, value: Any, usage: str) -> None:
    configuration().duration_var(cell, name, value, usage)


def define_duration(name: str, value: Any, usage: str) -> Cell:
    return configuration().define_duration(name, value, usage)


def set(name: str, value: str) -> None:
    """Sets the named config of the default set; see ConfigSet.set"""
    configuration().set(name, value)


def lookup(name: str) -> Optional[Config]:
    return configuration().lookup(name)


def visit_all(fn: Callable[[Config], None]) -> None:
    configuration().visit_all(fn)


def visit(fn: Callable[[Config], None]) -> None:
    configuration().visit(fn)


def n_config() -> int:
    return configuration().n_config()


def parse(arguments: Sequence[str]) -> List[str]:
    """Parses command line flags (without the program name) into the default set"""
    return configuration().parse(arguments)


def parsed() -> bool:
    return configuration().parsed()


def args() -> List[str]:
    return configuration().args()


def arg(i: int) -> str:
    return configuration().arg(i)


def n_arg() -> int:
    return configuration().n_arg()


def load() -> None:
    configuration().load()


def save() -> None:
    configuration().save()


def print_config() -> None:
    configuration().print_config()


def print_defaults() -> None:
    configuration().print_defaults()
