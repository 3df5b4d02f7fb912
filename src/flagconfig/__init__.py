"""
flagconfig - Typed settings from the command line and flat config files
"""

from .configset import Config, ConfigSet, DefaultConfigSet
from .default import (
    arg, args, bool_var, configuration, define_bool, define_duration,
    define_float64, define_int, define_int64, define_string, define_uint,
    define_uint64, duration_var, float64_var, int64_var, int_var, load,
    lookup, n_arg, n_config, parse, parsed, print_config, print_defaults,
    save, set, set_file, string_var, uint64_var, uint_var, var, visit,
    visit_all,
)
from .duration import (
    HOUR, MICROSECOND, MILLISECOND, MINUTE, NANOSECOND, SECOND,
    Duration, format_duration, parse_duration,
)
from .errors import (
    ConfigError, ConfigFileError, ConfigRedefinedError, ConfigurationError,
    ParseError, UnknownConfigError,
)
from .logsetup import setup_logging
from .values import AttrCell, Cell, Kind, TypedValue

__version__ = "0.1.0"
__all__ = [
    "Config", "ConfigSet", "DefaultConfigSet", "Cell", "AttrCell", "Kind",
    "TypedValue", "Duration", "parse_duration", "format_duration",
    "NANOSECOND", "MICROSECOND", "MILLISECOND", "SECOND", "MINUTE", "HOUR",
    "ConfigError", "ParseError", "UnknownConfigError", "ConfigurationError",
    "ConfigRedefinedError", "ConfigFileError", "setup_logging",
    "configuration", "set_file", "var",
    "bool_var", "define_bool", "int_var", "define_int", "int64_var",
    "define_int64", "uint_var", "define_uint", "uint64_var", "define_uint64",
    "float64_var", "define_float64", "string_var", "define_string",
    "duration_var", "define_duration",
    "set", "lookup", "visit_all", "visit", "n_config",
    "parse", "parsed", "args", "arg", "n_arg",
    "load", "save", "print_config", "print_defaults",
]
