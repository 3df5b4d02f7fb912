"""Exceptions raised by flagconfig."""

from typing import Optional


class ConfigError(Exception):
    """Base class for all flagconfig errors"""


class ParseError(ConfigError, ValueError):
    """
    Raised when text can't be parsed into the type of a config.

    Attributes:
        text: The offending text
        kind: Name of the expected type ('int', 'duration', ...)
        reason: Short description of what is wrong with the text
        name: Config name, if the error came through a ConfigSet
    """

    def __init__(self, text: str, kind: str, reason: str = 'invalid syntax',
                 name: Optional[str] = None):
        self.text = text
        self.kind = kind
        self.reason = reason
        self.name = name
        if name is None:
            msg = f'invalid {kind} value "{text}": {reason}'
        else:
            msg = f'invalid value "{text}" for config -{name}: {reason}'
        super().__init__(msg)


class UnknownConfigError(ParseError):
    """Raised in strict mode for a name that was never registered"""

    def __init__(self, name: str, text: str = ''):
        self.text = text
        self.kind = 'unknown'
        self.reason = 'config provided but not defined'
        self.name = name
        ConfigError.__init__(self, f'config provided but not defined: -{name}')


class ConfigurationError(ConfigError):
    """Programming error in the way configs are declared"""


class ConfigRedefinedError(ConfigurationError):
    """Two configs were registered under the same name"""

    def __init__(self, name: str, filename: str = ''):
        self.name = name
        self.filename = filename
        if filename:
            msg = f'{filename} config redefined: {name}'
        else:
            msg = f'config redefined: {name}'
        super().__init__(msg)


class ConfigFileError(ConfigError):
    """A config file couldn't be read or written"""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f'{path}: {cause}')

    @property
    def missing(self) -> bool:
        return isinstance(self.cause, FileNotFoundError)
