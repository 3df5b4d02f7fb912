"""Console logging through rich"""

import logging
from typing import Any, Dict, Optional

from rich.logging import RichHandler

DEFAULT_LOGGING: Dict[str, Any] = {
    'level': "INFO",
    'format': "%(message)s",
    'date_format': "[%X]",
    'markup': True,
    'rich_tracebacks': True,
    'show_time': True,
    'show_path': False,
}


def setup_logging(level: Optional[str] = None, **overrides: Any) -> Dict[str, Any]:
    """
    Installs a RichHandler on the root logger.

    Args:
        level: Log level name, overrides DEFAULT_LOGGING['level']
        overrides: Any other DEFAULT_LOGGING key

    Returns:
        The settings that were applied
    """
    unknown = set(overrides) - set(DEFAULT_LOGGING)
    if unknown:
        raise TypeError(f"Unknown logging settings: {', '.join(sorted(unknown))}")
    settings = dict(DEFAULT_LOGGING, **overrides)
    if level:
        settings['level'] = level.upper()

    handler = RichHandler(
        markup=settings['markup'],
        rich_tracebacks=settings['rich_tracebacks'],
        show_time=settings['show_time'],
        show_path=settings['show_path'],
    )
    logging.basicConfig(
        level=settings['level'],
        format=settings['format'],
        datefmt=settings['date_format'],
        handlers=[handler],
        force=True,
    )
    return settings
