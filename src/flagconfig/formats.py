"""
Config file formats, chosen by file suffix.

- `.yaml` / `.yml`: flat YAML mapping
- `.json`: flat JSON object
- anything else: `key = value  # comment` lines (see textfile)

YAML and JSON files only hold scalar values. Nested mappings and lists are
skipped with a warning.
"""

import json
import logging
from typing import Any, Dict

import yaml

from .errors import ConfigFileError, ParseError
from .textfile import read_config, write_config
from .values import Kind, render

log = logging.getLogger(__name__)

TEXT = 'text'
YAML = 'yaml'
JSON = 'json'


def detect_format(path: str) -> str:
    lowered = str(path).lower()
    if lowered.endswith(('.yaml', '.yml')):
        return YAML
    if lowered.endswith('.json'):
        return JSON
    return TEXT


def _scalar_to_text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return render(Kind.BOOL, value)
    if isinstance(value, float):
        return render(Kind.FLOAT64, value)
    return str(value)


def _read_mapping(configset, data: Any, path: str) -> int:
    if data is None:
        return 0
    if not isinstance(data, dict):
        raise ConfigFileError(path, ValueError('top level must be a mapping'))
    applied = 0
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            log.warning(f'{path}: skipping "{key}", nested values are not supported')
            continue
        try:
            configset.set(str(key), _scalar_to_text(value))
        except ParseError as e:
            log.warning(f'{path}: "{key}" skipped: {e}')
            continue
        applied += 1
    return applied


def _as_mapping(configset) -> Dict[str, Any]:
    data = {}
    configset.visit_all(lambda config: data.__setitem__(config.name, config.value.native()))
    return data


def load_path(configset, path: str) -> int:
    """
    Loads a config file into configset

    Returns:
        Number of values applied

    Raises:
        ConfigFileError: If the file can't be opened, decoded or parsed
    """
    fmt = detect_format(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if fmt == YAML:
                return _read_mapping(configset, yaml.safe_load(f), path)
            if fmt == JSON:
                return _read_mapping(configset, json.load(f), path)
            # decode everything before applying any line
            return read_config(configset, f.read().split('\n'))
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigFileError(path, e) from e


def save_path(configset, path: str) -> int:
    """
    Writes all configs of configset to path, replacing the file

    Returns:
        Number of configs written

    Raises:
        ConfigFileError: If the file can't be written
    """
    fmt = detect_format(path)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            if fmt == YAML:
                data = _as_mapping(configset)
                yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True)
                return len(data)
            if fmt == JSON:
                data = _as_mapping(configset)
                json.dump(data, f, indent=4, sort_keys=True, ensure_ascii=False)
                return len(data)
            return write_config(configset, f)
    except OSError as e:
        raise ConfigFileError(path, e) from e
