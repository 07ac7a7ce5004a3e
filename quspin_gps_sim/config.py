"""
Configuration Loading
=====================

Reads the orchestrator configuration from a JSON file.

Example file (every section and key is optional):

    {
        "identical_mode": false,
        "seed": 42,
        "gps": {"port": "/tmp/ttyGPS", "zda_interval": 50},
        "mag1": {"port": "/tmp/ttyMAG1"},
        "mag2": {"port": "/tmp/ttyMAG2"},
        "gps_model": {"start_time": "16:57:32.50", "start_date": "2025-06-01"},
        "magnetometer": {"base_scalar_field": 52930.0, "independent_offset": 10.0}
    }
"""

import json
import logging
from dataclasses import fields, asdict
from datetime import date
from pathlib import Path
from typing import Any, Dict, Union

from .emulators.orchestrator import OrchestratorConfig
from .simulation.gps_model import UTCTime

logger = logging.getLogger(__name__)

SECTIONS = ('gps', 'mag1', 'mag2', 'gps_model', 'magnetometer')

# Fields that must be strictly positive
POSITIVE_FIELDS = ('update_rate_hz', 'baudrate', 'zda_interval', 'tick_centiseconds')


class ConfigError(ValueError):
    """Invalid configuration file or value."""


def config_from_dict(data: Dict[str, Any]) -> OrchestratorConfig:
    """
    Build an OrchestratorConfig from a dictionary.

    Missing keys keep their defaults; unknown keys are rejected.

    Raises:
        ConfigError: On unknown keys or invalid values
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")
    _check_keys(OrchestratorConfig, data, "config")

    config = OrchestratorConfig()
    for key in SECTIONS:
        if key not in data:
            continue
        section = _section(data[key], key)
        if key == 'gps_model':
            section = _parse_gps_model(section)
        setattr(config, key, _update(getattr(config, key), section, key))

    if 'identical_mode' in data:
        if not isinstance(data['identical_mode'], bool):
            raise ConfigError(f"identical_mode: expected true or false, got {data['identical_mode']!r}")
        config.identical_mode = data['identical_mode']
    if 'seed' in data:
        seed = data['seed']
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
            raise ConfigError(f"seed: expected a non-negative integer or null, got {seed!r}")
        config.seed = seed
    return config


def config_to_dict(config: OrchestratorConfig) -> Dict[str, Any]:
    """Convert to a JSON-serializable dictionary (inverse of config_from_dict)."""
    data = asdict(config)
    start_time = config.gps_model.start_time
    data['gps_model']['start_time'] = (
        f"{start_time.hours:02d}:{start_time.minutes:02d}:"
        f"{start_time.seconds:02d}.{start_time.centiseconds:02d}"
    )
    if config.gps_model.start_date is not None:
        data['gps_model']['start_date'] = config.gps_model.start_date.isoformat()
    return data


def load_config(path: Union[str, Path]) -> OrchestratorConfig:
    """
    Load configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read or contains invalid values
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot load {path}: {e}") from e

    config = config_from_dict(data)
    logger.info(f"Loaded configuration from {path}")
    return config


def _parse_gps_model(section: Dict[str, Any]) -> Dict[str, Any]:
    section = dict(section)
    try:
        if isinstance(section.get('start_time'), str):
            section['start_time'] = UTCTime.parse(section['start_time'])
        if isinstance(section.get('start_date'), str):
            section['start_date'] = date.fromisoformat(section['start_date'])
    except ValueError as e:
        raise ConfigError(f"gps_model: {e}") from e
    return section


def _section(value: Any, name: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{name}: expected an object")
    return value


def _check_keys(cls, data: Dict[str, Any], name: str):
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"{name}: unknown keys {sorted(unknown)}")


def _check_value(name: str, default: Any, value: Any):
    """Reject values whose type differs from the field default, and bad rates."""
    if isinstance(default, bool):
        ok = isinstance(value, bool)
    elif isinstance(default, (int, float)):
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
        if isinstance(default, int) and not isinstance(default, bool):
            ok = ok and isinstance(value, int)
    elif default is None:
        ok = value is None or isinstance(value, date)
    else:
        ok = isinstance(value, type(default))
    if not ok:
        raise ConfigError(f"{name}: invalid value {value!r}")

    if name.rsplit('.', 1)[-1] in POSITIVE_FIELDS and not value > 0:
        raise ConfigError(f"{name}: must be positive, got {value!r}")


def _update(current, section: Dict[str, Any], name: str):
    """Copy of a config dataclass with the given fields replaced."""
    _check_keys(type(current), section, name)
    for key, value in section.items():
        _check_value(f"{name}.{key}", getattr(current, key), value)
    values = {f.name: getattr(current, f.name) for f in fields(current)}
    values.update(section)
    return type(current)(**values)
