"""
Configuration loading for projectinfo.

Settings come from, in increasing precedence: built-in defaults, an
optional YAML file (with ``${VAR}`` environment substitution) and
``PROJECTINFO_*`` environment variables. A ``.env`` file in the working
directory is loaded into the environment first.
"""
import os
import re
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger('projectinfo.config')

# Environment variable pattern: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r'\${([A-Za-z0-9_]+)}')
ENV_PREFIX = 'PROJECTINFO_'


@dataclass
class ProjectInfoConfig:
    """Settings for resolving project mappings."""
    docker_binary: Optional[str] = None
    docker_host: Optional[str] = None
    version_timeout: float = 5.0
    ps_timeout: float = 10.0
    inspect_timeout: float = 5.0
    max_workers: int = 1
    log_dir: Path = field(default_factory=lambda: Path.home() / '.projectinfo' / 'logs')

    def validate(self) -> None:
        """Raise ConfigurationError for out of range values."""
        for name in ('version_timeout', 'ps_timeout', 'inspect_timeout'):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}")


def _substitute_env_vars(raw_yaml: str) -> str:
    """Replace ``${VAR}`` references, leaving unknown ones untouched."""
    def replace_env_var(match):
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            logger.warning(f"Environment variable not found: {var_name}")
            return match.group(0)
        return value

    return ENV_VAR_PATTERN.sub(replace_env_var, raw_yaml)


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(_substitute_env_vars(f.read()))
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {path}")
    return data


def _env_overrides() -> Dict[str, Any]:
    overrides = {}
    for f in fields(ProjectInfoConfig):
        value = os.environ.get(ENV_PREFIX + f.name.upper())
        if value is not None:
            overrides[f.name] = value
    # PROJECTINFO_DOCKER is accepted as a shorthand for the binary
    if 'docker_binary' not in overrides and os.environ.get(ENV_PREFIX + 'DOCKER'):
        overrides['docker_binary'] = os.environ[ENV_PREFIX + 'DOCKER']
    if 'docker_host' not in overrides and os.environ.get('DOCKER_HOST'):
        overrides['docker_host'] = os.environ['DOCKER_HOST']
    return overrides


def _coerce(values: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(ProjectInfoConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    coerced = {}
    for name, value in values.items():
        if value is None:
            continue
        try:
            if name in ('version_timeout', 'ps_timeout', 'inspect_timeout'):
                coerced[name] = float(value)
            elif name == 'max_workers':
                coerced[name] = int(value)
            elif name == 'log_dir':
                coerced[name] = Path(value).expanduser()
            else:
                coerced[name] = str(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid value for {name}: {value!r}")
    return coerced


def load_config(path: Optional[Union[str, Path]] = None,
                dotenv_path: Optional[Union[str, Path]] = None) -> ProjectInfoConfig:
    """
    Load the projectinfo configuration.

    Args:
        path: Optional YAML configuration file
        dotenv_path: ``.env`` file to load; defaults to ``./.env``

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If a file cannot be read or a value is invalid
    """
    env_file = Path(dotenv_path) if dotenv_path else Path.cwd() / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug(f"Loaded environment from {env_file}")

    values: Dict[str, Any] = {}
    if path is not None:
        values.update(_read_config_file(Path(path)))
        logger.debug(f"Loaded configuration from {path}")
    values.update(_env_overrides())

    config = ProjectInfoConfig(**_coerce(values))
    config.validate()
    return config
