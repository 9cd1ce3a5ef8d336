"""Configuration loader with file and environment support."""

import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from buildstep.exceptions import ConfigError
from buildstep.lib.paths import get_config_file, get_project_config_file

logger = logging.getLogger(__name__)

ENV_PREFIX = "BUILDSTEP_"

DEFAULT_REGISTRY_VARIABLES = [
    "CI_REGISTRY_IMAGE",
    "DOCKER_REGISTRY_IMAGE",
    "ECR_REGISTRY_IMAGE",
    "GCR_REGISTRY_IMAGE",
]
MAX_REGISTRY_VARIABLES = 4

DEFAULT_CONFIG = {
    "docker": {
        "binary": "docker",
        "host": None,
    },
    "cache": {
        "registry_variables": DEFAULT_REGISTRY_VARIABLES,
    },
}


class ConfigLoader:
    """
    Load and merge configuration from multiple sources.

    The ConfigLoader merges, lowest priority first:
    1. Built-in defaults
    2. User config ($XDG_CONFIG_HOME/docker-build-step/config.yaml)
    3. Project config (./docker-build.yaml)
    4. Explicit config file (--config)
    5. Environment variables (BUILDSTEP_<SECTION>_<KEY>)

    Attributes
    ----------
    config_path : Path or None
        Explicit configuration file, if any.
    project_dir : Path or None
        Directory searched for the project config file.
    """

    def __init__(self, config_path: Path | None = None, project_dir: Path | None = None):
        self.config_path = config_path
        self.project_dir = project_dir

    def _load_yaml_file(self, path: Path, required: bool = False) -> dict:
        """
        Load and parse a YAML configuration file.

        Parameters
        ----------
        path : Path
            Path to YAML file to load.
        required : bool, optional
            Raise if the file does not exist, by default False.

        Returns
        -------
        dict
            Parsed YAML content, or empty dict if file doesn't exist.

        Raises
        ------
        ConfigError
            If YAML file contains invalid syntax, is not a mapping, or a
            required file is missing.
        """
        if not path.exists():
            if required:
                raise ConfigError(f"Config file not found: {path}")
            return {}

        try:
            with open(path) as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}")

        logger.debug("Loaded config from %s", path)
        return content

    def _deep_merge(self, base: dict, override: dict) -> dict:
        """
        Deep merge two dictionaries recursively.

        Nested dictionaries are merged recursively. For non-dict values,
        the override value replaces the base value.
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: dict) -> dict:
        """
        Apply environment variable overrides to configuration.

        ``BUILDSTEP_CACHE_REGISTRY_VARIABLES`` maps to section ``cache`` and
        key ``registry_variables``: the first underscore separates the
        section, the rest is the key. Values are coerced to the type of the
        current value (a list is read from comma separated text).
        """
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            section, _, key = env_key[len(ENV_PREFIX) :].lower().partition("_")
            if not section or not key:
                logger.warning("Ignoring malformed config override %s", env_key)
                continue

            current = config.setdefault(section, {})
            if not isinstance(current, dict):
                raise ConfigError(f"Cannot override {env_key}: '{section}' is not a section")
            current[key] = _coerce(env_value, current.get(key))

        return config

    def load(self) -> dict:
        """
        Load and merge configuration from all sources.

        Returns
        -------
        dict
            Merged configuration dictionary with a ``_meta`` section listing
            the files that were read.
        """
        config = copy.deepcopy(DEFAULT_CONFIG)
        sources = []

        for path, required in self._candidate_files():
            content = self._load_yaml_file(path, required=required)
            if content:
                sources.append(str(path))
            config = self._deep_merge(config, content)

        config = self._apply_env_overrides(config)
        _check_types(config)

        config["_meta"] = {"config_sources": sources}
        return config

    def _candidate_files(self) -> list[tuple[Path, bool]]:
        files = [
            (get_config_file(), False),
            (get_project_config_file(self.project_dir), False),
        ]
        if self.config_path:
            files.append((Path(self.config_path), True))
        return files


def _coerce(value: str, current: Any) -> Any:
    if isinstance(current, list):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def _check_types(config: dict) -> None:
    for section, value in config.items():
        if not isinstance(value, dict):
            raise ConfigError(f"'{section}' must be a mapping")

    variables = get_config_value(config, "cache.registry_variables", [])
    if not isinstance(variables, list) or not all(isinstance(v, str) for v in variables):
        raise ConfigError("cache.registry_variables must be a list of variable names")
    if len(variables) > MAX_REGISTRY_VARIABLES:
        raise ConfigError(
            f"cache.registry_variables accepts at most {MAX_REGISTRY_VARIABLES} names",
            {"count": len(variables)},
        )


def get_config_value(config: dict, key_path: str, default: Any = None) -> Any:
    """
    Get configuration value using dot notation path.

    Parameters
    ----------
    config : dict
        Configuration dictionary to query.
    key_path : str
        Key path in dot notation (e.g., "docker.binary").
    default : Any, optional
        Default value to return if key doesn't exist, by default None.

    Returns
    -------
    Any
        Configuration value if found, default value otherwise.

    Examples
    --------
    >>> config = {"docker": {"binary": "docker"}}
    >>> get_config_value(config, "docker.binary")
    'docker'
    >>> get_config_value(config, "nonexistent.key", "default")
    'default'
    """
    keys = key_path.split(".")
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
