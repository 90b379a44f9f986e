"""Configuration management for the converter."""

import logging
import os
from pathlib import Path
from typing import Any

import msgspec
import yaml

from .core.fields import EntryType
from .core.keys import KeyStrategy

logger = logging.getLogger(__name__)

WEBPAGE_FALLBACKS = (EntryType.ONLINE, EntryType.MISC)

ENV_PREFIX = "BIBOBIBTEX_"


class ConverterConfig(msgspec.Struct, frozen=True, kw_only=True):
    """Options that change how entries and documents are converted.

    ``webpage_fallback`` is the BibTeX type used for webpages, which have
    no analogue by default. ``base_uri`` turns relative document ids into
    graph subjects.
    """

    webpage_fallback: EntryType | None = None
    key_strategy: KeyStrategy = KeyStrategy.TITLE
    convert_latex: bool = True
    base_uri: str | None = None

    def __post_init__(self):
        """Restrict the webpage fallback to online or misc."""
        if self.webpage_fallback is not None and self.webpage_fallback not in WEBPAGE_FALLBACKS:
            raise ValueError(
                f"webpage_fallback must be one of "
                f"{', '.join(t.value for t in WEBPAGE_FALLBACKS)}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConverterConfig":
        """Build a config from a loaded mapping, ignoring unknown keys.

        Raises:
            ValueError: If a value has the wrong type or is not allowed.
        """
        known = {k: v for k, v in data.items() if k in cls.__struct_fields__}
        try:
            return msgspec.convert(known, cls, strict=False)
        except msgspec.ValidationError as e:
            raise ValueError(f"Invalid converter configuration: {e}") from e


class Config:
    """Configuration file handling."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}")

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "bibobibtex" / "config.yaml")

        # Project config
        paths.append(Path(".bibobibtex.yaml"))
        paths.append(Path("bibobibtex.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def get_config_paths() -> list[Path]:
    """Get configuration paths in precedence order."""
    return Config.get_config_paths()


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if strategy := os.environ.get(f"{ENV_PREFIX}KEY_STRATEGY"):
        overrides["key_strategy"] = strategy.strip().lower()
    if fallback := os.environ.get(f"{ENV_PREFIX}WEBPAGE_FALLBACK"):
        fallback = fallback.strip().lower()
        overrides["webpage_fallback"] = None if fallback == "none" else fallback
    if convert := os.environ.get(f"{ENV_PREFIX}CONVERT_LATEX"):
        overrides["convert_latex"] = convert.strip().lower() in ("1", "true", "yes", "on")
    if base_uri := os.environ.get(f"{ENV_PREFIX}BASE_URI"):
        overrides["base_uri"] = base_uri.strip()
    return overrides


def load_config() -> dict[str, Any]:
    """Load configuration from files and environment variables."""
    config: dict[str, Any] = {}

    # Load from all config paths (last one wins for conflicting keys)
    for path in get_config_paths():
        if path.exists():
            try:
                file_config = Config.from_file(path)
            except ValueError as e:
                logger.warning(f"Skipping config file {path}: {e}")
                continue
            config = Config.merge_configs(config, file_config)

    return Config.merge_configs(config, _env_overrides())


def load_converter_config() -> ConverterConfig:
    """Load files and environment into a ConverterConfig."""
    return ConverterConfig.from_dict(load_config())


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
