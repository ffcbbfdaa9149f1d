"""
modhost Configuration - TOML-backed host configuration.

This module provides:
- The host schema (declared module packages, disabled modules, ...)
- HostConfig, the typed view handed to the module manager and units
- Load/save helpers that keep user comments in the file

Example usage:
    from modhost.config import load_config, save_config

    config = load_config(Path("config/modhost.toml"))
    config.disabled_modules.append("status")
    save_config(config, Path("config/modhost.toml"))
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from modhost.config.schema import (
    ConfigField,
    ValidationError,
    generate_default_config,
    validate_config,
)
from modhost.config.toml_handler import (
    TOMLError,
    generate_toml_from_schema,
    read_toml,
    write_toml,
)

# Default config file path
DEFAULT_CONFIG_FILE = Path("config/modhost.toml")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

HOST_SCHEMA: dict[str, ConfigField] = {
    "module_packages": ConfigField(
        list,
        ["self:modhost.modules"],
        "Packages scanned for modules, as origin:package.path (origin 'self' is the host itself)",
        item_type=str,
    ),
    "disabled_modules": ConfigField(
        list, [], "Names of modules that are never loaded", item_type=str
    ),
    "modules_dir": ConfigField(
        str, "modules", "Directory holding external module archives"
    ),
    "log_level": ConfigField(str, "INFO", "Host log level", choices=LOG_LEVELS),
    "module_props": ConfigField(dict, {}, "Per-module properties"),
}


class ConfigError(Exception):
    """Base exception for config API errors."""

    pass


@dataclass
class HostConfig:
    """
    Host configuration.

    Attributes:
        module_packages: Ordered package descriptors, first load of a name wins
        disabled_modules: Ordered set of disabled module names
        modules_dir: Directory holding external module archives
        log_level: Host log level name
        module_props: Module name -> property table
    """

    module_packages: list[str] = field(
        default_factory=lambda: list(HOST_SCHEMA["module_packages"].default)
    )
    disabled_modules: list[str] = field(default_factory=list)
    modules_dir: str = "modules"
    log_level: str = "INFO"
    module_props: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HostConfig":
        """Build a config from raw TOML data, filling defaults for missing keys."""
        validate_config(data, HOST_SCHEMA)
        for name, props in data.get("module_props", {}).items():
            if not isinstance(props, dict):
                raise ValidationError(
                    f"Field 'module_props': properties of {name!r} must be a table"
                )

        values = generate_default_config(HOST_SCHEMA)
        values.update(data)
        # tomllib returns plain containers already, copy to detach from input
        values["module_packages"] = list(values["module_packages"])
        values["disabled_modules"] = list(values["disabled_modules"])
        values["module_props"] = {
            name: dict(props) for name, props in values["module_props"].items()
        }
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "module_packages": list(self.module_packages),
            "disabled_modules": list(self.disabled_modules),
            "modules_dir": self.modules_dir,
            "log_level": self.log_level,
            "module_props": {
                name: dict(props) for name, props in self.module_props.items()
            },
        }

    def props(self, module_name: str) -> dict[str, Any]:
        """
        Get the mutable property table of a module, creating it if absent.

        Args:
            module_name: Name reported by the module

        Returns:
            Property dictionary persisted with the config
        """
        return self.module_props.setdefault(module_name, {})


def load_config(config_file: Path = DEFAULT_CONFIG_FILE) -> HostConfig:
    """
    Load host configuration.

    Args:
        config_file: Path to the TOML config file

    Returns:
        HostConfig (defaults if the file does not exist)

    Raises:
        ConfigError: If the file cannot be read or fails validation
    """
    if not config_file.exists():
        return HostConfig()

    try:
        data = read_toml(config_file)
        return HostConfig.from_dict(data)
    except (TOMLError, ValidationError) as e:
        raise ConfigError(f"Invalid config file {config_file}: {e}") from e


def save_config(config: HostConfig, config_file: Path = DEFAULT_CONFIG_FILE) -> None:
    """
    Save host configuration.

    The first save writes a commented document generated from the schema;
    later saves replace values and keep whatever comments the file has.

    Args:
        config: Configuration to persist
        config_file: Path to the TOML config file

    Raises:
        ConfigError: If the file cannot be written
    """
    data = config.to_dict()
    try:
        validate_config(data, HOST_SCHEMA)
        if config_file.exists():
            write_toml(config_file, data)
        else:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            config_file.write_text(
                generate_toml_from_schema("modhost configuration", HOST_SCHEMA, data),
                encoding="utf-8",
            )
    except (TOMLError, ValidationError, OSError) as e:
        raise ConfigError(f"Failed to save config to {config_file}: {e}") from e


__all__ = [
    "DEFAULT_CONFIG_FILE",
    "HOST_SCHEMA",
    "ConfigError",
    "HostConfig",
    "load_config",
    "save_config",
]
