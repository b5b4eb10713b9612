"""
Configuration Management - YAML-based configuration with environment overrides
=============================================================================

This module handles all configuration aspects including:
- Loading from YAML files
- Environment variable overrides
- Default values
- Configuration validation

Resource paths are resolved relative to the process working directory,
so the default configuration expects ``responses.txt`` and ``default.txt``
next to wherever the program is started.
"""

import codecs
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, List, Union, get_args, get_origin
from dataclasses import dataclass, field, asdict, fields

from .exceptions import ConfigError


EMPTY_DEFAULT_POLICIES = ("fallback", "raise")


def _matches_type(value: Any, expected: Any) -> bool:
    """Check a loaded value against a dataclass field annotation."""
    origin = get_origin(expected)

    if origin is Union:
        return any(_matches_type(value, arg) for arg in get_args(expected))
    if origin is list:
        (item_type,) = get_args(expected) or (Any,)
        return isinstance(value, list) and all(_matches_type(v, item_type) for v in value)
    if expected is Any:
        return True
    if expected is type(None):
        return value is None
    # bool is an int subclass; keep the two apart
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, expected)


def _check_fields(section_obj: Any, section: Optional[str]) -> None:
    """
    Raise ConfigError for any field whose value has the wrong type.

    YAML values arrive with whatever type the file gives them.
    """
    for f in fields(section_obj):
        value = getattr(section_obj, f.name)
        if not _matches_type(value, f.type):
            name = f"{section}.{f.name}" if section else f.name
            expected = getattr(f.type, "__name__", None) or str(f.type).replace("typing.", "")
            raise ConfigError(
                f"Invalid type for {name}: expected {expected}, got {type(value).__name__}"
            )


@dataclass
class ResponderConfig:
    """
    Response generator configuration.

    Locates the two text resources and decides what happens when a
    lookup misses and there are no default responses to pick from.
    """
    # Keyword -> response blocks
    responses_file: str = "responses.txt"
    responses_encoding: str = "utf-8"

    # Default responses, one paragraph each
    defaults_file: str = "default.txt"
    defaults_encoding: str = "ascii"

    # "fallback" returns fallback_response, "raise" raises NoDefaultResponsesError
    on_empty_defaults: str = "fallback"
    fallback_response: str = "I'm not sure what to say about that."

    # Fixed seed for reproducible default picks (None = system entropy)
    seed: Optional[int] = None

    def validate(self) -> None:
        """Validate responder configuration parameters."""
        _check_fields(self, "responder")

        if self.on_empty_defaults not in EMPTY_DEFAULT_POLICIES:
            raise ConfigError(
                f"on_empty_defaults must be one of {', '.join(EMPTY_DEFAULT_POLICIES)}, "
                f"got {self.on_empty_defaults!r}"
            )

        if not self.responses_file or not self.defaults_file:
            raise ConfigError("Resource file paths cannot be empty")

        for name in ("responses_encoding", "defaults_encoding"):
            encoding = getattr(self, name)
            try:
                codecs.lookup(encoding)
            except LookupError:
                raise ConfigError(f"Unknown encoding for {name}: {encoding}")

        if self.on_empty_defaults == "fallback" and not self.fallback_response.strip():
            raise ConfigError("fallback_response cannot be blank when on_empty_defaults is 'fallback'")


@dataclass
class ConsoleConfig:
    """
    Console support loop configuration.
    """
    prompt: str = "> "
    welcome: str = (
        "Welcome to the Technical Support System.\n"
        "Please tell us about your problem.\n"
        "We will assist you with any problem you might have.\n"
        "Please type 'bye' to exit our system."
    )
    goodbye: str = "Nice talking to you. Bye..."
    exit_words: List[str] = field(default_factory=lambda: ["bye"])

    def validate(self) -> None:
        """Validate console configuration."""
        _check_fields(self, "console")

        if not self.exit_words:
            raise ConfigError("At least one exit word is required")
        if any(not word.strip() or " " in word.strip() for word in self.exit_words):
            raise ConfigError("Exit words must be single non-blank words")


@dataclass
class Config:
    """
    Main configuration container.

    Aggregates all configuration sections into a single object.
    """
    # Application settings
    app_name: str = "Tech Support Responder"
    version: str = "1.0.0"
    debug: bool = False

    # Logging
    log_level: str = "WARNING"
    log_dir: str = ""
    json_logs: bool = False

    # Configuration sections
    responder: ResponderConfig = field(default_factory=ResponderConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)

    def validate(self) -> None:
        """
        Validate all configuration sections.

        Raises:
            ConfigError: If any configuration section is invalid
        """
        _check_fields(self, None)

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigError(f"Invalid log level: {self.log_level}")

        self.responder.validate()
        self.console.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "app_name": self.app_name,
            "version": self.version,
            "debug": self.debug,
            "log_level": self.log_level,
            "log_dir": self.log_dir,
            "json_logs": self.json_logs,
            "responder": asdict(self.responder),
            "console": asdict(self.console),
        }


def load_config(config_path: Optional[str] = None, load_env: bool = True) -> Config:
    """
    Load configuration from YAML file with environment variable overrides.

    This function loads configuration in the following order:
    1. Default values from dataclass
    2. Values from YAML file (if it exists)
    3. Environment variable overrides

    Args:
        config_path: Path to configuration file (optional)
        load_env: Whether to load environment variable overrides

    Returns:
        Config object with loaded values

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    config = Config()

    if config_path is None:
        config_path = os.environ.get("TECHSUPPORT_CONFIG", "techsupport.yaml")
    yaml_path = Path(config_path)

    if yaml_path.exists():
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file: {e}", {"path": str(yaml_path)})
        except OSError as e:
            raise ConfigError(f"Failed to read config file: {e}", {"path": str(yaml_path)})

        if not isinstance(yaml_config, dict):
            raise ConfigError("Config file must contain a mapping", {"path": str(yaml_path)})

        _apply_yaml_config(config, yaml_config)

    if load_env:
        _apply_env_overrides(config)

    config.validate()

    return config


def _apply_section(section_obj: Any, values: Any, section: str) -> None:
    """Copy known keys from a YAML mapping onto a config section."""
    if not isinstance(values, dict):
        raise ConfigError(f"Config section '{section}' must be a mapping")

    known = {f.name for f in fields(section_obj)}
    for key, value in values.items():
        if key in known:
            setattr(section_obj, key, value)


def _apply_yaml_config(config: Config, yaml_config: Dict[str, Any]) -> None:
    """
    Apply YAML configuration values to Config object.

    Unknown keys are ignored.

    Args:
        config: Config object to update
        yaml_config: Dictionary of configuration values from YAML
    """
    for key in ("app_name", "version", "debug", "log_level", "log_dir", "json_logs"):
        if key in yaml_config:
            setattr(config, key, yaml_config[key])

    if "responder" in yaml_config:
        _apply_section(config.responder, yaml_config["responder"], "responder")

    if "console" in yaml_config:
        _apply_section(config.console, yaml_config["console"], "console")


def _apply_env_overrides(config: Config) -> None:
    """
    Apply environment variable overrides to Config object.

    Environment variables follow the pattern: TECHSUPPORT_[SECTION_]KEY
    For example: TECHSUPPORT_LOG_LEVEL, TECHSUPPORT_RESPONDER_SEED

    Args:
        config: Config object to update
    """
    env_mappings = {
        "TECHSUPPORT_DEBUG": (None, "debug", bool),
        "TECHSUPPORT_LOG_LEVEL": (None, "log_level"),
        "TECHSUPPORT_LOG_DIR": (None, "log_dir"),
        "TECHSUPPORT_JSON_LOGS": (None, "json_logs", bool),

        "TECHSUPPORT_RESPONDER_RESPONSES_FILE": ("responder", "responses_file"),
        "TECHSUPPORT_RESPONDER_DEFAULTS_FILE": ("responder", "defaults_file"),
        "TECHSUPPORT_RESPONDER_ON_EMPTY_DEFAULTS": ("responder", "on_empty_defaults"),
        "TECHSUPPORT_RESPONDER_FALLBACK_RESPONSE": ("responder", "fallback_response"),
        "TECHSUPPORT_RESPONDER_SEED": ("responder", "seed", int),
    }

    for env_var, mapping in env_mappings.items():
        value = os.environ.get(env_var)
        if value is None:
            continue

        section, key = mapping[0], mapping[1]
        converter = mapping[2] if len(mapping) > 2 else str
        target = getattr(config, section) if section else config

        if converter == bool:
            converted = value.lower() in ("true", "1", "yes", "on")
        else:
            try:
                converted = converter(value)
            except ValueError:
                raise ConfigError(f"Invalid value for {env_var}: {value!r}")

        setattr(target, key, converted)


def save_config(config: Config, config_path: str) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Config object to save
        config_path: Path to save configuration

    Raises:
        ConfigError: If configuration cannot be saved
    """
    yaml_path = Path(config_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(yaml_path, "w", encoding="utf-8") as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ConfigError(f"Failed to save config file: {e}", {"path": str(yaml_path)})
