"""Load SafeUpdateSettings from a YAML file and SAFEUPDATE_ variables."""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from safe_update.config.settings import SafeUpdateSettings


class ConfigurationError(Exception):
    """Raised when the settings file cannot be read or parsed."""

    pass


# Settings of the current run, set by load_config()
_config: Optional[SafeUpdateSettings] = None
_config_lock = threading.Lock()


def load_yaml_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Read the settings file named by --config or CONFIG_PATH.

    Args:
        config_path: Path to the YAML settings file. Falls back to CONFIG_PATH.

    Returns:
        Mapping of setting names to values, empty when no file is configured
        or the file holds no mapping.
    """
    path = config_path or os.environ.get("CONFIG_PATH")

    if not path:
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if isinstance(data, dict) else {}
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {path}\n"
            "Pass an existing file to --config, or unset CONFIG_PATH to use "
            "SAFEUPDATE_ variables and defaults only."
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}")
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Configuration file {path} is not valid UTF-8: {e}")
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}")


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[str]:
    """Turn pydantic errors into one line per bad setting, naming its variable."""
    messages: List[str] = []
    for error in errors:
        loc = ".".join(str(part) for part in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        input_val = error.get("input")

        if "missing" in msg.lower() or "required" in msg.lower():
            hint = f"Set SAFEUPDATE_{loc.upper()} or add '{loc}:' to the settings file."
            messages.append(f"Configuration error: '{loc}' is required. {hint}")
        elif input_val is not None:
            messages.append(
                f"Configuration error: '{loc}' {msg}, got: {input_val} "
                f"(SAFEUPDATE_{loc.upper()})"
            )
        else:
            messages.append(f"Configuration error: '{loc}' {msg}")

    return messages


def load_config(config_path: Optional[str] = None) -> SafeUpdateSettings:
    """Build the settings for this run.

    Args:
        config_path: Optional settings file; exported as CONFIG_PATH so the
            YAML settings source picks it up.

    Returns:
        Validated SafeUpdateSettings instance.

    Raises:
        ConfigurationError: If the settings file cannot be read or parsed.
        SystemExit: With code 1 after printing every invalid setting.
    """
    global _config

    if config_path:
        os.environ["CONFIG_PATH"] = config_path

    # The YAML settings source ignores unreadable files, so check it here first
    load_yaml_config()

    try:
        settings = SafeUpdateSettings()
    except ValidationError as e:
        for msg in format_validation_errors(e.errors()):
            print(msg, file=sys.stderr)
        sys.exit(1)

    with _config_lock:
        _config = settings
    return settings


def get_config() -> SafeUpdateSettings:
    """Return the settings from the last load_config() call.

    Raises:
        ConfigurationError: If load_config() has not run yet.
    """
    with _config_lock:
        if _config is None:
            raise ConfigurationError("Configuration not loaded. Call load_config() first.")
        return _config
