"""Pydantic settings models for Safe Update configuration."""

from __future__ import annotations

import os
from datetime import date
from typing import Any, Dict, Literal, Optional, Tuple, Type

import yaml
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading the YAML file named by CONFIG_PATH.

    Unreadable files yield no values here; load_config() reports them.
    """

    def get_field_value(
        self, field: Any, field_name: str
    ) -> Tuple[Any, str, bool]:
        yaml_config = self._load_yaml_config()
        field_value = yaml_config.get(field_name)
        return field_value, field_name, False

    def _load_yaml_config(self) -> Dict[str, Any]:
        config_path = os.environ.get("CONFIG_PATH")
        if not config_path:
            return {}

        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                return data if isinstance(data, dict) else {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError):
            return {}

    def __call__(self) -> Dict[str, Any]:
        return self._load_yaml_config()


class SafeUpdateSettings(BaseSettings):
    """Safe Update configuration settings.

    Configuration is loaded in the following precedence (highest to lowest):
    1. Environment variables (SAFEUPDATE_ prefix)
    2. .env file
    3. YAML configuration file (via CONFIG_PATH)
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="SAFEUPDATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level: DEBUG, INFO, WARNING, ERROR",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format: json (machine) or text (terminal)",
    )

    # Output settings
    output_format: Literal["json", "text"] = Field(
        default="text",
        description="Verdict output format: json or text",
    )

    # Network probe
    network_check_url: str = Field(
        default="https://connectivitycheck.gstatic.com/generate_204",
        description="URL fetched to verify internet capability",
    )
    network_timeout: float = Field(
        default=5.0,
        gt=0,
        le=60.0,
        description="Network probe timeout in seconds",
    )
    speed_test_enabled: bool = Field(
        default=True,
        description="Measure download throughput when collecting host metrics",
    )
    speed_test_url: str = Field(
        default="https://proof.ovh.net/files/1Mb.dat",
        description="URL downloaded to estimate network speed",
    )
    speed_test_max_bytes: int = Field(
        default=512000,
        gt=0,
        description="Stop the speed test after this many bytes",
    )

    # Host metric sources
    cpu_sample_interval: float = Field(
        default=0.5,
        gt=0,
        le=10.0,
        description="Seconds between the two /proc/stat samples used for CPU load",
    )
    proc_path: str = Field(
        default="/proc",
        description="Mount point of the proc filesystem",
    )
    power_supply_path: str = Field(
        default="/sys/class/power_supply/BAT0",
        description="Sysfs directory of the battery power supply",
    )
    thermal_zone_path: str = Field(
        default="/sys/class/thermal/thermal_zone0/temp",
        description="Sysfs file reporting CPU temperature",
    )
    storage_path: str = Field(
        default="/",
        description="Filesystem path whose free space is checked",
    )
    device_build_date: Optional[date] = Field(
        default=None,
        description="Date the device was built or first put in service (YYYY-MM-DD)",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to set precedence.

        Order (first = highest priority):
        1. init_settings (constructor arguments)
        2. env_settings (environment variables with SAFEUPDATE_ prefix)
        3. dotenv_settings (.env file)
        4. yaml_settings (CONFIG_PATH YAML file)
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
        )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"}
        normalized = v.upper()
        if normalized == "WARN":
            normalized = "WARNING"
        if normalized not in valid_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: DEBUG, INFO, WARNING, ERROR"
            )
        return normalized

    @field_validator("network_check_url", "speed_test_url")
    @classmethod
    def validate_probe_url(cls, v: str) -> str:
        """Validate probe URLs use http or https."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v
