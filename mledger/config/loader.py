#!/usr/bin/env python3
"""
Loading, saving and merging of ledger policy configurations.

The ledger config itself performs no I/O. This module is the layer around it
that reads YAML, TOML or JSON files and environment variables.
"""

"""
Copyright (c) 2025 Firefly Software Solutions Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at:

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

import toml
import yaml

from ..utils.helpers import deep_merge_dicts, sanitize_for_logging
from .ledger_config import LedgerPolicyConfig
from .types import TimeUnit

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "MLEDGER_"

# Fields that are injected in code, never loaded from files or the environment
CAPABILITY_FIELDS = ("ledger_offloader", "clock")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _converter_for(annotation: Any) -> Callable[[str], Any]:
    if annotation is bool:
        return _parse_bool
    if annotation is int:
        return int
    if annotation is float:
        return float
    return str


def _env_mappings(prefix: str) -> Dict[str, Tuple[str, Callable[[str], Any]]]:
    mappings = {}
    for name, field in LedgerPolicyConfig.model_fields.items():
        if name in CAPABILITY_FIELDS:
            continue
        mappings[f"{prefix}{name.upper()}"] = (name, _converter_for(field.annotation))
    return mappings


def _build(data: Dict[str, Any]) -> LedgerPolicyConfig:
    data = dict(data)
    password = data.pop("password", None)
    config = LedgerPolicyConfig(**data)
    if password is not None:
        config.set_password(str(password))
    return config


class ConfigurationManager:
    """Utility class for managing ledger policy configurations."""

    @staticmethod
    def from_file(config_path: Union[str, Path]) -> LedgerPolicyConfig:
        """Load configuration from a YAML, TOML or JSON file."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        content = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()

        try:
            if suffix in [".yml", ".yaml"]:
                data = yaml.safe_load(content)
            elif suffix == ".toml":
                data = toml.loads(content)
            else:
                data = json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError, toml.TomlDecodeError) as e:
            raise ValueError(f"Failed to parse configuration file: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Failed to parse configuration file: expected a mapping in {path}")

        logger.info("Loaded ledger configuration", extra={"path": str(path), "entries": len(data)})
        logger.debug("Configuration file contents", extra={"contents": sanitize_for_logging(data)})
        return _build(data)

    @staticmethod
    def from_env(prefix: str = DEFAULT_ENV_PREFIX) -> LedgerPolicyConfig:
        """Load configuration from environment variables.

        Only variables that are set override the defaults.
        """
        return _build(ConfigurationManager._get_env_overrides(prefix))

    @staticmethod
    def to_file(
        config: LedgerPolicyConfig, config_path: Union[str, Path], format: str = "auto"
    ) -> None:
        """Save configuration to a file.

        The password and the injected clock and offloader are not written.
        """
        path = Path(config_path)

        if format == "auto":
            suffix = path.suffix.lower()
            if suffix in [".yml", ".yaml"]:
                format = "yaml"
            elif suffix == ".toml":
                format = "toml"
            else:
                format = "json"

        data = config.model_dump(mode="json", exclude={"password"})

        if format == "yaml":
            content = yaml.dump(data, default_flow_style=False, sort_keys=False, indent=2)
        elif format == "toml":
            content = toml.dumps(data)
        else:
            content = json.dumps(data, indent=2)

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    @staticmethod
    def create_default_config_file(path: Union[str, Path], format: str = "yaml") -> None:
        """Create a default configuration file."""
        ConfigurationManager.to_file(LedgerPolicyConfig(), path, format)

    @staticmethod
    def merge_configs(*configs: LedgerPolicyConfig) -> LedgerPolicyConfig:
        """Merge configurations; values explicitly set on later configs take precedence.

        The password, clock and offloader are carried over from the last config
        that set them.
        """
        if not configs:
            return LedgerPolicyConfig()

        merged_data: Dict[str, Any] = {}
        carried: Dict[str, Any] = {}

        for config in configs:
            explicit = config.model_dump(exclude_unset=True, exclude={"password"})
            merged_data = deep_merge_dicts(merged_data, explicit)
            for name in ("password",) + CAPABILITY_FIELDS:
                if name in config.model_fields_set:
                    carried[name] = getattr(config, name)

        return LedgerPolicyConfig(**merged_data, **carried)

    @staticmethod
    def load_config(
        config_file: Optional[Union[str, Path]] = None,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        use_env: bool = True,
    ) -> LedgerPolicyConfig:
        """Load configuration from file and/or environment variables."""

        if config_file:
            try:
                base_config = ConfigurationManager.from_file(config_file)
            except FileNotFoundError:
                logger.warning(
                    "Configuration file not found, using defaults",
                    extra={"path": str(config_file)},
                )
                base_config = LedgerPolicyConfig()
        else:
            base_config = LedgerPolicyConfig()

        if use_env:
            return ConfigurationManager.apply_env_overrides(base_config, env_prefix)

        return base_config

    @staticmethod
    def apply_env_overrides(
        config: LedgerPolicyConfig, env_prefix: str = DEFAULT_ENV_PREFIX
    ) -> LedgerPolicyConfig:
        """Return a config with the environment variable overrides applied on top.

        The explicit values of ``config`` and the overrides are merged first and
        validated once, so the rollover bounds are checked against the merged
        result. The password and the injected clock and offloader are carried
        over unless overridden.
        """
        env_overrides = ConfigurationManager._get_env_overrides(env_prefix)
        if not env_overrides:
            return config

        explicit = config.model_dump(exclude_unset=True, exclude={"password"})
        merged = _build(deep_merge_dicts(explicit, env_overrides))

        carried = CAPABILITY_FIELDS
        if "password" not in env_overrides:
            carried = ("password",) + carried
        for name in carried:
            if name in config.model_fields_set:
                setattr(merged, name, getattr(config, name))
        return merged

    @staticmethod
    def _get_env_overrides(prefix: str = DEFAULT_ENV_PREFIX) -> Dict[str, Any]:
        """Get only the environment variable overrides that are actually set."""
        config_data = {}

        for env_var, (config_key, converter) in _env_mappings(prefix).items():
            value = os.getenv(env_var)
            if value is not None:
                try:
                    config_data[config_key] = converter(value)
                except (ValueError, TypeError) as e:
                    raise ValueError(f"Invalid value for {env_var}: {value} ({e})")

        if config_data:
            logger.debug(
                "Environment overrides found",
                extra={"prefix": prefix, "overrides": sanitize_for_logging(config_data)},
            )
        return config_data

    @staticmethod
    def get_default_config() -> LedgerPolicyConfig:
        """
        Get the default configuration.

        Returns:
            LedgerPolicyConfig: 3/2/2 replication, 50000 entries or 100MB per
            ledger, rolled at least every 4 hours, no retention, no offload
        """
        return LedgerPolicyConfig()

    @staticmethod
    def get_high_throughput_config(min_rollover_minutes: int = 10) -> LedgerPolicyConfig:
        """
        Get a configuration for topics with high write rates.

        This configuration uses:
        - Larger ledgers (200000 entries / 1GB)
        - A minimum rollover time so busy ledgers are not rolled constantly
        - Throttled mark-delete calls
        - Read entry timeout of 30 seconds

        Args:
            min_rollover_minutes: Minimum time between rollovers

        Returns:
            LedgerPolicyConfig: High-throughput configuration
        """
        return (
            LedgerPolicyConfig()
            .set_max_entries_per_ledger(200000)
            .set_max_size_per_ledger_mb(1024)
            .set_minimum_rollover_time(min_rollover_minutes, TimeUnit.MINUTES)
            .set_throttle_mark_delete(10.0)
            .set_read_entry_timeout_seconds(30)
        )

    @staticmethod
    def get_long_retention_config(retention_days: int = 7) -> LedgerPolicyConfig:
        """
        Get a configuration that keeps data after it has been consumed.

        Args:
            retention_days: Days to keep data; negative keeps it forever

        Returns:
            LedgerPolicyConfig: Time-retained, size-unlimited configuration
        """
        return (
            LedgerPolicyConfig()
            .set_retention_time(retention_days, TimeUnit.DAYS)
            .set_retention_size_in_mb(-1)
            .set_auto_skip_non_recoverable_data(True)
        )
