"""Warden configuration management."""

from __future__ import annotations

import importlib
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from warden.core.registry import PolicyRegistry

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}


class ConfigError(Exception):
    """Raised when the configuration or the policy it names cannot be loaded."""


@dataclass
class Config:
    """Warden configuration."""

    config_path: Path = field(default_factory=lambda: Path.home() / ".warden")
    log_level: str = "INFO"
    # "module:attribute" naming the policy declaration
    policy: str = "warden.policy:ROLES"
    exhaustive: bool = False

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load config from YAML file, env vars, then defaults."""
        config = cls()

        if config_path:
            config.config_path = config_path

        env_path = os.environ.get("WARDEN_HOME")
        if env_path:
            config.config_path = Path(env_path)

        config_file = config.config_file
        if config_file.exists():
            try:
                with open(config_file) as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Cannot read {config_file}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"{config_file} must contain a mapping")
            for key, value in data.items():
                if key == "config_path" or not hasattr(config, key):
                    logger.warning("Ignoring unknown config key: %s", key)
                    continue
                if isinstance(getattr(config, key), bool):
                    if not isinstance(value, bool):
                        value = str(value).lower() in _TRUE
                else:
                    value = str(value)
                setattr(config, key, value)

        env_log = os.environ.get("WARDEN_LOG_LEVEL")
        if env_log:
            config.log_level = env_log

        env_policy = os.environ.get("WARDEN_POLICY")
        if env_policy:
            config.policy = env_policy

        env_exhaustive = os.environ.get("WARDEN_EXHAUSTIVE")
        if env_exhaustive:
            config.exhaustive = env_exhaustive.lower() in _TRUE

        return config

    @property
    def config_file(self) -> Path:
        return self.config_path / "config.yaml"

    def load_declaration(self) -> object:
        """Import the object named by ``policy``."""
        module_name, _, attr = self.policy.partition(":")
        if not module_name or not attr:
            raise ConfigError(f"Policy reference must look like 'module:attribute': {self.policy!r}")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ConfigError(f"Cannot import policy module {module_name!r}: {e}") from e
        try:
            return getattr(module, attr)
        except AttributeError as e:
            raise ConfigError(f"Module {module_name!r} has no attribute {attr!r}") from e

    def build_registry(self) -> PolicyRegistry:
        """Build the registry for the configured policy. Raises PolicyConfigError if invalid."""
        declaration = self.load_declaration()
        logger.debug("Building policy registry from %s", self.policy)
        return PolicyRegistry(declaration, exhaustive=self.exhaustive)  # type: ignore[arg-type]

    def save(self) -> None:
        """Save current config to YAML."""
        self.config_path.mkdir(parents=True, exist_ok=True)
        data = {
            "log_level": self.log_level,
            "policy": self.policy,
            "exhaustive": self.exhaustive,
        }
        with open(self.config_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False)
