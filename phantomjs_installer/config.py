"""Configuration management for phantomjs-installer."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from rich.console import Console

from .version import PACKAGE_NAME

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "phantomjs-installer.yaml"
_PATH_FIELDS = ("target_dir", "bin_dir", "manifest_file", "lock_file")


@dataclass
class InstallerConfig:
    """Configuration for phantomjs-installer."""

    package_name: str = PACKAGE_NAME
    target_dir: Path = field(default_factory=lambda: Path("vendor/jakoch/phantomjs"))
    bin_dir: Path | None = None
    manifest_file: Path = field(default_factory=lambda: Path("composer.json"))
    lock_file: Path | None = None  # defaults to the lock file beside the manifest
    timeout: float = 30

    def validate(self) -> None:
        """Validate the configuration."""
        if not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            console.print(
                f"⚠️ [yellow]Invalid timeout {self.timeout!r}, using 30 seconds[/yellow]",
            )
            self.timeout = 30
        if "/" not in self.package_name:
            console.print(
                f"⚠️ [yellow]Package name '{self.package_name}' is not in vendor/name form[/yellow]",
            )

    @classmethod
    def from_dict(cls, config_data: dict) -> InstallerConfig:
        """Create a configuration from a mapping, ignoring unknown keys."""
        known = {f.name for f in dataclasses.fields(cls)}
        for key in config_data:
            if key not in known:
                console.print(
                    f"⚠️ [yellow]Ignoring unknown configuration key '{key}'[/yellow]",
                )
        kwargs = {k: v for k, v in config_data.items() if k in known}

        # Expand paths
        for name in _PATH_FIELDS:
            if isinstance(kwargs.get(name), str):
                kwargs[name] = Path(os.path.expanduser(kwargs[name]))

        config = cls(**kwargs)
        config.validate()
        return config

    @classmethod
    def load_from_file(cls, config_path: str | None = None) -> InstallerConfig:
        """Load configuration from YAML file."""
        if not config_path:
            config_path = DEFAULT_CONFIG_FILE

        try:
            with open(config_path) as file:
                config_data = yaml.safe_load(file)
        except FileNotFoundError:
            logger.debug("Configuration file not found: %s", config_path)
            if config_path != DEFAULT_CONFIG_FILE:
                console.print(
                    f"⚠️ [yellow]Configuration file not found: {config_path}[/yellow]",
                )
            return cls()
        except yaml.YAMLError:
            console.print(
                f"❌ [bold red]Invalid YAML in configuration file: {config_path}[/bold red]",
            )
            return cls()

        if config_data is None:
            return cls()
        if not isinstance(config_data, dict):
            console.print(
                f"❌ [bold red]Configuration file must contain a mapping: {config_path}[/bold red]",
            )
            return cls()
        return cls.from_dict(config_data)
