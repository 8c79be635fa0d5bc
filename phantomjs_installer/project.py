"""In-memory model of the host project and a loader for its manifest files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from .download import ArchiveDownloadManager, DownloadManager

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_BIN_DIR = "vendor/bin"


@dataclass
class Package:
    """A package already resolved by the host (an entry of the lock file)."""

    name: str
    pretty_version: str


@dataclass
class RootPackage:
    """The project's own package with its declared requirements."""

    name: str = "__root__"
    requires: dict[str, str] = field(default_factory=dict)
    dev_requires: dict[str, str] = field(default_factory=dict)


@dataclass
class Project:
    """Everything the installer needs to know about the host project."""

    root_package: RootPackage
    local_packages: list[Package] = field(default_factory=list)
    bin_dir: Path = field(default_factory=lambda: Path(DEFAULT_BIN_DIR))
    download_manager: DownloadManager | None = None

    def __post_init__(self) -> None:
        if self.download_manager is None:
            self.download_manager = ArchiveDownloadManager()


def _read_json(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as file:
            data = json.load(file)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise ValueError(msg) from e
    if not isinstance(data, dict):
        msg = f"Expected a JSON object in {path}"
        raise ValueError(msg)
    return data


def _list_of(data: dict[str, Any], key: str, path: Path) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        console.print(f"⚠️ [yellow]Ignoring '{key}' in {path}: expected a list[/yellow]")
        return []
    return value


def _dict_of(data: dict[str, Any], key: str, path: Path) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        console.print(f"⚠️ [yellow]Ignoring '{key}' in {path}: expected an object[/yellow]")
        return {}
    return value


def _locked_packages(lock_file: Path) -> list[Package]:
    """Read resolved packages from the lock file, if there is one."""
    if not lock_file.exists():
        logger.debug("No lock file at %s", lock_file)
        return []

    data = _read_json(lock_file)
    packages = []
    entries = [
        *_list_of(data, "packages", lock_file),
        *_list_of(data, "packages-dev", lock_file),
    ]
    for entry in entries:
        if not isinstance(entry, dict) or "name" not in entry or "version" not in entry:
            console.print(
                f"⚠️ [yellow]Skipping incomplete lock file entry: {escape(repr(entry))}[/yellow]",
            )
            continue
        packages.append(Package(entry["name"], str(entry["version"])))
    return packages


def load_project(
    manifest_file: str | Path,
    lock_file: str | Path | None = None,
    bin_dir: str | Path | None = None,
    download_manager: DownloadManager | None = None,
) -> Project:
    """Build a Project from a manifest (``composer.json``) and its lock file."""
    manifest_file = Path(manifest_file)
    manifest = _read_json(manifest_file)
    base_dir = manifest_file.parent

    root_package = RootPackage(
        name=manifest.get("name", "__root__"),
        requires=dict(_dict_of(manifest, "require", manifest_file)),
        dev_requires=dict(_dict_of(manifest, "require-dev", manifest_file)),
    )

    if bin_dir is None:
        config = _dict_of(manifest, "config", manifest_file)
        bin_dir = config.get("bin-dir") or DEFAULT_BIN_DIR
    bin_dir = Path(bin_dir).expanduser()
    if not bin_dir.is_absolute():
        bin_dir = base_dir / bin_dir

    if lock_file is None:
        lock_file = manifest_file.with_suffix(".lock")
    local_packages = _locked_packages(Path(lock_file))

    logger.debug(
        "Loaded project %s with %d locked packages",
        root_package.name,
        len(local_packages),
    )
    return Project(
        root_package=root_package,
        local_packages=local_packages,
        bin_dir=bin_dir,
        download_manager=download_manager,
    )
