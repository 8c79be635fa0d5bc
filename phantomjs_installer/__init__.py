"""phantomjs-installer - PhantomJS binary installer.

Resolves the PhantomJS release a project asks for, downloads the archive
built for the current operating system and architecture, and installs the
``phantomjs`` executable into the project's bin directory.
"""

from __future__ import annotations

__version__ = "0.1.0"

from . import cli, config, download, installer, project, utils, version
from .cli import main

# Re-export commonly used functions
from .config import InstallerConfig
from .download import (
    ArchiveDownloadManager,
    DistPackage,
    DownloadManager,
    UnsupportedPlatformError,
    get_url,
)
from .installer import copy_binary_to_bin_folder, install_phantomjs
from .project import Package, Project, RootPackage, load_project
from .utils import InstallerError, Platform, current_platform, get_bit_size, get_os
from .version import VersionNotFoundError, get_required_version, get_version

__all__ = [
    "ArchiveDownloadManager",
    "DistPackage",
    "DownloadManager",
    "InstallerConfig",
    "InstallerError",
    "Package",
    "Platform",
    "Project",
    "RootPackage",
    "UnsupportedPlatformError",
    "VersionNotFoundError",
    "cli",
    "config",
    "copy_binary_to_bin_folder",
    "current_platform",
    "download",
    "get_bit_size",
    "get_os",
    "get_required_version",
    "get_url",
    "get_version",
    "install_phantomjs",
    "installer",
    "load_project",
    "main",
    "project",
    "utils",
    "version",
]
