"""Download URL resolution and the archive download service."""

from __future__ import annotations

import logging
import posixpath
import shutil
import tarfile
import tempfile
import zipfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import requests
from rich.console import Console

from .utils import InstallerError, Platform, current_platform
from .version import version_tuple

# Initialize rich console
console = Console()
logger = logging.getLogger(__name__)

# Releases up to 1.9.2 were hosted on Google Code, newer ones on Bitbucket.
LEGACY_HOST = "https://phantomjs.googlecode.com/files"
CURRENT_HOST = "https://bitbucket.org/ariya/phantomjs/downloads"
LAST_LEGACY_VERSION = (1, 9, 2)


class UnsupportedPlatformError(InstallerError):
    """No PhantomJS distribution exists for the detected platform."""


@dataclass
class DistPackage:
    """In-memory description of a distribution archive to install."""

    name: str
    version: str  # normalized
    pretty_version: str
    target_dir: Path
    dist_type: str  # "zip" or "tar"
    dist_url: str
    installation_source: str = "dist"


class DownloadManager(ABC):
    """Fetches a DistPackage and unpacks it into a target directory."""

    @abstractmethod
    def download(self, package: DistPackage, target_dir: Path) -> None:
        """Fetch package.dist_url and fully unpack it into target_dir."""


def get_host(version: str) -> str:
    """Return the base URL hosting the given release."""
    parsed = version_tuple(version)
    if parsed is not None and parsed <= LAST_LEGACY_VERSION:
        return LEGACY_HOST
    return CURRENT_HOST


def get_url(version: str, platform: Platform | None = None) -> str:
    """Return the URL of the PhantomJS distribution for the platform."""
    if platform is None:
        platform = current_platform()

    suffix = None
    if platform.os == "windows":
        suffix = "windows.zip"
    elif platform.os == "linux":
        if platform.bits == 32:
            suffix = "linux-i686.tar.bz2"
        elif platform.bits == 64:
            suffix = "linux-x86_64.tar.bz2"
    elif platform.os == "macos":
        suffix = "macosx.zip"

    if suffix is None:
        msg = (
            "The Installer could not select a PhantomJS package for this OS. "
            "Please install PhantomJS manually into the /bin folder of your project."
        )
        raise UnsupportedPlatformError(msg)

    return f"{get_host(version)}/phantomjs-{version}-{suffix}"


def dist_type_for_url(url: str) -> str:
    """Infer the archive type from the URL's file extension."""
    _, extension = posixpath.splitext(url)
    return "zip" if extension == ".zip" else "tar"


def download_file(url: str, destination: str, timeout: float = 30) -> str:
    """Download a file from a URL to a destination path."""
    console.print(f"📥 [blue]Downloading from {url}[/blue]")
    try:
        response = requests.get(url, stream=True, timeout=timeout)
        response.raise_for_status()

        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                f.write(chunk)

        return destination
    except requests.RequestException as e:
        console.print(f"❌ [bold red]Download failed: {e}[/bold red]")
        msg = f"Failed to download {url}: {e}"
        raise RuntimeError(msg) from e


def extract_archive(archive_path: str, dest_dir: str, dist_type: str) -> None:
    """Extract a zip or tar archive (any compression) to a directory."""
    if dist_type == "zip":
        with zipfile.ZipFile(archive_path) as zip_file:
            zip_file.extractall(path=dest_dir)
    elif dist_type == "tar":
        with tarfile.open(archive_path, mode="r:*") as tar:
            if hasattr(tarfile, "data_filter"):
                tar.extractall(path=dest_dir, filter="data")
            else:
                tar.extractall(path=dest_dir)  # noqa: S202
    else:
        msg = f"Unsupported archive format: {dist_type}"
        raise ValueError(msg)


def _archive_root(extract_dir: Path) -> Path:
    """Return the single top-level directory of an archive, if it has one."""
    entries = list(extract_dir.iterdir())
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return extract_dir


def _log_extracted_files(root: Path) -> None:
    for item in sorted(root.glob("**/*")):
        logger.debug("  - %s", item.relative_to(root))


class ArchiveDownloadManager(DownloadManager):
    """Download manager that fetches over HTTP and unpacks locally."""

    def __init__(self, timeout: float = 30) -> None:
        self.timeout = timeout

    def download(self, package: DistPackage, target_dir: Path) -> None:
        """Download the package archive and unpack it into target_dir.

        The target directory is replaced. When the archive wraps everything
        in one top-level folder, that folder's contents land in target_dir.
        """
        target_dir = Path(target_dir)
        console.print(
            f"📦 [blue]Installing {package.name} ({package.pretty_version})[/blue]",
        )
        temp_dir = Path(tempfile.mkdtemp())
        try:
            archive_name = posixpath.basename(urlparse(package.dist_url).path)
            archive_path = temp_dir / (archive_name or "archive")
            download_file(package.dist_url, str(archive_path), self.timeout)

            extract_dir = temp_dir / "extracted"
            extract_dir.mkdir()
            extract_archive(str(archive_path), str(extract_dir), package.dist_type)
            root = _archive_root(extract_dir)
            logger.debug("Extracted files:")
            _log_extracted_files(root)

            if target_dir.exists():
                shutil.rmtree(target_dir)
            target_dir.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(root), str(target_dir))
            console.print(f"📦 [green]Archive extracted to {target_dir}[/green]")
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)
