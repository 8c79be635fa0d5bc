"""Install the PhantomJS binary into a project's bin directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

from .download import DistPackage, dist_type_for_url, get_url
from .utils import Platform, current_platform
from .version import PACKAGE_NAME, get_version, normalize_version

if TYPE_CHECKING:
    from .project import Project

console = Console()
logger = logging.getLogger(__name__)

PHANTOMJS_NAME = "PhantomJS"
TARGET_DIR = Path("vendor/jakoch/phantomjs")
BINARY_NAME = "phantomjs"


def install_phantomjs(
    project: Project,
    platform: Platform | None = None,
    target_dir: Path = TARGET_DIR,
    package_name: str = PACKAGE_NAME,
) -> Path | None:
    """Download PhantomJS for the platform and copy it to the bin folder."""
    if platform is None:
        platform = current_platform()

    version = get_version(project, package_name)
    url = get_url(version, platform)

    package = DistPackage(
        name=PHANTOMJS_NAME,
        version=normalize_version(version),
        pretty_version=version,
        target_dir=Path(target_dir),
        dist_type=dist_type_for_url(url),
        dist_url=url,
    )
    logger.debug("Prepared %s", package)

    project.download_manager.download(package, Path(target_dir))

    return copy_binary_to_bin_folder(project.bin_dir, platform, target_dir)


def binary_source(platform: Platform, target_dir: Path) -> Path:
    """Return the location of the executable inside the unpacked archive."""
    target_dir = Path(target_dir)
    if platform.os == "windows":
        # releases up to 1.9.8 ship the exe in the archive root
        legacy = target_dir / f"{BINARY_NAME}.exe"
        if legacy.is_file():
            return legacy
        return target_dir / "bin" / f"{BINARY_NAME}.exe"
    return target_dir / "bin" / BINARY_NAME


def copy_binary_to_bin_folder(
    bin_dir: Path,
    platform: Platform,
    target_dir: Path = TARGET_DIR,
) -> Path | None:
    """Copy the PhantomJS binary from target_dir into bin_dir."""
    bin_dir = Path(bin_dir)
    bin_dir.mkdir(parents=True, exist_ok=True)

    if platform.os == "unknown":
        console.print(
            "⚠️ [yellow]Unknown operating system, PhantomJS was not copied[/yellow]",
        )
        return None

    source = binary_source(platform, target_dir)
    target = bin_dir / BINARY_NAME
    if platform.os == "windows":
        target = target.with_suffix(".exe")

    shutil.copy(source, target)
    if platform.os != "windows":
        target.chmod(0o755)

    console.print(f"✅ [green]Copied binary to {target}[/green]")
    return target
