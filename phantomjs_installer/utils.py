"""Utility functions for phantomjs-installer."""

from __future__ import annotations

import logging
import platform as _platform
import struct
from typing import NamedTuple

from rich.console import Console
from rich.logging import RichHandler

# Initialize rich console
console = Console()
logger = logging.getLogger(__name__)


class InstallerError(RuntimeError):
    """Base class for errors raised by the installer itself."""


class Platform(NamedTuple):
    """Operating system family and bit width of a host."""

    os: str
    bits: int


def setup_logging(verbose: bool = False) -> None:  # noqa: FBT001, FBT002
    """Configure logging level based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def get_os(uname: str | None = None) -> str:
    """Return the operating system family, e.g. macos, windows, linux.

    Matching is a case-insensitive substring test on a uname-style
    identification string, so ``darwin`` must be checked before ``win``.
    """
    if uname is None:
        uname = " ".join(_platform.uname())
    uname = uname.lower()

    if "darwin" in uname:
        return "macos"
    if "win" in uname:
        return "windows"
    if "linux" in uname:
        return "linux"
    return "unknown"


def get_bit_size() -> int:
    """Return the pointer width of the running interpreter, 32 or 64."""
    return struct.calcsize("P") * 8


def current_platform() -> Platform:
    """Detect the current platform and bit width."""
    detected = Platform(get_os(), get_bit_size())
    logger.debug("Detected platform %s/%s", detected.os, detected.bits)
    return detected
