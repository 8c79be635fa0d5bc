"""Resolve the PhantomJS version requested by a project."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .utils import InstallerError

if TYPE_CHECKING:
    from .project import Project, RootPackage

logger = logging.getLogger(__name__)

PACKAGE_NAME = "jakoch/phantomjs-installer"
DEV_MASTER = "dev-master"
DEV_MASTER_FALLBACK = "2.0.0"

# "dev-master#<commit-ref> as 1.9.8": take the last x.y.z after the ref
_COMMIT_REF_RE = re.compile(r"dev-master#.*(?<![\d.])(\d+\.\d+\.\d+)", re.IGNORECASE)
# "1.9.8-2": drop the patch level
_PATCH_LEVEL_RE = re.compile(r"(\d+\.\d+\.\d+)(?:-\d+)?")
_NUMERIC_RE = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:\.(\d+))?$", re.IGNORECASE)


class VersionNotFoundError(InstallerError):
    """The project does not declare a version of the installer package."""


def get_required_version(
    root_package: RootPackage,
    package_name: str = PACKAGE_NAME,
) -> str:
    """Return the constraint for package_name from require or require-dev."""
    for required_packages in (root_package.requires, root_package.dev_requires):
        if package_name in required_packages:
            return required_packages[package_name]
    msg = f"Can not determine required version of {package_name}"
    raise VersionNotFoundError(msg)


def get_version(project: Project, package_name: str = PACKAGE_NAME) -> str:
    """Return the PhantomJS version number.

    The locally resolved packages are searched first, then the root
    package's requirements. Decorated versions are reduced to ``x.y.z``:

    - ``dev-master`` falls back to a fixed release,
    - ``dev-master#<commit-ref> as 1.9.8`` yields the aliased version,
    - ``1.9.8-2`` (a tag with a patch level) yields ``1.9.8``.
    """
    version = None
    for package in project.local_packages:
        if package.name == package_name:
            version = package.pretty_version

    if version is None:
        version = get_required_version(project.root_package, package_name)
    logger.debug("Requested version of %s: %s", package_name, version)

    if version == DEV_MASTER:
        return DEV_MASTER_FALLBACK

    match = _COMMIT_REF_RE.search(version)
    if match:
        return match.group(1)

    match = _PATCH_LEVEL_RE.search(version)
    if match:
        return match.group(1)

    return version


def normalize_version(version: str) -> str:
    """Normalize a version the way the host's package model expects it.

    Numeric versions are padded to four components (``2.1.1`` becomes
    ``2.1.1.0``), ``dev-*`` branches are kept as they are.
    """
    version = version.strip()
    if version.lower().startswith("dev-"):
        return version

    match = _NUMERIC_RE.match(version)
    if not match:
        msg = f"Invalid version string {version!r}"
        raise ValueError(msg)
    return ".".join(part or "0" for part in match.groups())


def version_tuple(version: str) -> tuple[int, int, int] | None:
    """Return (major, minor, patch) for an ``x.y.z`` version, else None."""
    match = re.fullmatch(r"(\d+)\.(\d+)\.(\d+)", version)
    if not match:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch
