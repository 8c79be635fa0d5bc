"""Configuration for pytest fixtures used in phantomjs-installer tests."""

from __future__ import annotations

import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Callable

import pytest

from phantomjs_installer.download import DistPackage, DownloadManager
from phantomjs_installer.project import Package, Project, RootPackage


@pytest.fixture
def create_dummy_archive() -> Callable:
    r"""Create an archive file with binary files for testing.

    Returns a function that creates archive files with specified binaries.

    Usage:
        archive_path = create_dummy_archive(
            dest_path=tmp_path / "phantomjs.tar.bz2",
            binary_names=["bin/phantomjs", "README.md"],
            archive_type="tar.bz2",
            nested_dir="phantomjs-2.1.1-linux-x86_64",
        )
    """

    def _create_archive(
        dest_path: Path,
        binary_names: str | list[str],
        archive_type: str = "tar.bz2",
        binary_content: str = "#!/bin/sh\necho phantomjs\n",
        nested_dir: str | None = None,
    ) -> Path:
        if isinstance(binary_names, str):
            binary_names = [binary_names]

        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_path = Path(tmp_dir)

            # Create nested directory if requested
            root_dir = tmp_path / nested_dir if nested_dir else tmp_path
            root_dir.mkdir(exist_ok=True, parents=True)

            created_files = []
            for binary in binary_names:
                bin_file = root_dir / binary
                bin_file.parent.mkdir(parents=True, exist_ok=True)
                bin_file.write_text(binary_content)
                bin_file.chmod(0o644)
                created_files.append(bin_file)

            # Create the archive
            if archive_type in ("tar.gz", "tar.bz2"):
                mode = "w:gz" if archive_type == "tar.gz" else "w:bz2"
                with tarfile.open(dest_path, mode) as tar:
                    for file_path in created_files:
                        archive_path = file_path.relative_to(tmp_path)
                        tar.add(file_path, arcname=str(archive_path))
            elif archive_type == "zip":
                with zipfile.ZipFile(dest_path, "w") as zipf:
                    for file_path in created_files:
                        archive_path = file_path.relative_to(tmp_path)
                        zipf.write(file_path, arcname=str(archive_path))
            else:  # pragma: no cover
                msg = f"Unsupported archive type: {archive_type}"
                raise ValueError(msg)

            return dest_path

    return _create_archive


class FakeDownloadManager(DownloadManager):
    """Records requests and lays out files as an unpacked archive would."""

    def __init__(self, files: list[str], content: str = "phantomjs-binary") -> None:
        self.files = files
        self.content = content
        self.calls: list[tuple[DistPackage, Path]] = []

    def download(self, package: DistPackage, target_dir: Path) -> None:
        self.calls.append((package, target_dir))
        if target_dir.exists():
            shutil.rmtree(target_dir)
        for name in self.files:
            path = target_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.content)


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Project]:
    """Return a factory for Projects whose bin dir lives in tmp_path."""

    def _make_project(
        requires: dict[str, str] | None = None,
        dev_requires: dict[str, str] | None = None,
        local_packages: list[Package] | None = None,
        download_manager: DownloadManager | None = None,
    ) -> Project:
        return Project(
            root_package=RootPackage(
                name="acme/app",
                requires=requires or {},
                dev_requires=dev_requires or {},
            ),
            local_packages=local_packages or [],
            bin_dir=tmp_path / "bin",
            download_manager=download_manager or FakeDownloadManager([]),
        )

    return _make_project
