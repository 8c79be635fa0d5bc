"""Command-line interface for phantomjs-installer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from . import __version__
from .config import InstallerConfig
from .download import ArchiveDownloadManager, get_url
from .installer import install_phantomjs
from .project import Project, load_project
from .utils import Platform, current_platform, setup_logging
from .version import get_version

# Initialize rich console
console = Console()
logger = logging.getLogger(__name__)

OS_CHOICES = ["windows", "macos", "linux"]


def _load_project(args: argparse.Namespace, config: InstallerConfig) -> Project:
    return load_project(
        config.manifest_file,
        lock_file=config.lock_file,
        bin_dir=args.bin_dir or config.bin_dir,
        download_manager=ArchiveDownloadManager(timeout=config.timeout),
    )


def install(args: argparse.Namespace, config: InstallerConfig) -> None:
    """Install PhantomJS into the project's bin directory."""
    project = _load_project(args, config)
    target = install_phantomjs(
        project,
        target_dir=config.target_dir,
        package_name=config.package_name,
    )
    if target is not None:
        console.print(f"🎉 [green]PhantomJS installed to {target}[/green]")


def show_url(args: argparse.Namespace, config: InstallerConfig) -> None:
    """Print the download URL for a version and platform."""
    version = args.release
    if not version:
        version = get_version(_load_project(args, config), config.package_name)

    detected = current_platform()
    platform = Platform(args.os or detected.os, args.bits or detected.bits)
    print(get_url(version, platform))


def show_platform(_args: argparse.Namespace, _config: InstallerConfig) -> None:
    """Print the detected operating system and bit width."""
    platform = current_platform()
    print(f"{platform.os} {platform.bits}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="phantomjs-installer",
        description="phantomjs-installer - Install the PhantomJS binary into your project",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--config-file",
        type=str,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--bin-dir",
        type=Path,
        help="Directory to copy the binary to (overrides the manifest)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # install command
    install_parser = subparsers.add_parser("install", help="Download and install PhantomJS")
    install_parser.set_defaults(func=install)

    # url command
    url_parser = subparsers.add_parser("url", help="Print the download URL")
    url_parser.add_argument(
        "release",
        nargs="?",
        help="PhantomJS version (resolved from the project if not specified)",
    )
    url_parser.add_argument("--os", choices=OS_CHOICES, help="Operating system")
    url_parser.add_argument("--bits", type=int, choices=[32, 64], help="Bit width")
    url_parser.set_defaults(func=show_url)

    # platform command
    platform_parser = subparsers.add_parser("platform", help="Print the detected platform")
    platform_parser.set_defaults(func=show_platform)

    # version command
    version_parser = subparsers.add_parser("version", help="Print version information")
    version_parser.set_defaults(
        func=lambda _, __: console.print(
            f"[yellow]phantomjs-installer[/] [bold]v{__version__}[/]",
        ),
    )

    return parser


def main() -> None:
    """Main function to parse arguments and execute commands."""
    parser = create_parser()
    args = parser.parse_args()

    # Setup logging
    setup_logging(args.verbose)

    try:
        config = InstallerConfig.load_from_file(args.config_file)

        # Execute command or show help
        if hasattr(args, "func"):
            args.func(args, config)
        else:
            parser.print_help()

    except Exception as e:
        console.print(f"❌ [bold red]Error: {e!s}[/bold red]")
        if args.verbose:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
