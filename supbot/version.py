"""Version information for the ``sup`` command."""

from __future__ import annotations

import argparse
import platform
import sys

VERSION = "0.6.0"

# Filled in by release builds; left as "unknown" otherwise.
_BUILD_DATE = ""

_ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
}


def build_date() -> str:
    """Return the recorded build date, or ``unknown``."""
    return _BUILD_DATE or "unknown"


def _os_arch() -> str:
    system = "windows" if sys.platform.startswith("win") else sys.platform
    machine = platform.machine()
    return f"{system}/{_ARCH_NAMES.get(machine.lower(), machine.lower())}"


def version_text() -> str:
    """Return the multi-line version report."""
    return "\n".join(
        [
            f"sup version {VERSION}",
            f"Build date: {build_date()}",
            f"Python version: {platform.python_version()}",
            f"OS/Arch: {_os_arch()}",
        ]
    )


def main(argv=None) -> int:
    """Print version information."""
    argparse.ArgumentParser(
        prog="sup version", description="Show version information"
    ).parse_args(argv)
    print(version_text())
    return 0