"""
Detection — read-only checks of the host OS.

Never writes anything. Used once at the start of a run to pick the
package manager and to label the run.
"""

from __future__ import annotations

import platform


def detect_os() -> str:
    """``platform.system()``: "Linux", "Darwin", ..."""
    return platform.system()


def is_macos(os_name: str) -> bool:
    return os_name == "Darwin"


def detect_distro() -> str | None:
    """Distro ID from ``/etc/os-release`` (``ubuntu``, ``fedora``, ...)."""
    try:
        with open("/etc/os-release", encoding="utf-8") as f:
            for line in f:
                if line.startswith("ID="):
                    return line.strip().split("=", 1)[1].strip('"')
    except OSError:
        return None
    return None


def describe_os(os_name: str) -> str:
    """Label for the "Detecting OS" line, e.g. ``Linux (ubuntu)``."""
    if is_macos(os_name):
        release = platform.mac_ver()[0]
        return f"macOS {release}".strip()
    distro = detect_distro() if os_name == "Linux" else None
    return f"{os_name} ({distro})" if distro else os_name
