"""
System package adapter — apt, dnf, pacman and Homebrew.

Picks the first supported manager found on PATH (Homebrew on macOS)
and installs a list of packages with it. Package names are passed
through as-is; per-manager naming lives in Settings.prerequisites.
"""

from __future__ import annotations

import logging
import os

from zsh_bootstrap.adapters.base import Adapter
from zsh_bootstrap.adapters.shell.command import CommandRunner
from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode

logger = logging.getLogger(__name__)

LINUX_MANAGERS: tuple[str, ...] = ("apt", "dnf", "pacman")


class SystemPackageAdapter(Adapter):
    """OS package manager operations.

    Args:
        runner: Shared command runner.
        os_name: ``platform.system()`` value ("Linux", "Darwin").
        manager: Force a manager instead of detecting one.
    """

    def __init__(
        self,
        runner: CommandRunner,
        os_name: str,
        manager: str | None = None,
    ):
        super().__init__(runner)
        self.os_name = os_name
        self._manager = manager if manager is not None else self._detect_manager()

    @property
    def name(self) -> str:
        return "packages"

    @property
    def manager(self) -> str | None:
        """The detected package manager, or None."""
        return self._manager

    def is_available(self) -> bool:
        return self._manager is not None

    def _detect_manager(self) -> str | None:
        if self.os_name == "Darwin":
            return "brew" if self.runner.which("brew") else None
        for candidate in LINUX_MANAGERS:
            if self.runner.which(candidate):
                return candidate
        return None

    def _sudo(self) -> list[str]:
        if self._manager == "brew" or os.geteuid() == 0:
            return []
        return ["sudo"]

    def install_commands(self, packages: list[str]) -> list[list[str]]:
        """Commands that install ``packages`` with the detected manager."""
        sudo = self._sudo()
        if self._manager == "apt":
            return [
                sudo + ["apt", "update"],
                sudo + ["apt", "install", "-y", *packages],
            ]
        if self._manager == "dnf":
            return [sudo + ["dnf", "install", "-y", *packages]]
        if self._manager == "pacman":
            return [sudo + ["pacman", "-Sy", "--noconfirm", *packages]]
        if self._manager == "brew":
            return [["brew", "install", *packages]]
        return []

    def install(
        self,
        packages: list[str],
        run_mode: RunMode,
        step: str = "packages",
    ) -> Receipt:
        """Install ``packages``. Stops at the first failing command."""
        if self._manager is None:
            return Receipt.skip(
                step,
                "No supported package manager detected. Assuming dependencies exist.",
                adapter=self.name,
                metadata={"warning": True},
            )
        if not packages:
            return Receipt.skip(step, f"Nothing to install with {self._manager}", adapter=self.name)

        planned: list[str] = []
        last: Receipt | None = None
        for cmd in self.install_commands(packages):
            last = self.runner.run(cmd, step=step, run_mode=run_mode, timeout=900)
            if last.failed:
                logger.warning("%s failed: %s", " ".join(cmd), last.error)
                return last
            if last.planned:
                planned.append(last.output)

        if run_mode.is_dry_run:
            return Receipt.plan(
                step,
                "; ".join(planned),
                adapter=self.name,
                metadata={"manager": self._manager, "packages": packages},
            )
        return Receipt.success(
            step,
            f"Installed {' '.join(packages)} ({self._manager})",
            adapter=self.name,
            exit_code=last.exit_code if last else 0,
            metadata={"manager": self._manager, "packages": packages},
        )
