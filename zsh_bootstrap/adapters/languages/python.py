"""
uv adapter — installs uv itself and Python CLI tools through it.

Tools are installed with ``uv tool install --python <version> --force``
so they run on a pinned interpreter regardless of the system Python
(thefuck does not work on recent Pythons).
"""

from __future__ import annotations

import logging
from pathlib import Path

from zsh_bootstrap.adapters.base import Adapter
from zsh_bootstrap.adapters.shell.command import CommandRunner
from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode

logger = logging.getLogger(__name__)


class UvAdapter(Adapter):
    """uv toolchain operations.

    Args:
        runner: Shared command runner.
        home: Home directory, used to find a uv that the official
            installer put outside PATH.
        os_name: ``platform.system()`` value.
        installer_url: Official uv installer script.
    """

    def __init__(
        self,
        runner: CommandRunner,
        home: Path,
        os_name: str,
        installer_url: str = "https://astral.sh/uv/install.sh",
    ):
        super().__init__(runner)
        self.home = home
        self.os_name = os_name
        self.installer_url = installer_url

    @property
    def name(self) -> str:
        return "uv"

    def is_available(self) -> bool:
        return self.binary() is not None

    def binary(self) -> str | None:
        """Path to the uv binary: PATH first, then the installer's defaults."""
        found = self.runner.which("uv")
        if found:
            return found
        for candidate in (
            self.home / ".local" / "bin" / "uv",
            self.home / ".cargo" / "bin" / "uv",
        ):
            if candidate.is_file():
                return str(candidate)
        return None

    # ── Operations ──────────────────────────────────────────────

    def ensure_installed(self, run_mode: RunMode, step: str = "uv") -> Receipt:
        """Install uv with Homebrew (macOS) or the official installer."""
        existing = self.binary()
        if existing:
            return Receipt.skip(
                step,
                f"uv already installed: {existing}",
                adapter=self.name,
                metadata={"binary": existing},
            )

        if self.os_name == "Darwin" and self.runner.which("brew"):
            receipt = self.runner.run(["brew", "install", "uv"], step=step, run_mode=run_mode)
            if receipt.planned or (receipt.ok and self.binary()):
                return self._finish(receipt)
            logger.warning("brew install uv did not produce a uv binary, trying the installer")

        receipt = self.runner.run(
            f"curl -LsSf {self.installer_url} | sh",
            step=step,
            run_mode=run_mode,
            timeout=600,
        )
        return self._finish(receipt)

    def _finish(self, receipt: Receipt) -> Receipt:
        if not receipt.ok:
            return receipt
        found = self.binary()
        if found:
            receipt.output = f"uv installed: {found}"
            receipt.metadata["binary"] = found
            return receipt
        return Receipt.failure(
            receipt.step,
            "uv installed but is not on PATH yet (usually ~/.local/bin)",
            adapter=self.name,
            metadata=receipt.metadata,
        )

    def tool_install(
        self,
        tool: str,
        python_version: str,
        run_mode: RunMode,
        step: str | None = None,
    ) -> Receipt:
        """Install ``tool`` pinned to ``python_version``, force-reinstalling."""
        step = step or tool
        uv = self.binary()
        if uv is None:
            if not run_mode.is_dry_run:
                return Receipt.failure(
                    step,
                    f"uv not available; cannot install {tool}",
                    adapter=self.name,
                )
            uv = "uv"

        receipt = self.runner.run(
            [uv, "tool", "install", "--python", python_version, "--force", tool],
            step=step,
            run_mode=run_mode,
            timeout=600,
        )
        if not receipt.ok:
            return receipt

        tool_path = self.tool_binary(uv, tool, run_mode)
        receipt.output = f"{tool} installed: {tool_path or 'location unknown'}"
        receipt.metadata.update({"tool": tool, "python": python_version, "binary": tool_path})
        return receipt

    def tool_binary(self, uv: str, tool: str, run_mode: RunMode) -> str | None:
        """Where uv put ``tool``'s executable (``uv tool dir --bin``)."""
        result = self.runner.run(
            [uv, "tool", "dir", "--bin"],
            step=f"{tool}-bin",
            run_mode=run_mode,
            timeout=30,
        )
        if not result.ok or not result.output:
            return self.runner.which(tool)
        bin_dir = result.output.strip().splitlines()[-1]
        return str(Path(bin_dir) / tool)
