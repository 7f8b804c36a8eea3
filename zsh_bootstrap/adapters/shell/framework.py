"""
Oh My Zsh adapter — runs the upstream bootstrap script once.

The script is told not to start zsh, not to change the login shell,
and not to replace an existing ``~/.zshrc``; the rewriter owns that
file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from zsh_bootstrap.adapters.base import Adapter
from zsh_bootstrap.adapters.shell.command import CommandRunner
from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode

logger = logging.getLogger(__name__)


class FrameworkInstaller(Adapter):
    """Install Oh My Zsh into ``framework_dir`` if it is absent."""

    def __init__(self, runner: CommandRunner, framework_dir: Path, installer_url: str):
        super().__init__(runner)
        self.framework_dir = framework_dir
        self.installer_url = installer_url

    @property
    def name(self) -> str:
        return "oh-my-zsh"

    def is_available(self) -> bool:
        return self.runner.which("curl") is not None

    def installed(self) -> bool:
        return self.framework_dir.is_dir()

    def install(self, run_mode: RunMode, step: str = "oh-my-zsh") -> Receipt:
        if self.installed():
            return Receipt.skip(
                step,
                "Oh My Zsh already installed",
                adapter=self.name,
                metadata={"path": str(self.framework_dir)},
            )

        if not self.is_available():
            if not run_mode.is_dry_run:
                return Receipt.failure(
                    step,
                    "curl not found; cannot download the Oh My Zsh installer",
                    adapter=self.name,
                    exit_code=127,
                )
            logger.warning("curl not found; the Oh My Zsh install would fail")

        receipt = self.runner.run(
            f'sh -c "$(curl -fsSL {self.installer_url})"',
            step=step,
            run_mode=run_mode,
            env_overrides={
                "RUNZSH": "no",
                "CHSH": "no",
                "KEEP_ZSHRC": "yes",
                "ZSH": str(self.framework_dir),
            },
            timeout=600,
        )
        if receipt.ok:
            receipt.output = f"Oh My Zsh installed in {self.framework_dir}"
        return receipt
