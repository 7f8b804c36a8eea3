"""
npm adapter — global Node package installs.

A missing npm is not an error: the install is skipped.
"""

from __future__ import annotations

from zsh_bootstrap.adapters.base import Adapter
from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode


class NpmAdapter(Adapter):
    """``npm install -g`` operations."""

    @property
    def name(self) -> str:
        return "npm"

    def is_available(self) -> bool:
        return self.runner.which("npm") is not None

    def install_global(
        self,
        package: str,
        run_mode: RunMode,
        step: str | None = None,
    ) -> Receipt:
        step = step or package
        if not self.is_available():
            return Receipt.skip(
                step,
                f"npm not found, skipping {package}",
                adapter=self.name,
            )

        receipt = self.runner.run(
            ["npm", "install", "-g", package],
            step=step,
            run_mode=run_mode,
            timeout=600,
        )
        if receipt.ok:
            receipt.output = f"{package} installed globally"
        return receipt
