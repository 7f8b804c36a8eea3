"""
Git adapter — shallow clones of plugin repositories.

A plugin directory that already exists is left exactly as it is:
no pull, no reset.
"""

from __future__ import annotations

from pathlib import Path

from zsh_bootstrap.adapters.base import Adapter
from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode


class GitAdapter(Adapter):
    """Clone repositories with ``git clone --depth=1``."""

    @property
    def name(self) -> str:
        return "git"

    def is_available(self) -> bool:
        return self.runner.which("git") is not None

    def clone(
        self,
        url: str,
        dest: Path,
        run_mode: RunMode,
        step: str = "git-clone",
    ) -> Receipt:
        """Clone ``url`` into ``dest`` unless ``dest`` already exists."""
        if dest.exists():
            return Receipt.skip(
                step,
                f"{dest.name} already installed",
                adapter=self.name,
                metadata={"path": str(dest)},
            )

        receipt = self.runner.run(
            ["git", "clone", "--depth=1", url, str(dest)],
            step=step,
            run_mode=run_mode,
            timeout=300,
        )
        receipt.metadata.update({"url": url, "path": str(dest)})
        if receipt.ok:
            receipt.output = f"{dest.name} cloned from {url}"
        return receipt
