"""
Adapter base — the contract between provisioning steps and tools.

Adapters wrap one external collaborator each (the system package
manager, git, uv, npm, the Oh My Zsh installer). They run commands
only through the shared CommandRunner and answer with receipts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from zsh_bootstrap.adapters.shell.command import CommandRunner


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters NEVER raise for a failed command — the failure is captured
    in the Receipt and the caller decides whether it is fatal.
    """

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'packages', 'git', 'uv')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying tool is available. Never raises."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
