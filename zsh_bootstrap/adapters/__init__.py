"""Adapters — bindings for the external collaborators.

Public re-exports for convenient access.
"""

from zsh_bootstrap.adapters.base import Adapter
from zsh_bootstrap.adapters.mock import MockRunner
from zsh_bootstrap.adapters.shell.command import CommandRunner

__all__ = [
    "Adapter",
    "CommandRunner",
    "MockRunner",
]
