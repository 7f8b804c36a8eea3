"""Language adapters — uv (Python tools) and npm."""

from zsh_bootstrap.adapters.languages.node import NpmAdapter
from zsh_bootstrap.adapters.languages.python import UvAdapter

__all__ = ["NpmAdapter", "UvAdapter"]
