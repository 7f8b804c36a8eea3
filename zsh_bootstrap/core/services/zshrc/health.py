"""Health check for ``~/.zshrc``."""

from __future__ import annotations

from pathlib import Path

from zsh_bootstrap.core.models.zshrc import ConfigFile
from zsh_bootstrap.core.services.zshrc import is_anchor


def is_broken_or_missing(path: Path) -> bool:
    """True if the file is absent, empty, or never sources Oh My Zsh."""
    zshrc = ConfigFile.load(path)
    if not zshrc.text.strip():
        return True
    return not any(is_anchor(line) for line in zshrc.lines)
