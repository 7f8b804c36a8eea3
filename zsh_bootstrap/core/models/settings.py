"""
Settings model — what gets installed and where.

Defaults reproduce the stock installer: Oh My Zsh under ``~/.oh-my-zsh``,
the fixed plugin set, ``thefuck`` through uv and ``@openai/codex``
through npm. A YAML file can override any field (see config.loader).
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class RunMode(StrEnum):
    """Whether operations mutate the system or only report."""

    APPLY = "apply"
    DRY_RUN = "dry-run"

    @property
    def is_dry_run(self) -> bool:
        return self is RunMode.DRY_RUN


class PluginSource(BaseModel):
    """An external plugin cloned into ``$ZSH_CUSTOM/plugins/<name>``."""

    name: str
    url: str


DEFAULT_PLUGINS: list[str] = [
    "git",
    "thefuck",
    "sudo",
    "zsh-autosuggestions",
    "zsh-completions",
    "zsh-history-substring-search",
    "fast-syntax-highlighting",
    "virtualenv",
]

DEFAULT_PLUGIN_SOURCES: list[PluginSource] = [
    PluginSource(
        name="zsh-autosuggestions",
        url="https://github.com/zsh-users/zsh-autosuggestions",
    ),
    PluginSource(
        name="zsh-completions",
        url="https://github.com/zsh-users/zsh-completions",
    ),
    PluginSource(
        name="zsh-history-substring-search",
        url="https://github.com/zsh-users/zsh-history-substring-search",
    ),
    PluginSource(
        name="fast-syntax-highlighting",
        url="https://github.com/zdharma-continuum/fast-syntax-highlighting",
    ),
]

# Package names per manager for the core prerequisites
DEFAULT_PREREQUISITES: dict[str, list[str]] = {
    "apt": ["git", "zsh", "curl", "python3", "python3-pip"],
    "dnf": ["git", "zsh", "curl", "python3", "python3-pip"],
    "pacman": ["git", "zsh", "curl", "python", "python-pip"],
    "brew": ["git", "zsh", "curl", "python"],
}


class Settings(BaseModel):
    """Installer settings.

    Paths are derived from ``home`` unless set explicitly, so tests
    can point the whole installer at a temporary directory.
    """

    model_config = ConfigDict(extra="forbid")

    home: Path = Field(default_factory=Path.home)
    framework_dir: Path | None = None
    zsh_custom: Path | None = None

    plugins: list[str] = Field(default_factory=lambda: list(DEFAULT_PLUGINS))
    plugin_sources: list[PluginSource] = Field(
        default_factory=lambda: [p.model_copy() for p in DEFAULT_PLUGIN_SOURCES],
    )
    path_entries: list[str] = Field(default_factory=lambda: ["$HOME/.local/bin"])

    prerequisites: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_PREREQUISITES.items()},
    )
    python_version: str = "3.11"
    python_tools: list[str] = Field(default_factory=lambda: ["thefuck"])
    node_packages: list[str] = Field(default_factory=lambda: ["@openai/codex"])

    framework_installer_url: str = (
        "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"
    )
    uv_installer_url: str = "https://astral.sh/uv/install.sh"

    # ── Derived paths ───────────────────────────────────────────

    @property
    def framework_path(self) -> Path:
        """Oh My Zsh installation directory."""
        return self.framework_dir or self.home / ".oh-my-zsh"

    @property
    def custom_path(self) -> Path:
        """``$ZSH_CUSTOM`` directory."""
        return self.zsh_custom or self.framework_path / "custom"

    @property
    def plugins_dir(self) -> Path:
        return self.custom_path / "plugins"

    @property
    def zshrc_path(self) -> Path:
        return self.home / ".zshrc"

    @property
    def backup_path(self) -> Path:
        """One-time copy of ``~/.zshrc`` taken before the first rewrite."""
        return self.home / ".zshrc.pre-ohmyzsh-backup"

    @property
    def template_path(self) -> Path:
        """Framework-provided ``.zshrc`` template."""
        return self.framework_path / "templates" / "zshrc.zsh-template"
