"""
Provisioning steps — one function per install concern.

Each step takes a ProvisionContext and returns receipts. Steps never
decide fatality; the orchestrator does.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from zsh_bootstrap.adapters.languages.node import NpmAdapter
from zsh_bootstrap.adapters.languages.python import UvAdapter
from zsh_bootstrap.adapters.packages.system import SystemPackageAdapter
from zsh_bootstrap.adapters.shell.command import CommandRunner
from zsh_bootstrap.adapters.shell.framework import FrameworkInstaller
from zsh_bootstrap.adapters.vcs.git import GitAdapter
from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode, Settings

logger = logging.getLogger(__name__)


@dataclass
class ProvisionContext:
    """Everything a step needs: settings, run mode and the runner."""

    settings: Settings
    run_mode: RunMode
    runner: CommandRunner
    os_name: str

    def packages(self) -> SystemPackageAdapter:
        return SystemPackageAdapter(self.runner, self.os_name)

    def framework(self) -> FrameworkInstaller:
        return FrameworkInstaller(
            self.runner,
            self.settings.framework_path,
            self.settings.framework_installer_url,
        )

    def git(self) -> GitAdapter:
        return GitAdapter(self.runner)

    def uv(self) -> UvAdapter:
        return UvAdapter(
            self.runner,
            self.settings.home,
            self.os_name,
            self.settings.uv_installer_url,
        )

    def npm(self) -> NpmAdapter:
        return NpmAdapter(self.runner)


def install_prerequisites(ctx: ProvisionContext) -> Receipt:
    """git, zsh, curl and Python through the system package manager."""
    adapter = ctx.packages()
    if adapter.manager is None:
        return adapter.install([], ctx.run_mode, step="prerequisites")

    packages = ctx.settings.prerequisites.get(adapter.manager, [])
    logger.info("Installing prerequisites with %s: %s", adapter.manager, packages)
    return adapter.install(packages, ctx.run_mode, step="prerequisites")


def install_framework(ctx: ProvisionContext) -> Receipt:
    return ctx.framework().install(ctx.run_mode)


def install_plugins(ctx: ProvisionContext) -> list[Receipt]:
    """Clone every external plugin that is not already present."""
    plugins_dir = ctx.settings.plugins_dir
    if not ctx.run_mode.is_dry_run:
        try:
            plugins_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return [Receipt.failure("plugins", f"Cannot create {plugins_dir}: {e}")]

    git = ctx.git()
    return [
        git.clone(
            source.url,
            plugins_dir / source.name,
            ctx.run_mode,
            step=f"plugin:{source.name}",
        )
        for source in ctx.settings.plugin_sources
    ]


def install_uv(ctx: ProvisionContext) -> Receipt:
    return ctx.uv().ensure_installed(ctx.run_mode)


def install_python_tools(ctx: ProvisionContext) -> list[Receipt]:
    """``uv tool install`` each configured tool (thefuck by default)."""
    uv = ctx.uv()
    return [
        uv.tool_install(tool, ctx.settings.python_version, ctx.run_mode)
        for tool in ctx.settings.python_tools
    ]


def install_node_packages(ctx: ProvisionContext) -> list[Receipt]:
    """``npm install -g`` each configured package (codex by default)."""
    npm = ctx.npm()
    return [npm.install_global(pkg, ctx.run_mode) for pkg in ctx.settings.node_packages]
