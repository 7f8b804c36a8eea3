"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from zsh_bootstrap.core.models import Receipt, RunMode, Settings
"""

from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import PluginSource, RunMode, Settings
from zsh_bootstrap.core.models.zshrc import ConfigFile, LegacyFragment, ToolAliasHook

__all__ = [
    "ConfigFile",
    "LegacyFragment",
    "PluginSource",
    "Receipt",
    "RunMode",
    "Settings",
    "ToolAliasHook",
]
