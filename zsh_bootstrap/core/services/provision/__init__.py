"""
Provisioning — OS detection, install steps and the run orchestrator.
"""

from zsh_bootstrap.core.services.provision.orchestrator import (
    InstallReport,
    ProvisionError,
    run_install,
)

__all__ = ["InstallReport", "ProvisionError", "run_install"]
