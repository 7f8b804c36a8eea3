"""
Install orchestrator — runs the whole provisioning flow in order.

    detect OS → [restore ~/.zshrc] → prerequisites → Oh My Zsh
      → plugins → uv → Python tools → Node packages → rewrite ~/.zshrc

Failure policy:
    - prerequisites and Oh My Zsh are fatal (``ProvisionError``), except
      on Homebrew where a failed install is only a warning;
    - plugins, uv, Python tools and Node packages are best-effort:
      a failure is recorded as a warning and the run continues;
    - any filesystem error while restoring or rewriting ``~/.zshrc``
      propagates as ``ZshrcError``.

Every receipt is handed to ``on_receipt`` as soon as it exists, so the
CLI can print progress while the run is still going.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from zsh_bootstrap.adapters.shell.command import CommandRunner
from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode, Settings
from zsh_bootstrap.core.services.provision import steps
from zsh_bootstrap.core.services.provision.detection import describe_os, detect_os
from zsh_bootstrap.core.services.zshrc.restore import restore_zshrc
from zsh_bootstrap.core.services.zshrc.rewrite import RewriteResult, rewrite_zshrc

logger = logging.getLogger(__name__)

ReceiptCallback = Callable[[Receipt], None]


class ProvisionError(Exception):
    """A fatal provisioning step failed.

    ``exit_code`` is the failing command's exit code (1 if it had none).
    """

    def __init__(self, receipt: Receipt):
        self.receipt = receipt
        self.exit_code = receipt.exit_code or 1
        super().__init__(f"{receipt.step} failed: {receipt.error or 'unknown error'}")


@dataclass
class InstallReport:
    """Everything a run produced, in execution order."""

    run_mode: RunMode = RunMode.APPLY
    os_name: str = ""
    receipts: list[Receipt] = field(default_factory=list)
    rewrite: RewriteResult | None = None

    @property
    def warnings(self) -> list[Receipt]:
        """Receipts of best-effort steps that failed."""
        return [r for r in self.receipts if r.failed]

    @property
    def ok(self) -> bool:
        return not self.warnings

    def to_dict(self) -> dict:
        return {
            "run_mode": str(self.run_mode),
            "os": self.os_name,
            "receipts": [r.model_dump() for r in self.receipts],
            "warnings": [r.step for r in self.warnings],
            "rewrite": self.rewrite.to_dict() if self.rewrite else None,
        }


def run_install(
    settings: Settings,
    run_mode: RunMode,
    *,
    restore: bool = False,
    skip_install: bool = False,
    runner: CommandRunner | None = None,
    on_receipt: ReceiptCallback | None = None,
    os_name: str | None = None,
) -> InstallReport:
    """Run the installer.

    Args:
        settings: Installer settings.
        run_mode: APPLY or DRY_RUN, passed to every step.
        restore: Restore a broken or missing ``~/.zshrc`` first.
        skip_install: Only (restore and) rewrite ``~/.zshrc``.
        runner: Command runner (tests pass a MockRunner).
        on_receipt: Called with each receipt as it is produced.
        os_name: Override OS detection.

    Raises:
        ProvisionError: A fatal step failed.
        ZshrcError: Restoring or rewriting ``~/.zshrc`` failed.
    """
    runner = runner or CommandRunner()
    os_name = os_name or detect_os()
    report = InstallReport(run_mode=run_mode, os_name=os_name)

    def record(receipt: Receipt) -> Receipt:
        report.receipts.append(receipt)
        if on_receipt is not None:
            on_receipt(receipt)
        return receipt

    def record_all(receipts: list[Receipt]) -> None:
        for receipt in receipts:
            record(receipt)
            if receipt.failed:
                logger.warning("%s failed (continuing): %s", receipt.step, receipt.error)

    record(Receipt.success("detect-os", f"Detected OS: {describe_os(os_name)}"))

    if restore:
        record(restore_zshrc(settings, run_mode))

    if not skip_install:
        ctx = steps.ProvisionContext(
            settings=settings,
            run_mode=run_mode,
            runner=runner,
            os_name=os_name,
        )

        prereq = record(steps.install_prerequisites(ctx))
        if prereq.failed:
            if os_name == "Darwin":
                logger.warning("Homebrew install failed, continuing: %s", prereq.error)
            else:
                raise ProvisionError(prereq)

        framework = record(steps.install_framework(ctx))
        if framework.failed:
            raise ProvisionError(framework)

        record_all(steps.install_plugins(ctx))
        record_all([steps.install_uv(ctx)])
        record_all(steps.install_python_tools(ctx))
        record_all(steps.install_node_packages(ctx))
    else:
        logger.info("Skipping installs, rewriting %s only", settings.zshrc_path)

    report.rewrite = rewrite_zshrc(settings, run_mode)
    record(report.rewrite.to_receipt())

    logger.info(
        "Run finished: %d steps, %d warnings",
        len(report.receipts), len(report.warnings),
    )
    return report
