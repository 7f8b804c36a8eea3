"""
Command runner — the single place external commands are executed.

Every collaborator (package manager, git, uv, npm, the Oh My Zsh
installer) goes through ``CommandRunner.run``. It honours the run mode:
in dry-run the command is described in a ``planned`` receipt and never
started. Failures come back as receipts, never as exceptions.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import time

from zsh_bootstrap.core.models.action import Receipt
from zsh_bootstrap.core.models.settings import RunMode

logger = logging.getLogger(__name__)

Command = list[str] | str


def format_command(cmd: Command) -> str:
    """Human-readable form of a command for reports and logs."""
    if isinstance(cmd, str):
        return cmd
    return shlex.join(cmd)


class CommandRunner:
    """Run commands and capture their output as receipts."""

    name = "shell"

    def which(self, binary: str) -> str | None:
        """Resolve ``binary`` on PATH."""
        return shutil.which(binary)

    def run(
        self,
        cmd: Command,
        *,
        step: str,
        run_mode: RunMode,
        env_overrides: dict[str, str] | None = None,
        timeout: int = 300,
        cwd: str | None = None,
    ) -> Receipt:
        """Run ``cmd`` (a list, or a string for ``sh -c``).

        Args:
            cmd: Command list, or a shell string (runs through the shell).
            step: Step name recorded on the receipt.
            run_mode: DRY_RUN returns a ``planned`` receipt instead.
            env_overrides: Extra environment variables.
            timeout: Seconds before the command is abandoned.
            cwd: Working directory.
        """
        display = format_command(cmd)
        if run_mode.is_dry_run:
            logger.info("[dry-run] would run: %s", display)
            return Receipt.plan(
                step,
                f"run: {display}",
                adapter=self.name,
                metadata={"command": display, "env": dict(env_overrides or {})},
            )

        logger.debug("Executing: %s (cwd=%s)", display, cwd)
        return self._execute(
            cmd,
            step=step,
            env_overrides=env_overrides,
            timeout=timeout,
            cwd=cwd,
        )

    def _execute(
        self,
        cmd: Command,
        *,
        step: str,
        env_overrides: dict[str, str] | None,
        timeout: int,
        cwd: str | None,
    ) -> Receipt:
        display = format_command(cmd)
        env = os.environ.copy()
        if env_overrides:
            env.update(env_overrides)

        start = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                shell=isinstance(cmd, str),
                cwd=cwd,
                env=env,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                step,
                f"Command timed out after {timeout}s",
                adapter=self.name,
                metadata={"command": display, "timeout": timeout},
            )
        except FileNotFoundError as e:
            return Receipt.failure(
                step,
                f"Command not found: {e.filename or display}",
                adapter=self.name,
                exit_code=127,
                metadata={"command": display},
            )
        except OSError as e:
            logger.exception("Subprocess error: %s", display)
            return Receipt.failure(
                step,
                f"Command execution error: {e}",
                adapter=self.name,
                metadata={"command": display},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = result.stdout.strip() if result.stdout else ""
        stderr = result.stderr.strip() if result.stderr else ""

        if result.returncode == 0:
            return Receipt.success(
                step,
                stdout[-2000:],
                adapter=self.name,
                exit_code=0,
                duration_ms=elapsed_ms,
                metadata={"command": display, "stderr": stderr[-2000:]},
            )

        logger.debug("Command failed (exit %d): %s\n%s", result.returncode, display, stderr)
        return Receipt.failure(
            step,
            stderr[-2000:] or f"Command exited with code {result.returncode}",
            adapter=self.name,
            exit_code=result.returncode,
            duration_ms=elapsed_ms,
            metadata={"command": display, "stdout": stdout[-2000:]},
        )
