"""
Mock runner — test double for every external command.

Records what would have been executed without touching the system.
Configurable per command: which binaries are "on PATH", which commands
fail and with what exit code, and canned stdout.
"""

from __future__ import annotations

from collections.abc import Iterable

from zsh_bootstrap.adapters.shell.command import Command, CommandRunner, format_command
from zsh_bootstrap.core.models.action import Receipt


class MockRunner(CommandRunner):
    """CommandRunner that never starts a process.

    Failures and outputs are keyed by a substring of the formatted
    command; the first matching key wins.
    """

    name = "mock"

    def __init__(
        self,
        available: Iterable[str] = (),
        failures: dict[str, int] | None = None,
        outputs: dict[str, str] | None = None,
    ):
        self._available = set(available)
        self._failures = dict(failures or {})
        self._outputs = dict(outputs or {})
        self._call_log: list[str] = []
        self._env_log: list[dict[str, str]] = []

    @property
    def call_log(self) -> list[str]:
        """Formatted commands this mock has executed, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def env_for(self, fragment: str) -> dict[str, str]:
        """Environment overrides of the first call containing ``fragment``."""
        for display, env in zip(self._call_log, self._env_log):
            if fragment in display:
                return env
        return {}

    def set_available(self, binary: str, available: bool = True) -> None:
        if available:
            self._available.add(binary)
        else:
            self._available.discard(binary)

    def set_failure(self, fragment: str, exit_code: int = 1) -> None:
        """Make every command containing ``fragment`` fail."""
        self._failures[fragment] = exit_code

    def which(self, binary: str) -> str | None:
        if binary in self._available:
            return f"/usr/bin/{binary}"
        return None

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
        self._call_log.append(display)
        self._env_log.append(dict(env_overrides or {}))

        for fragment, exit_code in self._failures.items():
            if fragment in display:
                return Receipt.failure(
                    step,
                    f"[mock] {display} failed",
                    adapter=self.name,
                    exit_code=exit_code,
                    metadata={"command": display},
                )

        output = next(
            (out for fragment, out in self._outputs.items() if fragment in display),
            "[mock] executed",
        )
        return Receipt.success(
            step,
            output,
            adapter=self.name,
            exit_code=0,
            metadata={"command": display, "mock": True},
        )

    def reset(self) -> None:
        """Clear the call log."""
        self._call_log.clear()
        self._env_log.clear()
