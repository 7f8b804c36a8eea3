"""
Receipt model — the outcome of a single provisioning step.

Every adapter call and every service step answers with a Receipt.
Command failures are captured here, never raised, so the orchestrator
decides which failures are fatal and which are only warnings.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """UTC timestamp for receipt start/end."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Result of one step (a command, a clone, a file rewrite).

    ``planned`` is what dry-run produces: the step was described,
    not performed.
    """

    step: str
    adapter: str = ""
    status: Literal["ok", "skipped", "failed", "planned"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None
    exit_code: int | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the step succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the step failed."""
        return self.status == "failed"

    @property
    def planned(self) -> bool:
        """Whether the step was only reported (dry-run)."""
        return self.status == "planned"

    @classmethod
    def success(
        cls,
        step: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """The step did what it was asked to."""
        return cls(step=step, status="ok", output=output, **kwargs)

    @classmethod
    def failure(
        cls,
        step: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """The step failed; ``error`` says why."""
        return cls(step=step, status="failed", error=error, **kwargs)

    @classmethod
    def skip(
        cls,
        step: str,
        reason: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Nothing to do (already installed, tool missing, ...)."""
        return cls(step=step, status="skipped", output=reason, **kwargs)

    @classmethod
    def plan(
        cls,
        step: str,
        description: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a dry-run receipt describing what would happen."""
        return cls(step=step, status="planned", output=description, **kwargs)
