"""Error kinds, submission outcomes and terminal states.

Every failure in the flow is tagged with an explicit `ErrorKind` so the
orchestrator can map each one to a terminal state without guessing from
exception types or messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    """Taxonomy of failures observed during a run."""

    INVALID_INPUT = "invalid_input"
    INVALID_RESPONSE = "invalid_response"
    REMOTE_REJECTED = "remote_rejected"
    UNREACHABLE = "unreachable"
    REJECTED = "rejected"
    UNEXPECTED = "unexpected"

    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


class WebhookError(Exception):
    """Raised by `WebhookClient.generate` with an explicit error kind."""

    def __init__(self, kind: ErrorKind, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.kind = kind
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.kind.value} (HTTP {self.status_code}): {self.detail}"
        return f"{self.kind.value}: {self.detail}"


class SubmissionStatus(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of the single submission attempt.

    `REJECTED` is an expected, non-exceptional outcome: the request completed
    but the remote side declined it. `UNREACHABLE` means it never completed.
    """

    status: SubmissionStatus
    status_code: int | None = None
    detail: str = ""

    @classmethod
    def accepted(cls, status_code: int, detail: str = "") -> "SubmissionOutcome":
        return cls(SubmissionStatus.ACCEPTED, status_code, detail)

    @classmethod
    def rejected(cls, status_code: int, detail: str = "") -> "SubmissionOutcome":
        return cls(SubmissionStatus.REJECTED, status_code, detail)

    @classmethod
    def unreachable(cls, detail: str) -> "SubmissionOutcome":
        return cls(SubmissionStatus.UNREACHABLE, None, detail)


class RunState(str, Enum):
    """States visited by the orchestrator; the last three are terminal."""

    START = "start"
    WEBHOOK_PENDING = "webhook_pending"
    WEBHOOK_ACQUIRED = "webhook_acquired"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    WARNED = "warned"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RunState.SUCCEEDED, RunState.WARNED, RunState.FAILED)


@dataclass
class RunReport:
    """Observable result of one run: exactly one terminal state."""

    state: RunState
    error_kind: ErrorKind | None = None
    status_code: int | None = None
    detail: str = ""
    webhook_url: str | None = None
    history: list[RunState] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True for Succeeded and Warned (exit code 0)."""

        return self.state in (RunState.SUCCEEDED, RunState.WARNED)
