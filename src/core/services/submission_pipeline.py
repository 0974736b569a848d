"""Submission orchestration.

This module drives the single pass of the harness: webhook acquisition,
solution lookup and token-authenticated submission. It is the only place
with control-flow decisions; the collaborators just report a grant, a
string or an outcome. Side-effects that belong to the UI (printing, banners)
are kept out and exposed through `PipelineHooks`.

Every run ends in exactly one terminal `RunState`:

- SUCCEEDED: the submission was accepted (2xx).
- WARNED: the submission completed but the remote side declined it. A
  sandbox answering 401 to every authenticated request is not a defect here.
- FAILED: anything that prevented this system from doing its own job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from core.domain.models import IdentityRequest, SubmissionPayload, WebhookGrant
from core.domain.outcomes import (
    ErrorKind,
    RunReport,
    RunState,
    SubmissionStatus,
    WebhookError,
)
from core.interfaces.collaborators import SolutionProvider, SolutionSubmitter, WebhookIssuer

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (step banners, progress)."""

    step: Callable[[RunState], None] | None = None
    grant_acquired: Callable[[WebhookGrant], None] | None = None
    solution_ready: Callable[[str], None] | None = None


class _Run:
    """Tracks state transitions for one pass."""

    def __init__(self, hooks: PipelineHooks) -> None:
        self.hooks = hooks
        self.history: list[RunState] = []
        self.webhook_url: str | None = None

    def enter(self, state: RunState) -> None:
        self.history.append(state)
        logger.debug("state -> %s", state.value)
        if self.hooks.step and not state.is_terminal:
            self.hooks.step(state)

    def finish(
        self,
        state: RunState,
        *,
        error_kind: ErrorKind | None = None,
        status_code: int | None = None,
        detail: str = "",
    ) -> RunReport:
        # Terminal states never reach the step hook.
        self.enter(state)
        return RunReport(
            state=state,
            error_kind=error_kind,
            status_code=status_code,
            detail=detail,
            webhook_url=self.webhook_url,
            history=list(self.history),
        )


def run_submission(
    *,
    identity: IdentityRequest,
    webhook_client: WebhookIssuer,
    solution_provider: SolutionProvider,
    submission_client: SolutionSubmitter,
    strict: bool = False,
    hooks: PipelineHooks | None = None,
) -> RunReport:
    """Run webhook acquisition and submission once; never raises.

    `strict=True` treats a declined submission as FAILED instead of WARNED.
    Exceptions from collaborators or hooks end the run as FAILED/UNEXPECTED.
    """

    run = _Run(hooks or PipelineHooks())
    try:
        return _drive(
            run,
            identity=identity,
            webhook_client=webhook_client,
            solution_provider=solution_provider,
            submission_client=submission_client,
            strict=strict,
        )
    except Exception as exc:
        logger.exception("Unexpected error during submission run")
        return run.finish(RunState.FAILED, error_kind=ErrorKind.UNEXPECTED, detail=repr(exc))


def _drive(
    run: _Run,
    *,
    identity: IdentityRequest,
    webhook_client: WebhookIssuer,
    solution_provider: SolutionProvider,
    submission_client: SolutionSubmitter,
    strict: bool,
) -> RunReport:
    hooks = run.hooks
    run.enter(RunState.START)

    run.enter(RunState.WEBHOOK_PENDING)
    try:
        grant = webhook_client.generate(identity)
    except WebhookError as exc:
        logger.error("Webhook generation failed: %s", exc)
        return run.finish(
            RunState.FAILED,
            error_kind=exc.kind,
            status_code=exc.status_code,
            detail=exc.detail,
        )

    # Protocol implementations other than WebhookClient may skip the check.
    if not isinstance(grant, WebhookGrant) or not grant.is_valid():
        return run.finish(
            RunState.FAILED,
            error_kind=ErrorKind.INVALID_RESPONSE,
            detail="webhook grant is missing its URL or token",
        )

    run.webhook_url = grant.webhook_url
    run.enter(RunState.WEBHOOK_ACQUIRED)
    if hooks.grant_acquired:
        hooks.grant_acquired(grant)

    query = solution_provider.get()
    if hooks.solution_ready:
        hooks.solution_ready(query)
    run.enter(RunState.SUBMITTING)
    outcome = submission_client.submit(grant, SubmissionPayload(query=query))

    if outcome.status is SubmissionStatus.ACCEPTED:
        return run.finish(
            RunState.SUCCEEDED,
            status_code=outcome.status_code,
            detail=outcome.detail,
        )

    if outcome.status is SubmissionStatus.REJECTED:
        return run.finish(
            RunState.FAILED if strict else RunState.WARNED,
            error_kind=ErrorKind.REJECTED,
            status_code=outcome.status_code,
            detail=outcome.detail,
        )

    return run.finish(
        RunState.FAILED,
        error_kind=ErrorKind.UNREACHABLE,
        detail=outcome.detail,
    )
