"""Workflow orchestrator - sends a financial summarization to an actor.

The orchestrator reads as the list of steps it performs:

1. Fetch the actor
2. Validate the actor against the requested mode (denials are audited)
3. Fetch and summarize the actor's statements
4. Deliver the summarization
5. Record the successful summarization

Each collaborator is called at most once. The first failure ends the request
and is returned as a ``WorkflowError``; nothing is raised to the caller.

Usage:
    orchestrator = WorkflowOrchestrator(
        actors=directory,
        statements=store,
        auditing=audit_log,
        delivery=delivery,
    )
    outcome = orchestrator.run(actor_id=1, mode=RequestedMode.MODE_1)
    if isinstance(outcome, WorkflowError):
        ...
"""

from __future__ import annotations

import structlog

from ledger_digest.authorization import Denied, ValidationService
from ledger_digest.config import get_settings, request_context
from ledger_digest.errors import (
    ActorLookupFailed,
    ActorNotFound,
    AuthorizationFailed,
    DeliveryFailed,
    SummarizationFailed,
    WorkflowError,
    WorkflowStage,
)
from ledger_digest.gateways import (
    ActorLookup,
    AuditingGateway,
    Clock,
    DeliveryGateway,
    StatementSource,
    SystemClock,
)
from ledger_digest.models import Actor, RequestedMode, SummarizationResult
from ledger_digest.summarization import DataError, SummarizationCalculator

logger = structlog.get_logger(__name__)


class WorkflowOrchestrator:
    """Runs one summarization request from actor lookup to success audit."""

    def __init__(
        self,
        actors: ActorLookup,
        statements: StatementSource,
        auditing: AuditingGateway,
        delivery: DeliveryGateway,
        clock: Clock | None = None,
        validation: ValidationService | None = None,
        calculator: SummarizationCalculator | None = None,
    ):
        self._actors = actors
        self._statements = statements
        self._auditing = auditing
        self._delivery = delivery
        self._clock = clock or SystemClock()
        self._validation = validation or ValidationService(auditing)
        self._calculator = calculator or SummarizationCalculator()

        self._logger = logger.bind(component="workflow_orchestrator")

    def run(
        self,
        actor_id: int,
        mode: RequestedMode,
        max_days_to_process: int | None = None,
    ) -> SummarizationResult | WorkflowError:
        """Send a summarization for ``actor_id``.

        Args:
            actor_id: Id of the actor the summary is for.
            mode: Operating mode requested by the caller.
            max_days_to_process: Trailing window in calendar days. Defaults to
                ``Settings.default_max_days_to_process``.

        Returns:
            The delivered summarization, or the error the request ended in.
        """
        if max_days_to_process is None:
            max_days_to_process = get_settings().default_max_days_to_process

        with request_context(actor_id=actor_id, mode=mode.value):
            outcome = self._run(actor_id, mode, max_days_to_process)

            if isinstance(outcome, WorkflowError):
                self._logger.warning("workflow_failed", **outcome.to_dict())
            else:
                self._logger.info(
                    "workflow_completed",
                    window_start=outcome.window_start.isoformat(),
                    statement_count=len(outcome.statements),
                )
            return outcome

    def _run(
        self,
        actor_id: int,
        mode: RequestedMode,
        max_days_to_process: int,
    ) -> SummarizationResult | WorkflowError:
        actor = self._fetch_actor(actor_id)
        if isinstance(actor, WorkflowError):
            return actor

        denied = self._authorize(actor, mode)
        if denied is not None:
            return denied

        result = self._summarize(actor, max_days_to_process)
        if isinstance(result, WorkflowError):
            return result

        failure = self._deliver(actor, result)
        if failure is not None:
            return failure

        self._logger.debug("stage_entered", stage=WorkflowStage.DONE.value)
        return result

    def _fetch_actor(self, actor_id: int) -> Actor | WorkflowError:
        self._logger.debug("stage_entered", stage=WorkflowStage.FETCHING_ACTOR.value)
        try:
            actor = self._actors.get(actor_id)
        except Exception as exc:
            return ActorLookupFailed(actor_id, exc)

        if actor is None:
            return ActorNotFound(actor_id)
        return actor

    def _authorize(self, actor: Actor, mode: RequestedMode) -> AuthorizationFailed | None:
        self._logger.debug("stage_entered", stage=WorkflowStage.AUTHORIZING.value)
        outcome = self._validation.validate(actor, mode)
        if isinstance(outcome, Denied):
            return AuthorizationFailed(actor, mode, outcome)
        return None

    def _summarize(
        self, actor: Actor, max_days_to_process: int
    ) -> SummarizationResult | SummarizationFailed:
        self._logger.debug("stage_entered", stage=WorkflowStage.SUMMARIZING.value)
        try:
            statements = self._statements.get_statements(actor)
            result = self._calculator.summarize(
                actor, statements, max_days_to_process, now=self._clock.now()
            )
        except Exception as exc:
            return SummarizationFailed(actor, exc)

        if isinstance(result, DataError):
            return SummarizationFailed(actor, result)
        return result

    def _deliver(self, actor: Actor, result: SummarizationResult) -> DeliveryFailed | None:
        """Deliver, then record success. Both failures share one error type."""
        self._logger.debug("stage_entered", stage=WorkflowStage.DELIVERING.value)
        try:
            self._delivery.deliver(result)
        except Exception as exc:
            return DeliveryFailed(actor, exc, stage=WorkflowStage.DELIVERING)

        self._logger.debug("stage_entered", stage=WorkflowStage.RECORDING_SUCCESS.value)
        try:
            self._auditing.record_success(actor.id, result.window_start)
        except Exception as exc:
            return DeliveryFailed(actor, exc, stage=WorkflowStage.RECORDING_SUCCESS)
        return None
