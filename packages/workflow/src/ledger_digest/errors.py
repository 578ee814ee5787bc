"""Workflow error taxonomy.

Each error is returned from ``WorkflowOrchestrator.run`` rather than raised,
and records the stage the request stopped at. Being exceptions, hosts that
prefer raising can simply ``raise`` what they get back.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from ledger_digest.authorization import Denied
from ledger_digest.models import Actor, RequestedMode


class WorkflowStage(str, Enum):
    """Stages of a summarization request, in order."""

    FETCHING_ACTOR = "fetching_actor"
    AUTHORIZING = "authorizing"
    SUMMARIZING = "summarizing"
    DELIVERING = "delivering"
    RECORDING_SUCCESS = "recording_success"
    DONE = "done"


def _describe(cause: BaseException | None) -> str | None:
    if cause is None:
        return None
    return f"{type(cause).__name__}: {cause}"


class WorkflowError(Exception):
    """Base for every failure a workflow request can end in."""

    stage: WorkflowStage

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Structured form for logging or rendering."""
        return {
            "error": type(self).__name__,
            "stage": self.stage.value,
            "message": str(self),
            "cause": _describe(self.cause),
        }


class ActorLookupFailed(WorkflowError):
    """The actor lookup itself failed (infrastructure fault)."""

    stage = WorkflowStage.FETCHING_ACTOR

    def __init__(self, actor_id: int, cause: BaseException):
        super().__init__(f"unexpected error when retrieving actor id {actor_id}", cause)
        self.actor_id = actor_id

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "actor_id": self.actor_id}


class ActorNotFound(WorkflowError):
    """The lookup succeeded but no such actor exists."""

    stage = WorkflowStage.FETCHING_ACTOR

    def __init__(self, actor_id: int):
        super().__init__(f"actor id {actor_id} was not found")
        self.actor_id = actor_id

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "actor_id": self.actor_id}


class AuthorizationFailed(WorkflowError):
    """The actor is not allowed to run in the requested mode."""

    stage = WorkflowStage.AUTHORIZING

    def __init__(self, actor: Actor, mode: RequestedMode, cause: Denied):
        super().__init__(f"failed validating actor {actor.id} with mode {mode.value}")
        # Denied is an outcome, not an exception, so it is kept off __cause__.
        self.cause = cause
        self.actor = actor
        self.mode = mode

    @property
    def audit_recording_failed(self) -> bool:
        return self.cause.audit_recording_failed

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["cause"] = self.cause.message
        base["actor"] = self.actor.to_dict()
        base["mode"] = self.mode.value
        base["audit_recording_failed"] = self.audit_recording_failed
        return base


class SummarizationFailed(WorkflowError):
    """Statements could not be fetched, summarized or validated."""

    stage = WorkflowStage.SUMMARIZING

    def __init__(self, actor: Actor, cause: Exception):
        super().__init__(f"failed summarising data for actor {actor.id}", cause)
        self.actor = actor

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "actor": self.actor.to_dict()}


class DeliveryFailed(WorkflowError):
    """Delivering the summarization, or recording its success, failed."""

    def __init__(
        self,
        actor: Actor,
        cause: Exception,
        stage: WorkflowStage = WorkflowStage.DELIVERING,
    ):
        super().__init__(f"failed sending summarised data for actor {actor.id}", cause)
        self.actor = actor
        self.stage = stage

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "actor": self.actor.to_dict()}
