"""Operating-mode authorization for actors.

Two layers:

- ``AuthorizationRule`` is the pure policy table: (actor, mode) -> bool.
- ``ValidationService`` applies the rule and, on denial only, records the
  attempt with the auditing gateway. A failed audit write never changes the
  outcome; it is reported on the denial as ``audit_recording_failed``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias

import structlog

from ledger_digest.gateways.protocols import AuditingGateway
from ledger_digest.models import (
    Actor,
    Administrator,
    RequestedMode,
    StandardUser,
    TrustLevel,
)

logger = structlog.get_logger(__name__)


# =============================================================================
# POLICY
# =============================================================================


def administrator_allowed(admin: Administrator, mode: RequestedMode) -> bool:
    if mode is RequestedMode.MODE_1:
        return admin.is_super_admin
    if mode is RequestedMode.MODE_2:
        return not admin.is_super_admin
    return mode is RequestedMode.MODE_3


def standard_user_allowed(user: StandardUser, mode: RequestedMode) -> bool:
    if mode is RequestedMode.MODE_1:
        return user.trust_level is not TrustLevel.POSSIBLE_RISK
    if mode is RequestedMode.MODE_2:
        return user.trust_level is TrustLevel.TRUSTED_OPERATIVE
    return mode is RequestedMode.MODE_3


class AuthorizationRule:
    """Policy table deciding which actors may run in which mode.

    MODE_3 admits every actor. Otherwise:

    ================  =================  ======  ======
    actor             condition          MODE_1  MODE_2
    ================  =================  ======  ======
    Administrator     super admin        allow   deny
    Administrator     not super admin    deny    allow
    StandardUser      POSSIBLE_RISK      deny    deny
    StandardUser      TRUSTED_OPERATIVE  allow   allow
    StandardUser      NON_COMBATANT      allow   deny
    ================  =================  ======  ======
    """

    def evaluate(self, actor: Actor, mode: RequestedMode) -> bool:
        if isinstance(actor, Administrator):
            return administrator_allowed(actor, mode)
        if isinstance(actor, StandardUser):
            return standard_user_allowed(actor, mode)
        raise TypeError(f"Unsupported actor type: {type(actor).__name__}")


# =============================================================================
# OUTCOMES
# =============================================================================


@dataclass(frozen=True)
class Allowed:
    """The actor may proceed in the requested mode."""

    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True)
class AuditError:
    """The audit write for a denial failed."""

    cause: Exception


@dataclass(frozen=True)
class Denied:
    """The actor may not proceed in the requested mode."""

    actor: Actor
    mode: RequestedMode
    audit_recording_failed: bool = False
    audit_error: AuditError | None = field(default=None, compare=False, repr=False)

    @property
    def allowed(self) -> bool:
        return False

    @property
    def message(self) -> str:
        if isinstance(self.actor, StandardUser):
            return (
                f"standard user {self.actor.id} was not valid for mode {self.mode.value} "
                f"with trust level of {self.actor.trust_level.value}"
            )
        return f"administrator {self.actor.id} was not valid for mode {self.mode.value}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "actor": self.actor.to_dict(),
            "mode": self.mode.value,
            "audit_recording_failed": self.audit_recording_failed,
            "message": self.message,
        }


AuthorizationOutcome: TypeAlias = Allowed | Denied


# =============================================================================
# SERVICE
# =============================================================================


class ValidationService:
    """Applies the authorization rule and audits denials."""

    def __init__(
        self,
        auditing: AuditingGateway,
        rule: AuthorizationRule | None = None,
    ):
        self._auditing = auditing
        self._rule = rule or AuthorizationRule()
        self._logger = logger.bind(component="validation_service")

    def validate(self, actor: Actor, mode: RequestedMode) -> AuthorizationOutcome:
        if self._rule.evaluate(actor, mode):
            return Allowed()

        audit_error = self._record_denial(actor, mode)
        self._logger.info(
            "authorization_denied",
            actor_id=actor.id,
            actor_kind=actor.kind,
            mode=mode.value,
            audit_recording_failed=audit_error is not None,
        )
        return Denied(
            actor=actor,
            mode=mode,
            audit_recording_failed=audit_error is not None,
            audit_error=audit_error,
        )

    def _record_denial(self, actor: Actor, mode: RequestedMode) -> AuditError | None:
        """Single attempt; the failure is captured, never raised."""
        try:
            self._auditing.record_denied_attempt(actor, mode)
        except Exception as exc:
            self._logger.warning(
                "denial_audit_failed",
                actor_id=actor.id,
                mode=mode.value,
                error=str(exc),
            )
            return AuditError(cause=exc)
        return None
