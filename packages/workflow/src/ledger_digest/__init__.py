"""Ledger Digest - authorize, summarize and deliver an actor's financial statements."""

__version__ = "0.1.0"

from ledger_digest.authorization import (
    Allowed,
    AuthorizationOutcome,
    AuthorizationRule,
    Denied,
    ValidationService,
)
from ledger_digest.config import configure_logging, get_settings
from ledger_digest.errors import (
    ActorLookupFailed,
    ActorNotFound,
    AuthorizationFailed,
    DeliveryFailed,
    SummarizationFailed,
    WorkflowError,
    WorkflowStage,
)
from ledger_digest.models import (
    Actor,
    Administrator,
    FinancialPeriod,
    FinancialStatement,
    RequestedMode,
    StandardUser,
    SummarizationResult,
    TrustLevel,
)
from ledger_digest.orchestrator import WorkflowOrchestrator
from ledger_digest.summarization import (
    DataError,
    ForeignOwnerIds,
    SummarizationCalculator,
    TooManyAccounts,
)

__all__ = [
    # Version
    "__version__",
    # Model
    "Actor",
    "Administrator",
    "StandardUser",
    "TrustLevel",
    "RequestedMode",
    "FinancialPeriod",
    "FinancialStatement",
    "SummarizationResult",
    # Authorization
    "AuthorizationRule",
    "ValidationService",
    "AuthorizationOutcome",
    "Allowed",
    "Denied",
    # Summarization
    "SummarizationCalculator",
    "DataError",
    "TooManyAccounts",
    "ForeignOwnerIds",
    # Workflow
    "WorkflowOrchestrator",
    "WorkflowStage",
    "WorkflowError",
    "ActorLookupFailed",
    "ActorNotFound",
    "AuthorizationFailed",
    "SummarizationFailed",
    "DeliveryFailed",
    # Config
    "get_settings",
    "configure_logging",
]
