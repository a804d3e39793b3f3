"""reprofund core - entities, validation, linkage, queries and the service."""

from .exceptions import (
    ConfigException,
    ConflictError,
    DuplicateResearcherError,
    InvalidPayloadError,
    InvalidTransitionError,
    NotFoundError,
    RecordTooLargeError,
    ReprofundException,
    StorageException,
)
from .logging import (
    OperationLogger,
    configure_logging,
    get_logger,
    operation_logger,
)
from .models import (
    CreateMilestonePayload,
    CreateProposalPayload,
    FundProposalPayload,
    Milestone,
    MilestoneStatus,
    ProofOfReproduction,
    ProofStatus,
    ProposalStage,
    Researcher,
    ResearcherPayload,
    ResearchProposal,
    Review,
    SubmitProofPayload,
    SubmitReviewPayload,
    VerifyMilestonePayload,
)
from .response import FundingResponse, Message, MessageKind, err, ok
from .service import FundingService

__all__ = [
    # Exceptions
    "ReprofundException",
    "InvalidPayloadError",
    "DuplicateResearcherError",
    "InvalidTransitionError",
    "NotFoundError",
    "ConflictError",
    "StorageException",
    "RecordTooLargeError",
    "ConfigException",
    # Logging
    "configure_logging",
    "get_logger",
    "OperationLogger",
    "operation_logger",
    # Models
    "Researcher",
    "ResearchProposal",
    "Milestone",
    "Review",
    "ProofOfReproduction",
    "ProposalStage",
    "MilestoneStatus",
    "ProofStatus",
    "ResearcherPayload",
    "CreateProposalPayload",
    "SubmitReviewPayload",
    "FundProposalPayload",
    "CreateMilestonePayload",
    "VerifyMilestonePayload",
    "SubmitProofPayload",
    # Responses
    "FundingResponse",
    "Message",
    "MessageKind",
    "ok",
    "err",
    # Service
    "FundingService",
]
