from .search_results import (
    SearchDocument,
    ToolResultPayload,
)
from .claims import VerifyRequest
from .verification import (
    VerificationStatus,
    ConfidenceLevel,
    CrisisRelevance,
    VerdictType,
    SourceLink,
    VerificationResult,
    VerificationWire,
    PresentationSource,
    PresentationResult,
)

__all__ = [
    "SearchDocument",
    "ToolResultPayload",

    "VerifyRequest",

    "VerificationStatus",
    "ConfidenceLevel",
    "CrisisRelevance",
    "VerdictType",
    "SourceLink",
    "VerificationResult",
    "VerificationWire",
    "PresentationSource",
    "PresentationResult",
]
