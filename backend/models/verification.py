from enum import Enum
from typing import TypedDict, Literal, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from config import CONFIDENCE_CONFIG


class VerificationStatus(str, Enum):
    VERIFIED = "Verified"
    FALSE = "False"
    PARTIALLY_TRUE = "Partially True"
    UNCONFIRMED = "Unconfirmed"
    OUTDATED = "Outdated"


class ConfidenceLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def score(self) -> float:
        return {
            ConfidenceLevel.HIGH: CONFIDENCE_CONFIG.HIGH,
            ConfidenceLevel.MEDIUM: CONFIDENCE_CONFIG.MEDIUM,
            ConfidenceLevel.LOW: CONFIDENCE_CONFIG.LOW,
        }[self]


class CrisisRelevance(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


VerdictType = Literal["true", "false", "partially-true", "unknown"]


class SourceLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    url: str


class VerificationResult(BaseModel):
    """Normalized verdict for a single claim."""
    model_config = ConfigDict(frozen=True)

    claim: str
    status: VerificationStatus
    confidence: ConfidenceLevel
    summary: str
    public_guidance: Optional[str] = None
    sources: List[SourceLink] = Field(default_factory=list, max_length=3)
    last_verified: str
    crisis_relevance: CrisisRelevance = CrisisRelevance.LOW

    @property
    def confidence_score(self) -> float:
        return self.confidence.score

    def to_wire(self) -> "VerificationWire":
        return {
            "claim": self.claim,
            "status": self.status.value,
            "confidence": self.confidence.value,
            "summary": self.summary,
            "public_guidance": self.public_guidance or "",
            "sources": [s.url for s in self.sources],
            "last_verified": self.last_verified,
            "crisis_relevance": self.crisis_relevance.value,
        }


class VerificationWire(TypedDict):
    """Field-for-field shape returned by /verify-claim."""
    claim: str
    status: Literal["Verified", "False", "Partially True", "Unconfirmed", "Outdated"]
    confidence: Literal["High", "Medium", "Low"]
    summary: str
    public_guidance: str
    sources: List[str]
    last_verified: str
    crisis_relevance: Literal["High", "Medium", "Low"]


class PresentationSource(TypedDict, total=False):
    title: str
    url: str


class PresentationResult(TypedDict, total=False):
    """Shape consumed by the claim verifier UI."""
    verdict: VerdictType
    confidence: float
    summary: str
    sources: List[PresentationSource]
    public_guidance: Optional[str]
    crisis_relevance: str
    last_verified: str
