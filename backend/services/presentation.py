from models.verification import (
    PresentationResult,
    VerdictType,
    VerificationResult,
    VerificationStatus,
)

_VERDICTS = {
    VerificationStatus.VERIFIED: "true",
    VerificationStatus.FALSE: "false",
    VerificationStatus.PARTIALLY_TRUE: "partially-true",
}


def verdict_for(status: VerificationStatus) -> VerdictType:
    # Unconfirmed and Outdated both read as "unknown" to the public.
    return _VERDICTS.get(status, "unknown")


def to_presentation(result: VerificationResult) -> PresentationResult:
    return {
        "verdict": verdict_for(result.status),
        "confidence": result.confidence_score,
        "summary": result.summary,
        "sources": [{"title": s.title or s.url, "url": s.url} for s in result.sources],
        "public_guidance": result.public_guidance,
        "crisis_relevance": result.crisis_relevance.value,
        "last_verified": result.last_verified,
    }
