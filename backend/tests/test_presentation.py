import pytest
from models.verification import (
    ConfidenceLevel,
    CrisisRelevance,
    SourceLink,
    VerificationResult,
    VerificationStatus,
)
from services.presentation import to_presentation, verdict_for


def _result(**overrides) -> VerificationResult:
    fields = dict(
        claim="Boil water notice issued for Riverside",
        status=VerificationStatus.PARTIALLY_TRUE,
        confidence=ConfidenceLevel.MEDIUM,
        summary="A notice was issued for the north district only.",
        public_guidance="Boil tap water for one minute before drinking.",
        sources=[
            SourceLink(title="Riverside.gov", url="https://www.riverside.gov/notices"),
            SourceLink(url="https://local.example.com/water"),
        ],
        last_verified="2024-03-10T12:00:00Z",
        crisis_relevance=CrisisRelevance.HIGH,
    )
    fields.update(overrides)
    return VerificationResult(**fields)


class TestVerdictFor:

    @pytest.mark.parametrize("status, verdict", [
        (VerificationStatus.VERIFIED, "true"),
        (VerificationStatus.FALSE, "false"),
        (VerificationStatus.PARTIALLY_TRUE, "partially-true"),
        (VerificationStatus.UNCONFIRMED, "unknown"),
        (VerificationStatus.OUTDATED, "unknown"),
    ])
    def test_mapping(self, status, verdict):
        assert verdict_for(status) == verdict


class TestToPresentation:
    """Tests for the UI-facing result shape."""

    def test_shape(self):
        assert to_presentation(_result()) == {
            "verdict": "partially-true",
            "confidence": 0.6,
            "summary": "A notice was issued for the north district only.",
            "sources": [
                {"title": "Riverside.gov", "url": "https://www.riverside.gov/notices"},
                {"title": "https://local.example.com/water", "url": "https://local.example.com/water"},
            ],
            "public_guidance": "Boil tap water for one minute before drinking.",
            "crisis_relevance": "High",
            "last_verified": "2024-03-10T12:00:00Z",
        }

    def test_confidence_anchors(self):
        assert to_presentation(_result(confidence=ConfidenceLevel.HIGH))["confidence"] == 0.9
        assert to_presentation(_result(confidence=ConfidenceLevel.LOW))["confidence"] == 0.3

    def test_no_guidance(self):
        assert to_presentation(_result(public_guidance=None))["public_guidance"] is None

    def test_no_sources(self):
        assert to_presentation(_result(sources=[]))["sources"] == []
