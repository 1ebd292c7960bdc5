from dataclasses import dataclass

@dataclass(frozen=True)
class LLMConfig:
    REQUEST_TIMEOUT: float = 60.0
    TEMPERATURE: float = 0.2

@dataclass(frozen=True)
class SearchConfig:
    MAX_RESULTS: int = 3
    SEARCH_DEPTH: str = "basic"
    REQUEST_TIMEOUT: float = 20.0

@dataclass(frozen=True)
class ConfidenceConfig:
    """Numeric anchors for the model's confidence tiers."""
    HIGH: float = 0.9
    MEDIUM: float = 0.6
    LOW: float = 0.3

@dataclass(frozen=True)
class RateLimitsPerSecond:
    GEMINI: float = 5.0
    TAVILY: float = 5.0

@dataclass(frozen=True)
class NormalizerConfig:
    MAX_SOURCES: int = 3
    SNIPPET_LENGTH: int = 200
    REQUIRED_FIELDS: tuple = (
        "claim",
        "status",
        "confidence",
        "summary",
        "sources",
        "last_verified",
    )

LLM_CONFIG = LLMConfig()
SEARCH_CONFIG = SearchConfig()
CONFIDENCE_CONFIG = ConfidenceConfig()
RATE_LIMITS_PER_SECOND = RateLimitsPerSecond()
NORMALIZER_CONFIG = NormalizerConfig()
