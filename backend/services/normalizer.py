import json
import re
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar
from config import logger, NORMALIZER_CONFIG
from exceptions import EnumDeviation, IncompleteModelOutput, MalformedModelOutput
from models.verification import (
    ConfidenceLevel,
    CrisisRelevance,
    SourceLink,
    VerificationResult,
    VerificationStatus,
)
from utils.parsing import parse_json_object, strip_code_fence, title_from_url, truncate_snippet

E = TypeVar("E", bound=Enum)

_SEPARATORS = re.compile(r"[\s_\-]+")

STATUS_DEFAULT = VerificationStatus.UNCONFIRMED
CONFIDENCE_DEFAULT = ConfidenceLevel.LOW
RELEVANCE_DEFAULT = CrisisRelevance.LOW


def _enum_key(value: str) -> str:
    return _SEPARATORS.sub("", value).lower()


def parse_enum(enum_cls: Type[E], field_name: str, value: Any, default: E) -> E:
    """Matches a model literal to an enum member, ignoring case and separators.

    Raises EnumDeviation (carrying ``default``) for anything else.
    """
    if isinstance(value, str):
        key = _enum_key(value)
        for member in enum_cls:
            if _enum_key(member.value) == key:
                return member
    raise EnumDeviation(field_name, value, default.value)


def parse_status(value: Any) -> VerificationStatus:
    return parse_enum(VerificationStatus, "status", value, STATUS_DEFAULT)


def parse_confidence(value: Any) -> ConfidenceLevel:
    return parse_enum(ConfidenceLevel, "confidence", value, CONFIDENCE_DEFAULT)


def parse_crisis_relevance(value: Any) -> CrisisRelevance:
    return parse_enum(CrisisRelevance, "crisis_relevance", value, RELEVANCE_DEFAULT)


def _degrade(parser, value: Any, default: E) -> E:
    try:
        return parser(value)
    except EnumDeviation as e:
        logger.warning("Model enum deviation: %s", e.message)
        return default


def source_link(entry: Any) -> Optional[SourceLink]:
    if isinstance(entry, str):
        url = entry.strip()
        if not url:
            return None
        return SourceLink(title=title_from_url(url), url=url)

    if isinstance(entry, dict) and isinstance(entry.get("url"), str) and entry["url"].strip():
        url = entry["url"].strip()
        title = entry.get("title") if isinstance(entry.get("title"), str) and entry["title"].strip() else None
        return SourceLink(title=title or title_from_url(url), url=url)

    return None


def map_sources(entries: List[Any]) -> List[SourceLink]:
    links = []
    for entry in entries:
        link = source_link(entry)
        if link is None:
            logger.warning("Dropping unusable source entry: %s", truncate_snippet(repr(entry), 100))
            continue
        links.append(link)
    if len(links) > NORMALIZER_CONFIG.MAX_SOURCES:
        logger.info(f"Model cited {len(links)} sources; keeping the first {NORMALIZER_CONFIG.MAX_SOURCES}.")
    return links[:NORMALIZER_CONFIG.MAX_SOURCES]


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def load_model_json(raw: Optional[str]) -> Dict[str, Any]:
    """Fence-strips and strictly parses the model's final text."""
    snippet = truncate_snippet(raw, NORMALIZER_CONFIG.SNIPPET_LENGTH)
    if raw is None or not str(raw).strip():
        raise MalformedModelOutput("empty response", snippet)

    cleaned = strip_code_fence(str(raw))
    try:
        return parse_json_object(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedModelOutput(f"invalid JSON ({e.msg} at line {e.lineno} column {e.colno})", snippet)
    except ValueError as e:
        raise MalformedModelOutput(str(e), snippet)
    except RecursionError:
        raise MalformedModelOutput("JSON nested too deeply", snippet)


def normalize_model_output(raw: Optional[str], claim: Optional[str] = None) -> VerificationResult:
    """Turns the model's raw final answer into a VerificationResult.

    Formatting noise (one code fence, enum spelling, unknown enum literals) is
    absorbed. Unparseable text or missing required fields are fatal. When
    ``claim`` is given it replaces whatever claim the model echoed back.
    """
    data = load_model_json(raw)

    missing = [f for f in NORMALIZER_CONFIG.REQUIRED_FIELDS if f not in data or data[f] is None]
    if missing:
        raise IncompleteModelOutput(missing, truncate_snippet(raw, NORMALIZER_CONFIG.SNIPPET_LENGTH))

    if not isinstance(data["sources"], list):
        raise IncompleteModelOutput(["sources (must be a list)"], truncate_snippet(raw, NORMALIZER_CONFIG.SNIPPET_LENGTH))

    echoed_claim = str(data["claim"])
    if claim is not None and echoed_claim != claim:
        logger.info("Model altered the claim text; echoing the submitted claim instead.")

    return VerificationResult(
        claim=claim if claim is not None else echoed_claim,
        status=_degrade(parse_status, data["status"], STATUS_DEFAULT),
        confidence=_degrade(parse_confidence, data["confidence"], CONFIDENCE_DEFAULT),
        summary=str(data["summary"]),
        public_guidance=_optional_text(data.get("public_guidance")),
        sources=map_sources(data["sources"]),
        last_verified=str(data["last_verified"]),
        crisis_relevance=_degrade(parse_crisis_relevance, data.get("crisis_relevance"), RELEVANCE_DEFAULT),
    )
