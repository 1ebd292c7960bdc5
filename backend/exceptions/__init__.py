from typing import Optional, Dict, Any, List

class VeritasException(Exception):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.kind,
            "message": self.message,
            "details": self.details
        }

class APIException(VeritasException):
    pass

class ValidationException(VeritasException):
    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Validation failed for {field}: {reason}",
            {"field": field, "reason": reason}
        )

class LLMException(APIException):
    def __init__(self, reason: str, recoverable: bool = True):
        super().__init__(
            f"LLM service error: {reason}",
            {"reason": reason, "recoverable": recoverable}
        )

class SearchUnavailable(APIException):
    def __init__(self, reason: str, recoverable: bool = True):
        super().__init__(
            f"Search provider unavailable: {reason}",
            {"reason": reason, "recoverable": recoverable}
        )

class ToolProtocolViolation(VeritasException):
    def __init__(self, reason: str, tool_name: Optional[str] = None):
        super().__init__(
            f"Tool protocol violation: {reason}",
            {"reason": reason, "tool_name": tool_name}
        )

class SessionStateError(VeritasException):
    pass

class ModelOutputException(VeritasException):
    """Final model output could not be turned into a verification result.

    ``snippet`` holds a truncated copy of the offending text for logs only;
    it is never part of ``to_dict()``.
    """

    def __init__(self, message: str, snippet: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.snippet = snippet

class MalformedModelOutput(ModelOutputException):
    def __init__(self, reason: str, snippet: str = ""):
        super().__init__(
            f"Model output is not a JSON object: {reason}",
            snippet,
            {"reason": reason}
        )

class IncompleteModelOutput(ModelOutputException):
    def __init__(self, missing: List[str], snippet: str = ""):
        super().__init__(
            f"Model output is missing required fields: {', '.join(missing)}",
            snippet,
            {"missing": list(missing)}
        )

class EnumDeviation(VeritasException):
    """Unexpected enum literal from the model. Always recovered from."""

    def __init__(self, field: str, value: Any, default: str):
        self.field = field
        self.value = value
        self.default = default
        super().__init__(
            f"Unexpected value {value!r} for {field}, using {default}",
            {"field": field, "value": value, "default": default}
        )

class VerificationFailed(VeritasException):
    def __init__(self, reason: str):
        super().__init__(
            f"Verification failed: {reason}",
            {"reason": reason}
        )
