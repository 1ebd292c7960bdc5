from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import httpx
from config import logger, settings, LLM_CONFIG, RATE_LIMITS_PER_SECOND
from exceptions import LLMException, SessionStateError
from utils.rate_limiter import get_rate_limiter
from .tools import ToolCatalog, ToolCallRequest, DEFAULT_TOOL_CATALOG

_gemini_limiter = get_rate_limiter("GEMINI", RATE_LIMITS_PER_SECOND.GEMINI)


@dataclass
class ModelReply:
    text: Optional[str] = None
    tool_calls: List[ToolCallRequest] = field(default_factory=list)


class ConversationSession(ABC):
    """Ordered multi-turn exchange with the reasoning model for one verification.

    A session is not safe for concurrent sends. Once a reply carries a tool
    call, the matching tool result must be sent before anything else.
    """

    def __init__(self, catalog: ToolCatalog = DEFAULT_TOOL_CATALOG):
        self.catalog = catalog
        self.history: List[Dict[str, Any]] = []
        self._pending_tool: Optional[str] = None
        self._in_flight = False

    async def send_user_message(self, text: str) -> ModelReply:
        if self._pending_tool is not None:
            raise SessionStateError(
                f"Tool result for {self._pending_tool!r} must be sent before another message"
            )
        return await self._send({"role": "user", "parts": [{"text": text}]})

    async def send_tool_result(self, tool_name: str, payload: Any) -> ModelReply:
        if self._pending_tool is None:
            raise SessionStateError("No tool call is awaiting a result")
        if tool_name != self._pending_tool:
            raise SessionStateError(
                f"Tool result for {tool_name!r} does not match pending call {self._pending_tool!r}"
            )
        self._pending_tool = None
        return await self._send({
            "role": "user",
            "parts": [{"functionResponse": {"name": tool_name, "response": {"result": payload}}}]
        })

    async def _send(self, content: Dict[str, Any]) -> ModelReply:
        if self._in_flight:
            raise SessionStateError("Another message is already in flight on this session")

        self._in_flight = True
        self.history.append(content)
        try:
            reply, model_content = await self._exchange(self.history)
        except Exception:
            self.history.pop()
            raise
        finally:
            self._in_flight = False

        self.history.append(model_content)
        if reply.tool_calls:
            self._pending_tool = reply.tool_calls[0].name
        return reply

    @abstractmethod
    async def _exchange(self, contents: List[Dict[str, Any]]) -> "tuple[ModelReply, Dict[str, Any]]":
        """Sends the full history and returns the reply plus the model turn to record."""


async def _post_generate_content(body: Dict[str, Any]) -> Dict[str, Any]:
    if not settings.GEMINI_API_KEY:
        logger.critical("GEMINI_API_KEY not configured.")
        raise LLMException("API key not configured", recoverable=False)

    await _gemini_limiter.acquire()

    headers = {"Content-Type": "application/json", "x-goog-api-key": settings.GEMINI_API_KEY}
    try:
        async with httpx.AsyncClient(timeout=LLM_CONFIG.REQUEST_TIMEOUT) as client:
            response = await client.post(settings.GEMINI_ENDPOINT, headers=headers, json=body)
            response.raise_for_status()
            return response.json()
    except httpx.HTTPStatusError as e:
        logger.error("Gemini HTTP error %s for URL %s: %s", e.response.status_code, e.request.url, e.response.text)
        raise LLMException(f"HTTP {e.response.status_code}", recoverable=True)
    except httpx.RequestError as e:
        logger.error("Gemini request error for URL %s: %s", e.request.url, str(e))
        raise LLMException(f"Request failed: {str(e)}", recoverable=True)
    except Exception as e:
        logger.exception("Unexpected error calling Gemini API.")
        raise LLMException(f"Unexpected error: {str(e)}", recoverable=False)


class GeminiConversationSession(ConversationSession):

    async def _exchange(self, contents: List[Dict[str, Any]]):
        body = {
            "contents": list(contents),
            "tools": [{"function_declarations": self.catalog.declarations()}],
            "generationConfig": {"temperature": LLM_CONFIG.TEMPERATURE},
        }
        data = await _post_generate_content(body)
        return self._parse_reply(data)

    @staticmethod
    def _parse_reply(data: Any):
        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not isinstance(candidates, list) or not candidates:
            feedback = data.get("promptFeedback") if isinstance(data, dict) else None
            logger.error("Gemini returned no candidates. Feedback: %s", feedback)
            raise LLMException("no candidates in response", recoverable=True)

        candidate = candidates[0] if isinstance(candidates[0], dict) else {}
        content = candidate.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts:
            logger.error("Gemini candidate has no content (finishReason=%s)", candidate.get("finishReason"))
            raise LLMException(f"empty candidate (finishReason={candidate.get('finishReason')})", recoverable=True)

        texts = []
        tool_calls = []
        for part in parts:
            if not isinstance(part, dict) or part.get("thought"):
                continue
            if text := part.get("text"):
                texts.append(text)
            if func_call := part.get("functionCall"):
                tool_calls.append(ToolCallRequest.from_function_call(func_call))

        reply = ModelReply(text="".join(texts) if texts else None, tool_calls=tool_calls)
        model_content = {"role": content.get("role") or "model", "parts": parts}
        return reply, model_content


class GeminiSessionFactory:
    """Creates an independent session, with the catalog bound, per verification."""

    def __init__(self, catalog: ToolCatalog = DEFAULT_TOOL_CATALOG):
        self.catalog = catalog

    def __call__(self) -> ConversationSession:
        return GeminiConversationSession(self.catalog)
