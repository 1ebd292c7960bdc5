from .tools import ToolCatalog, ToolCallRequest, GET_RESULT_TOOL, DEFAULT_TOOL_CATALOG
from .search import SearchProvider, TavilySearchProvider
from .session import ConversationSession, GeminiConversationSession, GeminiSessionFactory, ModelReply
from .agent import AgentLoop, AgentOutcome, LoopState
from .normalizer import normalize_model_output
from .presentation import to_presentation
from .verification_service import VerificationService

__all__ = [
    "ToolCatalog",
    "ToolCallRequest",
    "GET_RESULT_TOOL",
    "DEFAULT_TOOL_CATALOG",
    "SearchProvider",
    "TavilySearchProvider",
    "ConversationSession",
    "GeminiConversationSession",
    "GeminiSessionFactory",
    "ModelReply",
    "AgentLoop",
    "AgentOutcome",
    "LoopState",
    "normalize_model_output",
    "to_presentation",
    "VerificationService",
]
