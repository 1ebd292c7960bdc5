from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional
from config import logger, SEARCH_CONFIG
from models.search_results import SearchDocument, ToolResultPayload
from prompts import build_verification_prompt, PROMPT_VERSION
from .search import SearchProvider, TavilySearchProvider
from .session import ConversationSession, GeminiSessionFactory
from .tools import ToolCallRequest, ToolCatalog, DEFAULT_TOOL_CATALOG


class LoopState(Enum):
    SENT = "sent"
    AWAITING_TOOL = "awaiting_tool"
    TOOL_RESOLVED = "tool_resolved"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS = {
    None: {LoopState.SENT, LoopState.FAILED},
    LoopState.SENT: {LoopState.DONE, LoopState.AWAITING_TOOL, LoopState.FAILED},
    LoopState.AWAITING_TOOL: {LoopState.TOOL_RESOLVED, LoopState.FAILED},
    LoopState.TOOL_RESOLVED: {LoopState.DONE, LoopState.FAILED},
    LoopState.DONE: set(),
    LoopState.FAILED: set(),
}


@dataclass
class AgentOutcome:
    """What one run of the loop produced. Discarded with the request."""
    claim: str
    states: List[LoopState] = field(default_factory=list)
    final_text: Optional[str] = None
    tool_call: Optional[ToolCallRequest] = None
    search_results: Optional[List[SearchDocument]] = None
    error: Optional[Exception] = None

    @property
    def state(self) -> Optional[LoopState]:
        return self.states[-1] if self.states else None

    def advance(self, state: LoopState):
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"Illegal agent loop transition {self.state} -> {state}")
        self.states.append(state)


class AgentLoop:
    """Drives one verification through at most one tool round trip.

    send prompt -> (tool call? search once, send result back) -> final text.
    Every run gets a fresh session from ``session_factory``.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], ConversationSession]] = None,
        search_provider: Optional[SearchProvider] = None,
        catalog: ToolCatalog = DEFAULT_TOOL_CATALOG,
    ):
        self.catalog = catalog
        self.session_factory = session_factory or GeminiSessionFactory(catalog)
        self.search_provider = search_provider or TavilySearchProvider()

    async def run(self, claim: str) -> AgentOutcome:
        outcome = AgentOutcome(claim=claim)
        session = self.session_factory()
        try:
            await self._drive(session, outcome)
        except Exception as e:
            outcome.error = e
            outcome.advance(LoopState.FAILED)
            logger.error(
                "Agent loop failed after %s: %s",
                " -> ".join(s.value for s in outcome.states[:-1]) or "start",
                e,
            )
            raise
        return outcome

    async def _drive(self, session: ConversationSession, outcome: AgentOutcome):
        prompt = build_verification_prompt(outcome.claim)
        outcome.advance(LoopState.SENT)
        logger.info(f"Sending verification prompt (version {PROMPT_VERSION}) for claim '{outcome.claim[:50]}...'")
        reply = await session.send_user_message(prompt)

        if not reply.tool_calls:
            outcome.final_text = reply.text
            outcome.advance(LoopState.DONE)
            logger.info("Agent answered without a tool call.")
            return

        call = reply.tool_calls[0]
        if len(reply.tool_calls) > 1:
            logger.warning(f"Model requested {len(reply.tool_calls)} tool calls; only the first is honored.")
        query = self.catalog.validate(call)
        outcome.tool_call = call
        outcome.advance(LoopState.AWAITING_TOOL)

        logger.info(f"[Agent Action] Calling tool: {call.name} with args: {call.args}")
        results = await self.search_provider.search(query, max_results=SEARCH_CONFIG.MAX_RESULTS)
        outcome.search_results = results
        logger.info(f"[Tool Result] {len(results)} documents for '{query[:80]}'")
        if not results:
            logger.warning("Search returned no documents; the model is told to answer Unconfirmed.")

        payload: ToolResultPayload = {"query": query, "results": results}
        final_reply = await session.send_tool_result(call.name, payload)
        outcome.advance(LoopState.TOOL_RESOLVED)

        if final_reply.tool_calls:
            logger.warning(
                f"Ignoring {len(final_reply.tool_calls)} tool call(s) in the final reply; one round trip is allowed."
            )
        outcome.final_text = final_reply.text
        outcome.advance(LoopState.DONE)
