import asyncio
from typing import Optional
from config import logger
from exceptions import ModelOutputException, VeritasException, VerificationFailed
from models.verification import VerificationResult
from .agent import AgentLoop
from .normalizer import normalize_model_output


class VerificationService:

    def __init__(self, agent_loop: Optional[AgentLoop] = None):
        self.agent_loop = agent_loop or AgentLoop()

    async def verify_claim(self, claim: str) -> VerificationResult:
        """Runs the agent loop for one claim and normalizes the answer.

        Returns a result whose ``claim`` equals the input, or raises one of
        the typed errors from ``exceptions``.
        """
        start_time = asyncio.get_running_loop().time()

        try:
            outcome = await self.agent_loop.run(claim)
            result = normalize_model_output(outcome.final_text, claim=claim)
        except ModelOutputException as e:
            logger.error(
                "Verification failed with %s: %s | output snippet: %r",
                e.kind, e.message, e.snippet
            )
            raise
        except VeritasException as e:
            logger.error("Verification failed with %s: %s", e.kind, e.message)
            raise
        except Exception as e:
            logger.exception("Unexpected error during verification.")
            raise VerificationFailed(f"unexpected {type(e).__name__}") from e

        duration = round(asyncio.get_running_loop().time() - start_time, 2)
        logger.info(
            f"Verification completed for claim '{claim[:50]}...' in {duration} seconds: "
            f"{result.status.value} ({result.confidence.value}), "
            f"{'1 tool call' if outcome.tool_call else 'no tool call'}, {len(result.sources)} sources."
        )
        return result
