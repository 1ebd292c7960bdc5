import uuid
import time
from contextvars import ContextVar
from typing import Any, Dict, Optional
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from config import logger

OUTCOME_HEADER = "X-Verification-Outcome"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
request_start_time_var: ContextVar[Optional[float]] = ContextVar("request_start_time", default=None)
verification_record_var: ContextVar[Optional[Dict[str, Any]]] = ContextVar("verification_record", default=None)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and reports how its verification ended.

    Handlers call ``record_verification_outcome``; the outcome (a status such
    as ``Verified``, an error kind, ``invalid_claim`` or ``timeout``) is logged
    with the request and returned in the ``X-Verification-Outcome`` header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(request_id)

        start_time = time.time()
        request_start_time_var.set(start_time)

        # Mutated in place by the endpoint, which runs in a copied context.
        record: Dict[str, Any] = {}
        verification_record_var.set(record)

        logger.info(
            f"Request {request_id} started: {request.method} {request.url.path}",
            extra={"request_id": request_id, "method": request.method, "path": request.url.path}
        )

        response = await call_next(request)

        duration = time.time() - start_time
        outcome = record.get("outcome")
        if outcome is None:
            logger.info(
                f"Request {request_id} completed with {response.status_code} in {duration * 1000:.0f}ms",
                extra={"request_id": request_id, "status_code": response.status_code}
            )
        else:
            logger.info(
                f"Verification {request_id} on {request.url.path} ended as {outcome} "
                f"({response.status_code}) in {duration:.2f}s"
                + (f" with {record['sources']} sources" if "sources" in record else ""),
                extra={
                    "request_id": request_id,
                    "status_code": response.status_code,
                    "verification_outcome": outcome,
                    "duration_ms": round(duration * 1000, 2)
                }
            )
            response.headers[OUTCOME_HEADER] = outcome

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"

        return response


def record_verification_outcome(outcome: str, sources: Optional[int] = None):
    """Notes how the current request's verification ended, if one is tracked."""
    record = verification_record_var.get()
    if record is None:
        return
    record["outcome"] = outcome
    if sources is not None:
        record["sources"] = sources


def get_request_id() -> Optional[str]:
    return request_id_var.get()


def get_request_duration() -> Optional[float]:
    start_time = request_start_time_var.get()
    if start_time:
        return time.time() - start_time
    return None
