import asyncio
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import logger, settings, check_api_keys_on_startup
from exceptions import (
    VeritasException,
    ValidationException,
    LLMException,
    SearchUnavailable,
    ToolProtocolViolation,
    ModelOutputException,
)
from middleware.context import (
    RequestContextMiddleware,
    get_request_id,
    get_request_duration,
    record_verification_outcome,
)
from models import VerifyRequest, VerificationResult
from services import VerificationService, to_presentation
from utils.validation import InputValidator

app = FastAPI(title="Veritas Sentinel API")

@app.on_event("startup")
async def startup_event():
    check_api_keys_on_startup()

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

verification_service = VerificationService()

ERROR_STATUS_CODES = [
    (SearchUnavailable, 503),
    (LLMException, 502),
    (ToolProtocolViolation, 502),
    (ModelOutputException, 502),
    (ValidationException, 400),
]

def status_code_for(exc: VeritasException) -> int:
    for exc_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500

@app.exception_handler(VeritasException)
async def veritas_exception_handler(request: Request, exc: VeritasException):
    record_verification_outcome(exc.kind)
    body = exc.to_dict()
    body["request_id"] = get_request_id()
    return JSONResponse(status_code=status_code_for(exc), content=body)


@app.get("/")
async def health_check():
    return {"status": "ok", "message": "Veritas Sentinel API is running."}


async def run_verification(claim: str) -> VerificationResult:
    try:
        claim = InputValidator.sanitize_claim(claim)
    except ValidationException as e:
        record_verification_outcome("invalid_claim")
        raise HTTPException(status_code=400, detail=e.details["reason"])

    try:
        result = await asyncio.wait_for(
            verification_service.verify_claim(claim),
            timeout=settings.VERIFY_TIMEOUT_SECONDS
        )
    except asyncio.TimeoutError:
        logger.error(
            "Verification abandoned after %.1fs (limit %.0fs)",
            get_request_duration() or 0.0,
            settings.VERIFY_TIMEOUT_SECONDS
        )
        record_verification_outcome("timeout")
        raise HTTPException(status_code=504, detail="Verification timed out. Please try again.")

    record_verification_outcome(result.status.value, sources=len(result.sources))
    return result


@app.post("/verify-claim")
async def verify_claim(req: VerifyRequest):
    """Verifies a claim and returns the model's verdict in wire form."""
    result = await run_verification(req.claim)
    return {"verification": result.to_wire()}


@app.post("/verify")
async def verify(req: VerifyRequest):
    """Verifies a claim and returns the presentation-friendly verdict."""
    result = await run_verification(req.claim)
    return to_presentation(result)
