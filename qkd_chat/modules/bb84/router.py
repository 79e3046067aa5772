from __future__ import annotations

from fastapi import APIRouter, Depends

from qkd_chat.api.schemas import InitializeRequest, InitializeResponse, SessionSummary
from qkd_chat.core.config import settings
from qkd_chat.modules.session.deps import get_registry
from qkd_chat.modules.session.registry import SessionRegistry

router = APIRouter(tags=["bb84"])

@router.post("/initialize", response_model=InitializeResponse)
def initialize(req: InitializeRequest, registry: SessionRegistry = Depends(get_registry)) -> InitializeResponse:
    bits = settings.DEFAULT_KEY_BITS if req.bits is None else req.bits
    # report the session this call installed, not whatever is current now
    summary = registry.initialize_session(bits).summary()
    return InitializeResponse(
        requested_bits=summary["requested_bits"],
        key_length=summary["key_length"],
        error_rate=summary["error_rate"],
    )

@router.get("/session", response_model=SessionSummary)
def session_summary(registry: SessionRegistry = Depends(get_registry)) -> SessionSummary:
    session, channel = registry.snapshot()
    return SessionSummary(**session.summary(), message_count=len(channel))
