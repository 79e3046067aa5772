from __future__ import annotations

from fastapi import APIRouter, Depends

from qkd_chat.api.schemas import (
    DecryptRequest, DecryptResponse, EncryptRequest, MessageOut, MessagesResponse,
)
from qkd_chat.modules.session.deps import get_registry
from qkd_chat.modules.session.registry import SessionRegistry

router = APIRouter(tags=["channel"])

@router.post("/encrypt", response_model=MessageOut)
def encrypt(req: EncryptRequest, registry: SessionRegistry = Depends(get_registry)) -> MessageOut:
    msg = registry.encrypt(req.plaintext, req.sender)
    return MessageOut(ciphertext=msg.ciphertext, sender=msg.sender)

@router.post("/decrypt", response_model=DecryptResponse)
def decrypt(req: DecryptRequest, registry: SessionRegistry = Depends(get_registry)) -> DecryptResponse:
    return DecryptResponse(plaintext=registry.decrypt(req.ciphertext))

@router.get("/messages", response_model=MessagesResponse)
def list_messages(registry: SessionRegistry = Depends(get_registry)) -> MessagesResponse:
    return MessagesResponse(
        messages=[MessageOut(ciphertext=m.ciphertext, sender=m.sender) for m in registry.list_messages()]
    )
