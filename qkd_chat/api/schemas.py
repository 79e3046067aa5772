from __future__ import annotations

from pydantic import BaseModel, Field
from typing import List, Optional

from qkd_chat.core.config import settings

class HealthResponse(BaseModel):
    project: str
    version: str
    initialized: bool
    timestamp_utc: str

class ErrorResponse(BaseModel):
    error: str
    detail: str

# BB84

class InitializeRequest(BaseModel):
    bits: Optional[int] = Field(default=None, ge=0, le=settings.MAX_KEY_BITS)

class InitializeResponse(BaseModel):
    message: str = "Protocol initialized successfully"
    requested_bits: int
    key_length: int
    error_rate: float

class SessionSummary(BaseModel):
    requested_bits: int
    key_length: int
    matched_bases: int
    error_rate: float
    message_count: int

# Channel

class EncryptRequest(BaseModel):
    plaintext: str
    sender: str = Field(min_length=1, max_length=64)

class MessageOut(BaseModel):
    ciphertext: str
    sender: str

class DecryptRequest(BaseModel):
    ciphertext: str

class DecryptResponse(BaseModel):
    plaintext: str

class MessagesResponse(BaseModel):
    messages: List[MessageOut] = Field(default_factory=list)
