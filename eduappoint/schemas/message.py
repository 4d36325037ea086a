from pydantic import field_validator
from datetime import datetime
from typing import Optional

from .user import CamelModel, UserSummary, require_text


class MessageCreate(CamelModel):
    recipient_id: int
    subject: Optional[str] = None
    content: str

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        require_text(v)
        return v


class MessageResponse(CamelModel):
    id: int
    sender: UserSummary
    recipient: UserSummary
    subject: str
    content: str
    read: bool
    created_at: datetime
    updated_at: datetime


class MessageSent(CamelModel):
    info: str
    message: MessageResponse


class MessageRead(CamelModel):
    message: str
    updated_message: MessageResponse
