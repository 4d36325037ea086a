from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ...core.config import Settings, get_settings
from ...core.database import get_db
from ...api.deps import get_current_user
from ...services.message_service import MessageService
from ...schemas.message import MessageCreate, MessageResponse, MessageSent, MessageRead
from ...models.user import User

router = APIRouter(prefix="/messages", tags=["Messages"])

def get_message_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> MessageService:
    return MessageService(db, settings)

@router.post("", response_model=MessageSent, status_code=status.HTTP_201_CREATED)
async def send_message(
    message_data: MessageCreate,
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
):
    """Send a direct message to another user."""
    message = service.send(current_user, message_data)
    return MessageSent(
        info="Message sent successfully.",
        message=MessageResponse.from_orm(message),
    )

@router.get("/my", response_model=List[MessageResponse])
async def list_my_messages(
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
):
    """List messages the caller sent or received, newest first."""
    return [MessageResponse.from_orm(m) for m in service.list_for_user(current_user)]

@router.put("/{message_id}/read", response_model=MessageRead)
async def mark_message_read(
    message_id: int,
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
):
    """Mark a received message as read (recipient only)."""
    message = service.mark_read(current_user, message_id)
    return MessageRead(
        message="Message marked as read.",
        updated_message=MessageResponse.from_orm(message),
    )
