from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from typing import List
import logging

from ..models.message import Message
from ..models.user import User
from ..core.config import Settings
from ..core.exceptions import NotFoundError
from ..core.permissions import ensure_can_mark_read, ensure_not_self
from ..schemas.message import MessageCreate

logger = logging.getLogger(__name__)

class MessageService:
    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def _query(self):
        return self.db.query(Message).options(
            joinedload(Message.sender),
            joinedload(Message.recipient),
        )

    def send(self, sender: User, data: MessageCreate) -> Message:
        recipient = self.db.query(User).filter(User.id == data.recipient_id).first()
        if not recipient:
            raise NotFoundError("Recipient user not found.")

        ensure_not_self(sender.id, recipient.id)

        subject = (data.subject or "").strip() or self.settings.DEFAULT_MESSAGE_SUBJECT
        message = Message(
            sender=sender,
            recipient=recipient,
            subject=subject,
            content=data.content,
            read=False,
        )
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)

        logger.info(f"User {sender.id} sent message {message.id} to user {recipient.id}")
        return message

    def list_for_user(self, user: User) -> List[Message]:
        """Messages sent or received by ``user``, newest first."""
        return self._query().filter(
            or_(Message.sender_id == user.id, Message.recipient_id == user.id)
        ).order_by(
            Message.created_at.desc(),
            Message.id.desc(),
        ).all()

    def mark_read(self, user: User, message_id: int) -> Message:
        message = self._query().filter(Message.id == message_id).first()
        if not message:
            raise NotFoundError("Message not found.")

        ensure_can_mark_read(user.id, message.recipient_id)

        # One-way: there is no way back to unread
        message.read = True
        self.db.commit()
        self.db.refresh(message)
        return message
