from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from knowledge_assistant.database.entities import ChatMessage


class ChatMessageDao:
    """CRUD access to the `chat_messages` table."""

    @staticmethod
    def save(session: Session, message: ChatMessage) -> ChatMessage:
        session.add(message)
        session.commit()
        session.refresh(message)
        return message

    @staticmethod
    def get_by_conversation(session: Session, conversation_id: str) -> List[ChatMessage]:
        """Messages of a conversation in ascending creation order."""
        stmt = (
            select(ChatMessage)
            .where(ChatMessage.conversation_id == conversation_id)
            .order_by(ChatMessage.created_at.asc())
        )
        return list(session.scalars(stmt))
