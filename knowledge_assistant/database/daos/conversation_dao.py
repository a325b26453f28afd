from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from knowledge_assistant.database.entities import Conversation


class ConversationDao:
    """CRUD access to the `conversations` table."""

    @staticmethod
    def save(session: Session, conversation: Conversation) -> Conversation:
        """Insert or update ``conversation`` and commit."""
        session.add(conversation)
        session.commit()
        session.refresh(conversation)
        return conversation

    @staticmethod
    def get_by_id(session: Session, conversation_id: str) -> Optional[Conversation]:
        return session.get(Conversation, conversation_id)

    @staticmethod
    def get_all(session: Session) -> List[Conversation]:
        """All conversations, most recently updated first."""
        stmt = select(Conversation).order_by(Conversation.updated_at.desc())
        return list(session.scalars(stmt))

    @staticmethod
    def delete(session: Session, conversation: Conversation) -> None:
        """Delete ``conversation``; its messages go with it."""
        session.delete(conversation)
        session.commit()
