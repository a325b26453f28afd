from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from knowledge_assistant.database.entities import User


class UserDao:
    """CRUD access to the `users` table."""

    @staticmethod
    def save(session: Session, user: User) -> User:
        """Insert or update ``user`` and commit."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    @staticmethod
    def get_by_id(session: Session, user_id: str) -> Optional[User]:
        return session.get(User, user_id)

    @staticmethod
    def get_by_email(session: Session, email: str) -> Optional[User]:
        return session.scalars(select(User).where(User.email == email)).first()

    @staticmethod
    def exists_by_email(session: Session, email: str) -> bool:
        return session.scalar(select(User.id).where(User.email == email).limit(1)) is not None

    @staticmethod
    def get_all(session: Session) -> List[User]:
        return list(session.scalars(select(User).order_by(User.created_at)))
