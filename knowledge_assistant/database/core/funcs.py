"""
Service functions used by the HTTP layer.

User management
    register_user, authenticate_user, get_user_by_id, update_user,
    get_all_users, get_user_from_token

Chat orchestration
    get_or_create_conversation, save_message, update_conversation,
    get_all_conversations, get_conversation, get_conversation_messages,
    delete_conversation

Each write commits on its own, so a multi-step request that fails halfway
keeps whatever was already saved.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from knowledge_assistant.api.models import UserData, UserUpdate
from knowledge_assistant.api.utils import check_password, create_access_token, hash_password, verify_token
from knowledge_assistant.database.daos import ChatMessageDao, ConversationDao, UserDao
from knowledge_assistant.database.entities import ChatMessage, Conversation, User
from knowledge_assistant.database.entities.conversation import DEFAULT_TITLE

logger = logging.getLogger(__name__)

TITLE_LENGTH = 30


def register_user(session: Session, data: UserData) -> User:
    """
    Create a user with a hashed password.

    Raises
    ------
    RuntimeError
        If a user with the same email already exists.
    """
    if UserDao.exists_by_email(session, data.email):
        raise RuntimeError(f"User with email {data.email} already exists")

    user = User(
        email=data.email,
        password=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
    )
    try:
        user = UserDao.save(session, user)
    except IntegrityError:
        session.rollback()
        raise RuntimeError(f"User with email {data.email} already exists")
    logger.info("Registered user id=%s email=%s", user.id, user.email)
    return user


def authenticate_user(session: Session, email: str, password: str) -> Optional[str]:
    """
    Check credentials and issue an access token.

    Returns
    -------
    str | None
        A signed JWT whose subject is the user id, or None when the email is
        unknown or the password does not match.
    """
    user = UserDao.get_by_email(session, email)
    if user is not None and check_password(password, user.password):
        logger.info("Login succeeded for email=%s", email)
        return create_access_token({"sub": user.id})
    logger.info("Login failed for email=%s", email)
    return None


def get_user_by_id(session: Session, user_id: str) -> Optional[User]:
    return UserDao.get_by_id(session, user_id)


def get_user_from_token(session: Session, token: Optional[str]) -> Optional[User]:
    """Resolve an access token to its user, or None."""
    if not token:
        return None
    user_id = verify_token(token)
    if user_id is None:
        return None
    return UserDao.get_by_id(session, user_id)


def update_user(session: Session, user_id: str, data: UserUpdate) -> Optional[User]:
    """
    Update name fields and, when a non-empty one is given, the password.

    Returns None if the user does not exist. The email cannot be changed.
    """
    user = UserDao.get_by_id(session, user_id)
    if user is None:
        return None

    if data.first_name is not None:
        user.first_name = data.first_name
    if data.last_name is not None:
        user.last_name = data.last_name
    if data.password:
        user.password = hash_password(data.password)

    return UserDao.save(session, user)


def get_all_users(session: Session) -> List[User]:
    return UserDao.get_all(session)


def get_or_create_conversation(session: Session, conversation_id: Optional[str], category: Optional[str]) -> Conversation:
    """
    Return the conversation with ``conversation_id`` if it exists, otherwise
    create a new one with the default title and ``category`` as given.
    """
    if conversation_id:
        conversation = ConversationDao.get_by_id(session, conversation_id)
        if conversation is not None:
            return conversation

    conversation = ConversationDao.save(session, Conversation(title=DEFAULT_TITLE, category=category))
    logger.info("Created conversation id=%s category=%s", conversation.id, category)
    return conversation


def conversation_title(message: str) -> str:
    """Title derived from the first user message."""
    if len(message) > TITLE_LENGTH:
        return message[:TITLE_LENGTH] + "..."
    return message


def save_message(session: Session, conversation: Conversation, role: str, content: str) -> ChatMessage:
    """
    Append a message to ``conversation``.

    A conversation still carrying the default title is renamed after its
    first user message.
    """
    if role == "user" and conversation.title == DEFAULT_TITLE and not conversation.messages and content:
        conversation.title = conversation_title(content)
    message = ChatMessage(role=role, content=content or "", conversation=conversation)
    return ChatMessageDao.save(session, message)


def update_conversation(session: Session, conversation: Conversation) -> Conversation:
    """Save ``conversation`` and bump its ``updated_at``."""
    conversation.updated_at = datetime.now(timezone.utc)
    return ConversationDao.save(session, conversation)


def get_all_conversations(session: Session) -> List[Conversation]:
    return ConversationDao.get_all(session)


def get_conversation(session: Session, conversation_id: str) -> Optional[Conversation]:
    return ConversationDao.get_by_id(session, conversation_id)


def get_conversation_messages(session: Session, conversation_id: str) -> List[ChatMessage]:
    return ChatMessageDao.get_by_conversation(session, conversation_id)


def delete_conversation(session: Session, conversation_id: str) -> bool:
    """Delete a conversation and its messages. Returns False if it was not found."""
    conversation = ConversationDao.get_by_id(session, conversation_id)
    if conversation is None:
        return False
    ConversationDao.delete(session, conversation)
    logger.info("Deleted conversation id=%s", conversation_id)
    return True
