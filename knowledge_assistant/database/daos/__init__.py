"""
The `daos` package provides the Data Access Layer for the application.

It is responsible for all interactions with the database entities,
encapsulating CRUD operations that support the core functionality
of the system. Each DAO operates on a specific entity and abstracts
away the direct SQLAlchemy queries, offering a cleaner API to the
service layer. Every DAO method receives the caller's `Session` and
commits its own write.

Contents
--------
- UserDao
    Handles user persistence:
    * Saves new and updated users
    * Fetches users by id or email
    * Checks email uniqueness
    * Lists all users

- ConversationDao
    Manages conversation records:
    * Saves new and updated conversations
    * Fetches a conversation by id, or all of them (latest first)
    * Deletes a conversation together with its messages

- ChatMessageDao
    Manages chat message records:
    * Saves messages within a conversation
    * Fetches messages by conversation (chronological order)
"""

from knowledge_assistant.database.daos.user_dao import UserDao
from knowledge_assistant.database.daos.conversation_dao import ConversationDao
from knowledge_assistant.database.daos.chat_message_dao import ChatMessageDao

__all__ = ["UserDao", "ConversationDao", "ChatMessageDao"]
