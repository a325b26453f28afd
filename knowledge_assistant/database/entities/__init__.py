"""
The `entities` package defines the ORM models of the application,
representing the database tables as Python classes via SQLAlchemy.

These entity classes are the foundation of the persistence layer,
used by DAOs (`daos` package) to perform CRUD operations.

Contents
--------
- User
    Represents a registered user in the system.
    * Stores the unique email and the bcrypt password hash
    * Holds first and last name

- Conversation
    Represents a titled, categorized thread of chat messages.
    * Stores conversation ID, title and category
    * Tracks creation and last updated timestamps

- ChatMessage
    Represents a single message within a conversation.
    * Stores message content and role (user/assistant)
    * Records creation timestamp, which defines message order
"""

from knowledge_assistant.database.entities.user import User
from knowledge_assistant.database.entities.conversation import Conversation
from knowledge_assistant.database.entities.chat_message import ChatMessage

__all__ = ["User", "Conversation", "ChatMessage"]
