"""
Pydantic schemas for request/response validation.

JSON keys are camelCase on the wire (``firstName``, ``conversationId``,
``deepThinkMode``); snake_case field names are accepted as well.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserData(CamelModel):
    """Registration payload."""

    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UserCredentials(CamelModel):
    """Login payload."""

    email: str
    password: str


class UserUpdate(CamelModel):
    """Profile update payload. Omitted fields are left untouched."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    password: Optional[str] = None


class UserOut(CamelModel):
    """Public view of a user; the password hash is never exposed."""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: Optional[datetime] = None


class Token(CamelModel):
    token: str


class ChatRequest(CamelModel):
    """Payload of ``POST /api/chat/message``."""

    conversation_id: Optional[str] = None
    category: Optional[str] = None
    message: str
    files: Optional[List[Dict[str, Any]]] = None
    deep_think_mode: Optional[bool] = False


class ChatMessageOut(CamelModel):
    id: str
    role: str
    content: str
    conversation_id: str
    created_at: Optional[datetime] = None


class ConversationSummary(CamelModel):
    id: str
    title: str
    category: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ConversationOut(ConversationSummary):
    messages: List[ChatMessageOut] = []
