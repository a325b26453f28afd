"""
FastAPI Routers: User Management and Chat API

This module defines the HTTP API endpoints exposed by the backend. It handles:
- User registration, login, profile read/update and listing
- Sending a chat message and receiving the assistant reply
- Conversation listing, retrieval and deletion

Each endpoint validates input via Pydantic models and returns structured responses.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Cookie, Depends, Header, HTTPException, Request, Response
from sqlalchemy.orm import Session

from knowledge_assistant.api.ai_service import AIService
from knowledge_assistant.api.models import (
    ChatMessageOut,
    ChatRequest,
    ConversationOut,
    ConversationSummary,
    Token,
    UserCredentials,
    UserData,
    UserOut,
    UserUpdate,
)
from knowledge_assistant.database.core.db import get_db
from knowledge_assistant.database.core.funcs import (
    authenticate_user,
    delete_conversation,
    get_all_conversations,
    get_all_users,
    get_conversation,
    get_conversation_messages,
    get_or_create_conversation,
    get_user_by_id,
    get_user_from_token,
    register_user,
    save_message,
    update_conversation,
    update_user,
)

logger = logging.getLogger(__name__)

user_router = APIRouter(prefix="/api/users", tags=["users"])
"""Router for user registration, authentication and profiles"""

chat_router = APIRouter(prefix="/api/chat", tags=["chat"])
"""Router for chat messages and conversations"""


def get_ai_service(request: Request) -> AIService:
    """Return the gateway created at application startup."""
    return request.app.state.ai_service


@user_router.post("/register", response_model=UserOut)
def register(data: UserData, session: Session = Depends(get_db)):
    """
    Register a new user account.

    Request Body
    ------------
    UserData {email: str, password: str, firstName: str|None, lastName: str|None}

    Returns
    -------
    UserOut
        The created user, without the password hash.

    Raises
    ------
    HTTPException 400
        If the email is already registered.
    """
    try:
        return register_user(session, data)
    except RuntimeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@user_router.post("/login", response_model=Token)
def login(data: UserCredentials, response: Response, session: Session = Depends(get_db)):
    """
    Authenticate a user and set the JWT as cookie.

    Request Body
    ------------
    UserCredentials {email: str, password: str}

    Returns
    -------
    Token
        {'token': str} if successful.

    Raises
    ------
    HTTPException 400
        If the credentials are invalid.
    """
    token = authenticate_user(session, data.email, data.password)
    if token is None:
        raise HTTPException(status_code=400, detail="Invalid credentials")
    response.set_cookie(
        key="token",
        value=token,
        httponly=True,
        secure=True,
        samesite="none",
    )
    return Token(token=token)


@user_router.get("/me", response_model=UserOut)
def current_user(
    token: Optional[str] = Cookie(None),
    authorization: Optional[str] = Header(None),
    session: Session = Depends(get_db),
):
    """
    Retrieve the user identified by the Bearer token or the login cookie.

    Raises
    ------
    HTTPException 401
        If the token is missing, invalid or expired.
    """
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing Token")
    user = get_user_from_token(session, token)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user


@user_router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, session: Session = Depends(get_db)):
    """
    Retrieve a user by id.

    Returns
    -------
    UserOut
        The user, without the password hash.

    Raises
    ------
    HTTPException 404
        If no user has this id.
    """
    user = get_user_by_id(session, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@user_router.put("/{user_id}", response_model=UserOut)
def put_user(user_id: str, data: UserUpdate, session: Session = Depends(get_db)):
    """
    Update a user's first name, last name or password.

    Request Body
    ------------
    UserUpdate {firstName: str|None, lastName: str|None, password: str|None}

    Raises
    ------
    HTTPException 404
        If no user has this id.
    """
    user = update_user(session, user_id, data)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@user_router.get("", response_model=List[UserOut])
def list_users(session: Session = Depends(get_db)):
    """
    List all registered users.

    Returns
    -------
    list[UserOut]
        Users in registration order.
    """
    return get_all_users(session)


@chat_router.post("/message", response_model=ChatMessageOut)
def send_message(
    data: ChatRequest,
    session: Session = Depends(get_db),
    ai_service: AIService = Depends(get_ai_service),
):
    """
    Send a user message and return the assistant reply.

    Request Body
    ------------
    ChatRequest {conversationId: str|None, category: str|None, message: str,
                 files: list[dict]|None, deepThinkMode: bool|None}

    Returns
    -------
    ChatMessageOut
        The persisted assistant message.

    Raises
    ------
    HTTPException 500
        If the completion request fails. The user message stays saved.
    """
    conversation = get_or_create_conversation(session, data.conversation_id, data.category)
    history = list(conversation.messages)

    save_message(session, conversation, "user", data.message)

    file_context = ""
    if data.files:
        file_context = ai_service.process_files(data.files)

    try:
        ai_response = ai_service.generate_response(
            data.message,
            data.category,
            file_context,
            bool(data.deep_think_mode),
            history,
        )
    except Exception as e:
        logger.exception("Completion failed for conversation id=%s: %s", conversation.id, e)
        raise HTTPException(status_code=500, detail="Error generating AI response")

    assistant_message = save_message(session, conversation, "assistant", ai_response)
    update_conversation(session, conversation)
    return assistant_message


@chat_router.get("/conversations", response_model=List[ConversationSummary])
def list_conversations(session: Session = Depends(get_db)):
    """All conversations, most recently updated first."""
    return get_all_conversations(session)


@chat_router.get("/conversations/{conversation_id}", response_model=ConversationOut)
def read_conversation(conversation_id: str, session: Session = Depends(get_db)):
    """A conversation with its messages in chronological order."""
    conversation = get_conversation(session, conversation_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    messages = get_conversation_messages(session, conversation_id)
    return ConversationOut(
        **ConversationSummary.model_validate(conversation).model_dump(),
        messages=[ChatMessageOut.model_validate(m) for m in messages],
    )


@chat_router.delete("/conversations/{conversation_id}")
def remove_conversation(conversation_id: str, session: Session = Depends(get_db)):
    """
    Delete a conversation together with its messages.

    Returns
    -------
    bool
        True if the conversation was deleted.

    Raises
    ------
    HTTPException 404
        If the conversation does not exist.
    """
    if not delete_conversation(session, conversation_id):
        raise HTTPException(status_code=404, detail="Conversation not found")
    return True
