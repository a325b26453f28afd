"""
The `api` package defines the backend’s HTTP interface,
along with supporting utilities and data models.

It integrates FastAPI routing, JWT authentication, and the OpenAI
completion gateway.

Contents
--------
- fast_api
    Defines the FastAPI routers with endpoints for:
        * User registration, login, profile read/update and listing
        * Sending chat messages and receiving the assistant reply
        * Conversation listing, retrieval and deletion

- models
    Pydantic schemas for request/response validation:
        * User registration, credentials, updates and public view
        * Chat request, messages and conversations

- utils
    JWT and password utilities:
        * `create_access_token` — issues signed JWTs with expiration
        * `verify_token` — validates JWTs and extracts user identity
        * `hash_password` / `check_password` — bcrypt hashing

- ai_service
    Prompt assembly and the single completion call per chat message.
"""
