"""
Knowledge Assistant backend.

A chat-assistant HTTP service: users register and log in, then exchange
messages with an OpenAI completion model. Conversations and messages are
persisted through SQLAlchemy.
"""
