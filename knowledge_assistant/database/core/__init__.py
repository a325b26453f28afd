"""
The `core` package holds the engine/session factory (`db`) and the
service functions (`funcs`) that the HTTP layer calls.
"""
