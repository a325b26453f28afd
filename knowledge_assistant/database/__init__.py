"""
Persistence layer: configuration, engine/session, entities, DAOs and
the service functions built on top of them.
"""
