"""
Job Board
Job listings, applications and admin moderation over a relational store.

Architecture:
- schemas: entity records, insert variants and request/response shapes
- db: plain-SQL record store
- services: read-only derivations and moderation transitions
- api: FastAPI routes
- client: HTTP client with an explicit query cache
"""

__version__ = "1.0.0"
