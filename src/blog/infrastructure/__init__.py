"""
Blog Infrastructure Layer
==========================

Infrastructure implementations for users and posts:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
"""

from src.blog.infrastructure.models import UserModel, PostModel
from src.blog.infrastructure.repositories import (
    SQLAlchemyRepository,
    SQLAlchemyUserRepository,
    SQLAlchemyPostRepository,
)

__all__ = [
    "UserModel",
    "PostModel",
    "SQLAlchemyRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyPostRepository",
]
