"""
Blog Application Layer
=======================

Application layer for the users/posts module.

Contains:
- Services: Orchestrate per-request logic and coordinate with repositories
- DTOs: Data transfer objects for API serialization

This layer depends on repository interfaces, not on concrete infrastructure
implementations.
"""

from src.blog.application.dto import (
    UserCreateRequest,
    UserUpdateRequest,
    PostCreateRequest,
    PostUpdateRequest,
    UserResponse,
    PostResponse,
    MessageResponse,
)
from src.blog.application.services import (
    UserService,
    PostService,
    IRepository,
    IUserRepository,
    IPostRepository,
)

__all__ = [
    # DTOs
    "UserCreateRequest",
    "UserUpdateRequest",
    "PostCreateRequest",
    "PostUpdateRequest",
    "UserResponse",
    "PostResponse",
    "MessageResponse",
    # Services
    "UserService",
    "PostService",
    # Repository Interfaces
    "IRepository",
    "IUserRepository",
    "IPostRepository",
]
