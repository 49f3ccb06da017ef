"""
Blog Application Services
==========================

Application services orchestrate the per-request logic and coordinate with
repositories.

Following SOLID principles:
- Single Responsibility: one service per entity
- Dependency Inversion: depend on repository abstractions, not SQLAlchemy
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from src.blog.application.dto import (
    PostCreateRequest,
    PostUpdateRequest,
    UserCreateRequest,
    UserUpdateRequest,
)
from src.core import ResourceNotFoundException, ValidationException
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Repository Interfaces (Dependency Inversion) ==========

class IRepository(ABC):
    """Find/create/save/remove access to one entity type."""

    @abstractmethod
    async def find_all(self) -> List[Any]:
        """Get every record."""

    @abstractmethod
    async def find_by_id(self, entity_id: int) -> Optional[Any]:
        """Get a record by id, None when absent."""

    @abstractmethod
    def create(self, **fields: Any) -> Any:
        """Build a new, not yet persisted, record."""

    @abstractmethod
    async def save(self, entity: Any) -> Any:
        """Insert or update a record."""

    @abstractmethod
    async def remove(self, entity: Any) -> None:
        """Delete a record."""


class IUserRepository(IRepository):
    """Interface for user data access."""


class IPostRepository(IRepository):
    """Interface for post data access."""

    @abstractmethod
    async def find_by_user(self, user_id: int) -> List[Any]:
        """Get every post owned by a user."""


# ========== Application Services ==========

class UserService:
    """Service for user CRUD."""

    def __init__(self, user_repository: IUserRepository):
        self._user_repo = user_repository

    async def list_users(self) -> List[Any]:
        return await self._user_repo.find_all()

    async def create_user(self, payload: UserCreateRequest) -> Any:
        """
        Persist a new user.

        Field contents are not validated; a missing field is rejected by the
        database NOT NULL constraint.
        """
        user = self._user_repo.create(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
        )
        user = await self._user_repo.save(user)
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def update_user(self, user_id: int, payload: UserUpdateRequest) -> Any:
        """
        Overwrite the fields that are present and truthy.

        An empty string leaves the stored value unchanged.

        Raises:
            ResourceNotFoundException: If the user does not exist
        """
        user = await self._get_user(user_id)

        if payload.first_name:
            user.first_name = payload.first_name
        if payload.last_name:
            user.last_name = payload.last_name
        if payload.email:
            user.email = payload.email

        return await self._user_repo.save(user)

    async def delete_user(self, user_id: int) -> None:
        """Delete a user; the database removes its posts."""
        user = await self._get_user(user_id)
        await self._user_repo.remove(user)
        logger.info("User deleted", extra={"user_id": user_id})

    async def _get_user(self, user_id: int) -> Any:
        user = await self._user_repo.find_by_id(user_id)
        if not user:
            raise ResourceNotFoundException("User", str(user_id))
        return user


class PostService:
    """
    Service for post CRUD.

    Needs the user repository to check ownership on creation. The lookup and
    the insert are separate round-trips.
    """

    def __init__(self, post_repository: IPostRepository, user_repository: IUserRepository):
        self._post_repo = post_repository
        self._user_repo = user_repository

    async def create_post(self, payload: PostCreateRequest) -> Any:
        """
        Persist a post for an existing user.

        Raises:
            ValidationException: If title, description or userId is missing or falsy
            ResourceNotFoundException: If the owning user does not exist
        """
        if not payload.title or not payload.description or not payload.user_id:
            raise ValidationException("Title, description, and userId are required")

        user = await self._user_repo.find_by_id(payload.user_id)
        if not user:
            raise ResourceNotFoundException("User", str(payload.user_id))

        post = self._post_repo.create(
            title=payload.title,
            description=payload.description,
            user_id=user.id,
        )
        post = await self._post_repo.save(post)
        logger.info("Post created", extra={"post_id": post.id, "user_id": user.id})
        return post

    async def list_posts_for_user(self, user_id: int) -> List[Any]:
        """Posts owned by ``user_id``; an unknown user yields an empty list."""
        return await self._post_repo.find_by_user(user_id)

    async def update_post(self, post_id: int, payload: PostUpdateRequest) -> Any:
        post = await self._get_post(post_id)

        post.title = payload.title or post.title
        post.description = payload.description or post.description

        return await self._post_repo.save(post)

    async def delete_post(self, post_id: int) -> None:
        post = await self._get_post(post_id)
        await self._post_repo.remove(post)
        logger.info("Post deleted", extra={"post_id": post_id})

    async def _get_post(self, post_id: int) -> Any:
        post = await self._post_repo.find_by_id(post_id)
        if not post:
            raise ResourceNotFoundException("Post", str(post_id))
        return post
