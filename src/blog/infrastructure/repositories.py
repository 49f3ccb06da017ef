"""
Blog Infrastructure Repositories
=================================

SQLAlchemy implementations of the user and post repositories.

Each ``save``/``remove`` commits on its own: persistence is per call, there
is no transaction spanning several repository calls.
"""

from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.blog.application import IPostRepository, IUserRepository
from src.blog.infrastructure.models import PostModel, UserModel


class SQLAlchemyRepository:
    """Shared find/create/save/remove over one mapped model."""

    model: Optional[type] = None

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_all(self) -> List[Any]:
        stmt = select(self.model).order_by(self.model.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_id(self, entity_id: int) -> Optional[Any]:
        return await self._session.get(self.model, entity_id)

    def create(self, **fields: Any) -> Any:
        return self.model(**fields)

    async def save(self, entity: Any) -> Any:
        self._session.add(entity)
        await self._session.commit()
        return entity

    async def remove(self, entity: Any) -> None:
        await self._session.delete(entity)
        await self._session.commit()


class SQLAlchemyUserRepository(SQLAlchemyRepository, IUserRepository):
    """SQLAlchemy implementation for users."""

    model = UserModel


class SQLAlchemyPostRepository(SQLAlchemyRepository, IPostRepository):
    """SQLAlchemy implementation for posts."""

    model = PostModel

    async def find_by_user(self, user_id: int) -> List[Any]:
        """Get posts by owner id."""
        stmt = (
            select(PostModel)
            .where(PostModel.user_id == user_id)
            .order_by(PostModel.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
