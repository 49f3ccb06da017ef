"""
Blog Infrastructure Models
===========================

SQLAlchemy ORM models for users and their posts.

Column names follow the existing ``user``/``post`` schema (camelCase), so the
service can run against a database provisioned outside of it.
"""

from typing import List

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database import Base


class UserModel(Base):
    """Database model for a user. Owns zero or more posts."""
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column("firstName", String(100), nullable=False)
    last_name: Mapped[str] = mapped_column("lastName", String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)

    # Deletion of posts is left to the ON DELETE CASCADE constraint
    posts: Mapped[List["PostModel"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )


class PostModel(Base):
    """Database model for a post. Always owned by exactly one user."""
    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)

    user_id: Mapped[int] = mapped_column(
        "userId",
        Integer,
        ForeignKey("user.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True
    )

    user: Mapped[UserModel] = relationship(back_populates="posts", lazy="raise")
