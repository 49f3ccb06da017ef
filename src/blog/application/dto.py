"""
Blog Application DTOs
======================

Data Transfer Objects for the users/posts API layer.

Pydantic models for request/response serialization. JSON keys are camelCase
(``firstName``, ``userId``); Python attributes stay snake_case.

Request fields are all optional on purpose: presence is checked by the
services (posts) or by the database NOT NULL constraints (users), not by
schema validation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ========== Request DTOs ==========

class UserCreateRequest(CamelModel):
    """Request model for user creation."""
    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    email: Optional[str] = Field(None, description="Email address (not validated)")


class UserUpdateRequest(CamelModel):
    """Request model for user update. Only truthy fields are applied."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class PostCreateRequest(CamelModel):
    """Request model for post creation. All three fields are required."""
    title: Optional[str] = Field(None, description="Post title")
    description: Optional[str] = Field(None, description="Post body")
    user_id: Optional[int] = Field(None, description="Owning user id")


class PostUpdateRequest(CamelModel):
    """Request model for post update. Ownership cannot be changed."""
    title: Optional[str] = None
    description: Optional[str] = None


# ========== Response DTOs ==========

class UserResponse(CamelModel):
    """Response model for a user."""
    id: int
    first_name: str
    last_name: str
    email: str


class PostResponse(CamelModel):
    """Response model for a post."""
    id: int
    title: str
    description: str
    user_id: int


class MessageResponse(BaseModel):
    """Response model for confirmations and errors."""
    message: str
