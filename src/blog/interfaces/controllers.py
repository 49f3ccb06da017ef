"""
Blog Controllers (API Routes)
==============================

FastAPI routes for user and post endpoints.

Controllers are thin - they delegate to application services and map the
outcome to a status code. Unexpected failures become a 500 carrying only a
generic per-operation message.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.blog.application import (
    MessageResponse,
    PostCreateRequest,
    PostResponse,
    PostService,
    PostUpdateRequest,
    UserCreateRequest,
    UserResponse,
    UserService,
    UserUpdateRequest,
)
from src.blog.infrastructure import SQLAlchemyPostRepository, SQLAlchemyUserRepository
from src.infrastructure.database import get_session
from src.shared.api.middleware import translate_errors


users_router = APIRouter(prefix="/users", tags=["Users"])
posts_router = APIRouter(tags=["Posts"])


# ========== Example payloads for Swagger ==========

USER_EXAMPLE = {
    "id": 1,
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@example.com"
}

POST_EXAMPLE = {
    "id": 1,
    "title": "Notes on the Analytical Engine",
    "description": "First published algorithm.",
    "userId": 1
}

USER_NOT_FOUND = {"description": "User not found", "model": MessageResponse}
POST_NOT_FOUND = {"description": "Post not found", "model": MessageResponse}
SERVER_ERROR = {"description": "Storage or runtime failure", "model": MessageResponse}
NOT_READY = {"description": "Database not ready", "model": MessageResponse}


# ========== Dependencies ==========

async def get_user_service(
    session: AsyncSession = Depends(get_session)
) -> UserService:
    """Get user service bound to the request's session."""
    return UserService(SQLAlchemyUserRepository(session))


async def get_post_service(
    session: AsyncSession = Depends(get_session)
) -> PostService:
    """Get post service bound to the request's session."""
    return PostService(
        SQLAlchemyPostRepository(session),
        SQLAlchemyUserRepository(session)
    )


# ========== User Routes ==========

@users_router.get(
    "",
    response_model=List[UserResponse],
    summary="List all users",
    responses={
        200: {"content": {"application/json": {"example": [USER_EXAMPLE]}}},
        500: SERVER_ERROR,
        503: NOT_READY
    }
)
async def list_users(
    request: Request,
    service: UserService = Depends(get_user_service)
):
    with translate_errors("Error fetching users", request):
        users = await service.list_users()
    return [UserResponse.model_validate(user) for user in users]


@users_router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    description="""
    Create a user from `firstName`, `lastName` and `email`.

    Field contents are not validated. All three are stored as NOT NULL
    columns, so omitting one fails with a 500.
    """,
    responses={
        201: {"content": {"application/json": {"example": USER_EXAMPLE}}},
        500: SERVER_ERROR,
        503: NOT_READY
    }
)
async def create_user(
    request: Request,
    payload: Optional[UserCreateRequest] = None,
    service: UserService = Depends(get_user_service)
):
    with translate_errors("Error creating user", request):
        user = await service.create_user(payload or UserCreateRequest())
    return UserResponse.model_validate(user)


@users_router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user",
    description="""
    Partial update. Only fields that are present **and non-empty** overwrite
    the stored value: `{"firstName": ""}` leaves `firstName` unchanged.
    """,
    responses={404: USER_NOT_FOUND, 500: SERVER_ERROR, 503: NOT_READY}
)
async def update_user(
    request: Request,
    user_id: int,
    payload: Optional[UserUpdateRequest] = None,
    service: UserService = Depends(get_user_service)
):
    with translate_errors("Error updating user", request):
        user = await service.update_user(user_id, payload or UserUpdateRequest())
    return UserResponse.model_validate(user)


@users_router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user and all of their posts",
    responses={404: USER_NOT_FOUND, 500: SERVER_ERROR, 503: NOT_READY}
)
async def delete_user(
    request: Request,
    user_id: int,
    service: UserService = Depends(get_user_service)
):
    with translate_errors("Error deleting user", request):
        await service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")


@users_router.get(
    "/{user_id}/posts",
    response_model=List[PostResponse],
    tags=["Posts"],
    summary="List the posts of a user",
    description="An unknown user id returns an empty list, not a 404.",
    responses={
        200: {"content": {"application/json": {"example": [POST_EXAMPLE]}}},
        500: SERVER_ERROR,
        503: NOT_READY
    }
)
async def list_user_posts(
    request: Request,
    user_id: int,
    service: PostService = Depends(get_post_service)
):
    with translate_errors("Error fetching posts", request):
        posts = await service.list_posts_for_user(user_id)
    return [PostResponse.model_validate(post) for post in posts]


# ========== Post Routes ==========

@posts_router.post(
    "/posts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post for an existing user",
    responses={
        201: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: {"description": "title, description or userId missing", "model": MessageResponse},
        404: USER_NOT_FOUND,
        500: SERVER_ERROR,
        503: NOT_READY
    }
)
async def create_post(
    request: Request,
    payload: Optional[PostCreateRequest] = None,
    service: PostService = Depends(get_post_service)
):
    with translate_errors("Error creating post", request):
        post = await service.create_post(payload or PostCreateRequest())
    return PostResponse.model_validate(post)


@posts_router.put(
    "/posts/{post_id}",
    response_model=PostResponse,
    summary="Update a post",
    description="Only non-empty `title` / `description` are applied. The owner never changes.",
    responses={404: POST_NOT_FOUND, 500: SERVER_ERROR, 503: NOT_READY}
)
async def update_post(
    request: Request,
    post_id: int,
    payload: Optional[PostUpdateRequest] = None,
    service: PostService = Depends(get_post_service)
):
    with translate_errors("Error updating post", request):
        post = await service.update_post(post_id, payload or PostUpdateRequest())
    return PostResponse.model_validate(post)


@posts_router.delete(
    "/posts/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={404: POST_NOT_FOUND, 500: SERVER_ERROR, 503: NOT_READY}
)
async def delete_post(
    request: Request,
    post_id: int,
    service: PostService = Depends(get_post_service)
):
    with translate_errors("Error deleting post", request):
        await service.delete_post(post_id)
    return MessageResponse(message="Post deleted successfully")
