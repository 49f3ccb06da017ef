"""
Blog Interfaces Layer
=====================

FastAPI route handlers for users and posts. This is the outermost layer -
it handles HTTP requests/responses and delegates to application services.
"""

from src.blog.interfaces.controllers import users_router, posts_router

__all__ = ["users_router", "posts_router"]
