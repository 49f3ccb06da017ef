"""
Blog Module
===========

Users and the posts they own.

Responsibilities:
- Persist users and posts (one-to-many, cascading delete in the database)
- CRUD over HTTP: /users, /users/{id}/posts, /posts
"""

__version__ = "1.0.0"
