"""
Shared Kernel Module
====================

Shared infrastructure used by the blog module and the application entry point:
logging, HTTP middleware and exception handlers.

DO NOT add user or post business logic to the shared kernel.
"""

__version__ = "1.0.0"
