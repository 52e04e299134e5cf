"""
API Package - Exports all API routers
"""

from app.api import auth, users, user_tasks, admin, admin_tasks

__all__ = ["auth", "users", "user_tasks", "admin", "admin_tasks"]
