"""
Task Tracker API

Multi-tenant task tracking service: users manage their own tasks,
administrators manage every account and task.

Usage:
    uvicorn app.main:app --reload
"""

__version__ = "1.0.0"
