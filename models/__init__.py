"""Database models package.

This package contains the SQLAlchemy ORM model definitions for the application.
Each model lives in its own module (user, task) and is re-exported here for
convenience, together with the reset ticket value object stored on users.
"""

# Re-export model classes from individual modules
from .password_reset import ResetTicket  # noqa: F401
from .user import User, CredentialKind, normalize_email  # noqa: F401
from .task import Task, TaskStatus  # noqa: F401

__all__ = ["User", "CredentialKind", "normalize_email", "Task", "TaskStatus", "ResetTicket"]
