"""SQLAlchemy models exposed for metadata creation and imports."""
from .user import User, UserRole

__all__ = ["User", "UserRole"]
