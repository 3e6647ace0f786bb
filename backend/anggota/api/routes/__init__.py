"""Route modules for the Anggota API."""
from . import auth, users

__all__ = ["auth", "users"]
