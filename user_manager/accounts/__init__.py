"""Local account database access and the shared exception hierarchy."""

from .exceptions import UserManagerError
from .store import AccountStore

__all__ = ["AccountStore", "UserManagerError"]
