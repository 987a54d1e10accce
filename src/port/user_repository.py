from typing import Protocol

from domain.model.user import Role, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Emails passed in are already normalized (trimmed, lowercase).
    """
    def create(self, name: str, email: str, password_hash: str, role: Role) -> User:
        """Create a new user and return it.

        Raises DuplicateError if the email is already taken.
        """
        ...

    def find_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...
