"""Domain models for users, refresh tokens and login results."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Role(str, Enum):
    """Enumeration of user roles."""
    ADMIN = 'ADMIN'
    PRESIDENT = 'PRESIDENT'
    VICE_PRESIDENT = 'VICE_PRESIDENT'


# Role assigned by the server at registration (non-administrative)
DEFAULT_ROLE = Role.VICE_PRESIDENT


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    name: str
    email: str
    password_hash: str
    role: Role = DEFAULT_ROLE
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class PublicUser:
    """Subset of User fields that may leave the service (never the hash)."""
    id: str
    name: str
    email: str
    role: Role
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> 'PublicUser':
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys used on the wire."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role.value,
            'isActive': self.is_active,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass
class RefreshToken:
    """Opaque refresh token bound to a user (Entity)."""
    token: str
    user_id: str
    expires_at: datetime
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class AccessTokenPayload:
    """Decoded claims of a verified access token (Value Object)."""
    user_id: str
    email: str
    role: str
    type: str
    iat: int
    exp: int


@dataclass(frozen=True)
class LoginResult:
    """Tokens and user projection returned by a successful login."""
    access_token: str
    refresh_token: str
    user: PublicUser

    def to_dict(self) -> dict:
        return {
            'accessToken': self.access_token,
            'refreshToken': self.refresh_token,
            'user': self.user.to_dict(),
        }
