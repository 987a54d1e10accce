"""Request schemas for registration and login.

Both schemas normalize email addresses (trim + lowercase) before validation,
so every lookup and uniqueness check sees the same canonical value.
"""

import re
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from domain.model.errors import ValidationError

MAX_NAME_LENGTH = 255
MIN_NAME_LENGTH = 2
MAX_EMAIL_LENGTH = 255
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 100
# bcrypt input limit
MAX_PASSWORD_BYTES = 72

_PASSWORD_COMPLEXITY = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)')


def _normalize_email(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _check_email_length(value: str) -> str:
    if len(value) > MAX_EMAIL_LENGTH:
        raise PydanticCustomError(
            'email_too_long', f'Email must not exceed {MAX_EMAIL_LENGTH} characters'
        )
    return value


class RegisterRequest(BaseModel):
    """Registration payload. Role is never accepted from the client."""
    model_config = ConfigDict(extra='ignore')

    name: str
    email: EmailStr
    password: str
    role: Any = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('name')
    @classmethod
    def check_name_length(cls, v: str) -> str:
        if len(v) < MIN_NAME_LENGTH:
            raise PydanticCustomError(
                'name_too_short', f'Name must be at least {MIN_NAME_LENGTH} characters'
            )
        if len(v) > MAX_NAME_LENGTH:
            raise PydanticCustomError(
                'name_too_long', f'Name must not exceed {MAX_NAME_LENGTH} characters'
            )
        return v

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)

    @field_validator('email')
    @classmethod
    def check_email_length(cls, v: str) -> str:
        return _check_email_length(v)

    @field_validator('password')
    @classmethod
    def check_password_strength(cls, v: str) -> str:
        # Checked as it will be hashed: trimmed, UTF-8 encoded
        password = v.strip()
        if len(password) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                'password_too_short',
                f'Password must be at least {MIN_PASSWORD_LENGTH} characters',
            )
        if len(password) > MAX_PASSWORD_LENGTH:
            raise PydanticCustomError(
                'password_too_long',
                f'Password must not exceed {MAX_PASSWORD_LENGTH} characters',
            )
        if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise PydanticCustomError(
                'password_too_many_bytes',
                f'Password must not exceed {MAX_PASSWORD_BYTES} bytes',
            )
        if not _PASSWORD_COMPLEXITY.match(password):
            raise PydanticCustomError(
                'password_too_weak',
                'Password must contain at least one lowercase letter, '
                'one uppercase letter, and one number',
            )
        return v

    @field_validator('role')
    @classmethod
    def reject_client_role(cls, v):
        if v is not None:
            raise PydanticCustomError(
                'role_not_assignable',
                'Role is assigned by the server and cannot be set at registration',
            )
        return v


class LoginRequest(BaseModel):
    """Login payload. Only presence is checked for the password."""
    model_config = ConfigDict(extra='ignore')

    email: EmailStr
    password: str

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, v):
        return _normalize_email(v)

    @field_validator('email')
    @classmethod
    def check_email_length(cls, v: str) -> str:
        return _check_email_length(v)

    @field_validator('password')
    @classmethod
    def check_password_present(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError('password_required', 'Password is required')
        return v


def parse_payload(schema: type[BaseModel], payload: Any) -> BaseModel:
    """Validate a raw decoded request body against a schema.

    Raises:
        ValidationError: payload is not an object, or one or more fields
            are invalid. ``field_errors`` maps field name to messages.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Invalid JSON payload")

    try:
        return schema.model_validate(dict(payload))
    except PydanticValidationError as e:
        field_errors: dict[str, list[str]] = {}
        for error in e.errors():
            field = str(error['loc'][0]) if error['loc'] else '_'
            field_errors.setdefault(field, []).append(error['msg'])
        raise ValidationError("Validation failed", field_errors) from None
