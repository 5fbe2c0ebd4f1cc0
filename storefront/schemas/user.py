from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from storefront.models.user import Role


class RegisterRequest(SQLModel):
    """
    Sign-up payload.

    Validation rules:
      - email must be a valid EmailStr
      - name cannot be empty or whitespace
      - password cannot be empty
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class LoginRequest(SQLModel):
    """
    Sign-in payload.

    Email is a plain string on purpose: a malformed email simply fails
    to match, with the same generic error as a wrong password.
    """

    model_config = ConfigDict(extra="forbid")

    email: str
    password: str


class SessionRead(SQLModel):
    """Current session returned to clients (never includes the password)."""

    name: str
    email: str
    role: Role
    avatar: str | None = None
