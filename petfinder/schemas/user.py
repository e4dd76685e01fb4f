"""User request/response schemas - API contract and validation."""

from pydantic import BaseModel, Field, field_validator


def required_text(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be empty")
    return value.strip()


def valid_email(value: str) -> str:
    value = value.strip()
    if "@" not in value:
        raise ValueError("invalid email")
    return value


class UserCreate(BaseModel):
    name: str
    email: str
    # bcrypt accepts max 72 bytes
    password: str = Field(..., min_length=1, max_length=72)
    phone: str

    @field_validator("name", "phone")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return required_text(value)

    @field_validator("email")
    @classmethod
    def email_shape(cls, value: str) -> str:
        return valid_email(value)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def trimmed(cls, value: str) -> str:
        # Same normalisation as registration, so the stored form matches
        return required_text(value)


class ProfileUpdate(BaseModel):
    """Partial update: omitted fields keep their stored value."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    password: str | None = Field(default=None, min_length=6, max_length=72)

    @field_validator("name", "phone")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        return None if value is None else required_text(value)

    @field_validator("email")
    @classmethod
    def email_shape(cls, value: str | None) -> str | None:
        return None if value is None else valid_email(value)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class ProfileResponse(BaseModel):
    message: str
    user: UserResponse
