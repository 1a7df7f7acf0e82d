from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from typing import List, Optional
import re

from .models import Gender

EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$", re.ASCII)
PHONE_PATTERN = re.compile(r"^[0-9]{9,15}$")
FULL_NAME_MIN, FULL_NAME_MAX = 3, 100
PASSWORD_MIN = 6
MIN_AGE, MAX_AGE = 18, 150


def calculate_age(born: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


def clean_full_name(value: str) -> str:
    value = value.strip()
    if not FULL_NAME_MIN <= len(value) <= FULL_NAME_MAX:
        raise ValueError(f"Full name must be between {FULL_NAME_MIN} and {FULL_NAME_MAX} characters")
    return value


def clean_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please provide a valid email")
    return value


def clean_phone(value: str) -> str:
    value = value.strip()
    if not PHONE_PATTERN.match(value):
        raise ValueError("Please provide a valid phone number (9 to 15 digits, numbers only)")
    return value


def clean_password(value: str) -> str:
    if len(value) < PASSWORD_MIN:
        raise ValueError(f"Password must be at least {PASSWORD_MIN} characters")
    return value


def check_birth_date(value: date) -> date:
    if not MIN_AGE <= calculate_age(value) <= MAX_AGE:
        raise ValueError(f"User must be between {MIN_AGE} and {MAX_AGE} years old")
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RegisterRequest(CamelModel):
    full_name: str
    email: str
    password: str
    gender: Gender
    phone: str
    birth_date: date

    normalize_full_name = field_validator("full_name")(clean_full_name)
    normalize_email = field_validator("email")(clean_email)
    check_password = field_validator("password")(clean_password)
    normalize_phone = field_validator("phone")(clean_phone)
    check_age = field_validator("birth_date")(check_birth_date)


class LoginRequest(CamelModel):
    # Optional so that missing credentials surface as a 400, not a 422
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdate(CamelModel):
    """Partial update: absent or empty fields keep their stored value."""
    full_name: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[Gender] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else clean_full_name(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else clean_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else clean_phone(v)

    @field_validator("birth_date")
    @classmethod
    def validate_birth_date(cls, v: Optional[date]) -> Optional[date]:
        return None if v is None else check_birth_date(v)


class PasswordChange(CamelModel):
    current_password: Optional[str] = None
    new_password: str

    check_new_password = field_validator("new_password")(clean_password)


# Responses

class UserPublic(CamelModel):
    """Public-safe projection of a user record; never carries the password hash."""
    id: int
    full_name: str
    email: str
    gender: Gender
    phone: str
    birth_date: date
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthPayload(UserPublic):
    token: str


class ApiResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None


class UserResponse(ApiResponse):
    data: UserPublic


class AuthResponse(ApiResponse):
    data: AuthPayload


class UserListResponse(ApiResponse):
    count: int
    data: List[UserPublic]
