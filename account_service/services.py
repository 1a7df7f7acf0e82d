"""
Account orchestration: registration, login and profile management.
"""
from dataclasses import dataclass
import logging

from .auth import PasswordHasher, TokenIssuer
from .errors import ConflictError, InvalidInputError, NotFoundError, UnauthenticatedError
from .models import User
from .schemas import AuthPayload, PasswordChange, ProfileUpdate, RegisterRequest, UserPublic
from .store import CredentialStore, DUPLICATE_EMAIL_MESSAGE

logger = logging.getLogger(__name__)

# Shared by unknown-email and wrong-password so login is not an existence oracle
INVALID_CREDENTIALS = "Invalid credentials"

PROFILE_FIELDS = ("full_name", "email", "gender", "phone", "birth_date")


@dataclass(frozen=True)
class AuthenticatedUser:
    """Principal produced by bearer token verification."""
    user_id: int
    profile: UserPublic


class AccountService:
    def __init__(self, store: CredentialStore, hasher: PasswordHasher, tokens: TokenIssuer):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def register(self, payload: RegisterRequest) -> AuthPayload:
        if self.store.find_by_email(payload.email) is not None:
            logger.info("AUTH register_conflict email=%s", payload.email)
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        user = User(
            full_name=payload.full_name,
            email=payload.email,
            gender=payload.gender,
            phone=payload.phone,
            birth_date=payload.birth_date,
        )
        user.set_password(payload.password, self.hasher)
        user = self.store.create(user)

        logger.info("AUTH register_success user_id=%s email=%s", user.id, user.email)
        return self._with_token(user)

    def login(self, email: str, password: str) -> AuthPayload:
        if not email or not password:
            raise InvalidInputError("Please provide email and password")

        user = self.store.find_by_email(email, include_secret=True)
        if user is None:
            self.hasher.dummy_verify()
            logger.info("AUTH login_failure user_id=None email=%s", email.strip().lower())
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        if not self.hasher.verify(password, user.password_hash):
            logger.info("AUTH login_failure user_id=%s email=%s", user.id, user.email)
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        logger.info("AUTH login_success user_id=%s email=%s", user.id, user.email)
        return self._with_token(user)

    def get_profile(self, principal: AuthenticatedUser) -> UserPublic:
        return principal.profile

    def update_profile(self, principal: AuthenticatedUser, payload: ProfileUpdate) -> UserPublic:
        user = self._load(principal)

        if payload.email is not None and payload.email != user.email:
            other = self.store.find_by_email(payload.email)
            if other is not None and other.id != user.id:
                raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        for field in PROFILE_FIELDS:
            value = getattr(payload, field)
            if value is not None:
                setattr(user, field, value)

        user = self.store.save(user)
        logger.info("AUTH profile_update user_id=%s", user.id)
        return UserPublic.model_validate(user)

    def change_password(self, principal: AuthenticatedUser, payload: PasswordChange) -> None:
        if not payload.current_password:
            raise InvalidInputError("Please provide the current password")

        user = self._load(principal)
        if not self.hasher.verify(payload.current_password, user.password_hash):
            logger.info("AUTH password_change_failure user_id=%s", user.id)
            raise UnauthenticatedError("Current password is incorrect")

        user.set_password(payload.new_password, self.hasher)
        self.store.save(user)
        logger.info("AUTH password_change user_id=%s", user.id)

    def list_users(self) -> list:
        return [UserPublic.model_validate(user) for user in self.store.list_all()]

    def _load(self, principal: AuthenticatedUser) -> User:
        user = self.store.find_by_id(principal.user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _with_token(self, user: User) -> AuthPayload:
        token = self.tokens.issue(user.id)
        return AuthPayload(**UserPublic.model_validate(user).model_dump(), token=token)
