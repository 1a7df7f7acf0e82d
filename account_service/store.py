"""
SQLAlchemy-backed credential store.

Reads never load the password hash unless explicitly asked for it, and every
persistence failure is converted into the service's error taxonomy so callers
only deal with ConflictError / StoreError.
"""
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, undefer
from typing import List, Optional
import logging

from .errors import ConflictError, StoreError
from .models import User, utcnow

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "A user with this email is already registered"


class CredentialStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str, include_secret: bool = False) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower())
        if include_secret:
            stmt = stmt.options(undefer(User.password_hash))
        try:
            return self.db.execute(stmt).scalars().first()
        except SQLAlchemyError as e:
            raise StoreError("Failed to query users", error=str(e)) from e

    def find_by_id(self, user_id: int) -> Optional[User]:
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            raise StoreError("Failed to query users", error=str(e)) from e

    def create(self, user: User) -> User:
        """Insert a new record; the unique index on email settles concurrent duplicates."""
        now = utcnow()
        user.created_at = now
        user.updated_at = now
        self.db.add(user)
        return self._commit(user)

    def save(self, user: User) -> User:
        user.updated_at = utcnow()
        self.db.add(user)
        return self._commit(user)

    def list_all(self) -> List[User]:
        try:
            return list(self.db.execute(select(User).order_by(User.id)).scalars().all())
        except SQLAlchemyError as e:
            raise StoreError("Failed to list users", error=str(e)) from e

    def _commit(self, user: User) -> User:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Unique constraint rejected write for email=%s", user.email)
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to persist user email=%s: %s", user.email, e)
            raise StoreError("Failed to save user", error=str(e)) from e
        self.db.refresh(user)
        return user
