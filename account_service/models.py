from sqlalchemy import Column, Integer, String, Date, DateTime, Enum
from sqlalchemy.orm import deferred
from datetime import datetime, timezone
import enum

from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(100), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # Not loaded by default reads; the store undefers it for login checks
    password_hash = deferred(Column(String, nullable=False))
    gender = Column(
        Enum(Gender, native_enum=False, values_callable=lambda members: [m.value for m in members]),
        nullable=False
    )
    phone = Column(String(15), nullable=False)
    birth_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    def set_password(self, plaintext: str, hasher) -> None:
        """
        Replace the stored credential with the hash of a new plaintext password.

        This is the only place password_hash is assigned; saving a record never
        re-hashes it.
        """
        self.password_hash = hasher.hash(plaintext)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
