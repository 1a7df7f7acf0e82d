"""
FastAPI dependencies wiring request-scoped collaborators to app-wide state.
"""
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session
from typing import Optional

from .auth import extract_bearer_token
from .db import get_db
from .errors import UnauthenticatedError
from .schemas import UserPublic
from .services import AccountService, AuthenticatedUser
from .store import CredentialStore


def get_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_account_service(request: Request, store: CredentialStore = Depends(get_store)) -> AccountService:
    state = request.app.state
    return AccountService(store=store, hasher=state.hasher, tokens=state.token_issuer)


def get_current_user(
    request: Request,
    store: CredentialStore = Depends(get_store),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> AuthenticatedUser:
    """
    Resolve the bearer token to an authenticated principal.

    Missing header, bad signature, expiry and a since-deleted user all end as
    UnauthenticatedError (401); nothing downstream runs in those cases.
    """
    token = extract_bearer_token(authorization)
    user_id = request.app.state.token_verifier.verify(token)

    user = store.find_by_id(user_id)
    if user is None:
        raise UnauthenticatedError("Not authorized, user not found")
    return AuthenticatedUser(user_id=user.id, profile=UserPublic.model_validate(user))
