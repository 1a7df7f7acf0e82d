"""
Auth Router - registration, login and profile endpoints.
"""
from fastapi import APIRouter, Depends, status

from ..deps import get_account_service, get_current_user
from ..schemas import (
    ApiResponse,
    AuthResponse,
    LoginRequest,
    PasswordChange,
    ProfileUpdate,
    RegisterRequest,
    UserListResponse,
    UserResponse,
)
from ..services import AccountService, AuthenticatedUser

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED, response_model_exclude_none=True)
def register(payload: RegisterRequest, service: AccountService = Depends(get_account_service)):
    data = service.register(payload)
    return AuthResponse(message="User registered successfully", data=data)


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
def login(credentials: LoginRequest, service: AccountService = Depends(get_account_service)):
    data = service.login(credentials.email, credentials.password)
    return AuthResponse(message="Login successful", data=data)


@router.get("/me", response_model=UserResponse, response_model_exclude_none=True)
def get_me(
    user: AuthenticatedUser = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    return UserResponse(data=service.get_profile(user))


@router.put("/updateprofile", response_model=UserResponse, response_model_exclude_none=True)
def update_profile(
    payload: ProfileUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    data = service.update_profile(user, payload)
    return UserResponse(message="Profile updated successfully", data=data)


@router.put("/updatepassword", response_model=ApiResponse, response_model_exclude_none=True)
def update_password(
    payload: PasswordChange,
    user: AuthenticatedUser = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    service.change_password(user, payload)
    return ApiResponse(message="Password updated successfully")


@router.get("/users", response_model=UserListResponse, response_model_exclude_none=True)
def list_users(
    _user: AuthenticatedUser = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    users = service.list_users()
    return UserListResponse(count=len(users), data=users)
