"""
Authentication API endpoints for registration, login and the current user.
"""

from fastapi import APIRouter, Depends, Response, status
from landlord_api.config import settings
from landlord_api.models.user import User
from landlord_api.services.auth import AuthService
from landlord_api.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse
)
from landlord_api.schemas.user import UserResponse
from landlord_api.schemas.error import get_error_responses
from landlord_api.utils.dependencies import get_auth_service, get_current_user


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    description="Create an account. Emails are unique regardless of case.",
    responses=get_error_responses(400, 500)
)
async def register(
    register_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> RegisterResponse:
    """
    Register a new user.

    Raises:
        ValidationError: If a field is missing or the password is too short
        DuplicateEmailError: If the email is already registered
    """
    user = await auth_service.register(
        email=register_data.email,
        password=register_data.password,
        name=register_data.name
    )
    return RegisterResponse(user=UserResponse.model_validate(user.to_dict()))


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with email and password, returns a JWT access token",
    responses=get_error_responses(400, 401, 500)
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong
    """
    user, access_token = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )

    return LoginResponse(
        user=UserResponse.model_validate(user.to_dict()),
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60
    )


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
    responses=get_error_responses(401, 500)
)
async def get_me(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(current_user.to_dict())


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout",
    description="Tokens are stateless; the client discards its token.",
    responses=get_error_responses(401)
)
async def logout(current_user: User = Depends(get_current_user)) -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)
