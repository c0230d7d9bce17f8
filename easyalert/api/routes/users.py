"""User routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from easyalert.api.deps import AppSettings, CurrentUser, Users, json_body
from easyalert.errors import ValidationError
from easyalert.models.user import User
from easyalert.security import generate_token, hash_password

logger = logging.getLogger(__name__)

router = APIRouter()

EMPTY_CREDENTIALS = "Empty email or password."


# Schemas
class UserCreate(BaseModel):
    email: str | None = None
    password: str | None = None


class ProfileUpdate(BaseModel):
    email: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    token: str


class ProfileResponse(BaseModel):
    email: str
    token: str


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
async def register(
    data: Annotated[UserCreate, Depends(json_body(UserCreate))],
    users: Users,
    settings: AppSettings,
):
    """Register a new user and hand out its token."""
    if not data.email or not data.password:
        raise ValidationError(EMPTY_CREDENTIALS)

    token = generate_token(settings.token_length)
    password_digest = await run_in_threadpool(hash_password, data.password, settings.bcrypt_rounds)

    # ConflictError for a taken email surfaces as 400 with its message
    user = await users.create_user(
        User(
            email=data.email,
            password_digest=password_digest,
            token=token,
            admin=False,
        )
    )
    logger.info("Registered user %s", user.id)

    return TokenResponse(token=user.token)


@router.put("/me", response_model=ProfileResponse)
async def update_profile(
    current_user: CurrentUser,
    data: Annotated[ProfileUpdate, Depends(json_body(ProfileUpdate))],
    users: Users,
    settings: AppSettings,
):
    """Change email and/or password; omitted or empty fields stay as they are."""
    if data.email:
        current_user.email = data.email
    if data.password:
        current_user.password_digest = await run_in_threadpool(
            hash_password, data.password, settings.bcrypt_rounds
        )

    user = await users.update_user(current_user)
    logger.info("Updated profile of user %s", user.id)

    return ProfileResponse(email=user.email, token=user.token)
