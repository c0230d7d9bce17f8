"""Authentication routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from easyalert.api.deps import AppSettings, CurrentUser, Users, json_body
from easyalert.api.routes.users import EMPTY_CREDENTIALS, TokenResponse
from easyalert.errors import AuthenticationError, RecordNotFound, ValidationError
from easyalert.repositories import UserLookup
from easyalert.security import generate_token, reject_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Invalid credentials."


# Schemas
class Credentials(BaseModel):
    email: str | None = None
    password: str | None = None


@router.post("", response_model=TokenResponse)
async def authenticate(
    data: Annotated[Credentials, Depends(json_body(Credentials))],
    users: Users,
    settings: AppSettings,
):
    """Exchange email and password for the user's current token."""
    if not data.email or not data.password:
        raise ValidationError(EMPTY_CREDENTIALS)

    try:
        user = await users.find_user(UserLookup.EMAIL, data.email)
    except RecordNotFound:
        await run_in_threadpool(reject_password, data.password, settings.bcrypt_rounds)
        raise AuthenticationError(INVALID_CREDENTIALS) from None

    if not await run_in_threadpool(verify_password, user.password_digest, data.password):
        raise AuthenticationError(INVALID_CREDENTIALS)

    return TokenResponse(token=user.token)


@router.put("/refresh", response_model=TokenResponse)
async def refresh_token(current_user: CurrentUser, users: Users, settings: AppSettings):
    """Rotate the caller's token; the old one stops working."""
    current_user.token = generate_token(settings.token_length)
    user = await users.update_user(current_user)
    logger.info("Refreshed token of user %s", user.id)

    return TokenResponse(token=user.token)
