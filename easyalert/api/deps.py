"""FastAPI dependencies: repositories, settings, bearer auth and JSON bodies."""

import json
from typing import Annotated, TypeVar

from fastapi import Depends, Header, Request
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from easyalert.config import Settings
from easyalert.context import AppContext
from easyalert.errors import AuthenticationError, RecordNotFound, ValidationError
from easyalert.models.user import User
from easyalert.repositories import AlertRepository, UserLookup, UserRepository

MISSING_AUTH_HEADER = "Missing or invalid Authorization header."
INVALID_TOKEN = "Invalid token."
INVALID_JSON = "invalid json"

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_app_settings(context: Annotated[AppContext, Depends(get_context)]) -> Settings:
    return context.settings


def get_user_repository(context: Annotated[AppContext, Depends(get_context)]) -> UserRepository:
    return context.users


def get_alert_repository(context: Annotated[AppContext, Depends(get_context)]) -> AlertRepository:
    return context.alerts


AppSettings = Annotated[Settings, Depends(get_app_settings)]
Users = Annotated[UserRepository, Depends(get_user_repository)]
Alerts = Annotated[AlertRepository, Depends(get_alert_repository)]


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from ``Bearer <token>``; None when the header is unusable."""
    if not authorization:
        return None

    parts = authorization.split(" ")
    if len(parts) != 2:
        return None

    scheme, token = parts
    if scheme.lower() != "bearer" or not token:
        return None
    return token


async def get_current_user(
    users: Users,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the bearer token to its user."""
    token = bearer_token(authorization)
    if token is None:
        raise AuthenticationError(MISSING_AUTH_HEADER)

    try:
        return await users.find_user(UserLookup.TOKEN, token)
    except RecordNotFound:
        raise AuthenticationError(INVALID_TOKEN) from None


CurrentUser = Annotated[User, Depends(get_current_user)]


def json_body(schema: type[SchemaT]):
    """Dependency parsing the request body into ``schema``.

    Declared after ``CurrentUser`` in a route, it runs after the bearer
    check, so unauthenticated requests are rejected before their body is read.
    """

    async def parse(request: Request) -> SchemaT:
        raw = await request.body()
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise ValidationError(INVALID_JSON, status_code=422) from e

        # a literal null reads as an object with every field empty
        if data is None:
            data = {}
        try:
            return schema.model_validate(data)
        except SchemaError as e:
            raise ValidationError(INVALID_JSON, status_code=422) from e

    return parse
