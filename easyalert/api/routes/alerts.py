"""Alert routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from easyalert.api.deps import Alerts, CurrentUser, json_body
from easyalert.api.responses import JSON_CONTENT_TYPE, format_timestamp
from easyalert.errors import ValidationError
from easyalert.models.alert import Alert, AlertStatus
from easyalert.repositories import AlertLookup

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_SUBJECT_OR_MESSAGE = "Subject or message not given."


# Schemas
class AlertCreate(BaseModel):
    # status and sent_at are not accepted from clients
    subject: str | None = None
    message: str | None = None


class AlertResponse(BaseModel):
    subject: str
    status: str
    sent_at: str | None = None
    created_at: str


def to_response(alert: Alert) -> AlertResponse:
    return AlertResponse(
        subject=alert.subject,
        status=alert.human_status,
        sent_at=format_timestamp(alert.sent_at) if alert.sent_at else None,
        created_at=format_timestamp(alert.created_at),
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
async def create_alert(
    current_user: CurrentUser,
    data: Annotated[AlertCreate, Depends(json_body(AlertCreate))],
    alerts: Alerts,
):
    """Record a new pending alert for the caller."""
    if not data.subject or not data.message:
        raise ValidationError(MISSING_SUBJECT_OR_MESSAGE, status_code=422)

    alert = await alerts.create_alert(
        Alert(
            subject=data.subject,
            status=AlertStatus.PENDING,
            sent_at=None,
            user_id=current_user.id,
        )
    )
    logger.info("Created alert %s for user %s", alert.id, current_user.id)

    return Response(status_code=status.HTTP_201_CREATED, media_type=JSON_CONTENT_TYPE)


@router.get("", response_model=list[AlertResponse], response_model_exclude_none=True)
async def list_alerts(current_user: CurrentUser, alerts: Alerts):
    """List the caller's alerts in the order they were created."""
    found = await alerts.find_alerts(AlertLookup.USER_ID, current_user.id)
    return [to_response(a) for a in found]
