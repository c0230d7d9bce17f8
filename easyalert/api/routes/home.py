"""API root."""

from fastapi import APIRouter

router = APIRouter()


@router.get("")
async def home():
    """Welcome message."""
    return {"easyalert": "Alerting made easy"}
