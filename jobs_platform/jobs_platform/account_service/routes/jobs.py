"""
Public endpoints: job listing placeholder and health check.
"""
from fastapi import APIRouter, status
from datetime import datetime, timezone
from typing import Dict, Any

from ..schemas import MessageResponse

router = APIRouter(tags=["jobs"])


@router.get("/api/jobs", response_model=MessageResponse)
async def list_jobs():
    return MessageResponse(message="Jobs API works!")


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        dict: Health status and timestamp
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
