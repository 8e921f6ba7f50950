import datetime
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_availability_service
from app.services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["availability"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@router.get("/availability")
async def get_availability(
    date: Optional[str] = None,
    service: AvailabilityService = Depends(get_availability_service),
):
    """
    Занятость всех комнат за месяц `date` и следующий за ним.
    """
    if not date:
        return _error(400, "Missing required parameter: date (YYYY-MM-DD)")
    try:
        requested = datetime.date.fromisoformat(date)
    except ValueError:
        return _error(400, "Invalid date format. Use YYYY-MM-DD.")

    result = await service.fetch(requested)
    if not result.success:
        logger.error(f"Availability request for {requested} failed: {result.error}")
        return _error(500, result.error or "Internal server error")

    return result.model_dump(mode="json", by_alias=True)
