from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.deps import get_availability_service
from app.services.availability_service import AvailabilityService
from app.services.sheets_service import GoogleSheetsService

router = APIRouter(prefix="/api", tags=["cache"])

AVAILABLE_ACTIONS = {
    "stats": "GET /api/cache?action=stats - Get cache statistics",
    "clear": "GET /api/cache?action=clear - Clear all cache",
    "clearSpecific": "GET /api/cache?action=clear&spreadsheetId=ID - Clear specific spreadsheet cache",
}


@router.get("/cache")
async def manage_cache(
    action: Optional[str] = None,
    spreadsheet_id: Optional[str] = Query(None, alias="spreadsheetId"),
    service: AvailabilityService = Depends(get_availability_service),
):
    cache = service.sheets.cache

    if action == "stats":
        return {"success": True, "data": cache.stats()}

    if action == "clear":
        if spreadsheet_id:
            if not GoogleSheetsService.validate_spreadsheet_id(spreadsheet_id):
                return JSONResponse(
                    status_code=400,
                    content={"success": False, "error": f"Invalid spreadsheetId: {spreadsheet_id}"},
                )
            cache.clear(spreadsheet_id)
            return {"success": True, "message": f"Cache cleared for spreadsheet: {spreadsheet_id}"}
        cache.clear()
        return {"success": True, "message": "All cache cleared"}

    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Invalid action. Use 'stats' or 'clear'",
            "availableActions": AVAILABLE_ACTIONS,
        },
    )
