from typing import Optional

from app.services.availability_service import AvailabilityService
from app.services.notification_service import NotificationService

# One instance per process, so the tab cache is shared between requests
_availability_service: Optional[AvailabilityService] = None
_notification_service: Optional[NotificationService] = None


def get_availability_service() -> AvailabilityService:
    global _availability_service
    if _availability_service is None:
        _availability_service = AvailabilityService()
    return _availability_service


def get_notification_service() -> NotificationService:
    global _notification_service
    if _notification_service is None:
        _notification_service = NotificationService()
    return _notification_service
