from fastapi import APIRouter
from . import reminders, notifications, prometheus

router = APIRouter()

router.include_router(reminders.router, prefix="/check-scheduled-reminders", tags=["Reminders"])
router.include_router(notifications.router, prefix="/send-email-notification", tags=["Notifications"])
router.include_router(prometheus.router, prefix="/metrics", tags=["Metrics"])
