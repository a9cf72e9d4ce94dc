from fastapi import APIRouter

from checkin.api.reminders import router as reminders_router

router = APIRouter(prefix="/api", tags=["api"])
router.include_router(reminders_router)
