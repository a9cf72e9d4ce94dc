import hmac

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from checkin.config import settings

log = structlog.get_logger()

router = APIRouter()


@router.post("/trigger-reminders")
async def trigger_reminders(request: Request):
    if settings.reminder_secret:
        expected = f"Bearer {settings.reminder_secret}"
        supplied = request.headers.get("Authorization", "")
        if not hmac.compare_digest(supplied.encode(), expected.encode()):
            return JSONResponse({"error": "Unauthorized"}, status_code=401)

    job = await request.app.state.arq_pool.enqueue_job("send_reminders")
    log.info("reminders_triggered")
    return {"success": True, "job_id": job.job_id if job else None}
