import logging
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from reminder_worker.config import NotifierConfig
from reminder_worker.notifier import check_scheduled_reminders
from reminder_worker.processors.apis import create_supabase_client
from server.dependencies import CORS_HEADERS, get_notifier_config
from server.routes.prometheus import record_reminder_check
from server.schemas import CheckRemindersRequest, CheckRemindersResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# =========================================================
# SCHEDULED REMINDER CHECK
# Called by the scheduler (or any cron) to send due-window emails
# =========================================================

@router.options("")
def check_reminders_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(
    "",
    response_model=CheckRemindersResponse,
    responses={500: {"model": ErrorResponse}},
)
async def check_reminders(
    request: Request,
    config: NotifierConfig = Depends(get_notifier_config)
):
    """Scan incomplete reminders and email the ones inside a due window."""
    logger.info("check-scheduled-reminders called")

    # The body is optional; anything unparsable means defaults
    try:
        body = await request.json()
    except Exception:
        body = None

    options = CheckRemindersRequest.from_body(body)
    logger.info(
        f"Using timezone offset {options.timezone_offset}h, time format {options.time_format.value}"
    )

    try:
        client = create_supabase_client(config)
        summary = await run_in_threadpool(
            check_scheduled_reminders,
            client,
            config,
            options.timezone_offset,
            options.time_format.value,
        )
    except Exception as e:
        logger.error(f"Error in check-scheduled-reminders: {e}")
        record_reminder_check(None)
        return JSONResponse({"error": str(e)}, status_code=500, headers=CORS_HEADERS)

    record_reminder_check(summary)
    return JSONResponse(summary, status_code=200, headers=CORS_HEADERS)
