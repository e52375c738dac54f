import logging
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from reminder_worker.config import NotifierConfig
from reminder_worker.send import NO_DESCRIPTION, send_emailjs
from server.dependencies import CORS_HEADERS, get_notifier_config
from server.schemas import EmailNotificationRequest, EmailNotificationResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# =========================================================
# SINGLE EMAIL NOTIFICATION
# Sends one reminder email with caller-rendered fields
# =========================================================

@router.options("")
def send_email_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(
    "",
    response_model=EmailNotificationResponse,
    responses={500: {"model": ErrorResponse}},
)
async def send_email_notification(
    payload: EmailNotificationRequest,
    config: NotifierConfig = Depends(get_notifier_config)
):
    logger.info(f"Sending email to: {payload.to}, reminder: {payload.reminder_title}")

    if not config.email_configured:
        logger.error("Missing EmailJS configuration")
        return JSONResponse(
            {"error": "Email configuration is incomplete"}, status_code=500, headers=CORS_HEADERS
        )

    template_params = {
        "email": payload.to,
        "reminder_title": payload.reminder_title,
        "reminder_type": payload.reminder_type,
        "due_date": payload.due_date,
        "priority_level": payload.priority_level,
        "priority_icon": payload.priority_icon,
        "description": payload.description or NO_DESCRIPTION,
        "timing_text": payload.timing_text,
        "settings_link": config.settings_link,
    }

    result, status_code = await run_in_threadpool(send_emailjs, template_params, config)
    if not 200 <= status_code < 300:
        return JSONResponse(
            {"error": f"EmailJS failed: {result.get('message', '')}"},
            status_code=500,
            headers=CORS_HEADERS,
        )

    logger.info("✅ Email sent successfully via EmailJS")
    return JSONResponse({"success": True}, status_code=200, headers=CORS_HEADERS)
