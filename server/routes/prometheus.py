from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import APIRouter, Request, Response
import time

router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP Requests",
    ["method", "endpoint", "http_status"]
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["endpoint"]
)

EXCEPTION_COUNT = Counter(
    "http_exceptions_total",
    "Total exceptions",
    ["endpoint"]
)

REMINDER_CHECKS = Counter(
    "reminder_checks_total",
    "Scheduled reminder checks by outcome",
    ["outcome"]
)

REMINDER_EMAILS_SENT = Counter(
    "reminder_emails_sent_total",
    "Due-window reminder emails accepted by the email provider"
)

@router.get("/")
def metrics():
    data = generate_latest()
    return Response(data, media_type=CONTENT_TYPE_LATEST)

def record_reminder_check(summary: dict = None):
    """Count one notifier run; a missing summary means the run failed."""
    if summary is None:
        REMINDER_CHECKS.labels(outcome="error").inc()
        return
    REMINDER_CHECKS.labels(outcome="success").inc()
    REMINDER_EMAILS_SENT.inc(summary.get("emailsSent", 0))

async def metrics_middleware(request: Request, call_next):
    start_time = time.time()

    try:
        response = await call_next(request)
    except Exception:
        EXCEPTION_COUNT.labels(endpoint=request.url.path).inc()
        raise

    process_time = time.time() - start_time

    REQUEST_LATENCY.labels(endpoint=request.url.path).observe(process_time)
    REQUEST_COUNT.labels(
        method=request.method,
        endpoint=request.url.path,
        http_status=response.status_code
    ).inc()

    return response
