from reminder_worker.config import NotifierConfig

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

def get_notifier_config() -> NotifierConfig:
    """
    Resolve store and email settings once per request.
    The same object is handed down to every notification step.
    """
    return NotifierConfig()
