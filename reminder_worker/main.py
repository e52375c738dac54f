import logging
import time
from .scheduler import start_scheduler, stop_scheduler

logger = logging.getLogger(__name__)


def start_worker():
    """
    Run the reminder scheduler until interrupted.
    """
    start_scheduler()
    try:
        while True:
            time.sleep(60)
    except (KeyboardInterrupt, SystemExit):
        logger.info("Worker shutting down")
    finally:
        stop_scheduler()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    start_worker()
