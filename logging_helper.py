import logging

from settings import get_settings

RED = "\033[91m"
YELLOW = "\033[93m"
GREEN = "\033[92m"
RESET = "\033[0m"
WHITE = "\033[97m"

logging.basicConfig(
    level=get_settings().log_level,
    format='%(asctime)s.%(msecs)03d - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

logger = logging.getLogger("dummyjson_suite")


def color_for(status):
    status = status.lower()
    if status == "error":
        return RED
    if status == "warning":
        return YELLOW
    if status == "good":
        return GREEN
    return WHITE


def status_for_code(status_code: int) -> str:
    """Map an HTTP status code onto a log_status level."""
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "warning"
    return "good"


def log_status(status, message, extra=""):
    color = color_for(status)

    if not extra:
        logger.info(f"{color}{message}{RESET}")
    else:
        logger.info(f"{color}{message}{extra}{RESET}")
