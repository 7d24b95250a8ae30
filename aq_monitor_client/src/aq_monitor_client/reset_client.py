import logging
from enum import Enum

import requests

logger = logging.getLogger(__name__)

RESET_PATH = "/api/reset"


class ResetResult(str, Enum):
    OK = "ok"
    REJECTED = "rejected"
    ERROR = "error"


RESET_NOTICES = {
    ResetResult.OK: "Device reset initiated. The device will restart.",
    ResetResult.REJECTED: "Failed to reset device.",
    ResetResult.ERROR: "Error communicating with device.",
}


def reset_device(base_url: str, timeout: float = 5.0) -> ResetResult:
    """
    Ask the device to restart.

    Returns OK when the device acknowledged the request, REJECTED on a non-2xx
    response and ERROR when the device could not be reached. Nothing is raised.
    """
    url = f"{base_url.rstrip('/')}{RESET_PATH}"
    logger.info("Requesting device reset at %s", url)
    try:
        resp = requests.post(url, timeout=timeout)
    except requests.RequestException as e:
        logger.error("Reset error: %s", e)
        return ResetResult.ERROR

    if not resp.ok:
        logger.warning("Device rejected reset, status %s", resp.status_code)
        return ResetResult.REJECTED
    return ResetResult.OK


def reset_notice(result: ResetResult) -> str:
    return RESET_NOTICES[result]
