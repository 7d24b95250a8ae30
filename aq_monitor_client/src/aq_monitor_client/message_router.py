import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class MessageKind(str, Enum):
    CURRENT = "current"
    HISTORY = "history"
    STATUS = "status"
    UNKNOWN = "unknown"


@dataclass
class RoutedMessage:
    kind: MessageKind
    payload: Any


def decode_frame(text: str) -> Optional[Any]:
    """Decode a transport frame, returning ``None`` when it is not valid JSON."""
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        logger.warning("Dropping undecodable frame (%s): %.100r", e, text)
        return None


def route(payload: Any) -> RoutedMessage:
    """
    Classify a decoded payload.

    Priority order: live reading, history snapshot, status snapshot. Anything
    else is UNKNOWN and callers drop it.
    """
    if not isinstance(payload, dict):
        logger.debug("Ignoring non-object payload of type %s", type(payload).__name__)
        return RoutedMessage(MessageKind.UNKNOWN, payload)

    if payload.get("type") == "current":
        return RoutedMessage(MessageKind.CURRENT, payload)
    if "history" in payload:
        return RoutedMessage(MessageKind.HISTORY, payload["history"])
    if payload.get("type") == "status":
        return RoutedMessage(MessageKind.STATUS, payload)

    logger.debug("Ignoring message with unknown shape: keys=%s", sorted(payload))
    return RoutedMessage(MessageKind.UNKNOWN, payload)
