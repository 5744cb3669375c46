"""Audit events raised by the wizard.

There is no message bus: an event is a log line plus an entry in an
in-process buffer that tests and the integration harness can drain.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

PAGE_SAVED = "application.page_saved"
APPLICATION_DATA_SAVED = "application.data_saved"
OASYS_DATA_IMPORTED = "application.oasys_imported"
APPLICATION_SUBMITTED = "application.submitted"

Event = Dict[str, Any]

EVENT_BUFFER: List[Event] = []


def publish(event_type: str, payload: Dict[str, Any]) -> None:
    logger.info("event type=%s application_id=%s", event_type, payload.get("application_id"))
    EVENT_BUFFER.append({"type": event_type, "payload": payload})


def get_buffered_events(clear: bool = True) -> List[Event]:
    """Snapshot the buffer, emptying it unless `clear` is False."""
    events = EVENT_BUFFER[:]
    if clear:
        del EVENT_BUFFER[:]
    return events


__all__ = [
    "PAGE_SAVED",
    "APPLICATION_DATA_SAVED",
    "OASYS_DATA_IMPORTED",
    "APPLICATION_SUBMITTED",
    "EVENT_BUFFER",
    "publish",
    "get_buffered_events",
]
