"""
Resume lifecycle event logging.

Appends one JSON object per line to the file named by RESUMEKIT_EVENTS_FILE.
The event log is an audit trail of what happened to each resume (created,
saved, deleted, visibility changed); it is never read back by the store.
When RESUMEKIT_EVENTS_FILE is unset, events are only emitted to the debug log.

Usage:
    from resumekit.utils.event_logging import log_resume_event, get_recent_events

    log_resume_event(
        event_type="saved",
        resume_id="0f8c...",
        user_id="a1b2...",
        title="Backend Engineer"
    )
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from resumekit.utils.timestamp import now_exact

load_dotenv()
_events_file = os.getenv("RESUMEKIT_EVENTS_FILE")
EVENTS_FILE = Path(_events_file) if _events_file else None

RESUME_EVENT_TYPES = {"created", "saved", "deleted", "visibility_changed"}


def log_resume_event(event_type: str, resume_id: str, user_id: str, **extra_fields) -> None:
    """
    Log a resume lifecycle event.

    Args:
        event_type: One of RESUME_EVENT_TYPES
        resume_id: Resume identifier
        user_id: Identity that performed the operation
        **extra_fields: Additional event-specific fields

    Raises:
        ValueError: If event_type is not a known lifecycle event
    """
    if event_type not in RESUME_EVENT_TYPES:
        raise ValueError(f"Unknown resume event type: {event_type}")

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "resume_id": resume_id,
        "user_id": user_id,
        **extra_fields,
    }
    logger.debug(f"event {event_type} resume={resume_id} user={user_id}")

    if EVENTS_FILE is None:
        return

    # The store write has already committed; a failed append must not fail the operation
    try:
        EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(EVENTS_FILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(event) + "\n")
    except OSError as e:
        logger.warning(f"Could not append {event_type} event for {resume_id} to {EVENTS_FILE}: {e}")


def get_recent_events(
    n: int = 10, resume_id: Optional[str] = None, event_type: Optional[str] = None
) -> list[dict]:
    """
    Get the last n events from the event log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        resume_id: Filter to only events for this resume (optional)
        event_type: Filter to only events of this type (optional)

    Returns:
        List of event dicts (most recent last)
    """
    if EVENTS_FILE is None or not EVENTS_FILE.exists():
        return []

    events = []
    with open(EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if resume_id:
        events = [e for e in events if e.get("resume_id") == resume_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
