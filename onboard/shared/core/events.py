"""Canonical event definitions for the onboarding client."""

from __future__ import annotations

from typing import Literal, Mapping

from .event_bus import EventPayload

# Shell topics
TOPIC_NAV_NAVIGATE = "nav.navigate"

# Notification topics
TOPIC_NOTIFICATION_SHOWN = "notification.shown"

# Form / submission lifecycle
TOPIC_FORM_INVALID = "form.invalid"
TOPIC_SUBMISSION_START = "submission.start"
TOPIC_SUBMISSION_END = "submission.end"

# Session lifecycle
TOPIC_SESSION_STORED = "session.stored"
TOPIC_SESSION_ESTABLISHED = "session.established"
TOPIC_SESSION_ENDED = "session.ended"


def create_nav_event(path: str, params: Mapping[str, str] | None, href: str) -> EventPayload:
    """Create a navigation event."""
    return {
        "path": path,
        "params": dict(params or {}),
        "href": href,
    }


def create_notification_event(message: str, severity: str, screen: str) -> EventPayload:
    """Create a notification shown event."""
    return {
        "message": message,
        "severity": severity,
        "screen": screen,
    }


def create_form_invalid_event(screen: str, errors: Mapping[str, str]) -> EventPayload:
    """Create a form invalid event.

    Only the failing field names travel on the bus, the messages stay in
    the form state.
    """
    return {
        "screen": screen,
        "fields": sorted(errors),
    }


def create_submission_event(
    screen: str,
    outcome: Literal["pending", "success", "rejected", "failed"] = "pending",
) -> EventPayload:
    """Create a submission lifecycle event."""
    return {
        "screen": screen,
        "outcome": outcome,
    }


def create_session_stored_event(user_id: str) -> EventPayload:
    """Create a session stored event. The token is never published."""
    return {
        "user_id": user_id,
    }


def create_session_established_event(username: str) -> EventPayload:
    return {
        "username": username,
    }


def create_session_ended_event(username: str) -> EventPayload:
    return {
        "username": username,
    }

