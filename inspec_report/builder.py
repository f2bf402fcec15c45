"""Normalize raw execution events into outcome records."""

from collections.abc import Sequence
from datetime import datetime

from inspec_report.models.outcome import OutcomeRecord, OutcomeStatus, RawOutcome

KNOWN_STATUSES: frozenset[str] = frozenset(["passed", "failed", "skipped", "unknown"])


def build_outcome(raw: RawOutcome) -> OutcomeRecord:
    """Build an outcome record from a raw execution event.

    Pending checks become ``skipped``; their skip reason and declared subject
    go to ``skip_message`` and ``resource`` instead of the description.
    Missing or malformed optional fields are left out.
    """
    status = normalize_status(raw.status)
    skip_message = None
    resource = None
    if raw.status == "pending":
        skip_message = _text(raw.description)
        resource = _text(raw.described_class)

    message = None
    exception_class = None
    backtrace = None
    if raw.exception is not None:
        message = _text(raw.exception.message)
        if not raw.exception.expectation_failure:
            exception_class = _text(raw.exception.class_name)
            backtrace = _backtrace(raw.exception.backtrace)

    return OutcomeRecord(
        id=_text(raw.id),
        status=status,
        description=select_description(raw),
        message=message,
        exception_class=exception_class,
        backtrace=backtrace,
        run_time=_run_time(raw.run_time),
        start_time=_start_time(raw.started_at),
        profile_id=_text(raw.profile_id),
        skip_message=skip_message,
        resource=resource,
    )


def normalize_status(status: str | None) -> OutcomeStatus:
    """Map an engine status onto the statuses a report knows about."""
    if status == "pending":
        return "skipped"
    if isinstance(status, str) and status in KNOWN_STATUSES:
        return status  # type: ignore[return-value]
    return "unknown"


def select_description(raw: RawOutcome) -> str:
    """Pick the description shown for a check.

    When the event carries per-example description segments, the full
    description has the example text (for skips, the skip reason) appended,
    so the enclosing group description is used verbatim instead.
    """
    if raw.description_args and raw.group_description is not None:
        return str(raw.group_description)
    return _text(raw.full_description) or ""


def _text(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _run_time(value: object) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _start_time(value: object) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return _text(value)


def _backtrace(frames: object) -> Sequence[str] | None:
    if not isinstance(frames, Sequence) or isinstance(frames, str):
        return None
    return tuple(str(frame) for frame in frames)
