"""Models for individual check outcomes."""

from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Literal, TypeAlias

OutcomeStatus: TypeAlias = Literal["passed", "failed", "skipped", "unknown"]


@dataclass(frozen=True, kw_only=True)
class RawException:
    """Exception captured by the execution engine for a single check."""

    class_name: str | None = None
    message: str | None = None
    backtrace: Sequence[str] | None = None
    expectation_failure: bool = False


@dataclass(frozen=True, kw_only=True)
class RawOutcome:
    """Execution event emitted by the engine, one per executed check.

    Every field is optional; the engine may leave out anything it does not
    know about a check.
    """

    id: str | None = None
    status: str | None = None
    full_description: str | None = None
    description: str | None = None
    description_args: Sequence[Any] = ()
    group_description: str | None = None
    described_class: str | None = None
    profile_id: str | None = None
    exception: RawException | None = None
    run_time: float | None = None
    started_at: datetime | str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawOutcome":
        """Build an event from a decoded JSON object, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}

        exception = values.get("exception")
        if isinstance(exception, Mapping):
            values["exception"] = RawException(
                class_name=exception.get("class_name"),
                message=exception.get("message"),
                backtrace=exception.get("backtrace"),
                expectation_failure=bool(exception.get("expectation_failure")),
            )
        elif exception is not None and not isinstance(exception, RawException):
            values["exception"] = None

        args = values.get("description_args")
        if not isinstance(args, Sequence) or isinstance(args, str):
            values.pop("description_args", None)

        return cls(**values)


@dataclass(frozen=True, kw_only=True)
class OutcomeRecord:
    """Normalized result of one executed check."""

    __test__ = False

    id: str | None
    status: OutcomeStatus
    description: str
    message: str | None = None
    exception_class: str | None = None
    backtrace: Sequence[str] | None = None
    run_time: float | None = None
    start_time: str | None = None
    profile_id: str | None = None
    skip_message: str | None = None
    resource: str | None = None

    def to_dict(self, exclude: Collection[str] = ()) -> dict[str, Any]:
        """Serialize the record, omitting absent values and excluded keys."""
        result: dict[str, Any] = {}
        for f in fields(self):
            if f.name in exclude:
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "backtrace":
                value = list(value)
            result[f.name] = value
        return result
