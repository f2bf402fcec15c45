"""Streaming, severity-colored console report.

Outcomes arrive one at a time in execution order. The printer accumulates
the outcomes of the current control and prints it as soon as an outcome for
a different control arrives, so only one control is ever held back.
Controls with a generated id are held until the end and printed together.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from inspec_report.config import ReportConfig
from inspec_report.matcher import match
from inspec_report.models.outcome import OutcomeRecord
from inspec_report.models.profile import ProfileInfo, is_anonymous_group_id
from inspec_report.severity import Severity, classify, reduce
from inspec_report.summary import GroupSummary, OutcomeSummary

COLORS: Mapping[str, str] = {
    "critical": "\033[31;1m",
    "major": "\033[31m",
    "minor": "\033[33m",
    "failed": "\033[31m",
    "passed": "\033[32m",
    "skipped": "\033[37m",
    "reset": "\033[0m",
}

INDICATORS: Mapping[str, str] = {
    "critical": "  ✖  ",
    "major": "  ✖  ",
    "minor": "  ✖  ",
    "failed": "  ✖  ",
    "skipped": "  ○  ",
    "passed": "  ✔  ",
    "unknown": "  ?  ",
    "empty": "     ",
    "small": "   ",
}

LINE_TEMPLATE = "%color%indicator%id%summary"
EMPTY_GROUP_TITLE = "Empty anonymous control"
NO_TESTS_EXECUTED = "No tests executed."

_PLACEHOLDER = re.compile(r"%\w+")


def format_line(
    fields: Mapping[str, object],
    reset: str = COLORS["reset"],
    template: str = LINE_TEMPLATE,
) -> str:
    """Substitute named placeholders and terminate the line with ``reset``.

    Placeholders without a field are left as they are; ``None`` renders empty.
    """

    def substitute(placeholder: re.Match[str]) -> str:
        name = placeholder.group(0)[1:]
        if name not in fields:
            return placeholder.group(0)
        value = fields[name]
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(substitute, template) + reset


def indent_lines(text: str, indentation: str) -> str:
    """Indent continuation lines of a multi-line text."""
    return text.replace("\n", "\n" + indentation)


@dataclass(frozen=True, kw_only=True)
class PrintedResult:
    """An outcome with the severity it is displayed with."""

    record: OutcomeRecord
    severity: Severity


@dataclass(kw_only=True)
class PendingGroup:
    """Outcomes of the control currently being accumulated.

    ``declared`` is False for outcomes without a control; those are keyed by
    their own id. Declared controls are keyed within
    their profile.
    """

    id: str | None
    title: str | None = None
    profile: ProfileInfo | None = None
    declared: bool = True
    results: list[PrintedResult] = field(default_factory=list)

    @property
    def key(self) -> tuple[str | None, str | None, bool]:
        profile_name = None if self.profile is None else self.profile.name
        return profile_name, self.id, self.declared

    @property
    def is_anonymous(self) -> bool:
        return is_anonymous_group_id(self.id)


def split_results(
    results: Sequence[PrintedResult],
) -> tuple[list[PrintedResult], list[PrintedResult], list[PrintedResult], Severity]:
    """Split results into failures, skips and passes, plus the worst severity."""
    fails = [r for r in results if r.severity.is_failure]
    skips = [r for r in results if r.severity is Severity.SKIPPED]
    passes = [r for r in results if r.severity is Severity.PASSED]
    return fails, skips, passes, reduce(r.severity for r in results)


def group_title(
    title: str | None, results: Sequence[PrintedResult], max_length: int = 60
) -> str:
    """Title of a control, derived from its results when it has none."""
    if title:
        return title
    if len(results) == 1:
        return results[0].record.description
    if not results:
        return EMPTY_GROUP_TITLE
    joined = "; ".join(r.record.description for r in results)
    if len(joined) > max_length:
        joined = joined[:max_length] + "..."
    return joined


def group_summary_text(
    title: str,
    results: Sequence[PrintedResult],
    fails: Sequence[PrintedResult],
    skips: Sequence[PrintedResult],
) -> str:
    """Title followed by the failure message or the failed/skipped counts."""
    if len(results) == 1:
        suffix = results[0].record.message or ""
    else:
        parts = []
        if fails:
            parts.append(f"{len(fails)} failed")
        if skips:
            parts.append(f"{len(skips)} skipped")
        suffix = " ".join(parts)
    return f"{title} ({suffix})" if suffix else title


def anonymous_prefix(description: str) -> str:
    """First two words of a description, shared by a batch of ad hoc checks."""
    return " ".join(description.split()[:2])


@dataclass(kw_only=True)
class StreamingPrinter:
    """Prints controls as they complete, then the run summary on close."""

    output: TextIO
    config: ReportConfig = field(default_factory=ReportConfig)
    profiles: list[ProfileInfo] = field(default_factory=list)
    _current: PendingGroup | None = field(default=None, init=False)
    _anonymous: list[PendingGroup] = field(default_factory=list, init=False)
    _group_severities: dict[tuple[str | None, str | None, bool], Severity] = field(
        default_factory=dict, init=False
    )
    _outcomes: OutcomeSummary = field(default_factory=OutcomeSummary, init=False)
    _received: bool = field(default=False, init=False)

    @classmethod
    def from_config(cls, output: TextIO, config: ReportConfig) -> "StreamingPrinter":
        return cls(output=output, config=config)

    @property
    def colors(self) -> Mapping[str, str]:
        if self.config.color:
            return COLORS
        return {name: "" for name in COLORS}

    @property
    def current_group_id(self) -> str | None:
        """Id of the control being accumulated, None while idle."""
        return None if self._current is None else self._current.id

    def on_start(self, profiles: Sequence[ProfileInfo]) -> None:
        self.profiles = list(profiles)

    def on_outcome(self, record: OutcomeRecord) -> None:
        self._received = True
        self._outcomes.add(record.status)

        profile, group = match(record, self.profiles)
        if group is None:
            pending = PendingGroup(id=record.id, profile=profile, declared=False)
            impact = None
        else:
            pending = PendingGroup(id=group.id, title=group.title, profile=profile)
            impact = group.impact

        if self._current is not None and self._current.key != pending.key:
            self.flush()
        if self._current is None:
            self._current = pending
        self._current.results.append(
            PrintedResult(record=record, severity=classify(record.status, impact))
        )

    def on_close(self, duration: float) -> None:
        self.flush()
        if self._received:
            self._write("")
        self._print_anonymous()
        self._write("")
        self._print_unprinted_profiles()
        self._print_summaries()

    def flush(self) -> None:
        """Print the control being accumulated and return to idle."""
        group, self._current = self._current, None
        if group is None:
            return

        if group.profile is not None and not group.profile.already_printed:
            self._print_profile(group.profile)

        if group.is_anonymous:
            self._anonymous.append(group)
            return

        fails, skips, passes, severity = split_results(group.results)
        if group.declared and group.id is not None:
            previous = self._group_severities.get(group.key)
            self._group_severities[group.key] = (
                severity if previous is None else reduce([previous, severity])
            )

        title = group_title(group.title, group.results, self.config.title_max_length)
        summary = group_summary_text(title, group.results, fails, skips)
        self._print_line(
            color=self.colors.get(severity, ""),
            indicator=INDICATORS.get(severity, INDICATORS["unknown"]),
            id=f"{group.id or ''}: ",
            summary=indent_lines(summary, INDICATORS["empty"]),
        )
        self._print_results([*fails, *skips, *passes])

    def group_summary(self) -> GroupSummary:
        """Counts of named controls printed so far."""
        summary = GroupSummary()
        for severity in self._group_severities.values():
            summary.add(severity)
        return summary

    def outcome_summary(self) -> OutcomeSummary:
        """Counts of every outcome received so far."""
        return self._outcomes

    def _write(self, text: str) -> None:
        print(text, file=self.output)

    def _print_line(self, **fields: object) -> None:
        self._write(format_line(fields, reset=self.colors["reset"]))

    def _print_results(self, results: Sequence[PrintedResult]) -> None:
        for result in results:
            record = result.record
            if record.message:
                text = f"{record.description}\n{record.message}"
            else:
                text = record.skip_message or record.description
            self._print_line(
                color=self.colors.get(result.severity, ""),
                indicator=INDICATORS["small"]
                + INDICATORS.get(record.status, INDICATORS["empty"]),
                id="",
                summary=indent_lines(text, INDICATORS["empty"]),
            )

    def _print_anonymous(self) -> None:
        batches: dict[str, list[PrintedResult]] = {}
        for group in self._anonymous:
            prefix = anonymous_prefix(group.results[0].record.description)
            batches.setdefault(prefix, []).extend(group.results)

        for prefix, results in batches.items():
            self._write("  " + prefix)
            for result in results:
                self._print_line(
                    color=self.colors.get(result.severity, ""),
                    indicator=INDICATORS["small"]
                    + INDICATORS.get(result.severity, INDICATORS["unknown"]),
                    id="",
                    summary=indent_lines(
                        self._anonymous_text(result.record), INDICATORS["empty"]
                    ),
                )

    def _anonymous_text(self, record: OutcomeRecord) -> str:
        if record.exception_class is not None:
            return record.message or ""
        text = record.skip_message or (
            " ".join(record.description.split()[2:]) or record.description
        )
        if record.message:
            text += "\n" + record.message
        return text

    def _print_profile(self, profile: ProfileInfo) -> None:
        self._write("")
        profile.already_printed = True
        target = self.config.target

        if profile.name is None:
            if target:
                self._write(f"Target:  {target}")
                self._write("")
            return

        if profile.title is None:
            self._write(f"Profile: {profile.name}")
        else:
            self._write(f"Profile: {profile.title} ({profile.name})")
        self._write(f"Version: {profile.version or 'unknown'}")
        if target:
            self._write(f"Target:  {target}")
        self._write("")

    def _print_unprinted_profiles(self) -> None:
        for profile in self.profiles:
            if profile.already_printed:
                continue
            self._print_profile(profile)
            self._print_line(
                color="", indicator=INDICATORS["empty"], id="", summary=NO_TESTS_EXECUTED
            )
            self._write("")

    def _print_summaries(self) -> None:
        c = self.colors
        groups = self.group_summary()
        if groups.total > 0:
            failed = groups.failed
            self._write(
                f"Profile Summary: {c['passed']}{groups.passed} successful{c['reset']}, "
                f"{c['failed']}{failed.total} failures "
                f"({failed.critical} critical, {failed.major} major, "
                f"{failed.minor} minor){c['reset']}, "
                f"{c['skipped']}{groups.skipped} skipped{c['reset']}"
            )

        outcomes = self._outcomes
        if outcomes.total > 0:
            self._write(
                f"Test Summary: {c['passed']}{outcomes.passed} successful{c['reset']}, "
                f"{c['failed']}{outcomes.failed} failures{c['reset']}, "
                f"{c['skipped']}{outcomes.skipped} skipped{c['reset']}"
            )
