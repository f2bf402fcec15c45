"""Attach outcomes to the controls of the profile tree."""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from inspec_report.matcher import match
from inspec_report.models.outcome import OutcomeRecord
from inspec_report.models.profile import GroupRecord, ProfileInfo
from inspec_report.severity import Severity, classify, reduce
from inspec_report.summary import GroupSummary, OutcomeSummary

log = logging.getLogger(__name__)

# Only needed to find the control; redundant once a result sits under it.
MATCHING_FIELDS: tuple[str, ...] = ("id", "profile_id")


def result_payload(record: OutcomeRecord) -> dict[str, Any]:
    """Serialize an outcome attached to a control."""
    return record.to_dict(exclude=MATCHING_FIELDS)


def group_severity(group: GroupRecord) -> Severity:
    """Reduce the severities of a control's results."""
    return reduce(classify(r.status, group.impact) for r in group.results)


@dataclass(kw_only=True)
class GroupAggregator:
    """Accumulates outcomes under their controls.

    Outcomes without a matching control go to ``unmatched``. Controls with a
    generated id are additionally listed in ``anonymous_groups`` in the order
    their first outcome arrived.
    """

    profiles: list[ProfileInfo] = field(default_factory=list)
    unmatched: list[OutcomeRecord] = field(default_factory=list)
    anonymous_groups: list[GroupRecord] = field(default_factory=list)

    def on_start(self, profiles: Sequence[ProfileInfo]) -> None:
        self.profiles = list(profiles)

    def on_outcome(self, record: OutcomeRecord) -> None:
        _, group = match(record, self.profiles)
        if group is None:
            log.debug("No control found for outcome %s", record.id)
            self.unmatched.append(record)
            return
        self.attach(record, group)

    def on_close(self, duration: float) -> None:
        log.debug(
            "Aggregated %d control(s), %d unmatched outcome(s) in %.2fs",
            sum(1 for _ in self.named_groups()),
            len(self.unmatched),
            duration,
        )

    def attach(self, record: OutcomeRecord, group: GroupRecord) -> None:
        """Append an outcome to a control's results."""
        if group.is_anonymous and not group.results:
            self.anonymous_groups.append(group)
        group.results.append(record)

    def named_groups(self) -> Iterator[GroupRecord]:
        """Controls with a declared id that received at least one outcome."""
        for profile in self.profiles:
            for group in profile.groups:
                if group.results and not group.is_anonymous:
                    yield group

    def group_summary(self) -> GroupSummary:
        summary = GroupSummary()
        for group in self.named_groups():
            summary.add(group_severity(group))
        return summary

    def outcome_summary(self) -> OutcomeSummary:
        summary = OutcomeSummary()
        for group in [*self.anonymous_groups, *self.named_groups()]:
            for record in group.results:
                summary.add(record.status)
        for record in self.unmatched:
            summary.add(record.status)
        return summary
