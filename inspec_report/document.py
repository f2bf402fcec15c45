"""Structured report documents."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from inspec_report.aggregator import GroupAggregator, group_severity, result_payload
from inspec_report.models.outcome import OutcomeRecord
from inspec_report.models.profile import GroupRecord, ProfileInfo


@dataclass(frozen=True, kw_only=True)
class DocumentEmitter:
    """Serializes aggregated run state into report documents."""

    version: str

    def emit(self, aggregator: GroupAggregator, duration: float) -> dict[str, Any]:
        """Build the full document from an aggregator after the run closed."""
        return {
            "version": self.version,
            "statistics": {
                "duration": duration,
                "groups": aggregator.group_summary().to_dict(),
                "outcomes": aggregator.outcome_summary().to_dict(),
            },
            "profiles": [format_profile(p) for p in aggregator.profiles],
            "other_checks": [r.to_dict() for r in aggregator.unmatched],
        }

    def emit_minimal(
        self, records: Sequence[OutcomeRecord], duration: float
    ) -> dict[str, Any]:
        """Build the flat document: one entry per outcome, no profile tree."""
        return {
            "version": self.version,
            "statistics": {"duration": duration},
            "controls": [r.to_dict() for r in records],
        }


def format_profile(profile: ProfileInfo) -> dict[str, Any]:
    """Serialize a profile and its controls."""
    data: dict[str, Any] = _without_none(
        {
            "name": profile.name,
            "title": profile.title,
            "version": profile.version,
            "summary": profile.summary,
            "maintainer": profile.maintainer,
        }
    )
    data["groups"] = [format_group(g) for g in profile.groups]
    return data


def format_group(group: GroupRecord) -> dict[str, Any]:
    """Serialize a control with its results."""
    data: dict[str, Any] = _without_none(
        {
            "id": group.id,
            "title": group.title,
            "desc": group.desc,
            "impact": group.impact,
        }
    )
    if group.tags:
        data["tags"] = dict(group.tags)
    if group.results:
        data["severity"] = str(group_severity(group))
    data["results"] = [result_payload(r) for r in group.results]
    return data


def _without_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}
