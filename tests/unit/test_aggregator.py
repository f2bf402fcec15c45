"""Tests for the control aggregator."""

import pytest

from inspec_report.aggregator import (
    GroupAggregator,
    group_severity,
    result_payload,
)
from inspec_report.models.outcome import OutcomeRecord
from inspec_report.models.profile import GroupRecord, ProfileInfo
from inspec_report.severity import Severity
from inspec_report.testing.factories import OutcomeRecordFactory

ANON_ID = "(generated from controls/example.rb:3 0f3a)"


@pytest.fixture
def profile() -> ProfileInfo:
    """Profile with two named controls and one generated control."""
    return ProfileInfo(
        name="linux",
        groups=[
            GroupRecord(id="linux-1", profile_id="linux", impact=0.9),
            GroupRecord(id="linux-2", profile_id="linux", impact=0.5),
            GroupRecord(id=ANON_ID, profile_id="linux", impact=0.5),
        ],
    )


@pytest.fixture
def aggregator(profile: ProfileInfo) -> GroupAggregator:
    """Aggregator started with the profile."""
    aggregator = GroupAggregator()
    aggregator.on_start([profile])
    return aggregator


def record(record_id: str | None, status: str = "passed", **kwargs: object) -> OutcomeRecord:
    return OutcomeRecordFactory.build(
        id=record_id, status=status, profile_id="linux", **kwargs
    )


def test_attaches_outcomes_in_arrival_order(
    aggregator: GroupAggregator, profile: ProfileInfo
) -> None:
    """Results are appended to their control in arrival order."""
    first = record("linux-1")
    second = record("linux-2")
    third = record("linux-1", "failed")

    for r in (first, second, third):
        aggregator.on_outcome(r)

    assert profile.groups[0].results == [first, third]
    assert profile.groups[1].results == [second]


def test_unmatched_outcomes_are_kept(
    aggregator: GroupAggregator, profile: ProfileInfo
) -> None:
    """Outcomes without a control go to the unmatched bucket."""
    stray = OutcomeRecordFactory.build(id="adhoc", profile_id=None)

    aggregator.on_outcome(stray)

    assert aggregator.unmatched == [stray]
    assert all(not g.results for g in profile.groups)


def test_every_outcome_lands_in_exactly_one_place(
    aggregator: GroupAggregator, profile: ProfileInfo
) -> None:
    """Each outcome is either under one control or unmatched."""
    records = [
        record("linux-1"),
        record("nope"),
        record(ANON_ID),
        OutcomeRecordFactory.build(id=None),
        record("linux-2", "skipped"),
    ]

    for r in records:
        aggregator.on_outcome(r)

    placed = [r for g in profile.groups for r in g.results] + aggregator.unmatched
    assert len(placed) == len(records)
    for r in records:
        assert sum(1 for p in placed if p is r) == 1


def test_tracks_anonymous_controls_separately(
    aggregator: GroupAggregator, profile: ProfileInfo
) -> None:
    """Generated controls are listed once, apart from named ones."""
    aggregator.on_outcome(record(ANON_ID))
    aggregator.on_outcome(record("linux-1"))
    aggregator.on_outcome(record(ANON_ID, "failed"))

    assert aggregator.anonymous_groups == [profile.groups[2]]
    assert list(aggregator.named_groups()) == [profile.groups[0]]


def test_result_payload_strips_matching_fields() -> None:
    """Attached results do not repeat the control id or profile id."""
    payload = result_payload(record("linux-1", message="boom"))

    assert "id" not in payload
    assert "profile_id" not in payload
    assert payload["status"] == "passed"
    assert payload["message"] == "boom"


@pytest.mark.parametrize(
    ("statuses", "impact", "expected"),
    [
        (["passed", "failed"], 0.9, Severity.CRITICAL),
        (["failed", "skipped", "passed"], 0.5, Severity.MAJOR),
        (["failed"], 0.1, Severity.MINOR),
        (["failed"], None, Severity.FAILED),
        (["passed", "skipped"], 0.9, Severity.SKIPPED),
        (["passed"], 0.9, Severity.PASSED),
    ],
)
def test_group_severity(
    statuses: list[str], impact: float | None, expected: Severity
) -> None:
    """A control's severity is the worst of its results."""
    group = GroupRecord(id="g", impact=impact, results=[record("g", s) for s in statuses])

    assert group_severity(group) is expected


def test_summaries_exclude_anonymous_controls_from_control_counts(
    aggregator: GroupAggregator,
) -> None:
    """Generated controls only show up in outcome counts."""
    aggregator.on_outcome(record("linux-1", "failed"))
    aggregator.on_outcome(record("linux-2", "skipped"))
    aggregator.on_outcome(record(ANON_ID, "failed"))
    aggregator.on_outcome(record(ANON_ID, "passed"))
    aggregator.on_outcome(OutcomeRecordFactory.build(id="adhoc", status="passed"))

    groups = aggregator.group_summary()
    outcomes = aggregator.outcome_summary()

    assert groups.total == 2
    assert groups.failed.total == 1
    assert groups.failed.critical == 1
    assert groups.skipped == 1
    assert outcomes.to_dict() == {"total": 5, "passed": 2, "failed": 2, "skipped": 1}
