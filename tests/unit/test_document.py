"""Tests for report documents."""

from inspec_report.aggregator import GroupAggregator
from inspec_report.document import DocumentEmitter, format_group
from inspec_report.models.outcome import OutcomeRecord
from inspec_report.models.profile import GroupRecord, ProfileInfo


def make_aggregator() -> GroupAggregator:
    aggregator = GroupAggregator()
    aggregator.on_start(
        [
            ProfileInfo(
                name="ssh-baseline",
                title="SSH Baseline",
                version="1.2.0",
                groups=[
                    GroupRecord(
                        id="ssh-1",
                        profile_id="ssh-baseline",
                        title="Disable root login",
                        impact=0.9,
                    ),
                    GroupRecord(id="ssh-2", profile_id="ssh-baseline", impact=0.3),
                ],
            )
        ]
    )
    return aggregator


def test_emits_full_document() -> None:
    """Profiles carry their controls with results, plus statistics."""
    aggregator = make_aggregator()
    aggregator.on_outcome(
        OutcomeRecord(
            id="ssh-1",
            status="failed",
            description="SSH PermitRootLogin should eq no",
            message="expected: no, got: yes",
            profile_id="ssh-baseline",
            run_time=0.01,
        )
    )

    document = DocumentEmitter(version="0.1.0").emit(aggregator, duration=1.5)

    assert document["version"] == "0.1.0"
    assert document["statistics"]["duration"] == 1.5
    assert document["statistics"]["groups"]["failed"] == {
        "total": 1,
        "critical": 1,
        "major": 0,
        "minor": 0,
    }
    assert document["other_checks"] == []

    profile = document["profiles"][0]
    assert profile["name"] == "ssh-baseline"
    assert profile["title"] == "SSH Baseline"
    assert profile["version"] == "1.2.0"
    assert "already_printed" not in profile

    group = profile["groups"][0]
    assert group["id"] == "ssh-1"
    assert group["severity"] == "critical"
    assert group["results"] == [
        {
            "status": "failed",
            "description": "SSH PermitRootLogin should eq no",
            "message": "expected: no, got: yes",
            "run_time": 0.01,
        }
    ]
    assert profile["groups"][1] == {"id": "ssh-2", "impact": 0.3, "results": []}


def test_unmatched_outcome_goes_to_other_checks() -> None:
    """An outcome without profile id or known control is listed separately."""
    aggregator = make_aggregator()
    aggregator.on_outcome(
        OutcomeRecord(id="adhoc-1", status="passed", description="Port 22 is open")
    )

    document = DocumentEmitter(version="0.1.0").emit(aggregator, duration=0.0)

    assert document["other_checks"] == [
        {"id": "adhoc-1", "status": "passed", "description": "Port 22 is open"}
    ]
    assert all(not g["results"] for g in document["profiles"][0]["groups"])
    assert document["statistics"]["groups"]["total"] == 0
    assert document["statistics"]["outcomes"]["total"] == 1


def test_group_without_impact_is_generic_failure() -> None:
    """A failing control without impact is reported as failed."""
    group = GroupRecord(
        id="c",
        results=[OutcomeRecord(id="c", status="failed", description="d")],
    )

    assert format_group(group)["severity"] == "failed"


def test_emits_minimal_document() -> None:
    """The minimal document lists outcomes flat, keeping their ids."""
    records = [
        OutcomeRecord(id="a", status="passed", description="one", profile_id="p"),
        OutcomeRecord(id="b", status="skipped", description="two", skip_message="n/a"),
    ]

    document = DocumentEmitter(version="0.1.0").emit_minimal(records, duration=2.0)

    assert document == {
        "version": "0.1.0",
        "statistics": {"duration": 2.0},
        "controls": [
            {"id": "a", "status": "passed", "description": "one", "profile_id": "p"},
            {"id": "b", "status": "skipped", "description": "two", "skip_message": "n/a"},
        ],
    }
