"""Tests for severity classification."""

import pytest

from inspec_report.severity import SEVERITY_RANK, Severity, classify, reduce


@pytest.mark.parametrize(
    ("impact", "expected"),
    [
        (1.0, Severity.CRITICAL),
        (0.9, Severity.CRITICAL),
        (0.7, Severity.CRITICAL),
        (0.69, Severity.MAJOR),
        (0.5, Severity.MAJOR),
        (0.4, Severity.MAJOR),
        (0.39, Severity.MINOR),
        (0.0, Severity.MINOR),
        (None, Severity.FAILED),
    ],
)
def test_classify_failed_by_impact(impact: float | None, expected: Severity) -> None:
    """Failures are tiered by impact, with inclusive lower bounds."""
    assert classify("failed", impact) is expected


@pytest.mark.parametrize("status", ["passed", "skipped", "unknown"])
@pytest.mark.parametrize("impact", [None, 0.1, 0.9])
def test_classify_non_failures_ignore_impact(status: str, impact: float | None) -> None:
    """Non-failing statuses map one to one regardless of impact."""
    assert classify(status, impact) == Severity(status)


def test_classify_unrecognised_status_is_unknown() -> None:
    """Statuses outside the known set classify as unknown."""
    assert classify("pending", 0.9) is Severity.UNKNOWN


def test_rank_order() -> None:
    """Generic failed ranks between major and critical."""
    ordered = sorted(Severity, key=lambda s: SEVERITY_RANK[s])

    assert ordered == [
        Severity.UNKNOWN,
        Severity.PASSED,
        Severity.SKIPPED,
        Severity.MINOR,
        Severity.MAJOR,
        Severity.FAILED,
        Severity.CRITICAL,
    ]
    assert Severity.FAILED.rank == 2.5


def test_failure_tiers() -> None:
    """Only minor and worse count as failures."""
    assert {s for s in Severity if s.is_failure} == {
        Severity.MINOR,
        Severity.MAJOR,
        Severity.FAILED,
        Severity.CRITICAL,
    }


def test_reduce_returns_worst() -> None:
    """Reduction picks the highest-ranked severity."""
    severities = [Severity.PASSED, Severity.MAJOR, Severity.SKIPPED, Severity.MINOR]

    assert reduce(severities) is Severity.MAJOR


def test_reduce_is_order_independent() -> None:
    """Reduction gives the same result for any ordering and grouping."""
    a, b, c = Severity.SKIPPED, Severity.CRITICAL, Severity.FAILED

    assert reduce([a, b, c]) is reduce([c, a, b])
    assert reduce([reduce([a, b]), c]) is reduce([a, reduce([b, c])])


def test_reduce_empty_is_unknown() -> None:
    """Reducing nothing yields unknown."""
    assert reduce([]) is Severity.UNKNOWN


@pytest.mark.parametrize("severity", list(Severity))
def test_reduce_and_classify_are_idempotent(severity: Severity) -> None:
    """Reducing or reclassifying a single reduced value returns it unchanged."""
    assert reduce([severity]) is severity
    assert reduce([severity, severity]) is severity
    if severity is not Severity.FAILED:
        assert classify(severity, None) is severity
