"""Severity classification of outcomes and controls."""

from collections.abc import Iterable, Mapping
from enum import StrEnum

CRITICAL_IMPACT = 0.7
MAJOR_IMPACT = 0.4


class Severity(StrEnum):
    """Severity tier of an outcome or a whole control."""

    UNKNOWN = "unknown"
    PASSED = "passed"
    SKIPPED = "skipped"
    MINOR = "minor"
    MAJOR = "major"
    FAILED = "failed"
    CRITICAL = "critical"

    @property
    def rank(self) -> float:
        """Position in the worst-wins order."""
        return SEVERITY_RANK[self]

    @property
    def is_failure(self) -> bool:
        """Whether the tier is one of the failing tiers."""
        return self.rank > 0


# FAILED sits between MAJOR and CRITICAL and is only reached when a failing
# control declares no impact.
SEVERITY_RANK: Mapping[Severity, float] = {
    Severity.UNKNOWN: -3,
    Severity.PASSED: -2,
    Severity.SKIPPED: -1,
    Severity.MINOR: 1,
    Severity.MAJOR: 2,
    Severity.FAILED: 2.5,
    Severity.CRITICAL: 3,
}


def classify(status: str, impact: float | None) -> Severity:
    """Classify an outcome status, using the control impact for failures."""
    if status != "failed":
        try:
            return Severity(status)
        except ValueError:
            return Severity.UNKNOWN
    if impact is None:
        return Severity.FAILED
    if impact >= CRITICAL_IMPACT:
        return Severity.CRITICAL
    if impact >= MAJOR_IMPACT:
        return Severity.MAJOR
    return Severity.MINOR


def reduce(severities: Iterable[Severity]) -> Severity:
    """Return the worst severity, or ``unknown`` when there is none."""
    return max(severities, key=lambda severity: severity.rank, default=Severity.UNKNOWN)
