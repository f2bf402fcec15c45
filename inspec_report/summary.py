"""Control-level and outcome-level summary counters."""

from dataclasses import dataclass, field
from typing import Any

from inspec_report.severity import Severity


@dataclass(kw_only=True)
class FailedCounts:
    """Failed controls, split by severity.

    Controls without an impact count towards ``total`` only.
    """

    total: int = 0
    critical: int = 0
    major: int = 0
    minor: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "critical": self.critical,
            "major": self.major,
            "minor": self.minor,
        }


@dataclass(kw_only=True)
class GroupSummary:
    """Counts of named controls by their reduced severity."""

    passed: int = 0
    skipped: int = 0
    failed: FailedCounts = field(default_factory=FailedCounts)

    @property
    def total(self) -> int:
        return self.passed + self.skipped + self.failed.total

    def add(self, severity: Severity) -> None:
        """Count one control with the given reduced severity."""
        if severity.is_failure:
            self.failed.total += 1
            if severity is Severity.CRITICAL:
                self.failed.critical += 1
            elif severity is Severity.MAJOR:
                self.failed.major += 1
            elif severity is Severity.MINOR:
                self.failed.minor += 1
        elif severity is Severity.SKIPPED:
            self.skipped += 1
        else:
            self.passed += 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "skipped": self.skipped,
            "failed": self.failed.to_dict(),
        }


@dataclass(kw_only=True)
class OutcomeSummary:
    """Counts of individual outcomes by status."""

    passed: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped

    def add(self, status: str) -> None:
        """Count one outcome; anything neither failed nor skipped is a pass."""
        if status == "failed":
            self.failed += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.passed += 1

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
        }
