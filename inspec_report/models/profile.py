"""Run-time profile and control aggregation state."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from inspec_report.models.metadata import GroupDeclaration, ProfileMetadata
from inspec_report.models.outcome import OutcomeRecord

ANONYMOUS_GROUP_PREFIX = "(generated from "


@dataclass(kw_only=True)
class GroupRecord:
    """Control of a profile with the outcomes attached to it so far.

    ``results`` only ever grows by appending, in arrival order.
    """

    id: str
    profile_id: str | None = None
    title: str | None = None
    desc: str | None = None
    impact: float | None = None
    tags: Mapping[str, Any] = field(default_factory=dict)
    results: list[OutcomeRecord] = field(default_factory=list)

    @property
    def is_anonymous(self) -> bool:
        """Whether the id was generated for ungrouped ad hoc checks."""
        return is_anonymous_group_id(self.id)

    @classmethod
    def from_declaration(
        cls, declaration: GroupDeclaration, profile_id: str | None
    ) -> "GroupRecord":
        """Create an empty control from its declaration."""
        return cls(
            id=declaration.id,
            profile_id=profile_id,
            title=declaration.title,
            desc=declaration.desc,
            impact=declaration.impact,
            tags=dict(declaration.tags),
        )


@dataclass(kw_only=True)
class ProfileInfo:
    """Profile taking part in a run.

    Membership of ``groups`` is fixed once the run starts.
    """

    name: str | None = None
    title: str | None = None
    version: str | None = None
    summary: str | None = None
    maintainer: str | None = None
    groups: list[GroupRecord] = field(default_factory=list)
    already_printed: bool = False

    @classmethod
    def from_metadata(cls, metadata: ProfileMetadata) -> "ProfileInfo":
        """Create run-time profile state from loaded metadata."""
        return cls(
            name=metadata.name,
            title=metadata.title,
            version=metadata.version,
            summary=metadata.summary,
            maintainer=metadata.maintainer,
            groups=[
                GroupRecord.from_declaration(declaration, metadata.name)
                for declaration in metadata.groups
            ],
        )


def is_anonymous_group_id(group_id: str | None) -> bool:
    """Check whether a control id follows the generated-id convention."""
    return group_id is not None and group_id.startswith(ANONYMOUS_GROUP_PREFIX)
