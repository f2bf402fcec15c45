"""Models for profile metadata supplied before a run starts."""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import Field

from inspec_report.models.base import Model


class GroupDeclaration(Model):
    """Declared control of a profile."""

    id: str = Field(..., description="Control identifier")
    title: str | None = Field(default=None, description="Human-readable title")
    desc: str | None = Field(default=None, description="Control description")
    impact: float | None = Field(
        default=None, ge=0.0, le=1.0, description="Impact score in [0, 1]"
    )
    tags: Mapping[str, Any] = Field(default_factory=dict, description="Free tags")


class ProfileMetadata(Model):
    """Profile metadata with its declared controls."""

    name: str | None = Field(default=None, description="Profile name")
    title: str | None = Field(default=None, description="Profile title")
    version: str | None = Field(default=None, description="Profile version")
    summary: str | None = Field(default=None, description="Short summary")
    maintainer: str | None = Field(default=None, description="Maintainer")
    groups: Sequence[GroupDeclaration] = Field(
        default_factory=list, description="Declared controls"
    )


class MetadataDocument(Model):
    """Top-level layout of a metadata file."""

    profiles: Sequence[ProfileMetadata] = Field(
        default_factory=list, description="Profiles taking part in the run"
    )
