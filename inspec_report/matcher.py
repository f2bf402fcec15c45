"""Resolve the profile and control an outcome belongs to.

Outcomes do not always carry the profile they came from (for example when a
profile is pulled in as a dependency), so profile resolution falls back to
looking for a profile that declares a control with the outcome's id.
"""

import logging
from collections.abc import Callable, Sequence
from typing import TypeAlias

from inspec_report.models.outcome import OutcomeRecord
from inspec_report.models.profile import GroupRecord, ProfileInfo

log = logging.getLogger(__name__)

ProfileRule: TypeAlias = Callable[[OutcomeRecord, ProfileInfo], bool]


def matches_profile_name(record: OutcomeRecord, profile: ProfileInfo) -> bool:
    """Rule 1: the outcome's profile id equals the profile name."""
    return record.profile_id is not None and record.profile_id == profile.name


def declares_group(record: OutcomeRecord, profile: ProfileInfo) -> bool:
    """Rule 2: the profile declares a control with the outcome's id."""
    return record.id is not None and any(g.id == record.id for g in profile.groups)


# Evaluated in order; each rule is tried against every profile before the
# next rule is considered.
PROFILE_RULES: Sequence[tuple[str, ProfileRule]] = (
    ("profile-name", matches_profile_name),
    ("declared-group", declares_group),
)


def resolve_profile(
    record: OutcomeRecord,
    profiles: Sequence[ProfileInfo],
    rules: Sequence[tuple[str, ProfileRule]] = PROFILE_RULES,
) -> ProfileInfo | None:
    """Find the profile an outcome came from, or None."""
    for rule_name, rule in rules:
        for profile in profiles:
            if rule(record, profile):
                log.debug(
                    "Outcome %s matched profile %s by %s rule",
                    record.id,
                    profile.name,
                    rule_name,
                )
                return profile
    return None


def resolve_group(record: OutcomeRecord, profile: ProfileInfo) -> GroupRecord | None:
    """Find the control of the profile with the outcome's id, or None."""
    if record.id is None:
        return None
    return next((g for g in profile.groups if g.id == record.id), None)


def match(
    record: OutcomeRecord, profiles: Sequence[ProfileInfo]
) -> tuple[ProfileInfo | None, GroupRecord | None]:
    """Resolve profile and control; the control is None when unmatched."""
    profile = resolve_profile(record, profiles)
    if profile is None:
        return None, None
    return profile, resolve_group(record, profile)
