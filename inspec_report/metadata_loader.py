"""Load profile metadata from YAML files."""

import logging
from collections.abc import Sequence
from pathlib import Path

import yaml
from pydantic import ValidationError

from inspec_report.models.metadata import MetadataDocument
from inspec_report.models.profile import ProfileInfo

log = logging.getLogger(__name__)


class MetadataLoadError(Exception):
    """Raised when a metadata file cannot be parsed or validated."""


def load_profiles(path: Path) -> Sequence[ProfileInfo]:
    """Load the profiles of a run, with empty controls ready for outcomes.

    Raises:
        FileNotFoundError: If the metadata file does not exist
        MetadataLoadError: If the file is not valid YAML or fails validation

    """
    try:
        content = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise MetadataLoadError(f"Invalid YAML in {path}: {e}") from e

    try:
        document = MetadataDocument.model_validate(content)
    except ValidationError as e:
        raise MetadataLoadError(f"Invalid profile metadata in {path}: {e}") from e

    profiles = [ProfileInfo.from_metadata(p) for p in document.profiles]
    log.info(
        "Loaded %d profile(s) with %d control(s) from %s",
        len(profiles),
        sum(len(p.groups) for p in profiles),
        path,
    )
    return profiles
