"""Formatter lookup through the ``inspec_report.formatters`` entry points."""

import logging
from importlib.metadata import EntryPoint, entry_points

from inspec_report.formatters.manifest import FormatterManifest

ENTRY_POINT_GROUP = "inspec_report.formatters"

log = logging.getLogger(__name__)


class FormatterNotFoundError(Exception):
    """Raised when no installed formatter is registered under a key."""


class InvalidFormatterError(Exception):
    """Raised when an entry point does not resolve to a formatter manifest."""


def formatter_keys() -> list[str]:
    """Sorted keys of the installed formatters."""
    return sorted({entry.name for entry in entry_points(group=ENTRY_POINT_GROUP)})


def load_formatter_manifest(key: str) -> FormatterManifest:
    """Resolve the manifest registered under ``key``.

    Raises:
        FormatterNotFoundError: If no formatter is registered under ``key``
        InvalidFormatterError: If the entry point is not a FormatterManifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise FormatterNotFoundError(
            f"Formatter '{key}' not found. Available formatters: {formatter_keys()}"
        )
    return _load(matches[key])


def describe_formatters() -> dict[str, str]:
    """Descriptions of the installed formatters, by key.

    Formatters that fail to resolve to a manifest are left out with a warning.
    """
    descriptions = {}
    for key in formatter_keys():
        try:
            descriptions[key] = load_formatter_manifest(key).description
        except InvalidFormatterError as e:
            log.warning("%s", e)
    return descriptions


def _load(entry: EntryPoint) -> FormatterManifest:
    manifest = entry.load()
    if not isinstance(manifest, FormatterManifest):
        raise InvalidFormatterError(
            f"Entry point '{entry.name}' ({entry.value}) is not a formatter manifest"
        )
    log.debug("Loaded formatter '%s' from %s", entry.name, entry.value)
    return manifest
