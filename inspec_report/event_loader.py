"""Read execution events from JSON-lines files."""

import json
import logging
from collections.abc import Iterable, Iterator

from inspec_report.models.outcome import RawOutcome

log = logging.getLogger(__name__)


def read_events(lines: Iterable[str]) -> Iterator[RawOutcome]:
    """Yield one event per JSON object line, skipping anything else."""
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            log.warning("Skipping line %d: invalid JSON (%s)", line_number, e)
            continue
        if not isinstance(data, dict):
            log.warning("Skipping line %d: not a JSON object", line_number)
            continue
        yield RawOutcome.from_mapping(data)
