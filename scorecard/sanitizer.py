"""
Entry sanitization: turns untrusted parsed JSON into validated WeekEntry lists.

Collections are accepted all-or-nothing. A malformed collection (not a list,
or an element without a string weekStart) is rejected as a whole; a
malformed individual field is coerced to its empty value instead.
"""

import logging
from collections.abc import Mapping
from typing import Any, List

from scorecard.coercion import to_boolean_value, to_numeric_value
from scorecard.entries import (
    BOOLEAN_FIELDS,
    JSON_KEYS,
    NUMERIC_FIELDS,
    WeekEntry,
    sort_entries,
)

logger = logging.getLogger(__name__)


class RejectedInput(ValueError):
    """Raised when a collection cannot be accepted as week entries."""


# ---------------------------------------------------------------------------
# Collection sanitization
# ---------------------------------------------------------------------------

def _sanitize_item(item: Mapping) -> WeekEntry:
    fields = {name: to_numeric_value(item.get(JSON_KEYS[name])) for name in NUMERIC_FIELDS}
    fields.update(
        {name: to_boolean_value(item.get(JSON_KEYS[name])) for name in BOOLEAN_FIELDS}
    )
    notes = item.get("notes")
    fields["notes"] = notes if isinstance(notes, str) else ""
    return WeekEntry(week_start=item["weekStart"], **fields)


def sanitize(raw: Any) -> List[WeekEntry]:
    """
    Validate and coerce a parsed JSON value into sorted week entries.

    Raises:
        RejectedInput: `raw` is not a list, or any element is not an object
            with a string "weekStart". No entries are returned in that case.
    """
    if not isinstance(raw, list):
        logger.warning("Rejected entries: expected a list, got %s", type(raw).__name__)
        raise RejectedInput(f"Expected a list of week entries, got {type(raw).__name__}")

    sanitized: List[WeekEntry] = []
    for position, item in enumerate(raw):
        if not isinstance(item, Mapping):
            logger.warning("Rejected entries: element %d is not an object", position)
            raise RejectedInput(f"Element {position} is not an object")
        if not isinstance(item.get("weekStart"), str):
            logger.warning("Rejected entries: element %d lacks a weekStart string", position)
            raise RejectedInput(f"Element {position} has no string weekStart")
        sanitized.append(_sanitize_item(item))

    return sort_entries(sanitized)
