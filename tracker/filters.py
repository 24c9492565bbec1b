"""Query-string filters for listing issues.

Only allow-listed issue fields can be filtered on. Each one is converted to
the type stored for that field and compared for exact equality; all filters
are ANDed together with the owning project.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from tracker.exceptions import InvalidFilterError

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


def _to_str(value: str) -> str:
    return value


def _to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(value)


def _to_datetime(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# query parameter -> (issue attribute, converter)
FILTERABLE_FIELDS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "_id": ("id", _to_str),
    "issue_title": ("issue_title", _to_str),
    "issue_text": ("issue_text", _to_str),
    "created_by": ("created_by", _to_str),
    "assigned_to": ("assigned_to", _to_str),
    "status_text": ("status_text", _to_str),
    "open": ("open", _to_bool),
    "created_on": ("created_on", _to_datetime),
    "updated_on": ("updated_on", _to_datetime),
}


@dataclass
class IssueFilter:
    criteria: dict[str, Any] = field(default_factory=dict)
    # Set when a parameter names a field issues do not have
    unmatchable: bool = False


def parse_filters(params: Iterable[tuple[str, str]]) -> IssueFilter:
    """Build an IssueFilter from query parameters.

    Raises:
        InvalidFilterError: If a value cannot be converted to its field type
    """
    issue_filter = IssueFilter()

    for key, value in params:
        if key not in FILTERABLE_FIELDS:
            issue_filter.unmatchable = True
            continue

        attribute, convert = FILTERABLE_FIELDS[key]
        try:
            issue_filter.criteria[attribute] = convert(value)
        except ValueError as exc:
            raise InvalidFilterError(key, value) from exc

    return issue_filter
