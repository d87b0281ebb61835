"""
Filtering and statistics over parsed log entries.
"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from .segmenter import LogEntry, Severity


def parse_severities(names: Optional[Iterable[str]]) -> Optional[List[Severity]]:
    """
    Turn severity names (case-insensitive) into Severity members.

    Raises:
        ValueError: On an unknown name
    """
    if not names:
        return None

    lookup = {s.value.lower(): s for s in Severity}
    severities = []
    for name in names:
        severity = lookup.get(name.strip().lower())
        if severity is None:
            raise ValueError(f"Unknown log type: {name}. Use one of {[s.value for s in Severity]}")
        severities.append(severity)
    return severities


def filter_entries(entries: Iterable[LogEntry],
                   severities: Optional[Iterable[Severity]] = None,
                   search: Optional[str] = None) -> List[LogEntry]:
    """Keep entries matching any of the severities and containing the search text."""
    wanted = set(severities) if severities else None
    needle = search.lower() if search else None

    results = []
    for entry in entries:
        if wanted is not None and entry.severity not in wanted:
            continue
        if needle is not None and needle not in entry.message.lower():
            continue
        results.append(entry)
    return results


def group_by_severity(entries: Iterable[LogEntry]) -> Dict[Severity, List[LogEntry]]:
    groups: Dict[Severity, List[LogEntry]] = OrderedDict((s, []) for s in Severity)
    for entry in entries:
        groups[entry.severity].append(entry)
    return OrderedDict((s, items) for s, items in groups.items() if items)


def compute_statistics(entries: List[LogEntry]) -> Dict:
    """Get entry statistics."""
    counts = {s.value: 0 for s in Severity}
    for entry in entries:
        counts[entry.severity.value] += 1

    return {
        "total_entries": len(entries),
        "errors": counts[Severity.ERROR.value],
        "warnings": counts[Severity.WARNING.value],
        "logs": counts[Severity.LOG.value],
        "unknown": counts[Severity.UNKNOWN.value],
        "fallback": bool(entries) and counts[Severity.UNKNOWN.value] == len(entries),
    }
