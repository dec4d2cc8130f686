"""
Export functionality for Photo Fingerprint.

Turns find-duplicates output lines into the JSON array of [left, right]
path pairs consumed by the manual review tool.
"""

from __future__ import annotations

import json
from typing import Iterable, Optional, TextIO

from ..models import MatchType

_RELATIONS = {
    'is identical to': MatchType.IDENTICAL,
    'is similar to': MatchType.SIMILAR,
}


def parse_match_line(line: str) -> Optional[tuple[str, str, MatchType]]:
    """
    Parse one find-duplicates output line.

    Args:
        line: '<candidate>\\tis identical to\\t<name>' or '...is similar to...'

    Returns:
        (candidate, name, match_type), or None for anything else
        (progress output, blank lines)

    Examples:
        >>> parse_match_line('/c/dup.jpg\\tis identical to\\t/a/photo1.jpg')
        ('/c/dup.jpg', '/a/photo1.jpg', <MatchType.IDENTICAL: 'identical'>)
    """
    parts = line.rstrip('\r\n').split('\t')
    if len(parts) != 3:
        return None
    candidate, relation, name = parts
    match_type = _RELATIONS.get(relation)
    if match_type is None or not candidate or not name:
        return None
    return candidate, name, match_type


def collect_pairs(lines: Iterable[str], include_similar: bool = True) -> list[list[str]]:
    """
    Collect unique [candidate, name] pairs from output lines.

    Pairs keep first-seen order. A pair whose reverse was already seen is
    dropped, so each duplicate relationship is reviewed once.
    """
    pairs: list[list[str]] = []
    seen: set[frozenset] = set()

    for line in lines:
        parsed = parse_match_line(line)
        if parsed is None:
            continue
        candidate, name, match_type = parsed
        if match_type == MatchType.SIMILAR and not include_similar:
            continue
        if candidate == name:
            continue
        key = frozenset((candidate, name))
        if key in seen:
            continue
        seen.add(key)
        pairs.append([candidate, name])

    return pairs


def export_pairs(
    lines: Iterable[str],
    file_handle: TextIO,
    include_similar: bool = True,
) -> int:
    """
    Write the review-tool JSON document for find-duplicates output.

    Args:
        lines: find-duplicates output lines
        file_handle: Open text handle to write to
        include_similar: Also export 'similar' matches

    Returns:
        Number of pairs written
    """
    pairs = collect_pairs(lines, include_similar=include_similar)
    json.dump(pairs, file_handle, indent=2)
    file_handle.write("\n")
    return len(pairs)


__all__ = ['parse_match_line', 'collect_pairs', 'export_pairs']
