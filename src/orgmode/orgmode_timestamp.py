"""On-demand parsing of Org timestamps such as `<2024-01-15 Mon 10:00 +1w>`."""

import re
from typing import List, Tuple

from orgmode.orgmode_ast_node import OrgASTTimestampNode


_TIMESTAMP_PATTERN = re.compile(
    r'(?P<open>[<\[])'
    r'(?P<date>\d{4}-\d{2}-\d{2})'
    r'(?:\s+(?P<day>[^\s\d>\]+\-]+))?'
    r'(?:\s+(?P<time>\d{1,2}:\d{2})(?:-(?P<end_time>\d{1,2}:\d{2}))?)?'
    r'(?:\s+(?P<repeater>(?:\+\+|\.\+|\+)\d+[hdwmy]))?'
    r'(?:\s+(?P<warning>--?\d+[hdwmy]))?'
    r'\s*(?P<close>[>\]])'
)

_CLOSERS = {'<': '>', '[': ']'}


def _match_timestamp(text: str, pos: int) -> Tuple[OrgASTTimestampNode, int, int] | None:
    """
    Find the next single timestamp at or after a position.

    Args:
        text: Text to search
        pos: Position to start searching from

    Returns:
        Tuple of (timestamp node, start position, end position), or None if there
        are no more timestamps
    """
    while True:
        match = _TIMESTAMP_PATTERN.search(text, pos)
        if match is None:
            return None

        # `<...]` and `[...>` are not timestamps
        if _CLOSERS[match.group('open')] != match.group('close'):
            pos = match.start() + 1
            continue

        timestamp = OrgASTTimestampNode(
            date=match.group('date'),
            active=match.group('open') == '<',
            day=match.group('day'),
            time=match.group('time'),
            repeater=match.group('repeater'),
            warning=match.group('warning'),
            end_time=match.group('end_time')
        )
        return timestamp, match.start(), match.end()


def _parse_at(text: str, pos: int) -> Tuple[OrgASTTimestampNode, int] | None:
    """
    Find the next timestamp, folding a directly following `--<...>` range end into it.

    Args:
        text: Text to search
        pos: Position to start searching from

    Returns:
        Tuple of (timestamp node, end position), or None if there are no more timestamps
    """
    found = _match_timestamp(text, pos)
    if found is None:
        return None

    timestamp, _start, end = found
    if not text.startswith('--', end):
        return timestamp, end

    range_end = _match_timestamp(text, end + 2)
    if range_end is None:
        return timestamp, end

    end_stamp, end_start, after = range_end
    if end_start != end + 2 or end_stamp.active != timestamp.active:
        return timestamp, end

    timestamp.end_date = end_stamp.date
    if end_stamp.time is not None:
        timestamp.end_time = end_stamp.time

    return timestamp, after


def parse_timestamp(text: str) -> OrgASTTimestampNode | None:
    """
    Parse the first timestamp found in a span of text.

    Args:
        text: The text to search

    Returns:
        The timestamp node, or None if the text contains no timestamp
    """
    found = _parse_at(text, 0)
    if found is None:
        return None

    return found[0]


def find_timestamps(text: str) -> List[OrgASTTimestampNode]:
    """
    Parse every timestamp in a span of text.

    Args:
        text: The text to search

    Returns:
        Timestamp nodes in order of appearance
    """
    timestamps = []
    pos = 0
    while True:
        found = _parse_at(text, pos)
        if found is None:
            return timestamps

        timestamp, pos = found
        timestamps.append(timestamp)
