"""Reader for the pipe-separated custom log format."""

from __future__ import annotations

import re
from typing import Optional

from .commitlog import Colour, Commit, CommitLog

_ENTRY = re.compile(r"^([0-9]+)\|([^|]*)\|([ADM]?)\|([^|]+)(?:\|#?([A-F0-9]{6}))?")
_HEX_COLOUR = re.compile(
    r"\s*([0-9A-Fa-f]{1,2})\s*([0-9A-Fa-f]{1,2})\s*([0-9A-Fa-f]{1,2})"
)


def parse_colour(text: str) -> Colour:
    """Parse an RRGGBB hex string; black if it cannot be read."""
    match = _HEX_COLOUR.match(text)
    if not match:
        return (0.0, 0.0, 0.0)
    r, g, b = (int(part, 16) / 255.0 for part in match.groups())
    return (r, g, b)


class CustomLog(CommitLog):
    """Lines of 'timestamp|user|action|file|colour'; consecutive lines with the
    same user and timestamp form one commit."""

    def __init__(self, logfile: str) -> None:
        super().__init__(logfile, None)

    def parse_commit(self) -> Optional[Commit]:
        commit = Commit()
        while self._parse_entry(commit):
            pass
        return commit if commit.files else None

    def _parse_entry(self, commit: Commit) -> bool:
        line = self._read_line()
        if line is None:
            return False

        match = _ENTRY.search(line)
        if not match:
            return False

        timestamp = int(match.group(1))
        username = match.group(2) or "Unknown"
        action = match.group(3) or "A"

        if not commit.files:
            commit.timestamp = timestamp
            commit.username = username
        elif commit.timestamp != timestamp or commit.username != username:
            self._pushback = line
            return False

        colour_text = match.group(5)
        if colour_text:
            commit.add_file(match.group(4), action, parse_colour(colour_text))
        else:
            commit.add_file(match.group(4), action)
        return True