"""Reader for cvs-exp.pl output."""

from __future__ import annotations

import re
import time
from typing import Optional

from .commitlog import Commit, CommitLog

CVS_EXP_LOG_COMMAND = "cvs-exp.pl -notree"

_COMMITNO = re.compile(r"^([0-9]{6}):")
_BRANCH = re.compile(r"^BRANCH \[(.+)\]$")
_DATE = re.compile(
    r"^\(date: ([0-9]{4})[-/]([0-9]{2})[-/]([0-9]{2}) "
    r"([0-9]{2}):([0-9]{2}):([0-9]{2})(?: [+-][0-9]{4})?;(.+)$"
)
_DETAIL = re.compile(r"author: ([^;]+);  state: ([^;]+);(.+)$")
_ENTRY = re.compile(r"\| (.+),v:([0-9.]+),?")
_END = re.compile(r"^(=+)$")


def _local_time(fields: tuple[str, ...]) -> Optional[int]:
    year, month, day, hour, minute, second = (int(x) for x in fields)
    try:
        return int(time.mktime((year, month, day, hour, minute, second, 0, 0, -1)))
    except (OverflowError, ValueError):
        return None


class CvsExpCommitLog(CommitLog):
    """Commits from cvs-exp output; files in the Attic are ignored."""

    def __init__(self, logfile: str) -> None:
        super().__init__(logfile, None)

    def parse_commit(self) -> Optional[Commit]:
        line = self._read_line()
        if line is None:
            return None
        if not line:
            line = self._read_line()
            if line is None:
                return None

        if not _COMMITNO.search(line):
            return None

        line = self._read_line()
        if line is None:
            return None

        if _BRANCH.search(line):
            line = self._read_line()
            if line is None or line:
                return None
            line = self._read_line()
            if line is None:
                return None

        date = _DATE.search(line)
        if not date:
            return None
        timestamp = _local_time(date.groups()[:6])
        if timestamp is None:
            return None

        detail = _DETAIL.search(date.group(7))
        if not detail:
            return None

        commit = Commit(timestamp=timestamp, username=detail.group(1))
        action = "D" if detail.group(2) == "dead" else "M"

        line = self._read_line()
        if line is None:
            return None

        while (entry := _ENTRY.search(line)) is not None:
            if "/Attic/" not in entry.group(1):
                commit.add_file(entry.group(1), action)
            line = self._read_line()
            if line is None:
                return None

        # blank line before the message
        if self._read_line() is None:
            return None

        line = self._read_line()
        while line:
            line = self._read_line()

        while (line := self._read_line()) is not None:
            if _END.search(line):
                break

        return commit