"""Reader for Apache combined access logs: each request becomes a commit."""

from __future__ import annotations

import re
import time
from typing import Optional

from .commitlog import Commit, CommitLog

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_ENTRY_START = re.compile(r"^(?:[^ ]+ )?([^ ]+) +[^ ]+ +([^ ]+) +\[(.*?)\] +(.*)$")
_ENTRY_DATE = re.compile(r"(\d+)/([A-Za-z]+)/(\d+):(\d+):(\d+):(\d+) ([+-])(\d+)")
_ENTRY_REQUEST = re.compile(r"\"([^ ]+) +([^ ]+) +([^ ]+)\" +([^ ]+) +([^\s+]+)(.*)")


def _local_time(year: int, month: int, day: int,
                hour: int, minute: int, second: int) -> Optional[int]:
    try:
        return int(time.mktime((year, month, day, hour, minute, second, 0, 0, -1)))
    except (OverflowError, ValueError):
        return None


class ApacheCombinedLog(CommitLog):
    """Requests from an access log; the client host is the user, the URL the file."""

    def __init__(self, logfile: str) -> None:
        super().__init__(logfile, None)

    def parse_commit(self) -> Optional[Commit]:
        line = self._read_line()
        if line is None:
            return None

        entry = _ENTRY_START.search(line)
        if not entry:
            return None
        host, datestr, request = entry.group(1), entry.group(3), entry.group(4)

        date = _ENTRY_DATE.search(datestr)
        if not date:
            return None
        month_name = date.group(2)
        month = _MONTHS.index(month_name) if month_name in _MONTHS else 0
        timestamp = _local_time(
            int(date.group(3)), month + 1, int(date.group(1)),
            int(date.group(4)), int(date.group(5)), int(date.group(6)),
        )
        if timestamp is None:
            return None

        req = _ENTRY_REQUEST.search(request)
        if not req:
            return None

        filename = req.group(2)
        argpos = filename.rfind("?")
        if argpos != -1:
            filename = filename[:argpos]
        if not filename:
            filename = "/"
        if filename.endswith("/"):
            filename += "index.html"

        commit = Commit(timestamp=timestamp, username=host)
        commit.add_file(filename, "A")
        return commit