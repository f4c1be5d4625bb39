"""Reader for the XML change log written by cvs2cl."""

from __future__ import annotations

import re
import time
import xml.etree.ElementTree as ElementTree
from typing import Optional

from .commitlog import Commit, CommitLog

CVS2CL_LOG_COMMAND = "cvs2cl --chrono --stdout --xml -g-q"

_XML_TAG = re.compile(r"^<\??xml")
_ENTRY_START = re.compile(r"^<entry")
_ENTRY_END = re.compile(r"^</entry>")
_TIMESTAMP = re.compile(r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})Z")


class Cvs2clCommitLog(CommitLog):
    """Commits from cvs2cl XML, one <entry> element at a time."""

    def __init__(self, logfile: str) -> None:
        super().__init__(logfile, "<")

    def _read_entry(self) -> Optional[str]:
        line = self._read_line()
        if line is None:
            return None

        if not _ENTRY_START.search(line):
            if not _XML_TAG.search(line):
                return None
            while (line := self._read_line()) is not None:
                if _ENTRY_START.search(line):
                    break
            else:
                return None

        lines = [line]
        while (line := self._read_line()) is not None:
            lines.append(line)
            if _ENTRY_END.search(line):
                return "\n".join(lines) + "\n"
        return None

    def parse_commit(self) -> Optional[Commit]:
        text = self._read_entry()
        if text is None:
            return None

        try:
            entry = ElementTree.fromstring(text)
        except ElementTree.ParseError:
            return None
        if entry.tag != "entry":
            return None

        date = entry.find("isoDate")
        if date is None or date.text is None:
            return None
        stamp = _TIMESTAMP.search(date.text)
        if not stamp:
            return None
        year, month, day, hour, minute, second = (int(x) for x in stamp.groups())
        try:
            timestamp = int(time.mktime((year, month, day, hour, minute, second, 0, 0, -1)))
        except (OverflowError, ValueError):
            return None

        commit = Commit(timestamp=timestamp)

        author = entry.find("author")
        if author is not None:
            commit.username = author.text or "Unknown"

        children = list(entry)
        first_file = next((i for i, child in enumerate(children) if child.tag == "file"), None)
        if first_file is not None:
            for element in children[first_file:]:
                state = element.find("cvsstate")
                name = element.find("name")
                if name is None or state is None:
                    continue
                status = "D" if state.text == "dead" else "M"
                filename = name.text or ""
                if not filename:
                    continue
                commit.add_file(filename, status)

        return commit