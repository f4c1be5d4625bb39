"""Reader for 'git log --pretty=raw' output."""

from __future__ import annotations

import re
from typing import Optional

from .commitlog import Commit, CommitLog

GIT_RAW_LOG_COMMAND = "git log --reverse --raw --pretty=raw"

_COMMIT = re.compile(r"^commit ([0-9a-z]+)")
_TREE = re.compile(r"^tree ([0-9a-z]+)")
_PARENT = re.compile(r"^parent ([0-9a-z]+)")
_AUTHOR = re.compile(r"^author (.+) <([^@>]+)@?([^>]*)> (\d+) ([-+]\d+)")
_COMMITTER = re.compile(r"^committer (.+) <([^@>]+)@?([^>]*)> (\d+) ([-+]\d+)")
_FILE = re.compile(r"^:[0-9]+ [0-9]+ [0-9a-z]+\.* ([0-9a-z]+)\.* ([A-Z])[ \t]+(.+)")


class GitRawCommitLog(CommitLog):
    """Commits from raw git log output: author for the name, committer for the time."""

    def __init__(self, logfile: str) -> None:
        super().__init__(logfile, "c")
        self.log_command = GIT_RAW_LOG_COMMAND

    def parse_commit(self) -> Optional[Commit]:
        line = self._read_line()
        if line is None or not _COMMIT.search(line):
            return None

        line = self._read_line()
        if line is None or not _TREE.search(line):
            return None

        line = self._read_line()
        if line is None:
            return None
        while _PARENT.search(line):
            line = self._read_line()
            if line is None:
                return None

        author = _AUTHOR.search(line)
        if not author:
            return None
        commit = Commit(username=author.group(1))

        line = self._read_line()
        if line is None:
            return None
        committer = _COMMITTER.search(line)
        if not committer:
            return None
        commit.timestamp = int(committer.group(4))

        # blank line before the message
        if self._read_line() is None:
            return None

        line = self._read_line()
        while line:
            line = self._read_line()

        line = self._read_line()
        while line:
            match = _FILE.search(line)
            if match:
                commit.add_file(match.group(3), match.group(2))
            line = self._read_line()

        return commit