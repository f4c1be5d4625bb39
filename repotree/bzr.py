"""Reader for Bazaar short verbose logs, with log generation from a branch."""

from __future__ import annotations

import os
import re
import shlex
import subprocess
import time
from typing import Optional

from .commitlog import Commit, CommitLog, _SeekLog

BZR_LOG_COMMAND = "bzr log --verbose -r 1..-1 --short -n0 --forward"

_COMMIT = re.compile(
    r"^ *([\d.]+) (.+)\t(\d{4})-(\d+)-(\d+)(?: \{[^}]+})?(?: \[merge\])?$"
)
_FILE = re.compile(r"^ *([AMDR])  (.*[^/])$")


def _local_date(year: int, month: int, day: int) -> Optional[int]:
    try:
        return int(time.mktime((year, month, day, 0, 0, 0, 0, 0, -1)))
    except (OverflowError, ValueError):
        return None


class BazaarLog(CommitLog):
    """Commits from 'bzr log --short --verbose' output or a Bazaar branch."""

    def __init__(self, logfile: str) -> None:
        super().__init__(logfile, None)
        self.log_command = BZR_LOG_COMMAND

        if self._log is None and self.is_dir:
            log = self.generate_log(logfile)
            if log is not None:
                self._log = log
                self.success = True
                self._seekable = True

    def generate_log(self, directory: str) -> Optional[_SeekLog]:
        """Run bzr on a branch directory and return the log it wrote."""
        if not os.path.isdir(os.path.join(directory, ".bzr")):
            return None

        output = self._create_temp_log()
        if output is None:
            return None

        try:
            with open(output, "wb") as out:
                result = subprocess.run(
                    shlex.split(self.log_command) + [directory], stdout=out, check=False
                )
        except OSError:
            return None
        if result.returncode != 0:
            return None

        return self._open_seek_log(output)

    def parse_commit(self) -> Optional[Commit]:
        line = self._read_line()
        if line is None:
            return None

        match = _COMMIT.search(line)
        if not match:
            return None

        timestamp = _local_date(int(match.group(3)), int(match.group(4)), int(match.group(5)))
        if timestamp is None:
            return None
        commit = Commit(timestamp=timestamp, username=match.group(2))

        line = self._read_line()
        while line:
            entry = _FILE.search(line)
            if entry:
                commit.add_file(entry.group(2), entry.group(1))
            line = self._read_line()

        return commit