"""Reader for the git log format, with log generation from a repository."""

from __future__ import annotations

import os
import re
import shlex
import subprocess
from typing import Optional

from .commitlog import Commit, CommitLog, _SeekLog

GIT_LOG_COMMAND = (
    "git log --pretty=format:user:%aN%n%ct --reverse --raw --encoding=UTF-8 --no-renames"
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atol(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class GitCommitLog(CommitLog):
    """Commits from 'git log' output, or generated from a git working copy."""

    def __init__(self, logfile: str, branch: Optional[str] = None) -> None:
        super().__init__(logfile, "u")
        self.log_command = GIT_LOG_COMMAND
        if branch:
            self.log_command += " " + branch

        if self._log is None and self.is_dir:
            log = self.generate_log(logfile)
            if log is not None:
                self._log = log
                self.success = True
                self._seekable = True

    def _run(self, command: str, directory: str, output: str) -> bool:
        try:
            with open(output, "wb") as out:
                result = subprocess.run(
                    shlex.split(command), cwd=directory, stdout=out, check=False
                )
        except OSError:
            return False
        return result.returncode == 0

    def generate_log(self, directory: str) -> Optional[_SeekLog]:
        """Run git in a repository directory and return the log it wrote."""
        if not os.path.isdir(os.path.join(directory, ".git")):
            return None

        output = self._create_temp_log()
        if output is None:
            return None

        command = self.log_command
        if not self._run(command, directory, output):
            return None

        # git versions without %aN print the placeholder literally
        with open(output, "rb") as fh:
            head = fh.read(8)
        if head == b"user:%aN":
            command = command.replace("%aN", "%an", 1)
            if not self._run(command, directory, output):
                return None

        return self._open_seek_log(output)

    def parse_commit(self) -> Optional[Commit]:
        commit = Commit()

        while True:
            line = self._read_line()
            if not line:
                break

            if line.startswith("user:"):
                commit.username = line[5:]
                line = self._read_line()
                if line is None:
                    return None
                commit.timestamp = _atol(line)
                if commit.timestamp == 0:
                    return None
                continue

            if not commit.username:
                return None

            tab = line.find("\t")
            if tab <= 0 or tab == len(line) - 1:
                continue

            status = line[tab - 1]
            filename = line[tab + 1:]
            if not filename:
                continue

            if filename.startswith('"') and filename.endswith('"'):
                if len(filename) <= 2:
                    continue
                filename = filename[1:-1]

            commit.add_file(filename, status)

        if not commit.username:
            return None
        return commit