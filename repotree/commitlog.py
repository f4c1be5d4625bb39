"""Commit records and the base reader shared by every log format."""

from __future__ import annotations

import hashlib
import os
import sys
import tempfile
from dataclasses import dataclass, field
from typing import BinaryIO, Optional

Colour = tuple[float, float, float]

WHITE: Colour = (1.0, 1.0, 1.0)


class LogFormatError(Exception):
    """Raised when a log cannot be opened or read."""


def _utf8_bytes(text: str) -> bytes:
    try:
        return text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return text.encode("utf-8", "surrogatepass")


def munge_utf8(text: str | bytes) -> str:
    """Return text as valid UTF-8, each invalid byte sequence replaced by '?'."""
    data = _utf8_bytes(text) if isinstance(text, str) else bytes(text)
    pieces: list[str] = []
    while data:
        try:
            pieces.append(data.decode("utf-8"))
            break
        except UnicodeDecodeError as exc:
            pieces.append(data[: exc.start].decode("utf-8"))
            pieces.append("?")
            data = data[max(exc.end, exc.start + 1):]
    return "".join(pieces)


def colour_hash(text: str) -> Colour:
    """Map a string to a stable RGB colour with components in [0, 1]."""
    digest = hashlib.md5(_utf8_bytes(text)).digest()
    return (digest[0] / 255.0, digest[1] / 255.0, digest[2] / 255.0)


def file_colour(filename: str) -> Colour:
    """Colour for a file, derived from its extension; white if it has none."""
    slash = filename.rfind("/")
    dot = filename.rfind(".")
    if dot != -1 and dot + 1 < len(filename) and (slash == -1 or slash < dot):
        return colour_hash(filename[dot + 1:])
    return WHITE


@dataclass
class CommitFile:
    """One file touched by a commit."""

    filename: str
    action: str
    colour: Colour = WHITE

    def __post_init__(self) -> None:
        self.filename = munge_utf8(self.filename)
        if not self.filename.startswith("/"):
            self.filename = "/" + self.filename


@dataclass
class Commit:
    """A commit: when, by whom and which files."""

    timestamp: int = 0
    username: str = ""
    files: list[CommitFile] = field(default_factory=list)

    def add_file(self, filename: str, action: str, colour: Optional[Colour] = None) -> None:
        """Record a file; without a colour one is derived from the extension."""
        if colour is None:
            colour = file_colour(filename)
        self.files.append(CommitFile(filename, action, colour))

    def validate(self) -> bool:
        """Clean up the username so it is valid UTF-8."""
        self.username = munge_utf8(self.username)
        return True


def _decode_line(raw: bytes) -> str:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw.decode("utf-8", "surrogateescape")


class _SeekLog:
    """A log file held in memory with a movable read position."""

    def __init__(self, path: str) -> None:
        try:
            with open(path, "rb") as fh:
                self._data = fh.read()
        except OSError as exc:
            raise LogFormatError(f"unable to read log file {path}") from exc
        self.pointer = 0
        self.finished = False

    def next_line(self) -> Optional[str]:
        if self.pointer >= len(self._data):
            self.finished = True
            return None
        start = self.pointer
        end = self._data.find(b"\n", start)
        if end == -1:
            end = len(self._data)
            self.pointer = end
        else:
            self.pointer = end + 1
        return _decode_line(self._data[start:end])

    def seek_to(self, percent: float) -> None:
        size = len(self._data)
        pos = min(max(int(size * percent), 0), size)
        if pos > 0 and self._data[pos - 1] != ord("\n"):
            newline = self._data.find(b"\n", pos)
            pos = size if newline == -1 else newline + 1
        self.pointer = pos
        self.finished = False

    @property
    def percent(self) -> float:
        return self.pointer / len(self._data) if self._data else 0.0


class _StreamLog:
    """A forward-only log read from a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self.finished = False

    def next_line(self) -> Optional[str]:
        raw = self._stream.readline()
        if not raw:
            self.finished = True
            return None
        return _decode_line(raw)


def _first_char_ok(first_char: Optional[str], first: bytes) -> bool:
    if first_char is None:
        return True
    return first == first_char.encode("utf-8")[:1]


class CommitLog:
    """Base reader: opens a log file, '-' for standard input, or a directory."""

    def __init__(self, logfile: str, first_char: Optional[str] = None) -> None:
        self.logfile = logfile
        self.log_command = ""
        self.is_dir = False
        self.success = False
        self._seekable = False
        self._log: Optional[_SeekLog | _StreamLog] = None
        self._pushback: Optional[str] = None
        self._buffered: Optional[Commit] = None
        self._temp_file: Optional[str] = None

        if logfile == "-":
            stream = sys.stdin.buffer
            peek = getattr(stream, "peek", None)
            first = peek(1)[:1] if peek is not None else b""
            if _first_char_ok(first_char, first):
                self._log = _StreamLog(stream)
                self.success = True
            return

        if not os.path.exists(logfile):
            return
        self.is_dir = os.path.isdir(logfile)
        if self.is_dir:
            return

        try:
            with open(logfile, "rb") as fh:
                first = fh.read(1)
        except OSError:
            first = b""
        if _first_char_ok(first_char, first):
            self._log = self._open_seek_log(logfile)
            self._seekable = True
            self.success = True

    def _open_seek_log(self, path: str) -> _SeekLog:
        return _SeekLog(path)

    def _create_temp_log(self) -> Optional[str]:
        try:
            fd, path = tempfile.mkstemp(prefix="repotree-")
        except OSError:
            return None
        os.close(fd)
        self._temp_file = path
        return path

    def _read_line(self) -> Optional[str]:
        if self._pushback is not None:
            line, self._pushback = self._pushback, None
            return line
        if self._log is None:
            raise LogFormatError(f"log {self.logfile!r} could not be opened")
        return self._log.next_line()

    def parse_commit(self) -> Optional[Commit]:
        """Parse the next entry; the generic log recognises no format."""
        return None

    def check_format(self) -> bool:
        """Read one commit to see whether the log is in this format."""
        if not self.success:
            return False
        commit = self.next_commit()
        if commit is None:
            return False
        if self._seekable:
            self.seek_to(0.0)
        else:
            self._buffered = commit
        return True

    def next_commit(self) -> Optional[Commit]:
        """Return the next commit, or None if the next entry did not parse."""
        if self._buffered is not None:
            commit, self._buffered = self._buffered, None
            return commit
        if self._log is None:
            raise LogFormatError(f"log {self.logfile!r} could not be opened")
        commit = self.parse_commit()
        if commit is None:
            return None
        commit.validate()
        return commit

    def find_next_commit(self, attempts: int) -> Optional[Commit]:
        """Try up to `attempts` entries and return the first that parses."""
        for _ in range(attempts):
            commit = self.next_commit()
            if commit is not None:
                return commit
        return None

    def commit_at(self, percent: float) -> Optional[Commit]:
        """Peek at the commit near a fraction of the log without moving."""
        if not self._seekable or not isinstance(self._log, _SeekLog):
            return None
        log = self._log
        saved = (log.pointer, log.finished, self._pushback)
        self.seek_to(percent)
        commit = self.find_next_commit(500)
        log.pointer, log.finished, self._pushback = saved
        return commit

    def seek_to(self, percent: float) -> None:
        """Move to a fraction of the log; ignored when not seekable."""
        if not self._seekable or not isinstance(self._log, _SeekLog):
            return
        self._pushback = None
        self._log.seek_to(percent)

    def percent(self) -> float:
        """Fraction of the log read so far; 0.0 when not seekable."""
        if self._seekable and isinstance(self._log, _SeekLog):
            return self._log.percent
        return 0.0

    def is_finished(self) -> bool:
        return bool(self._seekable and self._log is not None and self._log.finished)

    def is_seekable(self) -> bool:
        return self._seekable

    def close(self) -> None:
        """Release the log and delete any generated temporary file."""
        self._log = None
        if self._temp_file is not None:
            try:
                os.remove(self._temp_file)
            except OSError:
                pass
            self._temp_file = None

    def __enter__(self) -> "CommitLog":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()