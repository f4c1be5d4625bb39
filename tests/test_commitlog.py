import io
import sys
import types

import pytest

from repotree.commitlog import (
    Commit,
    CommitFile,
    CommitLog,
    LogFormatError,
    colour_hash,
    file_colour,
    munge_utf8,
)


class LineLog(CommitLog):
    def parse_commit(self):
        line = self._read_line()
        if line is None:
            return None
        parts = line.split("|")
        if len(parts) != 3:
            return None
        commit = Commit(timestamp=int(parts[0]), username=parts[1])
        commit.add_file(parts[2], "A")
        return commit


DATA = b"1|a|x\n2|b|y\n3|c|z\n"


@pytest.fixture
def logpath(tmp_path):
    path = tmp_path / "log.txt"
    path.write_bytes(DATA)
    return str(path)


def test_munge_utf8_replaces_invalid_bytes():
    assert munge_utf8(b"ab\xffcd") == "ab?cd"


def test_munge_utf8_keeps_valid_text():
    assert munge_utf8("h\u00e9llo") == "h\u00e9llo"


def test_file_colour_without_extension_is_white():
    assert file_colour("/src/Makefile") == (1.0, 1.0, 1.0)
    assert file_colour("/dir.d/file") == (1.0, 1.0, 1.0)
    assert file_colour("/src/trailing.") == (1.0, 1.0, 1.0)


def test_file_colour_uses_extension_hash():
    assert file_colour("/src/main.py") == colour_hash("py")


def test_colour_hash_is_stable_and_in_range():
    colour = colour_hash("cpp")
    assert colour == colour_hash("cpp")
    assert all(0.0 <= c <= 1.0 for c in colour)


def test_commit_file_prepends_slash():
    assert CommitFile("src/a.c", "A").filename == "/src/a.c"
    assert CommitFile("/src/a.c", "A").filename == "/src/a.c"


def test_add_file_default_colour():
    commit = Commit()
    commit.add_file("lib/x.rb", "M")
    assert commit.files[0].colour == file_colour("lib/x.rb")
    commit.add_file("lib/y.rb", "M", (0.0, 0.0, 0.0))
    assert commit.files[1].colour == (0.0, 0.0, 0.0)


def test_validate_munges_username():
    commit = Commit(username="bob\udcff")
    assert commit.validate() is True
    assert commit.username == "bob?"


def test_missing_file_fails_format(tmp_path):
    log = CommitLog(str(tmp_path / "missing.log"))
    assert log.check_format() is False
    with pytest.raises(LogFormatError):
        log.next_commit()


def test_first_char_mismatch(logpath):
    assert CommitLog.check_format(LineLog(logpath, "u")) is False
    assert CommitLog.check_format(LineLog(logpath, "1")) is True


def test_check_format_rewinds_seekable_log(logpath):
    log = LineLog(logpath)
    assert CommitLog.is_seekable(log) is True
    assert CommitLog.check_format(log) is True
    assert CommitLog.next_commit(log).username == "a"


def test_reads_all_commits_until_finished(logpath):
    log = LineLog(logpath)
    names = []
    while not CommitLog.is_finished(log):
        commit = CommitLog.next_commit(log)
        if commit is not None:
            names.append(commit.username)
    assert names == ["a", "b", "c"]
    assert CommitLog.percent(log) == 1.0


def test_percent_and_seek(logpath):
    log = LineLog(logpath)
    CommitLog.next_commit(log)
    assert 0.0 < CommitLog.percent(log) < 1.0
    CommitLog.seek_to(log, 0.0)
    assert CommitLog.percent(log) == 0.0


def test_commit_at_does_not_move(logpath):
    log = LineLog(logpath)
    assert CommitLog.next_commit(log).username == "a"
    peeked = CommitLog.commit_at(log, 0.5)
    assert peeked.username == "c"
    assert CommitLog.next_commit(log).username == "b"


def test_find_next_commit_skips_bad_lines(tmp_path):
    path = tmp_path / "log.txt"
    path.write_bytes(b"junk\nmore junk\n5|e|f\n")
    log = LineLog(str(path))
    assert CommitLog.find_next_commit(log, 5).timestamp == 5


def test_stdin_log_buffers_first_commit(monkeypatch):
    stream = io.BufferedReader(io.BytesIO(DATA))
    monkeypatch.setattr(sys, "stdin", types.SimpleNamespace(buffer=stream))
    log = LineLog("-")
    assert CommitLog.is_seekable(log) is False
    assert CommitLog.check_format(log) is True
    assert CommitLog.next_commit(log).username == "a"
    assert CommitLog.next_commit(log).username == "b"
    assert CommitLog.commit_at(log, 0.5) is None
    assert CommitLog.percent(log) == 0.0


def test_context_manager_closes(logpath):
    log = LineLog(logpath)
    with CommitLog.__enter__(log) as entered:
        assert CommitLog.next_commit(entered).username == "a"
    with pytest.raises(LogFormatError):
        CommitLog.next_commit(log)