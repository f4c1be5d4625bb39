import pytest

from repotree.commitlog import file_colour
from repotree.custom import CustomLog, parse_colour

SAMPLE = (
    b"1275543595|Alice|A|/src/main.c\n"
    b"1275543595|Alice|M|/src/util.c|FF0000\n"
    b"1275543600|Bob||docs/readme.txt\n"
    b"1275543700||D|/src/util.c\n"
)


@pytest.fixture
def logpath(tmp_path):
    path = tmp_path / "custom.log"
    path.write_bytes(SAMPLE)
    return str(path)


def test_parse_colour():
    assert parse_colour("00FF00") == (0.0, 1.0, 0.0)
    assert parse_colour("ff0000") == (1.0, 0.0, 0.0)


def test_parse_colour_invalid_is_black():
    assert parse_colour("zzzzzz") == (0.0, 0.0, 0.0)


def test_groups_lines_into_commits(logpath):
    log = CustomLog(logpath)
    assert log.check_format()
    first = log.next_commit()
    assert first.username == "Alice"
    assert first.timestamp == 1275543595
    assert [(f.action, f.filename) for f in first.files] == [
        ("A", "/src/main.c"),
        ("M", "/src/util.c"),
    ]
    assert first.files[0].colour == file_colour("/src/main.c")
    assert first.files[1].colour == (1.0, 0.0, 0.0)


def test_defaults_for_action_and_user(logpath):
    log = CustomLog(logpath)
    log.next_commit()
    second = log.next_commit()
    assert second.username == "Bob"
    assert [(f.action, f.filename) for f in second.files] == [("A", "/docs/readme.txt")]
    third = log.next_commit()
    assert third.username == "Unknown"
    assert third.files[0].action == "D"


def test_reads_to_end(logpath):
    log = CustomLog(logpath)
    commits = []
    while not log.is_finished():
        commit = log.next_commit()
        if commit is not None:
            commits.append(commit)
    assert [c.timestamp for c in commits] == [1275543595, 1275543600, 1275543700]


def test_garbage_is_not_custom(tmp_path):
    path = tmp_path / "custom.log"
    path.write_bytes(b"not a custom log line\n")
    assert CustomLog(str(path)).check_format() is False


def test_commit_at_restores_position(logpath):
    log = CustomLog(logpath)
    assert log.next_commit().username == "Alice"
    assert log.commit_at(0.0).username == "Alice"
    assert log.next_commit().username == "Bob"