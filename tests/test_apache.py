from datetime import datetime

import pytest

from repotree.apache import ApacheCombinedLog
from repotree.commitlog import colour_hash

LINE = ('127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] '
        '"GET /apache_pb.gif?x=1 HTTP/1.0" 200 2326 '
        '"http://www.example.com/start.html" "Mozilla/4.08"')


def _write(tmp_path, text):
    path = tmp_path / "access.log"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_parses_combined_line(tmp_path):
    with ApacheCombinedLog(_write(tmp_path, LINE + "\n")) as log:
        commit = log.next_commit()
    assert commit.username == "127.0.0.1"
    assert [f.filename for f in commit.files] == ["/apache_pb.gif"]
    assert commit.files[0].action == "A"
    assert commit.files[0].colour == colour_hash("gif")
    assert datetime.fromtimestamp(commit.timestamp) == datetime(2000, 10, 10, 13, 55, 36)


@pytest.mark.parametrize("url,expected", [
    ("/docs/", "/docs/index.html"),
    ("/", "/index.html"),
    ("?a=1", "/index.html"),
    ("/page.html?q=a?b", "/page.html?q=a"),
])
def test_url_to_filename(tmp_path, url, expected):
    line = f'host - - [01/Jan/2010:00:00:00 +0000] "GET {url} HTTP/1.1" 200 10'
    with ApacheCombinedLog(_write(tmp_path, line + "\n")) as log:
        commit = log.next_commit()
    assert commit.files[0].filename == expected


def test_unknown_month_is_january(tmp_path):
    line = 'host - - [05/Foo/2010:01:02:03 +0000] "GET /a HTTP/1.1" 200 10'
    with ApacheCombinedLog(_write(tmp_path, line + "\n")) as log:
        commit = log.next_commit()
    assert datetime.fromtimestamp(commit.timestamp).month == 1


def test_malformed_line_is_rejected(tmp_path):
    with ApacheCombinedLog(_write(tmp_path, "this is not a log line\n")) as log:
        assert log.next_commit() is None
        assert log.check_format() is False


def test_check_format_rewinds(tmp_path):
    with ApacheCombinedLog(_write(tmp_path, LINE + "\n" + LINE + "\n")) as log:
        assert log.check_format() is True
        first = log.next_commit()
        second = log.next_commit()
        assert first.username == second.username == "127.0.0.1"
        assert log.next_commit() is None
        assert log.is_finished() is True