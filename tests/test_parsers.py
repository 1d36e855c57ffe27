import pytest

from methodscanner.parsers.lists import (
    normalize_url, parse_auth, parse_cookies, parse_headers, read_lines,
)


def test_read_lines_skips_comments_and_blanks(tmp_path):
    f = tmp_path / "urls.txt"
    f.write_text("# targets\n\n  example.com  \nhttp://a.test/\n   \n#skip\nhttps://b.test\n")
    assert read_lines(str(f)) == ["example.com", "http://a.test/", "https://b.test"]


def test_read_lines_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_lines(str(tmp_path / "nope.txt"))


@pytest.mark.parametrize("raw,expected", [
    ("example.com", "https://example.com"),
    ("example.com/path?q=1", "https://example.com/path?q=1"),
    ("http://example.com", "http://example.com"),
    ("https://example.com", "https://example.com"),
    ("ftp://example.com", "https://ftp://example.com"),
])
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_parse_headers():
    raw = ["X-A: 1", "BadHeaderNoColon", "Authorization:  Bearer a:b ", "X-A:2"]
    assert parse_headers(raw) == [("X-A", "1"), ("Authorization", "Bearer a:b"), ("X-A", "2")]
    assert parse_headers(None) == []


def test_parse_cookies():
    assert parse_cookies(["a=1", "nope", "b=x=y", "c="]) == [("a", "1"), ("b", "x=y"), ("c", "")]


@pytest.mark.parametrize("raw,expected", [
    ("user:pass", ("user", "pass")),
    ("user:pa:ss", ("user", "pa:ss")),
    ("user:", ("user", "")),
    ("nocolon", None),
    ("", None),
    (None, None),
])
def test_parse_auth(raw, expected):
    assert parse_auth(raw) == expected
