"""Tests for loading template files from disk."""

from pathlib import Path

import pytest

from rawreplay.adapters.driven.templates.loader import load_templates, template_name
from rawreplay.core.errors import LoadError, LoadErrorKind, ParseError, ParseErrorKind

__all__ = []


def write_template(directory: Path, name: str, content: bytes) -> Path:
    """Write a raw request file and return its path."""
    path = directory / name
    path.write_bytes(content)
    return path


def test_load_templates_in_sorted_order_with_names(tmp_path: Path) -> None:
    """Templates should be loaded in path order and named after their files."""
    write_template(tmp_path, "post2.txt", b"GET /b HTTP/1.1\r\nHost: h.io\r\n\r\n")
    write_template(tmp_path, "post1.txt", b"POST /a HTTP/1.1\r\nHost: h.io\r\n\r\nx=1")
    write_template(tmp_path, "other.txt", b"GET /ignored HTTP/1.1\r\nHost: h.io\r\n\r\n")

    templates = load_templates(str(tmp_path / "post*.txt"))

    assert [t.name for t in templates] == ["post1", "post2"]
    assert templates[0].method == "POST"
    assert templates[0].url == "https://h.io/a"
    assert templates[0].body == b"x=1"
    assert templates[1].url == "https://h.io/b"


def test_load_templates_logs_each_template(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """One log line should be emitted per loaded template."""
    caplog.set_level("INFO", logger="rawreplay")
    write_template(tmp_path, "post1.txt", b"GET /a HTTP/1.1\r\nHost: h.io\r\n\r\n")

    load_templates(str(tmp_path / "post*.txt"))

    assert any("[post1]" in r.getMessage() for r in caplog.records)


def test_load_templates_fails_when_nothing_matches(tmp_path: Path) -> None:
    """Zero matching files should fail with NO_TEMPLATES_FOUND."""
    with pytest.raises(LoadError) as exc_info:
        load_templates(str(tmp_path / "post*.txt"))

    assert exc_info.value.kind is LoadErrorKind.NO_TEMPLATES_FOUND


def test_load_templates_fails_on_unparsable_file(tmp_path: Path) -> None:
    """One bad template should fail the whole load and keep the parse error as cause."""
    write_template(tmp_path, "post1.txt", b"GET /a HTTP/1.1\r\nHost: h.io\r\n\r\n")
    write_template(tmp_path, "post2.txt", b"GET /b HTTP/1.1\r\n\r\n")

    with pytest.raises(LoadError) as exc_info:
        load_templates(str(tmp_path / "post*.txt"))

    assert exc_info.value.kind is LoadErrorKind.TEMPLATE_PARSE_FAILURE
    assert "post2.txt" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, ParseError)
    assert exc_info.value.__cause__.kind is ParseErrorKind.MISSING_HOST_HEADER


def test_load_templates_fails_on_unreadable_file(tmp_path: Path) -> None:
    """A matching entry that cannot be read should fail with FILE_READ_FAILURE."""
    (tmp_path / "post1.txt").mkdir()

    with pytest.raises(LoadError) as exc_info:
        load_templates(str(tmp_path / "post*.txt"))

    assert exc_info.value.kind is LoadErrorKind.FILE_READ_FAILURE


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("Post/post1.txt", "post1"),
        (Path("/tmp/post_login.txt"), "post_login"),
        ("post.backup", "post.backup"),
    ],
)
def test_template_name(path: str | Path, expected: str) -> None:
    """Template name should be the base name without the .txt suffix."""
    assert template_name(path) == expected
