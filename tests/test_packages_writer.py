from __future__ import annotations

import io

import pytest

from conftest import entry_lines
from pkgmap.codecs.packages_file import format_packages, write_packages
from pkgmap.core.errors import ValidationError, ValidationErrorKind
from pkgmap.core.uri import Uri


def test_relative_to_base_directory() -> None:
    text = format_packages({"a": Uri.parse("file:///x/y/")}, base_uri="file:///x/", comment="c")
    assert entry_lines(text) == ["a:y/"]


def test_location_equal_to_base_directory() -> None:
    text = format_packages({"a": Uri.parse("file:///x/")}, base_uri="file:///x/", comment="c")
    assert entry_lines(text) == ["a:./"]


def test_without_base_locations_are_written_in_full_with_trailing_slash() -> None:
    text = format_packages(
        {"a": "file:///x/y/", "b": "http://example.com/pkg"},
        comment="c",
    )
    assert text == "# c\na:file:///x/y/\nb:http://example.com/pkg/\n"


def test_entries_follow_mapping_order() -> None:
    mapping = {"zeta": "file:///z/", "alpha": "file:///a/", "mid": "file:///m/"}
    assert entry_lines(format_packages(mapping, comment="c")) == [
        "zeta:file:///z/",
        "alpha:file:///a/",
        "mid:file:///m/",
    ]


def test_unshortenable_locations_stay_absolute() -> None:
    text = format_packages(
        {"web": "http://example.com/pkg/", "other": "file:///elsewhere/"},
        base_uri="file:///proj/.packages",
        comment="c",
    )
    assert entry_lines(text) == ["web:http://example.com/pkg/", "other:file:///elsewhere/"]


def test_query_and_fragment_not_written_when_relativizing() -> None:
    text = format_packages({"a": "file:///x/y/?q#f"}, base_uri="file:///x/", comment="c")
    assert entry_lines(text) == ["a:y/"]


def test_comment_lines_prefixed_and_trailing_newline_dropped() -> None:
    text = format_packages({}, comment="first\nsecond\n")
    assert text == "# first\n# second\n"


def test_comment_without_trailing_newline_and_inner_blank_line() -> None:
    text = format_packages({}, comment="first\n\nthird")
    assert text == "# first\n# \n# third\n"


def test_empty_comment_writes_no_header() -> None:
    assert format_packages({"a": "file:///a/"}, comment="") == "a:file:///a/\n"


def test_default_header_is_generated_timestamp() -> None:
    text = format_packages({"a": "file:///a/"})
    lines = text.split("\n")
    assert lines[0].startswith("# generated by pkgmap at ")
    assert lines[1:] == ["a:file:///a/", ""]


def test_write_packages_to_sink() -> None:
    buf = io.StringIO()
    result = write_packages(buf, {"a": "file:///x/y/"}, base_uri=Uri.parse("file:///x/"), comment="hdr")
    assert result is None
    assert buf.getvalue() == "# hdr\na:y/\n"


def test_base_uri_must_be_absolute_and_nothing_is_written() -> None:
    buf = io.StringIO()
    with pytest.raises(ValidationError) as excinfo:
        write_packages(buf, {"a": "file:///x/"}, base_uri="x/", comment="c")
    assert excinfo.value.kind is ValidationErrorKind.INVALID_BASE_URI
    assert buf.getvalue() == ""


def test_base_uri_with_fragment_is_not_absolute() -> None:
    with pytest.raises(ValidationError, match=r"base URI must be absolute"):
        format_packages({}, base_uri="file:///x/#frag")


def test_invalid_package_name_fails_after_partial_output() -> None:
    buf = io.StringIO()
    with pytest.raises(ValidationError) as excinfo:
        write_packages(buf, {"good": "file:///g/", "bad name": "file:///b/"}, comment="c")
    assert excinfo.value.kind is ValidationErrorKind.INVALID_PACKAGE_NAME
    assert excinfo.value.value == "bad name"
    # Already-written lines are kept.
    assert buf.getvalue() == "# c\ngood:file:///g/\n"


def test_non_string_package_name_is_invalid() -> None:
    with pytest.raises(ValidationError) as excinfo:
        format_packages({1: "file:///g/"}, comment="c")  # type: ignore[dict-item]
    assert excinfo.value.kind is ValidationErrorKind.INVALID_PACKAGE_NAME


def test_package_scheme_is_forbidden() -> None:
    with pytest.raises(ValidationError) as excinfo:
        format_packages({"a": "package:foo/"}, comment="c")
    assert excinfo.value.kind is ValidationErrorKind.FORBIDDEN_SCHEME
    assert str(excinfo.value.value) == "package:foo/"


def test_package_scheme_is_forbidden_even_with_base() -> None:
    with pytest.raises(ValidationError, match=r"package: URI"):
        format_packages({"a": "package:foo/"}, base_uri="package:foo/bar", comment="c")


def test_location_type_is_checked() -> None:
    with pytest.raises(TypeError, match=r"expected Uri or str"):
        format_packages({"a": 42}, comment="c")  # type: ignore[dict-item]


def test_custom_name_validator() -> None:
    text = format_packages({"a b": "file:///x/"}, comment="c", name_validator=lambda n: True)
    assert entry_lines(text) == ["a b:file:///x/"]


def test_location_with_line_break_is_rejected_before_writing_it() -> None:
    buf = io.StringIO()
    with pytest.raises(ValueError, match=r"control character"):
        write_packages(buf, {"good": "file:///g/", "a": "file:///other/x\nb/"}, comment="c")
    assert buf.getvalue() == "# c\ngood:file:///g/\n"
