from __future__ import annotations

import pytest

from conftest import as_text
from pkgmap.codecs.packages_file import parse_packages
from pkgmap.core.errors import PackagesFileError, ParseError, ParseErrorKind
from pkgmap.core.uri import Uri

_BASE = "file:///proj/pkgfile"


def _parse(text: str, base: str = _BASE) -> dict[str, str]:
    return as_text(parse_packages(text.encode("utf-8"), base))


def _parse_error(text: str | bytes) -> ParseError:
    source = text.encode("utf-8") if isinstance(text, str) else text
    with pytest.raises(ParseError) as excinfo:
        parse_packages(source, _BASE)
    return excinfo.value


def test_relative_locations_resolve_against_base() -> None:
    assert _parse("foo:lib/\nbar:../bar/\n") == {
        "foo": "file:///proj/lib/",
        "bar": "file:///bar/",
    }


def test_comment_lines_are_skipped_and_trailing_slash_added() -> None:
    assert _parse("# note\nfoo:http://example.com/pkg\n") == {"foo": "http://example.com/pkg/"}


def test_comment_line_containing_separator_is_still_a_comment() -> None:
    assert _parse("#foo:bar/\n#:\nbaz:x/") == {"baz": "file:///proj/x/"}


def test_result_preserves_file_order() -> None:
    result = parse_packages(b"zeta:z/\nalpha:a/\nmid:m/\n", _BASE)
    assert list(result) == ["zeta", "alpha", "mid"]


@pytest.mark.parametrize("sep", ["\n", "\r", "\r\n", "\n\n\r\r"])
def test_cr_and_lf_are_independent_terminators(sep: str) -> None:
    assert _parse(f"a:x/{sep}b:y/{sep}") == {"a": "file:///proj/x/", "b": "file:///proj/y/"}


def test_empty_input_and_blank_lines_only() -> None:
    assert parse_packages(b"", _BASE) == {}
    assert parse_packages(b"\n\r\n\n", _BASE) == {}


def test_last_line_without_terminator() -> None:
    assert _parse("foo:lib") == {"foo": "file:///proj/lib/"}


def test_first_colon_splits_name_and_value() -> None:
    assert _parse("foo:http://example.com:8080/x\n") == {"foo": "http://example.com:8080/x/"}


def test_absolute_locations_are_normalized() -> None:
    assert _parse("foo:file:///a/./b/../c\n") == {"foo": "file:///a/c/"}


def test_empty_value_resolves_to_root_of_base() -> None:
    assert _parse("foo:\n") == {"foo": "file:///"}


def test_locations_are_absolute_directory_uris() -> None:
    result = parse_packages(b"a:x\nb:http://h/y\nc:/abs\n", _BASE)
    for uri in result.values():
        assert isinstance(uri, Uri)
        assert uri.is_absolute
        assert uri.path.endswith("/")


def test_accepts_bytearray_and_memoryview_and_uri_base() -> None:
    base = Uri.parse(_BASE)
    assert as_text(parse_packages(bytearray(b"a:x/"), base)) == {"a": "file:///proj/x/"}
    assert as_text(parse_packages(memoryview(b"a:x/"), base)) == {"a": "file:///proj/x/"}


def test_rejects_text_source() -> None:
    with pytest.raises(TypeError, match=r"expected bytes"):
        parse_packages("foo:lib/", _BASE)  # type: ignore[arg-type]


def test_rejects_relative_base() -> None:
    with pytest.raises(ValueError, match=r"base_location must be absolute"):
        parse_packages(b"foo:lib/", "proj/")


def test_missing_package_name_at_offset() -> None:
    err = _parse_error(":foo/")
    assert err.kind is ParseErrorKind.MISSING_PACKAGE_NAME
    assert err.offset == 0

    err = _parse_error("a:x/\n:foo/\n")
    assert err.kind is ParseErrorKind.MISSING_PACKAGE_NAME
    assert err.offset == 5


def test_missing_separator() -> None:
    err = _parse_error("foo")
    assert err.kind is ParseErrorKind.MISSING_SEPARATOR
    assert err.offset == 2

    err = _parse_error("a:x/\nfoo\nb:y/\n")
    assert err.kind is ParseErrorKind.MISSING_SEPARATOR
    # offset of the terminating LF
    assert err.offset == 8


def test_invalid_package_name_at_line_start() -> None:
    err = _parse_error("a:x/\nfoo bar:x/\n")
    assert err.kind is ParseErrorKind.INVALID_PACKAGE_NAME
    assert err.offset == 5
    assert "foo bar" in str(err)


def test_duplicate_package_name_reports_second_line() -> None:
    err = _parse_error("foo:a/\nbar:b/\nfoo:c/\n")
    assert err.kind is ParseErrorKind.DUPLICATE_PACKAGE_NAME
    assert err.offset == 14


def test_invalid_location() -> None:
    err = _parse_error("foo:http://h:port/\n")
    assert err.kind is ParseErrorKind.INVALID_LOCATION
    assert err.offset == 4


def test_non_utf8_location() -> None:
    err = _parse_error(b"foo:\xff/\n")
    assert err.kind is ParseErrorKind.INVALID_LOCATION
    assert err.offset == 4


def test_custom_name_validator() -> None:
    result = parse_packages(b"foo bar:x/\n", _BASE, name_validator=lambda name: bool(name))
    assert as_text(result) == {"foo bar": "file:///proj/x/"}

    with pytest.raises(ParseError) as excinfo:
        parse_packages(b"foo:x/\n", _BASE, name_validator=lambda name: name.startswith("pkg_"))
    assert excinfo.value.kind is ParseErrorKind.INVALID_PACKAGE_NAME


def test_parse_error_message_and_hierarchy() -> None:
    err = _parse_error(":x")
    assert isinstance(err, PackagesFileError)
    assert isinstance(err, ValueError)
    assert str(err) == "missing package name at offset 0"
    assert err.source == b":x"


def test_location_with_control_character() -> None:
    err = _parse_error("foo:x\ty/\n")
    assert err.kind is ParseErrorKind.INVALID_LOCATION
    assert err.offset == 4
