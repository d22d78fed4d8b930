"""Relative URI references for compact package locations.

`relativize(uri, base)` returns a reference `r` such that
`base.resolve(r).path == uri.normalize_path().path`. When no shortening is
possible (different scheme or authority, no common path prefix) `uri` is
returned as-is, still absolute.

Query and fragment components are dropped before relativizing and are not
restored in the result.
"""

from __future__ import annotations

from pkgmap.core.uri import Uri


def _same_authority(a: Uri, b: Uri) -> bool:
    if a.has_authority != b.has_authority:
        return False
    if not a.has_authority:
        return True
    return (
        a.userinfo == b.userinfo
        and (a.host or "").lower() == (b.host or "").lower()
        and a.port == b.port
    )


def _relative_path(path: str) -> Uri:
    # A first segment containing ":" would be read back as a scheme, and a
    # leading empty segment as an absolute path.
    first = path.split("/", 1)[0]
    if ":" in first or path.startswith("/"):
        path = "./" + path
    return Uri(path=path)


def relativize(uri: Uri, base: Uri) -> Uri:
    """Return the shortest reference to `uri` relative to the absolute `base`."""
    if not base.is_absolute:
        raise ValueError(f"relativize: base must be absolute, got {str(base)!r}")

    if uri.has_query or uri.has_fragment:
        uri = uri.replace(query=None, fragment=None)

    # Already relative; leave it to the caller.
    if not uri.is_absolute:
        return uri

    if uri.scheme != base.scheme:
        return uri
    if not _same_authority(uri, base):
        return uri

    base_segments = base.normalize_path().path_segments
    if base_segments:
        base_segments = base_segments[:-1]
    uri = uri.normalize_path()
    directory = uri.path.endswith("/")
    target = uri.path_segments
    if target and target[-1] == "":
        target = target[:-1]

    common = 0
    while common < len(base_segments) and common < len(target):
        if base_segments[common] != target[common]:
            break
        common += 1

    rest = "/".join(target[common:])
    if rest and directory:
        rest += "/"

    if common == len(base_segments):
        if common == len(target):
            return Uri(path="./")
        return _relative_path(rest)
    if common > 0:
        return Uri(path="../" * (len(base_segments) - common) + rest)
    return uri


__all__ = ["relativize"]
