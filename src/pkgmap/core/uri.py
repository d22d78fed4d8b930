"""URI value type used for package locations.

`urllib.parse` splits URIs but cannot tell `file:/x` from `file:///x` and has
no RFC 3986 reference resolution for arbitrary schemes, so locations are
carried as a small frozen dataclass instead:

- `Uri.parse()` splits text using the RFC 3986 Appendix B expression;
  the scheme is lower-cased, the authority is split into userinfo/host/port.
- `Uri.resolve()` implements RFC 3986 section 5.2.2 (strict).
- `str(uri)` recomposes per RFC 3986 section 5.3.

Components are kept in their encoded (as-written) form; no percent-decoding
is performed.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Any

_URI_RE = re.compile(r"^(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?$", re.DOTALL)
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_PORT_RE = re.compile(r"^[0-9]+$")
# C0 controls (CR and LF included) and DEL; a location must fit on one line.
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def remove_dot_segments(path: str) -> str:
    """Remove `.` and `..` segments from `path` (RFC 3986 section 5.2.4)."""
    output: list[str] = []
    rest = path
    while rest:
        if rest.startswith("../"):
            rest = rest[3:]
        elif rest.startswith("./"):
            rest = rest[2:]
        elif rest.startswith("/./"):
            rest = rest[2:]
        elif rest == "/.":
            rest = "/"
        elif rest.startswith("/../"):
            rest = rest[3:]
            if output:
                output.pop()
        elif rest == "/..":
            rest = "/"
            if output:
                output.pop()
        elif rest in (".", ".."):
            rest = ""
        else:
            # Move the first segment (with its leading "/", if any) to the output.
            end = rest.find("/", 1 if rest.startswith("/") else 0)
            if end < 0:
                end = len(rest)
            output.append(rest[:end])
            rest = rest[end:]
    return "".join(output)


def _split_authority(authority: str, *, text: str) -> tuple[str | None, str, int | None]:
    userinfo: str | None = None
    hostport = authority
    at = authority.rfind("@")
    if at >= 0:
        userinfo, hostport = authority[:at], authority[at + 1 :]

    port_text: str | None
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0:
            raise ValueError(f"invalid URI {text!r}: unterminated IP literal")
        host, rest = hostport[: end + 1], hostport[end + 1 :]
        if rest and not rest.startswith(":"):
            raise ValueError(f"invalid URI {text!r}: unexpected characters after IP literal")
        port_text = rest[1:] if rest else None
    else:
        colon = hostport.rfind(":")
        if colon >= 0:
            host, port_text = hostport[:colon], hostport[colon + 1 :]
        else:
            host, port_text = hostport, None

    port: int | None = None
    if port_text:
        if not _PORT_RE.match(port_text):
            raise ValueError(f"invalid URI {text!r}: invalid port {port_text!r}")
        port = int(port_text)
    return userinfo, host, port


@dataclass(frozen=True)
class Uri:
    """An RFC 3986 URI reference.

    `host is None` means the reference has no authority component; an empty
    host (as in `file:///x`) is an authority with an empty registered name.
    `query`/`fragment` are `None` when absent and `""` when present but empty.
    """

    scheme: str = ""
    userinfo: str | None = None
    host: str | None = None
    port: int | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None

    def __post_init__(self) -> None:
        if self.host is None and (self.userinfo is not None or self.port is not None):
            raise ValueError("Uri: userinfo/port require a host")
        if self.host is not None and self.path and not self.path.startswith("/"):
            raise ValueError(f"Uri: path must be empty or start with '/' when an authority is present: {self.path!r}")
        if self.scheme and not _SCHEME_RE.match(self.scheme):
            raise ValueError(f"Uri: invalid scheme {self.scheme!r}")
        for part in (self.userinfo, self.host, self.path, self.query, self.fragment):
            if part is not None and _CONTROL_RE.search(part):
                raise ValueError(f"Uri: control character in component {part!r}")

    # ----------------------------
    # Construction
    # ----------------------------

    @classmethod
    def parse(cls, text: str) -> "Uri":
        """Parse a URI reference (absolute or relative) from text."""
        if not isinstance(text, str):
            raise TypeError(f"Uri.parse: expected str, got {type(text).__name__}")
        m = _URI_RE.match(text)
        if m is None:  # pragma: no cover (the expression matches any string)
            raise ValueError(f"invalid URI {text!r}")
        scheme, authority, path, query, fragment = m.groups()

        if scheme is not None:
            if not _SCHEME_RE.match(scheme):
                raise ValueError(f"invalid URI {text!r}: invalid scheme {scheme!r}")
            scheme = scheme.lower()

        userinfo: str | None = None
        host: str | None = None
        port: int | None = None
        if authority is not None:
            userinfo, host, port = _split_authority(authority, text=text)

        return cls(
            scheme=scheme or "",
            userinfo=userinfo,
            host=host,
            port=port,
            path=path,
            query=query,
            fragment=fragment,
        )

    def replace(self, **changes: Any) -> "Uri":
        return dataclasses.replace(self, **changes)

    # ----------------------------
    # Inspection
    # ----------------------------

    @property
    def has_authority(self) -> bool:
        return self.host is not None

    @property
    def has_query(self) -> bool:
        return self.query is not None

    @property
    def has_fragment(self) -> bool:
        return self.fragment is not None

    @property
    def is_absolute(self) -> bool:
        """True when the URI has a scheme and no fragment."""
        return bool(self.scheme) and self.fragment is None

    @property
    def authority(self) -> str | None:
        if self.host is None:
            return None
        out = self.host
        if self.userinfo is not None:
            out = f"{self.userinfo}@{out}"
        if self.port is not None:
            out = f"{out}:{self.port}"
        return out

    @property
    def path_segments(self) -> list[str]:
        """Path split on `/`, ignoring a single leading `/`.

        `"/a/b/"` gives `["a", "b", ""]`; `""` and `"/"` give `[]`.
        """
        p = self.path[1:] if self.path.startswith("/") else self.path
        if not p:
            return []
        return p.split("/")

    # ----------------------------
    # URI algebra
    # ----------------------------

    def normalize_path(self) -> "Uri":
        """Return a copy with dot segments removed from the path."""
        return self.replace(path=remove_dot_segments(self.path))

    def as_directory(self) -> "Uri":
        """Return a copy whose path ends with `/`."""
        if self.path.endswith("/"):
            return self
        return self.replace(path=self.path + "/")

    def resolve(self, ref: "Uri | str") -> "Uri":
        """Resolve `ref` against this URI (RFC 3986 section 5.2.2)."""
        if isinstance(ref, str):
            ref = Uri.parse(ref)

        if ref.scheme:
            return ref.replace(path=remove_dot_segments(ref.path))

        if ref.has_authority:
            return ref.replace(scheme=self.scheme, path=remove_dot_segments(ref.path))

        if not ref.path:
            query = ref.query if ref.query is not None else self.query
            return self.replace(query=query, fragment=ref.fragment)

        if ref.path.startswith("/"):
            path = remove_dot_segments(ref.path)
        else:
            path = remove_dot_segments(self._merge(ref.path))
        return self.replace(path=path, query=ref.query, fragment=ref.fragment)

    def _merge(self, ref_path: str) -> str:
        if self.has_authority and not self.path:
            return "/" + ref_path
        return self.path[: self.path.rfind("/") + 1] + ref_path

    def __str__(self) -> str:
        out: list[str] = []
        if self.scheme:
            out.append(f"{self.scheme}:")
        if self.host is not None:
            out.append(f"//{self.authority}")
        out.append(self.path)
        if self.query is not None:
            out.append(f"?{self.query}")
        if self.fragment is not None:
            out.append(f"#{self.fragment}")
        return "".join(out)


def coerce_uri(value: "Uri | str", *, where: str) -> Uri:
    """Accept a `Uri` or URI text; reject anything else with TypeError."""
    if isinstance(value, Uri):
        return value
    if isinstance(value, str):
        return Uri.parse(value)
    raise TypeError(f"{where}: expected Uri or str, got {type(value).__name__}")


__all__ = [
    "Uri",
    "coerce_uri",
    "remove_dot_segments",
]
