"""Quickcheck workspace: parse -> write(relative) -> reparse -> compare.

This workspace is self-contained (no repo-level assets required). It uses a
small synthetic `.packages` fixture, writes it relative to a file under
`workspaces/00_quickcheck_roundtrip/outputs/`, parses the written file again
against the same location and writes a JSON report.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from pkgmap.codecs.packages_file import format_packages, parse_packages
from pkgmap.core.tables import packages_to_frame
from pkgmap.core.uri import Uri


def _fixture_packages_bytes() -> bytes:
    # CRLF and a comment containing ':' on purpose.
    return b"\r\n".join(
        [
            b"# fixture: mixed locations",
            b"core:lib/core",
            b"shared:../shared/lib/",
            b"web:http://example.com/packages/web",
            b"here:./",
            b"",
        ]
    )


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def main() -> None:
    here = Path(__file__).resolve().parent
    outputs = here / "outputs"
    outputs.mkdir(parents=True, exist_ok=True)

    out_path = outputs / ".packages"
    base = Uri.parse(out_path.as_uri())

    mapping1 = parse_packages(_fixture_packages_bytes(), base)
    text = format_packages(mapping1, base_uri=base, comment="quickcheck roundtrip")
    out_path.write_text(text, encoding="utf-8")

    mapping2 = parse_packages(out_path.read_bytes(), base)

    ok_frames = True
    try:
        pd.testing.assert_frame_equal(packages_to_frame(mapping2), packages_to_frame(mapping1))
    except AssertionError:
        ok_frames = False

    report = {
        "packages_path": str(out_path),
        "packages": {name: str(uri) for name, uri in mapping2.items()},
        "written_lines": [line for line in text.split("\n") if line and not line.startswith("#")],
        "mapping_equal": mapping1 == mapping2,
        "frames_equal": ok_frames,
    }
    _write_json(outputs / "roundtrip_report.json", report)

    if not (report["mapping_equal"] and ok_frames):
        raise SystemExit("roundtrip failed; see outputs/roundtrip_report.json")


if __name__ == "__main__":
    main()
