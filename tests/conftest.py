"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import pkgmap` to fail.

To keep the test suite robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared Test Helpers
# =============================================================================


def as_text(mapping: dict[str, Any]) -> dict[str, str]:
    """Mapping with locations rendered as strings (for readable asserts)."""
    return {name: str(uri) for name, uri in mapping.items()}


def entry_lines(text: str) -> list[str]:
    """Non-comment lines of serialized packages text."""
    return [line for line in text.split("\n") if line and not line.startswith("#")]
