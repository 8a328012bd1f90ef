from __future__ import annotations

from pathlib import Path
import textwrap

import pytest


@pytest.fixture
def write_yaml(tmp_path: Path):
    """Return a helper that writes a dedented YAML document into tmp_path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write
