from __future__ import annotations

from importlib import metadata
from pathlib import Path

import pytest

from forfettario.backend import version


def test_pyproject_version_matches_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    def _missing(_: str) -> str:
        raise metadata.PackageNotFoundError

    version.get_project_version.cache_clear()
    monkeypatch.setattr(version.metadata, "version", _missing)
    try:
        assert version.get_project_version() == version.read_pyproject_version(
            version.PYPROJECT_PATH
        )
    finally:
        version.get_project_version.cache_clear()


def test_read_pyproject_version(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "demo"\nversion = "1.2.3"\n', encoding="utf-8")

    assert version.read_pyproject_version(pyproject) == "1.2.3"


def test_read_pyproject_version_requires_version(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "demo"\n', encoding="utf-8")

    with pytest.raises(RuntimeError, match="project version"):
        version.read_pyproject_version(pyproject)
