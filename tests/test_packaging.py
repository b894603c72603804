"""
Tests for the packaging helpers and version fallback.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'build'))

import package  # noqa: E402
import version  # noqa: E402


class TestBakeVersion:

    def test_replaces_baked_line(self, tmp_path):
        target = tmp_path / "version.py"
        target.write_text("import sys\n_BAKED_VERSION = None\n", encoding="utf-8")
        package.bake_version(target, "1.0.7")
        assert '_BAKED_VERSION = "1.0.7"' in target.read_text(encoding="utf-8")

    def test_missing_line_raises(self, tmp_path):
        target = tmp_path / "version.py"
        target.write_text("VERSION = 1\n", encoding="utf-8")
        with pytest.raises(ValueError):
            package.bake_version(target, "1.0.7")

    def test_stage_sources_skips_caches(self, tmp_path):
        staged = package.stage_sources(tmp_path)
        assert (staged / "version.py").is_file()
        assert not list(staged.rglob("__pycache__"))


class TestVersion:

    def test_baked_version_wins(self, monkeypatch):
        monkeypatch.setattr(version, "_BAKED_VERSION", "9.9.9")
        assert version.get_version() == "9.9.9"

    def test_source_version_shape(self):
        parts = version.get_version().split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)
