#!/usr/bin/env python3
"""
Package script for the compositing panels
- Bakes the git-derived version into a staged copy of version.py
- Creates a version-numbered zip of panels/src
"""
import re
import shutil
import os
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SOURCE_DIR = PROJECT_ROOT / "panels" / "src"

sys.path.insert(0, str(SOURCE_DIR))
from version import get_version  # noqa: E402

_BAKED_LINE = re.compile(r'^_BAKED_VERSION = .*$', re.MULTILINE)


def bake_version(version_file, version):
    """Replace the _BAKED_VERSION line of a version.py copy

    Raises:
        ValueError: If the file has no _BAKED_VERSION line
    """
    text = Path(version_file).read_text(encoding='utf-8')
    baked, count = _BAKED_LINE.subn(f'_BAKED_VERSION = "{version}"', text)
    if count != 1:
        raise ValueError(f"No _BAKED_VERSION line in {version_file}")
    Path(version_file).write_text(baked, encoding='utf-8')


def stage_sources(staging_dir):
    """Copy panels/src without caches"""
    target = Path(staging_dir) / "comp_panels"
    shutil.copytree(SOURCE_DIR, target, ignore=shutil.ignore_patterns('__pycache__', '*.pyc'))
    return target


def create_zip(source_dir, output_path):
    """Zip `source_dir` to `output_path`.zip and return the zip path"""
    print(f"Creating zip: {output_path}.zip")
    zip_file = shutil.make_archive(str(output_path), 'zip', source_dir)
    size_kb = os.path.getsize(zip_file) / 1024
    print(f"Created: {zip_file} ({size_kb:.1f} KB)")
    return zip_file


def main():
    print("=" * 60)
    print("Compositing Panels - Package Script")
    print("=" * 60)

    version = get_version()
    print(f"Version: {version}")

    dist_dir = PROJECT_ROOT / "build" / "dist"
    dist_dir.mkdir(parents=True, exist_ok=True)

    try:
        with tempfile.TemporaryDirectory() as staging:
            staged = stage_sources(staging)
            bake_version(staged / "version.py", version)
            zip_file = create_zip(staged, dist_dir / f"CompPanels_{version}")
    except Exception as e:
        print(f"ERROR: Failed to package: {e}")
        sys.exit(1)

    print()
    print(f"Distribution package: {zip_file}")


if __name__ == "__main__":
    main()
