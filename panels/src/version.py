"""Panel suite version.

Running from source, the version is the VERSION file's major.minor plus the
number of commits since the last git tag. Packaged builds replace
_BAKED_VERSION before zipping and never touch git.
"""

import sys

# Replaced by the packaging script; None while running from source.
_BAKED_VERSION = None


def get_version() -> str:
    """Return the version string, e.g. '1.0.12'."""
    if _BAKED_VERSION is not None:
        return _BAKED_VERSION
    return _source_version()


def _git_output(args, cwd):
    """Run a git command and return stripped stdout, or None on failure."""
    import subprocess

    try:
        result = subprocess.run(
            ['git'] + args,
            capture_output=True, text=True, check=False, cwd=cwd,
        )
    except FileNotFoundError:
        return None  # git not installed
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def _source_version() -> str:
    """Combine the VERSION file with git history."""
    from pathlib import Path

    # panels/src/version.py -> project root
    root = Path(__file__).resolve().parent.parent.parent
    try:
        major_minor = (root / "VERSION").read_text().strip()
    except FileNotFoundError:
        major_minor = "0.0"

    described = _git_output(['describe', '--tags', '--long'], str(root))
    if described:
        # v1.0-5-gabcdef -> commit count is the middle part
        parts = described.rsplit('-', 2)
        if len(parts) == 3:
            return f"{major_minor}.{parts[1]}"

    total = _git_output(['rev-list', '--count', 'HEAD'], str(root))
    if total:
        return f"{major_minor}.{total}"

    return f"{major_minor}.0"


if __name__ == "__main__":
    sys.stdout.write(get_version() + "\n")
