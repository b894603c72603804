"""
Compositing Panels - Script Catalog Service

Finds launchable script files under a folder and turns them into list
entries for the launcher panel. No Qt here; the panel only displays what
this module returns.

Rules:
- Entries are visited sorted by lower-cased name, files and folders mixed
- Folders whose name is wrapped in parentheses, e.g. "(Old)", are skipped
- Symlinked folders are not followed
- Files must end in one of SCRIPT_EXTENSIONS (case-sensitive)
- A sibling .png with the same stem is used as the entry's icon
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from constants import EXCLUDED_FOLDER_PATTERN, SCRIPT_EXTENSIONS, SCRIPT_ICON_EXTENSION

logger = logging.getLogger(__name__)

_EXCLUDED_FOLDER_RE = re.compile(EXCLUDED_FOLDER_PATTERN)


@dataclass
class ScriptEntry:
    """One row of the launcher list

    `index` points into the full script list so a row found through the
    search filter still resolves to the right file.
    """
    index: int
    path: Path
    display_name: str
    icon: Optional[Path] = None


def is_excluded_folder(name: str) -> bool:
    return bool(_EXCLUDED_FOLDER_RE.match(name))


def is_script_file(name: str) -> bool:
    return name.endswith(SCRIPT_EXTENSIONS)


def strip_script_extension(name: str) -> str:
    for ext in SCRIPT_EXTENSIONS:
        if name.endswith(ext):
            return name[:-len(ext)]
    return name


def _same_file(a: Path, b: Optional[Path]) -> bool:
    if b is None:
        return False
    try:
        return a.resolve() == Path(b).resolve()
    except OSError:
        return False


def find_script_files(folder, exclude=None) -> List[Path]:
    """Recursively list script files under `folder`

    Args:
        folder: Root folder to scan
        exclude: A file to leave out (the launcher itself)

    Returns:
        Script paths in depth-first, case-insensitive name order. A missing
        or unreadable folder gives an empty list.
    """
    folder = Path(folder)
    try:
        entries = sorted(folder.iterdir(), key=lambda p: p.name.lower())
    except OSError as e:
        logger.warning(f"Cannot list {folder}: {e}")
        return []

    results = []
    for entry in entries:
        if entry.is_dir() and entry.is_symlink():
            logger.debug(f"Not following linked folder {entry}")
        elif entry.is_dir():
            if not is_excluded_folder(entry.name):
                results.extend(find_script_files(entry, exclude))
        elif is_script_file(entry.name) and not _same_file(entry, exclude):
            results.append(entry)
    return results


def script_display_name(path: Path, root=None, show_paths: bool = False) -> str:
    """List label for a script

    By default the file name without its script extension. With show_paths
    the path relative to `root`, extension included.
    """
    if show_paths and root is not None:
        try:
            return str(Path(path).relative_to(root))
        except ValueError:
            return str(path)
    return strip_script_extension(Path(path).name)


def icon_for_script(path: Path) -> Optional[Path]:
    """Sibling image named like the script, if there is one"""
    path = Path(path)
    icon = path.with_name(strip_script_extension(path.name) + SCRIPT_ICON_EXTENSION)
    return icon if icon.is_file() else None


def build_entries(files: Sequence[Path], root=None, show_paths: bool = False) -> List[ScriptEntry]:
    return [
        ScriptEntry(i, path, script_display_name(path, root, show_paths), icon_for_script(path))
        for i, path in enumerate(files)
    ]


def filter_entries(entries: Sequence[ScriptEntry], search_text: str) -> List[ScriptEntry]:
    """Entries whose extension-less name contains `search_text`, ignoring case"""
    if not search_text:
        return list(entries)
    needle = search_text.lower()
    return [
        entry for entry in entries
        if needle in strip_script_extension(entry.path.name).lower()
    ]


class ScriptCatalog:
    """Script list for one root folder

    Usage:
        catalog = ScriptCatalog(exclude=launcher_path)
        catalog.set_root("~/Scripts")
        for entry in catalog.filtered("crop"):
            ...
    """

    def __init__(self, root=None, exclude=None):
        self.root: Optional[Path] = Path(root) if root else None
        self.exclude = exclude
        self.files: List[Path] = []
        self.entries: List[ScriptEntry] = []
        if self.root is not None:
            self.refresh()

    def set_root(self, root):
        self.root = Path(root).expanduser() if root else None
        self.refresh()

    def refresh(self, show_paths: bool = False) -> List[ScriptEntry]:
        """Rescan the root folder"""
        if self.root is None:
            self.files = []
        else:
            self.files = find_script_files(self.root, self.exclude)
        self.entries = build_entries(self.files, self.root, show_paths)
        logger.debug(f"Found {len(self.files)} scripts under {self.root}")
        return self.entries

    def filtered(self, search_text: str) -> List[ScriptEntry]:
        return filter_entries(self.entries, search_text)

    def path_for(self, index: int) -> Path:
        return self.files[index]

    def __len__(self):
        return len(self.files)
