"""
Shared fixtures for the compositing panels tests.

Provides sample compositions, a desktop host backed by a temporary settings
file, and an on-disk script folder tree.
"""
import sys
import os
import pytest

# Headless Qt for widget tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure panels/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'panels', 'src'))


# ── Helpers ────────────────────────────────────────────────────────────

def make_layer(name, position=(0.0, 0.0), rect=(0.0, 0.0, 100.0, 100.0),
               anchor=(0.0, 0.0), selected=False, keyframes=None):
    """Layer with a static or keyed position and a fixed source rect"""
    from models.composition import Layer, Property
    from models.transform import Rect

    pos = Property(position, keyframes) if keyframes else Property(position)
    return Layer(name, position=pos, anchor_point=anchor,
                 source_rect=Rect(*rect), selected=selected)


def make_comp(*layers, name="Comp 1", width=1920, height=1080, time=0.0):
    from models.composition import Composition

    comp = Composition(name, width, height, time=time)
    for layer in layers:
        comp.add_layer(layer)
    return comp


# ── Fixtures ───────────────────────────────────────────────────────────

@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "config" / "settings.json"


@pytest.fixture
def settings_store(settings_path):
    """Settings store writing to a temp file"""
    from services.settings_store import SettingsStore
    return SettingsStore(settings_path)


@pytest.fixture
def single_layer_comp():
    """One selected 100x50 layer at (100, 100) in a 1920x1080 comp"""
    return make_comp(
        make_layer("Logo", position=(100.0, 100.0), rect=(0.0, 0.0, 100.0, 50.0), selected=True)
    )


@pytest.fixture
def host_factory(settings_store):
    """Build a DesktopHost around the given compositions"""
    from models.composition import Project
    from services.desktop_host import DesktopHost

    def _make(*comps, active_index=0):
        project = Project(list(comps))
        project.active_index = active_index if comps else None
        return DesktopHost(project, settings_store)

    return _make


@pytest.fixture
def host(host_factory, single_layer_comp):
    return host_factory(single_layer_comp)


@pytest.fixture
def script_tree(tmp_path):
    """Script folder:

    scripts/
        (Disabled)/hidden.jsx     skipped folder
        A_tool.js
        A_tool.png                icon for A_tool.js
        b_script.jsx
        notes.txt                 not a script
        sub/c.jsxbin
        Upper.JSX                 extension case doesn't match
    """
    root = tmp_path / "scripts"
    (root / "(Disabled)").mkdir(parents=True)
    (root / "sub").mkdir()
    for rel in ["(Disabled)/hidden.jsx", "A_tool.js", "b_script.jsx",
                "notes.txt", "sub/c.jsxbin", "Upper.JSX"]:
        (root / rel).write_text("// script\n", encoding="utf-8")
    (root / "A_tool.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return root
