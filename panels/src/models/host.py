"""
Compositing Panels - Host Interface

The panels never touch a compositing application directly. Everything they
read or write goes through the abstract classes below:

- Host: active item, undo grouping, settings, script execution
- CompositionItem: size, current time, layers, selection
- LayerItem: position / anchor point properties and source rect sampling
- AnimatableProperty: static value or time-keyed samples

models.composition provides the in-memory implementation used by the
desktop host and the tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from models.transform import Rect


Value = Tuple[float, ...]


@dataclass(frozen=True)
class Keyframe:
    """A single (time, value) sample of an animated property"""
    time: float
    value: Value


class AnimatableProperty(ABC):
    """A layer property that is either static or keyed over time"""

    @property
    @abstractmethod
    def num_keys(self) -> int:
        """Number of keyframes (0 for a static property)"""

    @abstractmethod
    def key_time(self, index: int) -> float:
        """Time of keyframe `index` (0-based)"""

    @abstractmethod
    def key_value(self, index: int) -> Value:
        """Value of keyframe `index` (0-based)"""

    @abstractmethod
    def value_at_time(self, time: float) -> Value:
        """Evaluated value at `time`"""

    @abstractmethod
    def set_value(self, value: Sequence[float]):
        """Set the static value of an unanimated property"""

    @abstractmethod
    def set_value_at_time(self, time: float, value: Sequence[float]):
        """Set (or add) the keyframe at `time`"""

    @property
    def is_animated(self) -> bool:
        return self.num_keys > 0

    def keyframes(self) -> List[Keyframe]:
        """All keyframes in time order"""
        return [Keyframe(self.key_time(i), self.key_value(i)) for i in range(self.num_keys)]


class LayerItem(ABC):
    """A layer inside a composition"""

    name: str

    @property
    @abstractmethod
    def position(self) -> AnimatableProperty:
        ...

    @property
    @abstractmethod
    def anchor_point(self) -> AnimatableProperty:
        ...

    @abstractmethod
    def source_rect_at_time(self, time: float, include_extents: bool = False) -> Rect:
        """Layer-local extent of the layer content at `time`"""


class CompositionItem(ABC):
    """A composition: sized canvas owning an ordered list of layers"""

    name: str

    @property
    @abstractmethod
    def width(self) -> int:
        ...

    @width.setter
    @abstractmethod
    def width(self, value: int):
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        ...

    @height.setter
    @abstractmethod
    def height(self, value: int):
        ...

    @property
    @abstractmethod
    def time(self) -> float:
        """Current time indicator, in seconds"""

    @property
    @abstractmethod
    def layers(self) -> List[LayerItem]:
        """All layers, top to bottom"""

    @property
    @abstractmethod
    def selected_layers(self) -> List[LayerItem]:
        """Currently selected layers, in layer order"""

    @property
    def num_layers(self) -> int:
        return len(self.layers)


class SettingsBackend(ABC):
    """Namespaced string key/value storage"""

    @abstractmethod
    def have_setting(self, section: str, key: str) -> bool:
        ...

    @abstractmethod
    def get_setting(self, section: str, key: str) -> str:
        ...

    @abstractmethod
    def save_setting(self, section: str, key: str, value: str):
        ...


class Host(ABC):
    """The application the panels run inside"""

    @property
    @abstractmethod
    def active_item(self) -> Optional[object]:
        """Active project item; panels only act on CompositionItem instances"""

    @property
    @abstractmethod
    def settings(self) -> SettingsBackend:
        ...

    @abstractmethod
    def begin_undo_group(self, name: str):
        ...

    @abstractmethod
    def end_undo_group(self):
        ...

    @abstractmethod
    def eval_file(self, path):
        """Run a script file inside the host"""

    def active_composition(self) -> Optional[CompositionItem]:
        """Active item if it is a composition, else None"""
        item = self.active_item
        if isinstance(item, CompositionItem):
            return item
        return None
