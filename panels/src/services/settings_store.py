"""
Compositing Panels - Settings Store

Namespaced string settings (section -> key -> value), persisted as JSON the
same way the editor config is: one file in the user's config directory,
rewritten on every save.
"""

import os
import json
import logging
from pathlib import Path

from models.host import SettingsBackend
from utils.logger import loggerRaise
from utils.path_resolver import get_settings_path

logger = logging.getLogger(__name__)


class SettingsStore(SettingsBackend):
	"""JSON-backed settings with the host's have/get/save API"""

	def __init__(self, path=None):
		"""
		Args:
			path: Settings file; defaults to ~/.comppanels/settings.json
		"""
		self.path = Path(path) if path else get_settings_path()
		self._data = {}
		self._load()

	def _load(self):
		"""Read the settings file. Missing means empty; corrupt is logged and ignored."""
		if not self.path.exists():
			return
		try:
			with open(self.path, 'r', encoding='utf-8') as f:
				data = json.load(f)
		except (OSError, ValueError) as e:
			logger.warning(f"Ignoring unreadable settings file {self.path}: {e}")
			return
		if not isinstance(data, dict):
			logger.warning(f"Ignoring settings file {self.path}: expected an object")
			return
		self._data = {
			section: {str(k): str(v) for k, v in values.items()}
			for section, values in data.items() if isinstance(values, dict)
		}

	def _save(self):
		try:
			os.makedirs(self.path.parent, exist_ok=True)
			with open(self.path, 'w', encoding='utf-8') as f:
				json.dump(self._data, f, indent=2)
		except Exception as e:
			loggerRaise(e, "Error saving settings")

	def have_setting(self, section, key):
		return key in self._data.get(section, {})

	def get_setting(self, section, key):
		"""
		Raises:
			KeyError: If the setting does not exist
		"""
		try:
			return self._data[section][key]
		except KeyError:
			raise KeyError(f"No setting {section}/{key}") from None

	def save_setting(self, section, key, value):
		self._data.setdefault(section, {})[key] = str(value)
		self._save()
		logger.debug(f"Saved setting {section}/{key}")

	def get(self, section, key, default=None):
		"""get_setting with a fallback instead of KeyError"""
		return self._data.get(section, {}).get(key, default)
