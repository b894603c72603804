"""
Undo/Redo History Manager

Keeps a bounded list of deep-copied project snapshots. The desktop host saves
one entry per closed undo group, so a multi-step operation such as a crop is
undone in a single step.
"""

import copy
import logging

logger = logging.getLogger(__name__)


class HistoryManager:
	"""Manages undo/redo history with state snapshots"""

	def __init__(self, max_history=50):
		"""
		Initialize the history manager

		Args:
			max_history: Maximum number of states to keep in history
		"""
		self.max_history = max_history
		self.history = []  # List of {'data', 'description'} entries
		self.current_index = -1  # -1 means no states
		self._listeners = []

	def save_state(self, state_data, description=""):
		"""
		Save a new state to history

		Args:
			state_data: Snapshot to save (deep copied)
			description: Description of the change that produced this state
		"""
		# Saving after an undo discards the redo branch
		if self.current_index < len(self.history) - 1:
			self.history = self.history[:self.current_index + 1]

		self.history.append({
			'data': copy.deepcopy(state_data),
			'description': description
		})
		self.current_index += 1

		if len(self.history) > self.max_history:
			self.history.pop(0)
			self.current_index -= 1

		self._notify_listeners()

		logger.debug(f"State saved: {description} (index: {self.current_index}, total: {len(self.history)})")

	def undo(self):
		"""
		Move back one state in history

		Returns:
			Copy of the previous state, or None if at beginning
		"""
		if not self.can_undo():
			logger.debug("Cannot undo - at beginning of history")
			return None

		self.current_index -= 1
		entry = self.history[self.current_index]
		self._notify_listeners()

		logger.debug(f"Undo to: {entry['description']} (index: {self.current_index})")
		return copy.deepcopy(entry['data'])

	def redo(self):
		"""
		Move forward one state in history

		Returns:
			Copy of the next state, or None if at end
		"""
		if not self.can_redo():
			logger.debug("Cannot redo - at end of history")
			return None

		self.current_index += 1
		entry = self.history[self.current_index]
		self._notify_listeners()

		logger.debug(f"Redo to: {entry['description']} (index: {self.current_index})")
		return copy.deepcopy(entry['data'])

	def can_undo(self):
		return self.current_index > 0

	def can_redo(self):
		return self.current_index < len(self.history) - 1

	def clear(self):
		"""Clear all history"""
		self.history = []
		self.current_index = -1
		self._notify_listeners()
		logger.debug("History cleared")

	def add_listener(self, callback):
		"""
		Add a listener to be notified when history state changes

		Args:
			callback: Called with (can_undo, can_redo)
		"""
		self._listeners.append(callback)

	def remove_listener(self, callback):
		if callback in self._listeners:
			self._listeners.remove(callback)

	def _notify_listeners(self):
		for callback in self._listeners:
			try:
				callback(self.can_undo(), self.can_redo())
			except Exception as e:
				logger.warning(f"Error notifying listener: {e}")

	def get_current_description(self):
		if 0 <= self.current_index < len(self.history):
			return self.history[self.current_index]['description']
		return ""

	def get_undo_description(self):
		"""Description of the step undo would revert"""
		if self.can_undo():
			return self.history[self.current_index]['description']
		return ""

	def get_redo_description(self):
		"""Description of the step redo would reapply"""
		if self.can_redo():
			return self.history[self.current_index + 1]['description']
		return ""
