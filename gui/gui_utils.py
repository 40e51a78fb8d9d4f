# --- START: gui/gui_utils.py ---
# gui/gui_utils.py
"""
Utility functions and classes specific to the GUI components.
Includes the logging handler that feeds the log pane and the tooltip text for the
status-bar change summary.
"""

import logging
import sys
from typing import Callable, Optional

from PySide6.QtCore import QObject

from core.models import AnnotationBundle, AnnotationCategory


class QtLogHandler(logging.Handler, QObject):
	"""
	Logging handler that passes formatted records to a Qt signal emitter
	(e.g. `window.signalLogMessage.emit`), so records produced on worker threads
	reach the log pane through a queued connection.
	"""

	def __init__(self: 'QtLogHandler', signal_emitter: Optional[Callable[[str], None]] = None, parent: Optional[QObject] = None) -> None:
		logging.Handler.__init__(self)
		QObject.__init__(self, parent)
		self._signal_emitter: Optional[Callable[[str], None]] = signal_emitter

	def emit(self: 'QtLogHandler', record: logging.LogRecord) -> None:
		if not self._signal_emitter:
			print(f"QtLogHandler Error: No signal emitter configured. Log Record: {record}", file=sys.stderr)
			return
		try:
			self._signal_emitter(self.format(record))
		except Exception:
			self.handleError(record)


def formatSummaryTooltip(bundle: AnnotationBundle) -> str:
	"""Longer description of a bundle for the status-bar summary tooltip."""
	added = len(bundle.get(AnnotationCategory.WHOLE_LINE_ADDED))
	modified = len(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED))
	deleted = len(bundle.deletedLineGhosts)
	return f"{added} line(s) added, {modified} modified, {deleted} deleted since HEAD"

# --- END: gui/gui_utils.py ---
