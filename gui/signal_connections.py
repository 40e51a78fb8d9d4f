# --- START: gui/signal_connections.py ---
# gui/signal_connections.py
"""
Module responsible for connecting signals to slots in the MainWindow.
"""

import logging
from typing import TYPE_CHECKING

from . import callback_handlers
from . import event_handlers

if TYPE_CHECKING:
	from .main_window import MainWindow

logger = logging.getLogger(__name__)


def connect_signals(window: 'MainWindow') -> None:
	"""
	Connects window-level signals to their handlers. Per-editor signals
	(text changes, debounce timers) are connected in connect_editor_signals.

	Args:
		window: The MainWindow instance whose signals/slots need connecting.
	"""
	logger.debug("Connecting signals to slots.")

	window.signalLogMessage.connect(window._appendLogMessage)

	# --- Actions ---
	window._openAction.triggered.connect(lambda: event_handlers.handle_open_file(window))
	window._saveAction.triggered.connect(lambda: event_handlers.handle_save_file(window))
	window._closeTabAction.triggered.connect(lambda: event_handlers.handle_close_tab(window, window._editorTabWidget.currentIndex()))
	window._exitAction.triggered.connect(window.close)
	window._toggleDiffAction.triggered.connect(lambda checked: event_handlers.handle_toggle_inline_diff(window, checked))
	window._toggleDiffButton.clicked.connect(lambda checked: event_handlers.handle_toggle_inline_diff(window, checked))
	window._refreshDiffAction.triggered.connect(lambda: event_handlers.handle_refresh(window))

	# --- Tabs ---
	window._editorTabWidget.currentChanged.connect(lambda index: event_handlers.handle_current_tab_changed(window, index))
	window._editorTabWidget.tabCloseRequested.connect(lambda index: event_handlers.handle_close_tab(window, index))

	# --- Worker ---
	window._diffWorker.errorOccurred.connect(lambda msg: callback_handlers.handle_worker_error(window, msg, "DiffWorker"))
	window._diffWorker.diffFetched.connect(lambda requestId, filePath, diffText: callback_handlers.on_diff_fetched(window, requestId, filePath, diffText))

	logger.debug("Signal connections established.")


def connect_editor_signals(window: 'MainWindow', editor, timer) -> None:
	"""Connects an editor's document changes to its debounce timer."""
	editor.textChanged.connect(lambda: event_handlers.handle_editor_text_changed(window, editor))
	editor.modificationChanged.connect(lambda modified: window._updateTabTitle(editor))
	timer.timeout.connect(lambda: window._requestDiffRefresh(editor))

# --- END: gui/signal_connections.py ---
