# --- START: gui/event_handlers.py ---
# gui/event_handlers.py
"""
Module containing the event handling slots for user interactions in the MainWindow
(menu actions, tab changes, edits). These functions are connected to widget signals
in signal_connections.
"""

import logging
import os
from typing import List, Optional, TYPE_CHECKING

from PySide6.QtWidgets import QFileDialog, QMessageBox

from core.exceptions import ConfigurationError, FileProcessingError

if TYPE_CHECKING:
	from .diff_editor import InlineDiffEditor
	from .main_window import MainWindow

logger: logging.Logger = logging.getLogger(__name__)

FILE_ENCODING: str = 'utf-8'


# --- File Helpers ---

def read_text_file(filePath: str) -> str:
	"""
	Reads a UTF-8 text file.

	Raises:
		FileProcessingError: If the file cannot be read or decoded.
	"""
	try:
		with open(filePath, 'r', encoding=FILE_ENCODING) as f:
			return f.read()
	except (OSError, UnicodeDecodeError) as e:
		errMsg = f"Could not read '{filePath}': {e}"
		logger.error(errMsg)
		raise FileProcessingError(errMsg) from e


def write_text_file(filePath: str, content: str) -> None:
	"""
	Writes `content` to a UTF-8 text file, creating parent directories as needed.

	Raises:
		FileProcessingError: If the file cannot be written.
	"""
	try:
		directory = os.path.dirname(os.path.abspath(filePath))
		os.makedirs(directory, exist_ok=True)
		with open(filePath, 'w', encoding=FILE_ENCODING, newline='') as f:
			f.write(content)
	except OSError as e:
		errMsg = f"Could not write '{filePath}': {e}"
		logger.error(errMsg)
		raise FileProcessingError(errMsg) from e


def open_file_path(window: 'MainWindow', filePath: str) -> Optional['InlineDiffEditor']:
	"""
	Opens `filePath` in a new tab, or focuses the tab already showing it.

	Returns:
		Optional[InlineDiffEditor]: The editor showing the file, or None if reading failed.
	"""
	absolutePath: str = os.path.abspath(filePath)
	existing = window._findEditorForPath(absolutePath)
	if existing is not None:
		window._editorTabWidget.setCurrentWidget(existing)
		return existing
	try:
		content = read_text_file(absolutePath)
	except FileProcessingError as e:
		window._showError("Open Failed", str(e))
		return None
	editor = window._addEditor(absolutePath, content)
	logger.info(f"Opened '{absolutePath}'.")
	_remember_directory(window, os.path.dirname(absolutePath))
	return editor


def _remember_directory(window: 'MainWindow', directory: str) -> None:
	try:
		window._configManager.setConfigValue('General', 'LastOpenDirectory', directory)
		window._configManager.saveConfig()
	except ConfigurationError as e:
		logger.warning(f"Could not remember last open directory: {e}")


# --- Menu Action Handlers ---

def handle_open_file(window: 'MainWindow') -> None:
	"""
	Handles File > Open. Lets the user pick one or more files and opens each in a tab.

	Args:
		window (MainWindow): The main application window instance.
	"""
	startDir: str = os.path.expanduser("~")
	try:
		lastDir = window._configManager.getConfigValue('General', 'LastOpenDirectory', fallback=None)
		if lastDir and os.path.isdir(lastDir):
			startDir = lastDir
	except ConfigurationError as e:
		logger.warning(f"Could not read 'LastOpenDirectory' from configuration: {e}")

	filePaths: List[str]
	filePaths, _ = QFileDialog.getOpenFileNames(window, "Open File", startDir)
	for filePath in filePaths:
		open_file_path(window, filePath)


def handle_save_file(window: 'MainWindow') -> None:
	"""
	Handles File > Save. Writes the current editor to its file (asking for a path for
	unsaved buffers) and refreshes the inline diff, since saving changes what Git sees.
	"""
	editor = window._currentEditor()
	if editor is None:
		return
	filePath = editor.filePath
	if not filePath:
		filePath, _ = QFileDialog.getSaveFileName(window, "Save File", os.path.expanduser("~"))
		if not filePath:
			return
		filePath = os.path.abspath(filePath)
		otherEditor = window._findEditorForPath(filePath)
		if otherEditor is not None and otherEditor is not editor:
			window._showWarning("Save Failed", f"'{os.path.basename(filePath)}' is already open in another tab. Close that tab or choose a different name.")
			return
	try:
		write_text_file(filePath, editor.toPlainText())
	except FileProcessingError as e:
		window._showError("Save Failed", str(e))
		return
	editor.setFilePath(filePath)
	editor.document().setModified(False)
	window._updateTabTitle(editor)
	window._updateStatusBar(f"Saved '{os.path.basename(filePath)}'.", 3000)
	logger.info(f"Saved '{filePath}'.")
	if window._inlineDiffEnabled:
		window._requestDiffRefresh(editor)


def handle_close_tab(window: 'MainWindow', index: int) -> None:
	"""
	Closes the tab at `index`, asking before discarding unsaved edits. The editor's
	decorations, debounce timer and outstanding request are dropped with it.
	"""
	if index < 0:
		return
	editor = window._editorTabWidget.widget(index)
	if editor is None:
		return
	if editor.document().isModified():
		name = os.path.basename(editor.filePath) if editor.filePath else "Untitled"
		reply = QMessageBox.question(
			window, "Unsaved Changes",
			f"'{name}' has unsaved changes. Save them before closing?",
			QMessageBox.StandardButton.Save | QMessageBox.StandardButton.Discard | QMessageBox.StandardButton.Cancel,
			QMessageBox.StandardButton.Cancel
		)
		if reply == QMessageBox.StandardButton.Cancel:
			return
		if reply == QMessageBox.StandardButton.Save:
			window._editorTabWidget.setCurrentIndex(index)
			handle_save_file(window)
			if editor.document().isModified():
				return
	window._forgetEditor(editor)
	window._editorTabWidget.removeTab(index)
	editor.deleteLater()
	window._updateWidgetStates()
	window._updateDiffSummary()


def handle_toggle_inline_diff(window: 'MainWindow', checked: bool) -> None:
	"""Handles the toggle action and the status-bar button."""
	window._setInlineDiffEnabled(checked)


def handle_refresh(window: 'MainWindow') -> None:
	if not window._inlineDiffEnabled:
		window._updateStatusBar("Inline diff is off.", 3000)
		return
	editor = window._currentEditor()
	if editor is not None:
		window._requestDiffRefresh(editor)


# --- Editor Handlers ---

def handle_editor_text_changed(window: 'MainWindow', editor: 'InlineDiffEditor') -> None:
	"""Restarts the editor's debounce timer on every document change."""
	if window._inlineDiffEnabled:
		window._scheduleDiffRefresh(editor)


def handle_current_tab_changed(window: 'MainWindow', index: int) -> None:
	"""Refreshes the newly active editor immediately, skipping its debounce delay."""
	window._updateWidgetStates()
	editor = window._currentEditor()
	if editor is not None and window._inlineDiffEnabled:
		window._requestDiffRefresh(editor)
	window._updateDiffSummary()

# --- END: gui/event_handlers.py ---
