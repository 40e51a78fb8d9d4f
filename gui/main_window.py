# --- START: gui/main_window.py ---
# gui/main_window.py
"""
Main application window module.

Owns the editor tabs, the inline diff state (enabled flag, per-editor debounce
timers, latest request ids and last applied bundles), the DiffWorker thread and the
DecorationManager. Handlers in event_handlers / callback_handlers operate on this
state through the window instance.
"""

import os
import logging
from typing import Dict, List, Optional

from PySide6.QtCore import QEvent, QTimer, Signal, Slot
from PySide6.QtWidgets import QMainWindow, QMessageBox, QWidget

from core.config_manager import ConfigManager
from core.decoration_style import DecorationStyle
from core.diff_pipeline import InlineDiffPipeline
from core.exceptions import ConfigurationError
from core.git_service import DEFAULT_CONTEXT_LINES, GitService
from core.models import AnnotationBundle
from gui.gui_utils import QtLogHandler, formatSummaryTooltip

from . import event_handlers
from . import signal_connections
from . import ui_setup
from .decoration_manager import DecorationManager
from .diff_editor import InlineDiffEditor
from .threads import DiffWorker

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS: int = 500
DEFAULT_EDITOR_FONT_FAMILY: str = 'Courier New'
DEFAULT_EDITOR_FONT_SIZE: int = 10


class MainWindow(QMainWindow):
	"""
	Main application window: a tabbed text editor that can show changes against HEAD
	inline in each editor.
	"""

	# Signal emitted to send log messages to the GUI's log area
	signalLogMessage: Signal = Signal(str)

	def __init__(self: 'MainWindow', configManager: ConfigManager, parent: Optional[QWidget] = None) -> None:
		"""
		Initialise the main window.

		Args:
			configManager (ConfigManager): Instance for managing application configuration.
			parent (Optional[QWidget]): Optional parent widget. Defaults to None.

		Raises:
			ConfigurationError: If the [Diff] or [Decorations] settings are invalid.
		"""
		super().__init__(parent)
		logger.info("Initialising MainWindow...")
		self._configManager: ConfigManager = configManager

		# --- Inline Diff Settings ---
		self._inlineDiffEnabled: bool = bool(configManager.getConfigValueBool('Diff', 'EnabledOnStartup', fallback=False))
		self._debounceMs: int = configManager.getConfigValueInt('Diff', 'DebounceMs', fallback=DEFAULT_DEBOUNCE_MS)
		contextLines: int = configManager.getConfigValueInt('Diff', 'ContextLines', fallback=DEFAULT_CONTEXT_LINES)
		compareLiveBuffer: bool = bool(configManager.getConfigValueBool('Diff', 'CompareLiveBuffer', fallback=True))
		if self._debounceMs < 0 or contextLines < 0:
			raise ConfigurationError("[Diff] DebounceMs and ContextLines must not be negative.")

		# --- Core Collaborators ---
		self._pipeline: InlineDiffPipeline = InlineDiffPipeline(GitService(contextLines), compareLiveBuffer=compareLiveBuffer)
		self._decorationManager: DecorationManager = DecorationManager(DecorationStyle.fromConfig(configManager))

		# --- Per-Editor State ---
		self._debounceTimers: Dict[InlineDiffEditor, QTimer] = {}
		self._latestRequestIds: Dict[InlineDiffEditor, int] = {}
		self._bundles: Dict[InlineDiffEditor, AnnotationBundle] = {}
		self._nextRequestId: int = 0

		ui_setup.setup_ui(self)
		self._loadInitialSettings()

		self._diffWorker: DiffWorker = DiffWorker(self._pipeline, parent=self)

		signal_connections.connect_signals(self)
		self._setupGuiLogging()

		self._syncToggleControls()
		self._updateWidgetStates()
		logger.info("MainWindow initialisation complete.")

	# --- Settings ---
	def _loadInitialSettings(self: 'MainWindow') -> None:
		""" Applies window size and editor font settings from the [GUI] section. """
		try:
			width: int = self._configManager.getConfigValueInt('GUI', 'WindowWidth', fallback=1024)
			height: int = self._configManager.getConfigValueInt('GUI', 'WindowHeight', fallback=768)
			self._editorFontFamily: str = self._configManager.getConfigValue('GUI', 'EditorFontFamily', fallback=DEFAULT_EDITOR_FONT_FAMILY)
			self._editorFontSize: int = self._configManager.getConfigValueInt('GUI', 'EditorFontSize', fallback=DEFAULT_EDITOR_FONT_SIZE)
		except ConfigurationError as e:
			logger.warning(f"Invalid [GUI] settings, using defaults: {e}")
			width, height = 1024, 768
			self._editorFontFamily = DEFAULT_EDITOR_FONT_FAMILY
			self._editorFontSize = DEFAULT_EDITOR_FONT_SIZE
		self.resize(width, height)

	# --- GUI Logging Setup ---
	def _setupGuiLogging(self: 'MainWindow') -> None:
		""" Configures and adds the QtLogHandler to the root logger. """
		try:
			guiHandler: QtLogHandler = QtLogHandler(signal_emitter=self.signalLogMessage.emit, parent=self)
			guiLogLevelName: str = self._configManager.getConfigValue('Logging', 'GuiLogLevel', fallback='INFO')
			guiLogLevel: int = getattr(logging, str(guiLogLevelName).upper(), logging.INFO)
			logFormat: str = self._configManager.getConfigValue('Logging', 'GuiLogFormat', fallback='%(asctime)s - %(levelname)s - %(message)s')
			dateFormat: str = self._configManager.getConfigValue('Logging', 'GuiLogDateFormat', fallback='%H:%M:%S')
			guiHandler.setLevel(guiLogLevel)
			guiHandler.setFormatter(logging.Formatter(logFormat, datefmt=dateFormat))
			logging.getLogger().addHandler(guiHandler)
			self._guiLogHandler: Optional[QtLogHandler] = guiHandler
			logger.info(f"GUI logging handler added with level {logging.getLevelName(guiLogLevel)}.")
		except ConfigurationError as e:
			self._guiLogHandler = None
			logger.error(f"Configuration error setting up GUI logging: {e}")

	# --- Editors ---
	def editors(self: 'MainWindow') -> List[InlineDiffEditor]:
		return [self._editorTabWidget.widget(i) for i in range(self._editorTabWidget.count())]

	def _currentEditor(self: 'MainWindow') -> Optional[InlineDiffEditor]:
		widget = self._editorTabWidget.currentWidget()
		return widget if isinstance(widget, InlineDiffEditor) else None

	def _findEditorForPath(self: 'MainWindow', filePath: str) -> Optional[InlineDiffEditor]:
		target = os.path.normcase(os.path.abspath(filePath))
		for editor in self.editors():
			if editor.filePath and os.path.normcase(editor.filePath) == target:
				return editor
		return None

	def openFiles(self: 'MainWindow', filePaths: List[str]) -> None:
		"""Opens each path in a tab (used for command-line arguments)."""
		for filePath in filePaths:
			event_handlers.open_file_path(self, filePath)

	def _addEditor(self: 'MainWindow', filePath: Optional[str], content: str) -> InlineDiffEditor:
		editor = InlineDiffEditor(filePath, parent=self._editorTabWidget)
		editor.setEditorFont(self._editorFontFamily, self._editorFontSize)
		editor.setPlainText(content)
		editor.document().setModified(False)

		timer = QTimer(self)
		timer.setSingleShot(True)
		timer.setInterval(self._debounceMs)
		self._debounceTimers[editor] = timer
		signal_connections.connect_editor_signals(self, editor, timer)

		index = self._editorTabWidget.addTab(editor, "")
		if filePath:
			self._editorTabWidget.setTabToolTip(index, filePath)
		self._updateTabTitle(editor)
		self._editorTabWidget.setCurrentIndex(index)
		self._updateWidgetStates()
		return editor

	def _forgetEditor(self: 'MainWindow', editor: InlineDiffEditor) -> None:
		""" Drops every piece of inline diff state held for `editor`. """
		timer = self._debounceTimers.pop(editor, None)
		if timer is not None:
			timer.stop()
			timer.deleteLater()
		self._latestRequestIds.pop(editor, None)
		self._bundles.pop(editor, None)
		self._decorationManager.clearDecorations(editor)

	@Slot()
	def _updateTabTitle(self: 'MainWindow', editor: InlineDiffEditor) -> None:
		index = self._editorTabWidget.indexOf(editor)
		if index < 0:
			return
		title = os.path.basename(editor.filePath) if editor.filePath else "Untitled"
		if editor.document().isModified():
			title += " *"
		self._editorTabWidget.setTabText(index, title)
		if editor.filePath:
			self._editorTabWidget.setTabToolTip(index, editor.filePath)

	# --- Inline Diff State ---
	def _setInlineDiffEnabled(self: 'MainWindow', enabled: bool) -> None:
		"""
		Switches inline diff on or off. Enabling refreshes the current editor; disabling
		clears every editor and makes any result still in flight stale.
		"""
		self._inlineDiffEnabled = enabled
		self._syncToggleControls()
		if enabled:
			editor = self._currentEditor()
			if editor is not None:
				self._requestDiffRefresh(editor)
			self._updateStatusBar("Inline diff enabled.", 3000)
		else:
			for timer in self._debounceTimers.values():
				timer.stop()
			self._latestRequestIds.clear()
			self._diffWorker.clearPendingRequest()
			self._decorationManager.clearAllDecorations()
			self._bundles.clear()
			self._updateStatusBar("Inline diff disabled.", 3000)
		logger.info(f"Inline diff {'enabled' if enabled else 'disabled'}.")
		self._updateDiffSummary()
		self._updateWidgetStates()

	def _syncToggleControls(self: 'MainWindow') -> None:
		self._toggleDiffAction.setChecked(self._inlineDiffEnabled)
		self._toggleDiffButton.setChecked(self._inlineDiffEnabled)
		self._toggleDiffButton.setText(f"Inline Diff: {'On' if self._inlineDiffEnabled else 'Off'}")

	def _scheduleDiffRefresh(self: 'MainWindow', editor: InlineDiffEditor) -> None:
		timer = self._debounceTimers.get(editor)
		if timer is not None:
			timer.start()

	def _requestDiffRefresh(self: 'MainWindow', editor: InlineDiffEditor) -> None:
		""" Starts a diff fetch for `editor` now, cancelling its pending debounce. """
		if not self._inlineDiffEnabled:
			return
		timer = self._debounceTimers.get(editor)
		if timer is not None:
			timer.stop()
		if not editor.filePath:
			# Buffers that were never saved have nothing to compare against.
			self._latestRequestIds.pop(editor, None)
			self._bundles.pop(editor, None)
			self._decorationManager.clearDecorations(editor)
			self._updateDiffSummary()
			return
		self._nextRequestId += 1
		requestId = self._nextRequestId
		self._latestRequestIds[editor] = requestId
		workingText: Optional[str] = editor.toPlainText() if self._pipeline.compareLiveBuffer else None
		logger.debug(f"Requesting inline diff {requestId} for '{editor.filePath}'.")
		self._diffWorker.startFetch(requestId, editor.filePath, workingText)

	def _editorForRequest(self: 'MainWindow', requestId: int) -> Optional[InlineDiffEditor]:
		""" Returns the editor whose latest request is `requestId`, or None if the result is stale. """
		for editor, latestId in self._latestRequestIds.items():
			if latestId == requestId:
				return editor
		return None

	# --- Status and Widget State ---
	def _updateWidgetStates(self: 'MainWindow') -> None:
		hasEditor: bool = self._currentEditor() is not None
		if hasattr(self, '_saveAction'): self._saveAction.setEnabled(hasEditor)
		if hasattr(self, '_closeTabAction'): self._closeTabAction.setEnabled(hasEditor)
		if hasattr(self, '_refreshDiffAction'): self._refreshDiffAction.setEnabled(hasEditor and self._inlineDiffEnabled)

	def _updateDiffSummary(self: 'MainWindow') -> None:
		editor = self._currentEditor()
		bundle = self._bundles.get(editor) if (editor is not None and self._inlineDiffEnabled) else None
		if bundle is None:
			self._diffSummaryLabel.setText("")
			self._diffSummaryLabel.setToolTip("Changes against HEAD in the current editor.")
			return
		self._diffSummaryLabel.setText(bundle.summary())
		self._diffSummaryLabel.setToolTip(formatSummaryTooltip(bundle))

	@Slot(str, int)
	def _updateStatusBar(self: 'MainWindow', message: str, timeout: int = 0) -> None:
		if hasattr(self, '_statusBar') and self._statusBar:
			self._statusBar.showMessage(message, timeout)

	@Slot(str)
	def _appendLogMessage(self: 'MainWindow', message: str) -> None:
		if hasattr(self, '_appLogArea') and self._appLogArea:
			self._appLogArea.append(message)

	# --- Message Box Convenience Methods ---
	def _showError(self: 'MainWindow', title: str, message: str) -> None:
		logger.error(f"Displaying Error Dialog - Title: '{title}', Message: '{message}'")
		QMessageBox.critical(self, title, str(message))

	def _showWarning(self: 'MainWindow', title: str, message: str) -> None:
		logger.warning(f"Displaying Warning Dialog - Title: '{title}', Message: '{message}'")
		QMessageBox.warning(self, title, str(message))

	# --- Window Close Event ---
	def closeEvent(self: 'MainWindow', event: QEvent) -> None:
		""" Asks about unsaved editors, then stops the worker and removes the GUI log handler. """
		unsaved: List[str] = [
			os.path.basename(editor.filePath) if editor.filePath else "Untitled"
			for editor in self.editors() if editor.document().isModified()
		]
		if unsaved:
			reply: QMessageBox.StandardButton = QMessageBox.question(
				self, 'Confirm Exit',
				"Unsaved changes in: " + ", ".join(unsaved) + "\nExit anyway?",
				QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.Cancel,
				QMessageBox.StandardButton.Cancel
			)
			if reply == QMessageBox.StandardButton.Cancel:
				event.ignore()
				return

		logger.info("Shutting down...")
		for editor in self.editors():
			self._forgetEditor(editor)
		self._stop_worker_threads()
		if getattr(self, '_guiLogHandler', None) is not None:
			logging.getLogger().removeHandler(self._guiLogHandler)
			self._guiLogHandler = None
		super().closeEvent(event)

	def _stop_worker_threads(self: 'MainWindow') -> None:
		""" Drops any pending diff request and waits briefly for a running fetch. """
		worker = getattr(self, '_diffWorker', None)
		if worker is None:
			return
		worker.clearPendingRequest()
		if worker.isRunning():
			logger.debug("Requesting stop for DiffWorker...")
			worker.requestInterruption()
			if not worker.wait(2000):
				logger.warning("DiffWorker did not finish after interruption request and wait.")

# --- END: gui/main_window.py ---
