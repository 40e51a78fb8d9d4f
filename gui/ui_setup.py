# --- START: gui/ui_setup.py ---
# gui/ui_setup.py
"""
Module responsible for creating and laying out the UI widgets
for the MainWindow.
"""

import os
import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QFont, QIcon, QKeySequence
from PySide6.QtWidgets import (
	QLabel, QMainWindow, QPushButton, QSplitter,
	QStatusBar, QTabWidget, QTextEdit
)

logger = logging.getLogger(__name__)

TOGGLE_SHORTCUT: str = "Ctrl+Alt+D"


def setup_ui(window: QMainWindow) -> None:
	"""
	Sets up the menus, editor tabs, log pane and status bar of the main window.

	Args:
		window: The QMainWindow instance to set up.
	"""
	logger.debug("Setting up UI elements.")
	window.setWindowTitle("Inline Working Diff")
	iconPath = os.path.join('resources', 'app_icon.png')
	if os.path.exists(iconPath):
		window.setWindowIcon(QIcon(iconPath))
	else:
		logger.debug(f"Application icon not found at: {iconPath}")

	# --- Actions and Menus ---
	window._openAction = QAction("&Open...", window)
	window._openAction.setShortcut(QKeySequence.StandardKey.Open)
	window._saveAction = QAction("&Save", window)
	window._saveAction.setShortcut(QKeySequence.StandardKey.Save)
	window._closeTabAction = QAction("&Close Tab", window)
	window._closeTabAction.setShortcut(QKeySequence.StandardKey.Close)
	window._exitAction = QAction("E&xit", window)
	window._exitAction.setShortcut(QKeySequence.StandardKey.Quit)

	window._toggleDiffAction = QAction("Show &Inline Diff", window)
	window._toggleDiffAction.setCheckable(True)
	window._toggleDiffAction.setShortcut(QKeySequence(TOGGLE_SHORTCUT))
	window._toggleDiffAction.setToolTip("Show or hide changes against HEAD inside the editor.")
	window._refreshDiffAction = QAction("&Refresh Inline Diff", window)
	window._refreshDiffAction.setShortcut(QKeySequence(Qt.Key.Key_F5))

	fileMenu = window.menuBar().addMenu("&File")
	fileMenu.addAction(window._openAction)
	fileMenu.addAction(window._saveAction)
	fileMenu.addAction(window._closeTabAction)
	fileMenu.addSeparator()
	fileMenu.addAction(window._exitAction)
	viewMenu = window.menuBar().addMenu("&View")
	viewMenu.addAction(window._toggleDiffAction)
	viewMenu.addAction(window._refreshDiffAction)

	# --- Editors and Log Pane ---
	mainSplitter = QSplitter(Qt.Orientation.Vertical)
	window._editorTabWidget = QTabWidget()
	window._editorTabWidget.setTabsClosable(True)
	window._editorTabWidget.setMovable(True)
	window._editorTabWidget.setDocumentMode(True)
	mainSplitter.addWidget(window._editorTabWidget)

	window._appLogArea = QTextEdit()
	window._appLogArea.setReadOnly(True)
	window._appLogArea.setLineWrapMode(QTextEdit.LineWrapMode.NoWrap)
	logFont = QFont("monospace")
	logFont.setStyleHint(QFont.StyleHint.Monospace)
	logFont.setPointSize(9)
	window._appLogArea.setFont(logFont)
	window._appLogArea.setToolTip("Application log.")
	mainSplitter.addWidget(window._appLogArea)
	mainSplitter.setStretchFactor(0, 4)
	mainSplitter.setStretchFactor(1, 1)
	window.setCentralWidget(mainSplitter)

	# --- Status Bar ---
	window._statusBar = QStatusBar()
	window.setStatusBar(window._statusBar)
	window._diffSummaryLabel = QLabel("")
	window._diffSummaryLabel.setToolTip("Changes against HEAD in the current editor.")
	window._statusBar.addPermanentWidget(window._diffSummaryLabel)
	window._toggleDiffButton = QPushButton("Inline Diff: Off")
	window._toggleDiffButton.setCheckable(True)
	window._toggleDiffButton.setFlat(True)
	window._toggleDiffButton.setToolTip(f"Toggle inline diff ({TOGGLE_SHORTCUT}).")
	window._statusBar.addPermanentWidget(window._toggleDiffButton)

	logger.debug("UI setup complete.")

# --- END: gui/ui_setup.py ---
