# --- START: gui/callback_handlers.py ---
# gui/callback_handlers.py
"""
Module containing the slots that handle signals emitted by the DiffWorker.

A fetched diff is projected onto the editor's document as it is when the result
arrives, then handed to the DecorationManager. Results for closed editors,
superseded requests, or arriving after inline diff was switched off are dropped.
"""

import logging
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
	from .main_window import MainWindow

logger: logging.Logger = logging.getLogger(__name__)


def on_diff_fetched(window: 'MainWindow', requestId: int, filePath: str, diffText: Optional[str]) -> None:
	"""
	Handles a finished diff fetch.

	Args:
		window (MainWindow): The main application window instance.
		requestId (int): Id of the request that produced the result.
		filePath (str): File the diff was taken for.
		diffText (Optional[str]): Unified diff text, or None when nothing is to be annotated.
	"""
	if not window._inlineDiffEnabled:
		logger.debug(f"Discarding diff result {requestId}: inline diff is disabled.")
		return
	editor = window._editorForRequest(requestId)
	if editor is None:
		logger.debug(f"Discarding stale diff result {requestId} for '{filePath}'.")
		return

	try:
		bundle = window._pipeline.buildAnnotations(diffText, editor.lineCount(), editor.lineTextAt)
	except Exception as e:
		logger.error(f"Failed to build annotations for '{filePath}': {e}", exc_info=True)
		window._decorationManager.clearDecorations(editor)
		window._bundles.pop(editor, None)
		window._updateDiffSummary()
		return

	window._decorationManager.applyDecorations(editor, bundle)
	window._bundles[editor] = bundle
	logger.debug(f"Inline diff for '{filePath}' (request {requestId}): {bundle.summary()}")
	if editor is window._currentEditor():
		window._updateDiffSummary()


def handle_worker_error(window: 'MainWindow', message: str, workerName: str = "Worker") -> None:
	"""Handles unexpected failures reported by a worker thread."""
	logger.error(f"{workerName} reported an error: {message}")
	window._updateStatusBar(f"Inline diff error: {message}", 5000)

# --- END: gui/callback_handlers.py ---
