# --- START: gui/threads.py ---
# gui/threads.py
"""
Threading module for background work in the GUI application.

Asking Git for a diff can take a noticeable time on large repositories, so it runs
on a worker thread. Parsing and projection stay on the GUI thread, where the live
document can be read safely.
"""

import logging
from typing import Any, Optional, Tuple

from PySide6.QtCore import QThread, Signal, Slot

from core.diff_pipeline import InlineDiffPipeline

logger: logging.Logger = logging.getLogger(__name__)


class BaseWorker(QThread):
	"""
	Base class for worker threads.

	Signals:
		errorOccurred (str): Emitted when a task fails unexpectedly.
	"""

	errorOccurred = Signal(str)

	def __init__(self: 'BaseWorker', parent: Optional[Any] = None) -> None:
		super().__init__(parent)
		self._task: Optional[str] = None
		self._args: list = []
		self._kwargs: dict = {}
		self._isRunning = False
		# Cleared on `finished`: start() is a no-op until the thread has exited,
		# which is after run() returns.
		self.finished.connect(self._onFinished)

	def setTask(self: 'BaseWorker', taskName: str, args: list, kwargs: dict) -> None:
		self._task = taskName
		self._args = args
		self._kwargs = kwargs

	@property
	def isBusy(self: 'BaseWorker') -> bool:
		return self._isRunning or self.isRunning()

	def start(self, priority=QThread.Priority.InheritPriority) -> None:
		if self.isBusy:
			logger.warning(f"{self.__class__.__name__} already running. Ignoring start request.")
			return
		self._isRunning = True
		super().start(priority)

	@Slot()
	def _onFinished(self: 'BaseWorker') -> None:
		self._isRunning = False

	def run(self: 'BaseWorker') -> None:
		if not self._task:
			logger.warning(f"{self.__class__.__name__} started without a task.")
			self.errorOccurred.emit(f"{self.__class__.__name__} started without task.")
			return
		try:
			self._executeTask()
		except Exception as e:
			logger.critical(f"Unhandled exception in {self.__class__.__name__} task '{self._task}': {e}", exc_info=True)
			self.errorOccurred.emit(f"Critical internal error in {self.__class__.__name__}: {e}")
		finally:
			self._task = None

	def _executeTask(self: 'BaseWorker') -> None:
		raise NotImplementedError("Subclasses must implement _executeTask.")


class DiffWorker(BaseWorker):
	"""
	Fetches diff text for one editor at a time.

	A request made while a fetch is running replaces any request still waiting, so
	at most one request is pending and it is always the most recent one. The pending
	request starts as soon as the running fetch has finished.

	Signals:
		diffFetched (int, str, object): Request id, file path and the diff text
										(or None when there is nothing to annotate).
	"""

	diffFetched = Signal(int, str, object)

	def __init__(self: 'DiffWorker', pipeline: InlineDiffPipeline, parent: Optional[Any] = None) -> None:
		super().__init__(parent)
		self._pipeline: InlineDiffPipeline = pipeline
		self._pendingRequest: Optional[Tuple[int, str, Optional[str]]] = None
		self.finished.connect(self._startPendingRequest)

	@Slot(int, str, object)
	def startFetch(self: 'DiffWorker', requestId: int, filePath: str, workingText: Optional[str] = None) -> None:
		if self.isBusy:
			if self._pendingRequest is not None:
				logger.debug(f"Superseding pending diff request {self._pendingRequest[0]} with {requestId}.")
			self._pendingRequest = (requestId, filePath, workingText)
			return
		self.setTask('fetchDiff', [requestId, filePath], {'workingText': workingText})
		self.start()

	def clearPendingRequest(self: 'DiffWorker') -> None:
		self._pendingRequest = None

	@Slot()
	def _startPendingRequest(self: 'DiffWorker') -> None:
		if self._pendingRequest is None:
			return
		requestId, filePath, workingText = self._pendingRequest
		self._pendingRequest = None
		# `finished` is delivered while the thread may still be winding down.
		self.wait()
		self.startFetch(requestId, filePath, workingText)

	def _executeTask(self: 'DiffWorker') -> None:
		if self._task != 'fetchDiff':
			errMsg: str = f"Unknown DiffWorker task: {self._task}"
			logger.error(errMsg)
			self.errorOccurred.emit(errMsg)
			return
		requestId, filePath = self._args
		logger.debug(f"Fetching diff for request {requestId}: '{filePath}'")
		diffText: Optional[str] = self._pipeline.fetchDiffText(filePath, self._kwargs.get('workingText'))
		if self.isInterruptionRequested():
			logger.debug(f"Diff request {requestId} interrupted; result dropped.")
			return
		self.diffFetched.emit(requestId, filePath, diffText)

# --- END: gui/threads.py ---
