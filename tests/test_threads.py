# --- START: tests/test_threads.py ---
import threading
import time
import unittest
from typing import Callable, List, Optional, Tuple
from unittest.mock import patch, MagicMock

import sys
if '.' not in sys.path:
	sys.path.append('.')

from PySide6.QtCore import QCoreApplication

from core.diff_pipeline import InlineDiffPipeline
from gui.threads import DiffWorker

WAIT_TIMEOUT_S: float = 5.0


class SlowExitDiffWorker(DiffWorker):
	"""Keeps the thread alive for a while after the fetch has been reported."""

	exitDelay: float = 0.3

	def run(self: 'SlowExitDiffWorker') -> None:
		super().run()
		time.sleep(self.exitDelay)


class TestDiffWorker(unittest.TestCase):
	"""
	Unit tests for DiffWorker under a QCoreApplication (no display needed).
	The pipeline is a MagicMock whose fetch blocks until the test releases it.
	"""

	@classmethod
	def setUpClass(cls) -> None:
		cls.app = QCoreApplication.instance() or QCoreApplication([])

	def setUp(self: 'TestDiffWorker') -> None:
		self.patcher = patch('gui.threads.logger', MagicMock())
		self.mock_logger = self.patcher.start()
		self.release = threading.Event()
		self.fetchedPaths: List[str] = []
		self.results: List[Tuple[int, str, Optional[str]]] = []
		self.mockPipeline = MagicMock(spec=InlineDiffPipeline)
		self.mockPipeline.fetchDiffText.side_effect = self._fetch
		self.workers: List[DiffWorker] = []

	def tearDown(self: 'TestDiffWorker') -> None:
		self.release.set()
		for worker in self.workers:
			worker.clearPendingRequest()
			worker.wait(2000)
		QCoreApplication.processEvents()
		self.patcher.stop()

	def _fetch(self: 'TestDiffWorker', filePath: str, workingText: Optional[str] = None) -> str:
		self.fetchedPaths.append(filePath)
		self.release.wait(WAIT_TIMEOUT_S)
		return f"diff of {filePath}"

	def _makeWorker(self: 'TestDiffWorker', workerClass: type = DiffWorker) -> DiffWorker:
		worker = workerClass(self.mockPipeline)
		worker.diffFetched.connect(lambda requestId, filePath, diffText: self.results.append((requestId, filePath, diffText)))
		self.workers.append(worker)
		return worker

	def _waitUntil(self: 'TestDiffWorker', condition: Callable[[], bool]) -> bool:
		deadline = time.monotonic() + WAIT_TIMEOUT_S
		while time.monotonic() < deadline:
			QCoreApplication.processEvents()
			if condition():
				return True
			time.sleep(0.01)
		return condition()

	def _resultIds(self: 'TestDiffWorker') -> List[int]:
		return [result[0] for result in self.results]

	def test_startFetch_emitsResult(self: 'TestDiffWorker') -> None:
		worker = self._makeWorker()
		self.release.set()
		worker.startFetch(1, '/repo/a.txt', "text")
		self.assertTrue(self._waitUntil(lambda: self.results))
		self.assertEqual(self.results, [(1, '/repo/a.txt', "diff of /repo/a.txt")])
		self.mockPipeline.fetchDiffText.assert_called_once_with('/repo/a.txt', "text")

	def test_startFetch_keepsOnlyLatestPendingRequest(self: 'TestDiffWorker') -> None:
		"""Requests made while a fetch runs replace each other; only the last one is fetched."""
		worker = self._makeWorker()
		worker.startFetch(1, '/repo/a.txt')
		self.assertTrue(self._waitUntil(lambda: self.fetchedPaths))
		worker.startFetch(2, '/repo/b.txt')
		worker.startFetch(3, '/repo/c.txt')
		self.release.set()
		self.assertTrue(self._waitUntil(lambda: 3 in self._resultIds()))
		self.assertTrue(self._waitUntil(lambda: not worker.isBusy))
		self.assertEqual(self._resultIds(), [1, 3])
		self.assertEqual(self.fetchedPaths, ['/repo/a.txt', '/repo/c.txt'])

	def test_pendingRequestStartsWhenCurrentFinishes(self: 'TestDiffWorker') -> None:
		worker = self._makeWorker()
		worker.startFetch(1, '/repo/a.txt')
		self.assertTrue(self._waitUntil(lambda: self.fetchedPaths))
		worker.startFetch(2, '/repo/a.txt', "edited")
		self.assertEqual(self._resultIds(), [])
		self.release.set()
		self.assertTrue(self._waitUntil(lambda: self._resultIds() == [1, 2]))
		self.assertEqual(self.mockPipeline.fetchDiffText.call_args_list[-1][0], ('/repo/a.txt', "edited"))

	def test_clearPendingRequest_dropsWaitingRequest(self: 'TestDiffWorker') -> None:
		worker = self._makeWorker()
		worker.startFetch(1, '/repo/a.txt')
		self.assertTrue(self._waitUntil(lambda: self.fetchedPaths))
		worker.startFetch(2, '/repo/b.txt')
		worker.clearPendingRequest()
		self.release.set()
		self.assertTrue(self._waitUntil(lambda: not worker.isBusy))
		self.assertEqual(self._resultIds(), [1])

	def test_requestWhileThreadIsExiting_stillRuns(self: 'TestDiffWorker') -> None:
		"""A request made after the result is out but before the thread has exited is not lost."""
		worker = self._makeWorker(SlowExitDiffWorker)
		self.release.set()
		worker.startFetch(1, '/repo/a.txt')
		self.assertTrue(self._waitUntil(lambda: self.results))
		self.assertTrue(worker.isRunning())
		worker.startFetch(2, '/repo/a.txt')
		self.assertTrue(self._waitUntil(lambda: 2 in self._resultIds()))
		self.assertTrue(self._waitUntil(lambda: not worker.isBusy))
		# The worker keeps accepting requests afterwards.
		worker.startFetch(3, '/repo/a.txt')
		self.assertTrue(self._waitUntil(lambda: 3 in self._resultIds()))
		self.assertEqual(self._resultIds(), [1, 2, 3])

	def test_pipelineExceptionReportsError(self: 'TestDiffWorker') -> None:
		self.mockPipeline.fetchDiffText.side_effect = RuntimeError("boom")
		worker = self._makeWorker()
		errors: List[str] = []
		worker.errorOccurred.connect(errors.append)
		worker.startFetch(1, '/repo/a.txt')
		self.assertTrue(self._waitUntil(lambda: errors))
		self.assertIn("boom", errors[0])
		self.assertTrue(self._waitUntil(lambda: not worker.isBusy))
		self.assertEqual(self.results, [])


if __name__ == '__main__':
	unittest.main()

# --- END: tests/test_threads.py ---
