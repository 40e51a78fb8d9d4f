# --- START: tests/test_event_handlers.py ---
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch, MagicMock

import sys
if '.' not in sys.path:
	sys.path.append('.')

from gui import event_handlers


class TestHandleSaveFile(unittest.TestCase):
	"""Unit tests for handle_save_file with a MagicMock window and a patched save dialog."""

	def setUp(self: 'TestHandleSaveFile') -> None:
		self.patcher = patch('gui.event_handlers.logger', MagicMock())
		self.mock_logger = self.patcher.start()
		self.tmpDir = tempfile.mkdtemp()
		self.targetPath = os.path.join(self.tmpDir, 'notes.txt')

		self.editor = MagicMock()
		self.editor.filePath = None
		self.editor.toPlainText.return_value = "hello\n"
		self.window = MagicMock()
		self.window._currentEditor.return_value = self.editor
		self.window._inlineDiffEnabled = True
		self.window._findEditorForPath.return_value = None

	def tearDown(self: 'TestHandleSaveFile') -> None:
		self.patcher.stop()
		shutil.rmtree(self.tmpDir, ignore_errors=True)

	@patch('gui.event_handlers.QFileDialog.getSaveFileName')
	def test_untitledBufferSavedToNewPath(self: 'TestHandleSaveFile', mock_dialog: MagicMock) -> None:
		mock_dialog.return_value = (self.targetPath, '')
		event_handlers.handle_save_file(self.window)
		with open(self.targetPath, 'r', encoding='utf-8') as f:
			self.assertEqual(f.read(), "hello\n")
		self.editor.setFilePath.assert_called_once_with(os.path.abspath(self.targetPath))
		self.window._requestDiffRefresh.assert_called_once_with(self.editor)

	@patch('gui.event_handlers.write_text_file')
	@patch('gui.event_handlers.QFileDialog.getSaveFileName')
	def test_untitledBufferSavedOverOpenFileIsRefused(self: 'TestHandleSaveFile', mock_dialog: MagicMock, mock_write: MagicMock) -> None:
		"""Saving to a path already shown in another tab would leave two editors on one file."""
		mock_dialog.return_value = (self.targetPath, '')
		self.window._findEditorForPath.return_value = MagicMock()
		event_handlers.handle_save_file(self.window)
		self.window._findEditorForPath.assert_called_once_with(os.path.abspath(self.targetPath))
		mock_write.assert_not_called()
		self.editor.setFilePath.assert_not_called()
		self.window._showWarning.assert_called_once()
		self.window._requestDiffRefresh.assert_not_called()

	@patch('gui.event_handlers.QFileDialog.getSaveFileName')
	def test_dialogCancelled(self: 'TestHandleSaveFile', mock_dialog: MagicMock) -> None:
		mock_dialog.return_value = ('', '')
		event_handlers.handle_save_file(self.window)
		self.editor.setFilePath.assert_not_called()
		self.assertFalse(os.path.exists(self.targetPath))

	@patch('gui.event_handlers.QFileDialog.getSaveFileName')
	def test_savedFileDoesNotAskForPath(self: 'TestHandleSaveFile', mock_dialog: MagicMock) -> None:
		self.editor.filePath = self.targetPath
		event_handlers.handle_save_file(self.window)
		mock_dialog.assert_not_called()
		self.window._findEditorForPath.assert_not_called()
		self.assertTrue(os.path.exists(self.targetPath))


if __name__ == '__main__':
	unittest.main()

# --- END: tests/test_event_handlers.py ---
