# --- START: gui/diff_editor.py ---
# gui/diff_editor.py
"""
Plain-text editor widget that can display inline diff decorations.

Whole-line borders and ghost text are painted over the viewport in paintEvent;
inserted-text highlights use QTextEdit.ExtraSelection so they follow the text layout.
Line numbers used by the decorations are zero-based block numbers.
"""

import logging
from typing import Dict, List, Optional

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QFont, QFontMetricsF, QPainter, QTextCursor, QTextFormat
from PySide6.QtWidgets import QPlainTextEdit, QTextEdit, QWidget

from .decoration_manager import EditorDecorations, GhostTextDecoration

logger: logging.Logger = logging.getLogger(__name__)

MARKER_WIDTH: int = 2


def toQColor(colour: str) -> QColor:
	"""Converts '#RRGGBB' / '#AARRGGBB' into a QColor."""
	return QColor(colour)


class InlineDiffEditor(QPlainTextEdit):
	"""
	Editor tab content. Holds the path of the file it shows (None for a new buffer).
	"""

	def __init__(self: 'InlineDiffEditor', filePath: Optional[str] = None, parent: Optional[QWidget] = None) -> None:
		super().__init__(parent)
		self._filePath: Optional[str] = filePath
		self._decorations: EditorDecorations = EditorDecorations()
		self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)

	@property
	def filePath(self: 'InlineDiffEditor') -> Optional[str]:
		return self._filePath

	def setFilePath(self: 'InlineDiffEditor', filePath: Optional[str]) -> None:
		self._filePath = filePath

	def setEditorFont(self: 'InlineDiffEditor', family: str, pointSize: int) -> None:
		font = QFont(family)
		font.setStyleHint(QFont.StyleHint.Monospace)
		font.setPointSize(pointSize)
		self.setFont(font)

	# --- Document snapshot used by the projector ---

	def lineCount(self: 'InlineDiffEditor') -> int:
		"""Number of lines in the document; an empty document reports 0."""
		document = self.document()
		if document.characterCount() <= 1:
			return 0
		return document.blockCount()

	def lineTextAt(self: 'InlineDiffEditor', lineNumber: int) -> str:
		"""
		Text of a zero-based line.

		Raises:
			IndexError: If the line does not exist.
		"""
		if lineNumber < 0 or lineNumber >= self.lineCount():
			raise IndexError(f"Line {lineNumber} is out of range.")
		return self.document().findBlockByNumber(lineNumber).text()

	# --- Decoration interface used by DecorationManager ---

	def setDiffDecorations(self: 'InlineDiffEditor', decorations: EditorDecorations) -> None:
		self._decorations = decorations
		self.setExtraSelections(self._buildTextSelections())
		self.viewport().update()

	def clearDiffDecorations(self: 'InlineDiffEditor') -> None:
		self._decorations = EditorDecorations()
		self.setExtraSelections([])
		self.viewport().update()

	def _buildTextSelections(self: 'InlineDiffEditor') -> List[QTextEdit.ExtraSelection]:
		selections: List[QTextEdit.ExtraSelection] = []
		document = self.document()
		for textDecoration in self._decorations.textDecorations:
			block = document.findBlockByNumber(textDecoration.range.start.line)
			if not block.isValid():
				continue
			blockLength = len(block.text())
			startColumn = min(textDecoration.range.start.column, blockLength)
			endColumn = min(textDecoration.range.end.column, blockLength)
			if endColumn <= startColumn:
				continue
			cursor = QTextCursor(block)
			cursor.setPosition(block.position() + startColumn)
			cursor.setPosition(block.position() + endColumn, QTextCursor.MoveMode.KeepAnchor)
			selection = QTextEdit.ExtraSelection()
			selection.cursor = cursor
			selection.format.setBackground(toQColor(textDecoration.backgroundColor))
			selection.format.setProperty(QTextFormat.Property.OutlinePen, toQColor(textDecoration.borderColor))
			selections.append(selection)
		return selections

	# --- Painting ---

	def paintEvent(self: 'InlineDiffEditor', event) -> None:
		super().paintEvent(event)
		if self._decorations.isEmpty:
			return
		painter = QPainter(self.viewport())
		try:
			self._paintLineBorders(painter)
			self._paintGhostTexts(painter)
		finally:
			painter.end()

	def _visibleBlockRect(self: 'InlineDiffEditor', lineNumber: int) -> Optional[QRectF]:
		block = self.document().findBlockByNumber(lineNumber)
		if not block.isValid() or not block.isVisible():
			return None
		rect = self.blockBoundingGeometry(block).translated(self.contentOffset())
		if rect.bottom() < 0 or rect.top() > self.viewport().height():
			return None
		return rect

	def _paintLineBorders(self: 'InlineDiffEditor', painter: QPainter) -> None:
		for lineDecoration in self._decorations.lineDecorations:
			rect = self._visibleBlockRect(lineDecoration.line)
			if rect is None:
				continue
			painter.fillRect(QRectF(0, rect.top(), lineDecoration.borderWidth, rect.height()), toQColor(lineDecoration.borderColor))

	def _paintGhostTexts(self: 'InlineDiffEditor', painter: QPainter) -> None:
		metrics = QFontMetricsF(self.font())
		# Several ghosts on one line are laid out one after another.
		nextX: Dict[int, float] = {}
		for ghost in self._decorations.ghostTexts:
			rect = self._visibleBlockRect(ghost.line)
			if rect is None:
				continue
			block = self.document().findBlockByNumber(ghost.line)
			if ghost.line not in nextX:
				nextX[ghost.line] = rect.left() + self.document().documentMargin() + metrics.horizontalAdvance(block.text())
			if ghost.column is not None:
				self._paintColumnMarker(painter, metrics, ghost, rect, block.text())
			x = nextX[ghost.line] + metrics.horizontalAdvance(' ') * ghost.marginChars
			width = metrics.horizontalAdvance(ghost.text)
			textRect = QRectF(x, rect.top(), width, rect.height())
			painter.fillRect(textRect, toQColor(ghost.backgroundColor))
			font = QFont(self.font())
			font.setItalic(True)
			font.setStrikeOut(ghost.strikeOut)
			painter.setFont(font)
			painter.setPen(toQColor(ghost.color))
			painter.drawText(textRect, int(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter), ghost.text)
			nextX[ghost.line] = x + width

	def _paintColumnMarker(self: 'InlineDiffEditor', painter: QPainter, metrics: QFontMetricsF, ghost: GhostTextDecoration, rect: QRectF, lineText: str) -> None:
		column = min(ghost.column, len(lineText))
		x = rect.left() + self.document().documentMargin() + metrics.horizontalAdvance(lineText[:column])
		painter.fillRect(QRectF(x - MARKER_WIDTH / 2, rect.top(), MARKER_WIDTH, rect.height()), toQColor(ghost.color))

# --- END: gui/diff_editor.py ---
