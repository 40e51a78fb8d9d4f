# --- START: tests/test_annotation_projector.py ---
import unittest
from typing import Callable, List
from unittest.mock import patch, MagicMock

import sys
if '.' not in sys.path:
	sys.path.append('.')

from core.annotation_projector import AnnotationProjector
from core.diff_parser import parseDiff
from core.models import (
	Annotation, AnnotationBundle, AnnotationCategory, DeletedLineGhost,
	EditorRange, RenderHint
)


def _lookupFor(documentLines: List[str]) -> Callable[[int], str]:
	def lookup(lineNumber: int) -> str:
		if lineNumber < 0:
			raise IndexError(lineNumber)
		return documentLines[lineNumber]
	return lookup


def _wholeLine(line: int) -> Annotation:
	return Annotation(EditorRange.onLine(line, 0, 0))


class TestAnnotationProjector(unittest.TestCase):
	"""
	Unit tests for AnnotationProjector.project, driven by small unified diffs
	and an in-memory document.
	"""

	def setUp(self: 'TestAnnotationProjector') -> None:
		self.patcher = patch('core.annotation_projector.logger', MagicMock())
		self.mock_logger = self.patcher.start()
		self.projector = AnnotationProjector()

	def tearDown(self: 'TestAnnotationProjector') -> None:
		self.patcher.stop()

	def _project(self: 'TestAnnotationProjector', diffText: str, documentLines: List[str]) -> AnnotationBundle:
		return self.projector.project(parseDiff(diffText), len(documentLines), _lookupFor(documentLines))

	# --- Modifications ---

	def test_project_modificationWithInsertedText(self: 'TestAnnotationProjector') -> None:
		diffText = "@@ -1,3 +1,3 @@\n line 1\n-const x = 1;\n+const xy = 1;\n line 3"
		bundle = self._project(diffText, ["line 1", "const xy = 1;", "line 3"])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED), [_wholeLine(1)])
		self.assertEqual(bundle.get(AnnotationCategory.INSERTED_TEXT), [Annotation(EditorRange.onLine(1, 7, 8))])
		self.assertEqual(bundle.get(AnnotationCategory.DELETED_TEXT_MARKER), [])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_ADDED), [])
		self.assertEqual(bundle.deletedLineGhosts, [])

	def test_project_modificationWithDeletedText(self: 'TestAnnotationProjector') -> None:
		"""Deleted characters become a zero-width marker carrying the removed text."""
		bundle = self._project("@@ -1 +1 @@\n-return value;\n+return value", ["return value"])
		self.assertEqual(bundle.get(AnnotationCategory.DELETED_TEXT_MARKER), [
			Annotation(EditorRange.onLine(0, 12, 12), RenderHint(contentText=";"))
		])
		self.assertEqual(bundle.get(AnnotationCategory.INSERTED_TEXT), [])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED), [_wholeLine(0)])

	def test_project_modificationReplacement(self: 'TestAnnotationProjector') -> None:
		"""The marker sits where the inserted text starts; the column does not advance for deleted text."""
		bundle = self._project("@@ -1 +1 @@\n-x = abc\n+x = xyz", ["x = xyz"])
		self.assertEqual(bundle.get(AnnotationCategory.DELETED_TEXT_MARKER), [
			Annotation(EditorRange.onLine(0, 4, 4), RenderHint(contentText="abc"))
		])
		self.assertEqual(bundle.get(AnnotationCategory.INSERTED_TEXT), [Annotation(EditorRange.onLine(0, 4, 7))])

	def test_project_insertedTextBeyondLiveLineDropped(self: 'TestAnnotationProjector') -> None:
		"""Character ranges past the end of the live line are dropped; the line is still marked modified."""
		bundle = self._project("@@ -1 +1 @@\n-abc\n+abcdef", ["ab"])
		self.assertEqual(bundle.get(AnnotationCategory.INSERTED_TEXT), [])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED), [_wholeLine(0)])

	def test_project_deletedMarkerBeyondLiveLineDropped(self: 'TestAnnotationProjector') -> None:
		bundle = self._project("@@ -1 +1 @@\n-abcdef\n+abcde", ["ab"])
		self.assertEqual(bundle.get(AnnotationCategory.DELETED_TEXT_MARKER), [])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED), [_wholeLine(0)])

	def test_project_lookupFailureKeepsModificationRanges(self: 'TestAnnotationProjector') -> None:
		"""Without live text the ranges are emitted unchecked."""
		def failingLookup(lineNumber: int) -> str:
			raise KeyError(lineNumber)
		bundle = self.projector.project(parseDiff("@@ -1 +1 @@\n-abc\n+abcdef"), 1, failingLookup)
		self.assertEqual(bundle.get(AnnotationCategory.INSERTED_TEXT), [Annotation(EditorRange.onLine(0, 3, 6))])

	# --- Pure additions ---

	def test_project_pureAddition(self: 'TestAnnotationProjector') -> None:
		bundle = self._project("@@ -1,2 +1,3 @@\n a\n+new\n b", ["a", "new", "b"])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_ADDED), [_wholeLine(1)])
		self.assertEqual(bundle.get(AnnotationCategory.INSERTED_TEXT), [Annotation(EditorRange.onLine(1, 0, 3))])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED), [])

	def test_project_pureAdditionEmptyLine(self: 'TestAnnotationProjector') -> None:
		"""An empty added line gets the whole-line marker but no text range."""
		bundle = self._project("@@ -1,2 +1,3 @@\n a\n+\n b", ["a", "", "b"])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_ADDED), [_wholeLine(1)])
		self.assertEqual(bundle.get(AnnotationCategory.INSERTED_TEXT), [])

	def test_project_pureAdditionUsesLiveText(self: 'TestAnnotationProjector') -> None:
		"""The highlight spans what the editor shows now, not the recorded content."""
		bundle = self._project("@@ -1,2 +1,3 @@\n a\n+new\n b", ["a", "edited since", "b"])
		self.assertEqual(bundle.get(AnnotationCategory.INSERTED_TEXT), [Annotation(EditorRange.onLine(1, 0, 12))])

	def test_project_addedLinesOutsideDocumentSkipped(self: 'TestAnnotationProjector') -> None:
		bundle = self._project("@@ -1 +1,3 @@\n a\n+b\n+c", ["a", "b"])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_ADDED), [_wholeLine(1)])
		self.assertEqual(bundle.get(AnnotationCategory.INSERTED_TEXT), [Annotation(EditorRange.onLine(1, 0, 1))])

	# --- Pure deletions ---

	def test_project_consecutiveDeletions(self: 'TestAnnotationProjector') -> None:
		"""Each deleted line gets its own ghost with its 1-based old line number."""
		diffText = (
			"@@ -1,5 +1,2 @@\n"
			" line1\n"
			"-deleted line 1\n"
			"-deleted line 2\n"
			"-deleted line 3\n"
			" line5"
		)
		bundle = self._project(diffText, ["line1", "line5"])
		self.assertEqual(bundle.deletedLineGhosts, [
			DeletedLineGhost(0, "- 2: deleted line 1"),
			DeletedLineGhost(0, "- 3: deleted line 2"),
			DeletedLineGhost(0, "- 4: deleted line 3"),
		])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_ADDED), [])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED), [])

	def test_project_deletionAtStartOfFileAttachesToFirstLine(self: 'TestAnnotationProjector') -> None:
		bundle = self._project("@@ -1,2 +1 @@\n-first\n second", ["second"])
		self.assertEqual(bundle.deletedLineGhosts, [DeletedLineGhost(0, "- 1: first")])

	def test_project_deletionFromEmptyDocumentDropped(self: 'TestAnnotationProjector') -> None:
		bundle = self._project("@@ -1 +0,0 @@\n-only line", [])
		self.assertTrue(bundle.isEmpty)
		self.mock_logger.warning.assert_called_once()

	def test_project_deletionPastEndOfDocumentDropped(self: 'TestAnnotationProjector') -> None:
		"""A ghost whose attach line no longer exists is dropped; the rest of the hunk survives."""
		diffText = "@@ -2,3 +2,2 @@\n-b\n+B\n c\n-d"
		bundle = self._project(diffText, ["a", "B"])
		self.assertEqual(bundle.deletedLineGhosts, [])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED), [_wholeLine(1)])

	def test_project_deletionAtEndOfDocument(self: 'TestAnnotationProjector') -> None:
		bundle = self._project("@@ -2,2 +2 @@\n b\n-c", ["a", "b"])
		self.assertEqual(bundle.deletedLineGhosts, [DeletedLineGhost(1, "- 3: c")])

	# --- Pairing ---

	def test_project_runOfRemovedAndAddedPairsLocally(self: 'TestAnnotationProjector') -> None:
		"""In N removed + M added lines only the last removed and first added line pair up."""
		diffText = "@@ -1,2 +1,2 @@\n-a1\n-b1\n+a2\n+b2"
		bundle = self._project(diffText, ["a2", "b2"])
		self.assertEqual(bundle.deletedLineGhosts, [DeletedLineGhost(0, "- 1: a1")])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED), [_wholeLine(0)])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_ADDED), [_wholeLine(1)])
		self.assertEqual(bundle.get(AnnotationCategory.DELETED_TEXT_MARKER), [
			Annotation(EditorRange.onLine(0, 0, 0), RenderHint(contentText="b1"))
		])

	def test_project_addedThenRemovedIsNotAModification(self: 'TestAnnotationProjector') -> None:
		bundle = self._project("@@ -1,2 +1,2 @@\n a\n+x\n-b", ["a", "x"])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_ADDED), [_wholeLine(1)])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED), [])
		self.assertEqual(bundle.deletedLineGhosts, [DeletedLineGhost(1, "- 2: b")])

	# --- Whole bundle ---

	def test_project_multipleHunks(self: 'TestAnnotationProjector') -> None:
		documentLines = ["l%d" % i for i in range(1, 21)]
		documentLines[1] = "L2"
		documentLines.insert(15, "inserted")
		diffText = (
			"@@ -1,3 +1,3 @@\n l1\n-l2\n+L2\n l3\n"
			"@@ -15,2 +15,3 @@\n l15\n+inserted\n l16\n"
		)
		bundle = self._project(diffText, documentLines)
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED), [_wholeLine(1)])
		self.assertEqual(bundle.get(AnnotationCategory.WHOLE_LINE_ADDED), [_wholeLine(15)])
		self.assertEqual(bundle.summary(), "+1 ~1 -0")

	def test_project_noHunks(self: 'TestAnnotationProjector') -> None:
		bundle = self.projector.project([], 3, _lookupFor(["a", "b", "c"]))
		self.assertTrue(bundle.isEmpty)
		self.assertEqual(set(bundle.annotations.keys()), set(AnnotationCategory))

	def test_project_isDeterministic(self: 'TestAnnotationProjector') -> None:
		diffText = "@@ -1,4 +1,4 @@\n a\n-b\n+B!\n-c\n d\n+e"
		documentLines = ["a", "B!", "d", "e"]
		hunks = parseDiff(diffText)
		first = self.projector.project(hunks, len(documentLines), _lookupFor(documentLines))
		second = self.projector.project(hunks, len(documentLines), _lookupFor(documentLines))
		self.assertEqual(first, second)


if __name__ == '__main__':
	unittest.main()

# --- END: tests/test_annotation_projector.py ---
