# --- START: core/annotation_projector.py ---
# core/annotation_projector.py
"""
Projects parsed hunks onto the coordinates of the document currently shown in an editor.

Each hunk is walked with two cursors: the 0-based editor line reached so far in the
new file, and the number of old-file lines consumed within the hunk. A removed line
that is immediately followed by an added line is treated as one modified line and is
compared character by character; every other removed line becomes a ghost attached
to the editor line above the deletion point, and every other added line is a pure
addition.

The pairing is deliberately local: in a run of N removed lines followed by M added
lines only the last removed line and the first added line form a modification.

Annotations that fall outside the live document (which may have moved on since the
diff was captured) are dropped one by one; the rest of the hunk is still projected.
"""

import logging
from typing import Callable, Optional, Sequence

from .char_differ import diffChars
from .models import (
	Annotation, AnnotationBundle, AnnotationCategory, DeletedLineGhost,
	EditorRange, Hunk, LineType, RenderHint, SegmentKind
)

logger: logging.Logger = logging.getLogger(__name__)

LineTextLookup = Callable[[int], str]

DELETED_LINE_FORMAT: str = "- {lineNumber}: {content}"


class AnnotationProjector:
	"""
	Turns hunks into an AnnotationBundle for one document snapshot.

	The projector keeps no state between calls; the same hunks and snapshot always
	produce an equal bundle.
	"""

	def project(
		self: 'AnnotationProjector',
		hunks: Sequence[Hunk],
		currentDocumentLineCount: int,
		lineTextLookup: LineTextLookup
	) -> AnnotationBundle:
		"""
		Builds the annotation bundle for the given hunks.

		Args:
			hunks (Sequence[Hunk]): Parsed hunks in increasing newStart order.
			currentDocumentLineCount (int): Number of lines in the live document.
			lineTextLookup (Callable[[int], str]): Returns the live text of a 0-based line.

		Returns:
			AnnotationBundle: Annotations and deleted-line ghosts in hunk order.
		"""
		bundle = AnnotationBundle()
		for hunk in hunks:
			self._projectHunk(bundle, hunk, currentDocumentLineCount, lineTextLookup)
		logger.debug(f"Projected {len(hunks)} hunk(s) onto {currentDocumentLineCount} line(s): {bundle.summary()}")
		return bundle

	def _projectHunk(
		self: 'AnnotationProjector',
		bundle: AnnotationBundle,
		hunk: Hunk,
		lineCount: int,
		lineTextLookup: LineTextLookup
	) -> None:
		editorLine: int = hunk.newStart - 1
		oldLineCursor: int = 0
		records = hunk.lines

		for index, record in enumerate(records):
			if record.type is LineType.ADDED:
				if 0 <= editorLine < lineCount:
					previous = records[index - 1] if index > 0 else None
					if previous is not None and previous.type is LineType.REMOVED:
						self._projectModification(bundle, editorLine, previous.content, record.content, lineTextLookup)
					else:
						self._projectPureAddition(bundle, editorLine, lineTextLookup)
				else:
					logger.debug(f"Added line {editorLine} is outside the document ({lineCount} lines); skipped.")
				editorLine += 1

			elif record.type is LineType.REMOVED:
				following = records[index + 1] if index + 1 < len(records) else None
				isPartOfModification = following is not None and following.type is LineType.ADDED
				if not isPartOfModification:
					self._projectPureDeletion(bundle, hunk.oldStart + oldLineCursor, record.content, editorLine, lineCount)
				oldLineCursor += 1

			else:
				editorLine += 1
				oldLineCursor += 1

	def _projectModification(
		self: 'AnnotationProjector',
		bundle: AnnotationBundle,
		editorLine: int,
		oldContent: str,
		newContent: str,
		lineTextLookup: LineTextLookup
	) -> None:
		liveText: Optional[str] = _safeLookup(lineTextLookup, editorLine)
		liveLength: Optional[int] = len(liveText) if liveText is not None else None
		column: int = 0

		for segment in diffChars(oldContent, newContent):
			length = len(segment.text)
			if segment.kind is SegmentKind.EQUAL:
				column += length
			elif segment.kind is SegmentKind.INSERTED:
				if liveLength is None or column + length <= liveLength:
					bundle.add(AnnotationCategory.INSERTED_TEXT, Annotation(EditorRange.onLine(editorLine, column, column + length)))
				else:
					logger.debug(f"Inserted text [{column}, {column + length}) on line {editorLine} exceeds live length {liveLength}; dropped.")
				column += length
			else:
				# Deleted text takes no room in the new line: the cursor stays put.
				if liveLength is None or column <= liveLength:
					bundle.add(
						AnnotationCategory.DELETED_TEXT_MARKER,
						Annotation(EditorRange.onLine(editorLine, column, column), RenderHint(contentText=segment.text))
					)
				else:
					logger.debug(f"Deleted-text marker at column {column} on line {editorLine} exceeds live length {liveLength}; dropped.")

		bundle.add(AnnotationCategory.WHOLE_LINE_MODIFIED, Annotation(EditorRange.onLine(editorLine, 0, 0)))

	def _projectPureAddition(
		self: 'AnnotationProjector',
		bundle: AnnotationBundle,
		editorLine: int,
		lineTextLookup: LineTextLookup
	) -> None:
		bundle.add(AnnotationCategory.WHOLE_LINE_ADDED, Annotation(EditorRange.onLine(editorLine, 0, 0)))
		# Highlight what is on screen now, which may differ from the diff snapshot.
		liveText = _safeLookup(lineTextLookup, editorLine)
		if liveText:
			bundle.add(AnnotationCategory.INSERTED_TEXT, Annotation(EditorRange.onLine(editorLine, 0, len(liveText))))

	def _projectPureDeletion(
		self: 'AnnotationProjector',
		bundle: AnnotationBundle,
		oldLineNumber: int,
		content: str,
		editorLine: int,
		lineCount: int
	) -> None:
		attachLine: int = editorLine - 1
		if attachLine < 0:
			if lineCount <= 0:
				logger.warning(f"Cannot attach deleted line {oldLineNumber} to an empty document; dropped.")
				return
			logger.debug(f"Deleted line {oldLineNumber} is at the start of the file; attaching to line 0.")
			attachLine = 0
		elif attachLine >= lineCount:
			logger.warning(f"Deleted line {oldLineNumber} would attach to line {attachLine}, past the end of the document ({lineCount} lines); dropped.")
			return

		displayText = DELETED_LINE_FORMAT.format(lineNumber=oldLineNumber, content=content)
		bundle.deletedLineGhosts.append(DeletedLineGhost(attachAfterEditorLine=attachLine, displayText=displayText))


def _safeLookup(lineTextLookup: LineTextLookup, editorLine: int) -> Optional[str]:
	try:
		return lineTextLookup(editorLine)
	except (IndexError, KeyError) as e:
		logger.debug(f"No live text for line {editorLine}: {e}")
		return None

# --- END: core/annotation_projector.py ---
