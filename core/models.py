# --- START: core/models.py ---
# core/models.py
"""
Data model shared by the diff parser, the intra-line differ and the annotation projector.

All coordinates handed to the rendering side are 0-based editor coordinates with
half-open ranges. Hunk headers keep the 1-based numbering of the unified diff format.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class LineType(str, Enum):
	"""Kind of a line inside a hunk, derived from its one-character diff marker."""
	ADDED = 'added'
	REMOVED = 'removed'
	UNCHANGED = 'unchanged'


@dataclass(frozen=True)
class LineRecord:
	"""One line of a hunk. `content` excludes the diff marker."""
	type: LineType
	content: str


@dataclass
class Hunk:
	"""
	A contiguous block of a unified diff.

	Attributes:
		oldStart (int): 1-based line in the old file where the hunk begins.
		oldCount (int): Number of old-file lines spanned by the hunk.
		newStart (int): 1-based line in the new file where the hunk begins.
		newCount (int): Number of new-file lines spanned by the hunk.
		lines (List[LineRecord]): Typed line records in diff order.
	"""
	oldStart: int
	oldCount: int
	newStart: int
	newCount: int
	lines: List[LineRecord] = field(default_factory=list)

	def oldLines(self: 'Hunk') -> List[str]:
		"""Old-file side of the hunk (removed and unchanged records, in order)."""
		return [line.content for line in self.lines if line.type is not LineType.ADDED]

	def newLines(self: 'Hunk') -> List[str]:
		"""New-file side of the hunk (added and unchanged records, in order)."""
		return [line.content for line in self.lines if line.type is not LineType.REMOVED]


class SegmentKind(str, Enum):
	EQUAL = 'equal'
	INSERTED = 'inserted'
	DELETED = 'deleted'


@dataclass(frozen=True)
class CharSegment:
	"""A run of characters that is common to, added to, or removed from a line pair."""
	kind: SegmentKind
	text: str


@dataclass(frozen=True)
class EditorPosition:
	line: int
	column: int


@dataclass(frozen=True)
class EditorRange:
	"""Half-open range between two editor positions."""
	start: EditorPosition
	end: EditorPosition

	@classmethod
	def onLine(cls, line: int, startColumn: int, endColumn: int) -> 'EditorRange':
		return cls(EditorPosition(line, startColumn), EditorPosition(line, endColumn))

	@property
	def isEmpty(self: 'EditorRange') -> bool:
		return self.start == self.end


@dataclass(frozen=True)
class RenderHint:
	"""Payload for annotations that display text absent from the document."""
	contentText: str


@dataclass(frozen=True)
class Annotation:
	range: EditorRange
	renderHint: Optional[RenderHint] = None


@dataclass(frozen=True)
class DeletedLineGhost:
	"""A removed line shown after the content of the editor line it is attached to."""
	attachAfterEditorLine: int
	displayText: str


class AnnotationCategory(str, Enum):
	WHOLE_LINE_ADDED = 'wholeLineAdded'
	WHOLE_LINE_MODIFIED = 'wholeLineModified'
	INSERTED_TEXT = 'insertedText'
	DELETED_TEXT_MARKER = 'deletedTextMarker'


def _emptyAnnotationMap() -> Dict[AnnotationCategory, List[Annotation]]:
	return {category: [] for category in AnnotationCategory}


@dataclass
class AnnotationBundle:
	"""
	Everything the renderer needs for one render cycle of one editor.

	`annotations` always holds a (possibly empty) list for every category so that
	renderers can iterate categories without membership checks. Two bundles built
	from the same hunks and document snapshot compare equal.
	"""
	annotations: Dict[AnnotationCategory, List[Annotation]] = field(default_factory=_emptyAnnotationMap)
	deletedLineGhosts: List[DeletedLineGhost] = field(default_factory=list)

	def add(self: 'AnnotationBundle', category: AnnotationCategory, annotation: Annotation) -> None:
		self.annotations.setdefault(category, []).append(annotation)

	def get(self: 'AnnotationBundle', category: AnnotationCategory) -> List[Annotation]:
		return self.annotations.get(category, [])

	@property
	def isEmpty(self: 'AnnotationBundle') -> bool:
		return not self.deletedLineGhosts and not any(self.annotations.values())

	def summary(self: 'AnnotationBundle') -> str:
		"""Short `+added ~modified -deleted` line summary for status displays."""
		added = len(self.get(AnnotationCategory.WHOLE_LINE_ADDED))
		modified = len(self.get(AnnotationCategory.WHOLE_LINE_MODIFIED))
		deleted = len(self.deletedLineGhosts)
		return f"+{added} ~{modified} -{deleted}"

# --- END: core/models.py ---
