# --- START: gui/decoration_manager.py ---
# gui/decoration_manager.py
"""
Converts annotation bundles into paint descriptors for editor widgets and keeps track
of which editors currently show inline diff decorations.

The descriptors are plain data so that the conversion can be exercised without a
display; InlineDiffEditor (gui/diff_editor.py) turns them into Qt extra selections
and painted ghost text. An editor is any object with `setDiffDecorations(decorations)`
and `clearDiffDecorations()`.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.decoration_style import DecorationStyle
from core.models import AnnotationBundle, AnnotationCategory, EditorRange

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineDecoration:
	"""Whole-line border drawn in the left margin of `line`."""
	line: int
	borderColor: str
	borderWidth: int


@dataclass(frozen=True)
class TextDecoration:
	range: EditorRange
	backgroundColor: str
	borderColor: str


@dataclass(frozen=True)
class GhostTextDecoration:
	"""
	Text painted after the content of `line`.

	`column` is set for deleted-text markers, which also get a caret-style marker at
	that column; it is None for deleted-line ghosts.
	"""
	line: int
	text: str
	color: str
	backgroundColor: str
	marginChars: int
	column: Optional[int] = None
	strikeOut: bool = False


@dataclass
class EditorDecorations:
	lineDecorations: List[LineDecoration] = field(default_factory=list)
	textDecorations: List[TextDecoration] = field(default_factory=list)
	ghostTexts: List[GhostTextDecoration] = field(default_factory=list)

	@property
	def isEmpty(self: 'EditorDecorations') -> bool:
		return not (self.lineDecorations or self.textDecorations or self.ghostTexts)


def buildEditorDecorations(bundle: AnnotationBundle, style: DecorationStyle) -> EditorDecorations:
	"""
	Applies `style` to every annotation of `bundle`.

	Ghost texts keep bundle order: deleted-text markers first (in line order), then
	deleted-line ghosts, so that several ghosts on one line are painted left to right
	in the order the deletions appear in the diff.
	"""
	decorations = EditorDecorations()

	for annotation in bundle.get(AnnotationCategory.WHOLE_LINE_ADDED):
		decorations.lineDecorations.append(LineDecoration(annotation.range.start.line, style.addedLineBorder, style.borderWidth))
	for annotation in bundle.get(AnnotationCategory.WHOLE_LINE_MODIFIED):
		decorations.lineDecorations.append(LineDecoration(annotation.range.start.line, style.modifiedLineBorder, style.borderWidth))

	for annotation in bundle.get(AnnotationCategory.INSERTED_TEXT):
		if annotation.range.isEmpty:
			continue
		decorations.textDecorations.append(TextDecoration(annotation.range, style.addedTextBackground, style.addedTextBorder))

	for annotation in bundle.get(AnnotationCategory.DELETED_TEXT_MARKER):
		if annotation.renderHint is None:
			continue
		decorations.ghostTexts.append(GhostTextDecoration(
			line=annotation.range.start.line,
			text=annotation.renderHint.contentText,
			color=style.deletedTextColor,
			backgroundColor=style.deletedTextBackground,
			marginChars=1,
			column=annotation.range.start.column,
			strikeOut=True
		))

	for ghost in bundle.deletedLineGhosts:
		decorations.ghostTexts.append(GhostTextDecoration(
			line=ghost.attachAfterEditorLine,
			text=ghost.displayText,
			color=style.deletedLineColor,
			backgroundColor=style.deletedLineBackground,
			marginChars=style.ghostMarginChars
		))

	return decorations


class DecorationManager:
	"""
	Applies decorations to editors and remembers what each editor shows.

	The map is keyed by editor object. An entry is created on the first apply for an
	editor and removed when that editor is cleared (including on tab close). Applying
	always retracts the editor's previous decorations first.
	"""

	def __init__(self: 'DecorationManager', style: Optional[DecorationStyle] = None) -> None:
		self._style: DecorationStyle = style or DecorationStyle()
		self._activeDecorations: Dict[Any, EditorDecorations] = {}

	@property
	def style(self: 'DecorationManager') -> DecorationStyle:
		return self._style

	def setStyle(self: 'DecorationManager', style: DecorationStyle) -> None:
		"""Changes the style used by subsequent applyDecorations calls."""
		self._style = style

	def applyDecorations(self: 'DecorationManager', editor: Any, bundle: AnnotationBundle) -> EditorDecorations:
		self.clearDecorations(editor)
		decorations = buildEditorDecorations(bundle, self._style)
		editor.setDiffDecorations(decorations)
		self._activeDecorations[editor] = decorations
		logger.debug(f"Applied {len(decorations.lineDecorations)} line, {len(decorations.textDecorations)} text and {len(decorations.ghostTexts)} ghost decoration(s).")
		return decorations

	def clearDecorations(self: 'DecorationManager', editor: Any) -> None:
		# Editors without a tracked entry are cleared too, in case they were decorated directly.
		self._activeDecorations.pop(editor, None)
		editor.clearDiffDecorations()

	def clearAllDecorations(self: 'DecorationManager') -> None:
		for editor in list(self._activeDecorations.keys()):
			self.clearDecorations(editor)
		self._activeDecorations.clear()

	def forgetEditor(self: 'DecorationManager', editor: Any) -> None:
		"""Drops tracking for an editor that is being destroyed, without touching the widget."""
		self._activeDecorations.pop(editor, None)

	def hasDecorations(self: 'DecorationManager', editor: Any) -> bool:
		return editor in self._activeDecorations

	def activeDecorations(self: 'DecorationManager', editor: Any) -> Optional[EditorDecorations]:
		return self._activeDecorations.get(editor)

# --- END: gui/decoration_manager.py ---
