# --- START: core/char_differ.py ---
# core/char_differ.py
"""
Character-level comparison of an old and a new version of a single line.

The common prefix and suffix are split off first; the remaining middle part is
handed to difflib.SequenceMatcher (with autojunk disabled so that repeated
characters such as indentation are not treated as junk). Replacements are
reported as a deleted segment followed by an inserted segment.
"""

import difflib
from typing import List

from .models import CharSegment, SegmentKind


def _appendSegment(segments: List[CharSegment], kind: SegmentKind, text: str) -> None:
	"""Appends a segment, merging it into the previous one when the kinds match."""
	if not text:
		return
	if segments and segments[-1].kind is kind:
		segments[-1] = CharSegment(kind, segments[-1].text + text)
	else:
		segments.append(CharSegment(kind, text))


def _commonPrefixLength(oldLine: str, newLine: str) -> int:
	limit = min(len(oldLine), len(newLine))
	index = 0
	while index < limit and oldLine[index] == newLine[index]:
		index += 1
	return index


def _commonSuffixLength(oldLine: str, newLine: str, prefixLength: int) -> int:
	# The suffix may not overlap the prefix on either side.
	limit = min(len(oldLine), len(newLine)) - prefixLength
	length = 0
	while length < limit and oldLine[-1 - length] == newLine[-1 - length]:
		length += 1
	return length


def diffChars(oldLine: str, newLine: str) -> List[CharSegment]:
	"""
	Computes the ordered edit segments that turn `oldLine` into `newLine`.

	Concatenating the equal and deleted segments gives back `oldLine`; concatenating
	the equal and inserted segments gives back `newLine`. Adjacent segments never
	share a kind.

	Args:
		oldLine (str): Line content before the edit.
		newLine (str): Line content after the edit.

	Returns:
		List[CharSegment]: Segments in line order. Empty only when both lines are empty.
	"""
	segments: List[CharSegment] = []
	if oldLine == newLine:
		_appendSegment(segments, SegmentKind.EQUAL, oldLine)
		return segments

	prefixLength = _commonPrefixLength(oldLine, newLine)
	suffixLength = _commonSuffixLength(oldLine, newLine, prefixLength)
	oldMiddle = oldLine[prefixLength:len(oldLine) - suffixLength]
	newMiddle = newLine[prefixLength:len(newLine) - suffixLength]

	_appendSegment(segments, SegmentKind.EQUAL, oldLine[:prefixLength])

	matcher = difflib.SequenceMatcher(None, oldMiddle, newMiddle, autojunk=False)
	for tag, i1, i2, j1, j2 in matcher.get_opcodes():
		if tag == 'equal':
			_appendSegment(segments, SegmentKind.EQUAL, oldMiddle[i1:i2])
		elif tag == 'delete':
			_appendSegment(segments, SegmentKind.DELETED, oldMiddle[i1:i2])
		elif tag == 'insert':
			_appendSegment(segments, SegmentKind.INSERTED, newMiddle[j1:j2])
		elif tag == 'replace':
			_appendSegment(segments, SegmentKind.DELETED, oldMiddle[i1:i2])
			_appendSegment(segments, SegmentKind.INSERTED, newMiddle[j1:j2])

	if suffixLength:
		_appendSegment(segments, SegmentKind.EQUAL, oldLine[len(oldLine) - suffixLength:])
	return segments

# --- END: core/char_differ.py ---
