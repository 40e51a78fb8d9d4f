# --- START: core/diff_parser.py ---
# core/diff_parser.py
"""
Parses unified diff text (as produced by `git diff` or `difflib.unified_diff`)
into an ordered list of hunks made of typed line records.

Only single-file diffs are expected. File-level preamble (`diff --git`, `index`,
`---`, `+++`) appears before the first hunk header and is skipped. Lines that are
neither hunk headers nor `+`/`-`/space body lines are ignored, which also covers
`\\ No newline at end of file` markers and header lines with non-numeric groups.
"""

import logging
import re
from typing import List, Optional

from .models import Hunk, LineRecord, LineType

logger: logging.Logger = logging.getLogger(__name__)

# Count groups are optional; an empty or missing count means 1.
HUNK_HEADER_REGEX: re.Pattern = re.compile(r'^@@ -(\d+)(?:,(\d*))? \+(\d+)(?:,(\d*))? @@')

_LINE_TYPE_BY_MARKER = {
	'+': LineType.ADDED,
	'-': LineType.REMOVED,
	' ': LineType.UNCHANGED,
}


def _parseCount(group: Optional[str]) -> int:
	return int(group) if group else 1


def parseDiff(diffText: Optional[str]) -> List[Hunk]:
	"""
	Converts unified diff text into hunks.

	Args:
		diffText (Optional[str]): Raw diff output. Empty or None yields no hunks.

	Returns:
		List[Hunk]: Hunks in the order they appear in the diff.
	"""
	hunks: List[Hunk] = []
	if not diffText:
		return hunks

	currentHunk: Optional[Hunk] = None
	skippedLines: int = 0

	for line in diffText.split('\n'):
		headerMatch = HUNK_HEADER_REGEX.match(line)
		if headerMatch:
			if currentHunk is not None:
				hunks.append(currentHunk)
			oldStart, oldCount, newStart, newCount = headerMatch.groups()
			currentHunk = Hunk(
				oldStart=int(oldStart),
				oldCount=_parseCount(oldCount),
				newStart=int(newStart),
				newCount=_parseCount(newCount),
			)
			continue

		if currentHunk is None:
			# Preamble before the first hunk.
			continue

		lineType: Optional[LineType] = _LINE_TYPE_BY_MARKER.get(line[:1])
		if lineType is None:
			skippedLines += 1
			continue
		currentHunk.lines.append(LineRecord(type=lineType, content=line[1:]))

	if currentHunk is not None:
		hunks.append(currentHunk)

	logger.debug(f"Parsed {len(hunks)} hunk(s) from diff text ({skippedLines} unrecognised line(s) skipped inside hunks).")
	return hunks

# --- END: core/diff_parser.py ---
