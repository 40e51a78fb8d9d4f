# --- START: core/diff_pipeline.py ---
# core/diff_pipeline.py
"""
Orchestrates one recomputation: fetch diff text from Git, parse it into hunks and
project the hunks onto the live document.

Fetching is the slow, failure-prone step and is split out (fetchDiffText) so that the
GUI can run it on a worker thread and project the result on the GUI thread against the
document as it is when the result arrives. Any failure of the Git collaborator is
logged and turned into "nothing to annotate".
"""

import logging
from typing import Optional

from .annotation_projector import AnnotationProjector, LineTextLookup
from .diff_parser import parseDiff
from .exceptions import GitServiceError
from .git_service import GitService
from .models import AnnotationBundle

logger: logging.Logger = logging.getLogger(__name__)


class InlineDiffPipeline:
	"""
	Fetch, parse and project for a single editor document.

	Args:
		gitService (Optional[GitService]): Version-control collaborator.
		projector (Optional[AnnotationProjector]): Annotation projector.
		compareLiveBuffer (bool): Diff the editor's text instead of the file on disk.
	"""

	def __init__(
		self: 'InlineDiffPipeline',
		gitService: Optional[GitService] = None,
		projector: Optional[AnnotationProjector] = None,
		compareLiveBuffer: bool = True
	) -> None:
		self._gitService: GitService = gitService or GitService()
		self._projector: AnnotationProjector = projector or AnnotationProjector()
		self._compareLiveBuffer: bool = compareLiveBuffer

	@property
	def compareLiveBuffer(self: 'InlineDiffPipeline') -> bool:
		return self._compareLiveBuffer

	def fetchDiffText(self: 'InlineDiffPipeline', filePath: str, workingText: Optional[str] = None) -> Optional[str]:
		"""
		Asks Git for the diff of `filePath`. Never raises.

		Args:
			filePath (str): File shown in the editor.
			workingText (Optional[str]): Live editor text, used only when comparing the live buffer.

		Returns:
			Optional[str]: Diff text, or None when there is nothing to annotate.
		"""
		try:
			if self._compareLiveBuffer and workingText is not None:
				return self._gitService.getDiffText(filePath, workingText=workingText) or None
			if not self._gitService.isFileModified(filePath):
				logger.debug(f"'{filePath}' is not modified; nothing to annotate.")
				return None
			return self._gitService.getDiffText(filePath) or None
		except GitServiceError as e:
			logger.warning(f"Could not obtain diff for '{filePath}': {e}")
			return None
		except Exception as e:
			logger.error(f"Unexpected error obtaining diff for '{filePath}': {e}", exc_info=True)
			return None

	def buildAnnotations(
		self: 'InlineDiffPipeline',
		diffText: Optional[str],
		lineCount: int,
		lineTextLookup: LineTextLookup
	) -> AnnotationBundle:
		"""Parses `diffText` and projects it onto the current document snapshot."""
		hunks = parseDiff(diffText)
		if not hunks:
			return AnnotationBundle()
		return self._projector.project(hunks, lineCount, lineTextLookup)

	def computeAnnotations(
		self: 'InlineDiffPipeline',
		filePath: str,
		lineCount: int,
		lineTextLookup: LineTextLookup,
		workingText: Optional[str] = None
	) -> AnnotationBundle:
		"""Fetches, parses and projects in one call (synchronous)."""
		diffText = self.fetchDiffText(filePath, workingText)
		return self.buildAnnotations(diffText, lineCount, lineTextLookup)

# --- END: core/diff_pipeline.py ---
