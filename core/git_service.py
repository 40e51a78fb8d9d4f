# --- START: core/git_service.py ---
# core/git_service.py
"""
Answers the two questions the inline diff needs from version control, using GitPython:
is a file modified relative to HEAD, and what is its unified diff against HEAD.

The diff can be taken either from the working copy on disk (`git diff HEAD`) or from
the text currently held by an editor, in which case the committed blob is compared
with the live buffer through difflib so that unsaved edits are annotated too.
"""

import difflib
import logging
import os
from typing import List, Optional

import git

from .exceptions import GitServiceError

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_LINES: int = 3
GIT_EXECUTABLE_ENV_VAR: str = 'GIT_PYTHON_GIT_EXECUTABLE'


def configureGitExecutable(gitExecutable: str) -> None:
	"""
	Points GitPython at a specific git binary. GitPython reads its environment
	variable only at import time, so values loaded later from .env are applied here.

	Raises:
		GitServiceError: If the executable cannot be used.
	"""
	try:
		git.refresh(gitExecutable)
	except ImportError as e:
		errMsg = f"Git executable '{gitExecutable}' is not usable: {e}"
		logger.error(errMsg)
		raise GitServiceError(errMsg) from e
	logger.info(f"Using git executable '{gitExecutable}'.")


class GitService:
	"""
	Thin wrapper around GitPython for per-file diff queries.

	Files outside any repository are reported as "not modified" / "no diff"
	rather than as errors. Failing git commands raise GitServiceError.
	"""

	def __init__(self: 'GitService', contextLines: int = DEFAULT_CONTEXT_LINES) -> None:
		self._contextLines: int = contextLines

	@property
	def contextLines(self: 'GitService') -> int:
		return self._contextLines

	def getRepository(self: 'GitService', filePath: str) -> Optional[git.Repo]:
		"""
		Finds the repository containing `filePath`, searching parent directories.

		Returns:
			Optional[git.Repo]: The repository, or None if the file is not inside one.
		"""
		directory: str = os.path.dirname(os.path.abspath(filePath))
		try:
			return git.Repo(directory, search_parent_directories=True)
		except (git.InvalidGitRepositoryError, git.NoSuchPathError):
			logger.debug(f"'{filePath}' is not inside a Git repository.")
			return None

	def _relativePath(self: 'GitService', repo: git.Repo, filePath: str) -> str:
		workingDir: str = os.path.realpath(repo.working_dir)
		return os.path.relpath(os.path.realpath(filePath), workingDir).replace(os.sep, '/')

	def isFileModified(self: 'GitService', filePath: str) -> bool:
		"""
		Checks whether the working copy of `filePath` differs from HEAD.
		Untracked files and files outside a repository are not "modified".

		Raises:
			GitServiceError: If the `git diff` command fails (e.g. no commit yet).
		"""
		repo = self.getRepository(filePath)
		if repo is None:
			return False
		relativePath = self._relativePath(repo, filePath)
		try:
			output: str = repo.git.diff('HEAD', '--name-only', '--', relativePath)
		except git.GitCommandError as e:
			stderrOutput: str = str(getattr(e, 'stderr', '') or '').strip()
			errMsg = f"Git command 'diff --name-only' failed for '{relativePath}': {stderrOutput or e}"
			logger.error(errMsg)
			raise GitServiceError(errMsg) from e
		isModified = bool(output.strip())
		logger.debug(f"'{relativePath}' modified relative to HEAD: {isModified}")
		return isModified

	def getDiffText(self: 'GitService', filePath: str, workingText: Optional[str] = None) -> Optional[str]:
		"""
		Produces the unified diff of `filePath` against HEAD.

		Args:
			filePath (str): Path of the file shown in the editor.
			workingText (Optional[str]): Live editor text. When None the file on disk is diffed.

		Returns:
			Optional[str]: Diff text (possibly empty when nothing changed), or None if the
						   file is outside a repository or not present in HEAD.

		Raises:
			GitServiceError: If a git command fails.
		"""
		repo = self.getRepository(filePath)
		if repo is None:
			return None
		relativePath = self._relativePath(repo, filePath)

		if workingText is None:
			try:
				return repo.git.diff('HEAD', '--no-color', '--no-ext-diff', f'--unified={self._contextLines}', '--', relativePath)
			except git.GitCommandError as e:
				stderrOutput: str = str(getattr(e, 'stderr', '') or '').strip()
				errMsg = f"Git command 'diff' failed for '{relativePath}': {stderrOutput or e}"
				logger.error(errMsg)
				raise GitServiceError(errMsg) from e

		committedText = self.readCommittedContent(repo, relativePath)
		if committedText is None:
			return None
		diffLines: List[str] = list(difflib.unified_diff(
			_splitDocumentLines(committedText),
			_splitDocumentLines(workingText),
			fromfile=f'a/{relativePath}',
			tofile=f'b/{relativePath}',
			n=self._contextLines,
			lineterm=''
		))
		return '\n'.join(diffLines)

	def readCommittedContent(self: 'GitService', repo: git.Repo, relativePath: str) -> Optional[str]:
		"""
		Reads the HEAD version of a file.

		Returns:
			Optional[str]: The committed text, or None if the path is not tracked in HEAD.

		Raises:
			GitServiceError: If HEAD cannot be resolved or the blob cannot be read.
		"""
		try:
			if not self._isTrackedInHead(repo, relativePath):
				logger.debug(f"'{relativePath}' is not present in HEAD.")
				return None
			return repo.git.show(f'HEAD:{relativePath}')
		except git.GitCommandError as e:
			stderrOutput: str = str(getattr(e, 'stderr', '') or '').strip()
			errMsg = f"Could not read committed content of '{relativePath}': {stderrOutput or e}"
			logger.error(errMsg)
			raise GitServiceError(errMsg) from e

	def _isTrackedInHead(self: 'GitService', repo: git.Repo, relativePath: str) -> bool:
		output: str = repo.git.ls_tree('--name-only', 'HEAD', '--', relativePath)
		return bool(output.strip())


def _splitDocumentLines(text: str) -> List[str]:
	"""
	Splits text into lines the way git and the editor count them: on '\\n' only, with
	a trailing '\\r' removed and a final newline treated as a terminator.
	str.splitlines() would also break on form feeds and Unicode separators.
	"""
	if not text:
		return []
	if text.endswith('\n'):
		text = text[:-1]
	return [line[:-1] if line.endswith('\r') else line for line in text.split('\n')]

# --- END: core/git_service.py ---
