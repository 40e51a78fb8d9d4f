# --- START: core/exceptions.py ---
# core/exceptions.py
"""
Defines custom exception classes for specific error conditions within the application.
The diff-to-annotation core never raises these to its callers; they are used by the
collaborators around it (configuration, Git access, file handling) so that the
pipeline and the GUI can tell expected failures apart from programming errors.
"""


class BaseApplicationError(Exception):
	"""
	Base class for all custom application-specific exceptions.
	Provides a common ancestor for catching application-related errors.
	"""
	def __init__(self: 'BaseApplicationError', message: str = "An application error occurred.") -> None:
		"""
		Initialises the BaseApplicationError.

		Args:
			message (str): A descriptive message for the error.
		"""
		super().__init__(message)


class ConfigurationError(BaseApplicationError):
	"""
	Raised for errors encountered during loading, parsing, or accessing
	configuration settings (e.g., unreadable .ini file, invalid colour values).
	"""
	def __init__(self: 'ConfigurationError', message: str = "Configuration error.") -> None:
		super().__init__(message)


class GitServiceError(BaseApplicationError):
	"""
	Raised when the version-control collaborator cannot answer a question about a file:
	a failing `git` command, a corrupt repository, or an unreadable committed blob.
	The diff pipeline converts this into "nothing to annotate".
	"""
	def __init__(self: 'GitServiceError', message: str = "Git interaction error.") -> None:
		super().__init__(message)


class FileProcessingError(BaseApplicationError):
	"""
	Raised for errors related to reading or writing the files opened in the editor
	(permission denied, undecodable content, missing file).
	"""
	def __init__(self: 'FileProcessingError', message: str = "File processing error.") -> None:
		super().__init__(message)

# --- END: core/exceptions.py ---
