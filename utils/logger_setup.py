# --- START: utils/logger_setup.py ---
# utils/logger_setup.py
"""
Provides a centralised function for configuring the application's logging system.
Sets up a console handler and a rotating file handler on the root logger, and can
re-apply levels and paths from the [Logging] section of the configuration.
"""

import logging
import sys
import os
from logging.handlers import RotatingFileHandler
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
	from core.config_manager import ConfigManager

DEFAULT_LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s'
DEFAULT_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
DEFAULT_LOG_FILE_NAME: str = 'inline_diff.log'
DEFAULT_LOG_DIR: str = 'logs'


def _levelFromName(levelName: str, default: int) -> int:
	level = logging.getLevelName(str(levelName).upper())
	return level if isinstance(level, int) else default


def setupLogging(
	logLevel: int = logging.INFO,
	logToConsole: bool = True,
	logToFile: bool = True,
	logFileName: str = DEFAULT_LOG_FILE_NAME,
	logFileLevel: int = logging.DEBUG,
	logDir: str = DEFAULT_LOG_DIR,
	maxBytes: int = 10*1024*1024, # 10 MB
	backupCount: int = 5,
	logFormat: str = DEFAULT_LOG_FORMAT,
	dateFormat: str = DEFAULT_DATE_FORMAT
) -> logging.Logger:
	"""
	Configures the root logger for the application.

	Existing root handlers are removed first, so calling this again (e.g. after the
	configuration file has been read) replaces the previous setup instead of
	duplicating output. If the log file cannot be opened, logging continues on the
	console only.

	Args:
		logLevel (int): Minimum level for the root logger.
		logToConsole (bool): Whether to log to stderr.
		logToFile (bool): Whether to log to a rotating file.
		logFileName (str): Name of the log file inside `logDir`.
		logFileLevel (int): Minimum level for the file handler.
		logDir (str): Directory for the log file (created if needed).
		maxBytes (int): Size at which the log file rotates.
		backupCount (int): Number of rotated files to keep.
		logFormat (str): Format string for all handlers.
		dateFormat (str): Date format for all handlers.

	Returns:
		logging.Logger: The configured root logger.
	"""
	logHandlers: List[logging.Handler] = []
	formatter: logging.Formatter = logging.Formatter(logFormat, datefmt=dateFormat)

	if logToConsole:
		consoleHandler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
		consoleHandler.setFormatter(formatter)
		consoleHandler.setLevel(logLevel)
		logHandlers.append(consoleHandler)

	fileError: str = ''
	if logToFile:
		logFilePath: str = os.path.join(os.path.abspath(logDir), logFileName)
		try:
			os.makedirs(os.path.dirname(logFilePath), exist_ok=True)
			fileHandler: RotatingFileHandler = RotatingFileHandler(
				logFilePath,
				maxBytes=maxBytes,
				backupCount=backupCount,
				encoding='utf-8'
			)
			fileHandler.setFormatter(formatter)
			fileHandler.setLevel(logFileLevel)
			logHandlers.append(fileHandler)
		except OSError as e:
			fileError = f"Failed to configure file logging to '{logFilePath}': {e}"
			print(f"ERROR: {fileError}", file=sys.stderr)

	rootLogger: logging.Logger = logging.getLogger()
	# The file handler filters on its own level; the root must let its records through.
	rootLogger.setLevel(min([logLevel] + ([logFileLevel] if logToFile and not fileError else [])))
	for handler in rootLogger.handlers[:]:
		rootLogger.removeHandler(handler)
	for handler in logHandlers:
		rootLogger.addHandler(handler)

	if fileError:
		rootLogger.error(fileError)
	if logHandlers:
		rootLogger.info(f"Logging initialised (Console: {logToConsole} at {logging.getLevelName(logLevel)}, File: {logToFile and not fileError} at {logging.getLevelName(logFileLevel)} in '{os.path.join(logDir, logFileName)}').")
	else:
		print("WARNING: Logging initialisation completed but no handlers were configured.", file=sys.stderr)

	return rootLogger


def configureLoggingFromConfig(configManager: 'ConfigManager') -> logging.Logger:
	"""Re-runs setupLogging with the values from the [Logging] section."""
	logLevel = _levelFromName(configManager.getConfigValue('Logging', 'LogLevel', fallback='INFO'), logging.INFO)
	fileLogLevel = _levelFromName(configManager.getConfigValue('Logging', 'FileLogLevel', fallback='DEBUG'), logging.DEBUG)
	return setupLogging(
		logLevel=logLevel,
		logToConsole=True,
		logToFile=configManager.getConfigValueBool('Logging', 'LogToFile', fallback=True),
		logFileName=configManager.getConfigValue('Logging', 'LogFileName', fallback=DEFAULT_LOG_FILE_NAME),
		logFileLevel=fileLogLevel,
		logDir=configManager.getConfigValue('Logging', 'LogDirectory', fallback=DEFAULT_LOG_DIR)
	)

# --- END: utils/logger_setup.py ---
