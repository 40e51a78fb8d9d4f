# --- START: main.py ---
# main.py
"""
Main application entry point.
Initialises logging and configuration, opens the files given on the command line
and starts the Qt event loop.

Usage: python main.py [FILE ...]
"""
import sys
import logging
from typing import List, Optional

from PySide6.QtWidgets import QApplication, QMessageBox

from core.config_manager import ConfigManager
from core.exceptions import ConfigurationError, GitServiceError
from core.git_service import GIT_EXECUTABLE_ENV_VAR, configureGitExecutable
from gui.main_window import MainWindow
from utils.logger_setup import configureLoggingFromConfig, setupLogging

# --- Constants ---
CONFIG_FILE_PATH: str = 'config.ini'
ENV_FILE_PATH: str = '.env'
CONFIG_PATH_ENV_VAR: str = 'INLINE_DIFF_CONFIG'


def _showFatalError(title: str, message: str) -> None:
	app = QApplication.instance()
	if not app:
		app = QApplication(sys.argv)
	QMessageBox.critical(None, title, message)


def main(argv: Optional[List[str]] = None) -> int:
	"""Main application entry point. Returns the process exit code."""
	if argv is None:
		argv = sys.argv
	logger: logging.Logger = setupLogging(logToConsole=True, logToFile=False)
	logger.info("================ Application Starting ================")

	configManager: ConfigManager = ConfigManager(CONFIG_FILE_PATH, ENV_FILE_PATH)
	try:
		# .env may point at another config file or at the git executable.
		configManager.loadEnv()
		configPath = configManager.getEnvVar(CONFIG_PATH_ENV_VAR)
		if configPath:
			configManager = ConfigManager(configPath, ENV_FILE_PATH)
			configManager.loadEnv()
		configManager.loadConfig()
		logger = configureLoggingFromConfig(configManager)
		logger.info(f"Configuration loaded from '{configManager.configFilePath}'.")
		gitExecutable = configManager.getEnvVar(GIT_EXECUTABLE_ENV_VAR)
		if gitExecutable:
			configureGitExecutable(gitExecutable)
	except GitServiceError as e:
		errorMessage = f"Fatal Git Error: {e}\nCheck {GIT_EXECUTABLE_ENV_VAR} in '{ENV_FILE_PATH}'."
		logger.critical(errorMessage)
		_showFatalError("Git Error", errorMessage)
		return 1
	except ConfigurationError as e:
		errorMessage = f"Fatal Configuration Error: {e}\nPlease check your '{ENV_FILE_PATH}' and '{configManager.configFilePath}' files.\nApplication cannot continue."
		logger.critical(errorMessage, exc_info=True)
		_showFatalError("Configuration Error", errorMessage)
		return 1

	app: QApplication = QApplication.instance() or QApplication(argv)
	app.setApplicationName("Inline Working Diff")

	try:
		mainWindow: MainWindow = MainWindow(configManager)
		mainWindow.show()
		mainWindow.openFiles([arg for arg in argv[1:] if not arg.startswith('-')])
	except ConfigurationError as e:
		errorMessage = f"Invalid configuration: {e}"
		logger.critical(errorMessage, exc_info=True)
		QMessageBox.critical(None, "Configuration Error", errorMessage)
		return 1
	except Exception as e:
		errorMessage = f"Failed to initialise the main application window: {e}"
		logger.critical(errorMessage, exc_info=True)
		QMessageBox.critical(None, "GUI Initialisation Error", errorMessage)
		return 1

	logger.info("Main window displayed. Starting Qt event loop.")
	exitCode: int = app.exec()
	logger.info(f"Application finished with exit code: {exitCode}")
	return exitCode


if __name__ == "__main__":
	sys.exit(main(sys.argv))
# --- END: main.py ---
