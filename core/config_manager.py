# --- START: core/config_manager.py ---
# core/config_manager.py
"""
Manages loading and accessing application configuration.
Environment variables may be supplied through a .env file (e.g. GIT_PYTHON_GIT_EXECUTABLE
for GitPython); viewer settings such as debounce delay, decoration colours and logging
live in an .ini file. Values changed at runtime can be written back to the .ini file.
"""

import os
import re
import configparser
import logging
from typing import Optional, Any, List

from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger: logging.Logger = logging.getLogger(__name__)

TRUE_VALUES: List[str] = ['true', 'yes', 'on', '1']
FALSE_VALUES: List[str] = ['false', 'no', 'off', '0']
INLINE_COMMENT_REGEX: re.Pattern = re.compile(r'\s+[#;].*$')


class ConfigManager:
	"""
	Handles loading and providing access to configuration parameters.
	Every getter accepts a fallback, so a missing file simply means "use defaults".
	"""
	_config: configparser.ConfigParser
	_envLoaded: bool
	_configLoaded: bool
	_configLoadError: Optional[Exception]
	_envFilePath: Optional[str]
	_configFilePath: Optional[str]

	def __init__(self: 'ConfigManager', configFilePath: Optional[str] = 'config.ini', envFilePath: Optional[str] = '.env') -> None:
		"""
		Initialises the ConfigManager.

		Args:
			configFilePath (Optional[str]): Path to the .ini configuration file.
			envFilePath (Optional[str]): Path to the .env file for environment variables.
		"""
		self._config = configparser.ConfigParser(interpolation=None)
		self._envLoaded = False
		self._configLoaded = False
		self._configLoadError = None
		self._envFilePath = envFilePath
		self._configFilePath = configFilePath
		logger.debug(f"ConfigManager initialised with config file: '{configFilePath}', env file: '{envFilePath}'")

	def loadEnv(self: 'ConfigManager', override: bool = False) -> bool:
		"""
		Loads environment variables from the .env file, if one is configured and present.

		Args:
			override (bool): Whether values from the file replace variables already set.

		Returns:
			bool: True if the file was found and loaded.

		Raises:
			ConfigurationError: If the file exists but cannot be processed.
		"""
		if not self._envFilePath:
			logger.info("No .env file path specified. Skipping loading from .env file.")
			return False
		try:
			if not os.path.exists(self._envFilePath):
				logger.debug(f".env file not found at '{self._envFilePath}'. Skipping.")
				return False
			logger.info(f"Loading environment variables from: {self._envFilePath}")
			self._envLoaded = load_dotenv(dotenv_path=self._envFilePath, override=override)
			if not self._envLoaded:
				logger.warning(f".env file found at '{self._envFilePath}' but no variables were loaded.")
			return self._envLoaded
		except Exception as e:
			logger.error(f"Failed to load .env file from '{self._envFilePath}': {e}", exc_info=True)
			raise ConfigurationError(f"Error processing .env file '{self._envFilePath}': {e}") from e

	def loadConfig(self: 'ConfigManager') -> None:
		"""
		Loads settings from the .ini file. A missing file is not an error.

		Raises:
			ConfigurationError: If the file exists but cannot be read or parsed.
		"""
		self._configLoaded = False
		self._configLoadError = None

		if not self._configFilePath:
			logger.info("No configuration file path specified. Using built-in defaults.")
			return
		if not os.path.exists(self._configFilePath):
			logger.warning(f"Configuration file not found: {self._configFilePath}. Using built-in defaults.")
			return

		try:
			self._config = configparser.ConfigParser(interpolation=None)
			readFiles: List[str] = self._config.read(self._configFilePath, encoding='utf-8')
			if not readFiles:
				raise ConfigurationError(f"Config file '{self._configFilePath}' exists but could not be read.")
			self._configLoaded = True
			logger.info(f"Loaded configuration from {self._configFilePath} ({len(self._config.sections())} section(s)).")
		except ConfigurationError as e:
			logger.error(str(e))
			self._configLoadError = e
			raise
		except (configparser.Error, UnicodeDecodeError) as e:
			logger.error(f"Failed to parse configuration file '{self._configFilePath}': {e}")
			self._configLoadError = e
			raise ConfigurationError(f"Error parsing config file '{self._configFilePath}': {e}") from e

	def reloadConfig(self: 'ConfigManager') -> None:
		"""Discards unsaved in-memory changes and reads the .ini file again."""
		logger.info(f"Reloading configuration from {self._configFilePath}...")
		self._config = configparser.ConfigParser(interpolation=None)
		self.loadConfig()

	def getEnvVar(self: 'ConfigManager', varName: str, defaultValue: Optional[str] = None, required: bool = False) -> Optional[str]:
		"""
		Retrieves an environment variable.

		Raises:
			ConfigurationError: If required=True and the variable is not set.
		"""
		value = os.getenv(varName)
		if value is None:
			if required:
				errMsg = f"Required environment variable '{varName}' is not set."
				logger.error(errMsg)
				raise ConfigurationError(errMsg)
			return defaultValue
		return value

	def getConfigValue(self: 'ConfigManager', section: str, key: str, fallback: Optional[Any] = None, required: bool = False) -> Optional[Any]:
		"""
		Retrieves a raw string value from the loaded configuration.

		Args:
			section (str): The section name in the .ini file.
			key (str): The key name within the section.
			fallback (Optional[Any]): Returned when the value is absent.
			required (bool): If True, an absent value raises instead of falling back.

		Returns:
			Optional[Any]: The value with inline comments stripped, or the fallback.

		Raises:
			ConfigurationError: If the value is required but absent, or if the file failed to load.
		"""
		if self._configLoadError is not None:
			raise ConfigurationError(f"Cannot retrieve config value '{section}/{key}'; configuration file '{self._configFilePath}' failed to load. Error: {self._configLoadError}") from self._configLoadError

		if not self._config.has_option(section, key):
			if required:
				errMsg = f"Required configuration value '{key}' not found in section '{section}'."
				logger.error(errMsg)
				raise ConfigurationError(errMsg)
			return fallback

		value: str = self._config.get(section, key, raw=True)
		# Inline comments need leading whitespace so that colour values like '#FF0000' survive.
		return INLINE_COMMENT_REGEX.sub('', value).strip()

	def getConfigValueInt(self: 'ConfigManager', section: str, key: str, fallback: Optional[int] = None, required: bool = False) -> Optional[int]:
		valueStr = self.getConfigValue(section, key, fallback=None, required=required)
		if valueStr is None or valueStr == '':
			return fallback
		try:
			return int(valueStr)
		except (ValueError, TypeError) as e:
			errMsg = f"Configuration value '{section}/{key}' ('{valueStr}') is not a valid integer."
			logger.error(errMsg)
			raise ConfigurationError(errMsg) from e

	def getConfigValueBool(self: 'ConfigManager', section: str, key: str, fallback: Optional[bool] = None, required: bool = False) -> Optional[bool]:
		valueStr = self.getConfigValue(section, key, fallback=None, required=required)
		if valueStr is None or valueStr == '':
			return fallback
		valueLower = valueStr.lower()
		if valueLower in TRUE_VALUES:
			return True
		if valueLower in FALSE_VALUES:
			return False
		errMsg = f"Configuration value '{section}/{key}' ('{valueStr}') is not a valid boolean (use 1/yes/true/on or 0/no/false/off)."
		logger.error(errMsg)
		raise ConfigurationError(errMsg)

	def setConfigValue(self: 'ConfigManager', section: str, key: str, value: str) -> None:
		"""
		Sets a value in memory only. Use saveConfig() to persist it.

		Raises:
			ConfigurationError: If the configuration failed to load earlier.
		"""
		if self._configLoadError is not None:
			errMsg = f"Cannot set configuration value: '{self._configFilePath}' failed to load. Error: {self._configLoadError}"
			logger.error(errMsg)
			raise ConfigurationError(errMsg) from self._configLoadError
		if not self._config.has_section(section):
			logger.debug(f"Adding new section '{section}' to in-memory configuration.")
			self._config.add_section(section)
		self._config.set(section, key, value)
		logger.debug(f"Set in-memory config value: [{section}] {key} = {value}")

	def saveConfig(self: 'ConfigManager') -> None:
		"""
		Writes the in-memory configuration back to the .ini file, creating its directory if needed.

		Raises:
			ConfigurationError: If no path is configured or the file cannot be written.
		"""
		if not self._configFilePath:
			errMsg = "Cannot save configuration: No configuration file path was specified during initialisation."
			logger.error(errMsg)
			raise ConfigurationError(errMsg)

		try:
			configDir = os.path.dirname(self._configFilePath)
			if configDir:
				os.makedirs(configDir, exist_ok=True)
			with open(self._configFilePath, 'w', encoding='utf-8') as configFile:
				self._config.write(configFile)
			self._configLoaded = True
			logger.info(f"Saved configuration to {self._configFilePath}")
		except OSError as e:
			errMsg = f"Failed to write configuration file '{self._configFilePath}': {e}"
			logger.error(errMsg, exc_info=True)
			raise ConfigurationError(errMsg) from e

	@property
	def isEnvLoaded(self: 'ConfigManager') -> bool:
		return self._envLoaded

	@property
	def isConfigLoaded(self: 'ConfigManager') -> bool:
		return self._configLoaded

	@property
	def configFilePath(self: 'ConfigManager') -> Optional[str]:
		return self._configFilePath

# --- END: core/config_manager.py ---
