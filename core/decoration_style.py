# --- START: core/decoration_style.py ---
# core/decoration_style.py
"""
Rendering policy for inline diff decorations.

The projector only says *what* changed and *where*; colours, border width and ghost
text spacing are chosen here and read from the [Decorations] section of the config
file. Colours are Qt-style hex strings: '#RRGGBB' or '#AARRGGBB'.
"""

import logging
import re
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from .exceptions import ConfigurationError

if TYPE_CHECKING:
	from .config_manager import ConfigManager

logger: logging.Logger = logging.getLogger(__name__)

DECORATIONS_SECTION: str = 'Decorations'
COLOUR_REGEX: re.Pattern = re.compile(r'^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')


@dataclass(frozen=True)
class DecorationStyle:
	addedLineBorder: str = '#6600FF00'
	modifiedLineBorder: str = '#80FFAA00'
	addedTextBackground: str = '#2600FF00'
	addedTextBorder: str = '#6600FF00'
	deletedTextColor: str = '#CCFF5050'
	deletedTextBackground: str = '#1AFF0000'
	deletedLineColor: str = '#B3C83232'
	deletedLineBackground: str = '#1AFF6464'
	borderWidth: int = 3
	ghostMarginChars: int = 3

	@classmethod
	def fromConfig(cls, configManager: 'ConfigManager') -> 'DecorationStyle':
		"""
		Builds a style from the [Decorations] section, using the defaults above for absent keys.
		Keys use the field names with an upper-case first letter (e.g. 'AddedLineBorder').

		Raises:
			ConfigurationError: If a colour is not a hex colour or a size is negative.
		"""
		values = {}
		for styleField in fields(cls):
			key = styleField.name[0].upper() + styleField.name[1:]
			if styleField.type in (int, 'int'):
				value = configManager.getConfigValueInt(DECORATIONS_SECTION, key, fallback=styleField.default)
				if value < 0:
					raise ConfigurationError(f"Decoration setting '{key}' must not be negative (got {value}).")
			else:
				value = configManager.getConfigValue(DECORATIONS_SECTION, key, fallback=styleField.default)
				if not COLOUR_REGEX.match(value):
					raise ConfigurationError(f"Decoration colour '{key}' ('{value}') is not a '#RRGGBB' or '#AARRGGBB' colour.")
			values[styleField.name] = value
		style = cls(**values)
		logger.debug(f"Loaded decoration style: {style}")
		return style

# --- END: core/decoration_style.py ---
