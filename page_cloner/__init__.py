"""Извлечение компактного описания отрендеренной страницы с подсказками utility-классов"""

import os
from typing import TYPE_CHECKING

from page_cloner.logging_config import setup_logging

# Setup logging
if os.environ.get('PAGE_CLONER_SETUP_LOGGING', 'true').lower() != 'false':
	from page_cloner.config import CONFIG

	debug_log_file = getattr(CONFIG, 'PAGE_CLONER_DEBUG_LOG_FILE', None)
	info_log_file = getattr(CONFIG, 'PAGE_CLONER_INFO_LOG_FILE', None)
	logger = setup_logging(debug_log_file=debug_log_file, info_log_file=info_log_file)
else:
	import logging

	logger = logging.getLogger('page_cloner')

# Типы для lazy imports
if TYPE_CHECKING:
	from page_cloner.dom_processing.manager import PageCloneService
	from page_cloner.dom_processing.models import (
		ElementCloneResult,
		ExtractedNode,
		ExtractionOptions,
		PageCloneResult,
	)
	from page_cloner.dom_processing.tailwind.mapper import to_classes
	from page_cloner.session import BrowserConnection, ExtractionSession

# Lazy imports mapping
_LAZY_IMPORTS = {
	'PageCloneService': ('page_cloner.dom_processing.manager', 'PageCloneService'),
	'ExtractionOptions': ('page_cloner.dom_processing.models', 'ExtractionOptions'),
	'ExtractedNode': ('page_cloner.dom_processing.models', 'ExtractedNode'),
	'PageCloneResult': ('page_cloner.dom_processing.models', 'PageCloneResult'),
	'ElementCloneResult': ('page_cloner.dom_processing.models', 'ElementCloneResult'),
	'BrowserConnection': ('page_cloner.session', 'BrowserConnection'),
	'ExtractionSession': ('page_cloner.session', 'ExtractionSession'),
	'to_classes': ('page_cloner.dom_processing.tailwind.mapper', 'to_classes'),
}


def __getattr__(name: str):
	"""Lazy import mechanism."""
	if name in _LAZY_IMPORTS:
		module_path, attr_name = _LAZY_IMPORTS[name]
		try:
			from importlib import import_module

			module = import_module(module_path)
			attr = getattr(module, attr_name)
			globals()[name] = attr
			return attr
		except ImportError as e:
			raise ImportError(f'Failed to import {name} from {module_path}: {e}') from e
	raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
	'BrowserConnection',
	'ElementCloneResult',
	'ExtractedNode',
	'ExtractionOptions',
	'ExtractionSession',
	'PageCloneResult',
	'PageCloneService',
	'to_classes',
]
