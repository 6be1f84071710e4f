from typing import TYPE_CHECKING

# Заглушки типов для ленивых импортов
if TYPE_CHECKING:
	from .browser_connection import BrowserConnection
	from .isolated_context import CDPIsolatedStyleContext
	from .session import ExtractionSession


# CDP-компоненты тянут cdp_use и httpx, грузим их по требованию
_LAZY_IMPORTS = {
	'BrowserConnection': ('.browser_connection', 'BrowserConnection'),
	'CDPIsolatedStyleContext': ('.isolated_context', 'CDPIsolatedStyleContext'),
	'ExtractionSession': ('.session', 'ExtractionSession'),
}


def __getattr__(name: str):
	"""Механизм ленивой загрузки компонентов сессии."""
	if name not in _LAZY_IMPORTS:
		raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

	module_path, attr_name = _LAZY_IMPORTS[name]
	full_module_path = f'page_cloner.session{module_path}'
	try:
		from importlib import import_module

		module = import_module(full_module_path)
		attr = getattr(module, attr_name)
		# Кешируем импортированный атрибут в глобальных переменных модуля
		globals()[name] = attr
		return attr
	except ImportError as e:
		raise ImportError(f'Failed to import {name} from {full_module_path}: {e}') from e


__all__ = [
	'BrowserConnection',
	'CDPIsolatedStyleContext',
	'ExtractionSession',
]
