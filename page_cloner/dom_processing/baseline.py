"""
Базовые (дефолтные) стили тегов.

Значения считываются в изолированном контексте рендеринга без стилей документа:
элемент тега создаётся в пустом документе, и его вычисленный стиль служит точкой
отсчёта для сравнения.
"""

import logging
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from page_cloner.dom_processing.design_properties import DESIGN_PROPERTIES
from page_cloner.dom_processing.models import StyleMap

logger = logging.getLogger(__name__)


@runtime_checkable
class IsolatedStyleContext(Protocol):
	"""Изолированная поверхность рендеринга, которая знает только дефолты движка."""

	async def ready(self) -> None: ...

	async def prepare(self, tag_names: Iterable[str], properties: list[str]) -> None: ...

	def read_defaults(self, tag_name: str, properties: list[str]) -> dict[str, str] | None:
		"""Вычисленный стиль свежесозданного элемента тега или None, если контекст не может ответить."""
		...

	async def close(self) -> None: ...


class BaselineStyleResolver:
	"""Кэш дефолтных стилей по тегам в рамках одной сессии извлечения."""

	def __init__(self, context: IsolatedStyleContext | None, properties: list[str] | None = None):
		self._context = context
		self._properties = list(properties or DESIGN_PROPERTIES)
		self._cache: dict[str, StyleMap] = {}
		self._ready = False

	@property
	def is_ready(self) -> bool:
		return self._ready

	@property
	def cached_tags(self) -> list[str]:
		return list(self._cache)

	async def start(self) -> None:
		"""Дождаться готовности изолированного контекста; при ошибке работать без дефолтов."""
		if self._context is None:
			logger.debug('No isolated style context, baseline defaults disabled')
			return
		try:
			await self._context.ready()
		except Exception as e:
			logger.debug(f'Isolated style context failed to start, baseline defaults disabled: {type(e).__name__}: {e}')
			await self._discard_context()
			return
		self._ready = True

	async def prepare(self, tag_names: Iterable[str]) -> None:
		"""Дать контексту заранее отрендерить теги, которые встретятся при обходе."""
		if not self._ready or self._context is None:
			return
		pending = sorted({tag.lower() for tag in tag_names if tag.upper() not in self._cache})
		if not pending:
			return
		try:
			await self._context.prepare(pending, self._properties)
		except Exception as e:
			# Непосчитанные теги остаются без дефолтов
			logger.debug(f'Failed to prepare defaults for {len(pending)} tags: {type(e).__name__}: {e}')

	def resolve_defaults(self, tag_name: str) -> StyleMap:
		cache_key = tag_name.upper()
		cached = self._cache.get(cache_key)
		if cached is not None:
			return cached

		if not self._ready or self._context is None:
			return {}

		try:
			values = self._context.read_defaults(tag_name.lower(), self._properties)
		except Exception as e:
			logger.debug(f'Failed to read defaults for <{tag_name.lower()}>: {type(e).__name__}: {e}')
			return {}

		if values is None:
			return {}

		defaults = {prop: values.get(prop, '') for prop in self._properties}
		self._cache[cache_key] = defaults
		return defaults

	async def close(self) -> None:
		"""Освободить изолированный контекст и очистить кэш."""
		self._cache.clear()
		self._ready = False
		await self._discard_context()

	async def _discard_context(self) -> None:
		context, self._context = self._context, None
		if context is None:
			return
		try:
			await context.close()
		except Exception as e:
			logger.debug(f'Error closing isolated style context: {type(e).__name__}: {e}')
