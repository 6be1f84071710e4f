"""
Изолированный контекст рендеринга на фоновой вкладке about:blank.

В пустом документе нет авторских стилей, поэтому вычисленный стиль свежесозданного
элемента равен дефолтам движка для этого тега. Теги считаются пачкой одним
Runtime.evaluate, дальше дефолты отдаются синхронно из таблицы.
"""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from page_cloner.interaction.page import Page

if TYPE_CHECKING:
	from cdp_use import CDPClient

logger = logging.getLogger(__name__)

COMPUTE_DEFAULTS_SCRIPT = """
(function(tagNames, properties) {
	const result = {};
	const host = document.body || document.documentElement;
	for (const tag of tagNames) {
		try {
			const el = tag === 'svg'
				? document.createElementNS('http://www.w3.org/2000/svg', 'svg')
				: document.createElement(tag);
			host.appendChild(el);
			const computed = window.getComputedStyle(el);
			const values = {};
			for (const prop of properties) {
				values[prop] = computed.getPropertyValue(prop);
			}
			host.removeChild(el);
			result[tag] = values;
		} catch (e) {}
	}
	return result;
})
"""


class CDPIsolatedStyleContext:
	"""IsolatedStyleContext поверх фонового target без стилей страницы."""

	def __init__(self, client: 'CDPClient'):
		self._client = client
		self._target_id: str | None = None
		self._page: Page | None = None
		self._defaults: dict[str, dict[str, str]] = {}

	@property
	def target_id(self) -> str | None:
		return self._target_id

	async def ready(self) -> None:
		"""Создать фоновую вкладку about:blank и подключиться к ней."""
		if self._page is not None:
			return

		created = await self._client.send.Target.createTarget(params={'url': 'about:blank', 'background': True})
		self._target_id = created['targetId']
		self._page = Page(self._client, self._target_id)
		try:
			await self._page.session_id
		except BaseException:
			# Вкладка уже создана, без подключения она осиротеет
			await self.close()
			raise
		logger.debug(f'Isolated style context ready: {self._target_id[:8]}...')

	async def prepare(self, tag_names: Iterable[str], properties: list[str]) -> None:
		if self._page is None:
			return
		pending = [tag for tag in tag_names if tag not in self._defaults]
		if not pending:
			return

		computed = await self._page.evaluate(COMPUTE_DEFAULTS_SCRIPT, pending, properties)
		for tag, values in (computed or {}).items():
			self._defaults[tag] = {prop: str(values.get(prop, '')) for prop in properties}
		logger.debug(f'Computed engine defaults for {len(computed or {})}/{len(pending)} tags')

	def read_defaults(self, tag_name: str, properties: list[str]) -> dict[str, str] | None:
		if self._page is None:
			return None
		values = self._defaults.get(tag_name.lower())
		if values is None:
			return None
		return {prop: values.get(prop, '') for prop in properties}

	async def close(self) -> None:
		"""Закрыть фоновую вкладку."""
		self._defaults.clear()
		self._page = None
		if self._target_id is None:
			return

		target_id, self._target_id = self._target_id, None
		try:
			await self._client.send.Target.closeTarget(params={'targetId': target_id})
		except Exception as e:
			logger.debug(f'Error closing isolated style context {target_id[:8]}: {type(e).__name__}: {e}')
