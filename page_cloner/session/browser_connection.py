"""Подключение к уже запущенному chromium-браузеру по CDP."""

import logging
from typing import Self
from urllib.parse import urlparse, urlunparse

import httpx
from cdp_use import CDPClient

from page_cloner.config import CONFIG
from page_cloner.exceptions import BrowserConnectionError
from page_cloner.interaction.page import Page
from page_cloner.session.isolated_context import CDPIsolatedStyleContext

logger = logging.getLogger(__name__)


async def resolve_websocket_url(cdp_url: str, headers: dict[str, str] | None = None) -> str:
	"""http(s)://host:port -> webSocketDebuggerUrl из /json/version. ws-адреса возвращаются как есть."""
	if cdp_url.startswith('ws'):
		return cdp_url

	parsed_url = urlparse(cdp_url)
	path = parsed_url.path.rstrip('/')
	if not path.endswith('/json/version'):
		path = path + '/json/version'

	url = urlunparse((parsed_url.scheme, parsed_url.netloc, path, parsed_url.params, parsed_url.query, parsed_url.fragment))

	try:
		async with httpx.AsyncClient() as client:
			version_info = await client.get(url, headers=headers or {})
			version_info.raise_for_status()
			logger.debug(f'Raw version info: {str(version_info)}')
			return version_info.json()['webSocketDebuggerUrl']
	except (httpx.HTTPError, KeyError, ValueError) as e:
		raise BrowserConnectionError(f'Cannot resolve CDP websocket URL from {url}: {type(e).__name__}: {e}', cdp_url=cdp_url) from e


class BrowserConnection:
	"""CDP-клиент к браузеру: выбор вкладки и фоновый контекст для дефолтных стилей."""

	def __init__(self, cdp_url: str | None = None, headers: dict[str, str] | None = None):
		self.cdp_url = cdp_url or CONFIG.PAGE_CLONER_CDP_URL
		self.headers = headers
		self._client: CDPClient | None = None

	@property
	def client(self) -> CDPClient:
		if self._client is None:
			raise BrowserConnectionError('CDP client is not connected, call start() first', cdp_url=self.cdp_url)
		return self._client

	async def start(self) -> Self:
		if self._client is not None:
			return self

		ws_url = await resolve_websocket_url(self.cdp_url, self.headers)
		logger.debug(f'🌎 Connecting to chromium-based browser via CDP: {ws_url}')

		client = CDPClient(ws_url, additional_headers=self.headers, max_ws_frame_size=200 * 1024 * 1024)
		try:
			await client.start()
		except Exception as e:
			raise BrowserConnectionError(f'Failed to establish CDP connection to browser: {e}', cdp_url=self.cdp_url) from e

		self._client = client
		return self

	async def stop(self) -> None:
		if self._client is None:
			return
		client, self._client = self._client, None
		try:
			await client.stop()
		except Exception as e:
			logger.debug(f'Error stopping CDP client: {type(e).__name__}: {e}')

	async def get_page(self, target_id: str | None = None) -> Page:
		"""Вкладка по target ID, иначе первая обычная страница браузера."""
		targets = await self.client.send.Target.getTargets()
		page_targets = [target for target in targets['targetInfos'] if target.get('type') == 'page']

		if target_id:
			if not any(target['targetId'] == target_id for target in page_targets):
				raise BrowserConnectionError(f'Page target {target_id} not found', cdp_url=self.cdp_url)
			return Page(self.client, target_id)

		# Служебные страницы не подходят для извлечения
		candidates = [target for target in page_targets if not target.get('url', '').startswith(('chrome://', 'devtools://'))]
		if not candidates:
			raise BrowserConnectionError('No page target available for extraction', cdp_url=self.cdp_url)

		target = candidates[0]
		logger.debug(f'📄 Using existing page: {target["targetId"][:8]}... {target.get("url", "")}')
		return Page(self.client, target['targetId'])

	def create_style_context(self) -> CDPIsolatedStyleContext:
		return CDPIsolatedStyleContext(self.client)

	async def __aenter__(self) -> Self:
		return await self.start()

	async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
		await self.stop()
