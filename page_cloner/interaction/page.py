"""Класс Page для операций уровня страницы, нужных извлечению."""

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

from page_cloner.dom_processing.annotators import (
	CLEAR_MARKS_SCRIPT,
	COMPONENT_NAME_ATTRIBUTE,
	IMAGE_SIZE_MARKER_SCRIPT,
	NATURAL_SIZE_ATTRIBUTE,
	REACT_DETECTOR_SCRIPT,
)
from page_cloner.dom_processing.design_properties import SNAPSHOT_COMPUTED_STYLES
from page_cloner.exceptions import ElementNotFoundError

if TYPE_CHECKING:
	from cdp_use import CDPClient
	from cdp_use.cdp.domsnapshot.commands import CaptureSnapshotParameters, CaptureSnapshotReturns
	from cdp_use.cdp.runtime.commands import EvaluateParameters
	from cdp_use.cdp.target.commands import AttachToTargetParameters, GetTargetInfoParameters

logger = logging.getLogger(__name__)


class Page:
	"""Операции со страницей (вкладкой) через CDP."""

	def __init__(self, client: 'CDPClient', target_id: str, session_id: str | None = None):
		self._client = client
		self._target_id = target_id
		self._session_id: str | None = session_id

	@property
	def target_id(self) -> str:
		return self._target_id

	async def _ensure_session(self) -> str:
		"""Обеспечить наличие session ID для этого target."""
		if not self._session_id:
			attach_params: 'AttachToTargetParameters' = {'targetId': self._target_id, 'flatten': True}
			attach_result = await self._client.send.Target.attachToTarget(attach_params)
			self._session_id = attach_result['sessionId']

			# Включить необходимые домены
			await asyncio.gather(
				self._client.send.Page.enable(session_id=self._session_id),
				self._client.send.DOM.enable(session_id=self._session_id),
				self._client.send.Runtime.enable(session_id=self._session_id),
			)

		return self._session_id

	@property
	async def session_id(self) -> str:
		return await self._ensure_session()

	async def evaluate(self, page_function: str, *args) -> Any:
		"""Выполнить JavaScript-функцию в target и вернуть результат по значению.

		Args:
			page_function: функция в формате (...args) => ... или (function(...) {...})
			*args: аргументы, сериализуемые в JSON

		Raises:
			RuntimeError: если скрипт бросил исключение
		"""
		session_id = await self._ensure_session()

		js_function = page_function.strip()
		if not js_function.startswith('('):
			raise ValueError(f'JavaScript code must be a function expression. Got: {js_function[:50]}...')

		json_args = [json.dumps(arg) for arg in args]
		js_expression = f'({js_function})({", ".join(json_args)})'

		eval_params: 'EvaluateParameters' = {'expression': js_expression, 'returnByValue': True, 'awaitPromise': True}
		eval_result = await self._client.send.Runtime.evaluate(eval_params, session_id=session_id)

		if 'exceptionDetails' in eval_result:
			raise RuntimeError(f'JavaScript evaluation failed: {eval_result["exceptionDetails"]}')

		return eval_result.get('result', {}).get('value')

	async def get_url_and_title(self) -> tuple[str, str]:
		params: 'GetTargetInfoParameters' = {'targetId': self._target_id}
		result = await self._client.send.Target.getTargetInfo(params)
		target_info = result['targetInfo']
		return target_info.get('url', ''), target_info.get('title', '')

	async def get_device_pixel_ratio(self) -> float:
		ratio = await self.evaluate('() => window.devicePixelRatio')
		try:
			return float(ratio) or 1.0
		except (TypeError, ValueError):
			return 1.0

	async def capture_snapshot(self, computed_styles: list[str] | None = None) -> 'CaptureSnapshotReturns':
		"""Снимок DOM с вычисленными стилями в указанном порядке."""
		session_id = await self._ensure_session()
		params: 'CaptureSnapshotParameters' = {
			'computedStyles': list(computed_styles or SNAPSHOT_COMPUTED_STYLES),
			'includePaintOrder': False,
			'includeDOMRects': False,
		}
		return await self._client.send.DOMSnapshot.captureSnapshot(params=params, session_id=session_id)

	async def get_backend_node_id(self, selector: str) -> int:
		"""Найти первый элемент по CSS-селектору и вернуть его backend node ID."""
		session_id = await self._ensure_session()

		document = await self._client.send.DOM.getDocument(params={'depth': 0}, session_id=session_id)
		try:
			query_result = await self._client.send.DOM.querySelector(
				params={'nodeId': document['root']['nodeId'], 'selector': selector},
				session_id=session_id,
			)
		except Exception as e:
			raise ElementNotFoundError(selector) from e

		node_id = query_result.get('nodeId', 0)
		if not node_id:
			raise ElementNotFoundError(selector)

		described = await self._client.send.DOM.describeNode(params={'nodeId': node_id}, session_id=session_id)
		return described['node']['backendNodeId']

	async def mark_components(self, root_selector: str | None = None) -> int:
		"""Пометить элементы именами React-компонентов, вернуть число помеченных."""
		marked = await self.evaluate(REACT_DETECTOR_SCRIPT, COMPONENT_NAME_ATTRIBUTE, root_selector)
		return int(marked or 0)

	async def clear_component_marks(self) -> None:
		await self.evaluate(CLEAR_MARKS_SCRIPT, COMPONENT_NAME_ATTRIBUTE)

	async def mark_image_sizes(self, root_selector: str | None = None) -> int:
		"""Записать натуральные размеры загруженных картинок в атрибут, вернуть число помеченных."""
		marked = await self.evaluate(IMAGE_SIZE_MARKER_SCRIPT, NATURAL_SIZE_ATTRIBUTE, root_selector)
		return int(marked or 0)

	async def clear_image_size_marks(self) -> None:
		await self.evaluate(CLEAR_MARKS_SCRIPT, NATURAL_SIZE_ATTRIBUTE)
