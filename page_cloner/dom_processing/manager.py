"""Сервис клонирования: снимок страницы -> дерево -> выходной документ."""

import logging
import time
from collections.abc import Callable

from page_cloner.dom_processing.annotators import component_names_from_snapshot
from page_cloner.dom_processing.baseline import IsolatedStyleContext
from page_cloner.dom_processing.design_properties import SNAPSHOT_COMPUTED_STYLES
from page_cloner.dom_processing.enhanced_snapshot import build_element_tree, find_by_backend_node_id
from page_cloner.dom_processing.models import (
	ElementCloneResult,
	ElementSnapshot,
	ExtractedNode,
	ExtractionOptions,
	PageCloneResult,
)
from page_cloner.dom_processing.serializer.sectioner import section_tree
from page_cloner.exceptions import ElementNotFoundError, ExtractionError
from page_cloner.interaction.page import Page
from page_cloner.session.session import ExtractionSession

logger = logging.getLogger(__name__)


class PageCloneService:
	"""
	Извлечение всей страницы или одного элемента.

	Каждое извлечение получает свою ExtractionSession со свежим изолированным
	контекстом из `style_context_factory`; без фабрики дефолты тегов не вычитаются.
	"""

	def __init__(
		self,
		page: Page,
		style_context_factory: Callable[[], IsolatedStyleContext | None] | None = None,
		options: ExtractionOptions | None = None,
	):
		self.page = page
		self.style_context_factory = style_context_factory
		self.options = options or ExtractionOptions.from_config()

	async def _capture(self, root_selector: str | None = None) -> tuple[ElementSnapshot | None, dict[str, float]]:
		"""Снимок DOM; компоненты и натуральные размеры картинок на время снимка пишутся в атрибуты."""
		timing_info: dict[str, float] = {}
		marked_components = 0
		marked_images = 0

		if self.options.detect_components:
			start = time.time()
			try:
				marked_components = await self.page.mark_components(root_selector)
			except Exception as e:
				logger.debug(f'Component detection skipped: {type(e).__name__}: {e}')
			timing_info['detect_components_ms'] = (time.time() - start) * 1000

		if self.options.use_placeholders:
			start = time.time()
			try:
				marked_images = await self.page.mark_image_sizes(root_selector)
			except Exception as e:
				logger.debug(f'Natural image sizes skipped: {type(e).__name__}: {e}')
			timing_info['mark_image_sizes_ms'] = (time.time() - start) * 1000

		try:
			start = time.time()
			pixel_ratio = await self.page.get_device_pixel_ratio()
			snapshot = await self.page.capture_snapshot(SNAPSHOT_COMPUTED_STYLES)
			timing_info['capture_snapshot_ms'] = (time.time() - start) * 1000
		finally:
			if marked_components:
				try:
					await self.page.clear_component_marks()
				except Exception as e:
					logger.debug(f'Failed to clear component marks: {type(e).__name__}: {e}')
			if marked_images:
				try:
					await self.page.clear_image_size_marks()
				except Exception as e:
					logger.debug(f'Failed to clear image size marks: {type(e).__name__}: {e}')

		start = time.time()
		root = build_element_tree(snapshot, pixel_ratio=pixel_ratio, computed_styles=SNAPSHOT_COMPUTED_STYLES)
		timing_info['build_element_tree_ms'] = (time.time() - start) * 1000
		return root, timing_info

	async def _extract(self, root: ElementSnapshot | None, timing_info: dict[str, float]) -> ExtractedNode | None:
		names = component_names_from_snapshot(root) if root is not None and self.options.detect_components else {}
		style_context = self.style_context_factory() if self.style_context_factory and self.options.extract_css else None

		async with ExtractionSession(style_context, self.options) as session:
			await session.prepare(root)
			tree = session.run(root, component_names=names)
		timing_info.update(session.timing_info)
		return tree

	def _log_timing(self, label: str, timing_info: dict[str, float]) -> None:
		total_ms = sum(timing_info.values())
		lines = [f'⏱️ {label} timing ({total_ms:.2f}ms total):']
		lines.extend(f'  ├─ {name}: {value:.2f}ms' for name, value in timing_info.items())
		logger.debug('\n'.join(lines))

	async def clone_page(self) -> PageCloneResult:
		url, title = await self.page.get_url_and_title()
		root, timing_info = await self._capture()

		tree = await self._extract(root, timing_info)
		if tree is None:
			raise ExtractionError('Page body is not visible, nothing to extract')

		start = time.time()
		sections = section_tree(tree)
		timing_info['section_tree_ms'] = (time.time() - start) * 1000
		self._log_timing('clone_page', timing_info)

		logger.info(f'📄 Extracted {len(sections)} sections from {url}')
		return PageCloneResult(
			url=url,
			title=title,
			section_count=len(sections),
			sections=[section.to_dict() for section in sections],
		)

	async def clone_element(self, selector: str) -> ElementCloneResult:
		url, title = await self.page.get_url_and_title()
		backend_node_id = await self.page.get_backend_node_id(selector)
		root, timing_info = await self._capture(root_selector=selector)

		element = find_by_backend_node_id(root, backend_node_id)
		if element is None:
			raise ElementNotFoundError(selector)

		tree = await self._extract(element, timing_info)
		if tree is None:
			raise ExtractionError(f'Element {selector!r} is not visible, nothing to extract', selector=selector)
		self._log_timing('clone_element', timing_info)

		logger.info(f'🎯 Extracted <{tree.tag}> for {selector!r} from {url}')
		return ElementCloneResult(url=url, title=title, tree=tree.to_dict())
