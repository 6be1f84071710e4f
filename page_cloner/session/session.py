"""Сессия извлечения: владеет кэшем дефолтных стилей и прогоняет конвейер."""

import logging
import time
from collections.abc import Callable, Mapping
from typing import Self

from page_cloner.dom_processing.annotators import (
	annotate_component_names,
	annotate_pseudo_elements,
	pseudo_element_styles,
)
from page_cloner.dom_processing.baseline import BaselineStyleResolver, IsolatedStyleContext
from page_cloner.dom_processing.enhanced_snapshot import collect_tag_names
from page_cloner.dom_processing.extractor import TreeExtractor
from page_cloner.dom_processing.models import ElementSnapshot, ExtractedNode, ExtractionOptions, StyleMap
from page_cloner.dom_processing.serializer.deduplicator import deduplicate_tree
from page_cloner.dom_processing.style_diff import StyleDiffEngine

logger = logging.getLogger(__name__)

PseudoSource = Callable[[ElementSnapshot], dict[str, StyleMap] | None]


class ExtractionSession:
	"""
	Одно извлечение: изолированный контекст, кэш дефолтов по тегам и обход дерева.

	Используется как async context manager; при выходе контекст закрывается
	даже если извлечение упало.
	"""

	def __init__(self, style_context: IsolatedStyleContext | None, options: ExtractionOptions | None = None):
		self.options = options or ExtractionOptions()
		self.resolver = BaselineStyleResolver(style_context)
		self.extractor = TreeExtractor(StyleDiffEngine(self.resolver))
		self.timing_info: dict[str, float] = {}

	async def start(self) -> Self:
		start = time.time()
		await self.resolver.start()
		self.timing_info['start_context_ms'] = (time.time() - start) * 1000
		return self

	async def prepare(self, root: ElementSnapshot | None) -> None:
		"""Заранее посчитать дефолты всех тегов поддерева."""
		if root is None or not self.options.extract_css:
			return
		start = time.time()
		await self.resolver.prepare(collect_tag_names(root))
		self.timing_info['prepare_defaults_ms'] = (time.time() - start) * 1000

	def run(
		self,
		root: ElementSnapshot | None,
		component_names: Mapping[int, str] | None = None,
		pseudo_source: PseudoSource | None = None,
	) -> ExtractedNode | None:
		"""Извлечь -> аннотировать -> дедуплицировать."""
		start = time.time()
		tree = self.extractor.extract(root, self.options)
		self.timing_info['extract_tree_ms'] = (time.time() - start) * 1000

		if tree is None:
			return None

		if self.options.detect_components and component_names:
			start = time.time()
			annotate_component_names(tree, root, component_names)
			self.timing_info['annotate_components_ms'] = (time.time() - start) * 1000

		if self.options.extract_pseudo_elements:
			start = time.time()
			annotate_pseudo_elements(tree, root, pseudo_source or pseudo_element_styles)
			self.timing_info['annotate_pseudo_ms'] = (time.time() - start) * 1000

		start = time.time()
		tree = deduplicate_tree(tree)
		self.timing_info['deduplicate_ms'] = (time.time() - start) * 1000

		return tree

	async def close(self) -> None:
		await self.resolver.close()

	async def __aenter__(self) -> Self:
		try:
			return await self.start()
		except BaseException:
			# __aexit__ не вызывается, если вход упал
			await self.close()
			raise

	async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
		await self.close()
