import logging

from page_cloner.dom_processing.canonicalizer import canonicalize
from page_cloner.dom_processing.models import (
	MAX_TEXT_LENGTH,
	ElementSnapshot,
	ExtractedNode,
	ExtractionOptions,
	cap_text_length,
)
from page_cloner.dom_processing.style_diff import StyleDiffEngine
from page_cloner.dom_processing.tailwind.mapper import to_classes
from page_cloner.dom_processing.visibility import is_visible

logger = logging.getLogger(__name__)

FORM_CONTROL_TAGS = frozenset({'input', 'textarea', 'select'})

SVG_PLACEHOLDER_TEMPLATE = (
	'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}">'
	'<rect width="100%" height="100%" fill="currentColor" opacity="0.2"/></svg>'
)


def format_dimension(value: float | int | None) -> str:
	if value is None:
		return '0'
	if isinstance(value, float) and value.is_integer():
		return str(int(value))
	return f'{value:g}' if isinstance(value, float) else str(value)


def direct_text_content(element: ElementSnapshot) -> str | None:
	"""Текст только непосредственных текстовых узлов, без текста потомков."""
	text = ''.join(element.text_nodes).strip()
	if not text:
		return None
	return cap_text_length(text, MAX_TEXT_LENGTH)


class TreeExtractor:
	"""Рекурсивный обход видимых элементов с построением выходного дерева."""

	def __init__(self, diff_engine: StyleDiffEngine):
		self.diff_engine = diff_engine

	def extract(self, root: ElementSnapshot | None, options: ExtractionOptions | None = None) -> ExtractedNode | None:
		if root is None:
			return None
		options = options or ExtractionOptions()
		return self._extract_node(root, options, 0)

	def _extract_node(self, element: ElementSnapshot, options: ExtractionOptions, depth: int) -> ExtractedNode | None:
		if not is_visible(element):
			return None

		tag = element.tag_name

		# max_depth == 0 или None означает «без ограничения»
		if options.max_depth and depth > options.max_depth:
			return ExtractedNode(tag=tag, truncated=True, depth=depth)

		node = ExtractedNode(tag=tag)

		if options.extract_css:
			if element.has_layout:
				css = canonicalize(self.diff_engine.diff(element))
			else:
				css = {'display': 'contents'}
			if css:
				node.css = css
				classes = to_classes(css)
				if classes:
					node.classes = classes

		role = element.get_attribute('role')
		if role:
			node.role = role

		node.text_content = direct_text_content(element)

		if tag == 'img':
			self._extract_image(element, node, options)
		elif tag == 'a':
			href = element.get_attribute('href')
			if href:
				node.href = href
		elif tag in FORM_CONTROL_TAGS:
			input_type = element.get_attribute('type')
			if input_type:
				node.input_type = input_type
			placeholder = element.get_attribute('placeholder')
			if placeholder:
				node.placeholder = placeholder
		elif tag == 'svg':
			# Внутренности SVG не обходим
			node.svg_info = self._svg_info(element)
			return node

		children: list[ExtractedNode] = []
		for child in element.children:
			child_node = self._extract_node(child, options, depth + 1)
			if child_node is not None:
				children.append(child_node)
		if children:
			node.children = children

		return node

	def _extract_image(self, element: ElementSnapshot, node: ExtractedNode, options: ExtractionOptions) -> None:
		src = element.current_src or element.get_attribute('src')
		if src:
			if options.use_placeholders:
				width, height = self._natural_size(element)
				node.src = f'placeholder://{width}x{height}'
			else:
				node.src = src

		alt = element.get_attribute('alt')
		if alt:
			node.alt = alt

	def _natural_size(self, element: ElementSnapshot) -> tuple[int, int]:
		"""Натуральный размер картинки, иначе отрисованный."""
		rendered_width = int(element.bounds.width) if element.bounds else 0
		rendered_height = int(element.bounds.height) if element.bounds else 0
		return element.natural_width or rendered_width, element.natural_height or rendered_height

	def _svg_info(self, element: ElementSnapshot) -> dict[str, str]:
		width = element.get_attribute('width') or format_dimension(element.bounds.width if element.bounds else 0)
		height = element.get_attribute('height') or format_dimension(element.bounds.height if element.bounds else 0)

		svg_info = {'width': width, 'height': height}

		fill = element.style('fill')
		if fill and fill not in ('none', 'rgb(0, 0, 0)'):
			svg_info['fill'] = fill
		stroke = element.style('stroke')
		if stroke and stroke != 'none':
			svg_info['stroke'] = stroke

		svg_info['placeholder'] = SVG_PLACEHOLDER_TEMPLATE.format(width=width, height=height)
		return svg_info
