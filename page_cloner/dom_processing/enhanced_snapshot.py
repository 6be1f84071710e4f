"""
Построение дерева ElementSnapshot из DOMSnapshot (Chrome DevTools Protocol).

Один вызов DOMSnapshot.captureSnapshot отдаёт плоские массивы узлов и layout-дерева
со ссылками на общую таблицу строк. Здесь они собираются в дерево элементов, которое
потом обходится синхронно: вычисленные стили, границы, текстовые узлы, текущий src
картинок и стили псевдоэлементов ::before/::after.
"""

import logging

from cdp_use.cdp.domsnapshot.commands import CaptureSnapshotReturns
from cdp_use.cdp.domsnapshot.types import (
	LayoutTreeSnapshot,
	NodeTreeSnapshot,
	RareStringData,
)

from page_cloner.dom_processing.annotators import COMPONENT_NAME_ATTRIBUTE, NATURAL_SIZE_ATTRIBUTE
from page_cloner.dom_processing.design_properties import SNAPSHOT_COMPUTED_STYLES
from page_cloner.dom_processing.models import DOMRect, ElementSnapshot, NodeType

logger = logging.getLogger(__name__)

SUPPORTED_PSEUDO_TYPES = frozenset({'before', 'after'})


def _string_at(string_array: list[str], string_index: int | None) -> str | None:
	if string_index is None or not 0 <= string_index < len(string_array):
		return None
	return string_array[string_index]


def _parse_rare_string_data(string_array: list[str], rare_string_data: RareStringData | None) -> dict[int, str]:
	"""Разобрать редкие строковые данные: индекс узла -> строка."""
	if not rare_string_data:
		return {}
	result = {}
	for node_index, string_index in zip(rare_string_data.get('index', []), rare_string_data.get('value', [])):
		value = _string_at(string_array, string_index)
		if value is not None:
			result[node_index] = value
	return result


def _parse_computed_styles(string_array: list[str], style_index_list: list[int], properties: list[str]) -> dict[str, str]:
	"""Разобрать вычисленные стили из дерева макета используя индексы строк."""
	computed_styles_dict = {}
	for style_idx, string_index in enumerate(style_index_list):
		if style_idx < len(properties) and 0 <= string_index < len(string_array):
			computed_styles_dict[properties[style_idx]] = string_array[string_index]
	return computed_styles_dict


def _parse_attributes(string_array: list[str], attribute_indices: list[int]) -> dict[str, str]:
	attributes = {}
	for i in range(0, len(attribute_indices) - 1, 2):
		name = _string_at(string_array, attribute_indices[i])
		if name is None:
			continue
		attributes[name] = _string_at(string_array, attribute_indices[i + 1]) or ''
	return attributes


def _parse_natural_size(value: str | None) -> tuple[int | None, int | None]:
	"""Разобрать метку вида "640x480"; нечитаемая метка игнорируется."""
	if not value:
		return None, None
	width, _, height = value.partition('x')
	if not (width.isascii() and width.isdigit() and height.isascii() and height.isdigit()):
		return None, None
	return int(width) or None, int(height) or None


def build_element_tree(
	dom_snapshot: CaptureSnapshotReturns,
	pixel_ratio: float = 1.0,
	computed_styles: list[str] | None = None,
) -> ElementSnapshot | None:
	"""
	Собрать дерево элементов главного документа снимка и вернуть <body>.

	`computed_styles` должен совпадать со списком, переданным в captureSnapshot:
	стили в layout-дереве идут в том же порядке.
	"""
	properties = list(computed_styles or SNAPSHOT_COMPUTED_STYLES)

	if not dom_snapshot.get('documents'):
		return None

	string_list = dom_snapshot['strings']
	# Фреймы в снимке идут отдельными документами, берём только главный
	document = dom_snapshot['documents'][0]
	node_tree: NodeTreeSnapshot = document['nodes']
	layout_tree: LayoutTreeSnapshot = document['layout']

	parent_indices = node_tree.get('parentIndex', [])
	node_types = node_tree.get('nodeType', [])
	node_names = node_tree.get('nodeName', [])
	node_values = node_tree.get('nodeValue', [])
	backend_node_ids = node_tree.get('backendNodeId', [])
	attribute_lists = node_tree.get('attributes', [])
	pseudo_types = _parse_rare_string_data(string_list, node_tree.get('pseudoType'))
	current_sources = _parse_rare_string_data(string_list, node_tree.get('currentSourceURL'))

	# Сохранить исходное поведение: использовать ПЕРВОЕ вхождение для дубликатов
	layout_idx_map: dict[int, int] = {}
	for layout_index, snapshot_node_index in enumerate(layout_tree.get('nodeIndex', [])):
		if snapshot_node_index not in layout_idx_map:
			layout_idx_map[snapshot_node_index] = layout_index

	layout_bounds = layout_tree.get('bounds', [])
	layout_styles = layout_tree.get('styles', [])

	def layout_for(node_index: int) -> tuple[dict[str, str] | None, DOMRect | None]:
		layout_index = layout_idx_map.get(node_index)
		if layout_index is None:
			return None, None

		styles_dict: dict[str, str] = {}
		if layout_index < len(layout_styles):
			styles_dict = _parse_computed_styles(string_list, layout_styles[layout_index], properties)

		bbox = None
		if layout_index < len(layout_bounds):
			bounding_data = layout_bounds[layout_index]
			if len(bounding_data) >= 4:
				# Координаты CDP в пикселях устройства, переводим в CSS-пиксели
				bbox = DOMRect(
					x=bounding_data[0] / pixel_ratio,
					y=bounding_data[1] / pixel_ratio,
					width=bounding_data[2] / pixel_ratio,
					height=bounding_data[3] / pixel_ratio,
				)
		return styles_dict, bbox

	elements: dict[int, ElementSnapshot] = {}
	# Ближайший элемент-предок для каждого узла (теневые корни и документ прозрачны)
	element_parent: dict[int, int | None] = {}
	# Поддеревья псевдоэлементов
	detached: set[int] = set()
	body: ElementSnapshot | None = None
	first_element: ElementSnapshot | None = None

	for index, node_type in enumerate(node_types):
		parent_index = parent_indices[index] if index < len(parent_indices) else -1
		if parent_index in detached:
			detached.add(index)
			continue

		if parent_index in elements:
			owner = parent_index
		else:
			owner = element_parent.get(parent_index)

		if node_type == NodeType.TEXT_NODE.value:
			# Только непосредственный текст элемента
			if parent_index in elements:
				text = _string_at(string_list, node_values[index] if index < len(node_values) else None)
				if text:
					elements[parent_index].text_nodes.append(text)
			element_parent[index] = owner
			continue

		if node_type != NodeType.ELEMENT_NODE.value:
			element_parent[index] = owner
			continue

		pseudo_type = pseudo_types.get(index)
		if pseudo_type is not None:
			if pseudo_type in SUPPORTED_PSEUDO_TYPES and parent_index in elements:
				styles_dict, _ = layout_for(index)
				if styles_dict:
					elements[parent_index].pseudo_elements[pseudo_type] = styles_dict
			# Потомки псевдоэлемента не относятся к DOM
			detached.add(index)
			continue

		node_name = _string_at(string_list, node_names[index] if index < len(node_names) else None) or ''
		attributes = _parse_attributes(string_list, attribute_lists[index] if index < len(attribute_lists) else [])
		component_name = attributes.pop(COMPONENT_NAME_ATTRIBUTE, None)
		natural_width, natural_height = _parse_natural_size(attributes.pop(NATURAL_SIZE_ATTRIBUTE, None))
		styles_dict, bbox = layout_for(index)

		element = ElementSnapshot(
			node_name=node_name,
			backend_node_id=backend_node_ids[index] if index < len(backend_node_ids) else 0,
			attributes=attributes,
			computed_styles=styles_dict,
			bounds=bbox,
			current_src=current_sources.get(index),
			natural_width=natural_width,
			natural_height=natural_height,
			component_name=component_name or None,
		)

		elements[index] = element
		element_parent[index] = owner
		if owner is not None:
			elements[owner].children.append(element)

		if first_element is None:
			first_element = element
		if body is None and element.tag_name == 'body':
			body = element

	logger.debug(f'Snapshot parsed: {len(elements)} elements, {len(string_list)} strings')
	return body or first_element


def find_by_backend_node_id(root: ElementSnapshot | None, backend_node_id: int) -> ElementSnapshot | None:
	if root is None:
		return None
	for element in root.iter_elements():
		if element.backend_node_id == backend_node_id:
			return element
	return None


def collect_tag_names(root: ElementSnapshot | None) -> set[str]:
	"""Все теги поддерева, для предварительного расчёта дефолтов."""
	if root is None:
		return set()
	return {element.tag_name for element in root.iter_elements()}
