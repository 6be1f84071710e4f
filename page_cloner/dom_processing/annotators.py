"""
Необязательные аннотации дерева: имена React-компонентов и стили ::before/::after.

Выходное дерево уже отфильтровано по видимости, поэтому сопоставление с исходными
элементами идёт параллельным обходом: видимые дочерние элементы сравниваются с
узлами дерева по тегу на одной и той же позиции, на первом расхождении ветка
дальше не сопоставляется. Любая ошибка аннотации лишь пропускает поле.
"""

import logging
from collections.abc import Callable, Mapping

from page_cloner.dom_processing.design_properties import PSEUDO_ELEMENT_PROPERTIES
from page_cloner.dom_processing.models import ElementSnapshot, ExtractedNode, StyleMap
from page_cloner.dom_processing.visibility import is_visible

logger = logging.getLogger(__name__)

COMPONENT_NAME_ATTRIBUTE = 'data-page-cloner-component'
NATURAL_SIZE_ATTRIBUTE = 'data-page-cloner-natural-size'

PSEUDO_ELEMENT_NAMES = ('before', 'after')

# Значения, при которых свойство псевдоэлемента не показываем
PSEUDO_EMPTY_VALUES = frozenset({'auto', 'none', 'normal', '0px', 'transparent', 'rgba(0, 0, 0, 0)'})

# content, при котором псевдоэлемент не генерируется
PSEUDO_EMPTY_CONTENT = frozenset({'none', 'normal', '""'})

# Ищет fiber-ключ React, поднимается по fiber-дереву к ближайшему компоненту
# и помечает элемент атрибутом с именем компонента. Возвращает число помеченных.
REACT_DETECTOR_SCRIPT = """
(function(attributeName, rootSelector) {
	const root = rootSelector ? document.querySelector(rootSelector) : document.body;
	if (!root) return 0;

	const skipNames = new Set([
		'Fragment', 'Suspense', 'StrictMode', 'Profiler', 'Provider',
		'Consumer', 'Context', 'ForwardRef', 'Memo'
	]);

	function isValidName(name) {
		if (!name || skipNames.has(name)) return false;
		if (name.startsWith('_') || name.length < 2) return false;
		return name[0] === name[0].toUpperCase();
	}

	let fiberKey = null;
	const candidates = [root].concat(Array.from(root.querySelectorAll('*')).slice(0, 100));
	for (const el of candidates) {
		fiberKey = Object.keys(el).find(
			key => key.startsWith('__reactFiber$') || key.startsWith('__reactInternalInstance$')
		);
		if (fiberKey) break;
	}
	if (!fiberKey) return 0;

	function componentName(el) {
		try {
			let current = el[fiberKey];
			let steps = 0;
			while (current && steps < 20) {
				const type = current.type;
				if (typeof type === 'function') {
					const name = type.displayName || type.name || null;
					if (isValidName(name)) return name;
				}
				current = current.return;
				steps++;
			}
		} catch (e) {}
		return null;
	}

	let marked = 0;
	const stack = [root];
	while (stack.length) {
		const el = stack.pop();
		const name = componentName(el);
		if (name) {
			el.setAttribute(attributeName, name);
			marked++;
		}
		for (let i = el.children.length - 1; i >= 0; i--) stack.push(el.children[i]);
	}
	return marked;
})
"""

CLEAR_MARKS_SCRIPT = """
(function(attributeName) {
	const marked = document.querySelectorAll('[' + attributeName + ']');
	marked.forEach(el => el.removeAttribute(attributeName));
	return marked.length;
})
"""

# naturalWidth/naturalHeight нет в DOMSnapshot: переносим их в атрибут вида "640x480"
IMAGE_SIZE_MARKER_SCRIPT = """
(function(attributeName, rootSelector) {
	const root = rootSelector ? document.querySelector(rootSelector) : document.body;
	if (!root) return 0;
	const images = Array.from(root.querySelectorAll('img'));
	if (root.tagName === 'IMG') images.push(root);
	let marked = 0;
	for (const img of images) {
		if (img.naturalWidth > 0 && img.naturalHeight > 0) {
			img.setAttribute(attributeName, img.naturalWidth + 'x' + img.naturalHeight);
			marked++;
		}
	}
	return marked;
})
"""


def component_names_from_snapshot(root: ElementSnapshot) -> dict[int, str]:
	"""Собрать backend_node_id -> имя компонента из помеченных элементов снимка."""
	names: dict[int, str] = {}
	for element in root.iter_elements():
		if element.component_name:
			names[element.backend_node_id] = element.component_name
	return names


def pseudo_element_styles(element: ElementSnapshot) -> dict[str, StyleMap] | None:
	"""Значимые стили ::before/::after элемента или None, если их нет."""
	result: dict[str, StyleMap] = {}

	for pseudo_name in PSEUDO_ELEMENT_NAMES:
		computed = element.pseudo_elements.get(pseudo_name)
		if not computed:
			continue

		content = computed.get('content', '').strip()
		if not content or content in PSEUDO_EMPTY_CONTENT:
			continue
		if computed.get('display', '').strip() == 'none':
			continue

		styles: StyleMap = {'content': content}
		for prop in PSEUDO_ELEMENT_PROPERTIES:
			value = computed.get(prop, '').strip()
			if value and value not in PSEUDO_EMPTY_VALUES:
				styles[prop] = value
		result[pseudo_name] = styles

	return result or None


def _parallel_walk(
	node: ExtractedNode,
	element: ElementSnapshot,
	visit: Callable[[ExtractedNode, ElementSnapshot], None],
) -> None:
	# Усечённый узел остаётся маркером {tag, truncated, depth}
	if node.truncated:
		return

	try:
		visit(node, element)
	except Exception as e:
		logger.debug(f'Annotation skipped for <{element.tag_name}>: {type(e).__name__}: {e}')

	if not node.children:
		return

	visible_children = [child for child in element.children if is_visible(child)]
	for tree_child, element_child in zip(node.children, visible_children):
		if tree_child.tag != element_child.tag_name:
			logger.debug(f'Annotation walk stopped at <{element.tag_name}>: <{tree_child.tag}> != <{element_child.tag_name}>')
			break
		_parallel_walk(tree_child, element_child, visit)


def annotate_component_names(tree: ExtractedNode | None, root: ElementSnapshot | None, names: Mapping[int, str]) -> None:
	"""Проставить reactComponent узлам, чьи элементы есть в отображении имён."""
	if tree is None or root is None or not names:
		return

	def visit(node: ExtractedNode, element: ElementSnapshot) -> None:
		name = names.get(element.backend_node_id)
		if name:
			node.react_component = name

	_parallel_walk(tree, root, visit)


def annotate_pseudo_elements(
	tree: ExtractedNode | None,
	root: ElementSnapshot | None,
	source: Callable[[ElementSnapshot], dict[str, StyleMap] | None] = pseudo_element_styles,
) -> None:
	"""Проставить pseudoElements узлам, у элементов которых есть ::before/::after."""
	if tree is None or root is None:
		return

	def visit(node: ExtractedNode, element: ElementSnapshot) -> None:
		pseudo = source(element)
		if pseudo:
			node.pseudo_elements = pseudo

	_parallel_walk(tree, root, visit)
