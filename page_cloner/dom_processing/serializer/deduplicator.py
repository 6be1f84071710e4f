# @file purpose: Сворачивает подряд идущие структурно одинаковые соседние узлы в один с счётчиком повторов

import dataclasses

from page_cloner.dom_processing.models import ExtractedNode, RepeatInfo

DJB2_SEED = 5381
HASH_MASK = 0xFFFFFFFF


def djb2(text: str) -> int:
	"""32-битный djb2 по кодовым точкам строки."""
	value = DJB2_SEED
	for char in text:
		value = ((value << 5) + value + ord(char)) & HASH_MASK
	return value


def structural_fingerprint(node: ExtractedNode | None) -> int:
	"""
	Отпечаток структуры узла: тег, стили, число и отпечатки детей, тип input.

	Текст и идентифицирующие атрибуты (src, href, alt, placeholder, role,
	имя компонента) не учитываются: карточки с разным текстом считаются одинаковыми.
	"""
	if node is None:
		return 0

	parts = [node.tag or '']

	if node.css:
		pairs = ','.join(f'{key}={node.css[key]}' for key in sorted(node.css))
		parts.append(f'|css:{pairs}')

	if node.children:
		parts.append(f'|ch:{len(node.children)}')
		parts.append('|' + ','.join(str(structural_fingerprint(child)) for child in node.children))

	if node.input_type:
		parts.append(f'|input:{node.input_type}')

	return djb2(''.join(parts))


def deduplicate_tree(node: ExtractedNode | None) -> ExtractedNode | None:
	"""Дедупликация снизу вверх. Объединяются только соседние узлы, идущие подряд."""
	if node is None or not node.children:
		return node

	children = [deduplicate_tree(child) for child in node.children]
	fingerprints = [structural_fingerprint(child) for child in children]

	collapsed: list[ExtractedNode] = []
	index = 0
	while index < len(children):
		current = children[index]
		end = index + 1
		while end < len(children) and fingerprints[end] == fingerprints[index]:
			end += 1

		count = end - index
		if count > 1:
			collapsed.append(
				dataclasses.replace(
					current,
					repeated=RepeatInfo(count=count, note=f'{count} identical elements with this structure'),
				)
			)
		else:
			collapsed.append(current)
		index = end

	return dataclasses.replace(node, children=collapsed)
