# @file purpose: Делит верхний уровень дерева на секции по ориентирам (header, nav, main, ...)

from page_cloner.dom_processing.models import ExtractedNode, Section

LANDMARK_TAGS = frozenset({'header', 'nav', 'main', 'section', 'aside', 'footer', 'article'})

ARIA_ROLE_TO_SECTION = {
	'banner': 'header',
	'navigation': 'nav',
	'main': 'main',
	'contentinfo': 'footer',
	'complementary': 'aside',
	'article': 'article',
	'region': 'section',
}

CONTENT_SECTION = 'content'


def landmark_name(node: ExtractedNode) -> str | None:
	"""Имя ориентира по тегу, иначе по ARIA-роли."""
	if node.tag in LANDMARK_TAGS:
		return node.tag
	if node.role:
		return ARIA_ROLE_TO_SECTION.get(node.role)
	return None


def section_tree(tree: ExtractedNode | None) -> list[Section]:
	if tree is None:
		return []

	if tree.tag in LANDMARK_TAGS:
		return [Section(section=tree.tag, node=tree)]

	if not tree.children:
		return [Section(section=CONTENT_SECTION, node=tree)]

	sections: list[Section] = []
	pending: list[ExtractedNode] = []
	found_landmark = False

	def flush() -> None:
		if pending:
			sections.append(Section(section=CONTENT_SECTION, node=ExtractedNode(tag='div', children=list(pending))))
			pending.clear()

	for child in tree.children:
		name = landmark_name(child)
		if name:
			found_landmark = True
			flush()
			sections.append(Section(section=name, node=child))
		else:
			pending.append(child)
	flush()

	# Без ориентиров синтетическая обёртка ничего не добавляет
	if not found_landmark:
		return [Section(section=CONTENT_SECTION, node=tree)]

	return sections
