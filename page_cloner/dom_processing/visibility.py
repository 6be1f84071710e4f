from page_cloner.dom_processing.models import ElementSnapshot

# Теги, которые никогда не рисуются
SKIP_TAGS = frozenset(
	{
		'script',
		'style',
		'link',
		'meta',
		'head',
		'noscript',
		'template',
		'slot',
		'br',
		'wbr',
	}
)


def should_skip_tag(tag_name: str) -> bool:
	return tag_name.lower() in SKIP_TAGS


def is_visible(element: ElementSnapshot) -> bool:
	"""Решить, попадёт ли элемент (и его поддерево) в результат."""
	if should_skip_tag(element.tag_name):
		return False

	# Без layout-бокса элемент не отрисован (display: none у него или у предка),
	# кроме display: contents, у которого отрисованы потомки
	if not element.has_layout and not element.is_display_contents:
		return False

	if element.style('display') == 'none':
		return False
	if element.style('visibility') == 'hidden':
		return False
	if element.style('opacity') == '0':
		return False

	bounds = element.bounds
	if bounds is not None and bounds.width == 0 and bounds.height == 0:
		# При overflow: visible содержимое может выходить за нулевой бокс
		if element.style('overflow') != 'visible':
			return False
		if not element.children:
			return False

	if element.get_attribute('aria-hidden') == 'true':
		return False

	return True
