"""
Канонизация StyleMap: сворачивание сторон в шорткаты и удаление свойств,
не действующих в текущем режиме раскладки.

Сравнение значений: точное строковое после trim, единицы не нормализуются.
"""

from collections.abc import Sequence

from page_cloner.dom_processing.design_properties import (
	BORDER_COLORS,
	BORDER_STYLES,
	BORDER_WIDTHS,
	FLEX_CONTAINER_PROPERTIES,
	FLEX_DISPLAYS,
	GRID_DISPLAYS,
	GRID_PROPERTIES,
	MARGIN_SIDES,
	PADDING_SIDES,
	POSITION_OFFSETS,
	RADIUS_CORNERS,
)
from page_cloner.dom_processing.models import StyleMap


def _group_values(style: StyleMap, keys: Sequence[str]) -> list[str] | None:
	"""Значения группы, если присутствуют все ключи."""
	values = [style.get(key, '').strip() for key in keys]
	if not all(values):
		return None
	return values


def _replace_group(style: StyleMap, keys: Sequence[str], shorthand: str, value: str) -> StyleMap:
	"""Заменить группу длинных свойств шорткатом на месте первого из них."""
	removed = set(keys)
	result: StyleMap = {}
	inserted = False
	for key, current in style.items():
		if key in removed:
			if not inserted:
				result[shorthand] = value
				inserted = True
			continue
		if key == shorthand:
			continue
		result[key] = current
	if not inserted:
		result[shorthand] = value
	return result


def _merge_box_sides(style: StyleMap, sides: Sequence[str], shorthand: str) -> StyleMap:
	values = _group_values(style, sides)
	if values is None:
		return style
	top, right, bottom, left = values
	if top == right == bottom == left:
		return _replace_group(style, sides, shorthand, top)
	if top == bottom and right == left:
		return _replace_group(style, sides, shorthand, f'{top} {right}')
	return style


def canonicalize(style: StyleMap) -> StyleMap:
	result = dict(style)

	# 1. Радиусы углов
	corners = _group_values(result, RADIUS_CORNERS)
	if corners is not None and len(set(corners)) == 1:
		result = _replace_group(result, RADIUS_CORNERS, 'border-radius', corners[0])

	# 2. Рамка: все три группы полные и однородные
	widths = _group_values(result, BORDER_WIDTHS)
	styles = _group_values(result, BORDER_STYLES)
	colors = _group_values(result, BORDER_COLORS)
	if (
		widths is not None
		and styles is not None
		and colors is not None
		and len(set(widths)) == 1
		and len(set(styles)) == 1
		and len(set(colors)) == 1
	):
		result = _replace_group(
			result,
			BORDER_WIDTHS + BORDER_STYLES + BORDER_COLORS,
			'border',
			f'{widths[0]} {styles[0]} {colors[0]}',
		)

	# 3-4. Отступы
	result = _merge_box_sides(result, PADDING_SIDES, 'padding')
	result = _merge_box_sides(result, MARGIN_SIDES, 'margin')

	# 5. Смещения имеют смысл только у позиционированных элементов
	position = result.get('position', '').strip()
	if not position or position == 'static':
		for key in ('position',) + POSITION_OFFSETS:
			result.pop(key, None)

	display = result.get('display', '').strip()
	is_flex = display in FLEX_DISPLAYS
	is_grid = display in GRID_DISPLAYS

	# 6. Flex-контейнер (включая gap)
	if not is_flex:
		for key in FLEX_CONTAINER_PROPERTIES:
			result.pop(key, None)

	# 7. Grid-контейнер
	if not is_grid:
		for key in GRID_PROPERTIES:
			result.pop(key, None)

	return result
