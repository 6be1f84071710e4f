# @file purpose: Переводит канонический StyleMap в список utility-классов в стиле Tailwind

"""
Маппер CSS -> utility-классы.

Порядок токенов фиксирован по категориям: отступы, display/position, размеры,
flex/grid, типографика, цвет, рамка, эффекты, overflow/z-index, курсор,
object-fit/aspect-ratio. Значения, которых нет в шкалах, выводятся в
произвольной форме `prefix-[value]` без изменений. Маппер никогда не бросает
исключений: это подсказка, а не компилятор.
"""

import logging
import re
from collections.abc import Callable, Mapping

from page_cloner.dom_processing.tailwind.scales import (
	BORDER_RADIUS_MAP,
	COLOR_PALETTE,
	FONT_SIZE_MAP,
	FONT_WEIGHT_MAP,
	HEIGHT_MAP,
	LINE_HEIGHT_MAP,
	MAX_WIDTH_MAP,
	OPACITY_MAP,
	SPACING_SCALE,
	WIDTH_MAP,
	Z_INDEX_SCALE,
)

logger = logging.getLogger(__name__)

CSS = dict[str, str]

DISPLAY_MAP = {
	'block': 'block',
	'inline-block': 'inline-block',
	'inline': 'inline',
	'flex': 'flex',
	'inline-flex': 'inline-flex',
	'grid': 'grid',
	'inline-grid': 'inline-grid',
	'none': 'hidden',
	'table': 'table',
	'table-row': 'table-row',
	'table-cell': 'table-cell',
	'contents': 'contents',
	'list-item': 'list-item',
	'flow-root': 'flow-root',
}

POSITION_KEYWORDS = frozenset({'static', 'relative', 'absolute', 'fixed', 'sticky'})

FLEX_DIRECTION_MAP = {
	'row': 'flex-row',
	'row-reverse': 'flex-row-reverse',
	'column': 'flex-col',
	'column-reverse': 'flex-col-reverse',
}

FLEX_WRAP_MAP = {
	'wrap': 'flex-wrap',
	'wrap-reverse': 'flex-wrap-reverse',
	'nowrap': 'flex-nowrap',
}

JUSTIFY_CONTENT_MAP = {
	'flex-start': 'justify-start',
	'flex-end': 'justify-end',
	'start': 'justify-start',
	'end': 'justify-end',
	'center': 'justify-center',
	'space-between': 'justify-between',
	'space-around': 'justify-around',
	'space-evenly': 'justify-evenly',
	'stretch': 'justify-stretch',
}

ALIGN_ITEMS_MAP = {
	'flex-start': 'items-start',
	'flex-end': 'items-end',
	'start': 'items-start',
	'end': 'items-end',
	'center': 'items-center',
	'baseline': 'items-baseline',
	'stretch': 'items-stretch',
}

ALIGN_CONTENT_MAP = {
	'flex-start': 'content-start',
	'flex-end': 'content-end',
	'start': 'content-start',
	'end': 'content-end',
	'center': 'content-center',
	'space-between': 'content-between',
	'space-around': 'content-around',
	'space-evenly': 'content-evenly',
	'stretch': 'content-stretch',
	'baseline': 'content-baseline',
}

ALIGN_SELF_MAP = {
	'auto': 'self-auto',
	'flex-start': 'self-start',
	'flex-end': 'self-end',
	'start': 'self-start',
	'end': 'self-end',
	'center': 'self-center',
	'stretch': 'self-stretch',
	'baseline': 'self-baseline',
}

GRID_AUTO_FLOW_MAP = {
	'row': 'grid-flow-row',
	'column': 'grid-flow-col',
	'dense': 'grid-flow-dense',
	'row dense': 'grid-flow-row-dense',
	'column dense': 'grid-flow-col-dense',
}

TEXT_ALIGN_KEYWORDS = frozenset({'left', 'center', 'right', 'justify', 'start', 'end'})

TEXT_TRANSFORM_MAP = {
	'uppercase': 'uppercase',
	'lowercase': 'lowercase',
	'capitalize': 'capitalize',
	'none': 'normal-case',
}

WHITE_SPACE_MAP = {
	'normal': 'whitespace-normal',
	'nowrap': 'whitespace-nowrap',
	'pre': 'whitespace-pre',
	'pre-line': 'whitespace-pre-line',
	'pre-wrap': 'whitespace-pre-wrap',
	'break-spaces': 'whitespace-break-spaces',
}

WORD_BREAK_MAP = {
	'break-all': 'break-all',
	'keep-all': 'break-keep',
	'break-word': 'break-words',
}

LIST_STYLE_TYPE_MAP = {
	'none': 'list-none',
	'disc': 'list-disc',
	'decimal': 'list-decimal',
}

BOX_SIZING_MAP = {
	'border-box': 'box-border',
	'content-box': 'box-content',
}

BORDER_WIDTH_MAP = {
	'0px': 'border-0',
	'1px': 'border',
	'2px': 'border-2',
	'4px': 'border-4',
	'8px': 'border-8',
}

BORDER_STYLE_MAP = {
	'dashed': 'border-dashed',
	'dotted': 'border-dotted',
	'double': 'border-double',
	'hidden': 'border-hidden',
	'none': 'border-none',
}

OBJECT_FIT_KEYWORDS = frozenset({'contain', 'cover', 'fill', 'none', 'scale-down'})

ASPECT_RATIO_MAP = {
	'1 / 1': 'aspect-square',
	'16 / 9': 'aspect-video',
	'auto': 'aspect-auto',
}

SIMPLE_KEYWORD_RE = re.compile(r'^[a-z][a-z-]*$')
ORDER_RE = re.compile(r'[0-9]+')
RGB_RE = re.compile(r'rgba?\(\s*(\d+)\s*[,\s]\s*(\d+)\s*[,\s]\s*(\d+)\s*(?:[,/]\s*([\d.]+%?)\s*)?\)')


# --- Helper Functions ---


def _arbitrary(prefix: str, value: str) -> str:
	return f'{prefix}-[{value}]'


def _arbitrary_property(prop: str, value: str) -> str:
	return f'[{prop}:{value}]'


def _keyword(tokens: list[str], mapping: Mapping[str, str], prop: str, value: str | None) -> None:
	if not value:
		return
	token = mapping.get(value)
	tokens.append(token if token else _arbitrary_property(prop, value))


def _scaled(tokens: list[str], prefix: str, value: str | None, *scales: Mapping[str, str]) -> None:
	if not value:
		return
	for scale in scales:
		token = scale.get(value)
		if token is not None:
			tokens.append(f'{prefix}-{token}')
			return
	tokens.append(_arbitrary(prefix, value))


def add_spacing_class(tokens: list[str], prefix: str, value: str | None) -> None:
	if not value:
		return
	scale = SPACING_SCALE.get(value)
	if scale is not None:
		tokens.append(f'{prefix}-{scale}')
	elif value.startswith('-'):
		absolute = value[1:]
		negative_scale = SPACING_SCALE.get(absolute)
		tokens.append(f'-{prefix}-{negative_scale}' if negative_scale is not None else f'-{prefix}-[{absolute}]')
	else:
		tokens.append(_arbitrary(prefix, value))


def handle_shorthand_spacing(prefix: str, prop: str, value: str) -> list[str]:
	"""Разложить шорткат padding/margin на 1/2/3/4 части по правилам CSS."""
	parts = value.split()
	tokens: list[str] = []

	if len(parts) == 1:
		add_spacing_class(tokens, prefix, parts[0])
	elif len(parts) == 2:
		add_spacing_class(tokens, f'{prefix}y', parts[0])
		add_spacing_class(tokens, f'{prefix}x', parts[1])
	elif len(parts) == 3:
		add_spacing_class(tokens, f'{prefix}t', parts[0])
		add_spacing_class(tokens, f'{prefix}x', parts[1])
		add_spacing_class(tokens, f'{prefix}b', parts[2])
	elif len(parts) == 4:
		add_spacing_class(tokens, f'{prefix}t', parts[0])
		add_spacing_class(tokens, f'{prefix}r', parts[1])
		add_spacing_class(tokens, f'{prefix}b', parts[2])
		add_spacing_class(tokens, f'{prefix}l', parts[3])
	else:
		tokens.append(_arbitrary_property(prop, value))

	return tokens


def optimize_spacing(prefix: str, tokens: list[str]) -> list[str]:
	"""Свернуть pt/pr/pb/pl с одинаковыми значениями в p или py/px."""
	positions: dict[str, int] = {}
	values: dict[str, str] = {}
	for side in ('t', 'r', 'b', 'l'):
		marker = f'{prefix}{side}-'
		for index, token in enumerate(tokens):
			if token.startswith(marker):
				positions[side] = index
				values[side] = token[len(marker) :]
				break

	if len(positions) < 4:
		return tokens

	top, right, bottom, left = values['t'], values['r'], values['b'], values['l']
	if top == right == bottom == left:
		merged = [f'{prefix}-{top}']
	elif top == bottom and right == left:
		merged = [f'{prefix}y-{top}', f'{prefix}x-{right}']
	else:
		return tokens

	first = min(positions.values())
	removed = set(positions.values())
	result: list[str] = []
	for index, token in enumerate(tokens):
		if index == first:
			result.extend(merged)
		if index not in removed:
			result.append(token)
	return result


def rgb_to_hex(value: str) -> str | None:
	match = RGB_RE.search(value)
	if not match:
		return None

	channels = [min(int(match.group(index)), 255) for index in (1, 2, 3)]
	hex_value = '#' + ''.join(f'{channel:02x}' for channel in channels)

	alpha_raw = match.group(4)
	if alpha_raw:
		try:
			alpha = float(alpha_raw[:-1]) / 100 if alpha_raw.endswith('%') else float(alpha_raw)
		except ValueError:
			return hex_value
		if 0 <= alpha < 1:
			hex_value += f'{round(alpha * 255):02x}'
	return hex_value


def normalize_color(value: str) -> str:
	return re.sub(r'\s+', ' ', value).strip()


def map_color(prefix: str, value: str | None) -> str | None:
	if not value:
		return None

	normalized = normalize_color(value)
	palette_name = COLOR_PALETTE.get(normalized)
	if palette_name:
		return f'{prefix}-{palette_name}'

	hex_value = rgb_to_hex(normalized)
	if hex_value:
		return _arbitrary(prefix, hex_value)

	return _arbitrary(prefix, value)


def map_font_family(value: str) -> str:
	lower = value.lower()
	if 'mono' in lower or 'courier' in lower or 'consolas' in lower:
		return 'font-mono'
	if 'serif' in lower and 'sans-serif' not in lower:
		return 'font-serif'
	if 'sans-serif' in lower or 'arial' in lower or 'helvetica' in lower or 'system-ui' in lower:
		return 'font-sans'
	return _arbitrary('font', value)


def map_corner_radius(tokens: list[str], prefix: str, value: str | None) -> None:
	if not value or value == '0px':
		return
	radius = BORDER_RADIUS_MAP.get(value)
	if radius == 'DEFAULT':
		tokens.append(prefix)
	elif radius:
		tokens.append(f'{prefix}-{radius}')
	else:
		tokens.append(_arbitrary(prefix, value))


# --- Category handlers (в порядке вывода) ---


def _map_spacing(css: CSS, tokens: list[str]) -> None:
	for prefix, shorthand, sides in (
		('p', 'padding', ('padding-top', 'padding-right', 'padding-bottom', 'padding-left')),
		('m', 'margin', ('margin-top', 'margin-right', 'margin-bottom', 'margin-left')),
	):
		group: list[str] = []
		if css.get(shorthand):
			group.extend(handle_shorthand_spacing(prefix, shorthand, css[shorthand]))
		else:
			for side, key in zip(('t', 'r', 'b', 'l'), sides):
				add_spacing_class(group, f'{prefix}{side}', css.get(key))
		tokens.extend(optimize_spacing(prefix, group))


def _map_layout(css: CSS, tokens: list[str]) -> None:
	_keyword(tokens, DISPLAY_MAP, 'display', css.get('display'))

	position = css.get('position')
	if position:
		tokens.append(position if position in POSITION_KEYWORDS else _arbitrary_property('position', position))

	for side in ('top', 'right', 'bottom', 'left'):
		add_spacing_class(tokens, side, css.get(side))

	float_value = css.get('float')
	if float_value:
		tokens.append(f'float-{float_value}' if SIMPLE_KEYWORD_RE.match(float_value) else _arbitrary_property('float', float_value))

	_keyword(tokens, BOX_SIZING_MAP, 'box-sizing', css.get('box-sizing'))


def _map_sizing(css: CSS, tokens: list[str]) -> None:
	_scaled(tokens, 'w', css.get('width'), WIDTH_MAP, SPACING_SCALE)
	_scaled(tokens, 'h', css.get('height'), HEIGHT_MAP, SPACING_SCALE)
	_scaled(tokens, 'min-w', css.get('min-width'), SPACING_SCALE)
	_scaled(tokens, 'min-h', css.get('min-height'), SPACING_SCALE)
	_scaled(tokens, 'max-w', css.get('max-width'), MAX_WIDTH_MAP, SPACING_SCALE)
	_scaled(tokens, 'max-h', css.get('max-height'), SPACING_SCALE)


def _map_flex_grid(css: CSS, tokens: list[str]) -> None:
	_keyword(tokens, FLEX_DIRECTION_MAP, 'flex-direction', css.get('flex-direction'))
	_keyword(tokens, FLEX_WRAP_MAP, 'flex-wrap', css.get('flex-wrap'))
	_keyword(tokens, JUSTIFY_CONTENT_MAP, 'justify-content', css.get('justify-content'))
	_keyword(tokens, ALIGN_ITEMS_MAP, 'align-items', css.get('align-items'))
	_keyword(tokens, ALIGN_CONTENT_MAP, 'align-content', css.get('align-content'))
	_keyword(tokens, ALIGN_SELF_MAP, 'align-self', css.get('align-self'))

	add_spacing_class(tokens, 'gap', css.get('gap'))
	add_spacing_class(tokens, 'gap-y', css.get('row-gap'))
	add_spacing_class(tokens, 'gap-x', css.get('column-gap'))

	grow = css.get('flex-grow')
	if grow:
		tokens.append({'1': 'grow', '0': 'grow-0'}.get(grow) or _arbitrary('grow', grow))
	shrink = css.get('flex-shrink')
	if shrink:
		tokens.append({'1': 'shrink', '0': 'shrink-0'}.get(shrink) or _arbitrary('shrink', shrink))
	_scaled(tokens, 'basis', css.get('flex-basis'), WIDTH_MAP, SPACING_SCALE)

	order = css.get('order')
	if order:
		if order == '0':
			tokens.append('order-none')
		elif ORDER_RE.fullmatch(order) and 1 <= int(order) <= 12:
			tokens.append(f'order-{order}')
		else:
			tokens.append(_arbitrary('order', order))

	columns = css.get('grid-template-columns')
	if columns:
		tokens.append(_arbitrary('grid-cols', columns))
	rows = css.get('grid-template-rows')
	if rows:
		tokens.append(_arbitrary('grid-rows', rows))
	_keyword(tokens, GRID_AUTO_FLOW_MAP, 'grid-auto-flow', css.get('grid-auto-flow'))
	for prop, prefix in (
		('grid-column', 'col'),
		('grid-row', 'row'),
		('grid-auto-columns', 'auto-cols'),
		('grid-auto-rows', 'auto-rows'),
	):
		value = css.get(prop)
		if value:
			tokens.append(_arbitrary(prefix, value))


def _map_typography(css: CSS, tokens: list[str]) -> None:
	_scaled(tokens, 'text', css.get('font-size'), FONT_SIZE_MAP)
	_scaled(tokens, 'font', css.get('font-weight'), FONT_WEIGHT_MAP)

	font_style = css.get('font-style')
	if font_style:
		if font_style == 'italic' or font_style.startswith('oblique'):
			tokens.append('italic')
		elif font_style == 'normal':
			tokens.append('not-italic')
		else:
			tokens.append(_arbitrary_property('font-style', font_style))

	font_family = css.get('font-family')
	if font_family:
		tokens.append(map_font_family(font_family))

	_scaled(tokens, 'leading', css.get('line-height'), LINE_HEIGHT_MAP)

	letter_spacing = css.get('letter-spacing')
	if letter_spacing:
		tokens.append(_arbitrary('tracking', letter_spacing))

	text_align = css.get('text-align')
	if text_align:
		tokens.append(f'text-{text_align}' if text_align in TEXT_ALIGN_KEYWORDS else _arbitrary_property('text-align', text_align))

	decoration = css.get('text-decoration')
	if decoration:
		decoration_tokens = []
		if 'underline' in decoration:
			decoration_tokens.append('underline')
		if 'line-through' in decoration:
			decoration_tokens.append('line-through')
		if 'overline' in decoration:
			decoration_tokens.append('overline')
		if decoration.split()[0] == 'none':
			decoration_tokens.append('no-underline')
		tokens.extend(decoration_tokens or [_arbitrary_property('text-decoration', decoration)])

	_keyword(tokens, TEXT_TRANSFORM_MAP, 'text-transform', css.get('text-transform'))
	_keyword(tokens, WHITE_SPACE_MAP, 'white-space', css.get('white-space'))
	_keyword(tokens, WORD_BREAK_MAP, 'word-break', css.get('word-break'))

	word_spacing = css.get('word-spacing')
	if word_spacing:
		tokens.append(_arbitrary_property('word-spacing', word_spacing))

	_keyword(tokens, LIST_STYLE_TYPE_MAP, 'list-style-type', css.get('list-style-type'))
	list_position = css.get('list-style-position')
	if list_position:
		tokens.append(f'list-{list_position}' if list_position in ('inside', 'outside') else _arbitrary_property('list-style-position', list_position))


def _map_color(css: CSS, tokens: list[str]) -> None:
	for prop, prefix in (('color', 'text'), ('background-color', 'bg')):
		token = map_color(prefix, css.get(prop))
		if token:
			tokens.append(token)

	background_image = css.get('background-image')
	if background_image:
		tokens.append(_arbitrary('bg', background_image))


def _map_border(css: CSS, tokens: list[str]) -> None:
	border = css.get('border')
	if border:
		parts = border.split(' ')
		width = parts[0]
		tokens.append(BORDER_WIDTH_MAP.get(width) or _arbitrary('border', width))
		if len(parts) >= 2:
			style_token = BORDER_STYLE_MAP.get(parts[1])
			if style_token:
				tokens.append(style_token)
		if len(parts) >= 3:
			color_token = map_color('border', ' '.join(parts[2:]))
			if color_token:
				tokens.append(color_token)
	else:
		for side, letter in (('top', 't'), ('right', 'r'), ('bottom', 'b'), ('left', 'l')):
			width = css.get(f'border-{side}-width')
			if width and css.get(f'border-{side}-style') != 'none':
				tokens.append(f'border-{letter}' if width == '1px' else _arbitrary(f'border-{letter}', width))

	radius = css.get('border-radius')
	if radius:
		radius_token = BORDER_RADIUS_MAP.get(radius)
		if radius_token == 'DEFAULT':
			tokens.append('rounded')
		elif radius_token:
			tokens.append(f'rounded-{radius_token}')
		else:
			tokens.append(_arbitrary('rounded', radius))
	else:
		map_corner_radius(tokens, 'rounded-tl', css.get('border-top-left-radius'))
		map_corner_radius(tokens, 'rounded-tr', css.get('border-top-right-radius'))
		map_corner_radius(tokens, 'rounded-bl', css.get('border-bottom-left-radius'))
		map_corner_radius(tokens, 'rounded-br', css.get('border-bottom-right-radius'))


def _map_effects(css: CSS, tokens: list[str]) -> None:
	opacity = css.get('opacity')
	if opacity and opacity != '1':
		_scaled(tokens, 'opacity', opacity, OPACITY_MAP)

	box_shadow = css.get('box-shadow')
	if box_shadow and box_shadow != 'none':
		tokens.append(_arbitrary('shadow', box_shadow))


def _map_overflow(css: CSS, tokens: list[str]) -> None:
	overflow = css.get('overflow')
	if overflow and overflow != 'visible' and ' ' not in overflow:
		tokens.append(f'overflow-{overflow}')
	else:
		for axis in ('x', 'y'):
			value = css.get(f'overflow-{axis}')
			if value and value != 'visible':
				tokens.append(f'overflow-{axis}-{value}')

	z_index = css.get('z-index')
	if z_index and z_index != 'auto':
		tokens.append(f'z-{z_index}' if z_index in Z_INDEX_SCALE else _arbitrary('z', z_index))


def _map_cursor(css: CSS, tokens: list[str]) -> None:
	cursor = css.get('cursor')
	if cursor and cursor != 'auto':
		tokens.append(f'cursor-{cursor}' if SIMPLE_KEYWORD_RE.match(cursor) else _arbitrary('cursor', cursor))

	if css.get('pointer-events') == 'none':
		tokens.append('pointer-events-none')


def _map_media(css: CSS, tokens: list[str]) -> None:
	object_fit = css.get('object-fit')
	if object_fit:
		tokens.append(f'object-{object_fit}' if object_fit in OBJECT_FIT_KEYWORDS else _arbitrary_property('object-fit', object_fit))

	aspect_ratio = css.get('aspect-ratio')
	if aspect_ratio and aspect_ratio != 'auto':
		token = ASPECT_RATIO_MAP.get(aspect_ratio)
		tokens.append(token if token else _arbitrary('aspect', re.sub(r'\s*/\s*', '/', aspect_ratio, count=1)))


CATEGORY_HANDLERS: tuple[Callable[[CSS, list[str]], None], ...] = (
	_map_spacing,
	_map_layout,
	_map_sizing,
	_map_flex_grid,
	_map_typography,
	_map_color,
	_map_border,
	_map_effects,
	_map_overflow,
	_map_cursor,
	_map_media,
)


def to_classes(style: Mapping[str, str] | None) -> list[str]:
	"""Перевести StyleMap в упорядоченный список utility-классов без повторов."""
	if not style:
		return []

	css: CSS = {}
	for key, value in style.items():
		if value is None:
			continue
		text = str(value).strip()
		if text:
			css[str(key)] = text

	tokens: list[str] = []
	for handler in CATEGORY_HANDLERS:
		_run_handler(handler, css, tokens)

	return list(dict.fromkeys(tokens))


def _run_handler(handler: Callable[[CSS, list[str]], None], css: CSS, tokens: list[str]) -> None:
	"""Запустить обработчик категории; при ошибке повторить по одному свойству."""
	mark = len(tokens)
	try:
		handler(css, tokens)
		return
	except Exception as e:
		del tokens[mark:]
		logger.debug(f'Utility class mapping for {handler.__name__} retried per property: {type(e).__name__}: {e}')

	# Свойство, на котором обработчик падает, уходит в произвольную форму,
	# остальные свойства категории маппятся как обычно
	for prop, value in css.items():
		single: list[str] = []
		try:
			handler({prop: value}, single)
		except Exception as e:
			logger.debug(f'Utility class mapping fell back for {prop}: {type(e).__name__}: {e}')
			single = [_arbitrary_property(prop, value)]
		tokens.extend(single)
