"""
Курированный список CSS-свойств, значимых для дизайна, и таблицы их «пустых» значений.

Порядок DESIGN_PROPERTIES важен: в этом порядке движок сравнения обходит свойства,
и в этом же порядке ключи попадают в StyleMap.
"""

DESIGN_PROPERTIES = [
	# Layout
	'display',
	'position',
	'top',
	'right',
	'bottom',
	'left',
	'float',
	'clear',
	'z-index',
	'overflow',
	'overflow-x',
	'overflow-y',
	# Flexbox
	'flex-direction',
	'flex-wrap',
	'justify-content',
	'align-items',
	'align-content',
	'align-self',
	'flex-grow',
	'flex-shrink',
	'flex-basis',
	'gap',
	'row-gap',
	'column-gap',
	'order',
	# Grid
	'grid-template-columns',
	'grid-template-rows',
	'grid-column',
	'grid-row',
	'grid-auto-flow',
	'grid-auto-columns',
	'grid-auto-rows',
	# Box model
	'width',
	'height',
	'min-width',
	'min-height',
	'max-width',
	'max-height',
	'margin-top',
	'margin-right',
	'margin-bottom',
	'margin-left',
	'padding-top',
	'padding-right',
	'padding-bottom',
	'padding-left',
	'box-sizing',
	# Typography
	'font-family',
	'font-size',
	'font-weight',
	'font-style',
	'line-height',
	'letter-spacing',
	'text-align',
	'text-decoration',
	'text-transform',
	'white-space',
	'word-break',
	'word-spacing',
	'color',
	# Background
	'background-color',
	'background-image',
	'background-size',
	'background-position',
	'background-repeat',
	# Border
	'border-top-width',
	'border-right-width',
	'border-bottom-width',
	'border-left-width',
	'border-top-style',
	'border-right-style',
	'border-bottom-style',
	'border-left-style',
	'border-top-color',
	'border-right-color',
	'border-bottom-color',
	'border-left-color',
	'border-top-left-radius',
	'border-top-right-radius',
	'border-bottom-left-radius',
	'border-bottom-right-radius',
	# Visual effects
	'opacity',
	'box-shadow',
	'text-shadow',
	'outline',
	'outline-width',
	'outline-style',
	'outline-color',
	'outline-offset',
	# Transform
	'transform',
	'transform-origin',
	# Cursor
	'cursor',
	'pointer-events',
	# List
	'list-style-type',
	'list-style-position',
	# Table
	'border-collapse',
	'border-spacing',
	# Replaced elements
	'object-fit',
	'object-position',
	'aspect-ratio',
]

# Значения, которые не несут дизайнерской информации даже если отличаются от дефолта тега
TRIVIAL_VALUES: dict[str, frozenset[str]] = {
	'background-color': frozenset({'rgba(0, 0, 0, 0)', 'transparent'}),
	'background-image': frozenset({'none'}),
	'box-shadow': frozenset({'none'}),
	'text-shadow': frozenset({'none'}),
	'transform': frozenset({'none'}),
	'outline': frozenset({'none'}),
	'outline-style': frozenset({'none'}),
	'border-top-style': frozenset({'none'}),
	'border-right-style': frozenset({'none'}),
	'border-bottom-style': frozenset({'none'}),
	'border-left-style': frozenset({'none'}),
	'float': frozenset({'none'}),
	'clear': frozenset({'none'}),
	'cursor': frozenset({'auto'}),
	'pointer-events': frozenset({'auto'}),
	'list-style-type': frozenset({'none', 'disc'}),
}

AUTO_MEANINGLESS = frozenset(
	{
		'top',
		'right',
		'bottom',
		'left',
		'margin-top',
		'margin-right',
		'margin-bottom',
		'margin-left',
		'width',
		'height',
		'min-width',
		'min-height',
		'max-width',
		'max-height',
		'z-index',
	}
)

NORMAL_MEANINGLESS = frozenset(
	{
		'font-style',
		'letter-spacing',
		'word-spacing',
		'white-space',
		'line-height',
		'word-break',
	}
)

# Группы для канонизации (порядок сторон: top, right, bottom, left)
RADIUS_CORNERS = (
	'border-top-left-radius',
	'border-top-right-radius',
	'border-bottom-right-radius',
	'border-bottom-left-radius',
)
BORDER_WIDTHS = ('border-top-width', 'border-right-width', 'border-bottom-width', 'border-left-width')
BORDER_STYLES = ('border-top-style', 'border-right-style', 'border-bottom-style', 'border-left-style')
BORDER_COLORS = ('border-top-color', 'border-right-color', 'border-bottom-color', 'border-left-color')
PADDING_SIDES = ('padding-top', 'padding-right', 'padding-bottom', 'padding-left')
MARGIN_SIDES = ('margin-top', 'margin-right', 'margin-bottom', 'margin-left')
POSITION_OFFSETS = ('top', 'right', 'bottom', 'left')

# Свойства flex-контейнера; gap тоже считается flex-свойством и у grid не сохраняется
FLEX_CONTAINER_PROPERTIES = (
	'flex-direction',
	'flex-wrap',
	'justify-content',
	'align-items',
	'align-content',
	'gap',
	'row-gap',
	'column-gap',
)
GRID_PROPERTIES = (
	'grid-template-columns',
	'grid-template-rows',
	'grid-column',
	'grid-row',
	'grid-auto-flow',
	'grid-auto-columns',
	'grid-auto-rows',
)

FLEX_DISPLAYS = frozenset({'flex', 'inline-flex'})
GRID_DISPLAYS = frozenset({'grid', 'inline-grid'})

# Свойства, нужные только снимку: видимость, краска SVG, содержимое псевдоэлементов
SNAPSHOT_EXTRA_PROPERTIES = [
	'visibility',
	'fill',
	'stroke',
	'content',
]

SNAPSHOT_COMPUTED_STYLES = DESIGN_PROPERTIES + [prop for prop in SNAPSHOT_EXTRA_PROPERTIES if prop not in DESIGN_PROPERTIES]

# Свойства псевдоэлементов ::before/::after, которые стоит показывать
PSEUDO_ELEMENT_PROPERTIES = [
	'display',
	'position',
	'top',
	'right',
	'bottom',
	'left',
	'width',
	'height',
	'background-color',
	'background-image',
	'color',
	'font-size',
	'font-weight',
	'font-family',
	'border-top-left-radius',
	'border-top-right-radius',
	'border-bottom-left-radius',
	'border-bottom-right-radius',
	'opacity',
	'transform',
	'margin-top',
	'margin-right',
	'margin-bottom',
	'margin-left',
	'padding-top',
	'padding-right',
	'padding-bottom',
	'padding-left',
]
