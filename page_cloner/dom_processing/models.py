from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from page_cloner.config import CONFIG

StyleMap = dict[str, str]

MAX_TEXT_LENGTH = 500


# ========== Helper Functions ==========


def cap_text_length(text: str, max_length: int) -> str:
	"""Ограничить длину текста, добавив многоточие."""
	if len(text) <= max_length:
		return text
	return text[:max_length] + '...'


def utc_timestamp() -> str:
	return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


# ========== Element source ==========


class NodeType(int, Enum):
	"""Типы DOM-узлов в том виде, как их отдаёт DOMSnapshot."""

	ELEMENT_NODE = 1
	ATTRIBUTE_NODE = 2
	TEXT_NODE = 3
	CDATA_SECTION_NODE = 4
	COMMENT_NODE = 8
	DOCUMENT_NODE = 9
	DOCUMENT_TYPE_NODE = 10
	DOCUMENT_FRAGMENT_NODE = 11


@dataclass(slots=True)
class DOMRect:
	x: float
	y: float
	width: float
	height: float

	def to_dict(self) -> dict[str, Any]:
		return {
			'x': self.x,
			'y': self.y,
			'width': self.width,
			'height': self.height,
		}

	def __json__(self) -> dict:
		return self.to_dict()


@dataclass(slots=True, eq=False)
class ElementSnapshot:
	"""
	Элемент отрендеренной страницы со всем, что нужно конвейеру извлечения.

	Дерево строится один раз из DOMSnapshot и дальше обходится синхронно.
	Сравнение по идентичности объекта.
	"""

	node_name: str
	backend_node_id: int = 0
	attributes: dict[str, str] = field(default_factory=dict)

	computed_styles: dict[str, str] | None = None
	"""None, если у элемента нет layout-бокса (display: none или внутри такого элемента)"""

	bounds: DOMRect | None = None
	"""Границы в CSS-пикселях документа"""

	children: list['ElementSnapshot'] = field(default_factory=list)
	"""Только дочерние элементы, в порядке документа"""

	text_nodes: list[str] = field(default_factory=list)
	"""Значения непосредственных текстовых узлов"""

	current_src: str | None = None
	natural_width: int | None = None
	natural_height: int | None = None

	pseudo_elements: dict[str, dict[str, str]] = field(default_factory=dict)
	"""Вычисленные стили ::before / ::after по имени псевдоэлемента"""

	component_name: str | None = None

	@property
	def tag_name(self) -> str:
		return self.node_name.lower()

	@property
	def has_layout(self) -> bool:
		return self.computed_styles is not None

	@property
	def is_display_contents(self) -> bool:
		"""Своего бокса нет, но потомки отрисованы (display: contents)."""
		if self.has_layout:
			return False
		return any(descendant.has_layout for descendant in self.iter_elements())

	def style(self, property_name: str) -> str:
		if not self.computed_styles:
			return ''
		return self.computed_styles.get(property_name, '')

	def get_attribute(self, name: str) -> str | None:
		return self.attributes.get(name)

	def iter_elements(self) -> Iterator['ElementSnapshot']:
		"""Обойти поддерево в порядке документа, включая сам элемент."""
		stack = [self]
		while stack:
			element = stack.pop()
			yield element
			stack.extend(reversed(element.children))

	def __repr__(self) -> str:
		return f'<{self.tag_name} backend_node_id={self.backend_node_id} children={len(self.children)}>'


# ========== Extracted tree ==========


@dataclass(slots=True)
class RepeatInfo:
	count: int
	note: str

	def to_dict(self) -> dict[str, Any]:
		return {'count': self.count, 'note': self.note}


@dataclass(slots=True)
class ExtractedNode:
	"""Узел выходного дерева. Незаполненные поля не попадают в JSON."""

	tag: str
	css: StyleMap | None = None
	classes: list[str] | None = None
	role: str | None = None
	text_content: str | None = None
	src: str | None = None
	alt: str | None = None
	href: str | None = None
	input_type: str | None = None
	placeholder: str | None = None
	svg_info: dict[str, str] | None = None
	react_component: str | None = None
	pseudo_elements: dict[str, dict[str, str]] | None = None
	children: list['ExtractedNode'] | None = None
	repeated: RepeatInfo | None = None
	truncated: bool | None = None
	depth: int | None = None

	def to_dict(self) -> dict[str, Any]:
		data: dict[str, Any] = {'tag': self.tag}
		if self.css is not None:
			data['css'] = dict(self.css)
		if self.classes is not None:
			data['classes'] = list(self.classes)
		if self.role is not None:
			data['role'] = self.role
		if self.text_content is not None:
			data['textContent'] = self.text_content
		if self.src is not None:
			data['src'] = self.src
		if self.alt is not None:
			data['alt'] = self.alt
		if self.href is not None:
			data['href'] = self.href
		if self.input_type is not None:
			data['inputType'] = self.input_type
		if self.placeholder is not None:
			data['placeholder'] = self.placeholder
		if self.svg_info is not None:
			data['svgInfo'] = dict(self.svg_info)
		if self.react_component is not None:
			data['reactComponent'] = self.react_component
		if self.pseudo_elements is not None:
			data['pseudoElements'] = {name: dict(styles) for name, styles in self.pseudo_elements.items()}
		if self.children is not None:
			data['children'] = [child.to_dict() for child in self.children]
		if self.repeated is not None:
			data['repeated'] = self.repeated.to_dict()
		if self.truncated is not None:
			data['truncated'] = self.truncated
		if self.depth is not None:
			data['depth'] = self.depth
		return data

	def __json__(self) -> dict:
		return self.to_dict()


@dataclass(slots=True)
class Section:
	"""Узел, помеченный именем ориентира (landmark) или синтетическим 'content'."""

	section: str
	node: ExtractedNode

	def to_dict(self) -> dict[str, Any]:
		return {'section': self.section, **self.node.to_dict()}

	def __json__(self) -> dict:
		return self.to_dict()


# ========== Options & output documents ==========


class ExtractionOptions(BaseModel):
	"""Параметры одного прохода извлечения."""

	model_config = ConfigDict(extra='forbid')

	max_depth: int | None = Field(default=None, ge=0)
	extract_css: bool = True
	use_placeholders: bool = False
	detect_components: bool = True
	extract_pseudo_elements: bool = True

	@classmethod
	def from_config(cls, **overrides: Any) -> 'ExtractionOptions':
		values: dict[str, Any] = {
			'max_depth': CONFIG.PAGE_CLONER_MAX_DEPTH,
			'extract_css': CONFIG.PAGE_CLONER_EXTRACT_CSS,
			'use_placeholders': CONFIG.PAGE_CLONER_USE_PLACEHOLDERS,
			'detect_components': CONFIG.PAGE_CLONER_DETECT_COMPONENTS,
			'extract_pseudo_elements': CONFIG.PAGE_CLONER_EXTRACT_PSEUDO,
		}
		values.update({key: value for key, value in overrides.items() if value is not None})
		return cls(**values)


class PageCloneResult(BaseModel):
	"""Документ извлечения всей страницы."""

	model_config = ConfigDict(populate_by_name=True)

	url: str
	title: str
	timestamp: str = Field(default_factory=utc_timestamp)
	section_count: int = Field(alias='sectionCount')
	sections: list[dict[str, Any]]

	def to_dict(self) -> dict[str, Any]:
		return self.model_dump(by_alias=True)


class ElementCloneResult(BaseModel):
	"""Документ извлечения одного выбранного элемента."""

	url: str
	title: str
	timestamp: str = Field(default_factory=utc_timestamp)
	mode: Literal['element-select'] = 'element-select'
	tree: dict[str, Any]

	def to_dict(self) -> dict[str, Any]:
		return self.model_dump(by_alias=True)
