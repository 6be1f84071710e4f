import logging

from page_cloner.dom_processing.baseline import BaselineStyleResolver
from page_cloner.dom_processing.design_properties import (
	AUTO_MEANINGLESS,
	DESIGN_PROPERTIES,
	NORMAL_MEANINGLESS,
	TRIVIAL_VALUES,
)
from page_cloner.dom_processing.models import ElementSnapshot, StyleMap

logger = logging.getLogger(__name__)


class StyleDiffEngine:
	"""Оставляет только те вычисленные значения, которые отличаются от дефолтов тега и что-то значат."""

	def __init__(self, baseline: BaselineStyleResolver, properties: list[str] | None = None):
		self.baseline = baseline
		self.properties = list(properties or DESIGN_PROPERTIES)

	def diff(self, element: ElementSnapshot) -> StyleMap:
		defaults = self.baseline.resolve_defaults(element.tag_name)
		result: StyleMap = {}

		for prop in self.properties:
			value = element.style(prop).strip()
			if not value:
				continue
			if value == defaults.get(prop, ''):
				continue
			if value in TRIVIAL_VALUES.get(prop, ()):
				continue
			if value == 'auto' and prop in AUTO_MEANINGLESS:
				continue
			if value == 'normal' and prop in NORMAL_MEANINGLESS:
				continue
			result[prop] = value

		return result
