from builders import SnapshotBuilder, sample_snapshot

from page_cloner.dom_processing.annotators import (
	COMPONENT_NAME_ATTRIBUTE,
	NATURAL_SIZE_ATTRIBUTE,
	component_names_from_snapshot,
)
from page_cloner.dom_processing.enhanced_snapshot import build_element_tree, collect_tag_names, find_by_backend_node_id


class TestBuildElementTree:
	def test_returns_body(self):
		root = build_element_tree(sample_snapshot())
		assert root.tag_name == 'body'
		assert root.backend_node_id == 103

	def test_head_is_not_under_body(self):
		root = build_element_tree(sample_snapshot())
		assert find_by_backend_node_id(root, 102) is None

	def test_children_and_direct_text(self):
		root = build_element_tree(sample_snapshot())
		card, span = root.children

		assert card.tag_name == 'div'
		assert card.attributes == {'class': 'card'}
		assert card.text_nodes == ['Hello', ' world']
		assert [child.tag_name for child in card.children] == ['img']
		assert span.tag_name == 'span'
		assert not span.has_layout
		assert span.bounds is None

	def test_component_marker_is_moved_off_attributes(self):
		card = build_element_tree(sample_snapshot()).children[0]
		assert card.component_name == 'Card'
		assert COMPONENT_NAME_ATTRIBUTE not in card.attributes

	def test_pseudo_element_styles_attach_to_host(self):
		card = build_element_tree(sample_snapshot()).children[0]
		assert card.pseudo_elements == {'before': {'display': 'inline', 'visibility': 'visible', 'content': '"★"'}}
		assert all(child.tag_name != '::before' for child in card.children)

	def test_image_source_and_natural_size(self):
		image = find_by_backend_node_id(build_element_tree(sample_snapshot()), 107)
		assert image.current_src == 'https://example.test/a.png'
		assert image.get_attribute('src') == '/a.png'
		assert image.natural_width == 640
		assert image.natural_height == 480
		assert NATURAL_SIZE_ATTRIBUTE not in image.attributes

	def test_unreadable_natural_size_is_ignored(self):
		builder = SnapshotBuilder()
		document = builder.add(9, '#document')
		body = builder.element('BODY', document, styles={'display': 'block'}, bounds=[0, 0, 10, 10])
		for size in ('wide', '²x3', '0x0'):
			builder.element('IMG', body, attributes={NATURAL_SIZE_ATTRIBUTE: size}, styles={'display': 'inline'}, bounds=[0, 0, 10, 10])

		images = build_element_tree(builder.build()).children

		assert [(image.natural_width, image.natural_height) for image in images] == [(None, None)] * 3
		assert all(image.attributes == {} for image in images)

	def test_bounds_are_in_css_pixels(self):
		card = build_element_tree(sample_snapshot(), pixel_ratio=2.0).children[0]
		assert card.bounds.width == 200
		assert card.bounds.height == 100

	def test_styles_follow_requested_property_order(self):
		properties = ['visibility', 'display', 'content']
		root = build_element_tree(sample_snapshot(properties), computed_styles=properties)
		assert root.computed_styles == {'visibility': 'visible', 'display': 'block'}

	def test_empty_snapshot(self):
		assert build_element_tree({'documents': [], 'strings': []}) is None

	def test_without_body_falls_back_to_first_element(self):
		builder = SnapshotBuilder()
		document = builder.add(9, '#document')
		svg = builder.element('svg', document, styles={'display': 'inline'}, bounds=[0, 0, 10, 10])
		builder.element('rect', svg, styles={'display': 'inline'}, bounds=[0, 0, 10, 10])

		root = build_element_tree(builder.build())

		assert root.tag_name == 'svg'
		assert [child.tag_name for child in root.children] == ['rect']

	def test_shadow_root_is_transparent(self):
		builder = SnapshotBuilder()
		document = builder.add(9, '#document')
		body = builder.element('BODY', document, styles={'display': 'block'}, bounds=[0, 0, 10, 10])
		host = builder.element('MY-WIDGET', body, styles={'display': 'block'}, bounds=[0, 0, 10, 10])
		shadow = builder.add(11, '#document-fragment', host)
		builder.element('BUTTON', shadow, styles={'display': 'inline-block'}, bounds=[0, 0, 10, 10])

		root = build_element_tree(builder.build())

		widget = root.children[0]
		assert [child.tag_name for child in widget.children] == ['button']


class TestTreeHelpers:
	def test_collect_tag_names(self):
		assert collect_tag_names(build_element_tree(sample_snapshot())) == {'body', 'div', 'img', 'span'}
		assert collect_tag_names(None) == set()

	def test_find_by_backend_node_id(self):
		root = build_element_tree(sample_snapshot())
		assert find_by_backend_node_id(root, 104).tag_name == 'div'
		assert find_by_backend_node_id(root, 999) is None
		assert find_by_backend_node_id(None, 104) is None

	def test_component_names_from_snapshot(self):
		assert component_names_from_snapshot(build_element_tree(sample_snapshot())) == {104: 'Card'}

	def test_iter_elements_is_document_order(self):
		root = build_element_tree(sample_snapshot())
		assert [element.tag_name for element in root.iter_elements()] == ['body', 'div', 'img', 'span']
