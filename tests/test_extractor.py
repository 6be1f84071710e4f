"""
Tests for TreeExtractor.

Visibility filtering, depth limiting and tag-specific fields.
"""

from builders import make_element

from page_cloner.dom_processing.baseline import BaselineStyleResolver
from page_cloner.dom_processing.extractor import TreeExtractor, format_dimension
from page_cloner.dom_processing.models import ExtractionOptions
from page_cloner.dom_processing.style_diff import StyleDiffEngine


class TestTreeShape:
	def test_invisible_root_yields_none(self, extractor):
		assert extractor.extract(make_element('div', {'display': 'none'})) is None

	def test_none_root_yields_none(self, extractor):
		assert extractor.extract(None) is None

	def test_hidden_subtree_is_dropped(self, extractor):
		hidden = make_element('div', {'display': 'none'}, children=[make_element('span', text='secret')])
		root = make_element('div', children=[make_element('p', text='a'), hidden, make_element('p', text='b')])

		tree = extractor.extract(root)

		assert [child.tag for child in tree.children] == ['p', 'p']
		assert [child.text_content for child in tree.children] == ['a', 'b']

	def test_descendants_of_layoutless_parent_are_dropped(self, extractor):
		orphan = make_element('span', text='inside display: none', layout=False)
		root = make_element('div', children=[make_element('div', layout=False, children=[orphan])])

		assert extractor.extract(root).children is None

	def test_display_contents_wrapper_passes_children_through(self, extractor):
		paragraph = make_element('p', text='Rendered')
		wrapper = make_element('div', layout=False, bounds=None, children=[paragraph])
		root = make_element('body', children=[wrapper])

		tree = extractor.extract(root)

		contents = tree.children[0]
		assert contents.tag == 'div'
		assert contents.css == {'display': 'contents'}
		assert contents.classes == ['contents']
		assert contents.children[0].text_content == 'Rendered'

	def test_display_contents_wrapper_without_css(self, extractor):
		wrapper = make_element('div', layout=False, bounds=None, children=[make_element('p', text='x')])
		tree = extractor.extract(make_element('body', children=[wrapper]), ExtractionOptions(extract_css=False))
		assert tree.children[0].to_dict() == {'tag': 'div', 'children': [{'tag': 'p', 'textContent': 'x'}]}

	def test_leaf_has_no_children_key(self, extractor):
		tree = extractor.extract(make_element('div', text='x'))
		assert 'children' not in tree.to_dict()

	def test_children_keep_document_order(self, extractor):
		root = make_element('ul', children=[make_element('li', text=str(index)) for index in range(5)])
		tree = extractor.extract(root)
		assert [child.text_content for child in tree.children] == ['0', '1', '2', '3', '4']


class TestDepthLimit:
	def _chain(self, depth):
		element = make_element('div', text='leaf')
		for _ in range(depth):
			element = make_element('div', children=[element])
		return element

	def test_nodes_deeper_than_limit_are_truncated(self, extractor):
		tree = extractor.extract(self._chain(2), ExtractionOptions(max_depth=1))

		grandchild = tree.children[0].children[0]
		assert grandchild.to_dict() == {'tag': 'div', 'truncated': True, 'depth': 2}

	def test_zero_depth_means_unlimited(self, extractor):
		tree = extractor.extract(self._chain(3), ExtractionOptions(max_depth=0))

		node = tree
		while node.children:
			node = node.children[0]
		assert node.text_content == 'leaf'
		assert node.truncated is None

	def test_invisible_nodes_are_dropped_before_truncation(self, extractor):
		root = make_element('div', children=[make_element('div', children=[make_element('p', {'display': 'none'})])])
		tree = extractor.extract(root, ExtractionOptions(max_depth=1))
		assert tree.children[0].children is None


class TestStyles:
	def test_css_is_canonical_and_mapped_to_classes(self, extractor):
		element = make_element(
			'div',
			{
				'padding-top': '8px',
				'padding-right': '8px',
				'padding-bottom': '8px',
				'padding-left': '8px',
				'color': 'rgb(255, 255, 255)',
			},
		)

		node = extractor.extract(element)

		assert node.css == {'padding': '8px', 'color': 'rgb(255, 255, 255)'}
		assert node.classes == ['p-2', 'text-white']

	def test_no_css_when_nothing_differs(self, extractor):
		node = extractor.extract(make_element('div'))
		assert node.css is None
		assert node.classes is None

	def test_extract_css_disabled(self, extractor):
		node = extractor.extract(make_element('div', {'color': 'red'}), ExtractionOptions(extract_css=False))
		assert node.css is None
		assert node.classes is None

	def test_degraded_baseline_still_produces_tree(self):
		extractor = TreeExtractor(StyleDiffEngine(BaselineStyleResolver(None)))
		node = extractor.extract(make_element('div'))
		assert node.css['display'] == 'block'
		assert 'block' in node.classes


class TestTagSpecificFields:
	def test_role_is_captured(self, extractor):
		assert extractor.extract(make_element('div', attributes={'role': 'navigation'})).role == 'navigation'

	def test_direct_text_is_joined_and_trimmed(self, extractor):
		element = make_element('p', text=['  Hello ', 'world  '], children=[make_element('b', text='ignored')])
		node = extractor.extract(element)
		assert node.text_content == 'Hello world'
		assert node.children[0].text_content == 'ignored'

	def test_whitespace_only_text_is_omitted(self, extractor):
		assert extractor.extract(make_element('p', text='   \n ')).text_content is None

	def test_long_text_is_capped(self, extractor):
		node = extractor.extract(make_element('p', text='x' * 600))
		assert len(node.text_content) == 503
		assert node.text_content.endswith('...')

	def test_image_prefers_current_source(self, extractor):
		element = make_element('img', attributes={'src': '/small.png', 'alt': 'Logo'}, current_src='https://cdn.test/large.png')
		node = extractor.extract(element)
		assert node.src == 'https://cdn.test/large.png'
		assert node.alt == 'Logo'

	def test_image_falls_back_to_src_attribute(self, extractor):
		node = extractor.extract(make_element('img', attributes={'src': '/small.png'}))
		assert node.src == '/small.png'
		assert node.alt is None

	def test_image_placeholder_uses_natural_size(self, extractor):
		element = make_element('img', attributes={'src': '/a.png'}, natural_width=640, natural_height=480)
		node = extractor.extract(element, ExtractionOptions(use_placeholders=True))
		assert node.src == 'placeholder://640x480'

	def test_image_placeholder_falls_back_to_rendered_size(self, extractor):
		element = make_element('img', attributes={'src': '/a.png'}, bounds=(0, 0, 120.6, 40))
		node = extractor.extract(element, ExtractionOptions(use_placeholders=True))
		assert node.src == 'placeholder://120x40'

	def test_link_href(self, extractor):
		assert extractor.extract(make_element('a', attributes={'href': '/about'}, text='About')).href == '/about'

	def test_form_controls(self, extractor):
		input_node = extractor.extract(make_element('input', attributes={'type': 'email', 'placeholder': 'you@mail'}))
		textarea_node = extractor.extract(make_element('textarea', attributes={'placeholder': 'Message'}))

		assert input_node.input_type == 'email'
		assert input_node.placeholder == 'you@mail'
		assert textarea_node.input_type is None
		assert textarea_node.placeholder == 'Message'

	def test_svg_is_opaque_with_placeholder(self, extractor):
		path = make_element('path', attributes={'d': 'M0 0L10 10'})
		element = make_element(
			'svg',
			{'fill': 'rgb(0, 0, 0)', 'stroke': 'rgb(255, 0, 0)'},
			children=[path],
			attributes={'width': '24'},
			bounds=(0, 0, 24, 16.0),
		)

		node = extractor.extract(element)

		assert node.children is None
		assert node.svg_info == {
			'width': '24',
			'height': '16',
			'stroke': 'rgb(255, 0, 0)',
			'placeholder': (
				'<svg xmlns="http://www.w3.org/2000/svg" width="24" height="16" viewBox="0 0 24 16">'
				'<rect width="100%" height="100%" fill="currentColor" opacity="0.2"/></svg>'
			),
		}

	def test_svg_keeps_non_default_fill(self, extractor):
		element = make_element('svg', {'fill': 'rgb(59, 130, 246)', 'stroke': 'none'}, bounds=(0, 0, 12, 12))
		info = extractor.extract(element).svg_info
		assert info['fill'] == 'rgb(59, 130, 246)'
		assert 'stroke' not in info

	def test_format_dimension(self):
		assert format_dimension(16.0) == '16'
		assert format_dimension(16.5) == '16.5'
		assert format_dimension(None) == '0'


class TestSerialization:
	def test_to_dict_uses_camel_case_and_omits_unset(self, extractor):
		element = make_element('input', attributes={'type': 'text', 'placeholder': 'Search'})
		assert extractor.extract(element).to_dict() == {'tag': 'input', 'inputType': 'text', 'placeholder': 'Search'}
