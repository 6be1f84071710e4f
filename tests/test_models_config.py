import logging

import pytest
from pydantic import ValidationError

import page_cloner
from page_cloner.config import CONFIG
from page_cloner.dom_processing.models import (
	ElementCloneResult,
	ExtractedNode,
	ExtractionOptions,
	PageCloneResult,
	cap_text_length,
)
from page_cloner.exceptions import BrowserConnectionError, ElementNotFoundError, ExtractionError, PageClonerError
from page_cloner.logging_config import ClonerFormatter


class TestExtractionOptions:
	def test_defaults(self):
		options = ExtractionOptions()
		assert options.max_depth is None
		assert options.extract_css
		assert not options.use_placeholders
		assert options.detect_components
		assert options.extract_pseudo_elements

	def test_from_config_reads_environment(self, monkeypatch):
		monkeypatch.setenv('PAGE_CLONER_MAX_DEPTH', '4')
		monkeypatch.setenv('PAGE_CLONER_USE_PLACEHOLDERS', 'true')
		monkeypatch.setenv('PAGE_CLONER_DETECT_COMPONENTS', 'false')

		options = ExtractionOptions.from_config()

		assert options.max_depth == 4
		assert options.use_placeholders
		assert not options.detect_components

	def test_from_config_overrides_win_over_environment(self, monkeypatch):
		monkeypatch.setenv('PAGE_CLONER_MAX_DEPTH', '4')
		options = ExtractionOptions.from_config(max_depth=2, extract_css=None)
		assert options.max_depth == 2
		assert options.extract_css

	def test_negative_depth_is_rejected(self):
		with pytest.raises(ValidationError):
			ExtractionOptions(max_depth=-1)

	def test_unknown_options_are_rejected(self):
		with pytest.raises(ValidationError):
			ExtractionOptions(include_scripts=True)


class TestConfig:
	def test_values_are_reread_on_access(self, monkeypatch):
		monkeypatch.setenv('PAGE_CLONER_CDP_URL', 'http://browser:9333')
		assert CONFIG.PAGE_CLONER_CDP_URL == 'http://browser:9333'
		monkeypatch.setenv('PAGE_CLONER_CDP_URL', 'http://browser:9444')
		assert CONFIG.PAGE_CLONER_CDP_URL == 'http://browser:9444'

	def test_unknown_attribute(self):
		with pytest.raises(AttributeError):
			CONFIG.NOT_A_SETTING


class TestDocuments:
	def test_page_result_uses_camel_case(self):
		result = PageCloneResult(
			url='https://example.test/',
			title='Example',
			section_count=1,
			sections=[{'section': 'content', 'tag': 'body'}],
		).to_dict()

		assert list(result) == ['url', 'title', 'timestamp', 'sectionCount', 'sections']
		assert result['timestamp'].endswith('Z')

	def test_element_result_mode(self):
		result = ElementCloneResult(url='u', title='t', tree=ExtractedNode(tag='div').to_dict()).to_dict()
		assert result['mode'] == 'element-select'
		assert result['tree'] == {'tag': 'div'}

	def test_cap_text_length(self):
		assert cap_text_length('short', 10) == 'short'
		assert cap_text_length('abcdef', 3) == 'abc...'

	def test_node_field_order(self):
		node = ExtractedNode(tag='a', href='/x', text_content='X', css={'color': 'red'}, classes=['text-[red]'])
		assert list(node.to_dict()) == ['tag', 'css', 'classes', 'textContent', 'href']


class TestErrors:
	def test_hierarchy(self):
		assert issubclass(ExtractionError, PageClonerError)
		assert issubclass(ElementNotFoundError, ExtractionError)
		assert issubclass(BrowserConnectionError, PageClonerError)

	def test_error_context(self):
		error = ElementNotFoundError('#app')
		assert error.selector == '#app'
		assert '#app' in str(error)
		assert BrowserConnectionError('down', cdp_url='http://x').cdp_url == 'http://x'


class TestPackage:
	def test_lazy_exports(self):
		assert page_cloner.ExtractionOptions is ExtractionOptions
		assert callable(page_cloner.to_classes)

	def test_unknown_export(self):
		with pytest.raises(AttributeError):
			page_cloner.DoesNotExist

	def test_formatter_shortens_names_outside_debug(self):
		formatter = ClonerFormatter('[%(name)s] %(message)s', logging.INFO)
		record = logging.LogRecord('page_cloner.dom_processing.manager', logging.INFO, __file__, 1, 'hello', None, None)
		assert formatter.format(record) == '[dom] hello'
