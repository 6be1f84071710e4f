"""
Tests for PageCloneService on top of a fake page and a fake isolated context.
"""

import pytest

from builders import FakeStyleContext, sample_snapshot

from page_cloner.dom_processing.design_properties import SNAPSHOT_COMPUTED_STYLES
from page_cloner.dom_processing.manager import PageCloneService
from page_cloner.dom_processing.models import ExtractionOptions
from page_cloner.exceptions import ElementNotFoundError, ExtractionError


class FakePage:
	def __init__(self, selectors: dict[str, int] | None = None, marked: int = 1, fail_marking: bool = False):
		self.selectors = selectors or {}
		self.marked = marked
		self.fail_marking = fail_marking
		self.calls: list[tuple] = []

	async def get_url_and_title(self):
		return 'https://example.test/', 'Example'

	async def get_device_pixel_ratio(self):
		return 2.0

	async def capture_snapshot(self, computed_styles):
		self.calls.append(('capture_snapshot', computed_styles))
		return sample_snapshot()

	async def get_backend_node_id(self, selector):
		if selector not in self.selectors:
			raise ElementNotFoundError(selector)
		return self.selectors[selector]

	async def mark_components(self, root_selector=None):
		self.calls.append(('mark_components', root_selector))
		if self.fail_marking:
			raise RuntimeError('Runtime.evaluate failed')
		return self.marked

	async def clear_component_marks(self):
		self.calls.append(('clear_component_marks',))
		return self.marked

	async def mark_image_sizes(self, root_selector=None):
		self.calls.append(('mark_image_sizes', root_selector))
		if self.fail_marking:
			raise RuntimeError('Runtime.evaluate failed')
		return 1

	async def clear_image_size_marks(self):
		self.calls.append(('clear_image_size_marks',))


class ContextFactory:
	def __init__(self):
		self.contexts: list[FakeStyleContext] = []

	def __call__(self) -> FakeStyleContext:
		context = FakeStyleContext()
		self.contexts.append(context)
		return context


def make_service(page=None, options=None):
	factory = ContextFactory()
	service = PageCloneService(page or FakePage(), style_context_factory=factory, options=options or ExtractionOptions())
	return service, factory


class TestClonePage:
	@pytest.mark.asyncio
	async def test_page_document(self):
		service, factory = make_service()

		result = (await service.clone_page()).to_dict()

		assert result['url'] == 'https://example.test/'
		assert result['title'] == 'Example'
		assert result['timestamp'].endswith('Z')
		assert result['sectionCount'] == 1

		section = result['sections'][0]
		assert section['section'] == 'content'
		assert section['tag'] == 'body'

		card = section['children'][0]
		assert card['tag'] == 'div'
		assert card['textContent'] == 'Hello world'
		assert card['reactComponent'] == 'Card'
		assert card['pseudoElements'] == {'before': {'content': '"★"', 'display': 'inline'}}

		image = card['children'][0]
		assert image['tag'] == 'img'
		assert image['src'] == 'https://example.test/a.png'
		assert image['alt'] == 'Logo'

		assert len(section['children']) == 1
		assert all(context.closed for context in factory.contexts)

	@pytest.mark.asyncio
	async def test_snapshot_requests_design_properties(self):
		page = FakePage()
		service, _ = make_service(page)

		await service.clone_page()

		assert ('capture_snapshot', SNAPSHOT_COMPUTED_STYLES) in page.calls

	@pytest.mark.asyncio
	async def test_component_marks_are_cleared(self):
		page = FakePage(marked=3)
		service, _ = make_service(page)

		await service.clone_page()

		names = [call[0] for call in page.calls]
		assert names == ['mark_components', 'capture_snapshot', 'clear_component_marks']

	@pytest.mark.asyncio
	async def test_component_detection_failure_is_not_fatal(self):
		page = FakePage(fail_marking=True)
		service, _ = make_service(page)

		result = await service.clone_page()

		assert result.section_count == 1
		assert ('clear_component_marks',) not in page.calls

	@pytest.mark.asyncio
	async def test_detection_disabled_skips_marking(self):
		page = FakePage()
		service, _ = make_service(page, ExtractionOptions(detect_components=False))

		result = (await service.clone_page()).to_dict()

		assert [call[0] for call in page.calls] == ['capture_snapshot']
		assert 'reactComponent' not in result['sections'][0]['children'][0]

	@pytest.mark.asyncio
	async def test_placeholders_use_natural_image_size(self):
		page = FakePage()
		service, _ = make_service(page, ExtractionOptions(use_placeholders=True))

		result = (await service.clone_page()).to_dict()

		image = result['sections'][0]['children'][0]['children'][0]
		assert image['src'] == 'placeholder://640x480'
		assert [call[0] for call in page.calls] == [
			'mark_components',
			'mark_image_sizes',
			'capture_snapshot',
			'clear_component_marks',
			'clear_image_size_marks',
		]

	@pytest.mark.asyncio
	async def test_image_size_marking_skipped_without_placeholders(self):
		page = FakePage()
		service, _ = make_service(page)

		await service.clone_page()

		assert ('mark_image_sizes', None) not in page.calls

	@pytest.mark.asyncio
	async def test_no_css_means_no_isolated_context(self):
		service, factory = make_service(options=ExtractionOptions(extract_css=False))

		result = (await service.clone_page()).to_dict()

		assert factory.contexts == []
		assert 'css' not in result['sections'][0]['children'][0]['children'][0]


class TestCloneElement:
	@pytest.mark.asyncio
	async def test_selected_element(self):
		page = FakePage(selectors={'.card': 104})
		service, factory = make_service(page)

		result = (await service.clone_element('.card')).to_dict()

		assert result['mode'] == 'element-select'
		assert result['tree']['tag'] == 'div'
		assert result['tree']['reactComponent'] == 'Card'
		assert ('mark_components', '.card') in page.calls
		assert factory.contexts[0].closed

	@pytest.mark.asyncio
	async def test_unknown_selector(self):
		service, _ = make_service(FakePage())

		with pytest.raises(ElementNotFoundError) as exc_info:
			await service.clone_element('#missing')

		assert exc_info.value.selector == '#missing'

	@pytest.mark.asyncio
	async def test_element_outside_body(self):
		service, _ = make_service(FakePage(selectors={'head': 102}))

		with pytest.raises(ElementNotFoundError):
			await service.clone_element('head')

	@pytest.mark.asyncio
	async def test_invisible_element(self):
		service, factory = make_service(FakePage(selectors={'span': 108}))

		with pytest.raises(ExtractionError):
			await service.clone_element('span')

		assert factory.contexts[0].closed
