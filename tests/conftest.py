import asyncio
import os

os.environ.setdefault('PAGE_CLONER_SETUP_LOGGING', 'false')

import pytest

from builders import FakeStyleContext
from page_cloner.dom_processing.baseline import BaselineStyleResolver
from page_cloner.dom_processing.extractor import TreeExtractor
from page_cloner.dom_processing.style_diff import StyleDiffEngine


@pytest.fixture
def style_context() -> FakeStyleContext:
	return FakeStyleContext()


@pytest.fixture
def resolver(style_context: FakeStyleContext) -> BaselineStyleResolver:
	"""Готовый резолвер поверх фейкового контекста (для синхронных тестов)."""
	baseline = BaselineStyleResolver(style_context)
	asyncio.run(baseline.start())
	return baseline


@pytest.fixture
def extractor(resolver: BaselineStyleResolver) -> TreeExtractor:
	return TreeExtractor(StyleDiffEngine(resolver))
