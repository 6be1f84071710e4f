"""Исключения page_cloner."""


class PageClonerError(Exception):
	"""Базовое исключение для всех ошибок page_cloner."""

	pass


class ExtractionError(PageClonerError):
	"""Корневой элемент не прошёл проверку видимости, дерево не построено."""

	def __init__(self, message: str, selector: str | None = None):
		super().__init__(message)
		self.message = message
		self.selector = selector


class ElementNotFoundError(ExtractionError):
	"""Селектор не нашёл элемент в документе или в снимке."""

	def __init__(self, selector: str):
		super().__init__(f'No element matches selector {selector!r}', selector=selector)


class BrowserConnectionError(PageClonerError):
	"""Не удалось подключиться к браузеру по CDP или найти вкладку."""

	def __init__(self, message: str, cdp_url: str | None = None):
		super().__init__(message)
		self.message = message
		self.cdp_url = cdp_url
