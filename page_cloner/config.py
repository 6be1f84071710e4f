"""Конфигурация page_cloner из переменных окружения и файла .env."""

import logging
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class FlatEnvConfig(BaseSettings):
	"""Все переменные окружения в плоском пространстве имен."""

	model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', case_sensitive=True, extra='allow')

	# Логирование
	PAGE_CLONER_LOGGING_LEVEL: str = Field(default='info')
	CDP_LOGGING_LEVEL: str = Field(default='WARNING')
	PAGE_CLONER_DEBUG_LOG_FILE: str | None = Field(default=None)
	PAGE_CLONER_INFO_LOG_FILE: str | None = Field(default=None)
	PAGE_CLONER_SETUP_LOGGING: bool = Field(default=True)

	# Подключение к браузеру
	PAGE_CLONER_CDP_URL: str = Field(default='http://localhost:9222')

	# Значения по умолчанию для ExtractionOptions
	PAGE_CLONER_MAX_DEPTH: int | None = Field(default=None)
	PAGE_CLONER_EXTRACT_CSS: bool = Field(default=True)
	PAGE_CLONER_USE_PLACEHOLDERS: bool = Field(default=False)
	PAGE_CLONER_DETECT_COMPONENTS: bool = Field(default=True)
	PAGE_CLONER_EXTRACT_PSEUDO: bool = Field(default=True)


class Config:
	"""Прокси к FlatEnvConfig.

	Перечитывает переменные окружения при каждом доступе, чтобы тесты и CLI
	могли менять их на лету.
	"""

	def __getattr__(self, attribute_name: str) -> Any:
		if attribute_name.startswith('_'):
			raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{attribute_name}'")

		env_config_instance = FlatEnvConfig()
		if attribute_name in FlatEnvConfig.model_fields:
			return getattr(env_config_instance, attribute_name)

		raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{attribute_name}'")


# Create singleton instance
CONFIG = Config()
