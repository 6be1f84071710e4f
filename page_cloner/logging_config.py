import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from page_cloner.config import CONFIG

# Логгеры CDP настраиваются отдельно, уровнем CDP_LOGGING_LEVEL
CDP_LOGGER_NAMES = [
	'websockets.client',
	'cdp_use',
	'cdp_use.client',
	'cdp_use.cdp',
	'cdp_use.cdp.registry',
]

EXTERNAL_LOGGER_NAMES = [
	'httpx',
	'httpcore',
	'asyncio',
	'urllib3',
	'charset_normalizer',
	'websockets',
]


class ClonerFormatter(logging.Formatter):
	def __init__(self, format_string, level_value):
		super().__init__(format_string)
		self.level_value = level_value

	def format(self, log_record):
		# Сокращать имена только вне режима DEBUG
		if self.level_value > logging.DEBUG and isinstance(log_record.name, str) and log_record.name.startswith('page_cloner.'):
			if '.dom_processing' in log_record.name:
				log_record.name = 'dom'
			elif '.session' in log_record.name or '.interaction' in log_record.name:
				log_record.name = 'cdp'
			else:
				log_record.name = log_record.name.split('.')[-1]
		return super().format(log_record)


def setup_logging(stream=None, log_level=None, force_setup=False, debug_log_file=None, info_log_file=None):
	"""Настроить логирование для page_cloner.

	Args:
		stream: Output stream for logs (default: sys.stdout)
		log_level: Уровень логирования (по умолчанию CONFIG.PAGE_CLONER_LOGGING_LEVEL)
		force_setup: Force reconfiguration even if handlers already exist
		debug_log_file: Path to log file for debug level logs only
		info_log_file: Path to log file for info level logs only
	"""
	level_type = (log_level or CONFIG.PAGE_CLONER_LOGGING_LEVEL).lower()

	# Проверить, настроены ли уже обработчики
	if logging.getLogger().hasHandlers() and not force_setup:
		return logging.getLogger('page_cloner')

	root_logger = logging.getLogger()
	root_logger.handlers = []

	if level_type == 'debug':
		effective_level = logging.DEBUG
	elif level_type == 'warning':
		effective_level = logging.WARNING
	else:
		effective_level = logging.INFO

	console_handler = logging.StreamHandler(stream or sys.stdout)
	console_handler.setLevel(effective_level)
	console_handler.setFormatter(ClonerFormatter('%(levelname)-8s [%(name)s] %(message)s', effective_level))
	root_logger.addHandler(console_handler)

	file_handler_list = []

	if debug_log_file:
		debug_file_handler = logging.FileHandler(debug_log_file, encoding='utf-8')
		debug_file_handler.setLevel(logging.DEBUG)
		debug_file_handler.setFormatter(ClonerFormatter('%(asctime)s - %(levelname)-8s [%(name)s] %(message)s', logging.DEBUG))
		file_handler_list.append(debug_file_handler)
		root_logger.addHandler(debug_file_handler)

	if info_log_file:
		info_file_handler = logging.FileHandler(info_log_file, encoding='utf-8')
		info_file_handler.setLevel(logging.INFO)
		info_file_handler.setFormatter(ClonerFormatter('%(asctime)s - %(levelname)-8s [%(name)s] %(message)s', logging.INFO))
		file_handler_list.append(info_file_handler)
		root_logger.addHandler(info_file_handler)

	# DEBUG на корне, если включен файл debug
	final_log_level = logging.DEBUG if debug_log_file else effective_level
	root_logger.setLevel(final_log_level)

	main_logger = logging.getLogger('page_cloner')
	main_logger.handlers = []
	main_logger.propagate = False
	main_logger.addHandler(console_handler)
	for file_handler in file_handler_list:
		main_logger.addHandler(file_handler)
	main_logger.setLevel(final_log_level)

	cdp_logging_level = getattr(logging, CONFIG.CDP_LOGGING_LEVEL.upper(), logging.WARNING)
	for cdp_logger_name in CDP_LOGGER_NAMES:
		cdp_logger_instance = logging.getLogger(cdp_logger_name)
		cdp_logger_instance.handlers = []
		cdp_logger_instance.setLevel(cdp_logging_level)
		cdp_logger_instance.addHandler(console_handler)
		cdp_logger_instance.propagate = False

	# Заглушить логгеры сторонних библиотек
	for external_logger_name in EXTERNAL_LOGGER_NAMES:
		external_logger = logging.getLogger(external_logger_name)
		external_logger.setLevel(logging.ERROR)
		external_logger.propagate = False

	return main_logger
