import logging
import os
import sys
from pathlib import Path
from dotenv import load_dotenv

from config.constants import LOG_FILE

load_dotenv()

# Отдельный уровень для успешных транзакций
SUCCESS = 25
logging.addLevelName(SUCCESS, 'SUCCESS')

# Глобальный словарь для отслеживания инициализированных логгеров
_initialized_loggers = set()

# Уровень и файл, заданные через configure_logging (None - брать из окружения)
_logging_settings = {'level': None, 'log_file': None}


def _attach_handlers(logger: logging.Logger, level: str, log_file: str):
    """Пересоздание обработчиков логгера с заданным уровнем и файлом"""
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Консольный handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Файловый handler (пустой путь отключает запись в файл)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def _resolve(level: str = None, log_file: str = None):
    level = level or _logging_settings['level'] or os.getenv('LOG_LEVEL') or 'INFO'
    if log_file is None:
        log_file = _logging_settings['log_file']
    if log_file is None:
        log_file = os.getenv('LOG_FILE', LOG_FILE)
    return level, log_file


def configure_logging(level: str = None, log_file: str = None):
    """Общие уровень и файл для всех логгеров, включая уже созданные"""
    _logging_settings['level'] = level
    _logging_settings['log_file'] = log_file

    for name in _initialized_loggers:
        _attach_handlers(logging.getLogger(name), *_resolve())


def setup_logger(name: str = None, level: str = None, log_file: str = None) -> logging.Logger:
    """Настройка системы логирования без дублирования"""
    if name is None:
        name = 'zerog_farmer'

    logger = logging.getLogger(name)

    # Если логгер уже инициализирован - возвращаем его
    if name in _initialized_loggers and level is None and log_file is None:
        return logger

    _attach_handlers(logger, *_resolve(level, log_file))
    _initialized_loggers.add(name)

    return logger
