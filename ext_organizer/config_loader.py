"""
Модуль для загрузки и валидации конфигурации приложения.

Обеспечивает загрузку параметров из config/settings.ini с валидацией
и встроенными значениями по умолчанию.
"""

import configparser
from pathlib import Path
from typing import Optional
from dataclasses import dataclass


DEFAULT_CONFIG_PATH = "config/settings.ini"
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class OrganizerConfig:
    """Конфигурация параметров раскладки."""
    workers: int = 0
    dry_run: bool = False


@dataclass
class LoggingConfig:
    """Конфигурация логирования."""
    level: str = 'INFO'
    log_file: Optional[Path] = Path('logs/organizer.log')
    max_log_size: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """Основная конфигурация приложения."""
    organizer: OrganizerConfig
    logging: LoggingConfig


class ConfigLoader:
    """Класс для загрузки и валидации конфигурации."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации
        """
        self.config_path = Path(config_path)
        self._config: Optional[Config] = None

    def load_config(self) -> Config:
        """
        Загружает конфигурацию из файла.

        Returns:
            Config: Объект конфигурации

        Raises:
            FileNotFoundError: Если файл конфигурации не найден
            ValueError: Если конфигурация некорректна
        """
        if not self.config_path.exists():
            raise FileNotFoundError(f"Файл конфигурации не найден: {self.config_path}")

        config_parser = configparser.ConfigParser(inline_comment_prefixes=(';', '#'))

        try:
            config_parser.read(self.config_path, encoding='utf-8')

            self._config = Config(
                organizer=self._load_organizer_config(config_parser),
                logging=self._load_logging_config(config_parser)
            )

            self._validate_config()

            return self._config

        except (configparser.Error, ValueError) as e:
            raise ValueError(f"Ошибка загрузки конфигурации: {e}")

    def _load_organizer_config(self, parser: configparser.ConfigParser) -> OrganizerConfig:
        """Загружает конфигурацию раскладки."""
        section = 'organizer'

        if not parser.has_section(section):
            raise ValueError(f"Секция '{section}' не найдена в конфигурации")

        return OrganizerConfig(
            workers=parser.getint(section, 'workers', fallback=0),
            dry_run=parser.getboolean(section, 'dry_run', fallback=False)
        )

    def _load_logging_config(self, parser: configparser.ConfigParser) -> LoggingConfig:
        """Загружает конфигурацию логирования."""
        section = 'logging'

        if not parser.has_section(section):
            raise ValueError(f"Секция '{section}' не найдена в конфигурации")

        # Пустое значение отключает запись в файл
        log_file = parser.get(section, 'log_file', fallback='logs/organizer.log').strip()

        return LoggingConfig(
            level=parser.get(section, 'level', fallback='INFO'),
            log_file=Path(log_file) if log_file else None,
            max_log_size=parser.getint(section, 'max_log_size', fallback=10),
            backup_count=parser.getint(section, 'backup_count', fallback=5)
        )

    def _validate_config(self) -> None:
        """Валидирует загруженную конфигурацию."""
        if not self._config:
            raise ValueError("Конфигурация не загружена")

        if self._config.organizer.workers < 0:
            raise ValueError("Количество потоков не может быть отрицательным")

        if self._config.logging.max_log_size <= 0:
            raise ValueError("Размер лог-файла должен быть больше 0")

        if self._config.logging.backup_count < 0:
            raise ValueError("Количество резервных копий не может быть отрицательным")

        if self._config.logging.level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Некорректный уровень логирования: {self._config.logging.level}")

    def get_config(self) -> Config:
        """
        Возвращает загруженную конфигурацию.

        Returns:
            Config: Объект конфигурации

        Raises:
            ValueError: Если конфигурация не загружена
        """
        if self._config is None:
            raise ValueError("Конфигурация не загружена. Вызовите load_config() сначала.")
        return self._config

    def reload_config(self) -> Config:
        """
        Перезагружает конфигурацию из файла.

        Returns:
            Config: Обновленный объект конфигурации
        """
        self._config = None
        return self.load_config()


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config: Объект конфигурации
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()


def default_config() -> Config:
    """Возвращает конфигурацию со значениями по умолчанию."""
    return Config(organizer=OrganizerConfig(), logging=LoggingConfig())
