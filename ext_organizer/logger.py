"""
Модуль для настройки и управления логированием приложения.

Обеспечивает централизованную настройку логирования с ротацией файлов,
цветным выводом в консоль и различными уровнями детализации.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional
from datetime import datetime

try:
    from .config_loader import LoggingConfig
except ImportError:
    from config_loader import LoggingConfig


LOGGER_NAME = 'ext_organizer'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        """Форматирует запись лога с цветом."""
        # Запись разделяется с файловым обработчиком, поэтому levelname не меняем
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class OrganizerLogger:
    """Класс для управления логированием приложения Extension Organizer."""

    def __init__(self, config: LoggingConfig):
        """
        Инициализация логгера.

        Args:
            config: Конфигурация логирования
        """
        self.config = config
        self.logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Настраивает логгер с файловым и консольным выводом."""
        level = getattr(logging, self.config.level.upper())

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)

        # Закрываем обработчики от предыдущей настройки
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        if self.config.log_file:
            log_file_path = Path(self.config.log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file_path,
                maxBytes=self.config.max_log_size * 1024 * 1024,
                backupCount=self.config.backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False

    def get_logger(self) -> logging.Logger:
        """
        Возвращает настроенный логгер.

        Returns:
            logging.Logger: Настроенный логгер
        """
        if self.logger is None:
            raise RuntimeError("Логгер не инициализирован")
        return self.logger

    def log_organization_start(self, root: Path, dry_run: bool, workers: int) -> None:
        """
        Логирует начало сканирования каталога.

        Args:
            root: Корневой каталог
            dry_run: Режим симуляции
            workers: Количество рабочих потоков
        """
        mode = "симуляция" if dry_run else "перемещение"
        self.logger.info(f"🚀 Сканирование каталога: {root}")
        self.logger.info(f"⚙️ Режим: {mode}, потоков: {workers}")

    def log_scan_complete(self, total_files: int, scan_errors: int) -> None:
        """
        Логирует завершение обхода дерева каталогов.

        Args:
            total_files: Найдено файлов
            scan_errors: Пропущено записей из-за ошибок обхода
        """
        self.logger.info(f"📊 Найдено файлов: {total_files}")
        if scan_errors:
            self.logger.warning(f"⚠️ Пропущено записей при обходе: {scan_errors}")

    def log_file_moved(self, source_path: Path, target_path: Path) -> None:
        """
        Логирует успешное перемещение файла.

        Args:
            source_path: Исходный путь
            target_path: Целевой путь
        """
        self.logger.info(f"📁 Перемещен: {source_path} → {target_path}")

    def log_dry_run_move(self, source_path: Path, target_path: Path) -> None:
        """
        Логирует перемещение, которое было бы выполнено.

        Args:
            source_path: Исходный путь
            target_path: Целевой путь
        """
        self.logger.info(f"[DRY RUN] Будет перемещен: {source_path} → {target_path}")

    def log_file_skipped(self, file_path: Path, reason: str) -> None:
        """Логирует пропуск файла (только на уровне DEBUG)."""
        self.logger.debug(f"⏭️ Пропущен {file_path}: {reason}")

    def log_file_error(self, file_path: Path, error: Exception) -> None:
        """
        Логирует ошибку при обработке файла.

        Args:
            file_path: Путь к файлу
            error: Исключение
        """
        self.logger.error(f"❌ Ошибка при обработке файла {file_path}: {error}")

    def log_scan_error(self, error: Exception) -> None:
        """Логирует ошибку обхода для отдельной записи."""
        self.logger.debug(f"🔍 Ошибка обхода: {error}")

    def log_organization_end(self, total_files: int, moved_by_extension: Dict[str, int],
                             failed_files: int, dry_run: bool = False) -> None:
        """
        Логирует итоговую сводку по расширениям.

        Args:
            total_files: Найдено файлов
            moved_by_extension: Количество перемещенных файлов по расширениям
            failed_files: Ошибок при перемещении
            dry_run: Режим симуляции
        """
        title = "Симуляция завершена" if dry_run else "Раскладка завершена"
        self.logger.info(f"✅ {title}")
        self.logger.info(f"📊 Статистика:")
        self.logger.info(f"   • Найдено: {total_files}")
        self.logger.info(f"   • Перемещено: {sum(moved_by_extension.values())}")
        self.logger.info(f"   • Ошибок: {failed_files}")
        for extension, count in sorted(moved_by_extension.items()):
            self.logger.info(f"   [.{extension}] : {count}")
        self.logger.info(f"⏰ Время завершения: {datetime.now().strftime(DATE_FORMAT)}")

    def log_config_loaded(self, config_path: str) -> None:
        """
        Логирует успешную загрузку конфигурации.

        Args:
            config_path: Путь к файлу конфигурации
        """
        self.logger.info(f"⚙️ Конфигурация загружена из {config_path}")

    def log_system_info(self, info: str) -> None:
        """
        Логирует системную информацию.

        Args:
            info: Информационное сообщение
        """
        self.logger.info(f"ℹ️ {info}")

    def log_warning(self, message: str) -> None:
        """
        Логирует предупреждение.

        Args:
            message: Сообщение предупреждения
        """
        self.logger.warning(f"⚠️ {message}")

    def log_critical_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует критическую ошибку.

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error:
            self.logger.critical(f"💥 {message}: {error}")
        else:
            self.logger.critical(f"💥 {message}")


def setup_logger(config: LoggingConfig) -> logging.Logger:
    """
    Удобная функция для быстрой настройки логгера.

    Args:
        config: Конфигурация логирования

    Returns:
        logging.Logger: Настроенный логгер
    """
    organizer_logger = OrganizerLogger(config)
    return organizer_logger.get_logger()


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Получает логгер по имени.

    Args:
        name: Имя логгера

    Returns:
        logging.Logger: Логгер
    """
    return logging.getLogger(name)
