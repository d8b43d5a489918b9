"""
Модуль бизнес-логики раскладки файлов.

Объединяет обход дерева каталогов и операции с файлами: каждый найденный
файл перемещается в подкаталог корня, названный по его расширению.
Файлы обрабатываются параллельно в пуле потоков.
"""

import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, List, Optional, Tuple, Union
from datetime import datetime
from pathlib import Path

try:
    from .config_loader import LoggingConfig
    from .logger import OrganizerLogger
    from .file_ops import FileOps, FileOperationError, get_extension_tag
except ImportError:
    from config_loader import LoggingConfig
    from logger import OrganizerLogger
    from file_ops import FileOps, FileOperationError, get_extension_tag


class OrganizationError(Exception):
    """Исключение для ошибок, прерывающих раскладку целиком."""
    pass


class OrganizationStats:
    """Потокобезопасная статистика раскладки."""

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run
        self.total_files = 0
        self.moved_by_extension: Dict[str, int] = {}
        self.planned_moves: List[Tuple[Path, Path]] = []
        self.skipped_no_extension = 0
        self.already_organized = 0
        self.failed_files = 0
        self.scan_errors = 0
        self.start_time = None
        self.end_time = None
        self.errors = []
        self._lock = threading.Lock()

    def record_moved(self, extension: str, source: Path, destination: Path) -> None:
        """Учитывает перемещенный (или запланированный) файл."""
        with self._lock:
            self.moved_by_extension[extension] = self.moved_by_extension.get(extension, 0) + 1
            self.planned_moves.append((source, destination))

    def record_skipped(self) -> None:
        """Учитывает файл без расширения."""
        with self._lock:
            self.skipped_no_extension += 1

    def record_already_organized(self) -> None:
        """Учитывает файл, который уже лежит на своем месте."""
        with self._lock:
            self.already_organized += 1

    def record_failed(self, file_path: Path, error: Exception) -> None:
        """Учитывает ошибку при обработке файла."""
        with self._lock:
            self.failed_files += 1
            self.errors.append({
                'file_path': str(file_path),
                'error': str(error),
                'timestamp': datetime.now()
            })

    def get_total_moved(self) -> int:
        """Возвращает общее количество перемещенных файлов."""
        with self._lock:
            return sum(self.moved_by_extension.values())

    def get_duration(self) -> Optional[float]:
        """Возвращает продолжительность раскладки в секундах."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def to_dict(self) -> Dict:
        """Преобразует статистику в словарь."""
        with self._lock:
            moved_by_extension = dict(self.moved_by_extension)
            error_count = len(self.errors)

        return {
            'dry_run': self.dry_run,
            'total_files': self.total_files,
            'moved_files': sum(moved_by_extension.values()),
            'moved_by_extension': moved_by_extension,
            'skipped_no_extension': self.skipped_no_extension,
            'already_organized': self.already_organized,
            'failed_files': self.failed_files,
            'scan_errors': self.scan_errors,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'duration_seconds': self.get_duration(),
            'error_count': error_count
        }


class Organizer:
    """Основной класс для раскладки файлов по расширениям."""

    def __init__(self, root: Union[str, Path], logger: OrganizerLogger,
                 dry_run: bool = False, workers: Optional[int] = None,
                 excluded_files: Optional[Iterable[Union[str, Path]]] = None):
        """
        Инициализация раскладчика.

        Args:
            root: Корневой каталог
            logger: Логгер для записи операций
            dry_run: Только показать планируемые перемещения
            workers: Размер пула потоков (None или 0 - по числу ядер CPU)
            excluded_files: Файлы, которые не перемещаются (например, лог-файл)
        """
        self.root = Path(root)
        self.logger = logger
        self.dry_run = dry_run
        self.workers = workers or os.cpu_count() or 1
        self.file_ops = FileOps(self.root, logger, excluded_files)
        self.stats = OrganizationStats(dry_run=dry_run)

    def initialize(self) -> bool:
        """
        Проверяет готовность к работе.

        Returns:
            bool: True если корневой каталог существует, является каталогом
                и доступен для чтения
        """
        if not self.root.exists():
            self.logger.log_critical_error(f"Каталог не существует: {self.root}")
            return False

        if not self.file_ops.root_is_valid():
            self.logger.log_critical_error(f"Путь не является каталогом: {self.root}")
            return False

        if not self.file_ops.root_is_readable():
            self.logger.log_critical_error(f"Нет доступа к каталогу: {self.root}")
            return False

        return True

    def organize_file(self, file_path: Path) -> Optional[str]:
        """
        Перемещает один файл в подкаталог по его расширению.

        Args:
            file_path: Путь к файлу

        Returns:
            str или None: Расширение, если файл перемещен (или был бы перемещен
            в режиме симуляции), иначе None
        """
        extension = get_extension_tag(file_path)
        if extension is None:
            self.stats.record_skipped()
            self.logger.log_file_skipped(file_path, "нет расширения")
            return None

        destination = self.file_ops.get_destination(file_path, extension)

        if destination == file_path:
            self.stats.record_already_organized()
            self.logger.log_file_skipped(file_path, "уже на месте")
            return None

        if self.dry_run:
            self.logger.log_dry_run_move(file_path, destination)
            self.stats.record_moved(extension, file_path, destination)
            return extension

        try:
            self.file_ops.ensure_extension_directory(extension)
            self.file_ops.move_file(file_path, destination)
        except FileOperationError as e:
            self.stats.record_failed(file_path, e)
            self.logger.log_file_error(file_path, e)
            return None

        self.logger.log_file_moved(file_path, destination)
        self.stats.record_moved(extension, file_path, destination)
        return extension

    def process_directory(self) -> OrganizationStats:
        """
        Раскладывает все файлы под корневым каталогом.

        Returns:
            OrganizationStats: Итоговая статистика

        Raises:
            OrganizationError: Если корневой каталог некорректен
        """
        # Каждый запуск начинается с чистой статистики
        self.stats = OrganizationStats(dry_run=self.dry_run)
        self.stats.start_time = datetime.now()

        if not self.initialize():
            self.stats.end_time = datetime.now()
            raise OrganizationError(f"Некорректный корневой каталог: {self.root}")

        self.logger.log_organization_start(self.root, self.dry_run, self.workers)

        files, scan_errors = self.file_ops.scan_files()
        self.stats.total_files = len(files)
        self.stats.scan_errors = scan_errors
        self.logger.log_scan_complete(len(files), scan_errors)

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {executor.submit(self.organize_file, file_path): file_path
                       for file_path in files}

            for future in as_completed(futures):
                file_path = futures[future]
                try:
                    future.result()
                except Exception as e:
                    # Ошибка одного файла не должна влиять на остальные
                    self.stats.record_failed(file_path, e)
                    self.logger.log_file_error(file_path, e)

        self.stats.end_time = datetime.now()

        self.logger.log_organization_end(
            total_files=self.stats.total_files,
            moved_by_extension=self.stats.moved_by_extension,
            failed_files=self.stats.failed_files,
            dry_run=self.dry_run
        )
        if self.stats.scan_errors:
            self.logger.log_warning(f"Ошибок обхода: {self.stats.scan_errors}")

        return self.stats


def create_organizer(root: Union[str, Path], logger: OrganizerLogger,
                     dry_run: bool = False, workers: Optional[int] = None,
                     excluded_files: Optional[Iterable[Union[str, Path]]] = None) -> Organizer:
    """
    Удобная функция для создания объекта раскладчика.

    Args:
        root: Корневой каталог
        logger: Логгер
        dry_run: Режим симуляции
        workers: Размер пула потоков
        excluded_files: Файлы, которые не перемещаются

    Returns:
        Organizer: Объект раскладчика
    """
    return Organizer(root, logger, dry_run=dry_run, workers=workers,
                     excluded_files=excluded_files)


def process_directory(root: Union[str, Path], dry_run: bool = False,
                      logger: Optional[OrganizerLogger] = None,
                      workers: Optional[int] = None) -> OrganizationStats:
    """
    Раскладывает файлы каталога по подкаталогам расширений.

    Args:
        root: Корневой каталог
        dry_run: Только показать планируемые перемещения
        logger: Логгер (по умолчанию - только вывод в консоль)
        workers: Размер пула потоков

    Returns:
        OrganizationStats: Итоговая статистика

    Raises:
        OrganizationError: Если корневой каталог некорректен
    """
    if logger is None:
        logger = OrganizerLogger(LoggingConfig(log_file=None))
    return create_organizer(root, logger, dry_run=dry_run, workers=workers).process_directory()
