"""
Модуль для операций с файловой системой.

Обеспечивает обход дерева каталогов, определение расширения файла
и перемещение файлов в подкаталоги по расширению.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

try:
    from .logger import OrganizerLogger
except ImportError:
    from logger import OrganizerLogger


class FileOperationError(Exception):
    """Исключение для ошибок операций с файлами."""
    pass


def get_extension_tag(file_path: Union[str, Path]) -> Optional[str]:
    """
    Определяет расширение файла в нижнем регистре.

    Расширение - текст после последней точки в имени файла. Для имен
    без точки или с точкой в конце расширения нет. Имя вида ".gitignore"
    дает расширение "gitignore".

    Args:
        file_path: Путь к файлу

    Returns:
        str или None: Расширение или None, если его нет
    """
    name = Path(file_path).name
    _, dot, extension = name.rpartition('.')
    if not dot or not extension:
        return None
    return extension.lower()


class FileOps:
    """Класс для операций с файловой системой внутри корневого каталога."""

    def __init__(self, root: Union[str, Path], logger: OrganizerLogger,
                 excluded_files: Optional[Iterable[Union[str, Path]]] = None):
        """
        Инициализация операций с файлами.

        Args:
            root: Корневой каталог раскладки
            logger: Логгер для записи операций
            excluded_files: Файлы, которые не перемещаются (например, активный
                лог-файл); их ротационные копии (.1, .2, ...) тоже пропускаются
        """
        self.root = Path(root)
        self.logger = logger
        self.excluded_files = [Path(f).resolve() for f in (excluded_files or [])]

    def root_is_valid(self) -> bool:
        """Проверяет, что корневой каталог существует и является каталогом."""
        return self.root.is_dir()

    def root_is_readable(self) -> bool:
        """Проверяет, что содержимое корневого каталога можно прочитать."""
        try:
            with os.scandir(self.root) as entries:
                next(entries, None)
            return True
        except OSError as e:
            self.logger.log_scan_error(e)
            return False

    def is_excluded(self, file_path: Path) -> bool:
        """
        Проверяет, входит ли файл в список исключений.

        Args:
            file_path: Путь к файлу

        Returns:
            bool: True для исключенного файла или его ротационной копии
        """
        name = file_path.name
        for excluded in self.excluded_files:
            if not name.startswith(excluded.name):
                continue
            suffix = name[len(excluded.name):]
            if suffix and not (suffix.startswith('.') and suffix[1:].isdigit()):
                continue
            if file_path.resolve().parent == excluded.parent:
                return True
        return False

    def scan_files(self) -> Tuple[List[Path], int]:
        """
        Рекурсивно собирает все обычные файлы под корневым каталогом.

        Обход полностью завершается до начала перемещений, поэтому
        создаваемые каталоги по расширениям повторно не обходятся.
        Ошибки для отдельных записей не прерывают обход.
        Исключенные файлы в список не попадают.

        Returns:
            Tuple[List[Path], int]: (отсортированный список файлов, количество ошибок обхода)
        """
        files = []
        errors = []

        def on_error(error: OSError) -> None:
            errors.append(error)
            self.logger.log_scan_error(error)

        for dirpath, _, filenames in os.walk(self.root, onerror=on_error):
            for filename in filenames:
                file_path = Path(dirpath) / filename
                try:
                    # is_file() следует по ссылкам, битые ссылки отбрасываются
                    if file_path.is_file() and not self.is_excluded(file_path):
                        files.append(file_path)
                except OSError as e:
                    on_error(e)

        files.sort()
        return files, len(errors)

    def get_destination(self, file_path: Path, extension: str) -> Path:
        """
        Вычисляет путь назначения: root/<расширение>/<имя файла>.

        Args:
            file_path: Исходный путь к файлу
            extension: Расширение в нижнем регистре

        Returns:
            Path: Путь назначения
        """
        return self.root / extension / Path(file_path).name

    def ensure_extension_directory(self, extension: str) -> Path:
        """
        Создает каталог для расширения если он не существует.

        Args:
            extension: Расширение в нижнем регистре

        Returns:
            Path: Путь к каталогу

        Raises:
            FileOperationError: Если каталог не удалось создать
        """
        target_dir = self.root / extension
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            return target_dir
        except OSError as e:
            raise FileOperationError(f"Ошибка создания каталога {target_dir}: {e}")

    def move_file(self, source_path: Path, target_path: Path) -> Path:
        """
        Переименовывает файл в путь назначения.

        Существующий файл в пути назначения перезаписывается.

        Args:
            source_path: Исходный путь
            target_path: Путь назначения

        Returns:
            Path: Путь к перемещенному файлу

        Raises:
            FileOperationError: Если переименование не удалось
        """
        try:
            return Path(source_path).replace(target_path)
        except OSError as e:
            raise FileOperationError(f"Ошибка перемещения файла {source_path}: {e}")


def create_file_ops(root: Union[str, Path], logger: OrganizerLogger,
                    excluded_files: Optional[Iterable[Union[str, Path]]] = None) -> FileOps:
    """
    Удобная функция для создания объекта операций с файлами.

    Args:
        root: Корневой каталог
        logger: Логгер
        excluded_files: Файлы, которые не перемещаются

    Returns:
        FileOps: Объект операций с файлами
    """
    return FileOps(root, logger, excluded_files)
