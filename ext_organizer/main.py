"""
Главный модуль CLI интерфейса для утилиты раскладки файлов.

Разбирает аргументы командной строки, загружает конфигурацию и запускает
раскладку файлов по подкаталогам расширений.
"""

import argparse
import sys
from pathlib import Path

try:
    from .config_loader import DEFAULT_CONFIG_PATH, default_config, load_config
    from .logger import OrganizerLogger
    from .organizer import OrganizationError, create_organizer
except ImportError:
    from config_loader import DEFAULT_CONFIG_PATH, default_config, load_config
    from logger import OrganizerLogger
    from organizer import OrganizationError, create_organizer


class OrganizerCLI:
    """Класс для обработки команд CLI."""

    def __init__(self):
        self.config = None
        self.logger = None

    def setup(self, config_path: str = DEFAULT_CONFIG_PATH, verbose: bool = False) -> bool:
        """
        Инициализирует CLI с конфигурацией.

        Если файл конфигурации по умолчанию отсутствует, используются
        встроенные значения. Явно указанный файл обязан существовать.

        Args:
            config_path: Путь к файлу конфигурации
            verbose: Включить подробное логирование

        Returns:
            bool: True если инициализация успешна
        """
        try:
            use_defaults = config_path == DEFAULT_CONFIG_PATH and not Path(config_path).exists()
            self.config = default_config() if use_defaults else load_config(config_path)

            if verbose:
                self.config.logging.level = 'DEBUG'

            self.logger = OrganizerLogger(self.config.logging)

            if use_defaults:
                self.logger.log_system_info("Файл конфигурации не найден, используются значения по умолчанию")
            else:
                self.logger.log_config_loaded(config_path)
            return True

        except (OSError, ValueError) as e:
            print(f"❌ Ошибка инициализации: {e}")
            self.config = None
            self.logger = None
            return False

    def cmd_organize(self, args) -> int:
        """
        Команда раскладки файлов.

        Args:
            args: Аргументы командной строки

        Returns:
            int: Код возврата (0 - успех, 1 - ошибка)
        """
        # Флаги --dry-run/--no-dry-run имеют приоритет над конфигурацией
        dry_run = self.config.organizer.dry_run if args.dry_run is None else args.dry_run
        workers = args.workers if args.workers else self.config.organizer.workers

        # Собственный лог-файл не должен попадать в раскладку
        log_file = self.config.logging.log_file
        excluded_files = [log_file] if log_file else []

        organizer = create_organizer(args.path, self.logger, dry_run=dry_run, workers=workers,
                                     excluded_files=excluded_files)

        try:
            stats = organizer.process_directory()
        except OrganizationError as e:
            print(f"❌ Ошибка раскладки: {e}")
            return 1

        # Ошибки отдельных файлов не делают запуск неуспешным
        if stats.failed_files > 0:
            print(f"\n⚠️ Не удалось обработать {stats.failed_files} файлов:")
            for error in stats.errors[:10]:
                print(f"   • {error['file_path']}: {error['error']}")
            if len(stats.errors) > 10:
                print(f"   ... и еще {len(stats.errors) - 10} ошибок")

        return 0


def create_parser() -> argparse.ArgumentParser:
    """
    Создает парсер аргументов командной строки.

    Returns:
        argparse.ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        description="Утилита раскладки файлов по подкаталогам расширений",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:

  # Раскладка файлов
  ext-organizer --path ~/Downloads

  # Показать планируемые перемещения без изменений
  ext-organizer --path ~/Downloads --dry-run

  # Выполнить перемещения, если в конфигурации dry_run = true
  ext-organizer --path ~/Downloads --no-dry-run

  # Ограничить количество потоков
  ext-organizer --path ~/Downloads --workers 4
        """
    )

    parser.add_argument(
        '--path', '-p',
        required=True,
        help='Каталог для раскладки'
    )
    dry_run_group = parser.add_mutually_exclusive_group()
    dry_run_group.add_argument(
        '--dry-run', '-d',
        dest='dry_run',
        action='store_true',
        default=None,
        help='Показать планируемые перемещения без изменения файлов'
    )
    dry_run_group.add_argument(
        '--no-dry-run',
        dest='dry_run',
        action='store_false',
        help='Выполнить перемещения, даже если конфигурация включает симуляцию'
    )
    parser.add_argument(
        '--workers', '-w',
        type=int,
        help='Количество рабочих потоков (по умолчанию из конфигурации или по числу ядер CPU)'
    )
    parser.add_argument(
        '--config',
        default=DEFAULT_CONFIG_PATH,
        help=f'Путь к файлу конфигурации (по умолчанию: {DEFAULT_CONFIG_PATH})'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Подробный вывод'
    )

    return parser


def main(argv=None) -> int:
    """Главная функция CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.workers is not None and args.workers < 0:
        parser.error("--workers не может быть отрицательным")

    cli = OrganizerCLI()

    if not cli.setup(args.config, verbose=args.verbose):
        return 1

    try:
        return cli.cmd_organize(args)

    except KeyboardInterrupt:
        print("\n⚠️ Операция прервана пользователем")
        return 1
    except Exception as e:
        print(f"❌ Неожиданная ошибка: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
