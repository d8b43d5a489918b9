"""
Тесты для модуля logger.py
"""

import pytest
import logging
from pathlib import Path
from unittest.mock import patch

from ext_organizer.logger import (
    OrganizerLogger,
    setup_logger,
    get_logger,
    ColoredFormatter
)
from ext_organizer.config_loader import LoggingConfig


@pytest.fixture(autouse=True)
def close_handlers():
    """Закрывает обработчики логгера после каждого теста."""
    yield
    logger = logging.getLogger('ext_organizer')
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)


class TestColoredFormatter:
    """Тесты для ColoredFormatter."""

    def test_colored_formatter(self):
        """Тест цветного форматтера."""
        formatter = ColoredFormatter(fmt='[%(levelname)s] %(message)s')

        record = logging.LogRecord(
            name='test',
            level=logging.INFO,
            pathname='',
            lineno=0,
            msg='Test message',
            args=(),
            exc_info=None
        )

        formatted = formatter.format(record)

        assert '\033[32m' in formatted
        assert '\033[0m' in formatted
        assert 'Test message' in formatted
        # Запись не должна сохранять цветовые коды для других обработчиков
        assert record.levelname == 'INFO'


class TestOrganizerLogger:
    """Тесты для OrganizerLogger."""

    @pytest.fixture
    def temp_log_config(self, tmp_path):
        """Создает временную конфигурацию логирования."""
        return LoggingConfig(
            level='DEBUG',
            log_file=tmp_path / "logs" / "test.log",
            max_log_size=1,
            backup_count=3
        )

    def test_logger_initialization(self, temp_log_config):
        """Тест инициализации логгера."""
        logger = OrganizerLogger(temp_log_config)

        assert logger.logger is not None
        assert logger.logger.name == 'ext_organizer'
        assert logger.logger.level == logging.DEBUG
        assert logger.logger.propagate is False
        assert temp_log_config.log_file.parent.exists()

    def test_logger_handlers(self, temp_log_config):
        """Тест обработчиков логгера."""
        logger = OrganizerLogger(temp_log_config)
        handler_types = [type(h).__name__ for h in logger.logger.handlers]

        assert len(handler_types) == 2
        assert 'RotatingFileHandler' in handler_types
        assert 'StreamHandler' in handler_types

    def test_console_only_without_log_file(self):
        """Тест логгера без файла."""
        logger = OrganizerLogger(LoggingConfig(log_file=None))
        handler_types = [type(h).__name__ for h in logger.logger.handlers]

        assert handler_types == ['StreamHandler']

    def test_repeated_setup_does_not_duplicate_handlers(self, temp_log_config):
        """Повторная настройка заменяет обработчики."""
        OrganizerLogger(temp_log_config)
        logger = OrganizerLogger(temp_log_config)

        assert len(logger.logger.handlers) == 2

    def test_messages_written_to_file(self, temp_log_config):
        """Тест записи сообщений в файл."""
        logger = OrganizerLogger(temp_log_config)
        logger.log_file_moved(Path("a.PDF"), Path("pdf/a.PDF"))

        for handler in logger.logger.handlers:
            handler.flush()

        content = temp_log_config.log_file.read_text(encoding='utf-8')
        assert "a.PDF" in content
        assert "\033[" not in content

    def test_log_organization_start(self, temp_log_config):
        """Тест логирования начала раскладки."""
        logger = OrganizerLogger(temp_log_config)

        with patch.object(logger.logger, 'info') as mock_info:
            logger.log_organization_start(Path("/data"), True, 4)

            calls = [call[0][0] for call in mock_info.call_args_list]
            assert any("/data" in call for call in calls)
            assert any("симуляция" in call and "4" in call for call in calls)

    def test_log_scan_complete_with_errors(self, temp_log_config):
        """Тест предупреждения об ошибках обхода."""
        logger = OrganizerLogger(temp_log_config)

        with patch.object(logger.logger, 'info') as mock_info, \
                patch.object(logger.logger, 'warning') as mock_warning:
            logger.log_scan_complete(10, 2)

            mock_info.assert_called_once()
            assert "10" in mock_info.call_args[0][0]
            mock_warning.assert_called_once()

    def test_log_scan_complete_without_errors(self, temp_log_config):
        """Без ошибок обхода предупреждения нет."""
        logger = OrganizerLogger(temp_log_config)

        with patch.object(logger.logger, 'warning') as mock_warning:
            logger.log_scan_complete(10, 0)

            mock_warning.assert_not_called()

    def test_log_organization_end(self, temp_log_config):
        """Тест итоговой сводки по расширениям."""
        logger = OrganizerLogger(temp_log_config)

        with patch.object(logger.logger, 'info') as mock_info:
            logger.log_organization_end(5, {'txt': 2, 'pdf': 1}, 1)

            calls = [call[0][0] for call in mock_info.call_args_list]
            assert any("[.txt] : 2" in call for call in calls)
            assert any("[.pdf] : 1" in call for call in calls)
            assert any("Перемещено: 3" in call for call in calls)
            assert any("Ошибок: 1" in call for call in calls)

    def test_log_dry_run_move(self, temp_log_config):
        """Тест логирования планируемого перемещения."""
        logger = OrganizerLogger(temp_log_config)

        with patch.object(logger.logger, 'info') as mock_info:
            logger.log_dry_run_move(Path("a.txt"), Path("txt/a.txt"))

            message = mock_info.call_args[0][0]
            assert message.startswith("[DRY RUN]")
            assert "a.txt" in message

    def test_log_file_error(self, temp_log_config):
        """Тест логирования ошибки файла."""
        logger = OrganizerLogger(temp_log_config)

        with patch.object(logger.logger, 'error') as mock_error:
            logger.log_file_error(Path("a.txt"), OSError("denied"))

            message = mock_error.call_args[0][0]
            assert "a.txt" in message
            assert "denied" in message

    def test_log_critical_error(self, temp_log_config):
        """Тест логирования критической ошибки."""
        logger = OrganizerLogger(temp_log_config)

        with patch.object(logger.logger, 'critical') as mock_critical:
            logger.log_critical_error("Сбой", ValueError("причина"))
            mock_critical.assert_called_once_with("💥 Сбой: причина")

            logger.log_critical_error("Сбой")
            mock_critical.assert_called_with("💥 Сбой")


class TestLoggerFunctions:
    """Тесты для вспомогательных функций."""

    def test_setup_logger(self):
        """Тест функции setup_logger."""
        logger = setup_logger(LoggingConfig(level='WARNING', log_file=None))

        assert isinstance(logger, logging.Logger)
        assert logger.level == logging.WARNING

    def test_get_logger(self):
        """Тест функции get_logger."""
        assert get_logger().name == 'ext_organizer'
        assert get_logger('other').name == 'other'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
