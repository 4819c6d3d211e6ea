import logging
import logging.handlers
from pathlib import Path
import traceback
from datetime import datetime

from salesy.config import config

class Logger:
    """Logging manager for Salesy."""

    _instance = None
    _loggers = {}

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the logger if not already initialized."""
        if self._initialized:
            return

        self._log_config = config.log_config
        self._log_dir = Path(self._log_config['directory'])

        self._log_dir.mkdir(parents=True, exist_ok=True)

        # Application logger
        self._app_logger = self.get_logger('salesy')

        self._initialized = True

    def _level(self):
        level_name = self._log_config['level'].upper()
        return getattr(logging, level_name, logging.INFO)

    def get_logger(self, name):
        """Get a logger with the specified name.

        Args:
            name: Name of the logger

        Returns:
            Configured logger instance
        """
        if name in self._loggers:
            return self._loggers[name]

        logger = logging.getLogger(name)
        logger.setLevel(self._level())

        # Remove existing handlers to prevent duplicates
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        formatter = logging.Formatter(self._log_config['format'])

        # Create log file handler with rotation
        log_file = self._log_dir / f"{name}.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=self._log_config['max_size_mb'] * 1024 * 1024,
            backupCount=self._log_config['backup_count']
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        if self._log_config['console_output']:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        # Child loggers (salesy.services.*) propagate here; this one stops.
        logger.propagate = False

        self._loggers[name] = logger
        return logger

    def log_exception(self, logger_name, exception, message=None, level=logging.ERROR):
        """Log an exception with stack trace.

        Args:
            logger_name: Logger name
            exception: Exception object
            message: Optional message to include
            level: Logging level for the record
        """
        logger = self.get_logger(logger_name)

        if message:
            logger.log(level, f"{message}: {str(exception)}")
        else:
            logger.log(level, str(exception))

        if exception.__traceback__ is not None:
            logger.log(level, ''.join(traceback.format_exception(
                type(exception), exception, exception.__traceback__
            )))

    @property
    def app_logger(self):
        """Get the application logger."""
        return self._app_logger

    def import_start_log(self, process_name, additional_info=None):
        """Log the start of an import run.

        Args:
            process_name: Name of the import process
            additional_info: Optional additional information

        Returns:
            Dictionary with import logging information
        """
        import_logger = self.get_logger('salesy.imports')
        start_time = datetime.now()

        log_info = {
            'process_name': process_name,
            'start_time': start_time,
            'additional_info': additional_info
        }

        import_logger.info(f"Starting import: {process_name}")
        if additional_info:
            import_logger.info(f"Import info: {additional_info}")

        return log_info

    def import_end_log(self, log_info, success=True, result_info=None):
        """Log the end of an import run.

        Args:
            log_info: Dictionary returned by import_start_log
            success: Whether the import succeeded
            result_info: Optional result information
        """
        import_logger = self.get_logger('salesy.imports')
        end_time = datetime.now()

        process_name = log_info.get('process_name', 'Unknown')
        start_time = log_info.get('start_time', end_time)
        duration = end_time - start_time

        if success:
            import_logger.info(f"Completed import: {process_name}")
        else:
            import_logger.error(f"Failed import: {process_name}")

        import_logger.info(f"Import duration: {duration}")

        if result_info:
            import_logger.info(f"Import results: {result_info}")

# Global logger instance
logger = Logger()

def get_logger(name):
    """Get a logger with the specified name."""
    return logger.get_logger(name)

def log_exception(logger_name, exception, message=None, level=logging.ERROR):
    """Log an exception with stack trace."""
    logger.log_exception(logger_name, exception, message, level)
